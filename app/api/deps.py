"""
FastAPI dependencies shared by the v1 routers.

Example usage in a router:
    from fastapi import Depends, APIRouter
    from app.api import deps

    router = APIRouter()

    @router.get("/payments/{payment_id}/status")
    def status(service = Depends(deps.get_payment_processing_service)):
        ...
"""

from datetime import date
from typing import NoReturn

from fastapi import Depends, HTTPException
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.services.base import ServiceResult
from app.services.transport import (
    PaymentProcessingService,
    ReceiptService,
    SemesterPaymentService,
)


# ------------------------------------------------------------------ #
# Clock
# ------------------------------------------------------------------ #
def get_current_date() -> date:
    """
    Today's date, used to resolve the academic year and term.

    Tests override this dependency to pin the calendar.
    """
    return date.today()


# ------------------------------------------------------------------ #
# Service factories
# ------------------------------------------------------------------ #
def get_semester_payment_service(
    db: Session = Depends(get_db),
) -> SemesterPaymentService:
    return SemesterPaymentService(db)


def get_payment_processing_service(
    db: Session = Depends(get_db),
) -> PaymentProcessingService:
    return PaymentProcessingService(db)


def get_receipt_service(
    db: Session = Depends(get_db),
) -> ReceiptService:
    return ReceiptService(db)


# ------------------------------------------------------------------ #
# Result handling
# ------------------------------------------------------------------ #
def raise_for_failure(result: ServiceResult) -> NoReturn:
    """Translate a failed ServiceResult into an HTTPException."""
    error = result.error
    details = error.details or {}
    raise HTTPException(
        status_code=error.http_status,
        detail={
            "error": error.message,
            "code": details.get("error_code", error.code.value),
        },
    )


def unwrap_result(result: ServiceResult):
    """Return the result data, or raise the mapped HTTPException."""
    if not result.is_success:
        raise_for_failure(result)
    return result.data


__all__ = [
    "get_db",
    "get_current_date",
    "get_semester_payment_service",
    "get_payment_processing_service",
    "get_receipt_service",
    "raise_for_failure",
    "unwrap_result",
]
