"""
Semester payment endpoints: payment options, history, fee structure and
payment creation.
"""

from datetime import date
from typing import Any, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from app.api import deps
from app.core.exceptions import ErrorCode
from app.core.logging import get_logger
from app.schemas.transport import (
    AvailableOptionsResponse,
    FeeStructureResponse,
    PaymentCreatedResponse,
    PaymentHistoryItem,
    SemesterPaymentCreate,
)
from app.services.transport import SemesterPaymentService

logger = get_logger(__name__)

router = APIRouter(tags=["Semester Payments"])

INVALID_TYPE_MESSAGE = 'Invalid type parameter. Use "available", "history", or "fee-structure"'


def _bad_request(message: str, code: ErrorCode) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail={"error": message, "code": code.value},
    )


@router.get(
    "/payment-options",
    summary="Payment options, history or fee structure for a student",
)
def get_payment_options(
    student_id: Optional[str] = Query(default=None, alias="studentId"),
    view: Optional[str] = Query(
        default=None,
        alias="type",
        description='"available", "history" or "fee-structure"',
    ),
    today: date = Depends(deps.get_current_date),
    service: SemesterPaymentService = Depends(deps.get_semester_payment_service),
) -> Any:
    if not student_id:
        raise _bad_request("Student ID is required", ErrorCode.MISSING_REQUIRED_FIELD)

    if view == "available":
        data = deps.unwrap_result(service.get_available_options(student_id, today))
        return AvailableOptionsResponse.model_validate(data)

    if view == "history":
        data = deps.unwrap_result(service.get_payment_history(student_id))
        return [PaymentHistoryItem.model_validate(item) for item in data]

    if view == "fee-structure":
        data = deps.unwrap_result(service.get_fee_structure(student_id, today))
        return FeeStructureResponse.model_validate(data)

    logger.debug("Rejected payment-options view", extra={"view": view})
    raise _bad_request(INVALID_TYPE_MESSAGE, ErrorCode.INVALID_REQUEST)


@router.post(
    "/payments",
    response_model=PaymentCreatedResponse,
    summary="Create a pending term or full-year payment",
)
def create_payment(
    payload: SemesterPaymentCreate,
    today: date = Depends(deps.get_current_date),
    service: SemesterPaymentService = Depends(deps.get_semester_payment_service),
) -> Any:
    return deps.unwrap_result(service.create_payment(payload, today))
