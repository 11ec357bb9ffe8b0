"""
Payment lifecycle endpoints: simulated processing, status and receipt.
"""

from typing import Any, Optional

from fastapi import APIRouter, Depends, Response

from app.api import deps
from app.schemas.transport import (
    PaymentProcessRequest,
    PaymentProcessResponse,
    PaymentStatusResponse,
)
from app.services.transport import PaymentProcessingService, ReceiptService

router = APIRouter(prefix="/payments", tags=["Payment Processing"])


@router.post(
    "/{payment_id}/process",
    response_model=PaymentProcessResponse,
    summary="Settle a pending payment through the simulated gateway",
)
def process_payment(
    payment_id: str,
    payload: Optional[PaymentProcessRequest] = None,
    service: PaymentProcessingService = Depends(deps.get_payment_processing_service),
) -> Any:
    mock_result = payload.mock_result if payload else "success"
    return deps.unwrap_result(service.process_payment(payment_id, mock_result))


@router.get(
    "/{payment_id}/status",
    response_model=PaymentStatusResponse,
    summary="Current status of a payment",
)
def get_payment_status(
    payment_id: str,
    service: PaymentProcessingService = Depends(deps.get_payment_processing_service),
) -> Any:
    return deps.unwrap_result(service.get_payment_status(payment_id))


@router.get(
    "/{payment_id}/receipt",
    response_class=Response,
    responses={200: {"content": {"application/pdf": {}}}},
    summary="Printable transport pass for a payment",
)
def download_receipt(
    payment_id: str,
    service: ReceiptService = Depends(deps.get_receipt_service),
) -> Response:
    result = service.render_receipt(payment_id)
    if not result.is_success:
        deps.raise_for_failure(result)

    receipt_number = result.metadata.get("receipt_number", payment_id)
    return Response(
        content=result.data,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="receipt-{receipt_number}.pdf"'},
    )
