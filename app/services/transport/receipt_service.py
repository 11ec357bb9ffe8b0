"""
Receipt Service

Renders a semester payment as a printable PDF transport pass.
"""

from typing import Optional

from sqlalchemy.orm import Session

from app.config.settings import settings
from app.core.exceptions import PaymentNotFoundError
from app.models.base.enums import PaymentStatus
from app.repositories.transport import SemesterPaymentRepository, StudentRepository
from app.services.base import BaseService, ServiceResult
from app.services.transport.academic_calendar import (
    payment_description,
    period_covered,
    receipt_color,
)
from app.utils.pdf_utils import PDFGenerator


def fallback_receipt_number(payment_id: str) -> str:
    return f"RCP-{payment_id[-8:].upper()}"


class ReceiptService(BaseService):
    """PDF receipts for semester payments."""

    def __init__(self, db_session: Session, pdf_generator: Optional[PDFGenerator] = None):
        super().__init__(db_session)
        self.payments = SemesterPaymentRepository(db_session)
        self.students = StudentRepository(db_session)
        self.pdf = pdf_generator or PDFGenerator()

    def render_receipt(self, payment_id: str) -> ServiceResult[bytes]:
        """
        Render the transport pass for a payment.

        Returns the PDF bytes; ``metadata["receipt_number"]`` holds the
        number printed on it.
        """
        try:
            payment = self.payments.find_by_id(payment_id)
            if payment is None:
                raise PaymentNotFoundError(payment_id)

            student = self.students.find_by_id(payment.student_id)
            payment_type = payment.payment_type.value
            receipt_number = payment.receipt_number or fallback_receipt_number(payment.id)
            terms = list(payment.covers_terms or []) or [payment.semester]

            pass_data = {
                "issuer": settings.RECEIPT_ISSUER_NAME,
                "receipt_number": receipt_number,
                "receipt_color": (
                    payment.receipt.receipt_color if payment.receipt
                    else receipt_color(payment_type, payment.semester)
                ),
                "coverage": f"{payment_description(payment_type, payment.semester)} ({period_covered(terms)})",
                "student": {
                    "full_name": student.full_name if student else None,
                    "roll_number": student.roll_number if student else None,
                    "email": student.email if student else None,
                    "mobile": student.mobile if student else None,
                },
                "route": payment.route.summary() if payment.route else {},
                "stop_name": payment.stop_name,
                "academic_year": payment.academic_year,
                "amount": payment.amount_paid,
                "currency": settings.CURRENCY,
                "valid_from": payment.valid_from,
                "valid_until": payment.valid_until,
                "status": PaymentStatus(payment.payment_status).value,
                "transaction_id": payment.transaction_id,
            }

            content = self.pdf.generate_transport_pass(pass_data)

            self._logger.info(
                "Receipt rendered",
                extra={
                    "payment_id": payment.id,
                    "receipt_number": receipt_number,
                    "size_bytes": len(content),
                },
            )
            return ServiceResult.success(
                content,
                metadata={"receipt_number": receipt_number},
            )

        except Exception as e:
            return self._handle_exception(e, "render receipt", payment_id)


__all__ = ["ReceiptService", "fallback_receipt_number"]
