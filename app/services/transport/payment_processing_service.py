"""
Payment Processing Service

Settles pending semester payments through a simulated gateway and
issues the receipt for confirmed ones.
"""

import secrets
import string
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Optional

from sqlalchemy.orm import Session

from app.core.exceptions import PaymentNotFoundError, PaymentStateError
from app.models.base.enums import PaymentStatus
from app.models.transport.payment_receipt import PaymentReceipt
from app.models.transport.semester_payment import SemesterPayment
from app.repositories.transport import (
    PaymentReceiptRepository,
    SemesterPaymentRepository,
)
from app.services.base import BaseService, ServiceResult
from app.services.transport.academic_calendar import receipt_color

SIMULATED_FAILURE_REASON = "Simulated payment failure for testing"

_BASE36 = string.digits + string.ascii_lowercase


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _epoch_ms(moment: datetime) -> int:
    return int(moment.timestamp() * 1000)


def generate_transaction_id(moment: datetime) -> str:
    suffix = "".join(secrets.choice(_BASE36) for _ in range(9))
    return f"TXN_{_epoch_ms(moment)}_{suffix}"


def generate_receipt_number(academic_year: str, semester: str, moment: datetime) -> str:
    return f"RCP_{academic_year}_{semester}_{str(_epoch_ms(moment))[-6:]}"


class PaymentProcessingService(BaseService):
    """Simulated gateway settlement and payment status lookups."""

    def __init__(self, db_session: Session, clock: Optional[Callable[[], datetime]] = None):
        super().__init__(db_session)
        self.payments = SemesterPaymentRepository(db_session)
        self.receipts = PaymentReceiptRepository(db_session)
        self._clock = clock or _utcnow

    def _get_payment(self, payment_id: str) -> SemesterPayment:
        payment = self.payments.find_by_id(payment_id)
        if payment is None:
            raise PaymentNotFoundError(payment_id)
        return payment

    def process_payment(self, payment_id: str, mock_result: str = "success") -> ServiceResult[Dict[str, Any]]:
        """
        Settle a pending payment.

        ``mock_result`` "success" confirms the payment and writes its
        receipt; anything else marks it failed.

        Raises (as failures):
            PaymentNotFoundError: Unknown payment id
            PaymentStateError: Payment is not pending
        """
        try:
            payment = self._get_payment(payment_id)
            status = PaymentStatus(payment.payment_status)
            if status != PaymentStatus.PENDING:
                raise PaymentStateError(payment_id, status.value)

            now = self._clock()
            transaction_id = generate_transaction_id(now)
            payment_type = payment.payment_type.value
            color = receipt_color(payment_type, payment.semester)

            if mock_result == "success":
                receipt_number = generate_receipt_number(payment.academic_year, payment.semester, now)
                with self.transaction():
                    self.payments.mark_confirmed(
                        payment, transaction_id, receipt_number, now, commit=False
                    )
                    self.receipts.create(
                        PaymentReceipt(
                            semester_payment_id=payment.id,
                            receipt_number=receipt_number,
                            receipt_color=color,
                            receipt_date=now,
                            student_id=payment.student_id,
                            amount=payment.amount_paid,
                            payment_type=payment_type,
                            covers_terms=list(payment.covers_terms or []),
                            academic_year=payment.academic_year,
                            route_id=payment.allocated_route_id,
                            stop_name=payment.stop_name,
                            valid_from=payment.valid_from,
                            valid_until=payment.valid_until,
                        ),
                        commit=False,
                    )
                message = "Payment processed successfully!"
                failure_reason = None
            else:
                receipt_number = None
                failure_reason = SIMULATED_FAILURE_REASON
                self.payments.mark_failed(payment, transaction_id, failure_reason)
                message = "Payment failed. Please try again."

            self.db.refresh(payment)
            final_status = PaymentStatus(payment.payment_status).value

            self._logger.info(
                "Payment processed",
                extra={
                    "payment_id": payment_id,
                    "status": final_status,
                    "transaction_id": transaction_id,
                    "receipt_number": receipt_number,
                },
            )

            return ServiceResult.success(
                {
                    "success": final_status == PaymentStatus.CONFIRMED.value,
                    "payment_id": payment.id,
                    "status": final_status,
                    "transaction_id": transaction_id,
                    "receipt_number": receipt_number,
                    "receipt_color": color if receipt_number else None,
                    "amount": payment.amount_paid,
                    "payment_type": payment_type,
                    "covers_terms": list(payment.covers_terms or []),
                    "valid_from": payment.valid_from,
                    "valid_until": payment.valid_until,
                    "failure_reason": failure_reason,
                    "message": message,
                },
                message=message,
            )

        except Exception as e:
            return self._handle_exception(e, "process payment", payment_id)

    def get_payment_status(self, payment_id: str) -> ServiceResult[Dict[str, Any]]:
        try:
            payment = self._get_payment(payment_id)
            return ServiceResult.success({
                "payment_id": payment.id,
                "status": PaymentStatus(payment.payment_status).value,
                "receipt_number": payment.receipt_number,
                "transaction_id": payment.transaction_id,
            })
        except Exception as e:
            return self._handle_exception(e, "fetch payment status", payment_id)


__all__ = [
    "PaymentProcessingService",
    "SIMULATED_FAILURE_REASON",
    "generate_receipt_number",
    "generate_transaction_id",
]
