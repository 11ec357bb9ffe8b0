"""
Semester Payment Repository

Payment records per student, route and academic year, plus settlement updates.
"""

from datetime import datetime
from typing import List, Sequence

from sqlalchemy.orm import Session

from app.models.base.enums import PaymentStatus
from app.models.transport.payment_receipt import PaymentReceipt
from app.models.transport.semester_payment import SemesterPayment
from app.repositories.base.base_repository import BaseRepository

# Both block new purchases of the terms they cover
BLOCKING_STATUSES = (PaymentStatus.CONFIRMED, PaymentStatus.PENDING)


class SemesterPaymentRepository(BaseRepository[SemesterPayment]):
    """Semester payment persistence."""

    def __init__(self, session: Session):
        super().__init__(SemesterPayment, session)

    def find_for_year(
        self,
        student_id: str,
        route_id: str,
        academic_year: str,
        statuses: Sequence[PaymentStatus] = BLOCKING_STATUSES,
    ) -> List[SemesterPayment]:
        """Payments of a student on a route for one academic year."""
        return self.find_by_criteria(
            {
                "student_id": student_id,
                "allocated_route_id": route_id,
                "academic_year": academic_year,
                "payment_status": list(statuses),
            },
            limit=None,
            order_by=["created_at"],
        )

    def find_history(self, student_id: str) -> List[SemesterPayment]:
        """All payments of a student, newest first."""
        return self.find_by_criteria(
            {"student_id": student_id},
            limit=None,
            order_by=["-created_at"],
        )

    def mark_confirmed(
        self,
        payment: SemesterPayment,
        transaction_id: str,
        receipt_number: str,
        paid_at: datetime,
        commit: bool = True,
    ) -> SemesterPayment:
        return self.update(
            payment.id,
            {
                "payment_status": PaymentStatus.CONFIRMED,
                "transaction_id": transaction_id,
                "receipt_number": receipt_number,
                "payment_date": paid_at,
            },
            commit=commit,
        )

    def mark_failed(
        self,
        payment: SemesterPayment,
        transaction_id: str,
        reason: str,
        commit: bool = True,
    ) -> SemesterPayment:
        return self.update(
            payment.id,
            {
                "payment_status": PaymentStatus.FAILED,
                "transaction_id": transaction_id,
                "failure_reason": reason,
            },
            commit=commit,
        )


class PaymentReceiptRepository(BaseRepository[PaymentReceipt]):
    """Receipts issued for confirmed payments."""

    def __init__(self, session: Session):
        super().__init__(PaymentReceipt, session)
