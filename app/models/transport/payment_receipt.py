"""
Payment Receipt Model

Snapshot of a confirmed semester payment, issued once per payment.
"""

from datetime import date as Date, datetime
from decimal import Decimal
from typing import List

from sqlalchemy import JSON, Date as SQLDate, DateTime, ForeignKey, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base.base_model import TimestampModel, utcnow


class PaymentReceipt(TimestampModel):
    """Receipt issued when a semester payment is confirmed."""

    __tablename__ = "payment_receipts"

    semester_payment_id: Mapped[str] = mapped_column(
        ForeignKey("semester_payments.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )
    receipt_number: Mapped[str] = mapped_column(String(64), nullable=False, unique=True)
    receipt_color: Mapped[str] = mapped_column(String(10), nullable=False)
    receipt_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    student_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    amount: Mapped[Decimal] = mapped_column(Numeric(precision=10, scale=2), nullable=False)
    payment_type: Mapped[str] = mapped_column(String(10), nullable=False)
    covers_terms: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)
    academic_year: Mapped[str] = mapped_column(String(9), nullable=False)
    route_id: Mapped[str] = mapped_column(String(36), nullable=False)
    stop_name: Mapped[str] = mapped_column(String(200), nullable=False)
    valid_from: Mapped[Date] = mapped_column(SQLDate, nullable=False)
    valid_until: Mapped[Date] = mapped_column(SQLDate, nullable=False)

    payment = relationship("SemesterPayment", back_populates="receipt")

    def summary(self) -> dict:
        return {
            "receipt_number": self.receipt_number,
            "receipt_color": self.receipt_color,
            "receipt_date": self.receipt_date.isoformat() if self.receipt_date else None,
        }
