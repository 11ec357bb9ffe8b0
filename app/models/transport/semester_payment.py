"""
Semester Payment Model

A student's payment for one term or the full academic year.
Created as pending; settled to confirmed or failed by the gateway.
"""

from datetime import date as Date, datetime
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import (
    JSON,
    CheckConstraint,
    Date as SQLDate,
    DateTime,
    Enum,
    ForeignKey,
    Index,
    Numeric,
    String,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base.base_model import TimestampModel
from app.models.base.enums import PaymentStatus, SemesterPaymentType


def _enum_values(enum_cls):
    return [member.value for member in enum_cls]


class SemesterPayment(TimestampModel):
    """Transport fee payment covering one or all terms."""

    __tablename__ = "semester_payments"

    student_id: Mapped[str] = mapped_column(
        ForeignKey("students.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    semester_fee_id: Mapped[Optional[str]] = mapped_column(
        ForeignKey("semester_fees.id", ondelete="SET NULL"),
        nullable=True,
    )
    allocated_route_id: Mapped[str] = mapped_column(
        ForeignKey("routes.id", ondelete="RESTRICT"),
        nullable=False,
    )
    stop_name: Mapped[str] = mapped_column(
        String(200),
        nullable=False,
    )
    academic_year: Mapped[str] = mapped_column(
        String(9),
        nullable=False,
    )

    # Primary term; full-year payments record term 1
    semester: Mapped[str] = mapped_column(
        String(1),
        nullable=False,
    )
    payment_type: Mapped[SemesterPaymentType] = mapped_column(
        Enum(
            SemesterPaymentType,
            name="semester_payment_type_enum",
            native_enum=False,
            values_callable=_enum_values,
        ),
        nullable=False,
    )
    covers_terms: Mapped[List[str]] = mapped_column(
        JSON,
        nullable=False,
        default=list,
    )

    amount_paid: Mapped[Decimal] = mapped_column(
        Numeric(precision=10, scale=2),
        nullable=False,
    )
    payment_method: Mapped[str] = mapped_column(
        String(30),
        nullable=False,
        default="upi",
    )
    payment_status: Mapped[PaymentStatus] = mapped_column(
        Enum(
            PaymentStatus,
            name="payment_status_enum",
            native_enum=False,
            values_callable=_enum_values,
        ),
        nullable=False,
        default=PaymentStatus.PENDING,
        index=True,
    )

    valid_from: Mapped[Date] = mapped_column(SQLDate, nullable=False)
    valid_until: Mapped[Date] = mapped_column(SQLDate, nullable=False)

    # Gateway settlement
    transaction_id: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    receipt_number: Mapped[Optional[str]] = mapped_column(String(64), nullable=True, unique=True)
    payment_date: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    failure_reason: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)

    route = relationship("Route", lazy="joined")
    receipt = relationship(
        "PaymentReceipt",
        back_populates="payment",
        uselist=False,
        lazy="joined",
    )

    __table_args__ = (
        CheckConstraint("amount_paid > 0", name="ck_semester_payment_amount_positive"),
        CheckConstraint("valid_from < valid_until", name="ck_semester_payment_validity"),
        Index(
            "ix_semester_payment_student_year",
            "student_id",
            "allocated_route_id",
            "academic_year",
        ),
    )
