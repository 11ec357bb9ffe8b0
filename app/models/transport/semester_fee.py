"""
Semester Fee Model

Per-term transport fee for a route stop in an academic year.
One row per (route, stop, academic year, term).
"""

from decimal import Decimal
from typing import Optional

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    ForeignKey,
    Index,
    Numeric,
    String,
)
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base.base_model import TimestampModel


class SemesterFee(TimestampModel):
    """Active fee row for one term at one boarding stop."""

    __tablename__ = "semester_fees"

    allocated_route_id: Mapped[str] = mapped_column(
        ForeignKey("routes.id", ondelete="CASCADE"),
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
    semester: Mapped[str] = mapped_column(
        String(1),
        nullable=False,
    )
    semester_fee: Mapped[Decimal] = mapped_column(
        Numeric(precision=10, scale=2),
        nullable=False,
    )
    # NULL means the service-wide default discount applies
    full_year_discount_percent: Mapped[Optional[Decimal]] = mapped_column(
        Numeric(precision=5, scale=2),
        nullable=True,
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
    )

    __table_args__ = (
        CheckConstraint("semester IN ('1', '2', '3')", name="ck_semester_fee_semester"),
        CheckConstraint("semester_fee >= 0", name="ck_semester_fee_non_negative"),
        CheckConstraint(
            "full_year_discount_percent IS NULL OR "
            "(full_year_discount_percent >= 0 AND full_year_discount_percent <= 100)",
            name="ck_semester_fee_discount_range",
        ),
        Index(
            "ix_semester_fee_lookup",
            "allocated_route_id",
            "stop_name",
            "academic_year",
            "is_active",
        ),
    )
