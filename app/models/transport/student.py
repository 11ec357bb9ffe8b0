"""
Student Model

Students with their route allocation and boarding stop.
"""

from typing import Optional

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base.base_model import TimestampModel


class Student(TimestampModel):
    """
    Student enrolled for college transport.

    Older records carry the stop in ``boarding_stop``; newer ones use
    ``boarding_point``.
    """

    __tablename__ = "students"

    full_name: Mapped[str] = mapped_column(
        String(200),
        nullable=False,
    )
    roll_number: Mapped[Optional[str]] = mapped_column(
        String(50),
        nullable=True,
        unique=True,
    )
    email: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True,
    )
    mobile: Mapped[Optional[str]] = mapped_column(
        String(20),
        nullable=True,
    )

    allocated_route_id: Mapped[Optional[str]] = mapped_column(
        ForeignKey("routes.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    boarding_point: Mapped[Optional[str]] = mapped_column(
        String(200),
        nullable=True,
    )
    boarding_stop: Mapped[Optional[str]] = mapped_column(
        String(200),
        nullable=True,
    )

    route = relationship("Route", lazy="joined")

    @property
    def effective_boarding_stop(self) -> Optional[str]:
        return self.boarding_point or self.boarding_stop
