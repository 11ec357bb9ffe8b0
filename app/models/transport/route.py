"""
Route Model

Bus routes that students are allocated to.
"""

from typing import Optional

from sqlalchemy import Boolean, String
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base.base_model import TimestampModel


class Route(TimestampModel):
    """Transport route with its endpoints."""

    __tablename__ = "routes"

    route_number: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        unique=True,
        index=True,
    )
    route_name: Mapped[str] = mapped_column(
        String(200),
        nullable=False,
    )
    start_location: Mapped[Optional[str]] = mapped_column(
        String(200),
        nullable=True,
    )
    end_location: Mapped[Optional[str]] = mapped_column(
        String(200),
        nullable=True,
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
    )

    def summary(self, include_locations: bool = True) -> dict:
        data = {
            "id": self.id,
            "route_number": self.route_number,
            "route_name": self.route_name,
        }
        if include_locations:
            data["start_location"] = self.start_location
            data["end_location"] = self.end_location
        return data
