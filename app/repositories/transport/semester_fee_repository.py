"""
Semester Fee Repository

Reads the active per-term fee rows for a route stop and academic year.
"""

from typing import List

from sqlalchemy.orm import Session

from app.models.transport.semester_fee import SemesterFee
from app.repositories.base.base_repository import BaseRepository


class SemesterFeeRepository(BaseRepository[SemesterFee]):
    """Per-term fee rows; written by the pricing process, read here."""

    def __init__(self, session: Session):
        super().__init__(SemesterFee, session)

    def find_active_for_stop(
        self,
        route_id: str,
        stop_name: str,
        academic_year: str,
    ) -> List[SemesterFee]:
        """
        Active fee rows for a boarding stop, ordered by term.

        Args:
            route_id: Allocated route identifier
            stop_name: Boarding stop name
            academic_year: Academic year in "YYYY-YY" form

        Returns:
            Zero to three fee rows
        """
        return self.find_by_criteria(
            {
                "allocated_route_id": route_id,
                "stop_name": stop_name,
                "academic_year": academic_year,
                "is_active": True,
            },
            limit=None,
            order_by=["semester"],
        )
