"""
Student Repository

Lookups of a student and their route allocation.
"""

from typing import Optional

from sqlalchemy.orm import Session

from app.models.transport.student import Student
from app.repositories.base.base_repository import BaseRepository


class StudentRepository(BaseRepository[Student]):
    """Student lookups for fee and payment calculations."""

    def __init__(self, session: Session):
        super().__init__(Student, session)

    def find_with_route(self, student_id: str) -> Optional[Student]:
        """Return the student; ``Student.route`` is joined-loaded by its mapping."""
        return self.find_by_id(student_id)

