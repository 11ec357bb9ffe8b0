"""
Transport Repositories Package

This module exports all transport fee repositories.
"""

from app.repositories.transport.student_repository import (
    StudentRepository,
)
from app.repositories.transport.semester_fee_repository import (
    SemesterFeeRepository,
)
from app.repositories.transport.semester_payment_repository import (
    BLOCKING_STATUSES,
    PaymentReceiptRepository,
    SemesterPaymentRepository,
)

__all__ = [
    "StudentRepository",
    "SemesterFeeRepository",
    "SemesterPaymentRepository",
    "PaymentReceiptRepository",
    "BLOCKING_STATUSES",
]
