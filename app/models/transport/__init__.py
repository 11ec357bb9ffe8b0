"""
Transport models package.

Routes, students, per-term fee rows, semester payments and receipts.
"""

from app.models.transport.route import Route
from app.models.transport.student import Student
from app.models.transport.semester_fee import SemesterFee
from app.models.transport.semester_payment import SemesterPayment
from app.models.transport.payment_receipt import PaymentReceipt

__all__ = [
    "Route",
    "Student",
    "SemesterFee",
    "SemesterPayment",
    "PaymentReceipt",
]
