# models/__init__.py
from app.models.base import Base, BaseModel, TimestampModel
from app.models.transport import (
    PaymentReceipt,
    Route,
    SemesterFee,
    SemesterPayment,
    Student,
)

__all__ = [
    "Base",
    "BaseModel",
    "TimestampModel",
    "PaymentReceipt",
    "Route",
    "SemesterFee",
    "SemesterPayment",
    "Student",
]
