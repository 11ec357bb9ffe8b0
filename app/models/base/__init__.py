"""
Base models package.

Provides the declarative base, abstract base classes and enums
for all database models.
"""

from app.models.base.base_model import (
    Base,
    BaseModel,
    TimestampModel,
    utcnow,
)

from app.models.base.enums import (
    ALL_TERMS,
    PaymentMethod,
    PaymentStatus,
    ReceiptColor,
    SemesterPaymentType,
    Term,
)

__all__ = [
    "Base",
    "BaseModel",
    "TimestampModel",
    "utcnow",
    "ALL_TERMS",
    "PaymentMethod",
    "PaymentStatus",
    "ReceiptColor",
    "SemesterPaymentType",
    "Term",
]
