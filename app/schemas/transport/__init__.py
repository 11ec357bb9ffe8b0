"""
Transport fee schemas.
"""

from app.schemas.transport.semester_payment import (
    AvailableOptionsResponse,
    FeeBreakdownResponse,
    FeeStructureResponse,
    FullYearStructure,
    HealthResponse,
    PaymentCreatedResponse,
    PaymentHistoryItem,
    PaymentOptionResponse,
    PaymentProcessRequest,
    PaymentProcessResponse,
    PaymentStatusResponse,
    ReceiptSummary,
    RouteSummary,
    SemesterPaymentCreate,
    TermStatusResponse,
    TermStructureEntry,
)

__all__ = [
    "AvailableOptionsResponse",
    "FeeBreakdownResponse",
    "FeeStructureResponse",
    "FullYearStructure",
    "HealthResponse",
    "PaymentCreatedResponse",
    "PaymentHistoryItem",
    "PaymentOptionResponse",
    "PaymentProcessRequest",
    "PaymentProcessResponse",
    "PaymentStatusResponse",
    "ReceiptSummary",
    "RouteSummary",
    "SemesterPaymentCreate",
    "TermStatusResponse",
    "TermStructureEntry",
]
