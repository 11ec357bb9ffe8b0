"""
Semester payment request and response schemas.

Request bodies use camelCase keys (``studentId``, ``paymentType``...)
and keep every field optional; required-field checks happen in the
service so that errors carry the domain message.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Dict, List, Literal, Optional

from pydantic import Field

from app.schemas.common.base import (
    BaseCreateSchema,
    BaseResponseSchema,
    BaseSchema,
    Money,
)

__all__ = [
    "SemesterPaymentCreate",
    "PaymentProcessRequest",
    "RouteSummary",
    "ReceiptSummary",
    "FeeBreakdownResponse",
    "PaymentOptionResponse",
    "TermStatusResponse",
    "AvailableOptionsResponse",
    "PaymentHistoryItem",
    "TermStructureEntry",
    "FullYearStructure",
    "FeeStructureResponse",
    "PaymentCreatedResponse",
    "PaymentProcessResponse",
    "PaymentStatusResponse",
    "HealthResponse",
]


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------


class SemesterPaymentCreate(BaseCreateSchema):
    """Body of ``POST /payments``."""

    student_id: Optional[str] = Field(default=None, alias="studentId")
    payment_type: Optional[str] = Field(
        default=None,
        alias="paymentType",
        description="'term' or 'full_year'",
    )
    term_number: Optional[str] = Field(
        default=None,
        alias="termNumber",
        description="'1', '2' or '3'; required for term payments",
    )
    route_id: Optional[str] = Field(default=None, alias="routeId")
    stop_name: Optional[str] = Field(default=None, alias="stopName")
    payment_method: Optional[str] = Field(default=None, alias="paymentMethod")


class PaymentProcessRequest(BaseSchema):
    """Body of ``POST /payments/{payment_id}/process``."""

    mock_result: Literal["success", "failure"] = Field(
        default="success",
        alias="mockResult",
    )


# ---------------------------------------------------------------------------
# Shared pieces
# ---------------------------------------------------------------------------


class RouteSummary(BaseSchema):
    id: str
    route_number: Optional[str] = None
    route_name: Optional[str] = None
    start_location: Optional[str] = None
    end_location: Optional[str] = None


class ReceiptSummary(BaseSchema):
    receipt_number: str
    receipt_color: str
    receipt_date: Optional[str] = None


class FeeBreakdownResponse(BaseSchema):
    term_1_fee: Money
    term_2_fee: Money
    term_3_fee: Money
    full_year_discount_percent: Money
    total_term_fees: Money
    full_year_fee: Money


# ---------------------------------------------------------------------------
# Available options
# ---------------------------------------------------------------------------


class PaymentOptionResponse(BaseSchema):
    payment_type: str
    term: str
    amount: Money
    description: str
    period: str
    covers_terms: List[str]
    receipt_color: str
    is_recommended: bool
    is_paid: bool
    is_available: bool
    paid_reason: Optional[str] = None
    savings: Optional[Money] = None
    discount_percent: Optional[Money] = None


class TermStatusResponse(BaseSchema):
    is_paid: bool
    amount: Money
    paid_reason: Optional[str] = None


class AvailableOptionsResponse(BaseResponseSchema):
    student_id: str
    academic_year: str
    current_term: str
    route: Optional[RouteSummary] = None
    boarding_stop: str
    fee_structure: FeeBreakdownResponse
    paid_terms: List[str]
    has_full_year_payment: bool
    term_statuses: Dict[str, TermStatusResponse]
    available_options: List[PaymentOptionResponse]


# ---------------------------------------------------------------------------
# History
# ---------------------------------------------------------------------------


class PaymentHistoryItem(BaseResponseSchema):
    id: str
    student_id: str
    allocated_route_id: str
    stop_name: str
    academic_year: str
    semester: str
    payment_type: str
    covers_terms: List[str]
    amount_paid: Money
    payment_date: Optional[datetime] = None
    payment_method: str
    payment_status: str
    valid_from: date
    valid_until: date
    receipt_number: Optional[str] = None
    created_at: Optional[datetime] = None
    route: Optional[RouteSummary] = None
    receipt: Optional[ReceiptSummary] = None
    display_description: str
    period_covered: str


# ---------------------------------------------------------------------------
# Fee structure
# ---------------------------------------------------------------------------


class TermStructureEntry(BaseSchema):
    period: str
    amount: Money
    receipt_color: str


class FullYearStructure(BaseSchema):
    amount: Money
    savings: Money
    discount_percent: Money
    receipt_color: str


class FeeStructureResponse(BaseResponseSchema):
    academic_year: str
    route_id: str
    boarding_stop: str
    term_structure: Dict[str, TermStructureEntry]
    full_year: FullYearStructure
    total_if_paid_separately: Money


# ---------------------------------------------------------------------------
# Payment lifecycle
# ---------------------------------------------------------------------------


class PaymentCreatedResponse(BaseResponseSchema):
    payment_id: str
    amount: Money
    payment_type: str
    covers_terms: List[str]
    valid_from: date
    valid_until: date
    receipt_color: str
    message: str


class PaymentProcessResponse(BaseResponseSchema):
    success: bool
    payment_id: str
    status: str
    transaction_id: str
    receipt_number: Optional[str] = None
    receipt_color: Optional[str] = None
    amount: Money
    payment_type: str
    covers_terms: List[str]
    valid_from: date
    valid_until: date
    failure_reason: Optional[str] = None
    message: str


class PaymentStatusResponse(BaseResponseSchema):
    payment_id: str
    status: str
    receipt_number: Optional[str] = None
    transaction_id: Optional[str] = None


class HealthResponse(BaseSchema):
    status: str
    service: str
    version: str
