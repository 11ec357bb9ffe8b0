"""
Transport fee services.

The calendar, fee engine and eligibility modules are pure; the service
classes load data through repositories and return ServiceResult objects.
"""

from app.services.transport.academic_calendar import (
    AcademicPeriod,
    ValidityWindow,
    calculate_validity,
    full_year_period,
    payment_description,
    period_covered,
    receipt_color,
    resolve_academic_period,
    split_academic_year,
    term_period_description,
)
from app.services.transport.fee_engine import (
    FeeBreakdown,
    PaymentOption,
    PaymentRecord,
    PaymentState,
    TermFeeSchedule,
    build_fee_schedule,
    build_payment_options,
    classify_payments,
    compute_fees,
    term_statuses,
)
from app.services.transport.payment_eligibility import (
    EligibilityResult,
    validate_payment_eligibility,
)
from app.services.transport.semester_payment_service import SemesterPaymentService
from app.services.transport.payment_processing_service import PaymentProcessingService
from app.services.transport.receipt_service import ReceiptService

__all__ = [
    # Calendar
    "AcademicPeriod",
    "ValidityWindow",
    "calculate_validity",
    "full_year_period",
    "payment_description",
    "period_covered",
    "receipt_color",
    "resolve_academic_period",
    "split_academic_year",
    "term_period_description",

    # Fee engine
    "FeeBreakdown",
    "PaymentOption",
    "PaymentRecord",
    "PaymentState",
    "TermFeeSchedule",
    "build_fee_schedule",
    "build_payment_options",
    "classify_payments",
    "compute_fees",
    "term_statuses",

    # Eligibility
    "EligibilityResult",
    "validate_payment_eligibility",

    # Services
    "SemesterPaymentService",
    "PaymentProcessingService",
    "ReceiptService",
]
