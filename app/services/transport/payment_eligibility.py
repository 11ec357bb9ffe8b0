"""
Eligibility rules for a new semester payment.

Only confirmed payments block a purchase here. Pending payments are
reported as paid by the option builder, but they do not stop a new
payment from being created.
"""

from dataclasses import dataclass
from typing import Iterable, Optional

from app.models.base.enums import PaymentStatus, SemesterPaymentType
from app.services.transport.fee_engine import PaymentRecord


@dataclass(frozen=True)
class EligibilityResult:
    is_valid: bool
    reason: str = ""


def validate_payment_eligibility(
    existing: Iterable[PaymentRecord],
    payment_type: str,
    term_number: Optional[str] = None,
) -> EligibilityResult:
    """
    Decide whether a new payment may be created.

    Rules, first match wins:
    1. A confirmed full-year payment blocks everything.
    2. A full-year request is blocked by any confirmed term payment.
    3. A term request is blocked when that term is already confirmed.
    """
    confirmed = [
        record for record in existing
        if record.status == PaymentStatus.CONFIRMED.value
    ]

    if any(record.is_full_year for record in confirmed):
        return EligibilityResult(False, "Full year payment already completed")

    if payment_type == SemesterPaymentType.FULL_YEAR.value:
        if any(record.payment_type == SemesterPaymentType.TERM.value for record in confirmed):
            return EligibilityResult(False, "Cannot pay full year after individual term payments")

    elif payment_type == SemesterPaymentType.TERM.value and term_number:
        term_paid = any(
            term_number in record.covers_terms or record.semester == term_number
            for record in confirmed
        )
        if term_paid:
            return EligibilityResult(False, f"Term {term_number} payment already completed")

    return EligibilityResult(True, "")


__all__ = ["EligibilityResult", "validate_payment_eligibility"]
