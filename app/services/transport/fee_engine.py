"""
Fee engine for the 3-term transport year.

Pure functions over plain records:
- fold active fee rows into a per-term schedule
- compute term totals and the discounted full-year fee
- classify what a student has already paid or has pending
- build the purchasable payment options shown to the student

Nothing here touches the database; callers load rows and pass them in.
"""

from dataclasses import dataclass, field
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, Iterable, List, Optional, Sequence, Set

from app.core.exceptions import FeeScheduleNotFoundError
from app.models.base.enums import (
    ALL_TERMS,
    PaymentStatus,
    ReceiptColor,
    SemesterPaymentType,
)
from app.services.transport.academic_calendar import (
    full_year_period,
    receipt_color,
    term_period_description,
)

DEFAULT_DISCOUNT_PERCENT = Decimal("5")

_ZERO = Decimal("0")
_WHOLE_UNIT = Decimal("1")
_HUNDRED = Decimal("100")


def _to_decimal(value: Any) -> Decimal:
    if value is None:
        return _ZERO
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


# ---------------------------------------------------------------------------
# Fee schedule
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class TermFeeSchedule:
    """Per-term fees for one (route, stop, academic year)."""

    academic_year: str
    route_id: str
    stop_name: str
    term1_fee: Decimal = _ZERO
    term2_fee: Decimal = _ZERO
    term3_fee: Decimal = _ZERO
    full_year_discount_percent: Optional[Decimal] = None
    # fee row id per term, referenced by created payments
    fee_ids: Dict[str, str] = field(default_factory=dict)

    def fee_for_term(self, term: str) -> Decimal:
        return {
            "1": self.term1_fee,
            "2": self.term2_fee,
            "3": self.term3_fee,
        }.get(term, _ZERO)

    def fee_id_for_term(self, term: str) -> Optional[str]:
        return self.fee_ids.get(term)


def build_fee_schedule(
    rows: Sequence[Any],
    academic_year: str,
    route_id: str,
    stop_name: str,
) -> TermFeeSchedule:
    """
    Fold active fee rows into a TermFeeSchedule.

    Each row exposes ``id``, ``semester``, ``semester_fee`` and
    ``full_year_discount_percent``. A term without a row costs 0; the
    discount comes from the first row.

    Raises:
        FeeScheduleNotFoundError: If ``rows`` is empty
    """
    if not rows:
        raise FeeScheduleNotFoundError(
            route_id=route_id,
            stop_name=stop_name,
            academic_year=academic_year,
        )

    fees: Dict[str, Decimal] = {}
    fee_ids: Dict[str, str] = {}
    for row in rows:
        term = str(row.semester)
        if term in fees:
            continue
        fees[term] = _to_decimal(row.semester_fee)
        fee_ids[term] = row.id

    discount = rows[0].full_year_discount_percent

    return TermFeeSchedule(
        academic_year=academic_year,
        route_id=route_id,
        stop_name=stop_name,
        term1_fee=fees.get("1", _ZERO),
        term2_fee=fees.get("2", _ZERO),
        term3_fee=fees.get("3", _ZERO),
        full_year_discount_percent=None if discount is None else _to_decimal(discount),
        fee_ids=fee_ids,
    )


# ---------------------------------------------------------------------------
# Fee computation
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class FeeBreakdown:
    term1_fee: Decimal
    term2_fee: Decimal
    term3_fee: Decimal
    total_term_fees: Decimal
    full_year_fee: Decimal
    discount_percent: Decimal

    @property
    def savings(self) -> Decimal:
        return self.total_term_fees - self.full_year_fee

    def fee_for_term(self, term: str) -> Decimal:
        return {
            "1": self.term1_fee,
            "2": self.term2_fee,
            "3": self.term3_fee,
        }.get(term, _ZERO)

    def to_dict(self) -> Dict[str, Decimal]:
        return {
            "term_1_fee": self.term1_fee,
            "term_2_fee": self.term2_fee,
            "term_3_fee": self.term3_fee,
            "full_year_discount_percent": self.discount_percent,
            "total_term_fees": self.total_term_fees,
            "full_year_fee": self.full_year_fee,
        }


def compute_fees(
    schedule: TermFeeSchedule,
    default_discount: Decimal = DEFAULT_DISCOUNT_PERCENT,
) -> FeeBreakdown:
    """
    Compute term totals and the discounted full-year fee.

    The full-year fee is rounded half-up to a whole currency unit. The
    default discount applies only when the schedule carries none; an
    explicit 0 is honoured.
    """
    discount = schedule.full_year_discount_percent
    if discount is None:
        discount = default_discount

    total = schedule.term1_fee + schedule.term2_fee + schedule.term3_fee
    full_year_fee = (total * (1 - discount / _HUNDRED)).quantize(
        _WHOLE_UNIT, rounding=ROUND_HALF_UP
    )

    return FeeBreakdown(
        term1_fee=schedule.term1_fee,
        term2_fee=schedule.term2_fee,
        term3_fee=schedule.term3_fee,
        total_term_fees=total,
        full_year_fee=full_year_fee,
        discount_percent=discount,
    )


# ---------------------------------------------------------------------------
# Payment state
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PaymentRecord:
    """Engine view of a stored semester payment."""

    id: Optional[str]
    student_id: Optional[str]
    route_id: Optional[str]
    academic_year: Optional[str]
    semester: Optional[str]
    payment_type: str
    covers_terms: List[str]
    status: str

    @classmethod
    def from_model(cls, payment: Any) -> "PaymentRecord":
        return cls(
            id=payment.id,
            student_id=payment.student_id,
            route_id=payment.allocated_route_id,
            academic_year=payment.academic_year,
            semester=payment.semester,
            payment_type=_enum_value(payment.payment_type),
            covers_terms=list(payment.covers_terms or []),
            status=_enum_value(payment.payment_status),
        )

    @property
    def is_full_year(self) -> bool:
        return self.payment_type == SemesterPaymentType.FULL_YEAR.value

    @property
    def effective_terms(self) -> List[str]:
        """Covered terms, falling back to the primary term when none are recorded."""
        if self.is_full_year:
            return list(ALL_TERMS)
        if self.covers_terms:
            return list(self.covers_terms)
        return [self.semester] if self.semester else []


def _enum_value(value: Any) -> str:
    return getattr(value, "value", value)


_COUNTED_STATUSES = (PaymentStatus.CONFIRMED.value, PaymentStatus.PENDING.value)


@dataclass
class PaymentState:
    paid_terms: Set[str] = field(default_factory=set)
    pending_terms: Set[str] = field(default_factory=set)
    confirmed_terms: Set[str] = field(default_factory=set)
    has_full_year_payment: bool = False
    full_year_payment_status: Optional[str] = None

    def is_term_paid(self, term: str) -> bool:
        return term in self.paid_terms or self.has_full_year_payment

    @property
    def full_year_pending(self) -> bool:
        return self.full_year_payment_status == PaymentStatus.PENDING.value


def classify_payments(records: Iterable[PaymentRecord]) -> PaymentState:
    """
    Summarise which terms are settled or in flight.

    Confirmed and pending records both count as paid; failed records are
    ignored. A full-year record marks every term.
    """
    state = PaymentState()

    for record in records:
        if record.status not in _COUNTED_STATUSES:
            continue

        if record.is_full_year:
            state.has_full_year_payment = True
            state.full_year_payment_status = record.status
        elif record.payment_type != SemesterPaymentType.TERM.value:
            continue

        pending = record.status == PaymentStatus.PENDING.value
        for term in record.effective_terms:
            state.paid_terms.add(term)
            if pending:
                state.pending_terms.add(term)
            else:
                state.confirmed_terms.add(term)

    return state


# ---------------------------------------------------------------------------
# Payment options
# ---------------------------------------------------------------------------


@dataclass
class PaymentOption:
    payment_type: str
    term: str
    amount: Decimal
    description: str
    period: str
    covers_terms: List[str]
    receipt_color: str
    is_recommended: bool
    is_paid: bool
    is_available: bool
    paid_reason: Optional[str] = None
    savings: Optional[Decimal] = None
    discount_percent: Optional[Decimal] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "payment_type": self.payment_type,
            "term": self.term,
            "amount": self.amount,
            "description": self.description,
            "period": self.period,
            "covers_terms": list(self.covers_terms),
            "receipt_color": self.receipt_color,
            "is_recommended": self.is_recommended,
            "is_paid": self.is_paid,
            "is_available": self.is_available,
            "paid_reason": self.paid_reason,
        }
        if self.payment_type == SemesterPaymentType.FULL_YEAR.value:
            data["savings"] = self.savings
            data["discount_percent"] = self.discount_percent
        return data


def _term_paid_reason(term: str, state: PaymentState) -> Optional[str]:
    if state.has_full_year_payment:
        label = "Payment Pending" if state.full_year_pending else "Paid"
        return f"Covered by Full Year Payment ({label})"
    if term in state.paid_terms:
        return "Payment Pending" if term in state.pending_terms else "Already Paid"
    return None


def _full_year_paid_reason(state: PaymentState) -> Optional[str]:
    if state.has_full_year_payment:
        return "Full Year Payment Pending" if state.full_year_pending else "Already Paid"
    if state.paid_terms:
        if state.pending_terms:
            return "Individual term payments already initiated"
        return "Individual term payments already made"
    return None


def build_payment_options(
    fees: FeeBreakdown,
    state: PaymentState,
    current_term: str,
    academic_year: str,
) -> List[PaymentOption]:
    """
    Build the ordered option list: term 1, term 2, term 3, full year.

    Terms with no fee, and a zero full-year fee, are left out entirely.
    Paid options stay in the list with ``is_paid`` set so the caller can
    show them greyed out.
    """
    options: List[PaymentOption] = []

    for term in ALL_TERMS:
        amount = fees.fee_for_term(term)
        if amount <= 0:
            continue

        is_paid = state.is_term_paid(term)
        is_available = not is_paid and not state.has_full_year_payment
        options.append(
            PaymentOption(
                payment_type=SemesterPaymentType.TERM.value,
                term=term,
                amount=amount,
                description=f"Term {term} Payment",
                period=term_period_description(term, academic_year),
                covers_terms=[term],
                receipt_color=receipt_color(SemesterPaymentType.TERM.value, term),
                is_recommended=term == current_term and is_available,
                is_paid=is_paid,
                is_available=is_available,
                paid_reason=_term_paid_reason(term, state) if is_paid else None,
            )
        )

    if fees.full_year_fee > 0:
        is_available = not state.has_full_year_payment and not state.paid_terms
        options.append(
            PaymentOption(
                payment_type=SemesterPaymentType.FULL_YEAR.value,
                term=SemesterPaymentType.FULL_YEAR.value,
                amount=fees.full_year_fee,
                description="Full Academic Year Payment",
                period=full_year_period(academic_year),
                covers_terms=list(ALL_TERMS),
                receipt_color=ReceiptColor.GREEN.value,
                is_recommended=is_available,
                is_paid=state.has_full_year_payment,
                is_available=is_available,
                paid_reason=_full_year_paid_reason(state),
                savings=fees.savings,
                discount_percent=fees.discount_percent,
            )
        )

    return options


def term_statuses(options: Iterable[PaymentOption]) -> Dict[str, Dict[str, Any]]:
    """Summary of listed term options keyed by term number."""
    return {
        option.term: {
            "is_paid": option.is_paid,
            "amount": option.amount,
            "paid_reason": option.paid_reason,
        }
        for option in options
        if option.payment_type == SemesterPaymentType.TERM.value
    }


__all__ = [
    "DEFAULT_DISCOUNT_PERCENT",
    "TermFeeSchedule",
    "build_fee_schedule",
    "FeeBreakdown",
    "compute_fees",
    "PaymentRecord",
    "PaymentState",
    "classify_payments",
    "PaymentOption",
    "build_payment_options",
    "term_statuses",
]
