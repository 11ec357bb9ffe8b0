"""
Semester Payment Service

Student-facing transport fee operations:
- Available payment options for the current academic year
- Payment history with route and receipt details
- Fee structure per term and for the full year
- Creation of pending term or full-year payments
"""

from datetime import date
from decimal import Decimal
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy.orm import Session

from app.config.settings import settings
from app.core.exceptions import (
    FeeScheduleNotFoundError,
    InvalidAmountError,
    InvalidPaymentRequestError,
    MissingParameterError,
    PaymentNotEligibleError,
    StudentOrRouteNotFoundError,
)
from app.models.base.enums import (
    ALL_TERMS,
    PaymentMethod,
    PaymentStatus,
    SemesterPaymentType,
)
from app.models.transport.semester_payment import SemesterPayment
from app.models.transport.student import Student
from app.repositories.transport import (
    SemesterFeeRepository,
    SemesterPaymentRepository,
    StudentRepository,
)
from app.schemas.transport import SemesterPaymentCreate
from app.services.base import BaseService, ServiceResult
from app.services.transport.academic_calendar import (
    calculate_validity,
    payment_description,
    period_covered,
    receipt_color,
    resolve_academic_period,
    term_period_description,
)
from app.services.transport.fee_engine import (
    FeeBreakdown,
    PaymentRecord,
    TermFeeSchedule,
    build_fee_schedule,
    build_payment_options,
    classify_payments,
    compute_fees,
    term_statuses,
)
from app.services.transport.payment_eligibility import validate_payment_eligibility

_PAYMENT_TYPES = tuple(member.value for member in SemesterPaymentType)
_PAYMENT_METHODS = tuple(member.value for member in PaymentMethod)


class SemesterPaymentService(BaseService):
    """
    Transport fee options, history and payment creation for students.

    Every public method returns a ServiceResult; domain errors are
    carried as failures with their HTTP status in ``details``.
    """

    def __init__(
        self,
        db_session: Session,
        default_discount: Optional[Decimal] = None,
        default_payment_method: Optional[str] = None,
    ):
        super().__init__(db_session)
        self.students = StudentRepository(db_session)
        self.fees = SemesterFeeRepository(db_session)
        self.payments = SemesterPaymentRepository(db_session)
        self.default_discount = (
            default_discount if default_discount is not None
            else settings.FULL_YEAR_DISCOUNT_DEFAULT
        )
        self.default_payment_method = default_payment_method or settings.DEFAULT_PAYMENT_METHOD

    # -------------------------------------------------------------------------
    # Loading helpers
    # -------------------------------------------------------------------------

    def _load_student(self, student_id: str) -> Tuple[Student, str, str]:
        """Return the student with their route id and boarding stop."""
        student = self.students.find_with_route(student_id)
        if student is None:
            raise StudentOrRouteNotFoundError(student_id)

        route_id = student.allocated_route_id
        boarding_stop = student.effective_boarding_stop
        if not route_id or not boarding_stop:
            raise StudentOrRouteNotFoundError(
                student_id,
                message="Student route or boarding stop not configured",
            )
        return student, route_id, boarding_stop

    def _load_fees(
        self,
        route_id: str,
        stop_name: str,
        academic_year: str,
    ) -> Tuple[TermFeeSchedule, FeeBreakdown]:
        rows = self.fees.find_active_for_stop(route_id, stop_name, academic_year)
        schedule = build_fee_schedule(rows, academic_year, route_id, stop_name)
        return schedule, compute_fees(schedule, self.default_discount)

    def _load_records(self, student_id: str, route_id: str, academic_year: str) -> List[PaymentRecord]:
        payments = self.payments.find_for_year(student_id, route_id, academic_year)
        return [PaymentRecord.from_model(payment) for payment in payments]

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def get_available_options(self, student_id: str, today: date) -> ServiceResult[Dict[str, Any]]:
        """
        Payment options for the student's route and stop in the current year.

        Paid and pending options are listed too, flagged unavailable.
        """
        try:
            period = resolve_academic_period(today)
            student, route_id, boarding_stop = self._load_student(student_id)
            _, fees = self._load_fees(route_id, boarding_stop, period.academic_year)

            state = classify_payments(
                self._load_records(student_id, route_id, period.academic_year)
            )
            options = build_payment_options(
                fees, state, period.current_term, period.academic_year
            )

            self._logger.info(
                "Payment options computed",
                extra={
                    "student_id": student_id,
                    "academic_year": period.academic_year,
                    "current_term": period.current_term,
                    "paid_terms": sorted(state.paid_terms),
                    "has_full_year_payment": state.has_full_year_payment,
                    "option_count": len(options),
                },
            )

            return ServiceResult.success({
                "student_id": student_id,
                "academic_year": period.academic_year,
                "current_term": period.current_term,
                "route": student.route.summary() if student.route else None,
                "boarding_stop": boarding_stop,
                "fee_structure": fees.to_dict(),
                "paid_terms": sorted(state.paid_terms),
                "has_full_year_payment": state.has_full_year_payment,
                "term_statuses": term_statuses(options),
                "available_options": [option.to_dict() for option in options],
            })

        except Exception as e:
            return self._handle_exception(e, "fetch payment options", student_id)

    def get_payment_history(self, student_id: str) -> ServiceResult[List[Dict[str, Any]]]:
        """Every payment of a student, newest first."""
        try:
            payments = self.payments.find_history(student_id)
            history = [self._history_entry(payment) for payment in payments]

            self._logger.debug(
                "Payment history loaded",
                extra={"student_id": student_id, "count": len(history)},
            )
            return ServiceResult.success(history)

        except Exception as e:
            return self._handle_exception(e, "fetch payment history", student_id)

    def _history_entry(self, payment: SemesterPayment) -> Dict[str, Any]:
        record = PaymentRecord.from_model(payment)
        covered = record.covers_terms or [record.semester]

        return {
            "id": payment.id,
            "student_id": payment.student_id,
            "allocated_route_id": payment.allocated_route_id,
            "stop_name": payment.stop_name,
            "academic_year": payment.academic_year,
            "semester": payment.semester,
            "payment_type": record.payment_type,
            "covers_terms": list(record.covers_terms),
            "amount_paid": payment.amount_paid,
            "payment_date": payment.payment_date,
            "payment_method": payment.payment_method,
            "payment_status": record.status,
            "valid_from": payment.valid_from,
            "valid_until": payment.valid_until,
            "receipt_number": payment.receipt_number,
            "created_at": payment.created_at,
            "route": payment.route.summary(include_locations=False) if payment.route else None,
            "receipt": payment.receipt.summary() if payment.receipt else None,
            "display_description": payment_description(record.payment_type, record.semester),
            "period_covered": period_covered(covered),
        }

    def get_fee_structure(self, student_id: str, today: date) -> ServiceResult[Dict[str, Any]]:
        """Per-term and full-year fees for the student's stop."""
        try:
            academic_year = resolve_academic_period(today).academic_year
            _, route_id, boarding_stop = self._load_student(student_id)
            _, fees = self._load_fees(route_id, boarding_stop, academic_year)

            term_structure = {
                f"term_{term}": {
                    "period": term_period_description(term, academic_year),
                    "amount": fees.fee_for_term(term),
                    "receipt_color": receipt_color(SemesterPaymentType.TERM.value, term),
                }
                for term in ALL_TERMS
            }

            return ServiceResult.success({
                "academic_year": academic_year,
                "route_id": route_id,
                "boarding_stop": boarding_stop,
                "term_structure": term_structure,
                "full_year": {
                    "amount": fees.full_year_fee,
                    "savings": fees.savings,
                    "discount_percent": fees.discount_percent,
                    "receipt_color": receipt_color(SemesterPaymentType.FULL_YEAR.value),
                },
                "total_if_paid_separately": fees.total_term_fees,
            })

        except Exception as e:
            return self._handle_exception(e, "fetch fee structure", student_id)

    # -------------------------------------------------------------------------
    # Payment creation
    # -------------------------------------------------------------------------

    def _validate_request(self, request: SemesterPaymentCreate) -> None:
        missing = [
            name for name, value in (
                ("studentId", request.student_id),
                ("paymentType", request.payment_type),
                ("routeId", request.route_id),
                ("stopName", request.stop_name),
            )
            if not value
        ]
        if missing:
            raise MissingParameterError(
                "Student ID, payment type, route ID, and stop name are required",
                fields=missing,
            )

        if request.payment_type not in _PAYMENT_TYPES:
            raise InvalidPaymentRequestError(
                'Invalid payment type. Use "term" or "full_year"',
                field="paymentType",
            )

        if request.payment_type == SemesterPaymentType.TERM.value:
            if not request.term_number:
                raise MissingParameterError(
                    "Term number is required for term payments",
                    fields=["termNumber"],
                )
            if request.term_number not in ALL_TERMS:
                raise InvalidPaymentRequestError(
                    'Invalid term number. Use "1", "2", or "3"',
                    field="termNumber",
                )

        if request.payment_method and request.payment_method not in _PAYMENT_METHODS:
            raise InvalidPaymentRequestError(
                f"Invalid payment method. Use one of: {', '.join(_PAYMENT_METHODS)}",
                field="paymentMethod",
            )

    def create_payment(self, request: SemesterPaymentCreate, today: date) -> ServiceResult[Dict[str, Any]]:
        """
        Create a pending payment for a term or the full academic year.

        Steps: validate the request, confirm the student exists, check
        eligibility against existing payments, price it from the active
        fee rows, compute its validity window and persist it as pending.
        """
        try:
            self._validate_request(request)
            if self.students.find_by_id(request.student_id) is None:
                raise StudentOrRouteNotFoundError(request.student_id)

            payment_type = request.payment_type
            academic_year = resolve_academic_period(today).academic_year

            existing = self._load_records(request.student_id, request.route_id, academic_year)
            eligibility = validate_payment_eligibility(existing, payment_type, request.term_number)
            if not eligibility.is_valid:
                self._logger.info(
                    "Payment eligibility rejected",
                    extra={
                        "student_id": request.student_id,
                        "payment_type": payment_type,
                        "term_number": request.term_number,
                        "reason": eligibility.reason,
                    },
                )
                raise PaymentNotEligibleError(
                    eligibility.reason,
                    payment_type=payment_type,
                    term_number=request.term_number,
                )

            schedule, fees = self._load_fees(request.route_id, request.stop_name, academic_year)

            if payment_type == SemesterPaymentType.FULL_YEAR.value:
                amount = fees.full_year_fee
                covers_terms = list(ALL_TERMS)
                semester = "1"
                fee_id = schedule.fee_id_for_term("1")
            else:
                amount = fees.fee_for_term(request.term_number)
                covers_terms = [request.term_number]
                semester = request.term_number
                fee_id = schedule.fee_id_for_term(request.term_number)

            if amount <= 0:
                raise InvalidAmountError(amount)

            validity = calculate_validity(covers_terms, academic_year)

            if not fee_id:
                raise FeeScheduleNotFoundError(
                    route_id=request.route_id,
                    stop_name=request.stop_name,
                    academic_year=academic_year,
                    message=f"Fee record not found for term {request.term_number or 'full_year'}",
                )

            payment = SemesterPayment(
                student_id=request.student_id,
                semester_fee_id=fee_id,
                allocated_route_id=request.route_id,
                stop_name=request.stop_name,
                academic_year=academic_year,
                semester=semester,
                payment_type=SemesterPaymentType(payment_type),
                covers_terms=covers_terms,
                amount_paid=amount,
                payment_method=request.payment_method or self.default_payment_method,
                payment_status=PaymentStatus.PENDING,
                valid_from=validity.valid_from,
                valid_until=validity.valid_until,
            )
            payment = self.payments.create(payment)

            color = receipt_color(payment_type, request.term_number)
            self._logger.info(
                "Semester payment created",
                extra={
                    "payment_id": payment.id,
                    "student_id": request.student_id,
                    "payment_type": payment_type,
                    "covers_terms": covers_terms,
                    "amount": str(amount),
                    "academic_year": academic_year,
                },
            )

            return ServiceResult.success(
                {
                    "payment_id": payment.id,
                    "amount": amount,
                    "payment_type": payment_type,
                    "covers_terms": covers_terms,
                    "valid_from": validity.valid_from,
                    "valid_until": validity.valid_until,
                    "receipt_color": color,
                    "message": "Payment record created successfully",
                },
                message="Payment record created successfully",
            )

        except Exception as e:
            return self._handle_exception(e, "create payment", request.student_id)


__all__ = ["SemesterPaymentService"]
