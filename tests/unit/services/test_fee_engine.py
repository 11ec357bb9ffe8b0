"""
Fee engine tests: schedules, fee computation, payment classification and options
"""
from decimal import Decimal, ROUND_HALF_UP
from types import SimpleNamespace

import pytest

from app.core.exceptions import FeeScheduleNotFoundError
from app.services.transport.fee_engine import (
    PaymentRecord,
    TermFeeSchedule,
    build_fee_schedule,
    build_payment_options,
    classify_payments,
    compute_fees,
    term_statuses,
)

YEAR = "2025-26"


def make_schedule(term1=1000, term2=1000, term3=1000, discount="5"):
    return TermFeeSchedule(
        academic_year=YEAR,
        route_id="route-1",
        stop_name="Clock Tower",
        term1_fee=Decimal(str(term1)),
        term2_fee=Decimal(str(term2)),
        term3_fee=Decimal(str(term3)),
        full_year_discount_percent=None if discount is None else Decimal(discount),
    )


def make_record(payment_type="term", status="confirmed", semester="1", covers_terms=None):
    if covers_terms is None:
        covers_terms = ["1", "2", "3"] if payment_type == "full_year" else [semester]
    return PaymentRecord(
        id="pay-1",
        student_id="student-1",
        route_id="route-1",
        academic_year=YEAR,
        semester=semester,
        payment_type=payment_type,
        covers_terms=covers_terms,
        status=status,
    )


def fee_row(term, fee, discount=Decimal("5"), row_id=None):
    return SimpleNamespace(
        id=row_id or f"fee-{term}",
        semester=term,
        semester_fee=Decimal(str(fee)),
        full_year_discount_percent=discount,
    )


class TestBuildFeeSchedule:

    def test_rows_fold_into_terms(self):
        schedule = build_fee_schedule(
            [fee_row("1", 1200), fee_row("2", 1100), fee_row("3", 900)],
            YEAR, "route-1", "Clock Tower",
        )

        assert schedule.term1_fee == Decimal("1200")
        assert schedule.term2_fee == Decimal("1100")
        assert schedule.term3_fee == Decimal("900")
        assert schedule.full_year_discount_percent == Decimal("5")
        assert schedule.fee_id_for_term("2") == "fee-2"

    def test_missing_term_costs_zero(self):
        schedule = build_fee_schedule([fee_row("2", 1100)], YEAR, "route-1", "Clock Tower")

        assert schedule.term1_fee == Decimal("0")
        assert schedule.term3_fee == Decimal("0")
        assert schedule.fee_id_for_term("1") is None

    def test_discount_comes_from_first_row(self):
        schedule = build_fee_schedule(
            [fee_row("1", 1000, Decimal("10")), fee_row("2", 1000, Decimal("3"))],
            YEAR, "route-1", "Clock Tower",
        )
        assert schedule.full_year_discount_percent == Decimal("10")

    def test_empty_rows_raise_not_found(self):
        with pytest.raises(FeeScheduleNotFoundError) as exc_info:
            build_fee_schedule([], YEAR, "route-1", "Clock Tower")

        assert exc_info.value.status_code == 404
        assert exc_info.value.message == "Fee structure not found"


class TestComputeFees:

    def test_standard_three_term_year(self):
        fees = compute_fees(make_schedule(1000, 1000, 1000, "5"))

        assert fees.total_term_fees == Decimal("3000")
        assert fees.full_year_fee == Decimal("2850")
        assert fees.savings == Decimal("150")

    @pytest.mark.parametrize("term1,term2,term3,discount", [
        (1000, 1000, 1000, "5"),
        (333, 333, 334, "7.5"),
        ("1234.50", 0, 0, "5"),
        (999, 999, 999, "0"),
        (100, 100, 100, "100"),
        (1555, 1445, 1250, "12.5"),
    ])
    def test_full_year_fee_is_rounded_discount_of_total(self, term1, term2, term3, discount):
        fees = compute_fees(make_schedule(term1, term2, term3, discount))

        expected = (fees.total_term_fees * (1 - Decimal(discount) / 100)).quantize(
            Decimal("1"), rounding=ROUND_HALF_UP
        )
        assert fees.full_year_fee == expected
        assert fees.full_year_fee <= fees.total_term_fees

    def test_half_unit_rounds_up(self):
        # 1234.50 * 0.95 = 1172.775
        fees = compute_fees(make_schedule("1234.50", 0, 0, "5"))
        assert fees.full_year_fee == Decimal("1173")

    def test_missing_discount_uses_default(self):
        fees = compute_fees(make_schedule(discount=None))

        assert fees.discount_percent == Decimal("5")
        assert fees.full_year_fee == Decimal("2850")

    def test_zero_discount_is_honoured(self):
        fees = compute_fees(make_schedule(discount="0"))

        assert fees.discount_percent == Decimal("0")
        assert fees.full_year_fee == Decimal("3000")

    def test_custom_default_discount(self):
        fees = compute_fees(make_schedule(discount=None), default_discount=Decimal("10"))
        assert fees.full_year_fee == Decimal("2700")

    def test_computation_is_repeatable(self):
        schedule = make_schedule(1250, 980, 1130, "6")
        assert compute_fees(schedule) == compute_fees(schedule)


class TestClassifyPayments:

    def test_no_payments(self):
        state = classify_payments([])

        assert state.paid_terms == set()
        assert not state.has_full_year_payment
        assert not state.is_term_paid("1")

    def test_pending_full_year_marks_every_term(self):
        state = classify_payments([make_record("full_year", "pending")])

        assert state.has_full_year_payment
        assert state.full_year_payment_status == "pending"
        assert state.paid_terms == {"1", "2", "3"}
        assert state.pending_terms == {"1", "2", "3"}
        assert state.confirmed_terms == set()

    def test_term_records_split_by_status(self):
        state = classify_payments([
            make_record("term", "confirmed", "1"),
            make_record("term", "pending", "2"),
        ])

        assert state.paid_terms == {"1", "2"}
        assert state.confirmed_terms == {"1"}
        assert state.pending_terms == {"2"}
        assert state.is_term_paid("1")
        assert not state.is_term_paid("3")

    def test_empty_coverage_falls_back_to_semester(self):
        state = classify_payments([make_record("term", "confirmed", "3", covers_terms=[])])
        assert state.paid_terms == {"3"}

    def test_failed_payments_are_ignored(self):
        state = classify_payments([
            make_record("full_year", "failed"),
            make_record("term", "failed", "2"),
        ])

        assert state.paid_terms == set()
        assert not state.has_full_year_payment


class TestBuildPaymentOptions:

    def options_for(self, records=(), current_term="2", **fee_kwargs):
        fees = compute_fees(make_schedule(**fee_kwargs))
        state = classify_payments(records)
        return build_payment_options(fees, state, current_term, YEAR)

    def test_fresh_student_sees_all_options(self):
        options = self.options_for()

        assert [option.term for option in options] == ["1", "2", "3", "full_year"]
        assert all(option.is_available for option in options)
        assert all(option.paid_reason is None for option in options)

        by_term = {option.term: option for option in options}
        assert by_term["2"].is_recommended
        assert not by_term["1"].is_recommended
        assert by_term["2"].period == "October 2025 – January 2026"
        assert by_term["2"].receipt_color == "blue"

        full_year = by_term["full_year"]
        assert full_year.is_recommended
        assert full_year.amount == Decimal("2850")
        assert full_year.savings == Decimal("150")
        assert full_year.covers_terms == ["1", "2", "3"]
        assert full_year.receipt_color == "green"
        assert full_year.period == "June 2025 – May 2026"

    def test_unoffered_term_is_left_out(self):
        options = self.options_for(term1=0)

        assert [option.term for option in options] == ["2", "3", "full_year"]
        assert options[-1].amount == Decimal("1900")

    def test_zero_fees_give_no_options(self):
        assert self.options_for(term1=0, term2=0, term3=0) == []

    def test_pending_full_year_covers_terms(self):
        options = self.options_for([make_record("full_year", "pending")])
        by_term = {option.term: option for option in options}

        for term in ("1", "2", "3"):
            assert by_term[term].is_paid
            assert not by_term[term].is_available
            assert not by_term[term].is_recommended
            assert by_term[term].paid_reason == "Covered by Full Year Payment (Payment Pending)"

        assert by_term["full_year"].is_paid
        assert not by_term["full_year"].is_available
        assert by_term["full_year"].paid_reason == "Full Year Payment Pending"

    def test_confirmed_full_year(self):
        options = self.options_for([make_record("full_year", "confirmed")])
        by_term = {option.term: option for option in options}

        assert by_term["1"].paid_reason == "Covered by Full Year Payment (Paid)"
        assert by_term["full_year"].paid_reason == "Already Paid"

    def test_confirmed_term_blocks_full_year(self):
        options = self.options_for([make_record("term", "confirmed", "1")])
        by_term = {option.term: option for option in options}

        assert by_term["1"].is_paid
        assert by_term["1"].paid_reason == "Already Paid"
        assert by_term["2"].is_available
        assert by_term["2"].is_recommended
        assert not by_term["full_year"].is_available
        assert not by_term["full_year"].is_paid
        assert by_term["full_year"].paid_reason == "Individual term payments already made"

    def test_pending_term_reports_initiated(self):
        options = self.options_for([
            make_record("term", "confirmed", "1"),
            make_record("term", "pending", "2"),
        ])
        by_term = {option.term: option for option in options}

        assert by_term["2"].paid_reason == "Payment Pending"
        assert not by_term["2"].is_recommended
        assert by_term["full_year"].paid_reason == "Individual term payments already initiated"

    def test_to_dict_adds_savings_only_for_full_year(self):
        options = self.options_for()

        assert "savings" not in options[0].to_dict()
        full_year = options[-1].to_dict()
        assert full_year["savings"] == Decimal("150")
        assert full_year["discount_percent"] == Decimal("5")

    def test_term_statuses_summary(self):
        options = self.options_for([make_record("term", "confirmed", "3")])
        statuses = term_statuses(options)

        assert set(statuses) == {"1", "2", "3"}
        assert statuses["3"] == {
            "is_paid": True,
            "amount": Decimal("1000"),
            "paid_reason": "Already Paid",
        }
        assert statuses["1"]["is_paid"] is False
