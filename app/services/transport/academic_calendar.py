"""
Academic calendar helpers for the 3-term transport year.

The academic year runs June to May and is written "YYYY-YY":
- Term 1: June - September
- Term 2: October - January
- Term 3: February - May
"""

from dataclasses import dataclass
from datetime import date
from typing import Iterable, Optional, Sequence, Tuple

from app.core.exceptions import InvalidAcademicYearError
from app.models.base.enums import ALL_TERMS, ReceiptColor, SemesterPaymentType


@dataclass(frozen=True)
class AcademicPeriod:
    """Academic year label plus the term a given date falls in."""

    academic_year: str
    current_term: str


@dataclass(frozen=True)
class ValidityWindow:
    """Dates during which a transport pass is honoured."""

    valid_from: date
    valid_until: date

    def contains(self, day: date) -> bool:
        return self.valid_from <= day <= self.valid_until


def resolve_academic_period(today: date) -> AcademicPeriod:
    """
    Resolve the academic year and current term for a calendar date.

    June starts a new academic year; January to May belong to the
    year that started the previous June.
    """
    month = today.month
    year = today.year

    if month >= 6:
        academic_year = f"{year}-{str(year + 1)[-2:]}"
    else:
        academic_year = f"{year - 1}-{str(year)[-2:]}"

    if 6 <= month <= 9:
        current_term = "1"
    elif month >= 10 or month <= 1:
        current_term = "2"
    else:
        current_term = "3"

    return AcademicPeriod(academic_year=academic_year, current_term=current_term)


def split_academic_year(academic_year: str) -> Tuple[int, int]:
    """
    Split "YYYY-YY" (or "YYYY-YYYY") into four-digit start and end years.

    A two-digit suffix takes the start year's century, or the next one
    when the suffix wraps past 99.

    Raises:
        InvalidAcademicYearError: If the label cannot be parsed
    """
    if not academic_year or "-" not in academic_year:
        raise InvalidAcademicYearError(academic_year)

    start_str, _, end_str = academic_year.partition("-")
    if (
        len(start_str) != 4
        or not start_str.isdigit()
        or len(end_str) not in (2, 4)
        or not end_str.isdigit()
    ):
        raise InvalidAcademicYearError(academic_year)

    start_year = int(start_str)
    if len(end_str) == 2:
        end_year = (start_year // 100) * 100 + int(end_str)
        # "1999-00" crosses a century
        if end_year < start_year:
            end_year += 100
    else:
        end_year = int(end_str)

    return start_year, end_year


def term_period_description(term: str, academic_year: str) -> str:
    """Human-readable month range of a term, e.g. "October 2025 – January 2026"."""
    start_year, end_year = split_academic_year(academic_year)

    if term == "1":
        return f"June – September {start_year}"
    if term == "2":
        return f"October {start_year} – January {end_year}"
    if term == "3":
        return f"February – May {end_year}"
    return "Unknown Term"


def full_year_period(academic_year: str) -> str:
    start_year, end_year = split_academic_year(academic_year)
    return f"June {start_year} – May {end_year}"


def calculate_validity(covers_terms: Sequence[str], academic_year: str) -> ValidityWindow:
    """
    Compute the validity window for the terms a payment covers.

    Single-term passes stay valid one week into the following term.
    A full-year pass (or any coverage that is not a single known term)
    spans June 1 to May 31.
    """
    start_year, end_year = split_academic_year(academic_year)

    full_year = ValidityWindow(date(start_year, 6, 1), date(end_year, 5, 31))
    if len(covers_terms) == 3 or not covers_terms:
        return full_year

    term = covers_terms[0]
    if term == "1":
        return ValidityWindow(date(start_year, 6, 1), date(start_year, 10, 7))
    if term == "2":
        return ValidityWindow(date(start_year, 10, 1), date(end_year, 2, 7))
    if term == "3":
        return ValidityWindow(date(end_year, 2, 1), date(end_year, 6, 7))
    return full_year


def receipt_color(payment_type: str, term: Optional[str] = None) -> str:
    """Printed pass colour: green for full year, otherwise by term."""
    if payment_type == SemesterPaymentType.FULL_YEAR.value:
        return ReceiptColor.GREEN.value

    colors = {
        "1": ReceiptColor.WHITE,
        "2": ReceiptColor.BLUE,
        "3": ReceiptColor.YELLOW,
    }
    return colors.get(term, ReceiptColor.WHITE).value


def payment_description(payment_type: str, semester: Optional[str]) -> str:
    if payment_type == SemesterPaymentType.FULL_YEAR.value:
        return "Full Academic Year Payment"
    return f"Term {semester} Payment"


def period_covered(terms: Iterable[str]) -> str:
    terms = list(terms)
    if len(terms) == len(ALL_TERMS):
        return "Full Academic Year"
    return ", ".join(f"Term {term}" for term in terms)


__all__ = [
    "AcademicPeriod",
    "ValidityWindow",
    "resolve_academic_period",
    "split_academic_year",
    "term_period_description",
    "full_year_period",
    "calculate_validity",
    "receipt_color",
    "payment_description",
    "period_covered",
]
