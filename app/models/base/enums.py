"""
Database enums mirroring schema enums.

Provides SQLAlchemy-compatible enum definitions that match
the Pydantic schema enums for consistency.
"""

import enum


class Term(str, enum.Enum):
    """Academic term within a transport year."""
    TERM_1 = "1"
    TERM_2 = "2"
    TERM_3 = "3"


class SemesterPaymentType(str, enum.Enum):
    """What a semester payment covers."""
    TERM = "term"
    FULL_YEAR = "full_year"


class PaymentStatus(str, enum.Enum):
    """Semester payment lifecycle status."""
    PENDING = "pending"
    CONFIRMED = "confirmed"
    FAILED = "failed"


class PaymentMethod(str, enum.Enum):
    """Payment method used by the student."""
    UPI = "upi"
    CARD = "card"
    NET_BANKING = "net_banking"
    CASH = "cash"
    WALLET = "wallet"


class ReceiptColor(str, enum.Enum):
    """Printed pass colour per coverage."""
    WHITE = "white"
    BLUE = "blue"
    YELLOW = "yellow"
    GREEN = "green"


ALL_TERMS = (Term.TERM_1.value, Term.TERM_2.value, Term.TERM_3.value)
