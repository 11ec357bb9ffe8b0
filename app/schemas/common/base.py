"""
Base schema classes with common fields and configurations.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Annotated, Union

from pydantic import BaseModel, ConfigDict, PlainSerializer

__all__ = [
    "BaseSchema",
    "BaseCreateSchema",
    "BaseResponseSchema",
    "Money",
]


def _money_to_json(value: Decimal) -> Union[int, float]:
    # Whole amounts render as integers, e.g. 2850 rather than "2850.00"
    if value == value.to_integral_value():
        return int(value)
    return float(value)


Money = Annotated[Decimal, PlainSerializer(_money_to_json, when_used="json")]


class BaseSchema(BaseModel):
    """
    Base schema with common Pydantic configuration.

    All application-facing schemas should inherit from this to ensure
    consistent behaviour (attribute loading, whitespace stripping, etc.).
    """

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        # Enum members are rendered by value in responses
        use_enum_values=True,
        str_strip_whitespace=True,
        validate_assignment=True,
    )


class BaseCreateSchema(BaseSchema):
    """
    Base schema for create operations.

    Fields are usually declared Optional so that missing values are
    reported by the service layer with a domain error instead of a
    generic 422.
    """
    pass


class BaseResponseSchema(BaseSchema):
    """Base schema for API responses."""
    pass
