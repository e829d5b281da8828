"""Base model for all entity records of the labor budget tracker.

Entities are immutable value records: the analytics engine only reads them
and every change made by the store produces a new instance through
``model_copy``.
"""

from decimal import Decimal
from typing import Union

from pydantic import BaseModel, ConfigDict

Number = Union[str, int, float, Decimal]


class BaseDataModel(BaseModel):
    """Base class for all data models.

    Provides common configuration for:
    - Validation with type coercion at the boundary
    - Immutability (frozen models)
    - Rejection of unknown fields

    Example:
        >>> class Crew(BaseDataModel):
        ...     name: str
        ...     size: int
        >>> crew = Crew(name="Alvenaria", size=4)
        >>> crew.model_dump()
        {'name': 'Alvenaria', 'size': 4}
    """

    model_config = ConfigDict(
        # Allow arbitrary types like Decimal, date
        arbitrary_types_allowed=True,
        strict=False,
        extra="forbid",
        # Records never change after creation
        frozen=True,
    )


def to_decimal(value: Number) -> Decimal:
    """Convert a numeric value to Decimal for precision.

    Floats go through ``str`` so that ``0.1`` becomes ``Decimal("0.1")``.

    Args:
        value: The value to convert

    Returns:
        The value as a Decimal

    Raises:
        ValueError: If the value cannot be converted to Decimal
    """
    if isinstance(value, Decimal):
        result = value
    elif value is None or (isinstance(value, str) and not value.strip()):
        raise ValueError("Cannot convert empty value to Decimal")
    else:
        try:
            result = Decimal(str(value).strip())
        except (ArithmeticError, ValueError, TypeError) as e:
            raise ValueError(f"Cannot convert {value} to Decimal: {e}")
    if not result.is_finite():
        raise ValueError(f"Cannot convert {value} to a finite Decimal")
    return result
