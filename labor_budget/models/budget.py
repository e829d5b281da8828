"""Budget item model and hierarchical code ordering.

A BudgetItem is one line of the project's work breakdown structure. Codes are
hierarchical ("1", "1.2", "1.10") and must be ordered segment by segment with
numeric awareness, so that "1.2" sorts before "1.10".
"""

import re
from decimal import Decimal
from typing import List, Tuple, Union

from pydantic import Field, field_validator

from labor_budget.models.base import BaseDataModel, Number, to_decimal
from labor_budget.models.project import PROFISSIONAL, Role

_DIGITS = re.compile(r"^\d+$")

# (0, number, "") for numeric segments, (1, 0, text) otherwise
CodeSegment = Tuple[int, int, str]


def code_sort_key(code: str) -> Tuple[CodeSegment, ...]:
    """Build a sort key for a hierarchical budget code.

    Each dot-separated segment is compared numerically when it is made of
    digits and as case-insensitive text otherwise. Numeric segments sort
    before textual ones.

    Args:
        code: Budget code such as "2.1.10"

    Returns:
        Tuple usable as a ``sorted`` key

    Example:
        >>> sorted(["1.10", "1.2", "2", "1"], key=code_sort_key)
        ['1', '1.2', '1.10', '2']
    """
    segments: List[CodeSegment] = []
    for segment in code.strip().split("."):
        segment = segment.strip()
        if _DIGITS.match(segment):
            segments.append((0, int(segment), ""))
        else:
            segments.append((1, 0, segment.casefold()))
    return tuple(segments)


def compare_codes(left: str, right: str) -> int:
    """Compare two budget codes.

    Returns:
        -1, 0 or 1 as ``left`` sorts before, equal to or after ``right``
    """
    left_key = code_sort_key(left)
    right_key = code_sort_key(right)
    return (left_key > right_key) - (left_key < right_key)


class BudgetItem(BaseDataModel):
    """Represents a line of the project budget.

    Attributes:
        id: Unique identifier
        code: Hierarchical code (e.g. "1.2")
        description: Work description
        unit: Unit label (m2, m3, vb, ...)
        quantity: Total estimated quantity
        estimated_value: Total estimated monetary value
        estimated_prof_hours: Total estimated PROFISSIONAL hours
        estimated_serv_hours: Total estimated SERVENTE hours

    Example:
        >>> item = BudgetItem(
        ...     id="b-1",
        ...     code="1.1",
        ...     description="Alvenaria",
        ...     unit="m2",
        ...     quantity=Decimal("100"),
        ...     estimated_value=Decimal("5000.00"),
        ...     estimated_prof_hours=Decimal("50"),
        ...     estimated_serv_hours=Decimal("80"),
        ... )
        >>> item.total_estimated_hours
        Decimal('130')
    """

    id: str = Field(..., min_length=1, description="Budget item identifier")
    code: str = Field(..., min_length=1, description="Hierarchical code")
    description: str = Field(..., min_length=1, description="Work description")
    unit: str = Field("un", description="Unit label")
    quantity: Decimal = Field(Decimal("0"), ge=0, description="Estimated quantity")
    estimated_value: Decimal = Field(
        Decimal("0"), ge=0, description="Estimated monetary value"
    )
    estimated_prof_hours: Decimal = Field(
        Decimal("0"), ge=0, description="Estimated PROFISSIONAL hours"
    )
    estimated_serv_hours: Decimal = Field(
        Decimal("0"), ge=0, description="Estimated SERVENTE hours"
    )

    @field_validator("code", "description")
    @classmethod
    def validate_not_empty(cls, v: str, info) -> str:
        if not v or not v.strip():
            raise ValueError(f"{info.field_name} cannot be empty or whitespace")
        return v.strip()

    @field_validator("unit")
    @classmethod
    def default_unit(cls, v: str) -> str:
        return v.strip() or "un"

    @field_validator(
        "quantity",
        "estimated_value",
        "estimated_prof_hours",
        "estimated_serv_hours",
        mode="before",
    )
    @classmethod
    def convert_to_decimal(cls, v: Number) -> Decimal:
        return to_decimal(v)

    @property
    def total_estimated_hours(self) -> Decimal:
        """Estimated hours of both roles combined."""
        return self.estimated_prof_hours + self.estimated_serv_hours

    def estimated_hours_for(self, role: Role) -> Decimal:
        """Return the estimated hour budget of the given role."""
        if role == PROFISSIONAL:
            return self.estimated_prof_hours
        return self.estimated_serv_hours


def sort_budget(items: Union[List[BudgetItem], Tuple[BudgetItem, ...]]) -> Tuple[BudgetItem, ...]:
    """Return budget items ordered by hierarchical code."""
    return tuple(sorted(items, key=lambda item: code_sort_key(item.code)))
