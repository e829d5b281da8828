"""Time-series records: daily hour logs and monthly plans and measurements.

This module defines the four record types that reference the budget:
- DailyLogEntry: hours a collaborator spent on a budget item on one day
- MonthlyPlan: projected completion percentage of an item for a month
- QuantitativeLog: physical quantity of an item executed in a month
- FinancialRecord: payroll figures reported by HR for a month
"""

import datetime as dt
import re
from decimal import Decimal
from typing import Optional

from pydantic import Field, field_validator

from labor_budget.models.base import BaseDataModel, Number, to_decimal

MONTH_PATTERN = re.compile(r"^\d{4}-(0[1-9]|1[0-2])$")


def month_of(date: dt.date) -> str:
    """Truncate a date to its "YYYY-MM" month key.

    Example:
        >>> month_of(dt.date(2024, 1, 15))
        '2024-01'
    """
    return f"{date.year:04d}-{date.month:02d}"


def validate_month(value: str) -> str:
    """Validate a "YYYY-MM" month key.

    Raises:
        ValueError: If the value is not a valid month key
    """
    value = value.strip()
    if not MONTH_PATTERN.match(value):
        raise ValueError(f"Invalid month '{value}'. Expected YYYY-MM")
    return value


class DailyLogEntry(BaseDataModel):
    """Hours logged by one collaborator on one budget item on one day.

    Attributes:
        id: Unique identifier
        date: Day of work
        collaborator_id: Reference to the Collaborator
        budget_item_id: Reference to the BudgetItem
        hours: Hours logged (positive)
        justification: Reason for exceeding the item's hour budget, if any
    """

    id: str = Field(..., min_length=1)
    date: dt.date
    collaborator_id: str = Field(..., min_length=1)
    budget_item_id: str = Field(..., min_length=1)
    hours: Decimal = Field(..., gt=0, description="Hours logged")
    justification: Optional[str] = Field(None, description="Over-budget reason")

    @field_validator("hours", mode="before")
    @classmethod
    def convert_to_decimal(cls, v: Number) -> Decimal:
        return to_decimal(v)

    @property
    def month(self) -> str:
        return month_of(self.date)


class MonthlyPlan(BaseDataModel):
    """Projected completion percentage of a budget item for one month.

    The percentage of a single month lies in [0, 100]; the sum over all
    months of an item is not bounded.
    """

    id: str = Field(..., min_length=1)
    month: str
    budget_item_id: str = Field(..., min_length=1)
    projected_percentage: Decimal = Field(..., ge=0, le=100)

    @field_validator("month")
    @classmethod
    def validate_month_format(cls, v: str) -> str:
        return validate_month(v)

    @field_validator("projected_percentage", mode="before")
    @classmethod
    def convert_to_decimal(cls, v: Number) -> Decimal:
        return to_decimal(v)


class QuantitativeLog(BaseDataModel):
    """Physical quantity of a budget item actually executed in one month."""

    id: str = Field(..., min_length=1)
    month: str
    budget_item_id: str = Field(..., min_length=1)
    executed_quantity: Decimal = Field(..., ge=0)

    @field_validator("month")
    @classmethod
    def validate_month_format(cls, v: str) -> str:
        return validate_month(v)

    @field_validator("executed_quantity", mode="before")
    @classmethod
    def convert_to_decimal(cls, v: Number) -> Decimal:
        return to_decimal(v)


class FinancialRecord(BaseDataModel):
    """Payroll figures reported by HR for one month.

    Attributes:
        id: Unique identifier
        month: Month key ("YYYY-MM")
        hr_hours: Hours reported by HR
        payroll_cost: Payroll cost (the "actual" labor cost)
        indirect_cost: Indirect costs of the month
    """

    id: str = Field(..., min_length=1)
    month: str
    hr_hours: Decimal = Field(Decimal("0"), ge=0)
    payroll_cost: Decimal = Field(Decimal("0"), ge=0)
    indirect_cost: Decimal = Field(Decimal("0"), ge=0)

    @field_validator("month")
    @classmethod
    def validate_month_format(cls, v: str) -> str:
        return validate_month(v)

    @field_validator("hr_hours", "payroll_cost", "indirect_cost", mode="before")
    @classmethod
    def convert_to_decimal(cls, v: Number) -> Decimal:
        return to_decimal(v)
