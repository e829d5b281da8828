"""Team roster model.

A Collaborator is a worker of the construction site. The role decides both
the hourly rate and the budget-hour bucket the worker's hours are charged to.
"""

import datetime as dt
from typing import Optional

from pydantic import Field, field_validator, model_validator

from labor_budget.models.base import BaseDataModel
from labor_budget.models.project import Role


class Collaborator(BaseDataModel):
    """Represents a team member.

    Attributes:
        id: Unique identifier
        name: Display name
        role: PROFISSIONAL or SERVENTE (immutable once created)
        start_date: First day on site
        end_date: Last day on site, optional

    Example:
        >>> worker = Collaborator(
        ...     id="c-1",
        ...     name="José Almeida",
        ...     role="PROFISSIONAL",
        ...     start_date=dt.date(2024, 1, 8),
        ... )
        >>> worker.is_active_on(dt.date(2024, 2, 1))
        True
    """

    id: str = Field(..., min_length=1, description="Collaborator identifier")
    name: str = Field(..., min_length=1, description="Display name")
    role: Role = Field(..., description="Worker role")
    start_date: dt.date = Field(..., description="Start date")
    end_date: Optional[dt.date] = Field(None, description="End date (optional)")

    @field_validator("name")
    @classmethod
    def validate_not_empty(cls, v: str, info) -> str:
        if not v or not v.strip():
            raise ValueError(f"{info.field_name} cannot be empty or whitespace")
        return v.strip()

    @model_validator(mode="after")
    def validate_date_range(self) -> "Collaborator":
        """Validate that the end date does not precede the start date."""
        if self.end_date is not None and self.end_date < self.start_date:
            raise ValueError(
                f"end_date ({self.end_date}) must not be before "
                f"start_date ({self.start_date})"
            )
        return self

    def is_active_on(self, date: dt.date) -> bool:
        """Check whether the collaborator was on site at the given date."""
        if date < self.start_date:
            return False
        return self.end_date is None or date <= self.end_date
