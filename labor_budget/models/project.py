"""Project data models for the labor budget tracker.

This module defines the Project record (one per construction site) and the
ProjectRates value object holding the hourly rate of each worker role.
"""

import datetime as dt
from dataclasses import dataclass
from decimal import Decimal
from typing import Literal, Optional, Tuple

from pydantic import Field, field_validator

from labor_budget.models.base import BaseDataModel, Number, to_decimal

Role = Literal["PROFISSIONAL", "SERVENTE"]

PROFISSIONAL: Role = "PROFISSIONAL"
SERVENTE: Role = "SERVENTE"
ROLES: Tuple[Role, ...] = (PROFISSIONAL, SERVENTE)

DEFAULT_RATE_PROF = Decimal("50")
DEFAULT_RATE_SERV = Decimal("35")


@dataclass(frozen=True)
class ProjectRates:
    """Hourly rates used to turn hours into money.

    Attributes:
        prof: Hourly rate of a PROFISSIONAL (skilled worker)
        serv: Hourly rate of a SERVENTE (laborer)

    Example:
        >>> rates = ProjectRates(prof=Decimal("50"), serv=Decimal("35"))
        >>> rates.for_role("SERVENTE")
        Decimal('35')
    """

    prof: Decimal = DEFAULT_RATE_PROF
    serv: Decimal = DEFAULT_RATE_SERV

    def for_role(self, role: Role) -> Decimal:
        """Return the hourly rate of the given role."""
        return self.prof if role == PROFISSIONAL else self.serv


class Project(BaseDataModel):
    """Represents the construction project being tracked.

    Attributes:
        name: Project (site) name
        created_at: When the project was set up
        hourly_rate_prof: Hourly rate for PROFISSIONAL hours, optional
        hourly_rate_serv: Hourly rate for SERVENTE hours, optional

    Example:
        >>> project = Project(
        ...     name="Residencial Jardim",
        ...     created_at=dt.datetime(2024, 1, 2, 8, 0),
        ...     hourly_rate_prof=Decimal("55.00"),
        ...     hourly_rate_serv=Decimal("38.00"),
        ... )
        >>> project.rates().prof
        Decimal('55.00')
    """

    name: str = Field(..., min_length=1, description="Project name")
    created_at: dt.datetime = Field(
        default_factory=dt.datetime.now, description="Creation timestamp"
    )
    hourly_rate_prof: Optional[Decimal] = Field(
        None, ge=0, description="Hourly rate for skilled workers"
    )
    hourly_rate_serv: Optional[Decimal] = Field(
        None, ge=0, description="Hourly rate for laborers"
    )

    @field_validator("name")
    @classmethod
    def validate_not_empty(cls, v: str, info) -> str:
        """Validate that the name is not empty or whitespace only.

        Raises:
            ValueError: If the value is empty or whitespace only
        """
        if not v or not v.strip():
            raise ValueError(f"{info.field_name} cannot be empty or whitespace")
        return v.strip()

    @field_validator("hourly_rate_prof", "hourly_rate_serv", mode="before")
    @classmethod
    def convert_to_decimal(cls, v: Optional[Number]) -> Optional[Decimal]:
        """Convert rates to Decimal, keeping absent rates absent."""
        if v is None or v == "":
            return None
        return to_decimal(v)

    def rates(
        self,
        default_prof: Decimal = DEFAULT_RATE_PROF,
        default_serv: Decimal = DEFAULT_RATE_SERV,
    ) -> ProjectRates:
        """Resolve the effective hourly rates of this project.

        A rate that is absent or zero falls back to the default.

        Args:
            default_prof: Fallback PROFISSIONAL rate
            default_serv: Fallback SERVENTE rate

        Returns:
            ProjectRates with both rates filled in
        """
        return ProjectRates(
            prof=self.hourly_rate_prof or default_prof,
            serv=self.hourly_rate_serv or default_serv,
        )


def resolve_rates(
    project: Optional[Project],
    default_prof: Decimal = DEFAULT_RATE_PROF,
    default_serv: Decimal = DEFAULT_RATE_SERV,
) -> ProjectRates:
    """Resolve hourly rates, falling back to defaults before project setup.

    Example:
        >>> resolve_rates(None)
        ProjectRates(prof=Decimal('50'), serv=Decimal('35'))
    """
    if project is None:
        return ProjectRates(prof=default_prof, serv=default_serv)
    return project.rates(default_prof=default_prof, default_serv=default_serv)
