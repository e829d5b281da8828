"""Aggregators module for multi-month series.

This module composes the monthly calculators across the project timeline.
"""

from labor_budget.aggregators.evolution_series import (
    EvolutionPoint,
    EvolutionSeriesBuilder,
)

__all__ = [
    "EvolutionPoint",
    "EvolutionSeriesBuilder",
]
