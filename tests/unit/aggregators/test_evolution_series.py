"""Unit tests for the evolution series builder."""

import datetime as dt
from decimal import Decimal

import pytest

from labor_budget.aggregators import EvolutionSeriesBuilder
from labor_budget.models import (
    DailyLogEntry,
    FinancialRecord,
    MonthlyPlan,
    ProjectRates,
    ProjectSnapshot,
)


@pytest.fixture
def three_month_snapshot(scenario_snapshot):
    """Reference snapshot extended with a February plan and a March payroll."""
    return scenario_snapshot.model_copy(
        update={
            "plans": scenario_snapshot.plans
            + (
                MonthlyPlan(
                    id="p-2", month="2024-02", budget_item_id="b-1", projected_percentage=25
                ),
            ),
            "logs": scenario_snapshot.logs
            + (
                DailyLogEntry(
                    id="l-9",
                    date=dt.date(2024, 2, 5),
                    collaborator_id="c-serv",
                    budget_item_id="b-2",
                    hours=Decimal("4"),
                ),
            ),
            "financial_records": scenario_snapshot.financial_records
            + (FinancialRecord(id="f-3", month="2024-03", payroll_cost=Decimal("500")),),
        }
    )


class TestCollectMonths:
    def test_months_from_all_sources_sorted(self, three_month_snapshot):
        builder = EvolutionSeriesBuilder(three_month_snapshot)
        assert builder.collect_months() == ["2024-01", "2024-02", "2024-03"]

    def test_year_boundary_sorts_chronologically(self):
        snapshot = ProjectSnapshot(
            financial_records=(
                FinancialRecord(id="a", month="2025-01"),
                FinancialRecord(id="b", month="2024-12"),
            )
        )
        assert EvolutionSeriesBuilder(snapshot).collect_months() == ["2024-12", "2025-01"]

    def test_quantitative_logs_do_not_add_months(self, scenario_snapshot):
        builder = EvolutionSeriesBuilder(scenario_snapshot)
        assert builder.collect_months() == ["2024-01"]


class TestBuild:
    """Test monthly and cumulative values."""

    def test_reference_month(self, scenario_snapshot):
        [point] = EvolutionSeriesBuilder(scenario_snapshot).build()

        assert point.month == "2024-01"
        assert point.month_predicted_cost == Decimal("2650")
        assert point.month_measured_cost == Decimal("1025")
        assert point.month_payroll_cost == Decimal("1100")
        assert point.month_predicted_hours == Decimal("65")
        assert point.month_measured_hours == Decimal("25")
        assert point.acc_predicted_cost == Decimal("2650")

    def test_accumulators_carry_forward(self, three_month_snapshot):
        points = EvolutionSeriesBuilder(three_month_snapshot).build()

        feb, mar = points[1], points[2]
        # 25% of item 1.1: 12.5h x 50 + 20h x 35
        assert feb.month_predicted_cost == Decimal("1325")
        assert feb.month_measured_cost == Decimal("140")
        assert feb.acc_predicted_cost == Decimal("3975")
        assert feb.acc_measured_hours == Decimal("29")
        assert mar.month_predicted_cost == Decimal("0")
        assert mar.acc_predicted_cost == Decimal("3975")
        assert mar.acc_payroll_cost == Decimal("1600")

    def test_accumulators_never_decrease(self, three_month_snapshot):
        points = EvolutionSeriesBuilder(three_month_snapshot).build()
        fields = [
            "acc_predicted_cost",
            "acc_measured_cost",
            "acc_payroll_cost",
            "acc_predicted_hours",
            "acc_measured_hours",
        ]
        for previous, current in zip(points, points[1:]):
            for field in fields:
                assert getattr(current, field) >= getattr(previous, field)

    def test_explicit_rates(self, scenario_snapshot):
        [point] = EvolutionSeriesBuilder(
            scenario_snapshot, ProjectRates(prof=Decimal("10"), serv=Decimal("10"))
        ).build()
        assert point.month_measured_cost == Decimal("250")

    def test_empty_snapshot(self):
        assert EvolutionSeriesBuilder(ProjectSnapshot()).build() == []

    def test_rebuild_is_identical(self, three_month_snapshot):
        builder = EvolutionSeriesBuilder(three_month_snapshot)
        assert builder.build() == builder.build()


class TestToDataFrame:
    def test_dataframe_indexed_by_month(self, three_month_snapshot):
        builder = EvolutionSeriesBuilder(three_month_snapshot)
        df = builder.to_dataframe(builder.build())

        assert list(df.index) == ["2024-01", "2024-02", "2024-03"]
        assert df.loc["2024-02", "acc_predicted_cost"] == pytest.approx(3975.0)
        assert "month" not in df.columns

    def test_empty_series(self):
        builder = EvolutionSeriesBuilder(ProjectSnapshot())
        assert builder.to_dataframe([]).empty
