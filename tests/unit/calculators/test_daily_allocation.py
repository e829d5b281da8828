"""Unit tests for daily allocation tracking and the entry admission gate.

This module tests:
- Daily hour ceiling per collaborator
- Lifetime item/role consumption and over-budget detection
- Justification requirement for over-budget entries
- Entry construction and the per-day collaborator summary
"""

import datetime as dt
from decimal import Decimal

import pytest

from labor_budget.calculators.daily_allocation import (
    AllocationRejectedError,
    DailyAllocationTracker,
    RejectionReason,
)
from labor_budget.models import DailyLogEntry, ProjectSnapshot

DAY = dt.date(2024, 1, 10)


def _entry(entry_id, collaborator_id, hours, date=DAY, item_id="b-1", justification=None):
    return DailyLogEntry(
        id=entry_id,
        date=date,
        collaborator_id=collaborator_id,
        budget_item_id=item_id,
        hours=Decimal(hours),
        justification=justification,
    )


@pytest.fixture
def six_hours_logged(prof_worker, serv_worker, masonry_item):
    """Snapshot where the PROFISSIONAL already logged 6h on DAY."""
    return ProjectSnapshot(
        team=(prof_worker, serv_worker),
        budget=(masonry_item,),
        logs=(_entry("l-1", "c-prof", "6"),),
    )


class TestDailyCeiling:
    """Test the hard daily hour limit."""

    def test_hours_logged_for_exact_date(self, scenario_snapshot):
        tracker = DailyAllocationTracker(scenario_snapshot)
        assert tracker.hours_logged_for("c-prof", DAY) == Decimal("6")
        assert tracker.hours_logged_for("c-prof", dt.date(2024, 1, 12)) == Decimal("0")

    def test_remaining_capacity(self, six_hours_logged):
        tracker = DailyAllocationTracker(six_hours_logged)
        assert tracker.remaining_capacity("c-prof", DAY) == Decimal("2")
        assert tracker.remaining_capacity("c-serv", DAY) == Decimal("8")

    def test_exceeding_ceiling_is_rejected(self, six_hours_logged):
        tracker = DailyAllocationTracker(six_hours_logged)

        decision = tracker.evaluate_proposed_entry("c-prof", "b-1", Decimal("3"), DAY)

        assert decision.allowed is False
        assert decision.reason == RejectionReason.DAILY_LIMIT_EXCEEDED
        assert "6h" in decision.message

    def test_reaching_ceiling_exactly_is_allowed(self, six_hours_logged):
        tracker = DailyAllocationTracker(six_hours_logged)

        decision = tracker.evaluate_proposed_entry("c-prof", "b-1", Decimal("2"), DAY)

        assert decision.allowed is True
        assert decision.over_budget is False

    def test_ceiling_cannot_be_overridden_by_justification(self, six_hours_logged):
        tracker = DailyAllocationTracker(six_hours_logged)

        decision = tracker.evaluate_proposed_entry(
            "c-prof", "b-1", Decimal("3"), DAY, justification="Concretagem"
        )

        assert decision.allowed is False

    def test_other_days_do_not_count(self, six_hours_logged):
        tracker = DailyAllocationTracker(six_hours_logged)
        decision = tracker.evaluate_proposed_entry(
            "c-prof", "b-1", Decimal("8"), DAY + dt.timedelta(days=1)
        )
        assert decision.allowed is True

    def test_custom_daily_limit(self, six_hours_logged):
        tracker = DailyAllocationTracker(six_hours_logged, daily_limit=Decimal("10"))
        assert tracker.evaluate_proposed_entry("c-prof", "b-1", Decimal("4"), DAY).allowed

    @pytest.mark.parametrize("hours", [Decimal("0"), Decimal("-1")])
    def test_non_positive_hours_are_rejected(self, six_hours_logged, hours):
        tracker = DailyAllocationTracker(six_hours_logged)

        decision = tracker.evaluate_proposed_entry("c-serv", "b-1", hours, DAY)

        assert decision.allowed is False
        assert decision.reason == RejectionReason.NON_POSITIVE_HOURS

    def test_nan_hours_raise_value_error(self, six_hours_logged):
        tracker = DailyAllocationTracker(six_hours_logged)
        with pytest.raises(ValueError, match="finite"):
            tracker.evaluate_proposed_entry("c-serv", "b-1", Decimal("NaN"), DAY)


class TestItemBudget:
    """Test over-budget detection against the item's role estimate."""

    @pytest.fixture
    def near_budget(self, prof_worker, serv_worker, masonry_item):
        """PROFISSIONAL consumption of item 1.1 is 48h of the 50h budget."""
        logs = tuple(
            _entry(f"l-{n}", "c-prof", "8", date=dt.date(2024, 1, n)) for n in range(1, 7)
        )
        return ProjectSnapshot(
            team=(prof_worker, serv_worker), budget=(masonry_item,), logs=logs
        )

    def test_consumed_hours_span_all_dates(self, near_budget):
        tracker = DailyAllocationTracker(near_budget)
        assert tracker.consumed_hours_for_item("b-1", "PROFISSIONAL") == Decimal("48")
        assert tracker.consumed_hours_for_item("b-1", "SERVENTE") == Decimal("0")

    def test_item_balance(self, near_budget):
        balance = DailyAllocationTracker(near_budget).item_balance("b-1", "PROFISSIONAL")
        assert balance.limit == Decimal("50")
        assert balance.consumed == Decimal("48")
        assert balance.remaining == Decimal("2")

    def test_item_balance_of_unknown_item(self, near_budget):
        assert DailyAllocationTracker(near_budget).item_balance("nope", "SERVENTE") is None

    def test_within_budget(self, near_budget):
        decision = DailyAllocationTracker(near_budget).evaluate_proposed_entry(
            "c-prof", "b-1", Decimal("2"), DAY
        )
        assert decision.allowed is True
        assert decision.over_budget is False
        assert decision.remaining_budget == Decimal("2")

    def test_over_budget_without_justification_is_rejected(self, near_budget):
        decision = DailyAllocationTracker(near_budget).evaluate_proposed_entry(
            "c-prof", "b-1", Decimal("3"), DAY
        )
        assert decision.allowed is False
        assert decision.over_budget is True
        assert decision.reason == RejectionReason.JUSTIFICATION_REQUIRED

    def test_blank_justification_is_not_enough(self, near_budget):
        decision = DailyAllocationTracker(near_budget).evaluate_proposed_entry(
            "c-prof", "b-1", Decimal("3"), DAY, justification="   "
        )
        assert decision.allowed is False

    def test_over_budget_with_justification_is_allowed(self, near_budget):
        decision = DailyAllocationTracker(near_budget).evaluate_proposed_entry(
            "c-prof", "b-1", Decimal("3"), DAY, justification="Retrabalho"
        )
        assert decision.allowed is True
        assert decision.over_budget is True

    def test_other_role_has_its_own_budget(self, near_budget):
        decision = DailyAllocationTracker(near_budget).evaluate_proposed_entry(
            "c-serv", "b-1", Decimal("8"), DAY
        )
        assert decision.allowed is True
        assert decision.over_budget is False

    def test_unknown_item_is_not_over_budget(self, near_budget):
        decision = DailyAllocationTracker(near_budget).evaluate_proposed_entry(
            "c-prof", "missing", Decimal("2"), DAY
        )
        assert decision.allowed is True
        assert decision.over_budget is False
        assert decision.remaining_budget == Decimal("0")

    def test_unknown_collaborator_still_respects_ceiling(self, near_budget):
        tracker = DailyAllocationTracker(near_budget)
        assert tracker.evaluate_proposed_entry("ghost", "b-1", Decimal("8"), DAY).allowed
        assert not tracker.evaluate_proposed_entry("ghost", "b-1", Decimal("9"), DAY).allowed


class TestBuildEntry:
    """Test entry construction through the gate."""

    def test_build_entry_within_budget_drops_justification(self, six_hours_logged):
        entry = DailyAllocationTracker(six_hours_logged).build_entry(
            "c-prof", "b-1", "2", DAY, justification="not needed", entry_id="new"
        )
        assert entry.id == "new"
        assert entry.hours == Decimal("2")
        assert entry.justification is None

    def test_build_entry_over_budget_keeps_stripped_justification(self, prof_worker, masonry_item):
        snapshot = ProjectSnapshot(
            team=(prof_worker,),
            budget=(masonry_item.model_copy(update={"estimated_prof_hours": Decimal("1")}),),
        )
        entry = DailyAllocationTracker(snapshot).build_entry(
            "c-prof", "b-1", "2", DAY, justification="  Chuva  "
        )
        assert entry.justification == "Chuva"
        assert entry.id

    def test_build_entry_rejected_raises(self, six_hours_logged):
        tracker = DailyAllocationTracker(six_hours_logged)
        with pytest.raises(AllocationRejectedError) as exc_info:
            tracker.build_entry("c-prof", "b-1", "3", DAY)
        assert exc_info.value.decision.reason == RejectionReason.DAILY_LIMIT_EXCEEDED


class TestCollaboratorDaySummary:
    """Test per-day collaborator summary."""

    def test_summary(self, scenario_snapshot):
        summary = DailyAllocationTracker(scenario_snapshot).collaborator_day_summary(DAY)

        by_id = {day.collaborator_id: day for day in summary}
        assert by_id["c-prof"].logged_hours == Decimal("6")
        assert by_id["c-prof"].remaining_hours == Decimal("2")
        assert by_id["c-prof"].is_complete is False
        assert by_id["c-serv"].logged_hours == Decimal("8")
        assert by_id["c-serv"].is_complete is True
