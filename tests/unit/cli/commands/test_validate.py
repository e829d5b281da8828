"""Unit tests for validate-data command."""

import datetime as dt
from decimal import Decimal

import pytest
from click.testing import CliRunner

from labor_budget.cli import cli
from labor_budget.models import DailyLogEntry, MonthlyPlan
from labor_budget.store import JsonRepository


@pytest.fixture
def runner():
    """Create a Click CLI test runner."""
    return CliRunner()


def _save(tmp_path, snapshot):
    path = tmp_path / "obra.json"
    JsonRepository(path).save(snapshot)
    return path


class TestValidateDataCommand:
    """Test suite for validate-data command."""

    def test_clean_data(self, runner, data_file):
        result = runner.invoke(cli, ["validate-data", "--data-file", str(data_file)])

        assert result.exit_code == 0
        assert "Validating project data" in result.output
        assert "Validation Summary" in result.output
        assert "Validation passed! No issues found." in result.output

    def test_warnings_do_not_fail(self, runner, tmp_path, scenario_snapshot):
        plans = scenario_snapshot.plans + (
            MonthlyPlan(id="p-2", month="2024-02", budget_item_id="b-1", projected_percentage=70),
        )
        data_file = _save(tmp_path, scenario_snapshot.model_copy(update={"plans": plans}))

        result = runner.invoke(cli, ["validate-data", "--data-file", str(data_file)])

        assert result.exit_code == 0
        assert "Warnings:         1" in result.output
        assert "Validation completed with 1 warning(s)" in result.output

    def test_errors_fail_with_validation_code(self, runner, tmp_path, scenario_snapshot):
        extra = DailyLogEntry(
            id="l-9",
            date=dt.date(2024, 1, 10),
            collaborator_id="c-serv",
            budget_item_id="b-2",
            hours=Decimal("2"),
        )
        data_file = _save(
            tmp_path, scenario_snapshot.model_copy(update={"logs": scenario_snapshot.logs + (extra,)})
        )

        result = runner.invoke(cli, ["validate-data", "--data-file", str(data_file)])

        assert result.exit_code == 3
        assert "Errors:           1" in result.output
        assert "logs.hours" in result.output
        assert "Validation failed with 1 error(s)" in result.output

    def test_severity_filter(self, runner, tmp_path, scenario_snapshot):
        data_file = _save(tmp_path, scenario_snapshot.model_copy(update={"team": ()}))

        default = runner.invoke(cli, ["validate-data", "--data-file", str(data_file)])
        verbose = runner.invoke(
            cli, ["validate-data", "--severity", "info", "--data-file", str(data_file)]
        )

        assert default.exit_code == 0
        assert "Info:             4" in default.output
        assert "logs.collaborator_id" not in default.output
        assert "INFOS (4):" in verbose.output
        assert "logs.collaborator_id" in verbose.output

    def test_invalid_severity(self, runner, data_file):
        result = runner.invoke(
            cli, ["validate-data", "--severity", "fatal", "--data-file", str(data_file)]
        )
        assert result.exit_code == 2
