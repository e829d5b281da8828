"""
Global pytest configuration and fixtures.
"""
import datetime as dt
from decimal import Decimal
from typing import Dict

import pytest

import labor_budget.config.settings
from labor_budget.config import LaborBudgetConfig, reload_config, reset_logging
from labor_budget.models import (
    BudgetItem,
    Collaborator,
    DailyLogEntry,
    FinancialRecord,
    MonthlyPlan,
    Project,
    ProjectSnapshot,
    QuantitativeLog,
)
from labor_budget.store import JsonRepository


@pytest.fixture
def test_env_vars(tmp_path) -> Dict[str, str]:
    """Test environment variables for configuration."""
    return {
        "DATA_FILE": str(tmp_path / "env_data.json"),
        "DEBUG": "true",
        "LOG_LEVEL": "DEBUG",
    }


@pytest.fixture
def mock_env(test_env_vars, monkeypatch):
    """Mock environment variables for testing."""
    for key, value in test_env_vars.items():
        monkeypatch.setenv(key, value)

    # Clear the global config to force reload with test values
    labor_budget.config.settings._config = None

    yield test_env_vars

    labor_budget.config.settings._config = None


@pytest.fixture
def test_config(mock_env) -> LaborBudgetConfig:
    """Test configuration instance."""
    return reload_config()


@pytest.fixture(autouse=True)
def clean_global_state():
    """Reset cached configuration and root logging handlers after each test."""
    yield
    labor_budget.config.settings._config = None
    reset_logging()


@pytest.fixture
def project() -> Project:
    """Project with the reference hourly rates (50 / 35)."""
    return Project(
        name="Residencial Jardim",
        created_at=dt.datetime(2024, 1, 2, 8, 0),
        hourly_rate_prof=Decimal("50"),
        hourly_rate_serv=Decimal("35"),
    )


@pytest.fixture
def prof_worker() -> Collaborator:
    return Collaborator(
        id="c-prof",
        name="José Almeida",
        role="PROFISSIONAL",
        start_date=dt.date(2024, 1, 1),
    )


@pytest.fixture
def serv_worker() -> Collaborator:
    return Collaborator(
        id="c-serv",
        name="Maria Souza",
        role="SERVENTE",
        start_date=dt.date(2024, 1, 1),
    )


@pytest.fixture
def masonry_item() -> BudgetItem:
    """Budget item 1.1: 100 m2, 50 PROFISSIONAL hours, 80 SERVENTE hours."""
    return BudgetItem(
        id="b-1",
        code="1.1",
        description="Alvenaria",
        unit="m2",
        quantity=Decimal("100"),
        estimated_value=Decimal("5000.00"),
        estimated_prof_hours=Decimal("50"),
        estimated_serv_hours=Decimal("80"),
    )


@pytest.fixture
def plaster_item() -> BudgetItem:
    """Budget item 1.2 with no plans or logs."""
    return BudgetItem(
        id="b-2",
        code="1.2",
        description="Reboco",
        unit="m2",
        quantity=Decimal("200"),
        estimated_value=Decimal("3000.00"),
        estimated_prof_hours=Decimal("40"),
        estimated_serv_hours=Decimal("40"),
    )


@pytest.fixture
def scenario_logs():
    """January 2024 entries: 10h PROFISSIONAL and 15h SERVENTE on item 1.1."""
    return (
        DailyLogEntry(
            id="l-1",
            date=dt.date(2024, 1, 10),
            collaborator_id="c-prof",
            budget_item_id="b-1",
            hours=Decimal("6"),
        ),
        DailyLogEntry(
            id="l-2",
            date=dt.date(2024, 1, 11),
            collaborator_id="c-prof",
            budget_item_id="b-1",
            hours=Decimal("4"),
        ),
        DailyLogEntry(
            id="l-3",
            date=dt.date(2024, 1, 10),
            collaborator_id="c-serv",
            budget_item_id="b-1",
            hours=Decimal("8"),
        ),
        DailyLogEntry(
            id="l-4",
            date=dt.date(2024, 1, 11),
            collaborator_id="c-serv",
            budget_item_id="b-1",
            hours=Decimal("7"),
        ),
    )


@pytest.fixture
def scenario_snapshot(
    project, prof_worker, serv_worker, masonry_item, plaster_item, scenario_logs
) -> ProjectSnapshot:
    """Reference project state for January 2024.

    Item 1.1 is planned at 50% (25h PROFISSIONAL, 40h SERVENTE), 40 m2 were
    executed and 25h were logged; HR reported a payroll of 1100.
    """
    return ProjectSnapshot(
        project=project,
        team=(prof_worker, serv_worker),
        budget=(masonry_item, plaster_item),
        logs=scenario_logs,
        plans=(
            MonthlyPlan(
                id="p-1",
                month="2024-01",
                budget_item_id="b-1",
                projected_percentage=Decimal("50"),
            ),
        ),
        quantitative_logs=(
            QuantitativeLog(
                id="q-1",
                month="2024-01",
                budget_item_id="b-1",
                executed_quantity=Decimal("40"),
            ),
        ),
        financial_records=(
            FinancialRecord(
                id="f-1",
                month="2024-01",
                hr_hours=Decimal("30"),
                payroll_cost=Decimal("1100"),
                indirect_cost=Decimal("200"),
            ),
        ),
    )


@pytest.fixture
def data_file(tmp_path, scenario_snapshot):
    """JSON data file holding the reference snapshot."""
    path = tmp_path / "obra.json"
    JsonRepository(path).save(scenario_snapshot)
    return path


# Pytest configuration for different test types
def pytest_configure(config):
    """Configure pytest with custom markers and settings."""
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line("markers", "slow: mark test as slow running")


def pytest_collection_modifyitems(config, items):
    """Modify test collection to add markers based on location."""
    for item in items:
        if "tests/unit/" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
