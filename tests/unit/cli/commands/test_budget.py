"""Unit tests for the import-budget and budget-template commands."""

import pytest
from click.testing import CliRunner

from labor_budget.cli import cli
from labor_budget.store import JsonRepository

CSV_BUDGET = (
    "Codigo,Descricao,Unidade,Quantidade,HorasProfissional,HorasServente\n"
    "2.1,Pintura,m2,300,60,30\n"
    "1.3,Contrapiso,m2,80,20,40\n"
)


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def budget_csv(tmp_path):
    path = tmp_path / "orcamento.csv"
    path.write_text(CSV_BUDGET, encoding="utf-8")
    return path


class TestImportBudgetCommand:
    def test_appends_and_sorts(self, runner, data_file, budget_csv):
        result = runner.invoke(
            cli, ["import-budget", str(budget_csv), "--data-file", str(data_file)]
        )

        assert result.exit_code == 0
        assert "2 item(s) imported" in result.output
        budget = JsonRepository(data_file).load().budget
        assert [item.code for item in budget] == ["1.1", "1.2", "1.3", "2.1"]

    def test_replace(self, runner, data_file, budget_csv):
        result = runner.invoke(
            cli, ["import-budget", str(budget_csv), "--replace", "--data-file", str(data_file)]
        )

        assert result.exit_code == 0
        assert "Clearing 2 existing item(s)" in result.output
        budget = JsonRepository(data_file).load().budget
        assert [item.code for item in budget] == ["1.3", "2.1"]

    def test_into_new_data_file(self, runner, tmp_path, budget_csv):
        data_file = tmp_path / "nova_obra.json"

        result = runner.invoke(
            cli, ["import-budget", str(budget_csv), "--data-file", str(data_file)]
        )

        assert result.exit_code == 0
        assert len(JsonRepository(data_file).load().budget) == 2

    def test_no_valid_rows(self, runner, data_file, tmp_path):
        empty = tmp_path / "vazio.csv"
        empty.write_text("Codigo,Descricao\n,Sem codigo\n", encoding="utf-8")

        result = runner.invoke(cli, ["import-budget", str(empty), "--data-file", str(data_file)])

        assert result.exit_code == 3
        assert "No valid budget items found" in result.output
        assert len(JsonRepository(data_file).load().budget) == 2

    def test_missing_spreadsheet(self, runner, data_file, tmp_path):
        result = runner.invoke(
            cli, ["import-budget", str(tmp_path / "nope.xlsx"), "--data-file", str(data_file)]
        )
        assert result.exit_code == 2

    def test_unreadable_spreadsheet(self, runner, data_file, tmp_path):
        broken = tmp_path / "quebrado.xlsx"
        broken.write_bytes(b"garbage")

        result = runner.invoke(cli, ["import-budget", str(broken), "--data-file", str(data_file)])

        assert result.exit_code == 7
        assert "File Error" in result.output


class TestBudgetTemplateCommand:
    def test_writes_template(self, runner, tmp_path, data_file):
        output = tmp_path / "modelo.xlsx"

        result = runner.invoke(cli, ["budget-template", str(output)])

        assert result.exit_code == 0
        assert "Template written to" in result.output
        assert output.exists()

        imported = runner.invoke(cli, ["import-budget", str(output), "--data-file", str(data_file)])
        assert imported.exit_code == 0
        assert "1 item(s) imported" in imported.output

    def test_default_file_name(self, runner):
        with runner.isolated_filesystem():
            result = runner.invoke(cli, ["budget-template"])
            assert result.exit_code == 0
            assert "modelo_orcamento.xlsx" in result.output


class TestRemoveItemCommand:
    def test_removes_by_code(self, runner, data_file):
        result = runner.invoke(cli, ["remove-item", "1.2", "--data-file", str(data_file)])

        assert result.exit_code == 0
        assert "Removed budget item 1.2 (Reboco)" in result.output
        assert [item.code for item in JsonRepository(data_file).load().budget] == ["1.1"]

    def test_records_of_removed_item_are_kept(self, runner, data_file):
        result = runner.invoke(cli, ["remove-item", "b-1", "--data-file", str(data_file)])

        assert result.exit_code == 0
        snapshot = JsonRepository(data_file).load()
        assert [item.id for item in snapshot.budget] == ["b-2"]
        assert len(snapshot.logs) == 4
        assert len(snapshot.plans) == 1

    def test_unknown_item(self, runner, data_file):
        result = runner.invoke(cli, ["remove-item", "9.9", "--data-file", str(data_file)])
        assert result.exit_code == 3
        assert "Budget item '9.9' not found" in result.output
