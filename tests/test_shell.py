"""
Tests for the terminal shell.

The menus are driven end to end through typer's CliRunner; the ledger
file lives under tmp_path.
"""

from decimal import Decimal

import pytest
from typer.testing import CliRunner

from app.main import app
from pocket_ledger.services.storage import FlatFileLedgerStorage
from pocket_ledger.services.storage.codec import HEADER


runner = CliRunner()


def run_menu(ledger_path, *answers: str):
    return runner.invoke(app, ["--file", str(ledger_path)], input="\n".join(answers) + "\n")


@pytest.fixture
def seeded_path(tmp_path):
    path = tmp_path / "ledger.csv"
    path.write_text(
        "\n".join([
            HEADER,
            "2024-03-01|08:00:00|Salary|Acme|100.00",
            "2024-03-03|08:00:00|Groceries|Store|-40.00",
            "not a row",
            "2024-03-05|08:00:00|Coffee|Cafe123|-10.50",
        ]) + "\n",
        encoding="utf-8",
    )
    return path


class TestEntryCapture:

    def test_add_expense(self, tmp_path):
        path = tmp_path / "ledger.csv"
        result = run_menu(path, "E", "Coffee", "Cafe", "4.50", "X")
        assert result.exit_code == 0
        assert "Transaction saved." in result.output
        transactions = FlatFileLedgerStorage(path).read_all().transactions
        assert [t.amount for t in transactions] == [Decimal("-4.50")]

    def test_add_income(self, tmp_path):
        path = tmp_path / "ledger.csv"
        run_menu(path, "i", "Salary", "Acme", "2500", "x")
        transactions = FlatFileLedgerStorage(path).read_all().transactions
        assert [t.amount for t in transactions] == [Decimal("2500.00")]

    def test_cancel_at_prompt(self, tmp_path):
        path = tmp_path / "ledger.csv"
        result = run_menu(path, "E", "Coffee", "x", "X")
        assert "Cancelled. Returning to main menu." in result.output
        assert not path.exists()

    def test_huge_amount_is_rejected_not_fatal(self, tmp_path):
        path = tmp_path / "ledger.csv"
        result = run_menu(path, "E", "Coffee", "Cafe", "1e30", "X")
        assert result.exit_code == 0
        assert "Invalid amount" in result.output
        assert "Goodbye" in result.output
        assert not path.exists()

    def test_invalid_amount_not_saved(self, tmp_path):
        path = tmp_path / "ledger.csv"
        result = run_menu(path, "E", "Coffee", "Cafe", "lots", "X")
        assert "Invalid amount" in result.output
        assert "Transaction cancelled." in result.output
        assert not path.exists()


class TestLedgerMenus:

    def test_balance(self, seeded_path):
        result = run_menu(seeded_path, "B", "X")
        assert "Total Income:   $100.00" in result.output
        assert "Total Expenses: $50.50" in result.output
        assert "Net Balance:    $49.50" in result.output
        assert "line 4" in result.output

    def test_show_expenses(self, seeded_path):
        result = run_menu(seeded_path, "L", "E", "H", "X")
        assert "Groceries" in result.output
        assert "Coffee" in result.output
        assert "Salary" not in result.output

    def test_vendor_report(self, seeded_path):
        result = run_menu(seeded_path, "L", "R", "5", "caf", "0", "H", "X")
        assert "Cafe123" in result.output
        assert "Groceries" not in result.output

    def test_custom_search_with_bad_amount(self, seeded_path):
        result = run_menu(seeded_path, "L", "R", "6", "2024-03-02", "", "", "", "ten", "0", "H", "X")
        assert "ignoring that filter" in result.output
        assert "Groceries" in result.output
        assert "Salary" not in result.output

    def test_invalid_home_choice(self, tmp_path):
        result = run_menu(tmp_path / "ledger.csv", "Q", "X")
        assert "Invalid input" in result.output
        assert "Goodbye" in result.output

    def test_end_of_input_exits_cleanly(self, tmp_path):
        result = runner.invoke(app, ["--file", str(tmp_path / "ledger.csv")], input="")
        assert result.exit_code == 0
        assert "Goodbye" in result.output

    def test_storage_error_keeps_menu_running(self, tmp_path):
        result = run_menu(tmp_path, "B", "X")
        assert "Error:" in result.output
        assert "Goodbye" in result.output
