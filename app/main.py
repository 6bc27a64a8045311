"""
Terminal Frontend for Pocket Ledger

This is the menu-driven shell a user interacts with daily.

DESIGN PRINCIPLES:
1. The shell only prompts, dispatches and prints
2. Every diagnostic returned by the core is shown, never hidden
3. A storage error is reported and the menu carries on
4. 'X' at any entry prompt cancels the entry

Run from the repository root with:  python -m app.main [--file PATH]
"""

from pathlib import Path
from typing import Optional

import typer

from pocket_ledger.audit import configure_logging
from pocket_ledger.config import get_settings
from pocket_ledger.models.transaction import (
    BalanceSummary,
    Diagnostic,
    QueryResult,
    SearchCriteria,
    TransactionKind,
)
from pocket_ledger.orchestrator import LedgerService, create_ledger_service
from pocket_ledger.queries import ReportExecutionError, ReportType
from pocket_ledger.services.storage import StorageError
from pocket_ledger.services.storage.codec import format_amount
from pocket_ledger.validation import is_cancel


HOME_MENU = """

Welcome to the Account Ledger Application
Goal: track expenses and income.

[E] Add an Expense
[I] Add Income
[L] Access Ledger
[B] View Balance
[X] Exit
"""

LEDGER_MENU = """
===== Ledger Menu =====
[A] Show all entries
[E] Show only expenses
[I] Show only income
[R] Reports
[H] Home
"""

REPORTS_MENU = """
===== Reports =====
[1] Month to date
[2] Previous month
[3] Year to date
[4] Previous year
[5] Search by vendor
[6] Custom search (date range, description, vendor, amount)
[0] Back
"""

WINDOW_CHOICES = {
    "1": ReportType.MONTH_TO_DATE,
    "2": ReportType.PREVIOUS_MONTH,
    "3": ReportType.YEAR_TO_DATE,
    "4": ReportType.PREVIOUS_YEAR,
}


def ask(prompt: str) -> str:
    """Prompt for one line; blank answers are allowed."""
    return typer.prompt(prompt, default="", show_default=False).strip()


def show_diagnostics(diagnostics: list[Diagnostic]) -> None:
    for diagnostic in diagnostics:
        typer.secho(f"! {diagnostic}", fg=typer.colors.YELLOW, err=True)


def show_transactions(result: QueryResult) -> None:
    show_diagnostics(result.diagnostics)
    if result.description:
        typer.echo(f"\n{result.description}")
    if not result.data_found:
        typer.echo("\nNo transactions found.")
        return

    typer.echo("\n========= TRANSACTIONS =========")
    for t in result.transactions:
        typer.echo(
            "------------------------------\n"
            f"Date:        {t.date.isoformat()}\n"
            f"Time:        {t.time.strftime('%H:%M:%S')}\n"
            f"Description: {t.description}\n"
            f"Vendor:      {t.vendor}\n"
            f"Amount:      {format_amount(t.amount)}"
        )
    typer.echo("================================\n")


def show_balance(summary: BalanceSummary, currency: str) -> None:
    show_diagnostics(summary.diagnostics)
    typer.echo(
        "\n===== BALANCE =====\n"
        f"Total Income:   {currency}{format_amount(summary.total_income)}\n"
        f"Total Expenses: {currency}{format_amount(summary.total_expenses)}\n"
        f"Net Balance:    {currency}{format_amount(summary.net)}\n"
        "==================="
    )


class LedgerShell:
    """Menu loop around a LedgerService."""

    def __init__(self, service: LedgerService, currency: str = "$"):
        self._service = service
        self._currency = currency

    def add_entry(self, kind: TransactionKind) -> None:
        is_expense = kind == TransactionKind.EXPENSE
        typer.echo("\n(Enter 'X' at any prompt to cancel)\n")

        description = ask("Enter item description" if is_expense else "Enter description of your income")
        if is_cancel(description):
            typer.echo("Cancelled. Returning to main menu.")
            return
        vendor = ask("Enter vendor" if is_expense else "Enter payer")
        if is_cancel(vendor):
            typer.echo("Cancelled. Returning to main menu.")
            return
        amount = ask(f"Enter amount: {self._currency}")
        if is_cancel(amount):
            typer.echo("Cancelled. Returning to main menu.")
            return

        result = self._service.add_entry(kind, description, vendor, amount)
        show_diagnostics(result.diagnostics)
        if result.accepted:
            typer.echo("\nTransaction saved.")
        else:
            typer.echo("Transaction cancelled.")

    def custom_search(self) -> None:
        typer.echo("\nLeave blank to skip a filter.")
        criteria = SearchCriteria(
            start_date=ask("Start date (yyyy-MM-dd) or blank"),
            end_date=ask("End date (yyyy-MM-dd) or blank"),
            description=ask("Description contains or blank"),
            vendor=ask("Vendor contains or blank"),
            amount=ask("Amount equals (number) or blank"),
        )
        show_transactions(self._service.run_report(ReportType.CUSTOM, criteria=criteria))

    def reports(self) -> None:
        while True:
            typer.echo(REPORTS_MENU)
            choice = ask("Enter choice")
            if choice == "0":
                return
            if choice in WINDOW_CHOICES:
                show_transactions(self._service.run_report(WINDOW_CHOICES[choice]))
            elif choice == "5":
                vendor = ask("Enter vendor (partial match)")
                show_transactions(self._service.run_report(ReportType.VENDOR, vendor=vendor))
            elif choice == "6":
                self.custom_search()
            else:
                typer.echo("Invalid choice, try again.")

    def ledger(self) -> None:
        kinds = {
            "A": TransactionKind.ALL,
            "E": TransactionKind.EXPENSE,
            "I": TransactionKind.INCOME,
        }
        while True:
            typer.echo(LEDGER_MENU)
            choice = ask("Enter choice").upper()
            if choice == "H":
                return
            if choice in kinds:
                show_transactions(self._service.list_entries(kinds[choice]))
            elif choice == "R":
                self.reports()
            else:
                typer.echo("Invalid option. Try again.")

    def dispatch(self, choice: str) -> bool:
        """Run one home-menu choice; False means exit."""
        if choice == "E":
            self.add_entry(TransactionKind.EXPENSE)
        elif choice == "I":
            self.add_entry(TransactionKind.INCOME)
        elif choice == "L":
            typer.echo("\nAccessing Ledger...")
            self.ledger()
        elif choice == "B":
            typer.echo("\nCalculating balance...")
            show_balance(self._service.balance(), self._currency)
        elif choice == "X":
            typer.echo("\nExiting. Goodbye!")
            return False
        else:
            typer.echo("Invalid input - please try E, I, L, B, or X.")
        return True

    def run(self) -> None:
        running = True
        while running:
            typer.echo(HOME_MENU)
            choice = ask("Enter Choice").upper()
            try:
                running = self.dispatch(choice)
            except StorageError as e:
                typer.secho(f"Error: {e}", fg=typer.colors.RED, err=True)
            except ReportExecutionError as e:
                typer.secho(f"Error: {e}", fg=typer.colors.RED, err=True)


app = typer.Typer(
    add_completion=False,
    help="Record income and expenses in a pipe-delimited ledger file and report on them.",
)


@app.command()
def main(
    file: Optional[Path] = typer.Option(
        None, "--file", "-f", help="Ledger file (overrides LEDGER_FILE_PATH)."
    ),
) -> None:
    """Start the interactive ledger menu."""
    settings = get_settings()
    configure_logging(settings.app.log_level)

    service = create_ledger_service(settings, file_path=file)

    try:
        LedgerShell(service, currency=settings.app.currency_symbol).run()
    except typer.Abort:
        typer.echo("\nExiting. Goodbye!")


if __name__ == "__main__":
    app()
