"""
Shared fixtures.

Every test gets its own ledger file under tmp_path; nothing touches the
working directory's transactions.csv.
"""

import datetime as dt
from decimal import Decimal
from pathlib import Path

import pytest

from pocket_ledger.audit import AuditLogger
from pocket_ledger.config import get_settings
from pocket_ledger.models.transaction import Transaction
from pocket_ledger.services.storage import FlatFileLedgerStorage


def make_transaction(
    amount: str,
    day: dt.date = dt.date(2024, 3, 15),
    description: str = "Coffee",
    vendor: str = "Cafe",
    at: dt.time = dt.time(9, 0, 0),
) -> Transaction:
    return Transaction(
        date=day,
        time=at,
        description=description,
        vendor=vendor,
        amount=Decimal(amount),
    )


@pytest.fixture(autouse=True)
def _isolate_settings(monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
    """Run from an empty directory so no stray .env or ledger is picked up."""
    monkeypatch.chdir(tmp_path)
    for var in ("LEDGER_FILE_PATH", "LEDGER_FILE_ENCODING", "APP_LOG_LEVEL", "APP_CURRENCY_SYMBOL"):
        monkeypatch.delenv(var, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def ledger_path(tmp_path: Path) -> Path:
    return tmp_path / "data" / "transactions.csv"


@pytest.fixture
def audit_logger() -> AuditLogger:
    return AuditLogger()


@pytest.fixture
def storage(ledger_path: Path, audit_logger: AuditLogger) -> FlatFileLedgerStorage:
    return FlatFileLedgerStorage(ledger_path, audit_logger=audit_logger)


@pytest.fixture
def sample_transactions() -> list[Transaction]:
    """A small ledger spanning two months, in file order."""
    return [
        make_transaction("100.00", dt.date(2024, 2, 1), "Salary", "Acme Corp"),
        make_transaction("-40.00", dt.date(2024, 2, 29), "Groceries", "Store"),
        make_transaction("-10.50", dt.date(2024, 3, 1), "Coffee beans", "Cafe123"),
        make_transaction("0.00", dt.date(2024, 3, 2), "Refund adjustment", "Store"),
        make_transaction("-4.50", dt.date(2024, 3, 15), "Coffee", "Cafe"),
    ]


@pytest.fixture
def make_tx():
    """Factory for transactions with sensible defaults."""
    return make_transaction
