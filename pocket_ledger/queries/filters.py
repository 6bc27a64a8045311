"""
Query Engine Filters

Pure functions over an in-memory list of transactions. None of them
touch storage or mutate their input, and every one keeps the input
order (the ledger file order). Results never get re-sorted by date.

Each function returns a QueryResult so that filter problems (an
unparseable criterion) travel with the partial result.
"""

import datetime as dt
from decimal import Decimal
from typing import Optional, Sequence

from pydantic import BaseModel, ConfigDict

from pocket_ledger.models.transaction import (
    Diagnostic,
    DiagnosticSource,
    QueryResult,
    SearchCriteria,
    Transaction,
    TransactionKind,
)
from pocket_ledger.queries.windows import describe_range
from pocket_ledger.services.storage.codec import parse_amount, parse_date


DEFAULT_AMOUNT_TOLERANCE = Decimal("0.0001")


def _matches_kind(transaction: Transaction, kind: TransactionKind) -> bool:
    if kind == TransactionKind.EXPENSE:
        return transaction.amount < 0
    if kind == TransactionKind.INCOME:
        return transaction.amount > 0
    return True


def filter_by_type(
    transactions: Sequence[Transaction],
    kind: TransactionKind,
) -> QueryResult:
    """
    Keep expenses (amount < 0), income (amount > 0) or everything.

    Zero-amount entries only show up under ALL.
    """
    kind = TransactionKind(kind)
    return QueryResult(
        transactions=[t for t in transactions if _matches_kind(t, kind)],
        description={
            TransactionKind.ALL: "All entries",
            TransactionKind.EXPENSE: "Expenses",
            TransactionKind.INCOME: "Income",
        }[kind],
    )


def filter_by_date_range(
    transactions: Sequence[Transaction],
    start: dt.date,
    end: dt.date,
) -> QueryResult:
    """Keep transactions dated from start to end, both inclusive."""
    return QueryResult(
        transactions=[t for t in transactions if start <= t.date <= end],
        description=f"Entries {describe_range(start, end)}",
    )


def search_by_vendor(
    transactions: Sequence[Transaction],
    substring: str,
) -> QueryResult:
    """Case-insensitive substring match on the vendor."""
    needle = substring.strip().lower()
    return QueryResult(
        transactions=[t for t in transactions if needle in t.vendor.lower()],
        description=f"Vendor contains '{substring.strip()}'",
    )


# =============================================================================
# CUSTOM SEARCH
# =============================================================================

class ParsedCriteria(BaseModel):
    """Typed search criteria; None means "no constraint"."""
    model_config = ConfigDict(frozen=True)

    start_date: Optional[dt.date] = None
    end_date: Optional[dt.date] = None
    description: Optional[str] = None
    vendor: Optional[str] = None
    amount: Optional[Decimal] = None


def _ignored(field: str, raw: str, expected: str) -> Diagnostic:
    return Diagnostic(
        source=DiagnosticSource.CRITERION,
        message=f"Bad {field.replace('_', ' ')} '{raw}' (expected {expected}), ignoring that filter.",
        field=field,
        raw=raw,
    )


def parse_criteria(criteria: SearchCriteria) -> tuple[ParsedCriteria, list[Diagnostic]]:
    """
    Turn raw criteria into typed ones.

    Blank values are "not supplied". A value that cannot be parsed is
    dropped as well, with a diagnostic, instead of failing the search.
    """
    diagnostics: list[Diagnostic] = []
    parsed: dict = {}

    for field in ("start_date", "end_date"):
        raw = getattr(criteria, field)
        if raw:
            value = parse_date(raw)
            if value is None:
                diagnostics.append(_ignored(field, raw, "YYYY-MM-DD"))
            else:
                parsed[field] = value

    if criteria.amount:
        value = parse_amount(criteria.amount)
        if value is None:
            diagnostics.append(_ignored("amount", criteria.amount, "a number"))
        else:
            parsed["amount"] = value

    for field in ("description", "vendor"):
        raw = getattr(criteria, field)
        if raw:
            parsed[field] = raw.lower()

    return ParsedCriteria(**parsed), diagnostics


def _matches(
    transaction: Transaction,
    criteria: ParsedCriteria,
    tolerance: Decimal,
) -> bool:
    if criteria.start_date is not None and transaction.date < criteria.start_date:
        return False
    if criteria.end_date is not None and transaction.date > criteria.end_date:
        return False
    if criteria.description is not None and criteria.description not in transaction.description.lower():
        return False
    if criteria.vendor is not None and criteria.vendor not in transaction.vendor.lower():
        return False
    if criteria.amount is not None and abs(transaction.amount - criteria.amount) > tolerance:
        return False
    return True


def _describe_criteria(criteria: ParsedCriteria) -> str:
    parts = ["Custom search"]
    if criteria.start_date or criteria.end_date:
        parts.append(describe_range(criteria.start_date, criteria.end_date))
    if criteria.description is not None:
        parts.append(f"description: {criteria.description}")
    if criteria.vendor is not None:
        parts.append(f"vendor: {criteria.vendor}")
    if criteria.amount is not None:
        parts.append(f"amount: {criteria.amount}")
    return " | ".join(parts)


def custom_search(
    transactions: Sequence[Transaction],
    criteria: SearchCriteria,
    tolerance: Decimal = DEFAULT_AMOUNT_TOLERANCE,
) -> QueryResult:
    """
    AND together every supplied criterion.

    The amount criterion is compared to the signed stored amount within
    an absolute tolerance, so "-4.5" finds a -4.50 expense.
    """
    parsed, diagnostics = parse_criteria(criteria)
    return QueryResult(
        transactions=[t for t in transactions if _matches(t, parsed, tolerance)],
        diagnostics=diagnostics,
        description=_describe_criteria(parsed),
    )
