"""
Core Data Models for Pocket Ledger

These models define the schemas for everything flowing through the
ledger core:
1. Transaction - one persisted line of the ledger
2. Diagnostic - a non-fatal note about a skipped line or ignored input
3. Result containers returned to the shell

DESIGN DECISION: The sign of the amount is the ONLY discriminator
between income and expense. There is no type column on disk and no
type field here.
"""

import datetime as dt
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)


# =============================================================================
# ENUMS
# =============================================================================

class TransactionKind(str, Enum):
    """Which side of the ledger a listing or an entry refers to."""
    ALL = "all"
    EXPENSE = "expense"  # amount < 0
    INCOME = "income"    # amount > 0


class DiagnosticSource(str, Enum):
    """Where a diagnostic came from."""
    LINE = "line"            # a malformed ledger line
    CRITERION = "criterion"  # an unparseable search filter
    INPUT = "input"          # a bad value typed for a new entry


# =============================================================================
# CORE TRANSACTION MODEL
# =============================================================================

class Transaction(BaseModel):
    """
    A single income or expense entry.

    Immutable: created once from user input, appended once, never
    updated or deleted.
    """
    model_config = ConfigDict(frozen=True)

    date: dt.date = Field(
        ...,
        description="Calendar date of the entry (no time zone)"
    )
    time: dt.time = Field(
        ...,
        description="Local time of day, second precision"
    )
    description: str = Field(
        default="",
        description="Free text; the delimiter is replaced on write"
    )
    vendor: str = Field(
        default="",
        description="Vendor for expenses, payer for income"
    )
    amount: Decimal = Field(
        ...,
        description="Signed amount: negative = expense, positive = income"
    )

    @field_validator('time')
    @classmethod
    def drop_sub_second(cls, v: dt.time) -> dt.time:
        """The file format has no sub-second component."""
        return v.replace(microsecond=0, tzinfo=None)

    @field_validator('amount')
    @classmethod
    def require_finite(cls, v: Decimal) -> Decimal:
        if not v.is_finite():
            raise ValueError("Amount must be a finite number")
        return v

    @property
    def is_expense(self) -> bool:
        return self.amount < 0

    @property
    def is_income(self) -> bool:
        return self.amount > 0


# =============================================================================
# DIAGNOSTICS AND RESULTS
# =============================================================================

class Diagnostic(BaseModel):
    """
    A non-fatal, human-readable note.

    Diagnostics are never raised. They travel alongside the partial
    result so the caller can display them and carry on.
    """
    model_config = ConfigDict(frozen=True)

    source: DiagnosticSource
    message: str
    line_number: Optional[int] = Field(
        default=None,
        ge=1,
        description="1-based line number for line diagnostics"
    )
    field: Optional[str] = Field(
        default=None,
        description="Field or criterion the diagnostic is about"
    )
    raw: Optional[str] = Field(
        default=None,
        description="Offending raw text"
    )

    def __str__(self) -> str:
        if self.line_number is not None:
            return f"line {self.line_number}: {self.message}"
        return self.message


class ReadResult(BaseModel):
    """All transactions decoded from the ledger, in file order."""

    transactions: list[Transaction] = Field(default_factory=list)
    diagnostics: list[Diagnostic] = Field(default_factory=list)

    @property
    def skipped_count(self) -> int:
        return sum(1 for d in self.diagnostics if d.source == DiagnosticSource.LINE)


class QueryResult(BaseModel):
    """
    Result of a filter, search or report.

    Transactions keep the relative order of the input (the file order).
    """

    transactions: list[Transaction] = Field(default_factory=list)
    diagnostics: list[Diagnostic] = Field(default_factory=list)
    description: str = Field(
        default="",
        description="Human-readable description of what was queried"
    )

    @property
    def count(self) -> int:
        return len(self.transactions)

    @property
    def data_found(self) -> bool:
        return bool(self.transactions)


class BalanceSummary(BaseModel):
    """
    Totals over a set of transactions.

    Values are unrounded; the caller presents them at 2 decimals.
    """

    total_income: Decimal = Decimal("0")
    total_expenses: Decimal = Decimal("0")
    net: Decimal = Decimal("0")
    transaction_count: int = Field(default=0, ge=0)
    diagnostics: list[Diagnostic] = Field(default_factory=list)

    def as_tuple(self) -> tuple[Decimal, Decimal, Decimal]:
        return (self.total_income, self.total_expenses, self.net)


class EntryResult(BaseModel):
    """Outcome of capturing a new entry from raw user input."""

    transaction: Optional[Transaction] = None
    diagnostics: list[Diagnostic] = Field(default_factory=list)

    @property
    def accepted(self) -> bool:
        return self.transaction is not None


# =============================================================================
# QUERY INPUT MODELS
# =============================================================================

class DateRange(BaseModel):
    """An inclusive calendar window."""
    model_config = ConfigDict(frozen=True)

    start: dt.date
    end: dt.date

    @model_validator(mode='after')
    def validate_order(self) -> 'DateRange':
        if self.end < self.start:
            raise ValueError("Date range end cannot be before start")
        return self

    def __contains__(self, day: dt.date) -> bool:
        return self.start <= day <= self.end


class SearchCriteria(BaseModel):
    """
    Raw, independently optional filters for a custom search.

    Values arrive exactly as typed. Blank means "not supplied".
    Parsing (and reporting bad values) happens in the query layer.
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    start_date: Optional[str] = Field(
        default=None,
        description="Earliest date, YYYY-MM-DD"
    )
    end_date: Optional[str] = Field(
        default=None,
        description="Latest date, YYYY-MM-DD"
    )
    description: Optional[str] = Field(
        default=None,
        description="Description substring (case-insensitive)"
    )
    vendor: Optional[str] = Field(
        default=None,
        description="Vendor substring (case-insensitive)"
    )
    amount: Optional[str] = Field(
        default=None,
        description="Exact signed amount"
    )
