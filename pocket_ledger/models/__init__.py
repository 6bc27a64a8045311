"""
Data Models Package

This package contains all Pydantic models used by the ledger core.
"""

from pocket_ledger.models.transaction import (
    BalanceSummary,
    DateRange,
    Diagnostic,
    DiagnosticSource,
    EntryResult,
    QueryResult,
    ReadResult,
    SearchCriteria,
    Transaction,
    TransactionKind,
)
from pocket_ledger.models.audit import (
    AuditSeverity,
    LedgerEvent,
    LedgerEventBuilder,
    LedgerEventType,
)

__all__ = [
    # Ledger models
    "BalanceSummary",
    "DateRange",
    "Diagnostic",
    "DiagnosticSource",
    "EntryResult",
    "QueryResult",
    "ReadResult",
    "SearchCriteria",
    "Transaction",
    "TransactionKind",
    # Audit models
    "AuditSeverity",
    "LedgerEvent",
    "LedgerEventBuilder",
    "LedgerEventType",
]
