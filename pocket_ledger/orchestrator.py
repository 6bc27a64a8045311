"""
Main Orchestrator for Pocket Ledger

This module ties the core components together and defines the flows
the shell calls:
1. Add entry (raw input → validate/normalize → append)
2. Listing (read → filter by type)
3. Reports (read → calendar window / vendor / custom search)
4. Balance (read → aggregate)

DESIGN DECISION: The shell holds no business logic. Everything it
needs is one call here, and every call returns data plus diagnostics.
Storage errors are the only thing that propagates as an exception.
"""

import datetime as dt
from pathlib import Path
from typing import Optional

from pocket_ledger.audit import AuditLogger
from pocket_ledger.config import Settings, get_settings
from pocket_ledger.models.transaction import (
    BalanceSummary,
    EntryResult,
    QueryResult,
    SearchCriteria,
    TransactionKind,
)
from pocket_ledger.queries import (
    ReportExecutor,
    ReportType,
    balance,
    filter_by_type,
)
from pocket_ledger.services.storage import (
    FlatFileLedgerStorage,
    LedgerStorageInterface,
)
from pocket_ledger.validation import EntryValidator


class LedgerService:
    """
    Orchestrates every ledger operation offered by the menus.

    Each call re-reads the ledger; nothing is cached between calls.
    """

    def __init__(
        self,
        storage: LedgerStorageInterface,
        validator: Optional[EntryValidator] = None,
        audit_logger: Optional[AuditLogger] = None,
        report_executor: Optional[ReportExecutor] = None,
    ):
        self._storage = storage
        self._validator = validator or EntryValidator()
        self._audit_logger = audit_logger
        self._reports = report_executor or ReportExecutor(storage, audit_logger=audit_logger)

    @property
    def storage(self) -> LedgerStorageInterface:
        return self._storage

    def add_entry(
        self,
        kind: TransactionKind,
        description: str,
        vendor: str,
        amount_text: str,
        when: Optional[dt.datetime] = None,
    ) -> EntryResult:
        """
        Validate a new entry and append it if accepted.

        A rejected entry is not written; its diagnostics say why.

        Raises:
            StorageError: If the accepted entry cannot be written
        """
        result = self._validator.normalize(
            kind=kind,
            description=description,
            vendor=vendor,
            amount_text=amount_text,
            when=when,
        )

        if not result.accepted:
            if self._audit_logger:
                self._audit_logger.log_entry_rejected(result.diagnostics)
            return result

        self._storage.append(result.transaction)
        return result

    def add_expense(self, description: str, vendor: str, amount_text: str, when: Optional[dt.datetime] = None) -> EntryResult:
        return self.add_entry(TransactionKind.EXPENSE, description, vendor, amount_text, when)

    def add_income(self, description: str, payer: str, amount_text: str, when: Optional[dt.datetime] = None) -> EntryResult:
        return self.add_entry(TransactionKind.INCOME, description, payer, amount_text, when)

    def list_entries(self, kind: TransactionKind = TransactionKind.ALL) -> QueryResult:
        """All entries, only expenses, or only income, in ledger order."""
        ledger = self._storage.read_all()
        result = filter_by_type(ledger.transactions, kind)
        return result.model_copy(update={"diagnostics": ledger.diagnostics + result.diagnostics})

    def run_report(
        self,
        report: ReportType,
        today: Optional[dt.date] = None,
        vendor: Optional[str] = None,
        criteria: Optional[SearchCriteria] = None,
    ) -> QueryResult:
        return self._reports.run(report, today=today, vendor=vendor, criteria=criteria)

    def balance(self) -> BalanceSummary:
        """Income, expenses and net over the whole ledger."""
        ledger = self._storage.read_all()
        summary = balance(ledger.transactions)
        return summary.model_copy(update={"diagnostics": ledger.diagnostics})


def create_ledger_service(
    settings: Optional[Settings] = None,
    audit_logger: Optional[AuditLogger] = None,
    file_path: Optional[Path] = None,
) -> LedgerService:
    """
    Factory function to create the default flat-file ledger service.

    Args:
        settings: Settings to read the ledger path from (defaults to
                  the cached application settings)
        audit_logger: Logger to use; a local-only one is created if None
        file_path: Ledger file to use instead of the configured one

    Returns:
        A ready LedgerService
    """
    settings = settings or get_settings()
    storage_settings = settings.storage
    app_settings = settings.app
    audit_logger = audit_logger or AuditLogger()

    storage = FlatFileLedgerStorage(
        file_path or storage_settings.file_path,
        encoding=storage_settings.file_encoding,
        audit_logger=audit_logger,
    )
    return LedgerService(
        storage=storage,
        audit_logger=audit_logger,
        report_executor=ReportExecutor(
            storage,
            audit_logger=audit_logger,
            tolerance=app_settings.amount_tolerance,
        ),
    )
