"""
Audit Models for Pocket Ledger

Significant actions against the ledger (appends, skipped lines,
ignored filters, storage failures) are described as events so they
can be logged in one structured shape.

DESIGN DECISION: Audit events are a log, not data. They are never
written into the ledger file and never change what a query returns.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class LedgerEventType(str, Enum):
    """Types of events we audit."""
    # Storage
    LEDGER_CREATED = "ledger_created"
    TRANSACTION_APPENDED = "transaction_appended"
    LINES_SKIPPED = "lines_skipped"
    STORAGE_ERROR = "storage_error"

    # Entry capture
    ENTRY_REJECTED = "entry_rejected"

    # Queries
    CRITERION_IGNORED = "criterion_ignored"
    REPORT_EXECUTED = "report_executed"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class LedgerEvent(BaseModel):
    """A single audit event."""

    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=datetime.now,
        description="When the event occurred (local time)"
    )
    event_type: LedgerEventType
    severity: AuditSeverity = AuditSeverity.INFO
    ledger_path: Optional[str] = Field(
        default=None,
        description="Ledger file the event relates to"
    )
    # fixed wording only; free text from entries goes in details
    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(default_factory=dict)
    error_message: Optional[str] = None

    def to_log_dict(self) -> dict:
        """
        Flatten the event into structlog keyword arguments.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "ledger_path": self.ledger_path,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
        }


class LedgerEventBuilder:
    """
    One constructor per ledger event type.

    Usage:
        event = LedgerEventBuilder.transaction_appended(path, vendor, amount)
        event = LedgerEventBuilder.lines_skipped(path, diagnostics)
    """

    @staticmethod
    def ledger_created(ledger_path: str) -> LedgerEvent:
        return LedgerEvent(
            event_type=LedgerEventType.LEDGER_CREATED,
            ledger_path=ledger_path,
            description="Ledger file created",
        )

    @staticmethod
    def transaction_appended(
        ledger_path: str,
        vendor: str,
        amount: str,
    ) -> LedgerEvent:
        return LedgerEvent(
            event_type=LedgerEventType.TRANSACTION_APPENDED,
            ledger_path=ledger_path,
            description="Transaction appended",
            details={
                "vendor": vendor,
                "amount": amount,
            },
        )

    @staticmethod
    def lines_skipped(
        ledger_path: str,
        messages: list[str],
    ) -> LedgerEvent:
        return LedgerEvent(
            event_type=LedgerEventType.LINES_SKIPPED,
            severity=AuditSeverity.WARNING,
            ledger_path=ledger_path,
            description=f"Skipped {len(messages)} malformed line(s)",
            details={
                "skipped": messages,
            },
        )

    @staticmethod
    def storage_error(
        ledger_path: str,
        operation: str,
        error_message: str,
    ) -> LedgerEvent:
        return LedgerEvent(
            event_type=LedgerEventType.STORAGE_ERROR,
            severity=AuditSeverity.ERROR,
            ledger_path=ledger_path,
            description=f"Storage {operation} failed",
            details={
                "operation": operation,
            },
            error_message=error_message,
        )

    @staticmethod
    def entry_rejected(messages: list[str]) -> LedgerEvent:
        return LedgerEvent(
            event_type=LedgerEventType.ENTRY_REJECTED,
            severity=AuditSeverity.WARNING,
            description=f"Entry rejected with {len(messages)} issue(s)",
            details={
                "reasons": messages,
            },
        )

    @staticmethod
    def criterion_ignored(criterion: str, raw: str) -> LedgerEvent:
        return LedgerEvent(
            event_type=LedgerEventType.CRITERION_IGNORED,
            severity=AuditSeverity.WARNING,
            description=f"Ignored unparseable {criterion} filter",
            details={
                "criterion": criterion,
                "raw": raw,
            },
        )

    @staticmethod
    def report_executed(
        report: str,
        result_count: int,
        description: str,
    ) -> LedgerEvent:
        return LedgerEvent(
            event_type=LedgerEventType.REPORT_EXECUTED,
            severity=AuditSeverity.DEBUG,
            description=f"Report {report} returned {result_count} results",
            details={
                "report": report,
                "result_count": result_count,
                "query": description,
            },
        )
