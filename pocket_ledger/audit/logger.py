"""
Audit Logger

DESIGN DECISION: Every write to the ledger and every non-fatal problem
is logged as a structured event. This gives:
1. Traceability of what was appended and when
2. A record of skipped lines without interrupting the user
3. Debugging capability when a report looks wrong

The audit logger never raises and never alters results. Diagnostics
returned to the caller remain the primary channel for problems.
"""

import logging
import sys
from collections import deque
from typing import Optional

import structlog

from pocket_ledger.models.audit import (
    AuditSeverity,
    LedgerEvent,
    LedgerEventBuilder,
)
from pocket_ledger.models.transaction import Diagnostic


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


def configure_logging(level: str = "WARNING") -> None:
    """
    Route log output to stderr at the given level.

    Entry points call this once; library code only logs.
    """
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(message)s",
        stream=sys.stderr,
    )


class AuditLogger:
    """
    Emits ledger events through structlog and keeps a short history.

    Logs events to the structured local log and keeps the most recent
    ones in memory so a caller can show what just happened.
    """

    def __init__(self, history_size: int = 100):
        self._logger = structlog.get_logger("pocket_ledger.audit")
        self._history: deque[LedgerEvent] = deque(maxlen=history_size)

    def log(self, event: LedgerEvent) -> None:
        """Log an audit event."""
        self._history.append(event)
        log_dict = event.to_log_dict()

        if event.severity == AuditSeverity.ERROR:
            self._logger.error("audit_event", **log_dict)
        elif event.severity == AuditSeverity.WARNING:
            self._logger.warning("audit_event", **log_dict)
        elif event.severity == AuditSeverity.DEBUG:
            self._logger.debug("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

    def recent_events(self, limit: Optional[int] = None) -> list[LedgerEvent]:
        """Most recent events, newest first."""
        events = list(reversed(self._history))
        return events if limit is None else events[:limit]

    def log_ledger_created(self, ledger_path: str) -> None:
        self.log(LedgerEventBuilder.ledger_created(ledger_path))

    def log_transaction_appended(
        self,
        ledger_path: str,
        vendor: str,
        amount: str,
    ) -> None:
        """Log a successful append."""
        self.log(LedgerEventBuilder.transaction_appended(
            ledger_path=ledger_path,
            vendor=vendor,
            amount=amount,
        ))

    def log_lines_skipped(
        self,
        ledger_path: str,
        diagnostics: list[Diagnostic],
    ) -> None:
        """Log malformed lines found during a read."""
        if not diagnostics:
            return
        self.log(LedgerEventBuilder.lines_skipped(
            ledger_path=ledger_path,
            messages=[str(d) for d in diagnostics],
        ))

    def log_storage_error(
        self,
        ledger_path: str,
        operation: str,
        error_message: str,
    ) -> None:
        self.log(LedgerEventBuilder.storage_error(
            ledger_path=ledger_path,
            operation=operation,
            error_message=error_message,
        ))

    def log_entry_rejected(self, diagnostics: list[Diagnostic]) -> None:
        self.log(LedgerEventBuilder.entry_rejected(
            [d.message for d in diagnostics]
        ))

    def log_criteria_ignored(self, diagnostics: list[Diagnostic]) -> None:
        """One event per dropped search filter."""
        for diagnostic in diagnostics:
            self.log(LedgerEventBuilder.criterion_ignored(
                criterion=diagnostic.field or "unknown",
                raw=diagnostic.raw or "",
            ))

    def log_report_executed(
        self,
        report: str,
        result_count: int,
        description: str,
    ) -> None:
        self.log(LedgerEventBuilder.report_executed(
            report=report,
            result_count=result_count,
            description=description,
        ))
