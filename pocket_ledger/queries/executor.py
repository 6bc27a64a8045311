"""
Report Execution Engine

DESIGN DECISION: A report is one full read of the ledger followed by
one pure filter. Nothing is cached between reports, so an edit made
to the file in another program shows up on the next report.

Read diagnostics (skipped lines) and filter diagnostics (ignored
criteria) are merged into the one QueryResult the shell displays.
"""

import datetime as dt
from decimal import Decimal
from enum import Enum
from typing import Optional

from pocket_ledger.audit.logger import AuditLogger
from pocket_ledger.models.transaction import (
    DiagnosticSource,
    QueryResult,
    SearchCriteria,
)
from pocket_ledger.queries.filters import (
    DEFAULT_AMOUNT_TOLERANCE,
    custom_search,
    filter_by_date_range,
    search_by_vendor,
)
from pocket_ledger.queries.windows import (
    describe_range,
    month_to_date,
    previous_month,
    previous_year,
    year_to_date,
)
from pocket_ledger.services.storage import LedgerStorageInterface


class ReportType(str, Enum):
    """Reports offered by the reports menu."""
    MONTH_TO_DATE = "month_to_date"
    PREVIOUS_MONTH = "previous_month"
    YEAR_TO_DATE = "year_to_date"
    PREVIOUS_YEAR = "previous_year"
    VENDOR = "vendor"
    CUSTOM = "custom"


WINDOWS = {
    ReportType.MONTH_TO_DATE: month_to_date,
    ReportType.PREVIOUS_MONTH: previous_month,
    ReportType.YEAR_TO_DATE: year_to_date,
    ReportType.PREVIOUS_YEAR: previous_year,
}

WINDOW_TITLES = {
    ReportType.MONTH_TO_DATE: "Month to date",
    ReportType.PREVIOUS_MONTH: "Previous month",
    ReportType.YEAR_TO_DATE: "Year to date",
    ReportType.PREVIOUS_YEAR: "Previous year",
}


class ReportExecutionError(Exception):
    """A report was requested without the input it needs."""
    pass


class ReportExecutor:
    """
    Executes named reports against ledger storage.

    GUARANTEES:
    - Only returns transactions actually present in the ledger
    - Keeps ledger order
    - Clear empty result if nothing matches
    """

    def __init__(
        self,
        storage: LedgerStorageInterface,
        audit_logger: Optional[AuditLogger] = None,
        tolerance: Decimal = DEFAULT_AMOUNT_TOLERANCE,
    ):
        self._storage = storage
        self._audit_logger = audit_logger
        self._tolerance = tolerance

    def run(
        self,
        report: ReportType,
        today: Optional[dt.date] = None,
        vendor: Optional[str] = None,
        criteria: Optional[SearchCriteria] = None,
    ) -> QueryResult:
        """
        Execute a report and return its result.

        Args:
            report: Which report to run
            today: Anchor for calendar windows (defaults to the current date)
            vendor: Substring for the vendor report
            criteria: Filters for the custom report

        Raises:
            ReportExecutionError: If the vendor or custom report lacks its input
            StorageError: If the ledger cannot be read
        """
        report = ReportType(report)
        if report == ReportType.VENDOR and vendor is None:
            raise ReportExecutionError("Vendor report needs a vendor substring")
        if report == ReportType.CUSTOM and criteria is None:
            raise ReportExecutionError("Custom report needs search criteria")

        ledger = self._storage.read_all()

        if report in WINDOWS:
            window = WINDOWS[report](today or dt.date.today())
            result = filter_by_date_range(ledger.transactions, window.start, window.end)
            description = f"{WINDOW_TITLES[report]} ({describe_range(window.start, window.end)})"
            result = result.model_copy(update={"description": description})
        elif report == ReportType.VENDOR:
            result = search_by_vendor(ledger.transactions, vendor)
        else:
            result = custom_search(ledger.transactions, criteria, tolerance=self._tolerance)
            if self._audit_logger:
                self._audit_logger.log_criteria_ignored(
                    [d for d in result.diagnostics if d.source == DiagnosticSource.CRITERION]
                )

        result = result.model_copy(
            update={"diagnostics": ledger.diagnostics + result.diagnostics}
        )

        if self._audit_logger:
            self._audit_logger.log_report_executed(
                report=report.value,
                result_count=result.count,
                description=result.description,
            )
        return result
