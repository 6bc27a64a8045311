"""Query engine package: filters, calendar windows, balances and reports."""

from pocket_ledger.queries.aggregate import balance
from pocket_ledger.queries.executor import (
    ReportExecutionError,
    ReportExecutor,
    ReportType,
)
from pocket_ledger.queries.filters import (
    ParsedCriteria,
    custom_search,
    filter_by_date_range,
    filter_by_type,
    parse_criteria,
    search_by_vendor,
)
from pocket_ledger.queries.windows import (
    month_to_date,
    previous_month,
    previous_year,
    year_to_date,
)

__all__ = [
    "ParsedCriteria",
    "ReportExecutionError",
    "ReportExecutor",
    "ReportType",
    "balance",
    "custom_search",
    "filter_by_date_range",
    "filter_by_type",
    "month_to_date",
    "parse_criteria",
    "previous_month",
    "previous_year",
    "search_by_vendor",
    "year_to_date",
]
