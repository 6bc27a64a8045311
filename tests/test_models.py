"""
Tests for Pocket Ledger

Test strategy:
1. Unit tests for individual components (models, codec, filters, validator)
2. Integration tests for flows against a real file under tmp_path
3. No shared on-disk state between tests
"""

import datetime as dt
from decimal import Decimal

import pytest
from pydantic import ValidationError

from pocket_ledger.models.transaction import (
    BalanceSummary,
    DateRange,
    Diagnostic,
    DiagnosticSource,
    QueryResult,
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


class TestTransactionModel:
    """Tests for the Transaction model."""

    def test_transaction_creation(self):
        """Test Transaction model creation."""
        t = Transaction(
            date=dt.date(2024, 3, 15),
            time=dt.time(9, 0, 0),
            description="Coffee",
            vendor="Cafe",
            amount=Decimal("-4.50"),
        )
        assert t.amount == Decimal("-4.50")
        assert t.is_expense is True
        assert t.is_income is False

    def test_transaction_is_immutable(self):
        """Test that a recorded transaction cannot be changed."""
        t = Transaction(date=dt.date(2024, 1, 1), time=dt.time(8, 0), amount=Decimal("1"))
        with pytest.raises(ValidationError):
            t.amount = Decimal("2")

    def test_time_drops_microseconds(self):
        """Test that time is kept at second precision."""
        t = Transaction(date=dt.date(2024, 1, 1), time=dt.time(8, 0, 1, 999999), amount=Decimal("1"))
        assert t.time == dt.time(8, 0, 1)

    def test_zero_amount_is_neither_side(self):
        t = Transaction(date=dt.date(2024, 1, 1), time=dt.time(8, 0), amount=Decimal("0"))
        assert t.is_expense is False
        assert t.is_income is False

    def test_non_finite_amount_rejected(self):
        with pytest.raises(ValidationError):
            Transaction(date=dt.date(2024, 1, 1), time=dt.time(8, 0), amount=Decimal("NaN"))

    def test_equal_transactions_compare_equal(self):
        a = Transaction(date=dt.date(2024, 1, 1), time=dt.time(8, 0), amount=Decimal("-4.5"))
        b = Transaction(date=dt.date(2024, 1, 1), time=dt.time(8, 0), amount=Decimal("-4.50"))
        assert a == b


class TestResultModels:
    """Tests for diagnostics and result containers."""

    def test_diagnostic_str_includes_line_number(self):
        d = Diagnostic(source=DiagnosticSource.LINE, message="bad row", line_number=3)
        assert str(d) == "line 3: bad row"

    def test_diagnostic_str_without_line_number(self):
        d = Diagnostic(source=DiagnosticSource.CRITERION, message="Bad amount")
        assert str(d) == "Bad amount"

    def test_query_result_defaults(self):
        result = QueryResult()
        assert result.count == 0
        assert result.data_found is False
        assert result.diagnostics == []

    def test_balance_summary_defaults_to_zero(self):
        assert BalanceSummary().as_tuple() == (0, 0, 0)


class TestDateRange:
    """Tests for DateRange."""

    def test_range_is_inclusive(self):
        window = DateRange(start=dt.date(2024, 2, 1), end=dt.date(2024, 2, 29))
        assert dt.date(2024, 2, 1) in window
        assert dt.date(2024, 2, 29) in window
        assert dt.date(2024, 3, 1) not in window

    def test_inverted_range_rejected(self):
        with pytest.raises(ValueError, match="Date range end cannot be before start"):
            DateRange(start=dt.date(2024, 3, 1), end=dt.date(2024, 2, 1))


class TestSearchCriteria:
    """Tests for raw search criteria."""

    def test_whitespace_is_stripped(self):
        criteria = SearchCriteria(vendor="  caf  ", amount="   ")
        assert criteria.vendor == "caf"
        assert criteria.amount == ""

    def test_all_fields_optional(self):
        criteria = SearchCriteria()
        assert criteria.start_date is None
        assert criteria.end_date is None


class TestAuditModels:
    """Tests for audit-related models."""

    def test_ledger_event_creation(self):
        """Test LedgerEvent model creation."""
        event = LedgerEvent(
            event_type=LedgerEventType.LEDGER_CREATED,
            description="Ledger created",
        )
        assert event.event_type == LedgerEventType.LEDGER_CREATED
        assert event.severity == AuditSeverity.INFO

    def test_ledger_event_to_log_dict(self):
        """Test conversion to log dictionary."""
        event = LedgerEventBuilder.transaction_appended(
            ledger_path="transactions.csv",
            vendor="Cafe",
            amount="-4.50",
        )
        log_dict = event.to_log_dict()
        assert "event_id" in log_dict
        assert log_dict["event_type"] == "transaction_appended"
        assert log_dict["details"]["amount"] == "-4.50"

    def test_lines_skipped_is_a_warning(self):
        event = LedgerEventBuilder.lines_skipped("transactions.csv", ["line 2: bad", "line 5: bad"])
        assert event.severity == AuditSeverity.WARNING
        assert event.description == "Skipped 2 malformed line(s)"

    def test_storage_error_carries_message(self):
        event = LedgerEventBuilder.storage_error("transactions.csv", "append", "disk full")
        assert event.severity == AuditSeverity.ERROR
        assert event.error_message == "disk full"
        assert event.details["operation"] == "append"


class TestTransactionKind:
    """Tests for the transaction kind enum."""

    def test_kind_values(self):
        assert TransactionKind("all") == TransactionKind.ALL
        assert TransactionKind.EXPENSE.value == "expense"
        assert TransactionKind.INCOME.value == "income"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
