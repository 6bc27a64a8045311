"""
Two-Stage Entry Validation

Raw strings typed at the prompts are turned into a Transaction that is
safe to append.

STAGE 1 - SCHEMA VALIDATION:
- Entry kind must be EXPENSE or INCOME
- Amount must parse as a finite decimal
Any failure here rejects the entry.

STAGE 2 - NORMALIZATION AND SEMANTIC CHECKS:
- Sign forced by the kind (expenses negative, income positive)
- Amount rounded to cents
- Delimiters in free text replaced, whitespace trimmed
- Warnings for entries that are legal but probably unintended
Warnings travel with the accepted entry; they never block it.

IMPORTANT: Validation never raises for bad input. Problems come back
as diagnostics next to the (possibly missing) transaction.
"""

import datetime as dt
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from pocket_ledger.models.transaction import (
    Diagnostic,
    DiagnosticSource,
    EntryResult,
    Transaction,
    TransactionKind,
)
from pocket_ledger.services.storage.codec import CENTS, parse_amount, sanitize


CANCEL_TOKEN = "x"


def is_cancel(text: Optional[str]) -> bool:
    """Typing X (any case) at a prompt cancels the entry."""
    return text is None or text.strip().lower() == CANCEL_TOKEN


def _issue(field: str, message: str, raw: Optional[str] = None) -> Diagnostic:
    return Diagnostic(
        source=DiagnosticSource.INPUT,
        message=message,
        field=field,
        raw=raw,
    )


class EntryValidator:
    """
    Validates and normalizes a new ledger entry.

    Stage 1 rejects, stage 2 normalizes and warns.
    """

    def _validate_schema(
        self,
        kind: TransactionKind,
        amount_text: str,
    ) -> tuple[Optional[Decimal], list[Diagnostic]]:
        """
        Stage 1: Schema validation.

        Returns: (parsed_amount_or_None, list_of_issues)
        """
        issues = []

        if kind not in (TransactionKind.EXPENSE, TransactionKind.INCOME):
            issues.append(_issue(
                "kind",
                f"An entry must be an expense or income, not '{kind.value}'",
                raw=kind.value,
            ))

        amount = None
        if not amount_text or not amount_text.strip():
            issues.append(_issue("amount", "Amount is required"))
        else:
            amount = parse_amount(amount_text)
            if amount is None:
                issues.append(_issue(
                    "amount",
                    "Invalid amount. Please enter a numeric value (e.g. 123.45).",
                    raw=amount_text,
                ))

        return amount, issues

    def _normalize_amount(self, kind: TransactionKind, amount: Decimal) -> Decimal:
        magnitude = abs(amount).quantize(CENTS, rounding=ROUND_HALF_UP)
        if kind == TransactionKind.EXPENSE and magnitude != 0:
            return -magnitude
        return magnitude

    def _validate_semantic(
        self,
        description: str,
        vendor: str,
        amount: Decimal,
    ) -> list[Diagnostic]:
        """
        Stage 2: Semantic checks on the normalized entry.

        Returns warnings only.
        """
        issues = []

        if not description:
            issues.append(_issue("description", "Description is empty"))

        if not vendor:
            issues.append(_issue("vendor", "Vendor/payer is empty"))

        if amount == 0:
            issues.append(_issue(
                "amount",
                "Amount rounds to 0.00; it will count toward neither income nor expenses",
            ))

        return issues

    def normalize(
        self,
        kind: TransactionKind,
        description: str,
        vendor: str,
        amount_text: str,
        when: Optional[dt.datetime] = None,
    ) -> EntryResult:
        """
        Run the full validation pipeline.

        Args:
            kind: EXPENSE or INCOME; decides the sign of the amount
            description: What the entry is for
            vendor: Vendor (expense) or payer (income)
            amount_text: Amount as typed; its sign is ignored
            when: Timestamp of the entry, defaults to now

        Returns:
            EntryResult with the transaction (if accepted) and diagnostics
        """
        kind = TransactionKind(kind)
        amount, issues = self._validate_schema(kind, amount_text)
        if issues:
            return EntryResult(diagnostics=issues)

        description = sanitize(description or "").strip()
        vendor = sanitize(vendor or "").strip()
        amount = self._normalize_amount(kind, amount)
        when = when or dt.datetime.now()

        transaction = Transaction(
            date=when.date(),
            time=when.time(),
            description=description,
            vendor=vendor,
            amount=amount,
        )
        return EntryResult(
            transaction=transaction,
            diagnostics=self._validate_semantic(description, vendor, amount),
        )
