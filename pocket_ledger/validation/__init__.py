"""Entry validation package."""

from pocket_ledger.validation.validator import EntryValidator, is_cancel

__all__ = ["EntryValidator", "is_cancel"]
