"""
In-Memory Storage Implementation

Holds the ledger as a list of encoded lines. Lines go through the same
codec as the flat file, so a line appended here reads back exactly as
it would from disk. Used by tests and by callers that want a scratch
ledger.
"""

from typing import Iterable, Optional

from pocket_ledger.models.transaction import ReadResult, Transaction
from pocket_ledger.services.storage.codec import (
    HEADER,
    decode_lines,
    encode_transaction,
)
from pocket_ledger.services.storage.interface import LedgerStorageInterface


class InMemoryLedgerStorage(LedgerStorageInterface):
    """List-backed ledger; `lines` may be seeded with raw text."""

    def __init__(self, lines: Optional[Iterable[str]] = None):
        self._lines: Optional[list[str]] = list(lines) if lines is not None else None

    @property
    def location(self) -> str:
        return "<memory>"

    @property
    def lines(self) -> list[str]:
        return list(self._lines or [])

    def ensure_exists(self) -> bool:
        if self._lines is not None:
            return False
        self._lines = [HEADER]
        return True

    def read_all(self) -> ReadResult:
        self.ensure_exists()
        return decode_lines(self._lines)

    def append(self, transaction: Transaction) -> None:
        self.ensure_exists()
        self._lines.append(encode_transaction(transaction))
