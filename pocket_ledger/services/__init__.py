"""Services package."""

from pocket_ledger.services.storage import (
    FlatFileLedgerStorage,
    InMemoryLedgerStorage,
    LedgerCreateError,
    LedgerReadError,
    LedgerStorageInterface,
    LedgerWriteError,
    StorageError,
)

__all__ = [
    # Storage services
    "FlatFileLedgerStorage",
    "InMemoryLedgerStorage",
    "LedgerCreateError",
    "LedgerReadError",
    "LedgerStorageInterface",
    "LedgerWriteError",
    "StorageError",
]
