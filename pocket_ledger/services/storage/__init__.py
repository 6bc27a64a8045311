"""
Storage Services Package

Provides the abstract ledger storage interface and its implementations:
the pipe-delimited flat file used in production and an in-memory ledger.
"""

from pocket_ledger.services.storage.interface import (
    LedgerCreateError,
    LedgerReadError,
    LedgerStorageInterface,
    LedgerWriteError,
    StorageError,
)
from pocket_ledger.services.storage.flat_file import FlatFileLedgerStorage
from pocket_ledger.services.storage.memory import InMemoryLedgerStorage

__all__ = [
    # Interface
    "LedgerStorageInterface",
    # Exceptions
    "LedgerCreateError",
    "LedgerReadError",
    "LedgerWriteError",
    "StorageError",
    # Implementations
    "FlatFileLedgerStorage",
    "InMemoryLedgerStorage",
]
