"""
Abstract Storage Interface

DESIGN DECISION: The ledger core talks to storage through this
interface only. This allows us to:
1. Keep the pipe-delimited flat file as the production backend
2. Use in-memory storage for tests and embedding
3. Keep query logic decoupled from where the lines live

The interface is intentionally tiny: the ledger is append-only, so
there is no update, delete or lookup by id.
"""

from abc import ABC, abstractmethod

from pocket_ledger.models.transaction import ReadResult, Transaction


class LedgerStorageInterface(ABC):
    """
    Abstract interface for ledger storage operations.

    Any storage implementation must implement these methods.
    """

    @property
    @abstractmethod
    def location(self) -> str:
        """Human-readable location of the ledger (used in logs)."""
        pass

    @abstractmethod
    def ensure_exists(self) -> bool:
        """
        Create the ledger with its header line if it is missing.

        Idempotent; never truncates an existing ledger.

        Returns:
            True if the ledger was created by this call

        Raises:
            LedgerCreateError: If the ledger cannot be created
        """
        pass

    @abstractmethod
    def read_all(self) -> ReadResult:
        """
        Read every transaction, in ledger order.

        Malformed lines are skipped and reported as diagnostics.
        An empty ledger yields an empty result, not an error.

        Raises:
            LedgerReadError: If the ledger cannot be read at all
        """
        pass

    @abstractmethod
    def append(self, transaction: Transaction) -> None:
        """
        Append one transaction to the end of the ledger.

        Raises:
            LedgerWriteError: If the line cannot be written
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class LedgerCreateError(StorageError):
    """The ledger could not be created."""
    pass


class LedgerReadError(StorageError):
    """The ledger could not be opened or read."""
    pass


class LedgerWriteError(StorageError):
    """A transaction could not be appended."""
    pass
