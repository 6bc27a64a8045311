"""
Flat-File Storage Implementation

DESIGN DECISION: The ledger is a single pipe-delimited text file
because:
1. Users can open and read it in any editor
2. No database setup required
3. Appending one line is the only write we ever need

TRADEOFFS:
- Every query re-reads and re-parses the whole file (fine at
  personal-finance volumes, and external edits are always picked up)
- No locking; one user, one process
- No rewrite, so a bad line stays in the file and is skipped on read
"""

from pathlib import Path
from typing import Optional, Union

import structlog

from pocket_ledger.audit.logger import AuditLogger
from pocket_ledger.models.transaction import ReadResult, Transaction
from pocket_ledger.services.storage.codec import (
    HEADER,
    decode_lines,
    encode_transaction,
    format_amount,
)
from pocket_ledger.services.storage.interface import (
    LedgerCreateError,
    LedgerReadError,
    LedgerStorageInterface,
    LedgerWriteError,
)


logger = structlog.get_logger(__name__)


class FlatFileLedgerStorage(LedgerStorageInterface):
    """
    Flat-file implementation of ledger storage.

    One transaction per line, optional header line first.
    """

    def __init__(
        self,
        path: Union[str, Path],
        encoding: str = "utf-8",
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._path = Path(path)
        self._encoding = encoding
        self._audit_logger = audit_logger

    @property
    def path(self) -> Path:
        return self._path

    @property
    def location(self) -> str:
        return str(self._path)

    def _report_error(self, operation: str, error: OSError) -> None:
        logger.error("ledger_io_failed", path=self.location, operation=operation, error=str(error))
        if self._audit_logger:
            self._audit_logger.log_storage_error(
                ledger_path=self.location,
                operation=operation,
                error_message=str(error),
            )

    def ensure_exists(self) -> bool:
        if self._path.exists():
            return False

        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            self._report_error("create", e)
            raise LedgerCreateError(f"Could not create ledger directory {self._path.parent}: {e}") from e

        try:
            # "x" refuses to clobber a file created since the check above
            with open(self._path, "x", encoding=self._encoding, newline="") as fh:
                fh.write(HEADER + "\n")
        except FileExistsError:
            return False
        except OSError as e:
            self._report_error("create", e)
            raise LedgerCreateError(f"Could not create ledger file {self._path}: {e}") from e

        logger.info("ledger_created", path=self.location)
        if self._audit_logger:
            self._audit_logger.log_ledger_created(self.location)
        return True

    def read_all(self) -> ReadResult:
        self.ensure_exists()

        try:
            with open(self._path, "r", encoding=self._encoding, newline="") as fh:
                result = decode_lines(fh)
        except (OSError, UnicodeDecodeError) as e:
            self._report_error("read", e)
            raise LedgerReadError(f"Error reading file {self._path}: {e}") from e

        logger.debug(
            "ledger_read",
            path=self.location,
            transactions=len(result.transactions),
            skipped=result.skipped_count,
        )
        if self._audit_logger:
            self._audit_logger.log_lines_skipped(self.location, result.diagnostics)
        return result

    def _needs_leading_newline(self) -> bool:
        """True when the last byte on disk is not a line break."""
        size = self._path.stat().st_size
        if size == 0:
            return False
        with open(self._path, "rb") as fh:
            fh.seek(-1, 2)
            return fh.read(1) not in (b"\n", b"\r")

    def append(self, transaction: Transaction) -> None:
        self.ensure_exists()
        line = encode_transaction(transaction)

        try:
            prefix = "\n" if self._needs_leading_newline() else ""
            with open(self._path, "a", encoding=self._encoding, newline="") as fh:
                fh.write(prefix + line + "\n")
        except OSError as e:
            self._report_error("append", e)
            raise LedgerWriteError(f"Error writing transaction: {e}") from e

        logger.info("transaction_appended", path=self.location, date=transaction.date.isoformat())
        if self._audit_logger:
            self._audit_logger.log_transaction_appended(
                ledger_path=self.location,
                vendor=transaction.vendor,
                amount=format_amount(transaction.amount),
            )
