"""
Record Codec

Converts a Transaction to and from one line of the ledger file:

    date|time|description|vendor|amount
    2024-03-15|09:00:00|Coffee|Cafe|-4.50

DESIGN DECISION: Decoding never raises. A line that cannot be turned
into a Transaction comes back as a Diagnostic and the read carries on.
There is no quoting or escaping; the writer replaces any delimiter or line
break in free text with a space instead.
"""

import datetime as dt
import re
from decimal import ROUND_HALF_UP, Context, Decimal, InvalidOperation, getcontext
from typing import Iterable, Optional, Union

from pocket_ledger.models.transaction import (
    Diagnostic,
    DiagnosticSource,
    ReadResult,
    Transaction,
)


DELIMITER = "|"
FIELD_NAMES = ["date", "time", "description", "vendor", "amount"]
HEADER = DELIMITER.join(FIELD_NAMES)

DATE_FORMAT = "%Y-%m-%d"
TIME_FORMAT = "%H:%M:%S"
CENTS = Decimal("0.01")

_DATE_SHAPE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")
_LINE_BREAKS = str.maketrans({"\r": " ", "\n": " "})


def sanitize(text: str) -> str:
    """Replace delimiters and line breaks with spaces so a record stays one line."""
    return text.replace(DELIMITER, " ").translate(_LINE_BREAKS)


def format_amount(amount: Decimal) -> str:
    """Exactly two decimals, rounded half-up; never "-0.00"."""
    amount = Decimal(amount)
    # wide enough for every digit left of the point, so large totals still print
    context = Context(prec=max(getcontext().prec, amount.adjusted() + 3))
    quantized = amount.quantize(CENTS, rounding=ROUND_HALF_UP, context=context)
    if quantized == 0:
        quantized = Decimal("0.00")
    return f"{quantized:.2f}"


def parse_amount(text: str) -> Optional[Decimal]:
    """
    Parse a signed decimal; None for anything non-numeric or non-finite.

    Values too large to hold at cent precision are rejected as well.
    """
    try:
        value = Decimal(text.strip())
        if not value.is_finite():
            return None
        value.quantize(CENTS, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        return None
    return value


def parse_date(text: str) -> Optional[dt.date]:
    """Strict YYYY-MM-DD; unpadded months or days are not accepted."""
    text = text.strip()
    if not _DATE_SHAPE.fullmatch(text):
        return None
    try:
        return dt.datetime.strptime(text, DATE_FORMAT).date()
    except ValueError:
        return None


def parse_time(text: str) -> Optional[dt.time]:
    try:
        return dt.time.fromisoformat(text.strip())
    except ValueError:
        return None


def encode(
    description: str,
    vendor: str,
    amount: Decimal,
    date: dt.date,
    time: dt.time,
) -> str:
    """
    Format one ledger line (without the trailing newline).

    Args:
        description: Free text, delimiters and line breaks become spaces
        vendor: Free text, delimiters and line breaks become spaces
        amount: Signed amount, written with two decimals
        date: Written as YYYY-MM-DD
        time: Written as 24-hour HH:MM:SS

    Returns:
        The delimited line
    """
    return DELIMITER.join([
        date.strftime(DATE_FORMAT),
        time.strftime(TIME_FORMAT),
        sanitize(description),
        sanitize(vendor),
        format_amount(amount),
    ])


def encode_transaction(transaction: Transaction) -> str:
    return encode(
        description=transaction.description,
        vendor=transaction.vendor,
        amount=transaction.amount,
        date=transaction.date,
        time=transaction.time,
    )


def _skip(line: str, line_number: Optional[int], message: str, field: Optional[str] = None) -> Diagnostic:
    return Diagnostic(
        source=DiagnosticSource.LINE,
        message=f"Skipping invalid row ({message}): {line}",
        line_number=line_number,
        field=field,
        raw=line,
    )


def decode(line: str, line_number: Optional[int] = None) -> Union[Transaction, Diagnostic]:
    """
    Decode one ledger line.

    Returns the Transaction, or a Diagnostic explaining why the line
    was skipped. Fields after the fifth are ignored.
    """
    line = line.rstrip("\r\n")
    # str.split keeps trailing empty fields
    parts = line.split(DELIMITER)
    if len(parts) < len(FIELD_NAMES):
        return _skip(line, line_number, f"expected {len(FIELD_NAMES)} fields, found {len(parts)}")

    date = parse_date(parts[0])
    if date is None:
        return _skip(line, line_number, "bad date", field="date")

    time = parse_time(parts[1])
    if time is None:
        return _skip(line, line_number, "bad time", field="time")

    amount = parse_amount(parts[4])
    if amount is None:
        return _skip(line, line_number, "bad amount", field="amount")

    return Transaction(
        date=date,
        time=time,
        description=parts[2].strip(),
        vendor=parts[3].strip(),
        amount=amount,
    )


def is_header(line: str) -> bool:
    """
    Header sniffing: the first non-blank line is a header when it
    starts with "date" (case-insensitive).

    A first data row whose text starts with "date" would be dropped
    as a header too; that matches files written by earlier versions.
    """
    return line.strip().lower().startswith("date")


def decode_lines(lines: Iterable[str]) -> ReadResult:
    """
    Decode a whole ledger in order.

    Blank lines are skipped silently, the header (if any) is skipped
    once, and every other line either yields a Transaction or a
    Diagnostic.
    """
    result = ReadResult()
    seen_content = False

    for line_number, raw in enumerate(lines, start=1):
        line = raw.rstrip("\r\n")
        if not line.strip():
            continue

        if not seen_content:
            seen_content = True
            if is_header(line):
                continue

        decoded = decode(line, line_number=line_number)
        if isinstance(decoded, Transaction):
            result.transactions.append(decoded)
        else:
            result.diagnostics.append(decoded)

    return result
