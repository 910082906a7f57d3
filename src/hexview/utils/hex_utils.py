"""
Utility functions for hex text and byte conversions.
"""

from decimal import Decimal, ROUND_FLOOR
from typing import Final, Iterable, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from ..core.formatter import CancellationToken, LineRecord

HEX_DIGITS: Final[str] = '0123456789abcdefABCDEF'

SIZE_1KB: Final[int] = 0x400
SIZE_1MB: Final[int] = 0x100000
SIZE_1GB: Final[int] = 0x40000000

TWO_PLACES: Final[Decimal] = Decimal('0.01')


def is_even(num: int) -> bool:
    """Test if the number is even."""

    return num % 2 == 0


def hex_to_bytes(hex_digits: str) -> bytes:
    """
    Convert a string of hex digits into bytes.

    No validation is done here: an odd trailing digit produces a final
    0 byte and a malformed pair produces 0. Use is_valid_hex_line first
    on anything typed by a user.

    Args:
        hex_digits (str): Hex digits, case-insensitive, no separators

    Returns:
        bytes: The decoded bytes
    """

    length = len(hex_digits)
    data = bytearray((length + 1) // 2)

    for i in range(0, length - 1, 2):
        pair = hex_digits[i:i + 2]
        if pair[0] in HEX_DIGITS and pair[1] in HEX_DIGITS:
            data[i // 2] = int(pair, 16)

    return bytes(data)


def byte_to_printable(value: int) -> str:
    """Return the character shown for a byte in the ASCII column."""

    return chr(value) if 0x20 <= value <= 0x7e else '.'


def bytes_to_printable(data: Iterable[int]) -> str:
    """
    Map bytes to their printable ASCII representation.

    Args:
        data: Bytes to map

    Returns:
        str: One character per byte, '.' for anything outside 0x20-0x7e
    """

    return ''.join(byte_to_printable(b) for b in data)


def hex_to_printable(hex_text: str) -> str:
    """
    Preview hex text as printable ASCII.

    Spaces are ignored and an odd trailing digit is dropped.

    Args:
        hex_text (str): Hex text, optionally space separated

    Returns:
        str: The printable representation
    """

    digits = hex_text.replace(' ', '')
    if not is_even(len(digits)):
        digits = digits[:-1]

    return bytes_to_printable(hex_to_bytes(digits))


def _format_decimal(value: Decimal) -> str:
    text = f"{value.quantize(TWO_PLACES, rounding=ROUND_FLOOR):f}"
    return text.rstrip('0').rstrip('.')


def human_size(size: float) -> str:
    """
    Convert a size into a human readable string.

    Thresholds are decimal (1000, 1e6, 1e9) while divisors are binary,
    and the value is floored to two decimal places.

    Args:
        size (float): Size in bytes

    Returns:
        str: e.g. "500 o", "2 Ko", "1.46 Ko"
    """

    if size < 1000:
        return f"{int(size)} o"

    value = Decimal(size)
    if size < 1000000:
        return _format_decimal(value / SIZE_1KB) + " Ko"
    if size < 1000000000:
        return _format_decimal(value / SIZE_1MB) + " Mo"

    return _format_decimal(value / SIZE_1GB) + " Go"


def abbreviate(text: str, max_length: int) -> str:
    """Cut text to max_length characters, appending '...' when cut."""

    if len(text) <= max_length:
        return text

    return text[:max_length] + "..."


def concat_raw(records: Iterable['LineRecord'],
               cancel: Optional['CancellationToken'] = None) -> bytes:
    """
    Linearize the raw bytes of line records in collection order.

    Args:
        records: The line records
        cancel: Optional token, checked once per record

    Returns:
        bytes: The concatenated payload (partial if cancelled)
    """

    data = bytearray()
    for record in records:
        if cancel is not None and cancel.is_cancelled():
            break
        data += record.raw

    return bytes(data)
