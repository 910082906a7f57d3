"""
Hex dump formatter.

Turns a raw buffer into fixed-layout text lines, each paired with the bytes
that produced it. A full row looks like:

    68 65 6c 6c 6f 20 77 6f  72 6c 64 21 0a 00 01 02  hello wo rld!....

16 hex pairs with an extra space after the 8th, two spaces, then the ASCII
column with the same extra midpoint space. The last row of a buffer is
padded so its ASCII column starts at ASCII_OFFSET like every other row.
"""

import logging
import threading
from dataclasses import dataclass
from typing import Final, List, Optional, Tuple

from .exceptions import InvalidLengthError
from ..utils.hex_utils import byte_to_printable

logger = logging.getLogger(__name__)

ROW_WIDTH: Final[int] = 16
HALF_ROW: Final[int] = ROW_WIDTH // 2
# "xx " per byte, +1 midpoint space, +1 column separator
ASCII_OFFSET: Final[int] = ROW_WIDTH * 3 + 2
MAX_BY_LINE: Final[int] = ASCII_OFFSET + ROW_WIDTH + 1

HEX_HALF_WIDTH: Final[int] = HALF_ROW * 3


@dataclass
class LineRecord:
    """A formatted line and the raw bytes it was produced from."""
    text: str
    raw: bytes
    updated: bool = False


class CancellationToken:
    """Cooperative cancellation flag shared between a worker and its caller."""

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    def reset(self) -> None:
        self._event.clear()

    def is_cancelled(self) -> bool:
        return self._event.is_set()


def _padded_last_line(index: int, hex_parts: List[str], ascii_parts: List[str]) -> str:
    """
    Build the text of an incomplete final row.

    Each missing byte group is replaced by 3 spaces, plus one more when the
    midpoint separator was never written, so the ASCII column lines up with
    full rows. The ASCII text itself is stripped of surrounding spaces.
    """

    hex_text = ''.join(hex_parts).rstrip(' ')

    padding = '   ' * (ROW_WIDTH - index)
    if index <= HALF_ROW:
        padding += ' '

    return hex_text + padding + '  ' + ''.join(ascii_parts).strip(' ')


def format_buffer(buffer: bytes, length: Optional[int] = None,
                  cancel: Optional[CancellationToken] = None) -> List[LineRecord]:
    """
    Format a buffer as hex dump lines.

    Args:
        buffer (bytes): The input buffer
        length (int): Number of bytes to format, defaults to the whole buffer
        cancel (CancellationToken): Optional token, checked once per byte

    Returns:
        List[LineRecord]: The formatted lines. A cancelled run returns only
        the rows completed before cancellation.

    Raises:
        InvalidLengthError: If length is greater than the buffer size
    """

    if length is None:
        length = len(buffer)

    if length > len(buffer):
        raise InvalidLengthError(length, len(buffer))

    lines: List[LineRecord] = []
    hex_parts: List[str] = []
    ascii_parts: List[str] = []
    raw = bytearray()
    index = 0

    for offset in range(length):
        if cancel is not None and cancel.is_cancelled():
            break

        value = buffer[offset]
        hex_parts.append(f"{value:02x} ")
        ascii_parts.append(byte_to_printable(value))
        raw.append(value)

        if index == ROW_WIDTH - 1:
            lines.append(LineRecord(''.join(hex_parts) + ' ' + ''.join(ascii_parts), bytes(raw)))
            hex_parts.clear()
            ascii_parts.clear()
            raw.clear()
            index = 0
        else:
            index += 1

        if index == HALF_ROW:
            hex_parts.append(' ')
            ascii_parts.append(' ')

    if cancel is not None and cancel.is_cancelled():
        logger.debug("Formatting cancelled after %d lines", len(lines))
        return lines

    if index != 0:
        lines.append(LineRecord(_padded_last_line(index, hex_parts, ascii_parts), bytes(raw)))

    return lines


def format_lines(buffer: bytes, cancel: Optional[CancellationToken] = None) -> List[LineRecord]:
    """Format the whole buffer, returning no lines instead of raising."""

    try:
        return format_buffer(buffer, len(buffer), cancel)
    except InvalidLengthError as e:
        logger.debug("Nothing formatted: %s", e)
        return []


def format_plain(payload: bytes, cancel: Optional[CancellationToken] = None) -> List[str]:
    """
    Cut a payload into plain text lines of MAX_BY_LINE characters.

    Args:
        payload (bytes): The linearized buffer
        cancel (CancellationToken): Optional token, checked once per line

    Returns:
        List[str]: One character per byte, decoded as latin-1
    """

    lines = []
    for start in range(0, len(payload), MAX_BY_LINE):
        if cancel is not None and cancel.is_cancelled():
            break
        lines.append(payload[start:start + MAX_BY_LINE].decode('latin-1'))

    return lines


def extract_hex_and_split(text: str) -> Tuple[str, str]:
    """
    Extract the two half-row hex fields of a formatted line.

    Only valid for text produced by format_buffer.
    """

    return (text[0:HEX_HALF_WIDTH].strip(),
            text[HEX_HALF_WIDTH + 1:2 * HEX_HALF_WIDTH + 1].strip())


def extract_hex(text: str) -> str:
    """Extract the hex field of a formatted line, halves joined by one space."""

    left, right = extract_hex_and_split(text)
    return (left + ' ' + right).strip()
