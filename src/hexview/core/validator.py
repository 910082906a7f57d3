"""
Validation of hex text typed by the user for a line.
"""

import re
from typing import Final

from .formatter import ROW_WIDTH
from ..utils.hex_utils import is_even

HEX_LINE_PATTERN: Final[re.Pattern] = re.compile(r'[0-9a-fA-F]+')
WHITESPACE_PATTERN: Final[re.Pattern] = re.compile(r'\s+')


def normalize_hex_input(text: str) -> str:
    """Strip whitespace from edited hex text and lower-case it."""

    return WHITESPACE_PATTERN.sub('', text).lower()


def is_valid_hex_line(line: str, enforce_max_length: bool) -> bool:
    """
    Test if a hex line is valid.

    Must be called before hex_to_bytes on user input, which would otherwise
    silently turn an odd or malformed line into 0 bytes.

    Args:
        line (str): Hex digits without separators
        enforce_max_length (bool): Reject lines longer than one row

    Returns:
        bool: True if the line is empty or an even number of hex digits
    """

    if not line:
        return True

    if not HEX_LINE_PATTERN.fullmatch(line) or not is_even(len(line)):
        return False

    return not enforce_max_length or len(line) <= ROW_WIDTH * 2
