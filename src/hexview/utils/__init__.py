"""
Utility package for hex conversions and line search.
"""

from .hex_utils import (
    abbreviate,
    bytes_to_printable,
    concat_raw,
    hex_to_bytes,
    hex_to_printable,
    human_size,
)
from .search import (
    HexLineView,
    LineFilter,
    PlainLineView,
    filter_lines,
)

__all__ = [
    'abbreviate',
    'bytes_to_printable',
    'concat_raw',
    'hex_to_bytes',
    'hex_to_printable',
    'human_size',
    'HexLineView',
    'LineFilter',
    'PlainLineView',
    'filter_lines',
]
