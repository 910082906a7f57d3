"""
hexview - hex dump formatting with undoable line edits.
"""

from .core import (
    CancellationToken,
    Config,
    HexBuffer,
    LineRecord,
    format_buffer,
    format_lines,
)

__version__ = "0.1.0"

__all__ = [
    'CancellationToken',
    'Config',
    'HexBuffer',
    'LineRecord',
    'format_buffer',
    'format_lines',
]
