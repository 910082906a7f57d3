"""
Core package for hex dump formatting and editing.

This package implements the formatter turning a buffer into hex dump lines,
the validation of edited lines, the reversible edit commands and their
undo/redo history, and the HexBuffer session tying them together.
"""

from .buffer import HexBuffer
from .commands import DeleteCommand, EditCommand, UpdateCommand
from .config import Config
from .exceptions import HexViewError, InvalidLengthError
from .formatter import (
    ROW_WIDTH,
    CancellationToken,
    LineRecord,
    extract_hex,
    extract_hex_and_split,
    format_buffer,
    format_lines,
)
from .history import Control, UndoRedo
from .saver import SaveResult
from .validator import is_valid_hex_line

__all__ = [
    'HexBuffer',
    'DeleteCommand',
    'EditCommand',
    'UpdateCommand',
    'Config',
    'HexViewError',
    'InvalidLengthError',
    'ROW_WIDTH',
    'CancellationToken',
    'LineRecord',
    'extract_hex',
    'extract_hex_and_split',
    'format_buffer',
    'format_lines',
    'Control',
    'UndoRedo',
    'SaveResult',
    'is_valid_hex_line',
]
