"""
Buffer module holding the editable hex dump of one file.
"""

import logging
from dataclasses import replace
from typing import Iterable, List, Optional

from .commands import DeleteCommand, UpdateCommand
from .config import Config
from .exceptions import InvalidLengthError
from .formatter import CancellationToken, LineRecord, format_buffer, format_lines, format_plain
from .history import ControlCallback, UndoRedo
from .saver import ProgressCallback, SaveResult, save_records
from .validator import is_valid_hex_line, normalize_hex_input
from ..utils.hex_utils import concat_raw, hex_to_bytes, human_size

logger = logging.getLogger(__name__)


class HexBuffer:
    """Line collection of a hex dump together with its edit history."""

    def __init__(self, config: Optional[Config] = None,
                 on_control_state_changed: Optional[ControlCallback] = None) -> None:
        self.config = config or Config()
        self.lines: List[LineRecord] = []
        self.filename: Optional[str] = None
        self.history = UndoRedo(on_control_state_changed)

    @property
    def modified(self) -> bool:
        return self.history.is_changed()

    def get_line(self, line_number: int) -> LineRecord:
        return self.lines[line_number]

    def get_line_count(self) -> int:
        return len(self.lines)

    def get_size(self) -> int:
        """Get the size of the edited payload in bytes."""

        return sum(len(record.raw) for record in self.lines)

    def get_human_size(self) -> str:
        return human_size(self.get_size())

    def to_bytes(self, cancel: Optional[CancellationToken] = None) -> bytes:
        return concat_raw(self.lines, cancel)

    def plain_lines(self, cancel: Optional[CancellationToken] = None) -> List[str]:
        """Get the payload as plain text lines."""

        return format_plain(self.to_bytes(cancel), cancel)

    def load_bytes(self, data: bytes, cancel: Optional[CancellationToken] = None,
                   length: Optional[int] = None) -> bool:
        """
        Replace the buffer content with the formatted data.

        Args:
            data (bytes): The raw buffer
            cancel (CancellationToken): Optional cancellation token
            length (int): Only format the first length bytes. A length
                greater than the data leaves the buffer empty.

        Returns:
            bool: False if cancelled, in which case nothing changed
        """

        try:
            lines = format_buffer(data, length, cancel)
        except InvalidLengthError as e:
            logger.warning("Nothing to show: %s", e)
            lines = []

        if cancel is not None and cancel.is_cancelled():
            return False

        self.lines[:] = lines
        self.history.reset()
        self.history.checkpoint()
        return True

    def load_file(self, filename: str, cancel: Optional[CancellationToken] = None,
                  length: Optional[int] = None) -> bool:
        """Load and format a file."""

        with open(filename, 'rb') as f:
            data = f.read()

        if not self.load_bytes(data, cancel, length):
            logger.info("Loading %s cancelled", filename)
            return False

        self.filename = filename
        self.config.add_recent_file(filename)
        logger.info("Loaded %s (%s, %d lines)", filename, human_size(len(data)), len(self.lines))
        return True

    def update_line(self, position: int, hex_text: str) -> bool:
        """
        Replace a line with new hex content.

        The new bytes may span several lines or none at all.

        Args:
            position (int): Index of the line to replace
            hex_text (str): Hex digits typed by the user, spaces allowed

        Returns:
            bool: False if the hex text is invalid, nothing is changed then
        """

        if not 0 <= position < len(self.lines):
            raise IndexError(f"line {position} out of range")

        digits = normalize_hex_input(hex_text)
        if not is_valid_hex_line(digits, self.config.enforce_line_length):
            logger.debug("Rejected hex input for line %d: %r", position, hex_text)
            return False

        previous = self.lines[position]
        if digits == previous.raw.hex():
            return True

        records = [replace(record, updated=True) for record in format_lines(hex_to_bytes(digits))]
        command = UpdateCommand(self.lines, position, [previous], records)
        command.execute()
        self.history.record(command)
        return True

    def delete_lines(self, positions: Iterable[int]) -> Optional[DeleteCommand]:
        """Delete the lines at the given indices as a single undoable edit."""

        entries = {}
        for position in positions:
            if not 0 <= position < len(self.lines):
                raise IndexError(f"line {position} out of range")
            entries[position] = self.lines[position]

        if not entries:
            return None

        command = DeleteCommand(self.lines, entries)
        self.history.record(command)
        return command

    def undo(self) -> bool:
        return self.history.undo()

    def redo(self) -> bool:
        return self.history.redo()

    def save_file(self, filename: Optional[str] = None,
                  cancel: Optional[CancellationToken] = None,
                  progress: Optional[ProgressCallback] = None) -> SaveResult:
        """
        Save the edited bytes.

        A cancelled save removes the destination file. When saving in place
        this deletes the file that was loaded, the lines are still held in
        memory and can be saved again.

        Args:
            filename: Optional filename to save to. If None, uses current filename.
            cancel: Optional token, checked once per written chunk
            progress: Optional callback, called with the size of each written block

        Returns:
            SaveResult: The outcome. The edit history is only checkpointed on success.
        """

        save_filename = filename or self.filename
        if not save_filename:
            raise ValueError("No filename to save to")

        result = save_records(self.lines, save_filename, cancel,
                              self.config.save_chunk_size, progress)
        if result.success:
            self.filename = save_filename
            self.history.checkpoint()
            self.config.add_recent_file(save_filename)

        return result

    def close(self) -> None:
        """Drop the content and the history."""

        self.lines.clear()
        self.history.reset()
        self.history.checkpoint()
        self.filename = None
