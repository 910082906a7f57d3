"""
Reversible edit commands over a line collection.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import ClassVar, Dict, List

from .formatter import LineRecord


class EditCommand(ABC):
    """An edit that can be applied and reversed any number of times."""

    # Whether UndoRedo.record executes the command itself.
    EXECUTE_ON_RECORD: ClassVar[bool] = False

    @abstractmethod
    def execute(self) -> None:
        """Apply the edit to the line collection."""

    @abstractmethod
    def unexecute(self) -> None:
        """Reverse the edit."""


@dataclass
class UpdateCommand(EditCommand):
    """
    Replace the records starting at position.

    previous_records and new_records may differ in size, e.g. when one line
    is edited into more than 16 bytes or cleared entirely.
    """
    lines: List[LineRecord] = field(repr=False)
    position: int
    previous_records: List[LineRecord]
    new_records: List[LineRecord]

    def execute(self) -> None:
        end = self.position + len(self.previous_records)
        self.lines[self.position:end] = self.new_records

    def unexecute(self) -> None:
        end = self.position + len(self.new_records)
        self.lines[self.position:end] = self.previous_records


@dataclass
class DeleteCommand(EditCommand):
    """Remove records at their original indices."""
    EXECUTE_ON_RECORD: ClassVar[bool] = True

    lines: List[LineRecord] = field(repr=False)
    positions: Dict[int, LineRecord]

    def execute(self) -> None:
        # highest index first so pending indices do not shift
        for index in sorted(self.positions, reverse=True):
            del self.lines[index]

    def unexecute(self) -> None:
        for index in sorted(self.positions):
            self.lines.insert(index, self.positions[index])
