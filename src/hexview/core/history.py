"""
Undo/redo history of edit commands.
"""

import logging
from collections import deque
from enum import Enum
from typing import Callable, Optional

from .commands import EditCommand

logger = logging.getLogger(__name__)


class Control(Enum):
    """The two history controls a UI can enable or disable."""
    UNDO = 'undo'
    REDO = 'redo'


ControlCallback = Callable[[Control, bool], None]


class UndoRedo:
    """
    Two-stack command history.

    The reference index is the undo stack depth at the last save; the buffer
    has unsaved changes whenever the depth differs from it.
    """

    def __init__(self, on_control_state_changed: Optional[ControlCallback] = None) -> None:
        self.undo_stack: deque[EditCommand] = deque()
        self.redo_stack: deque[EditCommand] = deque()
        self.reference_index = 0
        self.on_control_state_changed = on_control_state_changed

    def _notify(self, control: Control, enabled: bool) -> None:
        if self.on_control_state_changed is not None:
            self.on_control_state_changed(control, enabled)

    def record(self, command: EditCommand) -> EditCommand:
        """
        Push a command on the undo stack and drop the redo history.

        Commands with EXECUTE_ON_RECORD set are executed here; the others
        must already have been executed by the caller.
        """

        if command.EXECUTE_ON_RECORD:
            command.execute()

        self.undo_stack.append(command)
        self.redo_stack.clear()
        logger.debug("Recorded %s (undo depth %d)", type(command).__name__, len(self.undo_stack))

        self._notify(Control.UNDO, True)
        self._notify(Control.REDO, False)
        return command

    def undo(self) -> bool:
        """Reverse the last command."""

        if not self.undo_stack:
            return False

        command = self.undo_stack.pop()
        command.unexecute()
        self.redo_stack.append(command)

        self._notify(Control.UNDO, bool(self.undo_stack))
        self._notify(Control.REDO, True)
        return True

    def redo(self) -> bool:
        """Re-apply the last undone command."""

        if not self.redo_stack:
            return False

        command = self.redo_stack.pop()
        command.execute()
        self.undo_stack.append(command)

        self._notify(Control.UNDO, True)
        self._notify(Control.REDO, bool(self.redo_stack))
        return True

    def can_undo(self) -> bool:
        return bool(self.undo_stack)

    def can_redo(self) -> bool:
        return bool(self.redo_stack)

    def is_changed(self) -> bool:
        return len(self.undo_stack) != self.reference_index

    def checkpoint(self) -> None:
        """Mark the current state as saved."""

        self.reference_index = len(self.undo_stack)

    def reset(self) -> None:
        """Drop both stacks and disable both controls."""

        self.undo_stack.clear()
        self.redo_stack.clear()

        self._notify(Control.UNDO, False)
        self._notify(Control.REDO, False)
