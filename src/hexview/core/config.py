"""
Session configuration.
"""

import argparse
from dataclasses import dataclass, field
from typing import List

from .formatter import ROW_WIDTH

SAVE_CHUNK_SIZE = ROW_WIDTH * 10000


@dataclass
class Config:
    """Settings owned by one editing session."""
    enforce_line_length: bool = False
    save_chunk_size: int = SAVE_CHUNK_SIZE
    colour: bool = False
    max_recent_files: int = 10
    recent_files: List[str] = field(default_factory=list)

    def add_recent_file(self, filename: str) -> None:
        """Move filename to the front of the recent files list."""

        self.remove_recent_file(filename)
        self.recent_files.insert(0, filename)
        del self.recent_files[self.max_recent_files:]

    def remove_recent_file(self, filename: str) -> None:
        if filename in self.recent_files:
            self.recent_files.remove(filename)

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> 'Config':
        """Build a configuration from parsed command line options."""

        return cls(
            enforce_line_length=getattr(args, 'strict', False),
            save_chunk_size=getattr(args, 'chunk_size', None) or SAVE_CHUNK_SIZE,
            colour=getattr(args, 'colour', False),
        )
