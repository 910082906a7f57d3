"""
Exception classes for hex dump formatting and editing.
"""

from typing import Any, Dict, Optional


class HexViewError(Exception):
    """Base exception for all hexview errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            detail_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({detail_str})"
        return self.message


class InvalidLengthError(HexViewError, ValueError):
    """Raised when the requested format length exceeds the buffer size."""

    def __init__(self, length: int, buffer_length: int) -> None:
        self.length = length
        self.buffer_length = buffer_length
        super().__init__(
            "length > buffer length",
            {"length": length, "buffer_length": buffer_length},
        )
