"""Pytest configuration and shared fixtures for hexview tests."""

import pytest

from hexview.core.formatter import CancellationToken, format_lines


class CountdownToken(CancellationToken):
    """Token reporting cancellation once it has been checked `checks` times."""

    def __init__(self, checks: int) -> None:
        super().__init__()
        self.checks = checks
        self.calls = 0

    def is_cancelled(self) -> bool:
        self.calls += 1
        return super().is_cancelled() or self.calls > self.checks


@pytest.fixture
def alphabet():
    """16 bytes spelling A..P, one full row."""
    return b"ABCDEFGHIJKLMNOP"


@pytest.fixture
def sample_data():
    """Four full rows of data covering printable and non-printable bytes."""
    return bytes(range(0x1c, 0x5c))


@pytest.fixture
def sample_lines(sample_data):
    return format_lines(sample_data)


@pytest.fixture
def sample_file(tmp_path, sample_data):
    file_path = tmp_path / "sample.bin"
    file_path.write_bytes(sample_data)
    return file_path


@pytest.fixture
def control_events():
    """Collects (control, enabled) notifications from the undo/redo history."""
    events = []

    def callback(control, enabled):
        events.append((control, enabled))

    callback.events = events
    return callback
