"""
Writing an edited line collection back out as raw bytes.
"""

import logging
import os
from dataclasses import dataclass
from typing import BinaryIO, Callable, Iterable, Optional

from .config import SAVE_CHUNK_SIZE
from .formatter import CancellationToken, LineRecord
from ..utils.hex_utils import concat_raw

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int], None]


@dataclass
class SaveResult:
    """Outcome of a save: success, cancellation or an I/O error message."""
    destination: str
    error_message: Optional[str] = None
    cancelled: bool = False

    @property
    def success(self) -> bool:
        return self.error_message is None and not self.cancelled


def write_records(records: Iterable[LineRecord], sink: BinaryIO,
                  cancel: Optional[CancellationToken] = None,
                  chunk_size: int = SAVE_CHUNK_SIZE,
                  progress: Optional[ProgressCallback] = None) -> int:
    """
    Write the raw bytes of records to a binary sink.

    Output goes out in chunk_size blocks followed by the remainder.

    Args:
        records: The line collection, in order
        sink: Binary file-like object
        cancel: Optional token, checked once per chunk
        chunk_size: Block size in bytes
        progress: Called with the size of each written block

    Returns:
        int: Number of bytes written
    """

    data = concat_raw(records, cancel)
    written = 0

    view = memoryview(data)
    for offset in range(0, len(data), chunk_size):
        if cancel is not None and cancel.is_cancelled():
            break

        block = view[offset:offset + chunk_size]
        sink.write(block)
        written += len(block)

        if progress is not None:
            progress(len(block))

    sink.flush()
    return written


def _remove_partial(destination: str) -> None:
    try:
        if os.path.exists(destination):
            os.remove(destination)
    except OSError as e:
        logger.error("Unable to remove partial file %s: %s", destination, e)


def save_records(records: Iterable[LineRecord], destination: str,
                 cancel: Optional[CancellationToken] = None,
                 chunk_size: int = SAVE_CHUNK_SIZE,
                 progress: Optional[ProgressCallback] = None) -> SaveResult:
    """
    Save the records to a file.

    A cancelled save removes whatever was already written.

    Returns:
        SaveResult: Never raises for I/O errors, they end up in error_message
    """

    result = SaveResult(destination)

    try:
        with open(destination, 'wb') as f:
            written = write_records(records, f, cancel, chunk_size, progress)
    except OSError as e:
        logger.error("Failed to save %s: %s", destination, e)
        result.error_message = str(e)
        return result

    if cancel is not None and cancel.is_cancelled():
        logger.info("Save of %s cancelled", destination)
        result.cancelled = True
        _remove_partial(destination)
        return result

    logger.info("Saved %d bytes to %s", written, destination)
    return result
