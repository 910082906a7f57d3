"""
Search and filtering over hex dump lines.
"""

from dataclasses import dataclass
from typing import Generic, List, Optional, Protocol, Sequence, TypeVar, TYPE_CHECKING

if TYPE_CHECKING:
    from ..core.formatter import LineRecord

T = TypeVar('T')
T_contra = TypeVar('T_contra', contravariant=True)


@dataclass
class LineFilter(Generic[T]):
    """A line kept by a filter, with its index in the unfiltered collection."""
    item: T
    origin: int


class LineView(Protocol[T_contra]):
    """How a kind of line is shown and matched."""

    def render(self, item: T_contra) -> str:
        ...

    def extra_filter(self, item: T_contra, query: str) -> bool:
        ...


class HexLineView:
    """View over formatted LineRecords."""

    def render(self, item: 'LineRecord') -> str:
        return item.text

    def extra_filter(self, item: 'LineRecord', query: str) -> bool:
        """Match the query as whole bytes of hex digits, ignoring the layout spacing."""

        digits = query.replace(' ', '')
        if not digits:
            return False

        haystack = item.raw.hex()
        pos = haystack.find(digits)
        while pos >= 0:
            if pos % 2 == 0:
                return True
            pos = haystack.find(digits, pos + 1)

        return False


class PlainLineView:
    """View over plain text lines."""

    def render(self, item: str) -> str:
        return item

    def extra_filter(self, item: str, query: str) -> bool:
        return False


def filter_lines(items: Sequence[T], query: Optional[str], view: LineView[T]) -> List[LineFilter[T]]:
    """
    Filter lines with a case-insensitive query.

    Args:
        items: The unfiltered lines
        query: The query, empty or None keeps every line
        view: Rendering and extra matching rules for the line kind

    Returns:
        List[LineFilter]: Kept lines with their original index
    """

    if not query:
        return [LineFilter(item, i) for i, item in enumerate(items)]

    query = query.lower()
    result = []
    for i, item in enumerate(items):
        if query in view.render(item).lower() or view.extra_filter(item, query):
            result.append(LineFilter(item, i))

    return result
