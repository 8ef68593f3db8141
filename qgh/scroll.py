"""Viewport arithmetic for the scrollable lists.

Both views reserve a fixed number of chrome lines (header, search box or
repository fields, footer) plus two lines for the "more above" / "more
below" indicators. Whatever is left of the terminal height is the number of
list rows that fit, never less than one.
"""
from dataclasses import dataclass

# Lines reserved around the list: header, search box, footer and spacing
LIST_CHROME_LINES = 10
# Lines reserved around the PR list: header, name, URL, section title, footer and spacing
DETAIL_CHROME_LINES = 11
INDICATOR_LINES = 2


@dataclass(frozen=True)
class ScrollWindow:
    start: int
    end: int
    capacity: int
    more_above: bool
    more_below: bool

    def __contains__(self, index: int) -> bool:
        return self.start <= index < self.end


def visible_capacity(height: int, chrome: int) -> int:
    return max(1, height - chrome - INDICATOR_LINES)


def compute_window(height: int, chrome: int, length: int, offset: int) -> ScrollWindow:
    capacity = visible_capacity(height, chrome)
    start = max(0, min(offset, max(length - 1, 0)))
    end = min(start + capacity, length)
    return ScrollWindow(
        start=start,
        end=end,
        capacity=capacity,
        more_above=start > 0,
        more_below=end < length,
    )


def reveal(cursor: int, offset: int, capacity: int) -> int:
    """Smallest change to offset that puts cursor inside the window."""
    if cursor < offset:
        return cursor
    if cursor >= offset + capacity:
        return cursor - capacity + 1
    return max(offset, 0)


def move(cursor: int, offset: int, delta: int, length: int, capacity: int) -> tuple[int, int]:
    """Move the cursor by delta rows, clamped to the list, then scroll minimally.

    Returns the new (cursor, offset). An empty list pins both to 0.
    """
    if length <= 0:
        return 0, 0
    cursor = min(max(cursor + delta, 0), length - 1)
    return cursor, reveal(cursor, offset, capacity)
