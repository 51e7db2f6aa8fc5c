"""Bounded viewport over the rendered rows."""

from __future__ import annotations

from typing import Sequence


class Paginator:
    """Windows a list of rendered lines to ``page_size`` around the active row.

    With ``loop`` the cursor drifts down to the middle of the page as the
    user moves down and then stays there, the page wrapping around the end
    of the list. Without ``loop`` the page is a plain window clamped to the
    list, keeping the cursor centred where possible.

    The scroll position is kept between calls, so one paginator belongs to
    exactly one prompt session.
    """

    def __init__(self, page_size: int, loop: bool = True):
        if page_size <= 0:
            raise ValueError("page_size must be a positive integer")
        self.page_size = page_size
        self.loop = loop
        self.position = 0
        self.last_active = 0

    def _finite_position(self, active: int, total: int) -> int:
        middle = self.page_size // 2
        if active < middle:
            return active
        if active >= total - middle:
            return active + self.page_size - total
        return middle

    def _infinite_position(self, active: int) -> int:
        # Only moving down shifts the pointer, towards the middle of the page
        delta = active - self.last_active
        if 0 < delta < self.page_size:
            return min(self.page_size // 2, self.position + delta)
        return self.position

    def cursor_position(self, active: int, total: int) -> int:
        """Row of the page the active line is drawn on."""
        if total <= self.page_size:
            return active
        if self.loop:
            return self._infinite_position(active)
        return self._finite_position(active, total)

    def paginate(self, lines: Sequence[str], active: int) -> list[str]:
        """Return the visible page and remember the scroll position."""
        total = len(lines)
        position = self.cursor_position(active, total)
        self.position = position
        self.last_active = active

        if total <= self.page_size:
            return list(lines)

        start = active - position
        if self.loop:
            return [lines[(start + offset) % total] for offset in range(self.page_size)]
        return list(lines[start:start + self.page_size])
