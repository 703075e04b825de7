"""Query and highlight state of the menu, independent of any widget."""

from typing import Sequence

from goto_core.search import filter_indices

PAGE_SIZE = 10


class MenuState:
    """Tracks the current query, which entries it leaves visible, and the
    highlighted row.

    ``cursor`` and ``top`` are positions within ``visible``; the highlight
    never leaves the visible subset.
    """

    def __init__(self, names: Sequence[str], page_size: int = PAGE_SIZE):
        self._names = list(names)
        self.page_size = max(1, page_size)
        self.query = ""
        self.visible: list[int] = list(range(len(self._names)))
        self.cursor = 0
        self.top = 0

    def set_query(self, query: str) -> None:
        """Re-filter for *query*; the highlight goes back to the first match."""
        self.query = query
        self.visible = filter_indices(query, self._names)
        self.cursor = 0
        self.top = 0

    def move(self, delta: int) -> None:
        if not self.visible:
            return
        self.cursor = max(0, min(len(self.visible) - 1, self.cursor + delta))
        if self.cursor < self.top:
            self.top = self.cursor
        elif self.cursor >= self.top + self.page_size:
            self.top = self.cursor - self.page_size + 1

    @property
    def selected_index(self) -> int | None:
        """Index into the unfiltered entries of the highlighted row."""
        if not self.visible:
            return None
        return self.visible[self.cursor]

    def page(self) -> list[tuple[int, bool]]:
        """Rows to draw: ``(entry index, is highlighted)`` for the current page."""
        rows = self.visible[self.top:self.top + self.page_size]
        return [(idx, self.top + i == self.cursor) for i, idx in enumerate(rows)]
