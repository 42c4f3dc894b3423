"""
PageGeometry - Line counts per page and the global line index.

Provides:
- Line count for any page (pages 1 and 2 are short, all others standard)
- Conversion between (page, line) and a single corpus-wide line index
- Corpus size and completion share for a position

Every function is total: unknown pages fall back to the standard line count.
"""

from typing import Optional

from hifztrack.schemas import LinePosition, LineRange, MemorizationSettings


class PageGeometry:
    """
    Page layout of the memorized text.

    Lines are 1-based on every page. Global indices start at 1 on the first
    line of page 1 and run without gaps across page boundaries.
    """

    def __init__(self, settings: Optional[MemorizationSettings] = None):
        """
        Initialize geometry.

        Args:
            settings: Page layout settings (default: MemorizationSettings())
        """
        self.settings = settings or MemorizationSettings()
        self.first_page_lines = self.settings.first_page_lines
        self.second_page_lines = self.settings.second_page_lines
        self.standard_lines = self.settings.standard_page_lines
        self.total_pages = self.settings.total_pages

    @property
    def _short_pages_lines(self) -> int:
        """Lines on pages 1 and 2 together."""
        return self.first_page_lines + self.second_page_lines

    def line_count_for_page(self, page: int) -> int:
        """Number of lines printed on a page."""
        if page == 1:
            return self.first_page_lines
        if page == 2:
            return self.second_page_lines
        return self.standard_lines

    def page_range(self, page: int) -> LineRange:
        """All lines of a page."""
        return LineRange(start_line=1, end_line=self.line_count_for_page(page))

    def total_lines(self) -> int:
        """Number of lines in the whole corpus."""
        return self._short_pages_lines + (self.total_pages - 2) * self.standard_lines

    # -------------------------------------------------------------------------
    # Global line index
    # -------------------------------------------------------------------------

    def global_line_index(self, page: int, line: int) -> int:
        """Map (page, line) to its corpus-wide index."""
        if page == 1:
            return line
        if page == 2:
            return self.first_page_lines + line
        return self._short_pages_lines + (page - 3) * self.standard_lines + line

    def position_from_global_line(self, index: int) -> LinePosition:
        """
        Map a corpus-wide index back to (page, line).

        Exact inverse of global_line_index. An index that lands on the last
        line of a standard page yields that page's last line, never line 0.
        """
        if index <= self.first_page_lines:
            return LinePosition(page=1, line=index)
        if index <= self._short_pages_lines:
            return LinePosition(page=2, line=index - self.first_page_lines)

        offset = index - self._short_pages_lines - 1
        page, line_offset = divmod(offset, self.standard_lines)
        return LinePosition(page=page + 3, line=line_offset + 1)

    def completion_percent(self, page: int, line: int) -> float:
        """Share of the corpus up to and including (page, line), 0..100."""
        done = self.global_line_index(page, line)
        percent = done / self.total_lines() * 100
        return round(min(100.0, max(0.0, percent)), 1)


DEFAULT_GEOMETRY = PageGeometry()


def line_count_for_page(page: int) -> int:
    return DEFAULT_GEOMETRY.line_count_for_page(page)


def global_line_index(page: int, line: int) -> int:
    return DEFAULT_GEOMETRY.global_line_index(page, line)


def position_from_global_line(index: int) -> LinePosition:
    return DEFAULT_GEOMETRY.position_from_global_line(index)


def total_lines() -> int:
    return DEFAULT_GEOMETRY.total_lines()
