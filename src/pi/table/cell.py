"""Cell - one piece of table content, possibly spanning several columns."""

from __future__ import annotations

import sys
from typing import Literal, Sequence, get_args

from pi.table.segmenter import SegmentedText

Alignment = Literal["left", "center", "right"]

_ALIGNMENTS: tuple[str, ...] = get_args(Alignment)


class Cell:
    """A table cell holding some text.

    A cell may span multiple columns by setting *col_span*. *pad_content*
    adds a space to either side of the content.

    Line layout is cached against the width it was computed for: every
    setter invalidates it, and :meth:`layout` must run before
    :meth:`render_line`.
    """

    def __init__(
        self,
        content: object = "",
        col_span: int = 1,
        alignment: Alignment = "left",
        pad_content: bool = True,
    ) -> None:
        self._content = ""
        self._segmented = SegmentedText("")
        self._col_span = 1
        self._alignment: Alignment = "left"
        self._pad_content = True

        # Layout cache
        self._layout_width: int | None = None
        self._line_starts: list[int] | None = None
        self._lines: list[str] | None = None
        self._line_widths: list[int] | None = None

        self.set_content(content)
        self.set_col_span(col_span)
        self.set_alignment(alignment)
        self.set_padding(pad_content)

    def __repr__(self) -> str:
        return (
            f"Cell({self._content!r}, col_span={self._col_span}, "
            f"alignment={self._alignment!r}, pad_content={self._pad_content})"
        )

    # -- properties ---------------------------------------------------------

    @property
    def content(self) -> str:
        return self._content

    @property
    def col_span(self) -> int:
        return self._col_span

    @property
    def alignment(self) -> Alignment:
        return self._alignment

    @property
    def pad_content(self) -> bool:
        return self._pad_content

    # -- setters ------------------------------------------------------------

    def set_content(self, content: object) -> None:
        text = content if isinstance(content, str) else str(content)
        # Tabs have no fixed width in a grid; use the 3-space convention.
        self._content = text.replace("\t", "   ")
        self._segmented = SegmentedText(self._content)
        self.invalidate()

    def set_col_span(self, col_span: int) -> None:
        """Set the number of columns this cell spans (must be at least 1)."""
        if col_span < 1:
            raise ValueError(f"cannot have a col_span of {col_span}")
        self._col_span = col_span
        self.invalidate()

    def set_alignment(self, alignment: Alignment) -> None:
        if alignment not in _ALIGNMENTS:
            raise ValueError(f"unknown alignment: {alignment!r}")
        self._alignment = alignment
        self.invalidate()

    def set_padding(self, pad_content: bool) -> None:
        self._pad_content = pad_content
        self.invalidate()

    def invalidate(self) -> None:
        self._layout_width = None
        self._line_starts = None
        self._lines = None
        self._line_widths = None

    # -- layout -------------------------------------------------------------

    def minimum_width(self, mandatory_breaks_only: bool = False) -> int:
        """The narrowest width this cell can be displayed at, padding included.

        With *mandatory_breaks_only* the content is only split at forced
        breaks, giving the width needed to keep every line unwrapped.
        """
        widest = max(self._segmented.segment_widths(mandatory_breaks_only))
        return widest + (2 if self._pad_content else 0)

    def layout(self, width: int | None) -> int:
        """Compute line breaks for *width* (padding included) and return the line count.

        ``None`` means unbounded. Recomputes only when *width* differs from
        the width of the cached layout.
        """
        if width is not None and (width < 1 or (self._pad_content and width < 3)):
            raise ValueError(f"cell too small to show anything (width {width})")

        key = sys.maxsize if width is None else width
        if self._line_starts is not None and self._layout_width == key:
            return len(self._line_starts)

        content_width = key - 2 if self._pad_content else key
        starts = self._segmented.line_starts(content_width)
        self._lines, self._line_widths = self._segmented.render_lines(starts)
        self._line_starts = starts
        self._layout_width = key
        return len(starts)

    @property
    def line_starts(self) -> list[int]:
        """Offsets into :attr:`content` at which each laid-out line starts."""
        if self._line_starts is None:
            raise RuntimeError("missed call to `layout`")
        return [self._segmented.original_offset(s) for s in self._line_starts]

    def width_of_span(
        self,
        border_width: int,
        column_widths: Sequence[int],
    ) -> tuple[int, Sequence[int]]:
        """Return this cell's total width and the column widths left after it.

        *column_widths* starts at this cell's first column; interior borders
        between the spanned columns belong to the cell.
        """
        span = self._col_span
        total = sum(column_widths[:span]) + border_width * (span - 1)
        return total, column_widths[span:]

    # -- rendering ----------------------------------------------------------

    def render_line(self, line_index: int, width: int) -> str:
        """Return line *line_index* padded and aligned to *width* columns.

        Lines past the end of this cell's content come back blank.
        """
        if self._lines is None or self._line_widths is None:
            raise RuntimeError("missed call to `layout`")

        if line_index < len(self._lines):
            text = self._lines[line_index]
            text_width = self._line_widths[line_index]
        else:
            text = ""
            text_width = 0

        edge = " " if self._pad_content else ""
        gap = max(0, width - text_width - 2 * len(edge))
        if self._alignment == "left":
            before, after = 0, gap
        elif self._alignment == "right":
            before, after = gap, 0
        else:
            before, after = gap // 2, gap - gap // 2
        return f"{edge}{' ' * before}{text}{' ' * after}{edge}"
