"""Row - an ordered set of cells and the borders drawn around them."""

from __future__ import annotations

from typing import Iterable, Sequence, TextIO

from pi.table.borders import junction_glyphs
from pi.table.cell import Cell
from pi.table.style import TableStyle


class Row:
    """A set of table cells.

    *has_separator* controls whether a border is drawn above the row (and,
    for the first and last rows, the table's top and bottom borders).
    """

    def __init__(
        self,
        cells: Iterable[Cell | object] = (),
        has_separator: bool = True,
    ) -> None:
        self.cells: list[Cell] = []
        self.has_separator = has_separator
        for cell in cells:
            self.add_cell(cell)

    def __repr__(self) -> str:
        return f"Row({self.cells!r}, has_separator={self.has_separator})"

    def add_cell(self, cell: Cell | object) -> None:
        """Append *cell*; anything that is not a :class:`Cell` is shown via ``str()``."""
        self.cells.append(cell if isinstance(cell, Cell) else Cell(cell))

    def set_has_separator(self, has_separator: bool) -> None:
        self.has_separator = has_separator

    @property
    def num_columns(self) -> int:
        """Number of grid columns covered: the sum of the cells' spans."""
        return sum(cell.col_span for cell in self.cells)

    @property
    def spans(self) -> list[int]:
        return [cell.col_span for cell in self.cells]

    # -- layout -------------------------------------------------------------

    def required_line_count(self, column_widths: Sequence[int], border_width: int) -> int:
        """Lay out every cell and return the number of lines the row needs."""
        max_lines = 0
        widths = column_widths
        for cell in self.cells:
            width, widths = cell.width_of_span(border_width, widths)
            max_lines = max(max_lines, cell.layout(width))
        return max_lines

    # -- rendering ----------------------------------------------------------

    def _render_edge(
        self,
        column_widths: Sequence[int],
        style: TableStyle,
        left: str,
        joint: str,
        right: str,
        out: TextIO,
    ) -> None:
        parts = [left]
        widths = column_widths
        for idx, cell in enumerate(self.cells):
            if idx:
                parts.append(joint)
            width, widths = cell.width_of_span(style.border_width, widths)
            parts.append(style.horizontal * width)
        parts.append(right)
        out.write("".join(parts) + "\n")

    def render_top_border(
        self,
        column_widths: Sequence[int],
        style: TableStyle,
        out: TextIO,
    ) -> None:
        if not self.has_separator:
            return
        self._render_edge(
            column_widths,
            style,
            style.top_left_corner,
            style.outer_top_horizontal,
            style.top_right_corner,
            out,
        )

    def render_bottom_border(
        self,
        column_widths: Sequence[int],
        style: TableStyle,
        out: TextIO,
    ) -> None:
        if not self.has_separator:
            return
        self._render_edge(
            column_widths,
            style,
            style.bottom_left_corner,
            style.outer_bottom_horizontal,
            style.bottom_right_corner,
            out,
        )

    def render_separator(
        self,
        previous: Row,
        column_widths: Sequence[int],
        style: TableStyle,
        out: TextIO,
    ) -> None:
        """Draw the border between *previous* and this row."""
        if not self.has_separator:
            return
        parts = [style.outer_left_vertical]
        glyphs = junction_glyphs(previous.spans, self.spans, style)
        for width, glyph in zip(column_widths, glyphs):
            parts.append(style.horizontal * width)
            parts.append(glyph)
        out.write("".join(parts) + "\n")

    def render_content(
        self,
        column_widths: Sequence[int],
        line_count: int,
        style: TableStyle,
        out: TextIO,
    ) -> None:
        """Draw *line_count* lines of cell content.

        :meth:`required_line_count` must have laid out the cells first.
        """
        for line_idx in range(line_count):
            parts: list[str] = []
            widths = column_widths
            for cell in self.cells:
                parts.append(style.vertical)
                width, widths = cell.width_of_span(style.border_width, widths)
                parts.append(cell.render_line(line_idx, width))
            parts.append(style.vertical)
            out.write("".join(parts) + "\n")
