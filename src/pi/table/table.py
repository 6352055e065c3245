"""Table - rows of cells laid out and drawn with box-drawing borders."""

from __future__ import annotations

import io
import logging
from typing import Any, Iterable, TextIO

from pi.table.adapters import IntoRow, field_names, headers_of, into_row, serialize_row
from pi.table.config import default_style
from pi.table.row import Row
from pi.table.style import TableStyle
from pi.table.terminal import terminal_columns
from pi.table.widths import ColumnWidths

logger = logging.getLogger(__name__)

EMPTY_TABLE = "<empty table>"


class Table:
    """A set of rows containing data.

    Column widths and row heights are derived state: they are recomputed
    from the rows on every render, so the same table can be drawn at
    different widths.
    """

    def __init__(
        self,
        rows: Iterable[Row] = (),
        style: TableStyle | None = None,
        separate_rows: bool = True,
        top_border: bool = True,
        bottom_border: bool = True,
    ) -> None:
        self.rows: list[Row] = list(rows)
        self.style = style if style is not None else default_style()
        self.separate_rows = separate_rows
        self.top_border = top_border
        self.bottom_border = bottom_border

        self._column_widths = ColumnWidths()
        self._row_lines: list[int] = []
        self._drawn_rows: list[Row] = []

    @classmethod
    def from_rows(cls, rows: Iterable[Row], **kwargs: Any) -> Table:
        return cls(rows, **kwargs)

    @classmethod
    def from_values(
        cls,
        values: Iterable[object],
        headers: bool = True,
        **kwargs: Any,
    ) -> Table:
        """Build a table with one row per value via :func:`serialize_row`.

        With *headers* a row of field names is added first when the first
        value has named fields.
        """
        table = cls(**kwargs)
        for idx, value in enumerate(values):
            if idx == 0 and headers:
                names = field_names(value)
                if names:
                    table.add_row(Row(names))
            table.add_row(serialize_row(value))
        return table

    def add_row(self, row: Row) -> None:
        self.rows.append(row)

    def set_style(self, style: TableStyle) -> None:
        self.style = style

    def set_separate_rows(self, separate_rows: bool) -> None:
        self.separate_rows = separate_rows

    @property
    def num_columns(self) -> int:
        return max((row.num_columns for row in self.rows), default=0)

    @property
    def column_widths(self) -> ColumnWidths:
        """Widths from the most recent layout."""
        return self._column_widths

    @property
    def row_lines(self) -> list[int]:
        """Line counts from the most recent layout, one per row with cells."""
        return list(self._row_lines)

    # -- layout -------------------------------------------------------------

    def layout(self, width: int | None = None) -> None:
        """Decide how much space each column gets and lay out the rows.

        Without *width* every column is as wide as its content needs; with a
        width the space is shared evenly.
        """
        cols = self.num_columns
        border_width = self.style.border_width
        self._column_widths.reset(cols)
        self._row_lines = []
        # Rows without cells have nothing to draw, not even borders.
        self._drawn_rows = [row for row in self.rows if row.cells]

        if cols == 0:
            return

        if width is not None:
            self._column_widths.fit_even(width, border_width)
        else:
            self._column_widths.fit_rows(self.rows, border_width)
        logger.debug(
            "Table layout: %d columns, width=%s, column widths=%s",
            cols,
            width,
            list(self._column_widths),
        )

        for row in self._drawn_rows:
            self._row_lines.append(
                row.required_line_count(self._column_widths, border_width)
            )

    # -- rendering ----------------------------------------------------------

    def render(self, out: TextIO, width: int | None = None) -> None:
        """Write the table to *out*, *width* columns wide (``None`` = as needed)."""
        self.layout(width)
        if not self._row_lines:
            out.write(EMPTY_TABLE + "\n")
            return

        widths = self._column_widths
        style = self.style
        rows = self._drawn_rows
        first, last = rows[0], rows[-1]

        if self.top_border:
            first.render_top_border(widths, style, out)
        first.render_content(widths, self._row_lines[0], style, out)

        for idx in range(1, len(rows)):
            previous, row = rows[idx - 1], rows[idx]
            if self.separate_rows:
                row.render_separator(previous, widths, style, out)
            row.render_content(widths, self._row_lines[idx], style, out)

        if self.bottom_border:
            last.render_bottom_border(widths, style, out)

    def render_to_string(self, width: int | None = None) -> str:
        buf = io.StringIO()
        self.render(buf, width)
        return buf.getvalue()

    def render_lines(self, width: int | None = None) -> list[str]:
        return self.render_to_string(width).splitlines()

    def __str__(self) -> str:
        return self.render_to_string()

    def fixed_width(self, width: int) -> FixedWidth:
        """Displayable view of this table drawn exactly *width* columns wide."""
        return FixedWidth(self, width)

    def for_terminal(self) -> FixedWidth:
        """Displayable view of this table sized to the terminal."""
        return FixedWidth(self, terminal_columns())


class FixedWidth:
    """A table paired with the width to draw it at."""

    def __init__(self, table: Table, width: int) -> None:
        self.table = table
        self.width = width

    def render(self, out: TextIO) -> None:
        self.table.render(out, self.width)

    def __str__(self) -> str:
        return self.table.render_to_string(self.width)


def data_table(items: Iterable[IntoRow | object], headers: bool = False) -> Table:
    """Build a table with one row per item.

    Items may implement :class:`~pi.table.adapters.IntoRow`, or be dataclass
    instances, pydantic models or tuples. With *headers* the first item's
    headers become the first row.
    """
    table = Table()
    for idx, item in enumerate(items):
        if idx == 0 and headers:
            table.add_row(headers_of(item))
        table.add_row(into_row(item))
    return table
