"""Column-width solver.

Two modes: fit every column to its content on a single line (unconstrained)
or share a fixed total width evenly between the columns (constrained). The
constrained mode ignores content on purpose; it is predictable rather than
optimal.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, Iterator, overload

if TYPE_CHECKING:
    from pi.table.row import Row


class ColumnWidths:
    """One interior width per grid column (borders excluded)."""

    def __init__(self, widths: Iterable[int] = ()) -> None:
        self._widths: list[int] = list(widths)

    def __len__(self) -> int:
        return len(self._widths)

    def __iter__(self) -> Iterator[int]:
        return iter(self._widths)

    @overload
    def __getitem__(self, index: int) -> int: ...

    @overload
    def __getitem__(self, index: slice) -> list[int]: ...

    def __getitem__(self, index: int | slice) -> int | list[int]:
        return self._widths[index]

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ColumnWidths):
            return self._widths == other._widths
        if isinstance(other, (list, tuple)):
            return self._widths == list(other)
        return NotImplemented

    def __repr__(self) -> str:
        return f"ColumnWidths({self._widths!r})"

    def reset(self, num_cols: int) -> None:
        """Set every column to 0, resizing to *num_cols* columns."""
        self._widths = [0] * num_cols

    def fit_even(self, total_width: int, border_width: int) -> None:
        """Share *total_width* between the columns, borders included.

        Every column but the last gets the same width; the last takes what is
        left so the drawn line is exactly *total_width* wide.
        """
        cols = len(self._widths)
        if cols == 0:
            return
        if total_width < border_width * (cols + 1):
            raise ValueError(
                f"width {total_width} cannot fit the borders of {cols} columns "
                f"(need at least {border_width * (cols + 1)})"
            )
        # One more border than there are columns.
        cell_width = (total_width - border_width) // cols - border_width
        used = 0
        for idx in range(cols - 1):
            self._widths[idx] = cell_width
            used += cell_width + border_width
        self._widths[-1] = total_width - used - 2 * border_width

    def fit_row_single_line(self, row: Row, border_width: int) -> None:
        """Grow columns so every cell of *row* fits without soft wrapping.

        A spanning cell's requirement, less the borders it swallows, is
        split evenly over its columns; the earlier columns take any remainder.
        A column a cell touches is never narrower than 1, the least a cell
        can be laid out at.
        """
        idx = 0
        for cell in row.cells:
            span = cell.col_span
            needed = cell.minimum_width(mandatory_breaks_only=True)
            if span == 1:
                self._widths[idx] = max(self._widths[idx], needed, 1)
            else:
                required = max(0, needed - border_width * (span - 1))
                per_column, extra = divmod(required, span)
                for offset in range(span):
                    share = per_column + (1 if offset < extra else 0)
                    self._widths[idx + offset] = max(self._widths[idx + offset], share, 1)
            idx += span

    def fit_rows(self, rows: Iterable[Row], border_width: int) -> None:
        for row in rows:
            self.fit_row_single_line(row, border_width)
