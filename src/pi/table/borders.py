"""Junction glyphs for the border between two rows with different spans.

At each vertical grid line a row is either past its last cell (``"empty"``),
inside a spanning cell (``"middle"``) or at a cell edge (``"end"``). The pair
(above, below) picks the glyph.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Literal, Sequence

from pi.table.style import TableStyle

BorderType = Literal["empty", "middle", "end"]


def iter_joins(spans: Sequence[int]) -> Iterator[BorderType]:
    """Classify every vertical grid line of a row, left edge first.

    The iterator never ends; once past the last cell it yields ``"empty"``.
    """
    remaining = iter(spans)
    # Start as if a cell just finished at the left edge.
    cols_left = 1
    while True:
        if cols_left == 0:
            yield "empty"
        elif cols_left == 1:
            cols_left = next(remaining, 0)
            yield "end"
        else:
            cols_left -= 1
            yield "middle"


@dataclass(frozen=True)
class Borders:
    above: BorderType
    below: BorderType

    def joiner(self, style: TableStyle, final_end: bool) -> str:
        """Glyph for this junction; *final_end* marks the right-most one."""
        above, below = self.above, self.below
        if above == "empty" and below == "empty":
            raise ValueError("no border to draw between two empty positions")
        if above != "end" and below != "end":
            return style.horizontal
        if above != "end":
            return style.top_right_corner if final_end else style.outer_top_horizontal
        if below != "end":
            return style.bottom_right_corner if final_end else style.outer_bottom_horizontal
        return style.outer_right_vertical if final_end else style.intersection


def junctions(above: Sequence[int], below: Sequence[int]) -> list[Borders]:
    """Junctions right of each column until both rows have run out of cells."""
    result: list[Borders] = []
    pairs = zip(iter_joins(above), iter_joins(below))
    next(pairs)  # left edge, drawn separately
    for top, bottom in pairs:
        if top == "empty" and bottom == "empty":
            break
        result.append(Borders(top, bottom))
    return result


def junction_glyphs(
    above: Sequence[int],
    below: Sequence[int],
    style: TableStyle,
) -> list[str]:
    """Glyphs right of each column for the separator between *above* and *below*."""
    found = junctions(above, below)
    return [
        borders.joiner(style, idx == len(found) - 1)
        for idx, borders in enumerate(found)
    ]
