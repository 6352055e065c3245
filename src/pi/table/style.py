"""Border glyph sets for drawing tables."""

from __future__ import annotations

from dataclasses import dataclass

from pi.table.utils import visible_width


@dataclass(frozen=True)
class TableStyle:
    """The eleven characters a table border is drawn with.

    ``outer_top_horizontal`` is the tee that opens downward (``╦``) and
    ``outer_bottom_horizontal`` the one that opens upward (``╩``).
    """

    top_left_corner: str
    top_right_corner: str
    bottom_left_corner: str
    bottom_right_corner: str
    outer_left_vertical: str
    outer_right_vertical: str
    outer_bottom_horizontal: str
    outer_top_horizontal: str
    intersection: str
    vertical: str
    horizontal: str

    @property
    def border_width(self) -> int:
        """Columns taken by one vertical border."""
        return visible_width(self.vertical)


def _uniform(corner: str, vertical: str, horizontal: str) -> TableStyle:
    return TableStyle(
        top_left_corner=corner,
        top_right_corner=corner,
        bottom_left_corner=corner,
        bottom_right_corner=corner,
        outer_left_vertical=corner,
        outer_right_vertical=corner,
        outer_bottom_horizontal=corner,
        outer_top_horizontal=corner,
        intersection=corner,
        vertical=vertical,
        horizontal=horizontal,
    )


# +-----+-----+
# | abc | def |
# +-----+-----+
SIMPLE = _uniform("+", "|", "-")

EXTENDED = TableStyle(
    top_left_corner="╔",
    top_right_corner="╗",
    bottom_left_corner="╚",
    bottom_right_corner="╝",
    outer_left_vertical="╠",
    outer_right_vertical="╣",
    outer_bottom_horizontal="╩",
    outer_top_horizontal="╦",
    intersection="╬",
    vertical="║",
    horizontal="═",
)

THIN = TableStyle(
    top_left_corner="┌",
    top_right_corner="┐",
    bottom_left_corner="└",
    bottom_right_corner="┘",
    outer_left_vertical="├",
    outer_right_vertical="┤",
    outer_bottom_horizontal="┴",
    outer_top_horizontal="┬",
    intersection="┼",
    vertical="│",
    horizontal="─",
)

ROUNDED = TableStyle(
    top_left_corner="╭",
    top_right_corner="╮",
    bottom_left_corner="╰",
    bottom_right_corner="╯",
    outer_left_vertical="├",
    outer_right_vertical="┤",
    outer_bottom_horizontal="┴",
    outer_top_horizontal="┬",
    intersection="┼",
    vertical="│",
    horizontal="─",
)

ELEGANT = TableStyle(
    top_left_corner="╔",
    top_right_corner="╗",
    bottom_left_corner="╚",
    bottom_right_corner="╝",
    outer_left_vertical="╠",
    outer_right_vertical="╣",
    outer_bottom_horizontal="╩",
    outer_top_horizontal="╦",
    intersection="┼",
    vertical="│",
    horizontal="─",
)

# NUL glyphs: nothing visible and zero-width borders.
BLANK = _uniform("\0", "\0", "\0")

# Spaces, for terminals that mishandle NUL.
EMPTY = _uniform(" ", " ", " ")

STYLES: dict[str, TableStyle] = {
    "simple": SIMPLE,
    "extended": EXTENDED,
    "thin": THIN,
    "rounded": ROUNDED,
    "elegant": ELEGANT,
    "blank": BLANK,
    "empty": EMPTY,
}


def get_style(name: str) -> TableStyle:
    """Look up a preset by (case-insensitive) name."""
    try:
        return STYLES[name.lower()]
    except KeyError:
        raise KeyError(f"unknown table style: {name!r}") from None
