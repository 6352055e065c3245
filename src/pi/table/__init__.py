"""pi-table: data tables for fixed-width terminals."""

# Row adapters
from pi.table.adapters import (
    IntoRow,
    field_names,
    row_adapter,
    serialize_row,
    tuple_headers,
    tuple_row,
)

# Border junctions
from pi.table.borders import Borders, BorderType, junction_glyphs, junctions

# Cells
from pi.table.cell import Alignment, Cell

# Configuration
from pi.table.config import Config, load_config

# Rows
from pi.table.row import Row

# Line breaking
from pi.table.segmenter import SegmentedText, find_break, line_starts

# Border styles
from pi.table.style import (
    BLANK,
    ELEGANT,
    EMPTY,
    EXTENDED,
    ROUNDED,
    SIMPLE,
    STYLES,
    THIN,
    TableStyle,
    get_style,
)

# Tables
from pi.table.table import EMPTY_TABLE, FixedWidth, Table, data_table

# Terminal width
from pi.table.terminal import terminal_columns

# Text utilities
from pi.table.utils import strip_control_sequences, visible_width

# Column widths
from pi.table.widths import ColumnWidths

__all__ = [
    # Adapters
    "IntoRow",
    "field_names",
    "row_adapter",
    "serialize_row",
    "tuple_headers",
    "tuple_row",
    # Borders
    "BorderType",
    "Borders",
    "junction_glyphs",
    "junctions",
    # Cells
    "Alignment",
    "Cell",
    # Configuration
    "Config",
    "load_config",
    # Rows
    "Row",
    # Line breaking
    "SegmentedText",
    "find_break",
    "line_starts",
    # Styles
    "BLANK",
    "ELEGANT",
    "EMPTY",
    "EXTENDED",
    "ROUNDED",
    "SIMPLE",
    "STYLES",
    "THIN",
    "TableStyle",
    "get_style",
    # Tables
    "EMPTY_TABLE",
    "FixedWidth",
    "Table",
    "data_table",
    # Terminal
    "terminal_columns",
    # Utilities
    "strip_control_sequences",
    "visible_width",
    # Widths
    "ColumnWidths",
]
