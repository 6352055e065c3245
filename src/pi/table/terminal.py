"""Terminal width source for tables rendered to fit the screen."""

from __future__ import annotations

import logging
import os
import sys

from pi.table.config import load_config

logger = logging.getLogger(__name__)

FALLBACK_COLUMNS = 80


def _stdout_columns() -> int:
    return os.get_terminal_size(sys.stdout.fileno()).columns


def terminal_columns() -> int:
    """Return the width to render at: ``PI_TABLE_WIDTH``, else stdout's size.

    Falls back to 80 columns when stdout is not a terminal.
    """
    configured = load_config().width
    if configured is not None:
        logger.debug("Using PI_TABLE_WIDTH=%d", configured)
        return configured

    try:
        columns = _stdout_columns()
    except (ValueError, OSError) as e:
        logger.warning(
            "Could not query terminal size (%s); using %d columns", e, FALLBACK_COLUMNS
        )
        return FALLBACK_COLUMNS

    if columns <= 0:
        return FALLBACK_COLUMNS
    logger.debug("Terminal is %d columns wide", columns)
    return columns
