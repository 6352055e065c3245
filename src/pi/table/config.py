"""Environment configuration for pi-table.

``PI_TABLE_STYLE`` names the preset used when a table is created without a
style; ``PI_TABLE_WIDTH`` overrides the detected terminal width.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from pi.table.style import STYLES, TableStyle

logger = logging.getLogger(__name__)

DEFAULT_STYLE = "extended"


@dataclass
class Config:
    style: str = DEFAULT_STYLE
    width: int | None = None

    @property
    def table_style(self) -> TableStyle:
        return STYLES[self.style]


def load_config() -> Config:
    config = Config()

    style = os.environ.get("PI_TABLE_STYLE", "").strip().lower()
    if style:
        if style in STYLES:
            config.style = style
        else:
            logger.warning("Ignoring unknown PI_TABLE_STYLE %r", style)

    width = os.environ.get("PI_TABLE_WIDTH", "").strip()
    if width:
        try:
            value = int(width)
        except ValueError:
            logger.warning("Ignoring non-integer PI_TABLE_WIDTH %r", width)
        else:
            if value > 0:
                config.width = value
            else:
                logger.warning("Ignoring non-positive PI_TABLE_WIDTH %d", value)

    return config


def default_style() -> TableStyle:
    return load_config().table_style
