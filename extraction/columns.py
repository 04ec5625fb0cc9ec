"""
Column resolution: header name -> positional index.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from dto.cell_value import CellValue

logger = logging.getLogger(__name__)


def header_labels(headers: Sequence[CellValue]) -> List[str]:
    """Display label for every header cell, ``""`` for empty ones."""
    return [h.to_text() or "" for h in headers]


def resolve_column(headers: Sequence[CellValue], target: str) -> Optional[int]:
    """
    Return the index of the first header equal to *target*, or ``None``.

    *target* is stripped before comparing; header cells are compared
    through their text form as-is.  When the name occurs more than once
    the first occurrence wins and the rest are reported in a warning.
    """
    target = (target or "").strip()
    if not target:
        return None

    matches = [i for i, h in enumerate(headers) if h.to_text() == target]
    if not matches:
        logger.info("Column '%s' not found in headers", target)
        return None

    if len(matches) > 1:
        logger.warning(
            "Header '%s' appears %d times (columns %s); using column %d",
            target,
            len(matches),
            matches,
            matches[0],
        )
    return matches[0]
