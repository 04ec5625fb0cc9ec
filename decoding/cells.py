"""
Cell reading helpers shared by the workbook decoder.

Turns an openpyxl ``Worksheet`` into a row-major grid of ``CellValue``
covering the sheet's actual used range.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

from openpyxl.utils import column_index_from_string, get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from dto.cell_value import CellValue

logger = logging.getLogger(__name__)

# Above this many cells the reported dimension is not trusted and the
# used range is found by scanning.
_MAX_TRUSTED_CELLS = 500_000


def coord(col: int, row: int) -> str:
    """Return an A1-style coordinate from 1-based col/row indices."""
    return f"{get_column_letter(col)}{row}"


def _split_coord(coordinate: str) -> Tuple[int, int]:
    """Parse 'AB12' -> (row=12, col=28).  Both 1-based."""
    col_str = "".join(c for c in coordinate if c.isalpha())
    row_num = int("".join(c for c in coordinate if c.isdigit()) or "0")
    col_num = column_index_from_string(col_str) if col_str else 0
    return row_num, col_num


def find_used_range(ws: Worksheet) -> Optional[Tuple[int, int, int, int]]:
    """
    Return (min_row, min_col, max_row, max_col), all 1-based, or ``None``
    when the sheet holds no values at all.

    Uses ``ws.calculate_dimension()`` with a sanity cap, then falls back
    to scanning for non-empty cells.
    """
    dim = ws.calculate_dimension()
    if dim and dim != "A1:A1":
        parts = dim.replace("$", "").split(":")
        if len(parts) == 2:
            tl_row, tl_col = _split_coord(parts[0])
            br_row, br_col = _split_coord(parts[1])
            if (br_row - tl_row + 1) * (br_col - tl_col + 1) <= _MAX_TRUSTED_CELLS:
                return tl_row, tl_col, br_row, br_col
            logger.info("  Dimension %s too large to trust, scanning cells", dim)

    min_r = min_c = float("inf")
    max_r = max_c = 0
    for row in ws.iter_rows():
        for cell in row:
            if cell.value is not None:
                min_r = min(min_r, cell.row)
                max_r = max(max_r, cell.row)
                min_c = min(min_c, cell.column)
                max_c = max(max_c, cell.column)
    if max_r == 0:
        return None
    return int(min_r), int(min_c), int(max_r), int(max_c)


def read_rows(
    ws: Worksheet,
    fallback_values: Optional[Dict[Tuple[str, str], Any]] = None,
) -> List[List[CellValue]]:
    """
    Read every row of the used range into ``CellValue`` lists.

    Trailing missing cells are dropped from each row, so rows may be
    shorter than the used range is wide.  ``fallback_values`` supplies
    values for cells that decoded to nothing, keyed by
    ``(SHEET_NAME_UPPER, COORD)``.
    """
    bounds = find_used_range(ws)
    if bounds is None:
        return []
    min_row, min_col, max_row, max_col = bounds

    sheet_upper = ws.title.upper()
    fallback_values = fallback_values or {}

    rows: List[List[CellValue]] = []
    for row in ws.iter_rows(
        min_row=min_row, max_row=max_row, min_col=min_col, max_col=max_col
    ):
        values: List[CellValue] = []
        for cell in row:
            raw = cell.value
            if raw is None and fallback_values:
                raw = fallback_values.get(
                    (sheet_upper, coord(cell.column, cell.row))
                )
            values.append(CellValue.from_raw(raw))
        while values and values[-1].is_missing:
            values.pop()
        rows.append(values)
    return rows
