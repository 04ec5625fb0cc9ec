"""
Formula evaluation for cells that carry no cached result.

Excel stores the last calculated value next to every formula, and the
decoder reads those cached values.  Workbooks written by libraries that
never calculate (openpyxl, many exporters) leave the cache empty; for
those cells the ``formulas`` library computes the value instead.
"""

from __future__ import annotations

import logging
import os
import re
import tempfile
import threading
from pathlib import Path
from typing import Any, Dict, List, Set, Tuple

import numpy as np
from openpyxl import Workbook as OpenpyxlWorkbook

from decoding.cells import coord

logger = logging.getLogger(__name__)


def find_uncached_formulas(
    formula_wb: OpenpyxlWorkbook,
    value_wb: OpenpyxlWorkbook,
) -> Set[Tuple[str, str]]:
    """
    Return ``(SHEET_NAME_UPPER, COORD)`` for every formula cell whose
    cached value is missing.

    *formula_wb* must be loaded with ``data_only=False`` and *value_wb*
    with ``data_only=True`` from the same bytes.
    """
    missing: Set[Tuple[str, str]] = set()
    for ws in formula_wb.worksheets:
        values_ws = value_wb[ws.title]
        sheet_upper = ws.title.upper()
        for row in ws.iter_rows():
            for cell in row:
                v = cell.value
                is_formula = cell.data_type == "f" or (
                    isinstance(v, str) and v.startswith("=")
                )
                if not is_formula:
                    continue
                if values_ws.cell(row=cell.row, column=cell.column).value is None:
                    missing.add((sheet_upper, coord(cell.column, cell.row)))
    return missing


def _unwrap(value: Any) -> Any:
    """Reduce a ``formulas`` result to a plain Python scalar, or ``None``."""
    v = value
    if hasattr(v, "value"):
        # Ranges object, take the underlying array
        v = getattr(v, "value", v)
    if isinstance(v, np.ndarray):
        if v.size != 1:
            return None
        v = v.flat[0]
    if isinstance(v, np.bool_):
        return bool(v)
    if isinstance(v, (np.integer, np.floating)):
        return v.item()
    if isinstance(v, np.str_):
        return str(v)
    # formulas' own error / empty sentinels are left missing
    if isinstance(v, (bool, int, float, str)):
        return v
    return None


def _calculate(path: str) -> Dict[Tuple[str, str], Any]:
    import formulas

    xl_model = formulas.ExcelModel().loads(path).finish()
    results = xl_model.calculate()

    # keys look like  "'[file.xlsx]SHEET NAME'!E2"  or range variants
    pattern = re.compile(
        r"'\[" + re.escape(Path(path).name) + r"\](.+?)'!([A-Z]+\d+)$",
        re.IGNORECASE,
    )
    out: Dict[Tuple[str, str], Any] = {}
    for key, val in results.items():
        m = pattern.match(str(key))
        if not m:
            continue
        v = _unwrap(val)
        if v is None:
            continue
        out[(m.group(1).upper(), m.group(2).upper())] = v
    return out


def compute_formula_values(
    data: bytes,
    timeout_seconds: int = 30,
) -> Dict[Tuple[str, str], Any]:
    """
    Evaluate every formula in the workbook *data* and return a lookup:
    ``(sheet_name_upper, cell_coordinate) -> value``.

    Best-effort: returns an empty lookup when evaluation fails or runs
    longer than *timeout_seconds*.
    """
    # formulas only loads from a path
    fd, path = tempfile.mkstemp(suffix=".xlsx")
    with os.fdopen(fd, "wb") as f:
        f.write(data)

    result_holder: List[Dict[Tuple[str, str], Any]] = [{}]
    error_holder: List[Any] = [None]

    def _run() -> None:
        # the worker owns the copy; it outlives a timed-out join
        try:
            result_holder[0] = _calculate(path)
        except Exception as exc:
            error_holder[0] = exc
        finally:
            os.unlink(path)

    thread = threading.Thread(target=_run, daemon=True)
    thread.start()
    thread.join(timeout=timeout_seconds)

    if thread.is_alive():
        logger.warning(
            "Formula computation timed out after %ds, skipping",
            timeout_seconds,
        )
        return {}

    if error_holder[0] is not None:
        logger.warning(
            "Formula evaluation failed, computed values will be unavailable: %s",
            error_holder[0],
        )
        return {}

    return result_holder[0]
