"""
Spreadsheet decoder: raw ``.xlsx`` bytes -> ``Workbook`` DTO.

Either the whole workbook decodes or ``FormatError`` is raised; there
is no best-effort partial result.
"""

from __future__ import annotations

import io
import logging
from typing import Any, Dict, Optional, Tuple

import openpyxl

import settings
from decoding.cells import read_rows
from decoding.formulas import compute_formula_values, find_uncached_formulas
from dto.workbook import Sheet, Workbook
from errors import FormatError

logger = logging.getLogger(__name__)


def _load(data: bytes, data_only: bool):
    return openpyxl.load_workbook(
        io.BytesIO(data),
        data_only=data_only,
        read_only=False,
        keep_links=False,
    )


def _formula_fallbacks(
    data: bytes,
    value_wb,
    timeout_seconds: int,
) -> Dict[Tuple[str, str], Any]:
    """Compute values for formula cells whose cached result is missing."""
    formula_wb = _load(data, data_only=False)
    try:
        missing = find_uncached_formulas(formula_wb, value_wb)
    finally:
        formula_wb.close()

    if not missing:
        return {}

    logger.info(
        "  %d formula cell(s) without cached values, computing...", len(missing)
    )
    computed = compute_formula_values(data, timeout_seconds=timeout_seconds)
    fallbacks = {key: computed[key] for key in missing if key in computed}
    logger.info("  -> %d formula value(s) computed", len(fallbacks))
    return fallbacks


def decode_workbook(
    data: bytes,
    *,
    compute_formulas: Optional[bool] = None,
    formula_timeout: Optional[int] = None,
) -> Workbook:
    """
    Decode spreadsheet *data* into a ``Workbook`` holding every sheet.

    Raises ``FormatError`` when the bytes are not a readable workbook.
    """
    if compute_formulas is None:
        compute_formulas = settings.COMPUTE_FORMULAS
    if formula_timeout is None:
        formula_timeout = settings.FORMULA_TIMEOUT_SECONDS

    try:
        value_wb = _load(data, data_only=True)
    except Exception as exc:
        logger.warning("Failed to open workbook (%d bytes)", len(data), exc_info=True)
        raise FormatError() from exc

    try:
        fallbacks: Dict[Tuple[str, str], Any] = {}
        if compute_formulas:
            fallbacks = _formula_fallbacks(data, value_wb, formula_timeout)

        sheets: Dict[str, Sheet] = {}
        for ws in value_wb.worksheets:
            rows = read_rows(ws, fallbacks)
            sheets[ws.title] = Sheet(name=ws.title, rows=rows)
            logger.info("  Sheet '%s': %d row(s)", ws.title, len(rows))
    except Exception as exc:
        logger.warning("Failed to read workbook contents", exc_info=True)
        raise FormatError() from exc
    finally:
        value_wb.close()

    return Workbook(sheet_names=list(sheets), sheets=sheets)
