"""Pytest configuration and shared fixtures."""

import io
import re
import zipfile
from pathlib import Path
from typing import Any, Callable, List, Optional, Sequence

import openpyxl
import pytest
from openpyxl.utils.cell import coordinate_to_tuple

from dto.cell_value import CellValue


def build_xlsx(
    rows: Sequence[Sequence[Any]],
    title: str = "Sheet1",
    extra_sheets: Optional[dict] = None,
    origin: str = "A1",
) -> bytes:
    """Write *rows* into a fresh workbook and return its .xlsx bytes."""
    wb = openpyxl.Workbook()
    ws = wb.active
    ws.title = title

    start_row, start_col = coordinate_to_tuple(origin)
    for r, row in enumerate(rows):
        for c, value in enumerate(row):
            if value is None:
                continue
            ws.cell(row=start_row + r, column=start_col + c, value=value)

    for name, sheet_rows in (extra_sheets or {}).items():
        extra = wb.create_sheet(name)
        for row in sheet_rows:
            extra.append(list(row))

    buf = io.BytesIO()
    wb.save(buf)
    return _keep_empty_strings(buf.getvalue())


_EMPTY_INLINE_CELL = re.compile(rb"<c ([^>]*t=\"inlineStr\"[^>]*?)\s*/>")


def _keep_empty_strings(data: bytes) -> bytes:
    """
    Give every empty-string cell a real empty value.

    openpyxl saves a "" cell as a bare `<c t="inlineStr"/>`, which reads
    back as missing.
    """
    src = zipfile.ZipFile(io.BytesIO(data))
    out = io.BytesIO()
    with zipfile.ZipFile(out, "w", zipfile.ZIP_DEFLATED) as dst:
        for item in src.infolist():
            content = src.read(item.filename)
            if item.filename.startswith("xl/worksheets/"):
                content = _EMPTY_INLINE_CELL.sub(rb"<c \1><is><t></t></is></c>", content)
            dst.writestr(item, content)
    return out.getvalue()


@pytest.fixture
def xlsx_bytes() -> Callable[..., bytes]:
    """Factory building .xlsx bytes from row lists."""
    return build_xlsx


@pytest.fixture
def write_xlsx(tmp_path: Path) -> Callable[..., Path]:
    """Factory writing an .xlsx file under tmp_path and returning its path."""

    def _write(name: str, rows: Sequence[Sequence[Any]], **kwargs: Any) -> Path:
        path = tmp_path / name
        path.write_bytes(build_xlsx(rows, **kwargs))
        return path

    return _write


@pytest.fixture
def people_rows() -> List[List[Any]]:
    """Name/Age sheet: the empty name row keeps its age, Bo has none."""
    return [
        ["Name", "Age"],
        ["Ann", 30],
        ["", 25],
        ["Bo", None],
    ]


@pytest.fixture
def row_of() -> Callable[..., List[CellValue]]:
    """Shorthand for a row of tagged cells."""

    def _row(*values: Any) -> List[CellValue]:
        return [CellValue.from_raw(v) for v in values]

    return _row
