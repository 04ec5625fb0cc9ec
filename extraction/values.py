"""
Extraction pass: one column's non-missing values as text.
"""

from __future__ import annotations

from typing import List, Sequence

from dto.cell_value import CellValue


def extract_column(rows: Sequence[Sequence[CellValue]], column_index: int) -> List[str]:
    """
    Collect the text of every data row's cell at *column_index*.

    Row 0 is the header row and is skipped.  Rows too short to reach
    the column and cells holding the missing sentinel are left out; a
    present empty string is kept.  Row order is preserved.
    """
    if column_index < 0:
        raise ValueError(f"column_index must be >= 0, got {column_index}")

    values: List[str] = []
    for row in rows[1:]:
        if column_index >= len(row):
            continue
        cell = row[column_index]
        if cell.is_missing:
            continue
        values.append(cell.to_text())
    return values
