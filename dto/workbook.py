"""
Decoded workbook DTOs.

    Workbook
      ├─ sheet_names: List[str]          (workbook order)
      └─ sheets: Dict[str, Sheet]
           └─ rows: List[List[CellValue]] (row 0 = headers by convention)
"""

from __future__ import annotations

from typing import Dict, List

from pydantic import BaseModel

from dto.cell_value import CellValue


class Sheet(BaseModel):
    """Row-major grid of one worksheet's used range."""

    name: str
    rows: List[List[CellValue]] = []

    @property
    def is_empty(self) -> bool:
        return not self.rows

    @property
    def header_row(self) -> List[CellValue]:
        return self.rows[0] if self.rows else []


class Workbook(BaseModel):
    """Every sheet of a decoded file."""

    sheet_names: List[str] = []
    sheets: Dict[str, Sheet] = {}

    def sheet(self, name: str) -> Sheet:
        return self.sheets[name]

    def first_sheet(self) -> Sheet:
        if not self.sheet_names:
            raise ValueError("Workbook has no sheets")
        return self.sheet(self.sheet_names[0])
