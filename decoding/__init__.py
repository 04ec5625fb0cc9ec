"""
Spreadsheet decoding.

  decode_workbook - raw .xlsx bytes -> Workbook DTO (openpyxl)
  compute_formula_values - fallback evaluation for uncached formulas
"""
from decoding.workbook import decode_workbook
from decoding.formulas import compute_formula_values

__all__ = [
    "decode_workbook",
    "compute_formula_values",
]
