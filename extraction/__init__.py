"""
Column lookup and value extraction over a decoded sheet grid.
"""
from extraction.columns import header_labels, resolve_column
from extraction.values import extract_column

__all__ = [
    "header_labels",
    "resolve_column",
    "extract_column",
]
