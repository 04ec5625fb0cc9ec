"""
CellValue: a decoded cell as a tagged variant.

Every cell the decoder produces is one of ``text``, ``number``,
``boolean``, ``datetime`` or ``empty``.  ``empty`` is the missing
sentinel: an absent cell and an explicit null both decode to it, and
it is the only kind without a text form.
"""

from __future__ import annotations

from datetime import date, datetime, time, timedelta
from enum import Enum
from typing import Any, Optional, Union

from pydantic import BaseModel


class CellKind(str, Enum):
    TEXT = "text"
    NUMBER = "number"
    BOOLEAN = "boolean"
    DATETIME = "datetime"
    EMPTY = "empty"


_TEMPORAL = (datetime, date, time, timedelta)


class CellValue(BaseModel):
    kind: CellKind
    value: Union[bool, int, float, datetime, date, time, timedelta, str, None] = None

    @classmethod
    def from_raw(cls, raw: Any) -> "CellValue":
        """Tag a raw openpyxl cell value."""
        if raw is None:
            return EMPTY
        # bool before int: bool is an int subclass
        if isinstance(raw, bool):
            return cls(kind=CellKind.BOOLEAN, value=raw)
        if isinstance(raw, (int, float)):
            return cls(kind=CellKind.NUMBER, value=raw)
        if isinstance(raw, _TEMPORAL):
            return cls(kind=CellKind.DATETIME, value=raw)
        return cls(kind=CellKind.TEXT, value=str(raw))

    @property
    def is_missing(self) -> bool:
        return self.kind is CellKind.EMPTY

    def to_text(self) -> Optional[str]:
        """
        Return the cell's text form, or ``None`` for the missing sentinel.

        Numbers are written canonically (``30.0`` -> ``"30"``), booleans
        as ``"true"``/``"false"``, temporal values with ``str()``.
        """
        if self.kind is CellKind.EMPTY:
            return None
        if self.kind is CellKind.BOOLEAN:
            return "true" if self.value else "false"
        if self.kind is CellKind.NUMBER:
            return _format_number(self.value)
        return str(self.value)


def _format_number(number: Union[int, float]) -> str:
    if isinstance(number, float):
        if number.is_integer():
            return str(int(number))
        return repr(number)
    return str(number)


EMPTY = CellValue(kind=CellKind.EMPTY)
