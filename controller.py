"""
ExtractionSession: the interaction controller.

Holds every piece of mutable state for one user session (current file,
decoded workbook, headers, column selection, extracted list) and
implements the user actions on top of the decoder, resolver, extraction
pass and export encoders.

Each action handles its own failures: the error is reported through
the session's ``alert`` callable and the action returns a neutral value
(``False`` / ``None``).  Nothing propagates past the action and nothing
is retried.

File loads are the only suspension points: the read and the decode
(which may evaluate formulas for up to FORMULA_TIMEOUT_SECONDS) both
run in worker threads.  Every load takes a request token; a read or
decode that completes after a newer load has started is discarded, so
the most recently started load wins.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Awaitable, Callable, List, Optional, Union

from decoding import decode_workbook
from dto.cell_value import CellValue
from dto.workbook import Sheet, Workbook
from errors import (
    EmptyResultError,
    ExtractorError,
    FormatError,
    InputValidationError,
)
from export import (
    DOCUMENT_FILENAME,
    TEXT_FILENAME,
    encode_document,
    encode_text,
)
from extraction import extract_column, header_labels, resolve_column

logger = logging.getLogger(__name__)

ACCEPTED_SUFFIX = ".xlsx"
NO_DATA_PLACEHOLDER = "No data found in this column."

PathLike = Union[str, Path]


async def read_file_bytes(path: Path) -> bytes:
    """Read the whole file off the event loop thread."""
    return await asyncio.to_thread(path.read_bytes)


def _log_alert(message: str) -> None:
    logger.warning("%s", message)


class ExtractionSession:
    """
    State and actions of a single extraction session.

    Usage::

        session = ExtractionSession(alert=print)
        if await session.load_file("people.xlsx"):
            session.select_column("Age")
            session.extract()
            session.export_text("out/")
    """

    def __init__(
        self,
        alert: Optional[Callable[[str], None]] = None,
        *,
        reader: Callable[[Path], Awaitable[bytes]] = read_file_bytes,
        decoder: Callable[[bytes], Workbook] = decode_workbook,
    ) -> None:
        self._alert = alert or _log_alert
        self._reader = reader
        self._decoder = decoder

        self.file_name: Optional[str] = None
        self.workbook: Optional[Workbook] = None
        self.headers: List[CellValue] = []
        self.selected_column: str = ""
        self.column_index: Optional[int] = None
        self.extracted: List[str] = []
        self.result_shown: bool = False

        self._request_token = 0

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _report(self, error: ExtractorError) -> None:
        logger.info("Action refused: %s", error.message)
        self._alert(error.message)

    @property
    def _sheet(self) -> Optional[Sheet]:
        if self.workbook is None:
            return None
        return self.workbook.first_sheet()

    def _clear_results(self) -> None:
        self.extracted = []
        self.result_shown = False

    # ------------------------------------------------------------------
    # File acquisition
    # ------------------------------------------------------------------

    async def load_file(self, path: PathLike) -> bool:
        """
        Load the spreadsheet at *path* (picked or dropped).

        Returns ``True`` when the file's headers replaced the session
        state.  On any failure, or when a newer load superseded this
        one, the previous state is left untouched.
        """
        path = Path(path)
        if not path.name.endswith(ACCEPTED_SUFFIX):
            self._report(InputValidationError())
            return False

        self._request_token += 1
        token = self._request_token
        logger.info("Loading %s (request %d)", path.name, token)

        try:
            data = await self._reader(path)
        except OSError:
            logger.exception("Failed to read %s", path)
            if token == self._request_token:
                self._report(FormatError())
            return False

        if token != self._request_token:
            logger.info(
                "Discarding stale read of %s (request %d superseded by %d)",
                path.name,
                token,
                self._request_token,
            )
            return False

        try:
            # formula evaluation can block for FORMULA_TIMEOUT_SECONDS
            workbook = await asyncio.to_thread(self._decoder, data)
        except FormatError as exc:
            if token == self._request_token:
                logger.error("Could not decode %s", path.name, exc_info=True)
                self._report(exc)
            return False

        if token != self._request_token:
            logger.info(
                "Discarding stale decode of %s (request %d superseded by %d)",
                path.name,
                token,
                self._request_token,
            )
            return False

        if not workbook.sheet_names or workbook.first_sheet().is_empty:
            self._report(EmptyResultError())
            return False

        self.file_name = path.name
        self.workbook = workbook
        self.headers = list(workbook.first_sheet().header_row)
        self.selected_column = ""
        self.column_index = None
        self._clear_results()
        logger.info(
            "Loaded %s: sheet '%s', %d header(s)",
            path.name,
            workbook.sheet_names[0],
            len(self.headers),
        )
        return True

    # ------------------------------------------------------------------
    # Column choice
    # ------------------------------------------------------------------

    @property
    def column_options(self) -> List[str]:
        return header_labels(self.headers)

    def select_column(self, name: str) -> bool:
        """Record the chosen header name; returns whether extraction is enabled."""
        self.selected_column = name or ""
        self.column_index = resolve_column(self.headers, self.selected_column)
        return self.can_extract

    @property
    def can_extract(self) -> bool:
        return self.workbook is not None and self.column_index is not None

    # ------------------------------------------------------------------
    # Extraction
    # ------------------------------------------------------------------

    def extract(self) -> Optional[List[str]]:
        """
        Rebuild the extracted list from the selected column.

        Returns the new list, or ``None`` when the action was refused.
        """
        self._clear_results()

        target = self.selected_column.strip()
        sheet = self._sheet
        if sheet is None or not target:
            self._report(InputValidationError("Please select a file and a column."))
            return None

        index = resolve_column(self.headers, target)
        if index is None:
            self._report(InputValidationError(f"Column '{target}' was not found."))
            return None

        self.extracted = extract_column(sheet.rows, index)
        self.result_shown = True
        logger.info(
            "Extracted %d value(s) from column '%s' (index %d)",
            len(self.extracted),
            target,
            index,
        )
        return list(self.extracted)

    @property
    def display_items(self) -> List[str]:
        """What the result list shows: the values, or a single placeholder."""
        if not self.result_shown:
            return []
        return list(self.extracted) or [NO_DATA_PLACEHOLDER]

    # ------------------------------------------------------------------
    # Export
    # ------------------------------------------------------------------

    def _export(
        self,
        directory: PathLike,
        filename: str,
        encoder: Callable[[List[str]], bytes],
    ) -> Optional[Path]:
        if not self.extracted:
            self._report(EmptyResultError("No data to download."))
            return None

        target = Path(directory) / filename
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(encoder(list(self.extracted)))
        except OSError:
            logger.exception("Failed to write %s", target)
            self._alert(f"Could not save {filename}.")
            return None

        logger.info("Wrote %d value(s) to %s", len(self.extracted), target)
        return target

    def export_text(self, directory: PathLike) -> Optional[Path]:
        return self._export(directory, TEXT_FILENAME, encode_text)

    def export_document(self, directory: PathLike) -> Optional[Path]:
        """Write the paginated PDF; ``None`` when there is nothing to export."""
        return self._export(directory, DOCUMENT_FILENAME, encode_document)
