"""
Error taxonomy for the column extractor.

Every error carries the user-facing message shown when the triggering
action is refused.  Errors are raised by the lower layers and caught by
``ExtractionSession`` at the boundary of a single user action.
"""

from typing import Optional


class ExtractorError(Exception):
    """Base class for all errors surfaced to the user."""

    message = "An unexpected error occurred."

    def __init__(self, message: Optional[str] = None) -> None:
        super().__init__(message or self.message)
        self.message = message or self.message


class InputValidationError(ExtractorError):
    """Wrong file type or a required selection is missing."""

    message = "Please upload a valid Excel file (.xlsx)."


class FormatError(ExtractorError):
    """Spreadsheet bytes could not be decoded."""

    message = "An error occurred while processing the Excel file."


class EmptyResultError(ExtractorError):
    """An operation produced nothing: no rows, no data, nothing to export."""

    message = "No data found in the Excel file."
