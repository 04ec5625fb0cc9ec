"""
Column extractor: CLI entry point.

Usage:
    python extractor.py <excel_file> [--column <header>] [--format txt|pdf|both] [--output-dir <dir>]

Loads the first sheet of an Excel workbook.  Without --column, lists
the sheet's column headers.  With --column, prints the non-empty values
of that column and, if --format is given, exports them as
extracted_data.txt and/or extracted_data.pdf.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
import sys
from typing import List, Optional

import settings
from controller import ExtractionSession

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
)
logger = logging.getLogger(__name__)


def _alert(message: str) -> None:
    print(message, file=sys.stderr)


async def run(args: argparse.Namespace) -> int:
    """Drive one session through load -> select -> extract -> export."""
    session = ExtractionSession(alert=_alert)

    if not await session.load_file(args.excel_file):
        return 1

    if args.column is None:
        print(f"Columns in {session.file_name}:")
        for position, label in enumerate(session.column_options, start=1):
            print(f"  {position:>3}  {label}")
        return 0

    if not session.select_column(args.column):
        target = args.column.strip()
        if target:
            _alert(f"Column '{target}' was not found.")
        else:
            _alert("Please select a file and a column.")
        return 1

    if session.extract() is None:
        return 1

    for item in session.display_items:
        print(item)

    formats = {"txt": ["txt"], "pdf": ["pdf"], "both": ["txt", "pdf"]}.get(
        args.format, []
    )
    status = 0
    for fmt in formats:
        if fmt == "txt":
            written = session.export_text(args.output_dir)
        else:
            written = session.export_document(args.output_dir)
        if written is None:
            status = 1
        else:
            logger.info("Output written to %s", written)
    return status


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(
        description="Extract one column of an Excel sheet as a list of values.",
    )
    parser.add_argument(
        "excel_file",
        help="Path to the .xlsx file to read",
    )
    parser.add_argument(
        "-c",
        "--column",
        default=None,
        help="Header name of the column to extract (default: list the columns)",
    )
    parser.add_argument(
        "-f",
        "--format",
        choices=("txt", "pdf", "both"),
        default=None,
        help="Export the extracted values (default: print only)",
    )
    parser.add_argument(
        "-o",
        "--output-dir",
        default=settings.OUTPUT_DIR,
        help="Directory for exported files (default: $OUTPUT_DIR or .)",
    )
    args = parser.parse_args(argv)

    if not os.path.isfile(args.excel_file):
        logger.error("File not found: %s", args.excel_file)
        sys.exit(1)

    sys.exit(asyncio.run(run(args)))


if __name__ == "__main__":
    main()
