"""
Plain-text export: one extracted value per line.
"""

from typing import Sequence

TEXT_FILENAME = "extracted_data.txt"


def encode_text(values: Sequence[str]) -> bytes:
    """Join *values* with ``\\n`` (no trailing newline) as UTF-8 bytes."""
    return "\n".join(values).encode("utf-8")
