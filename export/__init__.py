"""
Export encoders for an extracted value list.

  encode_text     - newline-joined UTF-8 text  (extracted_data.txt)
  encode_document - paginated PDF via reportlab (extracted_data.pdf)
"""
from export.text import TEXT_FILENAME, encode_text
from export.document import (
    DOCUMENT_FILENAME,
    DocumentStyle,
    encode_document,
    layout_document,
)

__all__ = [
    "TEXT_FILENAME",
    "DOCUMENT_FILENAME",
    "DocumentStyle",
    "encode_text",
    "encode_document",
    "layout_document",
]
