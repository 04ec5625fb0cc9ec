"""
PDF export of an extracted value list.

Layout and rendering are two steps:

  1. ``layout_document`` wraps every value to the content width and
     assigns each wrapped line a page and a vertical position.
  2. ``encode_document`` draws that layout onto a reportlab canvas.

Pagination is decided once per value, before it is drawn: if the
value's whole wrapped block does not fit below the cursor, it moves to
a fresh page, so a value that fits on one page is never split.  A value
taller than an entire page starts on a fresh page and its remaining
lines continue on the following pages.
"""

from __future__ import annotations

import io
import logging
from typing import List, Sequence, Tuple

from pydantic import BaseModel
from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.lib.utils import simpleSplit
from reportlab.pdfbase.pdfmetrics import stringWidth
from reportlab.pdfgen import canvas

logger = logging.getLogger(__name__)

DOCUMENT_FILENAME = "extracted_data.pdf"
DOCUMENT_TITLE = "Extracted Data"


class DocumentStyle(BaseModel):
    """Page geometry and fonts.  Lengths are in points."""

    page_size: Tuple[float, float] = A4
    margin: float = 15 * mm
    # Distance from the title baseline to the first body line
    title_gap: float = 10 * mm
    line_height: float = 7 * mm
    title_font: str = "Helvetica-Bold"
    title_font_size: float = 18
    body_font: str = "Helvetica"
    body_font_size: float = 12

    @property
    def page_width(self) -> float:
        return self.page_size[0]

    @property
    def page_height(self) -> float:
        return self.page_size[1]

    @property
    def content_width(self) -> float:
        return self.page_width - 2 * self.margin

    @property
    def bottom_limit(self) -> float:
        return self.page_height - self.margin


class PlacedLine(BaseModel):
    """A wrapped line and its baseline, measured down from the page top."""

    text: str
    y: float


class PageLayout(BaseModel):
    number: int
    lines: List[PlacedLine] = []


# ------------------------------------------------------------------
# Wrapping
# ------------------------------------------------------------------


def _break_word(word: str, font: str, size: float, width: float) -> List[str]:
    """Split a line wider than *width* into chunks that fit, by character."""
    chunks: List[str] = []
    current = ""
    for ch in word:
        if current and stringWidth(current + ch, font, size) > width:
            chunks.append(current)
            current = ch
        else:
            current += ch
    chunks.append(current)
    return chunks


def wrap_text(text: str, style: DocumentStyle) -> List[str]:
    """
    Wrap *text* to the content width using the body font's metrics.

    Embedded newlines always break; an empty value yields one empty
    line.  Within a line, words are re-joined by single spaces, so runs
    of whitespace collapse and leading or trailing spaces are dropped
    (``"  A  B"`` is drawn as ``"A B"``).
    """
    font, size, width = style.body_font, style.body_font_size, style.content_width
    lines: List[str] = []
    for paragraph in text.split("\n"):
        for line in simpleSplit(paragraph, font, size, width) or [""]:
            if stringWidth(line, font, size) > width:
                lines.extend(_break_word(line, font, size, width))
            else:
                lines.append(line)
    return lines


# ------------------------------------------------------------------
# Layout
# ------------------------------------------------------------------


def layout_document(
    values: Sequence[str],
    style: DocumentStyle = DocumentStyle(),
) -> List[PageLayout]:
    """Assign every wrapped line of *values* to a page and a position."""
    pages = [PageLayout(number=1)]
    y = style.margin + style.title_gap

    def _new_page() -> None:
        nonlocal y
        pages.append(PageLayout(number=len(pages) + 1))
        y = style.margin

    for value in values:
        lines = wrap_text(value, style)
        block_height = len(lines) * style.line_height
        if pages[-1].lines and y + block_height > style.bottom_limit:
            _new_page()

        for line in lines:
            # Only reached by blocks taller than a whole page
            if pages[-1].lines and y + style.line_height > style.bottom_limit:
                _new_page()
            pages[-1].lines.append(PlacedLine(text=line, y=y))
            y += style.line_height

    return pages


# ------------------------------------------------------------------
# Rendering
# ------------------------------------------------------------------


def encode_document(
    values: Sequence[str],
    title: str = DOCUMENT_TITLE,
    style: DocumentStyle = DocumentStyle(),
) -> bytes:
    """Render *values* as a paginated PDF and return its bytes."""
    pages = layout_document(values, style)

    buf = io.BytesIO()
    # invariant: identical input -> identical bytes (no timestamps)
    pdf = canvas.Canvas(buf, pagesize=style.page_size, invariant=1)
    pdf.setTitle(title)

    for page in pages:
        if page.number == 1:
            pdf.setFont(style.title_font, style.title_font_size)
            pdf.drawString(style.margin, style.page_height - style.margin, title)
        pdf.setFont(style.body_font, style.body_font_size)
        for line in page.lines:
            pdf.drawString(style.margin, style.page_height - line.y, line.text)
        pdf.showPage()

    pdf.save()
    logger.info(
        "Rendered %d value(s) onto %d page(s)", len(values), len(pages)
    )
    return buf.getvalue()
