"""
Body Segmenter - groups body lines into document tree blocks.

Blank lines close paragraphs, heading lines become centered bold
headings, signature lines stand alone, and everything else is joined
into the running paragraph after its pleading-paper line number is
removed. Filing stamps are dropped.
"""

import logging
from typing import Sequence

from pleadings.models.document import (
    BODY_FONT,
    Heading,
    Paragraph,
    bold,
    font,
    heading,
    paragraph,
    text,
)
from pleadings.services.line_classifier import (
    is_document_title_line,
    is_filing_stamp_noise,
    is_heading_line,
    is_signature_line,
    strip_line_number,
)

logger = logging.getLogger(__name__)


def segment_body(lines: Sequence[str], start: int = 0) -> list[Paragraph | Heading]:
    """
    Segment ``lines[start:]`` into paragraphs and headings.

    Never returns an empty list: degenerate input yields one empty paragraph.
    """
    blocks: list[Paragraph | Heading] = []
    buffer: list[str] = []

    def flush() -> None:
        joined = " ".join(buffer).strip()
        buffer.clear()
        if joined:
            blocks.append(make_paragraph(joined))

    for line in lines[start:]:
        trimmed = line.strip()

        if not trimmed:
            flush()
            continue
        if is_filing_stamp_noise(trimmed):
            continue

        if is_heading_line(trimmed):
            flush()
            blocks.append(make_heading(trimmed))
            continue

        if is_signature_line(trimmed):
            flush()
            blocks.append(make_paragraph(trimmed))
            continue

        buffer.append(strip_line_number(trimmed))

    flush()

    if not blocks:
        blocks.append(Paragraph())

    logger.debug(
        "Segmented %d body lines into %d blocks",
        max(len(lines) - start, 0),
        len(blocks),
    )
    return blocks


def make_paragraph(value: str, body_font: str = BODY_FONT) -> Paragraph:
    return paragraph(text(value, font(body_font)))


def make_heading(value: str, body_font: str = BODY_FONT) -> Heading:
    """Document titles are level 1, section headings level 2; both centered."""
    level = 1 if is_document_title_line(value) else 2
    return heading(text(value, bold(), font(body_font)), level=level, align="center")
