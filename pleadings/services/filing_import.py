"""
Filing Import - raw extracted lines to a complete document tree.

Runs the caption parser, re-renders the recovered caption as a
monospaced block, and appends the segmented body:

    doc
    ├── codeBlock   (rendered caption, only when one was found)
    ├── paragraph   (empty spacer)
    └── body blocks
"""

import logging
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

from pleadings.models.caption import CaptionData
from pleadings.models.document import Document, Paragraph, to_dict
from pleadings.services.body_segmenter import segment_body
from pleadings.services.caption_parser import parse_caption
from pleadings.services.caption_renderer import CAPTION_COLUMN, caption_block

logger = logging.getLogger(__name__)


@dataclass
class ImportedFiling:
    caption: Optional[CaptionData]
    body_start_index: int
    document: Document

    def to_dict(self) -> dict:
        return {
            "caption": self.caption.to_dict() if self.caption else None,
            "bodyStartIndex": self.body_start_index,
            "document": to_dict(self.document),
        }


def split_pages(pages: Iterable[str]) -> list[str]:
    """Flatten per-page extracted text into one line sequence."""
    lines: list[str] = []
    for page in pages:
        lines.extend(page.splitlines())
    return lines


def import_filing(lines: Sequence[str], caption_column: int = CAPTION_COLUMN) -> ImportedFiling:
    """Parse ``lines`` into caption data plus a document tree."""
    result = parse_caption(lines)
    body = segment_body(lines, result.body_start_index)

    blocks: list = []
    if result.caption is not None:
        blocks.append(caption_block(result.caption, caption_column))
        blocks.append(Paragraph())
    blocks.extend(body)

    logger.info(
        "Imported filing",
        extra={
            "line_count": len(lines),
            "has_caption": result.caption is not None,
            "block_count": len(blocks),
        },
    )
    return ImportedFiling(
        caption=result.caption,
        body_start_index=result.body_start_index,
        document=Document(content=blocks),
    )
