"""
Caption Renderer - lays out caption data as a two-column pleading caption.

Every line is the left field padded to a fixed column, a ``)`` marker,
and optionally the right field, so the parenthesis column lines up in
any monospaced rendering. The output parses back to the same
``CaptionData`` through ``parse_caption``.
"""

from pleadings.models.caption import CaptionData
from pleadings.models.document import CodeBlock, code_block

CAPTION_COLUMN = 36
ROLE_INDENT = "     "
RIGHT_GAP = "    "


def caption_line(left: str, right: str = "", column: int = CAPTION_COLUMN) -> str:
    padded = left.ljust(column)
    return f"{padded}){RIGHT_GAP}{right}" if right else f"{padded})"


def render_caption(caption: CaptionData, column: int = CAPTION_COLUMN) -> list[str]:
    lines: list[str] = []

    lines.append(caption_line(f"STATE OF {caption.state}", f"IN THE {caption.court.upper()}", column))
    if caption.has_venue_mark:
        venue = "SS:" + (f"   {caption.division}" if caption.division else "")
        lines.append(caption_line("", venue, column))
    cause = f"CAUSE NO.: {caption.cause_number}" if caption.cause_number else ""
    lines.append(caption_line(f"COUNTY OF {caption.county}", cause, column))

    lines.append("")

    if not caption.parties:
        return lines

    first = caption.parties[0]
    lines.append(caption_line(f"{first.name},", column=column))
    lines.append(caption_line(f"{ROLE_INDENT}{first.role},", column=column))
    lines.append(caption_line("", column=column))
    lines.append(caption_line("", column=column))
    lines.append(caption_line("v.".center(column).rstrip(), column=column))
    lines.append(caption_line("", column=column))

    defendants = caption.parties[1:]
    for index, party in enumerate(defendants):
        lines.append(caption_line(f"{party.name},", column=column))
        if index == len(defendants) - 1:
            suffix = "s." if len(defendants) > 1 else "."
            lines.append(caption_line(f"{ROLE_INDENT}{party.role}{suffix}", column=column))

    return lines


def caption_block(caption: CaptionData, column: int = CAPTION_COLUMN) -> CodeBlock:
    """The rendered caption as a monospaced block node."""
    return code_block(render_caption(caption, column))
