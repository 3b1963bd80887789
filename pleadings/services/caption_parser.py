"""
Caption Parser - recovers jurisdiction metadata and the party list from
the first lines of a filing.

Typical Indiana caption, as text extraction hands it to us:

    STATE OF INDIANA          )    IN THE MARION SUPERIOR COURT
                              )    SS:   CRIMINAL DIVISION
    COUNTY OF MARION          )    CAUSE NO.: 49D01-2301-CR-000123
                              )
    JOHN DOE,                 )
         Plaintiff,           )
                              )
    v.                        )
                              )
    JANE ROE,                 )
         Defendant.           )

    MOTION TO DISMISS

Each stage takes the line sequence and a start index and returns its
result together with the next unconsumed index, so independent documents
can be parsed in parallel without shared scan state. Parsing is
best-effort: lines that fit no pattern are skipped, and a missing caption
is reported as ``caption=None`` rather than an error.
"""

import logging
import re
from dataclasses import dataclass
from typing import Optional, Sequence

from pleadings.models.caption import CaptionData, Party
from pleadings.services.line_classifier import (
    is_caption_terminator,
    is_empty_connector_line,
    is_filing_stamp_noise,
    is_header_stamp,
    is_plural_role,
    is_role_line,
    is_separator_line,
    normalize_role,
    strip_parens,
    strip_trailing_comma,
)

logger = logging.getLogger(__name__)


# =============================================================================
# CONSTANTS & PATTERNS
# =============================================================================

CAPTION_SEARCH_WINDOW = 15  # lines scanned for "STATE OF"
HEADER_LINE_LIMIT = 10  # lines collected into the header block
BODY_LINE_LENGTH = 80  # a party-block line this long is body text

STATE_OF = re.compile(r"^STATE OF", re.IGNORECASE)
COUNTY_OF = re.compile(r"^COUNTY OF", re.IGNORECASE)
STATE_AND_COURT = re.compile(r"^STATE OF\s+(\w+)\s+IN THE\s+(.+)", re.IGNORECASE)
STATE_ONLY = re.compile(r"^STATE OF\s+(\w+)\s*(.*)", re.IGNORECASE)
# The county ends at the column gap left by the ")" marker, or at an inline
# CAUSE NO / SS mark
COUNTY_LINE = re.compile(
    r"^COUNTY OF\s+(.+?)(?:\s{2,}(.*)|\s+(CAUSE\s*NO.*|SS\b.*))?$",
    re.IGNORECASE,
)
VENUE_LINE = re.compile(r"^SS\b:?\s*(.*)$", re.IGNORECASE)
VENUE_MARK = re.compile(r"\bSS\b:?\s*(.*)$", re.IGNORECASE)
CAUSE_NUMBER = re.compile(r"CAUSE\s*NO\.?:?\s*(.*)", re.IGNORECASE)
COURT_TYPE = re.compile(r"SUPERIOR COURT|CIRCUIT COURT|SUPREME COURT", re.IGNORECASE)
HEADER_CONTINUATION = re.compile(r"^(COUNTY|STATE|CAUSE|SS|IN THE|\))", re.IGNORECASE)
IN_THE_PREFIX = re.compile(r"^IN THE\s*", re.IGNORECASE)

# Counties whose court names were observed wrapping onto a second line
WRAPPED_COURT_COUNTY = re.compile(
    r"^(MARION|WAYNE|WHITLEY|LAKE|ALLEN|HAMILTON)\s+COUNTY$",
    re.IGNORECASE,
)
WRAPPED_COURT_CONTINUATION = re.compile(r"SUPERIOR COURT|CIRCUIT COURT", re.IGNORECASE)

VENUE_LINE_MAX_LENGTH = 50


@dataclass
class CaptionParseResult:
    """Parsed caption (or None) and the index where body content begins."""
    caption: Optional[CaptionData]
    body_start_index: int

    def to_dict(self) -> dict:
        return {
            "caption": self.caption.to_dict() if self.caption else None,
            "bodyStartIndex": self.body_start_index,
        }


# =============================================================================
# PUBLIC API
# =============================================================================

def parse_caption(lines: Sequence[str]) -> CaptionParseResult:
    """
    Parse the caption block at the top of ``lines``.

    Returns ``CaptionParseResult(None, 0)`` when no "STATE OF" line shows
    up before other content; the caller then treats every line as body.
    """
    start = skip_preamble(lines, 0)
    state_index = find_caption_start(lines, start)
    if state_index is None:
        logger.debug("No caption found", extra={"line_count": len(lines)})
        return CaptionParseResult(caption=None, body_start_index=0)

    header, cursor = collect_header(lines, state_index)
    caption = parse_header(header)
    caption.parties, cursor = parse_parties(lines, cursor)

    logger.debug(
        "Parsed caption: %s parties, body starts at line %d",
        len(caption.parties),
        cursor,
        extra={"cause_number": caption.cause_number, "county": caption.county},
    )
    return CaptionParseResult(caption=caption, body_start_index=cursor)


# =============================================================================
# STAGES
# =============================================================================

def skip_preamble(lines: Sequence[str], index: int) -> int:
    """Skip filing stamps, blank lines, and header stamps above the caption."""
    i = index
    while i < len(lines) and (not lines[i].strip() or is_filing_stamp_noise(lines[i])):
        i += 1
    while i < len(lines) and (not lines[i].strip() or is_header_stamp(lines[i])):
        i += 1
    return i


def find_caption_start(lines: Sequence[str], index: int) -> Optional[int]:
    """Index of the "STATE OF" line within the search window, or None."""
    limit = min(index + CAPTION_SEARCH_WINDOW, len(lines))
    for i in range(index, limit):
        line = lines[i].strip()
        if STATE_OF.match(line):
            return i
        if line and not is_empty_connector_line(line):
            # Non-empty, non-caption line means no standard caption
            return None
    return None


def collect_header(lines: Sequence[str], index: int) -> tuple[list[str], int]:
    """
    Collect the STATE / SS / COUNTY / CAUSE NO block.

    Stops at a role line, the "v." separator, a document title, or, once
    "COUNTY OF" has been seen, at a second "STATE OF" or any line that is
    not part of the venue block (the first party name).
    """
    header: list[str] = []
    saw_county = False
    i = index
    while i < len(lines) and i < index + HEADER_LINE_LIMIT:
        line = lines[i].strip()
        clean = strip_parens(line)

        if is_role_line(clean) or is_caption_terminator(clean) or is_separator_line(clean):
            break
        if header and saw_county and STATE_OF.match(clean):
            break
        if COUNTY_OF.match(clean):
            saw_county = True
        if (
            saw_county
            and clean
            and not HEADER_CONTINUATION.match(clean)
            and not COURT_TYPE.search(clean)
        ):
            break

        header.append(line)
        i += 1
    return header, i


def parse_header(header: Sequence[str]) -> CaptionData:
    """Fill jurisdiction fields from header lines; unmatched lines are ignored."""
    caption = CaptionData()
    # Right-column text that may finish a court name wrapped off the STATE line
    continuations: list[str] = []

    for raw in header:
        clean = strip_parens(raw)
        if not clean:
            continue

        match = STATE_AND_COURT.match(clean)
        if match:
            caption.state = match.group(1).upper()
            caption.court = match.group(2).strip()
            continue

        match = STATE_ONLY.match(clean)
        if match:
            caption.state = match.group(1).upper()
            rest = match.group(2).strip()
            if rest and not caption.court:
                caption.court = IN_THE_PREFIX.sub("", rest).strip()
            continue

        match = VENUE_LINE.match(clean)
        if match and len(clean) < VENUE_LINE_MAX_LENGTH:
            caption.has_venue_mark = True
            if match.group(1).strip():
                caption.division = match.group(1).strip()
            continue

        match = COUNTY_LINE.match(raw.replace(")", "  ").strip())
        if match:
            caption.county = match.group(1).strip().upper()
            rest = (match.group(2) or match.group(3) or "").strip()
            _apply_county_rest(caption, rest)
            if COURT_TYPE.search(rest):
                continuations.append(rest)
            continue

        match = CAUSE_NUMBER.search(clean)
        if match:
            caption.cause_number = match.group(1).strip()
            continue

        # Court name on its own line, e.g. "IN THE MARION COUNTY" or
        # "SUPERIOR COURT NO. 07"
        if not caption.court and (IN_THE_PREFIX.match(clean) or COURT_TYPE.search(clean)):
            caption.court = IN_THE_PREFIX.sub("", clean).strip()
        else:
            continuations.append(clean)

    if caption.court and WRAPPED_COURT_COUNTY.match(caption.court):
        caption.court = _reassemble_court(caption.court, continuations)

    return caption


def parse_parties(lines: Sequence[str], index: int) -> tuple[list[Party], int]:
    """
    Parse the party block up to the document title.

    Name lines are buffered until a role line or the "v." separator
    flushes them. Under a plural role ("Defendants,") each buffered line
    is its own party; otherwise the lines are one wrapped name.
    """
    buffered: list[str] = []
    last_role = ""
    plaintiff: Optional[Party] = None
    others: list[Party] = []
    seen_separator = False

    def route(party: Party) -> None:
        nonlocal plaintiff
        if not seen_separator and plaintiff is None:
            plaintiff = party
        else:
            others.append(party)

    i = index
    while i < len(lines):
        clean = strip_parens(lines[i])

        if not clean:
            i += 1
            continue
        if is_caption_terminator(clean):
            break

        if is_separator_line(clean):
            if buffered:
                route(Party(name=" ".join(buffered), role=last_role or "Plaintiff"))
                buffered = []
            last_role = ""
            seen_separator = True
            i += 1
            continue

        if is_empty_connector_line(clean):
            i += 1
            continue

        if is_role_line(clean):
            role = normalize_role(clean)
            if buffered:
                if is_plural_role(clean) and len(buffered) > 1:
                    for name in buffered:
                        if name:
                            route(Party(name=name, role=role))
                else:
                    route(Party(name=" ".join(buffered), role=role))
                buffered = []
            last_role = role
            i += 1
            continue

        if len(clean) < BODY_LINE_LENGTH:
            buffered.append(strip_trailing_comma(clean).strip())
            i += 1
            continue

        # Long line = body text
        break

    if buffered:
        role = last_role or ("Defendant" if seen_separator else "Plaintiff")
        route(Party(name=" ".join(buffered), role=role))

    parties = [plaintiff] if plaintiff else []
    parties.extend(others)
    return parties, i


# =============================================================================
# HELPERS
# =============================================================================

def _apply_county_rest(caption: CaptionData, rest: str) -> None:
    """Text after "COUNTY OF <name>" may carry the cause number or SS mark."""
    match = CAUSE_NUMBER.search(rest)
    if match:
        caption.cause_number = match.group(1).strip()
        return
    match = VENUE_MARK.search(rest)
    if match:
        caption.has_venue_mark = True
        if match.group(1).strip():
            caption.division = match.group(1).strip()


def _reassemble_court(court: str, continuations: Sequence[str]) -> str:
    """Join "MARION COUNTY" with a wrapped "SUPERIOR COURT NO. 07" line."""
    for text in continuations:
        if WRAPPED_COURT_CONTINUATION.search(text):
            return f"{court} {text}"
    return court
