"""
Line Classifier - categorizes single lines of text recovered from a filing.

All functions are pure predicates or extractors over one line. The
caption parser and the body segmenter both build on them.
``is_caption_terminator`` ends the caption, while ``is_document_title_line``
marks a level-1 heading in the body.
"""

import re


# =============================================================================
# PATTERNS
# =============================================================================

_CURLY_APOSTROPHES = re.compile(r"[‘’]")

FILING_STAMP_PATTERNS = [
    re.compile(r"^Filed:", re.IGNORECASE),
    re.compile(r"^Clerk$", re.IGNORECASE),
    re.compile(r"^Page \d+$", re.IGNORECASE),
    re.compile(r"County,\s*Indiana$", re.IGNORECASE),
]

# Bare type tokens are matched upper-case only so body sentences that
# open with "Motion" or "Ordered" stay body text.
DOCUMENT_TITLE_PATTERNS = [
    re.compile(r"^(MOTION|ORDER|PETITION|BRIEF|MEMORANDUM|AFFIDAVIT|DEMAND|OBJECTION)\b"),
    re.compile(
        r"^(CITY'S|STATE'S|DEFENDANT'S|PLAINTIFF'S)\s+"
        r"(MOTION|BRIEF|MEMORANDUM|RESPONSE|OBJECTION)\b",
        re.IGNORECASE,
    ),
    re.compile(r"^MEMORANDUM OF LAW", re.IGNORECASE),
]

# Inside the caption any casing or plural ends the party block:
# "Motion to Suppress", "MOTIONS IN LIMINE", "STATE'S MOTIONS".
CAPTION_TERMINATOR_PATTERNS = [
    re.compile(r"^(MOTION|ORDER|PETITION|BRIEF|MEMORANDUM|AFFIDAVIT|DEMAND|OBJECTION)", re.IGNORECASE),
    re.compile(
        r"^(CITY'S|STATE'S|DEFENDANT'S|PLAINTIFF'S)\s+"
        r"(MOTION|BRIEF|MEMORANDUM|RESPONSE|OBJECTION)",
        re.IGNORECASE,
    ),
    re.compile(r"^AND CERTAIN", re.IGNORECASE),
]

SECTION_HEADING_PATTERNS = [
    re.compile(r"^(I|II|III|IV|V|VI|VII|VIII|IX|X)\.\s"),
    re.compile(r"^CERTIFICATE OF SERVICE$", re.IGNORECASE),
    re.compile(r"^Respectfully submitted", re.IGNORECASE),
]

CAPTION_FRAGMENT = re.compile(r"^(STATE OF|COUNTY OF|IN THE|CAUSE)")

ROLE_LINE = re.compile(
    r"^(Plaintiffs?|Defendants?|Respondents?|Petitioners?|Appellees?|Appellants?)[,.\s]*$",
    re.IGNORECASE,
)
SEPARATOR_LINE = re.compile(r"^vs?\.?\s*$", re.IGNORECASE)
SIGNATURE_LINE = re.compile(r"^(/s/|_{5,})")
LINE_NUMBER_MARGIN = re.compile(r"^\d{1,2}\s{2,}")
CONNECTOR_LINE = re.compile(r"^v+$")

# Stand-alone header stamps some PDF exports print above the real caption
HEADER_STAMP_PATTERNS = [
    re.compile(r"County,\s*Indiana", re.IGNORECASE),
    re.compile(r"^\w+\s+(Superior|Circuit|Supreme)\s+Court", re.IGNORECASE),
]

HEADING_MIN_LENGTH = 10
HEADING_MAX_LENGTH = 80


# =============================================================================
# NORMALIZATION
# =============================================================================

def normalize_apostrophes(line: str) -> str:
    return _CURLY_APOSTROPHES.sub("'", line)


def strip_parens(line: str) -> str:
    """Remove the caption's ``)`` column markers and surrounding whitespace."""
    return line.replace(")", "").strip()


def strip_line_number(line: str) -> str:
    """Drop a pleading-paper line number (1-2 digits + 2 spaces) from the margin."""
    return LINE_NUMBER_MARGIN.sub("", line)


def strip_trailing_comma(line: str) -> str:
    return re.sub(r",\s*$", "", line)


# =============================================================================
# PREDICATES
# =============================================================================

def is_filing_stamp_noise(line: str) -> bool:
    """Clerk stamps, "Filed:" lines, bare page numbers, "X County, Indiana"."""
    s = line.strip()
    return any(p.search(s) for p in FILING_STAMP_PATTERNS)


def is_header_stamp(line: str) -> bool:
    s = line.strip()
    return any(p.search(s) for p in HEADER_STAMP_PATTERNS)


def is_document_title_line(line: str) -> bool:
    """MOTION / ORDER / ... titles, possessive variants, MEMORANDUM OF LAW."""
    t = normalize_apostrophes(line.strip())
    return any(p.search(t) for p in DOCUMENT_TITLE_PATTERNS)


def is_caption_terminator(line: str) -> bool:
    """A document title as it ends a caption, matched in any case."""
    t = normalize_apostrophes(line.strip())
    return any(p.search(t) for p in CAPTION_TERMINATOR_PATTERNS)


def is_heading_line(line: str) -> bool:
    t = normalize_apostrophes(line.strip())
    if is_document_title_line(t):
        return True
    if ")" in t:
        # caption rows always carry the ) column marker
        return False
    if any(p.search(t) for p in SECTION_HEADING_PATTERNS):
        return True
    return (
        t == t.upper()
        and HEADING_MIN_LENGTH <= len(t) <= HEADING_MAX_LENGTH
        and ":" not in t
        and any(c.isalpha() for c in t)
        and not CAPTION_FRAGMENT.match(t)
    )


def is_empty_connector_line(line: str) -> bool:
    """``)``, empty, or a run of "v" left by a vertical caption divider."""
    s = line.strip()
    return s == ")" or s == "" or bool(CONNECTOR_LINE.match(s))


def is_role_line(line: str) -> bool:
    return bool(ROLE_LINE.match(line.strip()))


def is_separator_line(line: str) -> bool:
    """The "v." / "vs." line between the two sides of the caption."""
    return bool(SEPARATOR_LINE.match(line.strip()))


def is_signature_line(line: str) -> bool:
    return bool(SIGNATURE_LINE.match(line.strip()))


# =============================================================================
# ROLE LABELS
# =============================================================================

def normalize_role(line: str) -> str:
    """"Defendants," -> "Defendant"; case of the label is kept."""
    role = re.sub(r"[,.\s]+$", "", line.strip())
    return re.sub(r"s$", "", role, flags=re.IGNORECASE).strip()


def is_plural_role(line: str) -> bool:
    """True when the role label ends in "s" before its trailing punctuation."""
    label = re.sub(r"[.\s]+$", "", line.strip())
    return bool(re.search(r"s[,.\s]*$", label, re.IGNORECASE))
