"""
Tests for the Caption Renderer

Covers:
- Column layout of every caption line
- SS: line and division
- Defendant-side role pluralization
- parse -> render -> parse round trip
"""

import pytest

from pleadings.models.caption import CaptionData, Party
from pleadings.models.document import CodeBlock
from pleadings.services.caption_parser import parse_caption
from pleadings.services.caption_renderer import (
    CAPTION_COLUMN,
    caption_block,
    caption_line,
    render_caption,
)


# =============================================================================
# FIXTURES
# =============================================================================

@pytest.fixture
def caption():
    return CaptionData(
        state="INDIANA",
        county="MARION",
        court="Marion Superior Court",
        cause_number="49D01-2301-CR-000123",
        parties=[
            Party(name="JOHN DOE", role="Plaintiff"),
            Party(name="JANE ROE", role="Defendant"),
        ],
    )


@pytest.fixture
def two_defendants(caption):
    caption.parties.append(Party(name="JOHN SMITH", role="Defendant"))
    return caption


# =============================================================================
# LAYOUT TESTS
# =============================================================================

class TestLayout:
    """Two-column caption lines."""

    def test_caption_line_pads_to_column(self):
        line = caption_line("STATE OF INDIANA", "IN THE COURT")
        assert line.index(")") == CAPTION_COLUMN
        assert line.endswith(")    IN THE COURT")

    def test_caption_line_without_right_field(self):
        assert caption_line("JOHN DOE,") == "JOHN DOE,".ljust(CAPTION_COLUMN) + ")"

    def test_overlong_left_field_is_not_truncated(self):
        name = "A" * 40
        assert caption_line(name).startswith(name)

    def test_header_lines(self, caption):
        lines = render_caption(caption)
        assert lines[0] == "STATE OF INDIANA".ljust(36) + ")    IN THE MARION SUPERIOR COURT"
        assert lines[1] == "COUNTY OF MARION".ljust(36) + ")    CAUSE NO.: 49D01-2301-CR-000123"
        assert lines[2] == ""

    def test_party_block(self, caption):
        lines = render_caption(caption)
        assert lines[3].startswith("JOHN DOE,")
        assert lines[4].startswith("     Plaintiff,")
        assert lines[5] == lines[6] == " " * 36 + ")"
        assert lines[7].strip(" )") == "v."
        assert lines[9].startswith("JANE ROE,")
        assert lines[10].startswith("     Defendant.")
        assert len(lines) == 11

    def test_every_nonblank_line_has_the_marker_column(self, two_defendants):
        for line in render_caption(two_defendants):
            if line:
                assert line[CAPTION_COLUMN] == ")"

    def test_venue_line(self, caption):
        caption.has_venue_mark = True
        caption.division = "CRIMINAL DIVISION"
        lines = render_caption(caption)
        assert lines[1] == " " * 36 + ")    SS:   CRIMINAL DIVISION"
        assert lines[2].startswith("COUNTY OF MARION")

    def test_venue_line_without_division(self, caption):
        caption.has_venue_mark = True
        assert render_caption(caption)[1] == " " * 36 + ")    SS:"

    def test_missing_cause_number(self, caption):
        caption.cause_number = ""
        assert render_caption(caption)[1] == "COUNTY OF MARION".ljust(36) + ")"

    def test_no_parties(self, caption):
        caption.parties = []
        assert len(render_caption(caption)) == 3

    def test_custom_column(self, caption):
        lines = render_caption(caption, column=40)
        assert lines[0].index(")") == 40

    def test_null_json_fields_render_blank(self):
        caption = CaptionData.from_dict({
            "state": "INDIANA",
            "county": None,
            "court": None,
            "causeNumber": None,
            "parties": None,
        })
        assert (caption.county, caption.court, caption.cause_number, caption.parties) == ("", "", "", [])
        assert not any("None" in line for line in render_caption(caption))


# =============================================================================
# PLURALIZATION TESTS
# =============================================================================

class TestPluralization:
    """Role line after the last defendant-side party."""

    def test_single_defendant(self, caption):
        assert render_caption(caption)[-1].strip(" )") == "Defendant."

    def test_two_defendants(self, two_defendants):
        lines = render_caption(two_defendants)
        assert lines[-1].strip(" )") == "Defendants."
        assert lines[-2].startswith("JOHN SMITH,")
        assert lines[-3].startswith("JANE ROE,")


# =============================================================================
# ROUND TRIP TESTS
# =============================================================================

class TestRoundTrip:
    """parse(render(parse(x))) == parse(x)."""

    def test_round_trip(self, filing_lines):
        first = parse_caption(filing_lines).caption
        second = parse_caption(render_caption(first)).caption
        assert second == first

    def test_round_trip_with_venue_and_defendants(self, two_defendants):
        two_defendants.court = "MARION SUPERIOR COURT"
        two_defendants.has_venue_mark = True
        two_defendants.division = "CRIMINAL DIVISION"
        first = parse_caption(render_caption(two_defendants)).caption
        assert first == two_defendants
        assert parse_caption(render_caption(first)).caption == first

    def test_caption_block(self, caption):
        block = caption_block(caption)
        assert isinstance(block, CodeBlock)
        assert block.text.split("\n") == render_caption(caption)
