"""
Tests for the Caption Parser

Covers:
- The standard Indiana caption
- SS: venue marks and divisions
- Plural role labels splitting buffered names
- Filing stamp preamble
- Missing captions (caption=None, body starts at 0)
- Wrapped court names (characterization of the county allow-list)
- Individual stages and their returned cursors
"""

import pytest

from pleadings.models.caption import CaptionData, Party
from pleadings.services.caption_parser import (
    CaptionParseResult,
    collect_header,
    find_caption_start,
    parse_caption,
    parse_header,
    parse_parties,
    skip_preamble,
)


# =============================================================================
# FIXTURES
# =============================================================================

@pytest.fixture
def plural_defendant_lines():
    return [
        "STATE OF INDIANA IN THE LAKE CIRCUIT COURT",
        "COUNTY OF LAKE CAUSE NO.: 45C01-2203-F5-000042",
        "",
        "STATE OF INDIANA,",
        "     Plaintiff,",
        "v.",
        "JANE ROE,",
        "JOHN SMITH,",
        "     Defendants,",
        "MOTION FOR SEVERANCE",
        "Defendants move to sever.",
    ]


@pytest.fixture
def venue_lines():
    return [
        "STATE OF INDIANA          )    IN THE MARION SUPERIOR COURT",
        "                          )    SS:   CRIMINAL DIVISION",
        "COUNTY OF MARION          )    CAUSE NO.: 49D01-2301-CR-000123",
        "                          )",
        "JOHN DOE,                 )",
        "     Plaintiff,           )",
        "                          )",
        "v.                        )",
        "                          )",
        "JANE ROE,                 )",
        "     Defendant.           )",
        "",
        "MOTION TO DISMISS",
    ]


# =============================================================================
# STANDARD CAPTION TESTS
# =============================================================================

class TestStandardCaption:
    """The canonical single-plaintiff, single-defendant caption."""

    def test_jurisdiction_fields(self, filing_lines):
        caption = parse_caption(filing_lines).caption
        assert caption.state == "INDIANA"
        assert caption.court == "MARION SUPERIOR COURT"
        assert caption.county == "MARION"
        assert caption.cause_number == "49D01-2301-CR-000123"
        assert caption.has_venue_mark is False
        assert caption.division == ""

    def test_parties(self, filing_lines):
        caption = parse_caption(filing_lines).caption
        assert caption.parties == [
            Party(name="JOHN DOE", role="Plaintiff"),
            Party(name="JANE ROE", role="Defendant"),
        ]
        assert caption.plaintiff == Party(name="JOHN DOE", role="Plaintiff")
        assert caption.defendants == [Party(name="JANE ROE", role="Defendant")]

    def test_body_starts_at_title(self, filing_lines):
        result = parse_caption(filing_lines)
        assert filing_lines[result.body_start_index] == "MOTION TO DISMISS"

    def test_result_to_dict(self, filing_lines):
        data = parse_caption(filing_lines).to_dict()
        assert data["bodyStartIndex"] == 10
        assert data["caption"]["causeNumber"] == "49D01-2301-CR-000123"
        assert data["caption"]["parties"][1] == {"name": "JANE ROE", "role": "Defendant"}

    def test_column_layout_with_venue(self, venue_lines):
        result = parse_caption(venue_lines)
        caption = result.caption
        assert caption.has_venue_mark is True
        assert caption.division == "CRIMINAL DIVISION"
        assert caption.court == "MARION SUPERIOR COURT"
        assert caption.county == "MARION"
        assert caption.cause_number == "49D01-2301-CR-000123"
        assert [p.name for p in caption.parties] == ["JOHN DOE", "JANE ROE"]
        assert venue_lines[result.body_start_index] == "MOTION TO DISMISS"

    def test_vs_separator(self, filing_lines):
        lines = [("vs." if line == "v." else line) for line in filing_lines]
        caption = parse_caption(lines).caption
        assert [p.role for p in caption.parties] == ["Plaintiff", "Defendant"]


# =============================================================================
# PARTY TESTS
# =============================================================================

class TestParties:
    """Name buffering, plural roles, wrapped names."""

    def test_plural_role_splits_names(self, plural_defendant_lines):
        caption = parse_caption(plural_defendant_lines).caption
        assert caption.parties == [
            Party(name="STATE OF INDIANA", role="Plaintiff"),
            Party(name="JANE ROE", role="Defendant"),
            Party(name="JOHN SMITH", role="Defendant"),
        ]

    def test_singular_role_joins_wrapped_name(self):
        lines = [
            "JOHN DOE,",
            "     Plaintiff,",
            "v.",
            "ACME TRUCKING AND",
            "LOGISTICS COMPANY, INC.,",
            "     Defendant.",
            "MOTION TO DISMISS",
        ]
        parties, index = parse_parties(lines, 0)
        assert parties[1] == Party(name="ACME TRUCKING AND LOGISTICS COMPANY, INC.", role="Defendant")
        assert index == 6

    def test_missing_role_after_separator_defaults_to_defendant(self):
        lines = ["JOHN DOE,", "Plaintiff,", "v.", "JANE ROE,", "MOTION TO DISMISS"]
        parties, _ = parse_parties(lines, 0)
        assert parties[-1] == Party(name="JANE ROE", role="Defendant")

    def test_missing_role_before_separator_defaults_to_plaintiff(self):
        lines = ["JOHN DOE,", "v.", "JANE ROE,", "Defendant.", "ORDER"]
        parties, _ = parse_parties(lines, 0)
        assert parties[0] == Party(name="JOHN DOE", role="Plaintiff")
        assert parties[1] == Party(name="JANE ROE", role="Defendant")

    def test_second_plaintiff_side_group_is_kept(self):
        lines = ["JOHN DOE,", "Plaintiff,", "MARY DOE,", "Plaintiff,", "v.", "JANE ROE,", "Defendant."]
        parties, _ = parse_parties(lines, 0)
        assert [p.name for p in parties] == ["JOHN DOE", "MARY DOE", "JANE ROE"]

    def test_mixed_case_title_ends_party_block(self, filing_lines):
        lines = filing_lines[:10] + ["Motion to Suppress Evidence", "", "Comes now the Defendant", "by counsel"]
        result = parse_caption(lines)
        assert result.caption.parties == [
            Party(name="JOHN DOE", role="Plaintiff"),
            Party(name="JANE ROE", role="Defendant"),
        ]
        assert result.body_start_index == 10

    @pytest.mark.parametrize("title", ["MOTIONS IN LIMINE", "STATE'S MOTIONS IN LIMINE", "State’s Motion to Continue"])
    def test_plural_and_possessive_titles_end_party_block(self, title):
        lines = ["JOHN DOE,", "Plaintiff,", "v.", "JANE ROE,", "Defendant.", title, "Comes now the State"]
        parties, index = parse_parties(lines, 0)
        assert parties[-1] == Party(name="JANE ROE", role="Defendant")
        assert index == 5

    def test_long_line_ends_party_block(self):
        body = "The defendant, by counsel, respectfully moves this Court to dismiss the charging information."
        lines = ["JOHN DOE,", "Plaintiff,", "v.", "JANE ROE,", "Defendant.", body]
        parties, index = parse_parties(lines, 0)
        assert len(parties) == 2
        assert index == 5


# =============================================================================
# PREAMBLE & MISSING CAPTION TESTS
# =============================================================================

class TestPreambleAndMissingCaption:
    """Stamps above the caption; documents with no caption at all."""

    def test_filing_stamps_are_skipped(self, filing_lines):
        lines = ["Filed: 1/5/2024 10:15 AM", "Clerk", "Marion County, Indiana", ""] + filing_lines
        result = parse_caption(lines)
        assert result.caption is not None
        assert result.caption.cause_number == "49D01-2301-CR-000123"
        assert result.body_start_index == 14

    def test_header_stamp_is_skipped(self, filing_lines):
        lines = ["Marion Superior Court 1"] + filing_lines
        assert skip_preamble(lines, 0) == 1
        assert parse_caption(lines).caption.county == "MARION"

    def test_no_caption(self):
        lines = ["MOTION TO DISMISS", "The defendant moves to dismiss."]
        result = parse_caption(lines)
        assert result == CaptionParseResult(caption=None, body_start_index=0)

    def test_empty_input(self):
        assert parse_caption([]) == CaptionParseResult(caption=None, body_start_index=0)

    def test_state_line_outside_search_window(self):
        lines = [")"] * 15 + ["STATE OF INDIANA IN THE MARION SUPERIOR COURT"]
        assert find_caption_start(lines, 0) is None
        assert parse_caption(lines).caption is None

    def test_state_line_inside_search_window(self):
        lines = [")"] * 14 + ["STATE OF INDIANA IN THE MARION SUPERIOR COURT"]
        assert find_caption_start(lines, 0) == 14

    def test_no_caption_result_to_dict(self):
        assert parse_caption(["Just text."]).to_dict() == {"caption": None, "bodyStartIndex": 0}


# =============================================================================
# HEADER TESTS
# =============================================================================

class TestHeader:
    """collect_header stopping rules and parse_header field extraction."""

    def test_collect_header_stops_at_first_party(self, filing_lines):
        header, index = collect_header(filing_lines, 0)
        assert header == filing_lines[:3]
        assert index == 3

    def test_collect_header_stops_at_second_state_line(self):
        lines = [
            "STATE OF INDIANA IN THE MARION SUPERIOR COURT",
            "COUNTY OF MARION CAUSE NO.: 1",
            "STATE OF INDIANA,",
            "Plaintiff,",
        ]
        header, index = collect_header(lines, 0)
        assert index == 2

    def test_state_only_line_with_court(self):
        caption = parse_header(["STATE OF INDIANA  IN THE HAMILTON CIRCUIT COURT", "COUNTY OF HAMILTON"])
        assert caption.court == "HAMILTON CIRCUIT COURT"
        assert caption.county == "HAMILTON"

    def test_court_on_its_own_line(self):
        caption = parse_header(["STATE OF INDIANA", "IN THE ALLEN SUPERIOR COURT", "COUNTY OF ALLEN"])
        assert caption.court == "ALLEN SUPERIOR COURT"

    def test_multi_word_county(self):
        caption = parse_header(["STATE OF INDIANA", "COUNTY OF ST. JOSEPH CAUSE NO. 71D02-2101-F6-000001"])
        assert caption.county == "ST. JOSEPH"
        assert caption.cause_number == "71D02-2101-F6-000001"

    def test_county_line_with_court_in_right_column(self):
        caption = parse_header([
            "STATE OF INDIANA          )    IN THE MARION COUNTY",
            "COUNTY OF MARION          )    SUPERIOR COURT NO. 07",
            "                          )    CAUSE NO.: 49D07-2205-CR-014567",
        ])
        assert caption.county == "MARION"
        assert caption.court == "MARION COUNTY SUPERIOR COURT NO. 07"
        assert caption.cause_number == "49D07-2205-CR-014567"

    def test_county_line_with_unrecognized_right_column(self):
        caption = parse_header(["STATE OF INDIANA", "COUNTY OF ST. JOSEPH      )    CRIMINAL DIVISION"])
        assert caption.county == "ST. JOSEPH"

    def test_venue_mark_on_county_line(self):
        caption = parse_header(["STATE OF INDIANA", "COUNTY OF MARION SS: CIVIL DIVISION"])
        assert caption.county == "MARION"
        assert caption.has_venue_mark is True
        assert caption.division == "CIVIL DIVISION"

    def test_bare_venue_mark(self):
        caption = parse_header(["STATE OF INDIANA", "SS:", "COUNTY OF MARION"])
        assert caption.has_venue_mark is True
        assert caption.division == ""

    def test_cause_number_on_its_own_line(self):
        caption = parse_header(["STATE OF INDIANA", "COUNTY OF MARION", "CAUSE NO. 49D01-2301-CR-000123"])
        assert caption.cause_number == "49D01-2301-CR-000123"

    def test_unmatched_lines_are_ignored(self):
        caption = parse_header(["STATE OF INDIANA", "%%% garbled OCR %%%", "COUNTY OF MARION"])
        assert caption == CaptionData(state="INDIANA", county="MARION")


# =============================================================================
# WRAPPED COURT NAME TESTS
# =============================================================================

class TestWrappedCourtName:
    """Court names split across two lines, keyed to known counties."""

    @staticmethod
    def _lines(county: str, continuation: str) -> list[str]:
        return [
            f"STATE OF INDIANA        )  IN THE {county} COUNTY",
            f"                        )  {continuation}",
            f"COUNTY OF {county}      )  CAUSE NO.: 49D07-2205-CR-014567",
            "",
            "STATE OF INDIANA,",
            "Plaintiff,",
            "v.",
            "JOHN DOE,",
            "Defendant.",
            "MOTION TO SUPPRESS",
        ]

    @pytest.mark.parametrize("county", ["MARION", "WAYNE", "WHITLEY", "LAKE", "ALLEN", "HAMILTON"])
    def test_known_counties_are_reassembled(self, county):
        caption = parse_caption(self._lines(county, "SUPERIOR COURT NO. 07")).caption
        assert caption.court == f"{county} COUNTY SUPERIOR COURT NO. 07"

    def test_circuit_court_continuation(self):
        caption = parse_caption(self._lines("WAYNE", "CIRCUIT COURT")).caption
        assert caption.court == "WAYNE COUNTY CIRCUIT COURT"

    def test_other_counties_are_left_as_is(self):
        caption = parse_caption(self._lines("BROWN", "CIRCUIT COURT")).caption
        assert caption.court == "BROWN COUNTY"

    def test_parties_after_wrapped_court(self):
        lines = self._lines("MARION", "SUPERIOR COURT NO. 07")
        result = parse_caption(lines)
        assert result.caption.parties == [
            Party(name="STATE OF INDIANA", role="Plaintiff"),
            Party(name="JOHN DOE", role="Defendant"),
        ]
        assert lines[result.body_start_index] == "MOTION TO SUPPRESS"
