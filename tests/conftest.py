"""
Shared fixtures: a standard Indiana filing as extracted text, and a
document tree that exercises every node kind.
"""

import pytest

from pleadings.models.document import (
    bold,
    bullet_list,
    choice_field,
    code_block,
    date_field,
    document,
    font,
    heading,
    horizontal_rule,
    italic,
    ordered_list,
    paragraph,
    text,
    underline,
)


@pytest.fixture
def filing_lines():
    """Caption + title + one body line, as a text extractor returns them."""
    return [
        "STATE OF INDIANA IN THE MARION SUPERIOR COURT",
        "COUNTY OF MARION CAUSE NO.: 49D01-2301-CR-000123",
        "",
        "JOHN DOE,",
        "     Plaintiff,",
        "",
        "v.",
        "",
        "JANE ROE,",
        "     Defendant.",
        "MOTION TO DISMISS",
        "The defendant moves...",
    ]


@pytest.fixture
def motion_tree():
    """Every block and inline kind, with an unresolved choice field."""
    return document(
        code_block(["STATE OF INDIANA                    )    IN THE MARION SUPERIOR COURT"]),
        heading(text("MOTION TO DISMISS", bold()), level=1, align="center"),
        paragraph(
            text("Defendant is charged with a "),
            choice_field("offense-level", "Offense Level"),
            text(" filed on "),
            date_field("2024-01-05T09:00:00"),
            text("."),
        ),
        paragraph(
            text("Bold ", bold()),
            text("italic ", italic()),
            text("underlined", underline()),
            text(" mono", font("'Courier New', monospace")),
            align="justify",
        ),
        ordered_list("The charge is defective.", "The statute has run.", start=1),
        bullet_list("Exhibit A", "Exhibit B"),
        horizontal_rule(),
        paragraph("/s/ Jane Attorney"),
    )
