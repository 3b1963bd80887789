"""
Jurisdiction formatting rules applied by both exporters.

Rules are fixed configuration handed to an export call; nothing here is
discovered from the document tree.
"""

from typing import Literal, Optional

from pydantic import BaseModel, Field


# 1 inch = 72 points
INCHES_TO_PT = 72


class FontRules(BaseModel):
    family: str = "Times New Roman"
    size: float = Field(12, gt=0)  # points


class Margins(BaseModel):
    top: float = Field(1.0, ge=0)  # inches
    bottom: float = Field(1.0, ge=0)
    left: float = Field(1.0, ge=0)
    right: float = Field(1.0, ge=0)


class PageRules(BaseModel):
    width: float = Field(8.5, gt=0)  # inches
    height: float = Field(11.0, gt=0)
    margins: Margins = Field(default_factory=Margins)


class LineNumberRules(BaseModel):
    enabled: bool = True
    restart_per_page: bool = True


class PageNumberRules(BaseModel):
    position: Literal["bottom-left", "bottom-center", "bottom-right"] = "bottom-center"


class HeaderRules(BaseModel):
    """Running header. ``text=None`` means "use the document title"."""
    enabled: bool = True
    text: Optional[str] = None
    italic: bool = True
    skip_first_page: bool = False


class FormattingRules(BaseModel):
    """Court filing layout: font, page geometry, spacing, numbering, header."""
    font: FontRules = Field(default_factory=FontRules)
    page: PageRules = Field(default_factory=PageRules)
    line_spacing: float = Field(2.0, gt=0)  # multiplier, 2 = double spaced
    line_numbers: LineNumberRules = Field(default_factory=LineNumberRules)
    page_numbers: PageNumberRules = Field(default_factory=PageNumberRules)
    header: HeaderRules = Field(default_factory=HeaderRules)
    caption_font_family: str = "Courier New"
    caption_font_size: float = Field(10, gt=0)

    def header_text(self, title: str) -> Optional[str]:
        """Resolved running header text, or None when no header is printed."""
        if not self.header.enabled:
            return None
        text = self.header.text if self.header.text is not None else title
        return text or None

    @property
    def usable_height_in(self) -> float:
        margins = self.page.margins
        return self.page.height - margins.top - margins.bottom

    @property
    def lines_per_page(self) -> int:
        """Body lines that fit on one page at the configured spacing."""
        line_height_pt = self.font.size * self.line_spacing
        return max(1, int(self.usable_height_in * INCHES_TO_PT // line_height_pt))


# Indiana trial court filings: Times 12pt, Letter, 1in margins,
# double spaced, line numbers restarting per page, centered page number.
INDIANA_RULES = FormattingRules()
