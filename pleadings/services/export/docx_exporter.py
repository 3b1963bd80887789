"""
Editable-format exporter: document tree -> .docx bytes (python-docx).

Page geometry, margins, running header, footer page number and line
numbering are set once on the section; every node becomes one or more
paragraphs in a depth-first walk.
"""

import io
import logging
from typing import Any, Mapping, Optional, Union

import docx
from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.oxml import OxmlElement
from docx.oxml.ns import qn
from docx.shared import Inches, Pt, RGBColor

from pleadings.core.errors import ExportError, UnknownNodeKindError
from pleadings.core.logging_config import log_extra
from pleadings.models.document import (
    BulletList,
    ChoiceField,
    CodeBlock,
    DateField,
    Document,
    Heading,
    HorizontalRule,
    ListItem,
    OrderedList,
    Paragraph,
    TextRun,
    load_tree,
    validate_tree,
)
from pleadings.models.formatting import INDIANA_RULES, FormattingRules
from pleadings.services.export.fields import format_date, primary_font_family, resolve_choice
from pleadings.services.field_options import FieldOptionSet

logger = logging.getLogger(__name__)

ALIGNMENTS = {
    "left": WD_ALIGN_PARAGRAPH.LEFT,
    "center": WD_ALIGN_PARAGRAPH.CENTER,
    "right": WD_ALIGN_PARAGRAPH.RIGHT,
    "justify": WD_ALIGN_PARAGRAPH.JUSTIFY,
}

PAGE_NUMBER_ALIGNMENTS = {
    "bottom-left": WD_ALIGN_PARAGRAPH.LEFT,
    "bottom-center": WD_ALIGN_PARAGRAPH.CENTER,
    "bottom-right": WD_ALIGN_PARAGRAPH.RIGHT,
}

HORIZONTAL_RULE_TEXT = "_" * 40
HEADING_LEVELS = (1, 2, 3)

# Elements that must follow w:lnNumType inside w:sectPr
_SECTPR_AFTER_LNNUM = (
    "w:pgNumType", "w:cols", "w:formProt", "w:vAlign", "w:noEndnote",
    "w:titlePg", "w:textDirection", "w:bidi", "w:rtlGutter", "w:docGrid",
    "w:printerSettings", "w:sectPrChange",
)


class DocxExporter:
    """Builds one .docx per call; holds no state between exports."""

    def __init__(
        self,
        rules: FormattingRules = INDIANA_RULES,
        option_sets: Optional[Mapping[str, FieldOptionSet]] = None,
    ):
        self.rules = rules
        self.option_sets = option_sets or {}

    def export(self, tree: Union[Document, dict[str, Any]], title: str) -> bytes:
        root = load_tree(tree)
        validate_tree(root)

        doc = docx.Document()
        doc.core_properties.title = title
        self._setup_styles(doc)
        self._setup_section(doc, title)

        for index, block in enumerate(root.content):
            self._render_block(doc, block, f"doc.content[{index}]")

        buffer = io.BytesIO()
        try:
            doc.save(buffer)
        except Exception as exc:
            logger.error("DOCX serialization failed: %s", exc, exc_info=True)
            raise ExportError("docx", str(exc)) from exc

        data = buffer.getvalue()
        logger.info(
            "Exported DOCX",
            extra=log_extra(export_format="docx", document_title=title, size_bytes=len(data)),
        )
        return data

    # -------------------------------------------------------------------------
    # Section level
    # -------------------------------------------------------------------------

    def _setup_styles(self, doc) -> None:
        normal = doc.styles["Normal"]
        normal.font.name = self.rules.font.family
        normal.font.size = Pt(self.rules.font.size)

        # The default template draws headings in blue theme fonts
        for level in HEADING_LEVELS:
            style = doc.styles[f"Heading {level}"]
            style.font.name = self.rules.font.family
            style.font.size = Pt(self.rules.font.size)
            style.font.color.rgb = RGBColor(0, 0, 0)
            fonts = style.element.rPr.rFonts
            for attr in ("w:asciiTheme", "w:hAnsiTheme", "w:eastAsiaTheme", "w:cstheme"):
                fonts.attrib.pop(qn(attr), None)

    def _setup_section(self, doc, title: str) -> None:
        rules = self.rules
        section = doc.sections[0]
        section.page_width = Inches(rules.page.width)
        section.page_height = Inches(rules.page.height)
        section.top_margin = Inches(rules.page.margins.top)
        section.bottom_margin = Inches(rules.page.margins.bottom)
        section.left_margin = Inches(rules.page.margins.left)
        section.right_margin = Inches(rules.page.margins.right)

        header_text = rules.header_text(title)
        skip_first = bool(header_text) and rules.header.skip_first_page
        section.different_first_page_header_footer = skip_first

        if header_text:
            paragraph = section.header.paragraphs[0]
            paragraph.alignment = WD_ALIGN_PARAGRAPH.CENTER
            run = paragraph.add_run(header_text)
            run.italic = rules.header.italic
            self._style_run(run)

        footers = [section.footer]
        if skip_first:
            # The first page keeps its page number, only the header is dropped
            footers.append(section.first_page_footer)
        for footer in footers:
            paragraph = footer.paragraphs[0]
            paragraph.alignment = PAGE_NUMBER_ALIGNMENTS[rules.page_numbers.position]
            self._add_page_field(paragraph)

        if rules.line_numbers.enabled:
            self._add_line_numbering(section)

    def _add_page_field(self, paragraph) -> None:
        run = paragraph.add_run()
        self._style_run(run)
        begin = OxmlElement("w:fldChar")
        begin.set(qn("w:fldCharType"), "begin")
        instr = OxmlElement("w:instrText")
        instr.set(qn("xml:space"), "preserve")
        instr.text = " PAGE "
        end = OxmlElement("w:fldChar")
        end.set(qn("w:fldCharType"), "end")
        for element in (begin, instr, end):
            run._r.append(element)

    def _add_line_numbering(self, section) -> None:
        line_numbers = OxmlElement("w:lnNumType")
        line_numbers.set(qn("w:countBy"), "1")
        line_numbers.set(qn("w:distance"), "360")
        line_numbers.set(
            qn("w:restart"),
            "newPage" if self.rules.line_numbers.restart_per_page else "continuous",
        )
        section._sectPr.insert_element_before(line_numbers, *_SECTPR_AFTER_LNNUM)

    # -------------------------------------------------------------------------
    # Blocks
    # -------------------------------------------------------------------------

    def _render_block(self, doc, node, path: str) -> None:
        match node:
            case Paragraph():
                paragraph = doc.add_paragraph()
                self._finish_paragraph(paragraph, node.attrs.text_align)
                self._add_inlines(paragraph, node.content, path)
            case Heading():
                paragraph = doc.add_paragraph(style=f"Heading {node.attrs.level}")
                self._finish_paragraph(paragraph, node.attrs.text_align)
                self._add_inlines(paragraph, node.content, path)
            case CodeBlock():
                paragraph = doc.add_paragraph()
                paragraph.paragraph_format.line_spacing = 1.0
                run = paragraph.add_run(node.text)
                run.font.name = self.rules.caption_font_family
                run.font.size = Pt(self.rules.caption_font_size)
            case OrderedList():
                for offset, item in enumerate(node.content):
                    paragraph = doc.add_paragraph()
                    self._finish_paragraph(paragraph, None)
                    prefix = paragraph.add_run(f"{node.attrs.start + offset}. ")
                    self._style_run(prefix)
                    self._render_list_item(doc, paragraph, item, f"{path}.content[{offset}]")
            case BulletList():
                for offset, item in enumerate(node.content):
                    paragraph = doc.add_paragraph(style="List Bullet")
                    self._finish_paragraph(paragraph, None)
                    self._render_list_item(doc, paragraph, item, f"{path}.content[{offset}]")
            case HorizontalRule():
                paragraph = doc.add_paragraph()
                self._finish_paragraph(paragraph, "center")
                self._style_run(paragraph.add_run(HORIZONTAL_RULE_TEXT))
            case _:
                raise UnknownNodeKindError(getattr(node, "type", type(node).__name__), path, "document body")

    def _render_list_item(self, doc, paragraph, item: ListItem, path: str) -> None:
        """Item text joins the numbered paragraph; nested blocks follow it."""
        if not isinstance(item, ListItem):
            raise UnknownNodeKindError(getattr(item, "type", type(item).__name__), path, "list")
        for index, block in enumerate(item.content):
            block_path = f"{path}.content[{index}]"
            if isinstance(block, (Paragraph, Heading)):
                self._add_inlines(paragraph, block.content, block_path)
            else:
                self._render_block(doc, block, block_path)

    def _finish_paragraph(self, paragraph, align: Optional[str]) -> None:
        paragraph.alignment = ALIGNMENTS.get(align or "left")
        paragraph.paragraph_format.line_spacing = self.rules.line_spacing

    # -------------------------------------------------------------------------
    # Inline
    # -------------------------------------------------------------------------

    def _add_inlines(self, paragraph, nodes: list, path: str) -> None:
        for index, node in enumerate(nodes):
            node_path = f"{path}.content[{index}]"
            match node:
                case TextRun():
                    run = paragraph.add_run(node.text)
                    run.bold = node.has_mark("bold") or None
                    run.italic = node.has_mark("italic") or None
                    run.underline = node.has_mark("underline") or None
                    self._style_run(run, node.font_family)
                case DateField():
                    self._style_run(paragraph.add_run(format_date(node)))
                case ChoiceField():
                    self._style_run(paragraph.add_run(resolve_choice(node, self.option_sets)))
                case _:
                    raise UnknownNodeKindError(getattr(node, "type", type(node).__name__), node_path, "inline content")

    def _style_run(self, run, family: Optional[str] = None) -> None:
        run.font.name = primary_font_family(family) or self.rules.font.family
        run.font.size = Pt(self.rules.font.size)


def export_docx(
    tree: Union[Document, dict[str, Any]],
    title: str,
    rules: FormattingRules = INDIANA_RULES,
    option_sets: Optional[Mapping[str, FieldOptionSet]] = None,
) -> bytes:
    """Render ``tree`` as a court-formatted .docx document."""
    return DocxExporter(rules, option_sets).export(tree, title)
