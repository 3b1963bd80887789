"""
Print exporter: document tree -> paginated PDF (WeasyPrint).

The tree is rendered to HTML, the formatting rules to a paged-media
stylesheet, and WeasyPrint lays both out. Page numbers, the running
header and pleading-paper line numbers live in ``@page`` margin boxes,
so they repeat on every page without touching the body markup.
"""

import html
import logging
from typing import Any, Mapping, Optional, Union

from weasyprint import CSS, HTML

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
from pleadings.services.export.fields import format_date, resolve_choice
from pleadings.services.field_options import FieldOptionSet

logger = logging.getLogger(__name__)

PAGE_NUMBER_BOXES = {
    "bottom-left": "@bottom-left",
    "bottom-center": "@bottom-center",
    "bottom-right": "@bottom-right",
}

BULLET = "\u2022"
EMPTY_LINE = "&#160;"


def _css_string(value: str) -> str:
    """Quote ``value`` for a CSS ``content`` property."""
    escaped = value.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\A ")
    return f'"{escaped}"'


def _css_font_family(value: str) -> str:
    # Single family names are quoted; CSS font lists pass through as given
    return value if "," in value or value.startswith(("'", '"')) else _css_string(value)


class HtmlRenderer:
    """Depth-first walk of a document tree into court-filing HTML."""

    def __init__(self, option_sets: Optional[Mapping[str, FieldOptionSet]] = None):
        self.option_sets = option_sets or {}

    def render(self, root: Document, title: str) -> str:
        body = "\n".join(
            self.block(block, f"doc.content[{index}]")
            for index, block in enumerate(root.content)
        )
        return (
            "<!DOCTYPE html>\n"
            '<html lang="en">\n'
            "<head>\n"
            '<meta charset="UTF-8">\n'
            f"<title>{html.escape(title)}</title>\n"
            "</head>\n"
            f"<body>\n{body}\n</body>\n"
            "</html>\n"
        )

    def block(self, node, path: str) -> str:
        match node:
            case Paragraph():
                return f"<p{self._align(node.attrs.text_align)}>{self.inlines(node.content, path)}</p>"
            case Heading():
                level = node.attrs.level
                return f"<h{level}{self._align(node.attrs.text_align)}>{self.inlines(node.content, path)}</h{level}>"
            case CodeBlock():
                return f'<pre class="caption">{html.escape(node.text)}</pre>'
            case OrderedList():
                return "\n".join(
                    self.list_item(item, f"{node.attrs.start + offset}. ", f"{path}.content[{offset}]")
                    for offset, item in enumerate(node.content)
                )
            case BulletList():
                return "\n".join(
                    self.list_item(item, f"{BULLET} ", f"{path}.content[{offset}]")
                    for offset, item in enumerate(node.content)
                )
            case HorizontalRule():
                return "<hr>"
            case _:
                raise UnknownNodeKindError(getattr(node, "type", type(node).__name__), path, "document body")

    def list_item(self, item: ListItem, marker: str, path: str) -> str:
        """Item text joins the marker line; nested blocks follow it."""
        if not isinstance(item, ListItem):
            raise UnknownNodeKindError(getattr(item, "type", type(item).__name__), path, "list")
        line: list[str] = [f'<span class="marker">{html.escape(marker)}</span>']
        after: list[str] = []
        for index, block in enumerate(item.content):
            block_path = f"{path}.content[{index}]"
            if isinstance(block, (Paragraph, Heading)):
                line.append(self.inlines(block.content, block_path, allow_empty=True))
            else:
                after.append(self.block(block, block_path))
        return "\n".join([f'<p class="list-item">{"".join(line)}</p>', *after])

    def inlines(self, nodes: list, path: str, allow_empty: bool = False) -> str:
        parts: list[str] = []
        for index, node in enumerate(nodes):
            node_path = f"{path}.content[{index}]"
            match node:
                case TextRun():
                    parts.append(self.text_run(node))
                case DateField():
                    parts.append(f'<span class="field date">{html.escape(format_date(node))}</span>')
                case ChoiceField():
                    value = resolve_choice(node, self.option_sets)
                    parts.append(f'<span class="field choice">{html.escape(value)}</span>')
                case _:
                    raise UnknownNodeKindError(getattr(node, "type", type(node).__name__), node_path, "inline content")
        rendered = "".join(parts)
        if not rendered and not allow_empty:
            # An empty paragraph still takes one line on pleading paper
            return EMPTY_LINE
        return rendered

    def text_run(self, node: TextRun) -> str:
        value = html.escape(node.text)
        if node.has_mark("bold"):
            value = f"<strong>{value}</strong>"
        if node.has_mark("italic"):
            value = f"<em>{value}</em>"
        if node.has_mark("underline"):
            value = f"<u>{value}</u>"
        family = node.font_family
        if family:
            style = html.escape(f"font-family: {_css_font_family(family)}", quote=True)
            value = f'<span style="{style}">{value}</span>'
        return value

    @staticmethod
    def _align(align: Optional[str]) -> str:
        return f' class="align-{align}"' if align else ""


def render_css(rules: FormattingRules = INDIANA_RULES, title: str = "") -> str:
    """Paged-media stylesheet for ``rules``."""
    page = rules.page
    margins = page.margins
    line_height = rules.font.size * rules.line_spacing
    body_font = _css_font_family(rules.font.family)

    page_boxes = [
        f"    {PAGE_NUMBER_BOXES[rules.page_numbers.position]} {{\n"
        f"        content: counter(page);\n"
        f"        font-family: {body_font};\n"
        f"        font-size: {rules.font.size}pt;\n"
        f"    }}",
    ]

    header_text = rules.header_text(title)
    if header_text:
        page_boxes.append(
            f"    @top-center {{\n"
            f"        content: {_css_string(header_text)};\n"
            f"        font-family: {body_font};\n"
            f"        font-size: {rules.font.size}pt;\n"
            f"        font-style: {'italic' if rules.header.italic else 'normal'};\n"
            f"    }}"
        )

    if rules.line_numbers.enabled:
        # Margin boxes repeat per page, so numbering restarts on every page
        numbers = "\\A ".join(str(n) for n in range(1, rules.lines_per_page + 1))
        page_boxes.append(
            f"    @left-top {{\n"
            f'        content: "{numbers}";\n'
            f"        white-space: pre;\n"
            f"        vertical-align: top;\n"
            f"        text-align: right;\n"
            f"        padding-right: 0.25in;\n"
            f"        font-family: {body_font};\n"
            f"        font-size: {rules.font.size}pt;\n"
            f"        line-height: {line_height}pt;\n"
            f"        color: #555;\n"
            f"    }}"
        )

    css = [
        "@page {\n"
        f"    size: {page.width}in {page.height}in;\n"
        f"    margin: {margins.top}in {margins.right}in {margins.bottom}in {margins.left}in;\n"
        + "\n".join(page_boxes)
        + "\n}",
    ]

    if header_text and rules.header.skip_first_page:
        css.append("@page :first {\n    @top-center { content: none; }\n}")

    css.append(
        "body {\n"
        f"    font-family: {body_font};\n"
        f"    font-size: {rules.font.size}pt;\n"
        f"    line-height: {line_height}pt;\n"
        "    color: #000;\n"
        "    margin: 0;\n"
        "}\n"
        "\n"
        "p, h1, h2, h3 {\n"
        "    margin: 0;\n"
        "    font-size: inherit;\n"
        "}\n"
        "\n"
        "h1, h2, h3 {\n"
        "    font-weight: bold;\n"
        "}\n"
        "\n"
        "pre.caption {\n"
        f"    font-family: {_css_font_family(rules.caption_font_family)};\n"
        f"    font-size: {rules.caption_font_size}pt;\n"
        "    line-height: 1.2;\n"
        "    white-space: pre;\n"
        "    margin: 0;\n"
        "}\n"
        "\n"
        "hr {\n"
        "    border: none;\n"
        "    border-top: 1px solid #000;\n"
        "}\n"
        "\n"
        ".align-left { text-align: left; }\n"
        ".align-center { text-align: center; }\n"
        ".align-right { text-align: right; }\n"
        ".align-justify { text-align: justify; }"
    )
    return "\n\n".join(css) + "\n"


def render_html(
    tree: Union[Document, dict[str, Any]],
    title: str,
    option_sets: Optional[Mapping[str, FieldOptionSet]] = None,
) -> str:
    """The HTML handed to WeasyPrint; exposed for inspection and tests."""
    root = load_tree(tree)
    validate_tree(root)
    return HtmlRenderer(option_sets).render(root, title)


def export_pdf(
    tree: Union[Document, dict[str, Any]],
    title: str,
    rules: FormattingRules = INDIANA_RULES,
    option_sets: Optional[Mapping[str, FieldOptionSet]] = None,
) -> bytes:
    """Render ``tree`` as a court-formatted, paginated PDF."""
    markup = render_html(tree, title, option_sets)
    stylesheet = render_css(rules, title)

    if rules.line_numbers.enabled and not rules.line_numbers.restart_per_page:
        # Margin-box numbering is drawn per page, so it cannot run on
        logger.warning(
            "PDF line numbers restart on every page; continuous numbering is only honored in .docx",
            extra=log_extra(export_format="pdf", document_title=title),
        )

    try:
        data = HTML(string=markup).write_pdf(stylesheets=[CSS(string=stylesheet)])
    except Exception as exc:
        logger.error("PDF rendering failed: %s", exc, exc_info=True)
        raise ExportError("pdf", str(exc)) from exc

    logger.info(
        "Exported PDF",
        extra=log_extra(export_format="pdf", document_title=title, size_bytes=len(data)),
    )
    return data
