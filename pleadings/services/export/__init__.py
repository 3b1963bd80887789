"""
Format exporters. Both share one signature:

    export(tree, title, rules=INDIANA_RULES, option_sets=None) -> bytes
"""

from pleadings.core.errors import ExportError
from pleadings.services.export.docx_exporter import DocxExporter, export_docx
from pleadings.services.export.pdf_exporter import export_pdf, render_css, render_html

EXPORTERS = {
    "docx": export_docx,
    "pdf": export_pdf,
}


def export(fmt: str, tree, title: str, rules=None, option_sets=None) -> bytes:
    """Dispatch to the exporter registered for ``fmt``."""
    exporter = EXPORTERS.get(fmt.lower().lstrip("."))
    if exporter is None:
        raise ExportError(fmt, f"Unsupported export format; expected one of {sorted(EXPORTERS)}")
    if rules is None:
        return exporter(tree, title, option_sets=option_sets)
    return exporter(tree, title, rules, option_sets)


__all__ = [
    "DocxExporter",
    "EXPORTERS",
    "export",
    "export_docx",
    "export_pdf",
    "render_css",
    "render_html",
]
