"""
Court filing import and export.

Recovers the caption and body of a filing from extracted text lines and
writes the resulting document tree back out as .docx or PDF.
"""

__version__ = "0.1.0"
