"""
Standardized Error Handling for the pleadings toolkit.

Parsing is best-effort and never raises on messy input. The exceptions
below are reserved for the places where degrading silently would drop
content from a filing: malformed document trees and export failures.
"""

from typing import Any


# =============================================================================
# Custom Exceptions
# =============================================================================

class PleadingsError(Exception):
    """Base exception for pleadings-specific errors."""

    def __init__(
        self,
        message: str,
        error_code: str = "pleadings_error",
        details: list[dict] | None = None,
    ):
        self.message = message
        self.error_code = error_code
        self.details = details
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class UnknownNodeKindError(PleadingsError):
    """A document tree node the exporters do not know how to render."""

    def __init__(self, kind: Any, path: str, context: str | None = None):
        self.kind = kind
        self.path = path
        self.context = context
        where = f" in {context}" if context else ""
        super().__init__(
            message=f"Unknown node kind {kind!r} at {path}{where}",
            error_code="unknown_node_kind",
            details=[{"kind": kind, "path": path, "context": context}],
        )


class TreeStructureError(PleadingsError):
    """The document tree is not a tree (shared or cyclic node)."""

    def __init__(self, message: str, path: str):
        self.path = path
        super().__init__(
            message=f"{message} at {path}",
            error_code="invalid_tree",
            details=[{"path": path}],
        )


class ExportError(PleadingsError):
    """The rendering back end failed to produce a document."""

    def __init__(self, export_format: str, message: str = "Export failed"):
        self.export_format = export_format
        super().__init__(
            message=f"{export_format}: {message}",
            error_code="export_failed",
            details=[{"format": export_format}],
        )


class ConfigurationError(PleadingsError):
    """Invalid formatting rules or settings."""

    def __init__(self, message: str):
        super().__init__(
            message=message,
            error_code="configuration_error",
        )


# =============================================================================
# Exports
# =============================================================================

__all__ = [
    "PleadingsError",
    "UnknownNodeKindError",
    "TreeStructureError",
    "ExportError",
    "ConfigurationError",
]
