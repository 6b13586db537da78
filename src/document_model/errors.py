"""Typed exception hierarchy for document reading errors.

This module defines the base exception shared by every docmark package and
the errors raised while turning editor JSON or HTML into a document tree.
Conversion itself never raises these; they only come from the input adapters.
"""

from typing import Optional


class DocmarkError(Exception):
    """Base exception for all docmark errors.

    Use this to catch any application-level error from the exporter.
    """
    pass


class DocumentParseError(DocmarkError):
    """Raised when editor input cannot be read as a document tree."""

    def __init__(self, message: str, source_format: Optional[str] = None):
        if source_format:
            full_message = f"Cannot read {source_format} document: {message}"
        else:
            full_message = f"Cannot read document: {message}"
        super().__init__(full_message)
        self.source_format = source_format
        self.original_message = message
