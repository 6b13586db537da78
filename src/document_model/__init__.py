"""Document model for the Markdown exporter.

This package defines the immutable DocumentNode tree and the adapters that
build it from the editor's JSON document state or rendered HTML.
"""

from .errors import DocmarkError, DocumentParseError
from .html_reader import HtmlReader
from .json_parser import DocumentParser
from .loader import INPUT_FORMATS, detect_format, load_document
from .models import DocumentNode, NodeKind, element, text

__all__ = [
    'DocmarkError',
    'DocumentParseError',
    'DocumentNode',
    'DocumentParser',
    'HtmlReader',
    'INPUT_FORMATS',
    'NodeKind',
    'detect_format',
    'element',
    'load_document',
    'text',
]
