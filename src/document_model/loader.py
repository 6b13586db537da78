"""Reading documents from editor JSON or HTML text.

The format is either given explicitly or detected: a file extension of
``.json`` or ``.html``/``.htm`` decides first, otherwise text starting with
``{`` is read as JSON and anything else as HTML.
"""

import logging
from pathlib import Path
from typing import Optional

from .errors import DocumentParseError
from .html_reader import HtmlReader
from .json_parser import DocumentParser
from .models import DocumentNode

logger = logging.getLogger(__name__)

INPUT_FORMATS = ("auto", "json", "html")

_EXTENSION_FORMATS = {
    ".json": "json",
    ".html": "html",
    ".htm": "html",
}


def detect_format(content: str, filename: Optional[str] = None) -> str:
    """Detect whether content is editor JSON or HTML.

    Args:
        content: Document text
        filename: Optional source filename used for extension detection

    Returns:
        "json" or "html"
    """
    if filename:
        extension_format = _EXTENSION_FORMATS.get(Path(filename).suffix.lower())
        if extension_format:
            return extension_format

    if content.lstrip().startswith("{"):
        return "json"
    return "html"


def load_document(
    content: str,
    input_format: str = "auto",
    filename: Optional[str] = None,
) -> DocumentNode:
    """Read document text into a DocumentNode tree.

    Args:
        content: Editor JSON or HTML text
        input_format: "auto", "json" or "html"
        filename: Optional source filename, used by "auto" detection

    Returns:
        Root DocumentNode of kind doc

    Raises:
        DocumentParseError: If the format is unknown or the content cannot be read
    """
    if input_format not in INPUT_FORMATS:
        raise DocumentParseError(
            f"unknown input format '{input_format}' (expected one of: {', '.join(INPUT_FORMATS)})"
        )

    if input_format == "auto":
        input_format = detect_format(content, filename)
        logger.debug(f"Detected {input_format} input")

    if input_format == "json":
        return DocumentParser().parse_from_string(content)
    return HtmlReader().read(content)
