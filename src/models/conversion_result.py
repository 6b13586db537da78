"""Conversion result data model."""

from dataclasses import dataclass, field
from typing import Any, Dict, List


@dataclass
class ConversionResult:
    """Result of one document to Markdown conversion.

    Contains the Markdown currently held for the document along with
    metadata and warnings. When a conversion fails, ``markdown`` is the
    previous successful export and ``converted`` is False.

    Attributes:
        markdown: Markdown content (new export, or the previous one on failure)
        metadata: Additional metadata about the conversion (title, revision, ...)
        warnings: Problems encountered while converting
        converted: False when the conversion failed and the previous export was kept
    """
    markdown: str
    metadata: Dict[str, Any] = field(default_factory=dict)
    warnings: List[str] = field(default_factory=list)
    converted: bool = True
