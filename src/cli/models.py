"""Data models for CLI operations.

This module defines the data models used by the docmark command-line tool.
All models use dataclasses for clean, type-safe data structures.
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import List, Optional


class ExitCode(IntEnum):
    """Exit codes for CLI operations.

    - SUCCESS (0): Markdown produced (printed or written)
    - GENERAL_ERROR (1): Configuration problems, write failures, unexpected errors
    - INPUT_ERROR (2): Input file missing, unreadable, or not an editor document

    Example:
        >>> exit_code = ExitCode.SUCCESS
        >>> sys.exit(exit_code)
    """
    SUCCESS = 0
    GENERAL_ERROR = 1
    INPUT_ERROR = 2


@dataclass
class ExportConfig:
    """Exporter configuration loaded from .docmark.yaml.

    Attributes:
        rules: Rule names in precedence order (None for the standard order)
        exclude_rules: Rule names to disable
        default_title: Title used for export filenames when a document has none
        input_format: Default input format: "auto", "json" or "html"

    Example:
        >>> config = ExportConfig(exclude_rules=["styled_span"])
        >>> config = ExportConfig()  # Standard rules, auto-detected input
    """
    rules: Optional[List[str]] = None
    exclude_rules: List[str] = field(default_factory=list)
    default_title: str = "Untitled"
    input_format: str = "auto"
