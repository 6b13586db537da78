"""Typed exception hierarchy for Markdown export errors.

The rule engine itself never raises for malformed documents. These errors
cover building a rule set from names and writing exported files.
"""

from typing import List, Optional

from src.document_model.errors import DocmarkError


class ExportError(DocmarkError):
    """Base exception for all Markdown export errors."""
    pass


class UnknownRuleError(ExportError):
    """Raised when a rule set names a rule that does not exist."""

    def __init__(self, rule_name: str, known_rules: List[str]):
        super().__init__(
            f"Unknown rule '{rule_name}' (known rules: {', '.join(known_rules)})"
        )
        self.rule_name = rule_name
        self.known_rules = known_rules


class ExportWriteError(ExportError):
    """Raised when an exported Markdown file cannot be written."""

    def __init__(self, file_path: str, reason: Optional[str] = None):
        message = f"Cannot write Markdown export to {file_path}"
        if reason:
            message += f": {reason}"
        super().__init__(message)
        self.file_path = file_path
        self.reason = reason
