"""Markdown export for editor documents.

This package provides the RuleEngine that serializes DocumentNode trees to
the exporter's Markdown dialect, the standard rule set, and the
ExportSession that keeps a document's preview and writes ``.md`` exports.
"""

from .engine import RuleEngine
from .errors import ExportError, ExportWriteError, UnknownRuleError
from .filenames import ExportFilename
from .list_serializer import ListSerializer
from .registry import DEFAULT_RULE_ORDER, build_rules, default_rules
from .rules import RenderContext, Rule, make_rule
from .session import ExportSession

__all__ = [
    'DEFAULT_RULE_ORDER',
    'ExportError',
    'ExportFilename',
    'ExportSession',
    'ExportWriteError',
    'ListSerializer',
    'RenderContext',
    'Rule',
    'RuleEngine',
    'UnknownRuleError',
    'build_rules',
    'default_rules',
    'make_rule',
]
