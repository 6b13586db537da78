"""Standard rule set and rule lookup by name.

DEFAULT_RULE_ORDER is the precedence of the standard rules. Where two rules
can match the same node the earlier one wins: a span that is both underlined
and colored renders as underline, because ``underline`` comes before
``styled_span``.
"""

from typing import Dict, Iterable, List, Optional, Tuple

from .block_rules import (
    BLOCKQUOTE_RULE,
    CODE_BLOCK_RULE,
    HEADING_RULE,
    HORIZONTAL_RULE_RULE,
    PARAGRAPH_RULE,
)
from .errors import UnknownRuleError
from .inline_rules import (
    CODE_RULE,
    EMPHASIS_RULE,
    HARD_BREAK_RULE,
    IMAGE_RULE,
    LINK_RULE,
    STRONG_RULE,
    STYLED_SPAN_RULE,
    TASK_ITEM_RULE,
    UNDERLINE_RULE,
)
from .list_serializer import list_rule
from .rules import Rule


STANDARD_RULES: Tuple[Rule, ...] = (
    HEADING_RULE,
    list_rule(),
    TASK_ITEM_RULE,
    IMAGE_RULE,
    UNDERLINE_RULE,
    STYLED_SPAN_RULE,
    CODE_BLOCK_RULE,
    PARAGRAPH_RULE,
    BLOCKQUOTE_RULE,
    HORIZONTAL_RULE_RULE,
    HARD_BREAK_RULE,
    STRONG_RULE,
    EMPHASIS_RULE,
    CODE_RULE,
    LINK_RULE,
)

RULES_BY_NAME: Dict[str, Rule] = {rule.name: rule for rule in STANDARD_RULES}

DEFAULT_RULE_ORDER: Tuple[str, ...] = tuple(rule.name for rule in STANDARD_RULES)


def default_rules() -> List[Rule]:
    """Get the standard rules in precedence order."""
    return [RULES_BY_NAME[name] for name in DEFAULT_RULE_ORDER]


def build_rules(
    names: Optional[Iterable[str]] = None,
    exclude: Optional[Iterable[str]] = None,
) -> List[Rule]:
    """Build an ordered rule list from rule names.

    Args:
        names: Rule names in precedence order; None for DEFAULT_RULE_ORDER
        exclude: Rule names to leave out

    Returns:
        Rules in the requested order

    Raises:
        UnknownRuleError: If a name in names or exclude is not a known rule
    """
    known = list(DEFAULT_RULE_ORDER)
    ordered = list(DEFAULT_RULE_ORDER if names is None else names)
    excluded = set(exclude or [])

    for name in list(ordered) + sorted(excluded):
        if name not in RULES_BY_NAME:
            raise UnknownRuleError(name, known)

    rules: List[Rule] = []
    seen = set()
    for name in ordered:
        if name in excluded or name in seen:
            continue
        seen.add(name)
        rules.append(RULES_BY_NAME[name])
    return rules
