"""Rule descriptors for the Markdown rule engine.

A rule pairs a node matcher with a serializer. Matching is keyed by NodeKind
first; an optional predicate then checks attributes. Serializers receive the
already converted content of the node's children, the node itself and a
RenderContext giving access to the engine and the node's ancestor chain.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, FrozenSet, Iterable, Optional, Tuple

from src.document_model.models import DocumentNode, NodeKind

if TYPE_CHECKING:
    from .engine import RuleEngine


@dataclass(frozen=True)
class RenderContext:
    """Read-only state handed to a serializer.

    Attributes:
        engine: Engine running the current conversion pass
        ancestors: Nodes above the current one, outermost first
    """

    engine: "RuleEngine"
    ancestors: Tuple[DocumentNode, ...] = ()


Serializer = Callable[[str, DocumentNode, RenderContext], str]
Predicate = Callable[[DocumentNode], bool]


@dataclass(frozen=True)
class Rule:
    """A (matcher, serializer) pair governing how one node kind is rendered.

    Attributes:
        name: Unique rule name, used by configuration to order and disable rules
        kinds: Node kinds this rule is registered for
        render: Serializer producing Markdown for a matched node
        applies: Optional extra predicate over the node's attributes
        converts_children: False when the serializer reads the node's children
            itself, so the engine skips converting them first
    """

    name: str
    kinds: FrozenSet[NodeKind]
    render: Serializer
    applies: Optional[Predicate] = None
    converts_children: bool = True

    def matches(self, node: DocumentNode) -> bool:
        """Check whether this rule handles the node."""
        if node.kind not in self.kinds:
            return False
        return self.applies is None or bool(self.applies(node))


def make_rule(
    name: str,
    kinds: Iterable[NodeKind],
    render: Serializer,
    applies: Optional[Predicate] = None,
    converts_children: bool = True,
) -> Rule:
    """Build a Rule from any iterable of kinds."""
    return Rule(
        name=name,
        kinds=frozenset(kinds),
        render=render,
        applies=applies,
        converts_children=converts_children,
    )
