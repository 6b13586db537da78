"""Rule engine converting document trees to Markdown.

The engine walks a DocumentNode tree depth-first. For every node it selects
the first registered rule that matches, converts the node's children first
(post-order), and hands the joined child output to the rule's serializer.
Nodes no rule matches pass their children's output through unchanged; text
leaves emit their literal value.

The engine holds no per-conversion state. Its rule table is built once in
__init__ and never modified, so one engine can serve any number of
conversions, including concurrent ones.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from src.document_model.models import DocumentNode, NodeKind

from .rules import RenderContext, Rule

logger = logging.getLogger(__name__)

# Errors a rule can hit on a malformed node (missing or mistyped attribute)
RULE_ERRORS = (AttributeError, LookupError, TypeError, ValueError)

MAX_SEPARATOR_NEWLINES = 2


def join_output(output: str, replacement: str) -> str:
    """Append converted content, normalizing the newlines between them.

    The trailing newlines of ``output`` and the leading newlines of
    ``replacement`` are replaced by the larger of the two counts, capped at
    two, so block separators never pile up into extra blank lines.

    Examples:
        >>> join_output("\\n# Title\\n", "\\n\\nText\\n\\n")
        '\\n# Title\\n\\nText\\n\\n'
        >>> join_output("a", "b")
        'ab'
    """
    left = output.rstrip("\n")
    right = replacement.lstrip("\n")
    newlines = max(len(output) - len(left), len(replacement) - len(right))
    return left + "\n" * min(newlines, MAX_SEPARATOR_NEWLINES) + right


def finish_output(output: str) -> str:
    """Strip leading and trailing line breaks from a finished conversion."""
    return output.strip("\t\r\n")


class RuleEngine:
    """Converts DocumentNode trees to Markdown using an ordered rule list.

    Rules are tried in the order they were given; within each node kind the
    first rule whose predicate holds wins. The rule list is fixed at
    construction so the same tree always produces the same string.

    Example:
        >>> engine = RuleEngine()
        >>> engine.convert(document)
        '# Title\\n\\n- first\\n- second'
    """

    def __init__(self, rules: Optional[Sequence[Rule]] = None):
        """Initialize RuleEngine.

        Args:
            rules: Ordered rule descriptors; defaults to the standard rule set
        """
        if rules is None:
            from .registry import default_rules
            rules = default_rules()

        self._rules: Tuple[Rule, ...] = tuple(rules)

        dispatch: Dict[NodeKind, List[Rule]] = {}
        for rule in self._rules:
            for kind in rule.kinds:
                dispatch.setdefault(kind, []).append(rule)
        self._dispatch: Dict[NodeKind, Tuple[Rule, ...]] = {
            kind: tuple(kind_rules) for kind, kind_rules in dispatch.items()
        }

        logger.debug(f"Rule engine ready with rules: {', '.join(self.rule_names)}")

    @property
    def rules(self) -> Tuple[Rule, ...]:
        """Registered rules in precedence order."""
        return self._rules

    @property
    def rule_names(self) -> List[str]:
        return [rule.name for rule in self._rules]

    def convert(self, root: DocumentNode) -> str:
        """Convert a document tree to Markdown.

        Args:
            root: Root of the tree (usually a doc node, any node works)

        Returns:
            Markdown text with leading and trailing line breaks removed.
            A tree nested too deeply for the list serializer's independent
            passes converts to its plain text content instead.
        """
        try:
            output = self._process(root, ())
        except RecursionError:
            logger.warning(
                f"Document under <{root.tag}> is nested too deeply, exporting its plain text"
            )
            output = root.get_text_content()
        return finish_output(output)

    def convert_children(self, node: DocumentNode) -> str:
        """Convert a node's children as an independent conversion pass.

        The children are treated as the top level of a new document: their
        ancestor chain starts at the node itself, and the result is finished
        exactly like convert() output. The list serializer uses this for
        item content.

        Args:
            node: Node whose children are converted

        Returns:
            Markdown text for the children
        """
        return finish_output(self._process_children(node, ()))

    def convert_node(
        self, node: DocumentNode, ancestors: Sequence[DocumentNode] = ()
    ) -> str:
        """Convert one node as if it sat below the given ancestors.

        Args:
            node: Node to convert
            ancestors: Nodes above it, outermost first

        Returns:
            Markdown text finished like convert() output
        """
        return finish_output(self._process(node, tuple(ancestors)))

    def select_rule(self, node: DocumentNode) -> Optional[Rule]:
        """Find the first rule matching a node, None for the default rule."""
        for rule in self._dispatch.get(node.kind, ()):
            try:
                if rule.matches(node):
                    return rule
            except RULE_ERRORS as e:
                logger.warning(
                    f"Rule '{rule.name}' could not match <{node.tag}> node, skipping it: {e}"
                )
        return None

    def _process(self, node: DocumentNode, ancestors: Tuple[DocumentNode, ...]) -> str:
        """Convert one node and its subtree."""
        return self._walk(self._open(node, ancestors))

    def _process_children(
        self, node: DocumentNode, ancestors: Tuple[DocumentNode, ...]
    ) -> str:
        """Convert and join the children of a node."""
        return self._walk(_Frame(node, ancestors, None, iter(node.children)))

    def _walk(self, root: "_Frame") -> str:
        """Run the post-order walk below a frame with an explicit stack.

        Each frame collects the joined output of its children; when a frame
        runs out of children it is closed and its result joined into the
        frame below it.
        """
        stack = [root]
        result: Optional[str] = None
        while stack:
            frame = stack[-1]
            if result is not None:
                frame.output = join_output(frame.output, result)
                result = None

            child = next(frame.pending, None)
            if child is not None:
                stack.append(self._open(child, frame.ancestors + (frame.node,)))
                continue

            stack.pop()
            result = self._close(frame)
        return result or ""

    def _open(self, node: DocumentNode, ancestors: Tuple[DocumentNode, ...]) -> "_Frame":
        rule = self.select_rule(node)
        if rule is None and node.is_text:
            return _Frame(node, ancestors, None, iter(()), leaf_value=node.value or "")
        if rule is not None and not rule.converts_children:
            return _Frame(node, ancestors, rule, iter(()))
        return _Frame(node, ancestors, rule, iter(node.children))

    def _close(self, frame: "_Frame") -> str:
        """Render a frame whose children are converted."""
        node, rule, content = frame.node, frame.rule, frame.output

        if rule is None:
            if frame.leaf_value is not None:
                return frame.leaf_value
            return content

        try:
            return rule.render(content, node, RenderContext(self, frame.ancestors))
        except RULE_ERRORS as e:
            logger.warning(
                f"Rule '{rule.name}' failed on <{node.tag}> node, passing content through: {e}"
            )
            if node.is_text:
                return node.value or ""
            if rule.converts_children:
                return content
            return self._process_children(node, frame.ancestors)


@dataclass
class _Frame:
    """A node whose conversion is in progress during a walk.

    Attributes:
        node: Node being converted
        ancestors: Nodes above it, outermost first
        rule: Rule selected for the node, None for the passthrough default
        pending: Children not converted yet
        leaf_value: Literal output of a text leaf no rule claimed
        output: Joined output of the children converted so far
    """

    node: DocumentNode
    ancestors: Tuple[DocumentNode, ...]
    rule: Optional[Rule]
    pending: Iterator[DocumentNode]
    leaf_value: Optional[str] = None
    output: str = ""
