"""List serialization for the Markdown rule engine.

Lists are the one structure the generic post-order walk cannot render on its
own: markers depend on an item's position, indentation depends on nesting,
and multi-line item content has to be re-indented under its marker. The
ListSerializer renders each item by running an independent conversion pass
over the item's content and laying the resulting lines out itself.

Output shape for an ordered list whose first item holds a nested bullet list:

    1. Outer
      - Inner
    2. Next

A list nested inside an item comes out indented because every line after
the item's first one is prefixed with two spaces; the nested list itself
renders at indent 0 inside its item's independent pass. A list placed
directly inside another list (no item in between) is rendered in place and
indented by its nesting level instead.
"""

import logging
import re
from typing import List, Optional, Tuple

from src.document_model.models import DocumentNode, NodeKind

from .rules import RenderContext, Rule, make_rule

logger = logging.getLogger(__name__)

# Leading marker-like characters removed from converted item content
MARKER_ARTIFACT_PATTERN = re.compile(r"^[-\d.\s]+")

INDENT_UNIT = "  "
BULLET_MARKER = "-"


class ListSerializer:
    """Renders bulletList, orderedList and taskList nodes.

    Markers:
    - bullet and task lists: ``-``
    - ordered lists: ``1.``, ``2.``, ... by position among the list's items;
      ``start``/``value`` attributes are ignored
    - task items, in any list: ``- [x]`` or ``- [ ]``, never numbered
    """

    def render(self, content: str, node: DocumentNode, context: RenderContext) -> str:
        """Render a list node.

        Args:
            content: Unused, items are converted independently
            node: The list node
            context: Render context with the engine and ancestor chain

        Returns:
            The list block wrapped in single leading and trailing newlines
        """
        indent = INDENT_UNIT * self.nesting_level(context.ancestors)
        ordered = node.kind == NodeKind.ORDERED_LIST

        rendered: List[str] = []
        position = 0
        for item in node.children:
            if not item.is_list_item:
                loose_indent = indent + INDENT_UNIT if rendered else indent
                loose = self.loose_content(item, node, context, loose_indent)
                if loose:
                    rendered.append(loose)
                continue
            position += 1
            content_text = self.item_content(item, context)
            marker = self.marker(item, position, ordered)
            rendered.append(self.layout_item(content_text, marker, indent))

        block = "\n".join(rendered).strip("\n")
        return "\n" + block + "\n"

    def nesting_level(self, ancestors: Tuple[DocumentNode, ...]) -> int:
        """Count the list nodes directly enclosing the list being rendered.

        Walks the ancestor chain upward from the list's parent and stops at
        the first non-list node. A top-level list has level 0.
        """
        level = 0
        for ancestor in reversed(ancestors):
            if not ancestor.is_list:
                break
            level += 1
        return level

    def loose_content(
        self,
        child: DocumentNode,
        node: DocumentNode,
        context: RenderContext,
        indent: str,
    ) -> str:
        """Render a child of a list that is not a list item.

        A list placed directly inside a list indents itself by its nesting
        level. Anything else is laid out line by line at ``indent``. Loose
        children take no position in the list's numbering.
        """
        logger.debug(f"Rendering <{child.tag}> child of <{node.tag}> outside an item")
        converted = context.engine.convert_node(child, context.ancestors + (node,))
        if child.is_list:
            return converted
        lines = [line for line in converted.split("\n") if line.strip()]
        return "\n".join(f"{indent}{line}" for line in lines)

    def item_content(self, item: DocumentNode, context: RenderContext) -> str:
        """Convert an item's content and strip leading marker artifacts."""
        converted = context.engine.convert_children(item)
        return MARKER_ARTIFACT_PATTERN.sub("", converted).strip()

    def marker(self, item: DocumentNode, position: int, ordered: bool) -> str:
        if item.kind == NodeKind.TASK_LIST_ITEM:
            return f"{BULLET_MARKER} [{'x' if item.is_checked else ' '}]"
        if ordered:
            return f"{position}."
        return BULLET_MARKER

    def layout_item(self, content: str, marker: str, indent: str) -> str:
        """Lay out item content under its marker.

        Empty lines are dropped. The first line follows the marker; the rest
        are indented two spaces past the list's indent. An item with no
        content still renders its marker.
        """
        lines = [line for line in content.split("\n") if line.strip()]
        if not lines:
            return f"{indent}{marker} "

        first, *rest = lines
        laid_out = [f"{indent}{marker} {first}"]
        laid_out.extend(f"{indent}{INDENT_UNIT}{line}" for line in rest)
        return "\n".join(laid_out)


def list_rule(serializer: Optional[ListSerializer] = None) -> Rule:
    """Build the list rule around a serializer instance."""
    serializer = serializer or ListSerializer()
    return make_rule(
        "list",
        (NodeKind.BULLET_LIST, NodeKind.ORDERED_LIST, NodeKind.TASK_LIST),
        serializer.render,
        converts_children=False,
    )
