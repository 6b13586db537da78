"""Data models for editor documents.

This module defines the immutable document tree the Markdown exporter
consumes. A document is a tree of DocumentNode objects whose tag names follow
the rich-text editor's schema (heading, paragraph, bulletList, listItem, ...).
Every node kind is listed in the closed NodeKind enum; tags the enum does not
know map to NodeKind.UNKNOWN but keep their original tag string.
"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Iterator, Mapping, Optional, Tuple


class NodeKind(Enum):
    """Types of document nodes."""

    # Document root
    DOC = "doc"

    # Block nodes
    PARAGRAPH = "paragraph"
    HEADING = "heading"
    BULLET_LIST = "bulletList"
    ORDERED_LIST = "orderedList"
    TASK_LIST = "taskList"
    LIST_ITEM = "listItem"
    TASK_LIST_ITEM = "taskListItem"
    CODE_BLOCK = "codeBlock"
    BLOCKQUOTE = "blockquote"
    HORIZONTAL_RULE = "horizontalRule"

    # Inline nodes
    TEXT = "text"
    HARD_BREAK = "hardBreak"
    IMAGE = "image"
    SPAN = "span"
    UNDERLINE = "underline"
    STRONG = "strong"
    EMPHASIS = "emphasis"
    CODE = "code"
    LINK = "link"
    STRIKE = "strike"
    HIGHLIGHT = "highlight"
    SUPERSCRIPT = "superscript"
    SUBSCRIPT = "subscript"

    # Other
    UNKNOWN = "unknown"


# Editor schema names that differ from the canonical tag names
TAG_ALIASES = {
    "taskItem": NodeKind.TASK_LIST_ITEM.value,
    "bold": NodeKind.STRONG.value,
    "italic": NodeKind.EMPHASIS.value,
    "textStyle": NodeKind.SPAN.value,
    "rule": NodeKind.HORIZONTAL_RULE.value,
}

LIST_KINDS = frozenset({
    NodeKind.BULLET_LIST,
    NodeKind.ORDERED_LIST,
    NodeKind.TASK_LIST,
})

LIST_ITEM_KINDS = frozenset({
    NodeKind.LIST_ITEM,
    NodeKind.TASK_LIST_ITEM,
})

# Containers whose whitespace-only text children carry no content
BLOCK_CONTAINER_KINDS = frozenset({
    NodeKind.DOC,
    NodeKind.BULLET_LIST,
    NodeKind.ORDERED_LIST,
    NodeKind.TASK_LIST,
    NodeKind.LIST_ITEM,
    NodeKind.TASK_LIST_ITEM,
    NodeKind.BLOCKQUOTE,
})


def canonical_tag(tag: str) -> str:
    """Map an editor schema name to its canonical tag name."""
    return TAG_ALIASES.get(tag, tag)


def kind_of(tag: str) -> NodeKind:
    """Get the NodeKind for a tag name, UNKNOWN when the tag is not known."""
    try:
        return NodeKind(canonical_tag(tag))
    except ValueError:
        return NodeKind.UNKNOWN


@dataclass(frozen=True)
class DocumentNode:
    """Represents one node of a document tree.

    Nodes are read-only snapshots: attributes are exposed through a read-only
    mapping and children are stored as a tuple, so a conversion pass can
    never modify the tree it was given.

    Attributes:
        tag: Semantic element kind (heading, paragraph, text, ...)
        attributes: Attribute name to value (level, color, src, checked, ...)
        children: Ordered child nodes
        value: Literal text for text leaves, None otherwise
    """

    tag: str
    attributes: Mapping[str, Any] = field(default_factory=dict)
    children: Tuple["DocumentNode", ...] = ()
    value: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "tag", canonical_tag(self.tag))
        object.__setattr__(self, "attributes", MappingProxyType(dict(self.attributes)))
        object.__setattr__(self, "children", tuple(self.children))

    @property
    def kind(self) -> NodeKind:
        """Get the NodeKind enum value."""
        return kind_of(self.tag)

    @property
    def is_text(self) -> bool:
        """Check if this node is a text leaf."""
        return self.kind == NodeKind.TEXT

    @property
    def is_list(self) -> bool:
        """Check if this node is a bullet, ordered or task list."""
        return self.kind in LIST_KINDS

    @property
    def is_list_item(self) -> bool:
        return self.kind in LIST_ITEM_KINDS

    @property
    def is_checked(self) -> bool:
        """Check state of a task item; absent means unchecked."""
        checked = self.attributes.get("checked", False)
        if isinstance(checked, str):
            return checked.strip().lower() == "true"
        return checked is True

    def get(self, name: str, default: Any = None) -> Any:
        """Get an attribute value, treating empty strings as absent."""
        value = self.attributes.get(name)
        if value is None or value == "":
            return default
        return value

    def get_text_content(self) -> str:
        """Extract all text content from this node and its children.

        Returns:
            Concatenated text from all text nodes in the subtree.
        """
        if self.value is not None:
            return self.value
        return "".join(node.value for node in self.walk() if node.value is not None)

    def walk(self) -> Iterator["DocumentNode"]:
        """Yield this node and all descendants in document order.

        Uses an explicit stack, so any nesting depth works.
        """
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))


def text(value: str) -> DocumentNode:
    """Build a text leaf."""
    return DocumentNode(tag=NodeKind.TEXT.value, value=value)


def element(tag: str, *children: DocumentNode, **attributes: Any) -> DocumentNode:
    """Build an element node with children and keyword attributes.

    Example:
        >>> element("heading", text("Title"), level=2)
    """
    return DocumentNode(tag=tag, attributes=attributes, children=children)
