"""Reader for editor HTML documents.

The rich-text editor can hand over its state as the HTML it renders. This
module reads that HTML with BeautifulSoup and extracts an immutable
DocumentNode tree, copying inline CSS (text color, font size, underline,
image margins and width) onto node attributes. After reading, nothing in the
exporter depends on the HTML parser or on live element styles.
"""

import logging
import re
from typing import Any, Dict, List, Optional

from bs4 import BeautifulSoup, Comment, NavigableString, Tag

from .errors import DocumentParseError
from .models import BLOCK_CONTAINER_KINDS, DocumentNode, NodeKind, kind_of, text
from .styles import style_attributes

logger = logging.getLogger(__name__)

# HTML element name -> canonical tag name
ELEMENT_TAGS = {
    "p": NodeKind.PARAGRAPH.value,
    "ul": NodeKind.BULLET_LIST.value,
    "ol": NodeKind.ORDERED_LIST.value,
    "li": NodeKind.LIST_ITEM.value,
    "blockquote": NodeKind.BLOCKQUOTE.value,
    "hr": NodeKind.HORIZONTAL_RULE.value,
    "br": NodeKind.HARD_BREAK.value,
    "img": NodeKind.IMAGE.value,
    "span": NodeKind.SPAN.value,
    "u": NodeKind.UNDERLINE.value,
    "strong": NodeKind.STRONG.value,
    "b": NodeKind.STRONG.value,
    "em": NodeKind.EMPHASIS.value,
    "i": NodeKind.EMPHASIS.value,
    "code": NodeKind.CODE.value,
    "a": NodeKind.LINK.value,
    "s": NodeKind.STRIKE.value,
    "del": NodeKind.STRIKE.value,
    "strike": NodeKind.STRIKE.value,
    "mark": NodeKind.HIGHLIGHT.value,
    "sup": NodeKind.SUPERSCRIPT.value,
    "sub": NodeKind.SUBSCRIPT.value,
}

HEADING_PATTERN = re.compile(r"^h([1-6])$")

# Elements whose content never reaches the document
SKIPPED_ELEMENTS = {"script", "style", "head", "link", "meta", "title", "template"}

_WHITESPACE_RUN = re.compile(r"[ \t\r\n\f]+")

# Blocks whose leading and trailing whitespace is layout, not content
TRIMMED_BLOCK_KINDS = frozenset({NodeKind.PARAGRAPH, NodeKind.HEADING})


class HtmlReader:
    """Reads editor HTML into a DocumentNode tree.

    Uses BeautifulSoup with the lxml parser. Elements without a mapping keep
    their HTML name as tag (div, label, input, ...) and are rendered by the
    exporter's passthrough fallback.
    """

    def __init__(self, parser: str = "lxml"):
        """Initialize HtmlReader.

        Args:
            parser: BeautifulSoup tree builder name
        """
        self.parser = parser

    def read(self, html: str) -> DocumentNode:
        """Read an HTML fragment or page into a document tree.

        Args:
            html: Editor HTML (fragment or full page)

        Returns:
            Root DocumentNode of kind doc

        Raises:
            DocumentParseError: If the input is not a string
        """
        if not isinstance(html, str):
            raise DocumentParseError("HTML input must be a string", "html")

        soup = BeautifulSoup(html, self.parser)
        # lxml wraps fragments in html/body
        body = soup.find("body") or soup

        children = self._read_children(body, NodeKind.DOC)
        return DocumentNode(tag=NodeKind.DOC.value, children=children)

    def _read_children(
        self, element: Tag, parent_kind: NodeKind
    ) -> List[DocumentNode]:
        """Read the child nodes of an element."""
        children: List[DocumentNode] = []

        for child in element.children:
            if isinstance(child, Comment):
                continue

            if isinstance(child, NavigableString):
                value = str(child)
                if not value.strip() and parent_kind in BLOCK_CONTAINER_KINDS:
                    continue
                value = _WHITESPACE_RUN.sub(" ", value)
                if value:
                    children.append(text(value))
                continue

            if isinstance(child, Tag):
                node = self._read_element(child)
                if node is not None:
                    children.append(node)

        return children

    def _read_element(self, element: Tag) -> Optional[DocumentNode]:
        """Read a single element and its subtree."""
        name = (element.name or "").lower()

        if name in SKIPPED_ELEMENTS:
            logger.debug(f"Skipping <{name}> element")
            return None

        if name == "pre":
            return self._read_code_block(element)

        heading = HEADING_PATTERN.match(name)
        if heading:
            tag = NodeKind.HEADING.value
            attrs: Dict[str, Any] = {"level": int(heading.group(1))}
        else:
            tag = self._element_tag(element, name)
            attrs = self._read_attributes(element, tag)

        kind = kind_of(tag)
        children = self._read_children(element, kind)
        if kind in TRIMMED_BLOCK_KINDS:
            children = _trim_block_edges(children)
        return DocumentNode(tag=tag, attributes=attrs, children=children)

    def _element_tag(self, element: Tag, name: str) -> str:
        """Map an HTML element to a tag name, honoring task list markers."""
        data_type = element.get("data-type")
        if name == "ul" and data_type == "taskList":
            return NodeKind.TASK_LIST.value
        if name == "li" and data_type == "taskItem":
            return NodeKind.TASK_LIST_ITEM.value
        return ELEMENT_TAGS.get(name, name)

    def _read_attributes(self, element: Tag, tag: str) -> Dict[str, Any]:
        """Extract the attributes the exporter needs from an element."""
        attrs: Dict[str, Any] = style_attributes(element.get("style"))

        if tag == NodeKind.TASK_LIST_ITEM.value:
            attrs["checked"] = element.get("data-checked") == "true"

        elif tag == NodeKind.ORDERED_LIST.value and element.get("start"):
            attrs["start"] = element.get("start")

        elif tag == NodeKind.IMAGE.value:
            for name in ("src", "alt", "title", "align"):
                if element.get(name):
                    attrs[name] = element.get(name)
            # style width wins over the presentational width attribute
            if "width" not in attrs and element.get("width"):
                attrs["width"] = element.get("width")

        elif tag == NodeKind.LINK.value:
            for name in ("href", "title"):
                if element.get(name):
                    attrs[name] = element.get(name)

        elif tag == NodeKind.HIGHLIGHT.value and element.get("data-color"):
            attrs["color"] = element.get("data-color")

        return attrs

    def _read_code_block(self, element: Tag) -> DocumentNode:
        """Read a <pre> block, keeping its text verbatim."""
        code = element.find("code")
        source = code if isinstance(code, Tag) else element

        attrs: Dict[str, Any] = {}
        for css_class in source.get("class") or []:
            if css_class.startswith("language-"):
                attrs["language"] = css_class[len("language-"):]
                break

        return DocumentNode(
            tag=NodeKind.CODE_BLOCK.value,
            attributes=attrs,
            children=(text(source.get_text()),),
        )


def _trim_block_edges(children: List[DocumentNode]) -> List[DocumentNode]:
    """Strip whitespace from the text at the start and end of a block.

    Pretty-printed HTML indents paragraph text on its own lines; that
    whitespace survives collapsing as a single space at either edge.
    Only direct text children are trimmed; ones left empty are dropped.
    """
    trimmed = list(children)

    while trimmed and trimmed[0].is_text:
        value = (trimmed[0].value or "").lstrip()
        if value:
            trimmed[0] = text(value)
            break
        trimmed.pop(0)

    while trimmed and trimmed[-1].is_text:
        value = (trimmed[-1].value or "").rstrip()
        if value:
            trimmed[-1] = text(value)
            break
        trimmed.pop()

    return trimmed
