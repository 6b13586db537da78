"""Parser for editor JSON documents.

This module turns the editor's JSON document state (ProseMirror style
``type``/``attrs``/``content``/``marks``/``text`` objects) into the immutable
DocumentNode tree the Markdown exporter consumes.
"""

import json
import logging
from typing import Any, Dict, List

from .errors import DocumentParseError
from .models import DocumentNode, NodeKind, canonical_tag
from .styles import style_attributes

logger = logging.getLogger(__name__)


class DocumentParser:
    """Parser for editor JSON documents.

    Text formatting arrives as marks on text nodes. Marks are unfolded into
    wrapper elements (strong, emphasis, span, underline, link, ...) with the
    first mark outermost, which is how the editor renders them to HTML.
    """

    def parse_document(self, doc_json: Dict[str, Any]) -> DocumentNode:
        """Parse an editor JSON document into a DocumentNode tree.

        Args:
            doc_json: The document as a dictionary (parsed JSON)

        Returns:
            Root DocumentNode of kind doc

        Raises:
            DocumentParseError: If the JSON is not an editor document
        """
        if not isinstance(doc_json, dict):
            raise DocumentParseError("document must be a JSON object", "json")

        doc_type = doc_json.get("type")
        if doc_type != NodeKind.DOC.value:
            raise DocumentParseError(f"expected type 'doc', got '{doc_type}'", "json")

        return self._parse_node(doc_json)

    def parse_from_string(self, doc_string: str) -> DocumentNode:
        """Parse an editor JSON string into a DocumentNode tree.

        Args:
            doc_string: The document as a JSON string

        Returns:
            Root DocumentNode of kind doc

        Raises:
            DocumentParseError: If the string is not valid JSON or not a document
        """
        try:
            doc_json = json.loads(doc_string)
        except json.JSONDecodeError as e:
            raise DocumentParseError(f"invalid JSON: {e}", "json") from e
        return self.parse_document(doc_json)

    def _parse_node(self, node_data: Any) -> DocumentNode:
        """Parse a single node (and its subtree) from JSON.

        Args:
            node_data: Node data as a dictionary

        Returns:
            Parsed DocumentNode, wrapped in one element per mark
        """
        if not isinstance(node_data, dict):
            logger.debug(f"Skipping non-object node: {node_data!r}")
            return DocumentNode(tag=NodeKind.UNKNOWN.value)

        tag = canonical_tag(str(node_data.get("type", NodeKind.UNKNOWN.value)))
        attrs = self._parse_attrs(node_data.get("attrs"))

        if tag == NodeKind.TEXT.value:
            node = DocumentNode(tag=tag, value=str(node_data.get("text") or ""))
        else:
            content_data = node_data.get("content") or []
            children = [self._parse_node(child) for child in content_data]
            node = DocumentNode(tag=tag, attributes=attrs, children=children)

        return self._apply_marks(node, node_data.get("marks") or [])

    def _parse_attrs(self, attrs_data: Any) -> Dict[str, Any]:
        """Copy node attributes, folding an inline style string into them."""
        if not isinstance(attrs_data, dict):
            return {}

        attrs = dict(attrs_data)
        style = attrs.pop("style", None)
        if isinstance(style, str):
            for name, value in style_attributes(style).items():
                attrs.setdefault(name, value)
        return attrs

    def _apply_marks(self, node: DocumentNode, marks: List[Any]) -> DocumentNode:
        """Wrap a node in one element per mark, first mark outermost."""
        for mark in reversed(marks):
            if not isinstance(mark, dict):
                continue
            mark_type = canonical_tag(str(mark.get("type", NodeKind.UNKNOWN.value)))
            mark_attrs = {
                name: value
                for name, value in self._parse_attrs(mark.get("attrs")).items()
                if value is not None
            }
            node = DocumentNode(tag=mark_type, attributes=mark_attrs, children=(node,))
        return node
