"""Unit tests for document_model.html_reader module."""

import pytest

from src.document_model.errors import DocumentParseError
from src.document_model.html_reader import HtmlReader
from src.document_model.models import NodeKind


@pytest.fixture
def reader() -> HtmlReader:
    return HtmlReader()


class TestBlockElements:
    """Test cases for block-level HTML elements."""

    def test_heading_levels(self, reader):
        """h1-h6 become heading nodes with a numeric level."""
        root = reader.read("<h1>One</h1><h3>Three</h3>")

        levels = [(node.kind, node.get("level")) for node in root.children]
        assert levels == [(NodeKind.HEADING, 1), (NodeKind.HEADING, 3)]

    def test_fragment_is_read_from_body(self, reader):
        """lxml's html/body wrapper does not appear in the tree."""
        root = reader.read("<p>Text</p>")

        assert root.kind == NodeKind.DOC
        assert [node.kind for node in root.children] == [NodeKind.PARAGRAPH]

    def test_lists(self, reader):
        root = reader.read("<ol start='3'><li><p>A</p></li></ol><ul><li>B</li></ul>")

        ordered, bullet = root.children
        assert ordered.kind == NodeKind.ORDERED_LIST
        assert ordered.get("start") == "3"
        assert ordered.children[0].kind == NodeKind.LIST_ITEM
        assert bullet.kind == NodeKind.BULLET_LIST

    def test_task_list_markup(self, reader):
        """Editor task list markup becomes taskList/taskListItem nodes."""
        html = (
            '<ul data-type="taskList">'
            '<li data-type="taskItem" data-checked="true"><p>Done</p></li>'
            '<li data-type="taskItem" data-checked="false"><p>Todo</p></li>'
            '</ul>'
        )

        root = reader.read(html)

        task_list = root.children[0]
        assert task_list.kind == NodeKind.TASK_LIST
        done, todo = task_list.children
        assert done.kind == NodeKind.TASK_LIST_ITEM
        assert done.is_checked
        assert not todo.is_checked

    def test_code_block_keeps_text_and_language(self, reader):
        """<pre> content is kept verbatim with the language class."""
        root = reader.read('<pre><code class="language-python">x  = 1\n\ny = 2\n</code></pre>')

        block = root.children[0]
        assert block.kind == NodeKind.CODE_BLOCK
        assert block.get("language") == "python"
        assert block.get_text_content() == "x  = 1\n\ny = 2\n"

    def test_skipped_elements(self, reader):
        """Script and style content never reaches the document."""
        root = reader.read("<style>p { color: red }</style><p>Kept</p><script>alert(1)</script>")

        assert root.get_text_content() == "Kept"

    def test_unmapped_element_keeps_html_name(self, reader):
        root = reader.read("<div><p>Inside</p></div>")

        div = root.children[0]
        assert div.tag == "div"
        assert div.kind == NodeKind.UNKNOWN
        assert div.get_text_content() == "Inside"

    def test_rejects_non_string(self, reader):
        with pytest.raises(DocumentParseError):
            reader.read(b"<p>bytes</p>")


class TestWhitespace:
    """Test cases for whitespace handling."""

    def test_whitespace_between_blocks_is_dropped(self, reader):
        """Formatting whitespace in block containers produces no text nodes."""
        root = reader.read("<ul>\n  <li>\n    <p>A</p>\n  </li>\n</ul>")

        item = root.children[0].children[0]
        assert [child.kind for child in item.children] == [NodeKind.PARAGRAPH]

    def test_whitespace_runs_collapse(self, reader):
        root = reader.read("<p>Hello \n   world</p>")

        assert root.children[0].get_text_content() == "Hello world"

    def test_inline_spacing_is_kept(self, reader):
        """A space between inline elements survives."""
        root = reader.read("<p><strong>a</strong> <em>b</em></p>")

        assert root.children[0].get_text_content() == "a b"

    def test_block_edges_are_trimmed(self, reader):
        """Indentation around paragraph and heading text is not content."""
        root = reader.read("<h1>\n  Title </h1>\n<p>\n  Hello\n  world\n</p>")

        heading, para = root.children
        assert heading.get_text_content() == "Title"
        assert para.get_text_content() == "Hello world"

    def test_whitespace_only_edge_text_is_dropped(self, reader):
        root = reader.read("<p>\n  <strong>Bold</strong> tail\n</p>")

        para = root.children[0]
        assert para.children[0].kind == NodeKind.STRONG
        assert para.children[-1].value == " tail"


class TestInlineAttributes:
    """Test cases for inline elements and their style attributes."""

    def test_span_style_becomes_attributes(self, reader):
        """Inline CSS is copied onto the node as a static snapshot."""
        root = reader.read('<p><span style="color: red; font-size: 18px; background: blue">x</span></p>')

        span = root.children[0].children[0]
        assert span.kind == NodeKind.SPAN
        assert dict(span.attributes) == {"color": "red", "fontSize": "18px"}

    def test_underline_elements(self, reader):
        root = reader.read('<p><u>a</u><span style="text-decoration: underline">b</span></p>')

        underline, span = root.children[0].children
        assert underline.kind == NodeKind.UNDERLINE
        assert span.get("textDecoration") == "underline"

    def test_image_attributes(self, reader):
        """Images keep src and pick up width and margins from style."""
        root = reader.read(
            '<img src="a.png" alt="A" width="50" style="width: 200px; margin-left: auto; margin-right: auto">'
        )

        img = root.children[0]
        assert img.kind == NodeKind.IMAGE
        assert img.get("src") == "a.png"
        assert img.get("alt") == "A"
        assert img.get("width") == "200px"
        assert img.get("marginLeft") == "auto"
        assert img.get("marginRight") == "auto"

    def test_image_width_attribute_used_without_style(self, reader):
        root = reader.read('<img src="a.png" width="50">')

        assert root.children[0].get("width") == "50"

    def test_link_attributes(self, reader):
        root = reader.read('<p><a href="https://example.com" title="Example">site</a></p>')

        link = root.children[0].children[0]
        assert link.kind == NodeKind.LINK
        assert link.get("href") == "https://example.com"
        assert link.get("title") == "Example"

    def test_formatting_elements(self, reader):
        root = reader.read("<p><b>a</b><i>b</i><code>c</code><br><s>d</s></p>")

        kinds = [child.kind for child in root.children[0].children]
        assert kinds == [
            NodeKind.STRONG,
            NodeKind.EMPHASIS,
            NodeKind.CODE,
            NodeKind.HARD_BREAK,
            NodeKind.STRIKE,
        ]
