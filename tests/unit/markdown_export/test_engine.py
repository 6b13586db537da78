"""Unit tests for markdown_export.engine module."""

import logging
from concurrent.futures import ThreadPoolExecutor

from src.document_model.json_parser import DocumentParser
from src.document_model.models import DocumentNode, NodeKind, element, text
from src.markdown_export.engine import RuleEngine, finish_output, join_output
from src.markdown_export.registry import DEFAULT_RULE_ORDER
from src.markdown_export.rules import make_rule
from tests.fixtures.document_fixtures import (
    SAMPLE_JSON_DOCUMENT,
    bullet_list,
    doc,
    heading,
    list_item,
    paragraph,
)


class TestJoinOutput:
    """Test cases for joining converted sibling output."""

    def test_plain_concatenation(self):
        assert join_output("a", "b") == "ab"

    def test_larger_newline_count_wins(self):
        """The separator is the larger of the two newline runs."""
        assert join_output("\n# Title\n", "\n\nText\n\n") == "\n# Title\n\nText\n\n"

    def test_newlines_capped_at_two(self):
        """Block separators never produce more than one blank line."""
        assert join_output("a\n\n\n", "\n\n\nb") == "a\n\nb"

    def test_empty_output(self):
        assert join_output("", "\n\nText\n\n") == "\n\nText\n\n"

    def test_spaces_are_not_newlines(self):
        """Hard break spaces before the newline are kept."""
        assert join_output("a  \n", "b") == "a  \nb"


class TestFinishOutput:
    """Test cases for final output trimming."""

    def test_strips_line_breaks_and_tabs(self):
        assert finish_output("\n\t# Title\n\n") == "# Title"

    def test_keeps_spaces(self):
        """Trailing spaces, such as an empty item's marker space, survive."""
        assert finish_output("\n- \n") == "- "


class TestRuleSelection:
    """Test cases for rule dispatch and precedence."""

    def test_default_engine_uses_standard_rules(self, engine):
        assert engine.rule_names == list(DEFAULT_RULE_ORDER)

    def test_first_matching_rule_wins(self):
        """Rules are tried in registration order."""
        first = make_rule("first", (NodeKind.PARAGRAPH,), lambda c, n, ctx: "first")
        second = make_rule("second", (NodeKind.PARAGRAPH,), lambda c, n, ctx: "second")

        assert RuleEngine([first, second]).convert(paragraph("x")) == "first"
        assert RuleEngine([second, first]).convert(paragraph("x")) == "second"

    def test_predicate_failure_falls_through(self):
        """A rule whose predicate does not hold lets the next rule match."""
        picky = make_rule(
            "picky", (NodeKind.PARAGRAPH,), lambda c, n, ctx: "picky",
            lambda node: node.get("special") is not None,
        )
        plain = make_rule("plain", (NodeKind.PARAGRAPH,), lambda c, n, ctx: f"<{c}>")

        engine = RuleEngine([picky, plain])

        assert engine.convert(paragraph("x")) == "<x>"
        assert engine.convert(element("paragraph", text("x"), special=True)) == "picky"

    def test_select_rule_none_for_unmatched(self, engine):
        assert engine.select_rule(element("figure")) is None

    def test_rules_are_immutable_after_construction(self):
        """Changing the list passed in does not change the engine."""
        rules = [make_rule("p", (NodeKind.PARAGRAPH,), lambda c, n, ctx: "p")]
        engine = RuleEngine(rules)

        rules.clear()

        assert engine.convert(paragraph("x")) == "p"


class TestFallback:
    """Test cases for the passthrough fallback."""

    def test_unknown_node_passes_children_through(self, engine):
        tree = doc(element("figure", element("caption", text("A "), text("caption"))))

        assert engine.convert(tree) == "A caption"

    def test_text_is_not_escaped(self, engine):
        """Markdown metacharacters in text are emitted verbatim."""
        assert engine.convert(paragraph("*not* _emphasis_ # here")) == "*not* _emphasis_ # here"

    def test_invalid_heading_level_passes_through(self, engine):
        """A heading without a usable level renders as its text."""
        assert engine.convert(doc(heading("Title", level=9))) == "Title"
        assert engine.convert(doc(heading("Title", level=None))) == "Title"

    def test_empty_tree(self, engine):
        assert engine.convert(doc()) == ""
        assert engine.convert(DocumentNode(tag="text")) == ""

    def test_failing_rule_falls_back_with_warning(self, caplog):
        """A rule that raises on a malformed node falls back to passthrough."""
        def broken(content, node, context):
            return node.attributes["missing"]

        engine = RuleEngine([make_rule("broken", (NodeKind.PARAGRAPH,), broken)])

        with caplog.at_level(logging.WARNING, logger="src.markdown_export.engine"):
            result = engine.convert(doc(paragraph("kept")))

        assert result == "kept"
        assert "Rule 'broken' failed" in caplog.text

    def test_failing_predicate_skips_rule(self, caplog):
        """A predicate that raises is treated as not matching."""
        def bad_predicate(node):
            raise TypeError("bad attribute")

        engine = RuleEngine([
            make_rule("bad", (NodeKind.PARAGRAPH,), lambda c, n, ctx: "bad", bad_predicate),
            make_rule("good", (NodeKind.PARAGRAPH,), lambda c, n, ctx: "good"),
        ])

        with caplog.at_level(logging.WARNING, logger="src.markdown_export.engine"):
            result = engine.convert(paragraph("x"))

        assert result == "good"
        assert "could not match" in caplog.text


class TestConvert:
    """Test cases for full conversions."""

    def test_heading_and_paragraph_spacing(self, engine):
        tree = doc(heading("Title", level=2), paragraph("Body"), paragraph("More"))

        assert engine.convert(tree) == "## Title\n\nBody\n\nMore"

    def test_children_converted_before_parent(self):
        """Serializers receive the converted output of their children."""
        seen = []

        def record(content, node, context):
            seen.append((node.tag, content))
            return f"[{content}]"

        engine = RuleEngine([
            make_rule("p", (NodeKind.PARAGRAPH,), record),
            make_rule("s", (NodeKind.STRONG,), record),
        ])

        result = engine.convert(element("paragraph", element("strong", text("x"))))

        assert seen == [("strong", "x"), ("paragraph", "[x]")]
        assert result == "[[x]]"

    def test_render_context_carries_ancestors(self):
        captured = {}

        def record(content, node, context):
            captured["ancestors"] = [a.tag for a in context.ancestors]
            captured["engine"] = context.engine
            return content

        engine = RuleEngine([make_rule("s", (NodeKind.STRONG,), record)])
        engine.convert(doc(element("paragraph", element("strong", text("x")))))

        assert captured["ancestors"] == ["doc", "paragraph"]
        assert captured["engine"] is engine

    def test_convert_children_is_independent_pass(self, engine):
        """Child conversion is finished like a top-level conversion."""
        item = list_item("Item", bullet_list(list_item("Nested")))

        assert engine.convert_children(item) == "Item\n\n- Nested"

    def test_conversion_is_idempotent(self, engine):
        """The same tree always converts to the same string."""
        tree = DocumentParser().parse_document(SAMPLE_JSON_DOCUMENT)

        assert engine.convert(tree) == engine.convert(tree)

    def test_concurrent_conversions_share_engine(self, engine):
        """One engine serves overlapping conversions without interference."""
        trees = [doc(paragraph(f"Paragraph {i}")) for i in range(20)]

        with ThreadPoolExecutor(max_workers=4) as pool:
            results = list(pool.map(engine.convert, trees))

        assert results == [f"Paragraph {i}" for i in range(20)]

    def test_input_tree_is_not_modified(self, engine):
        tree = doc(bullet_list(list_item("a")), paragraph("b"))
        before = repr(tree)

        engine.convert(tree)

        assert repr(tree) == before


class TestDeepNesting:
    """Test cases for trees nested past the interpreter's recursion limit."""

    DEPTH = 2000

    def test_deeply_nested_spans_convert(self, engine):
        node = text("x")
        for _ in range(self.DEPTH):
            node = element("span", node)

        assert engine.convert(doc(element("paragraph", node))) == "x"

    def test_deeply_nested_styled_spans_keep_every_rule(self, engine):
        node = text("x")
        for _ in range(self.DEPTH):
            node = element("span", node, color="red")

        result = engine.convert(doc(element("paragraph", node)))

        assert result.count('<span style="color: red">') == self.DEPTH
        assert result.endswith("x" + "</span>" * self.DEPTH)

    def test_deeply_nested_lists_return_text(self, engine):
        """Lists nested past the limit still convert to a string."""
        node = bullet_list(list_item("deep"))
        for _ in range(self.DEPTH):
            node = bullet_list(list_item(None, node))

        result = engine.convert(doc(node))

        assert isinstance(result, str)
        assert result.endswith("deep")
