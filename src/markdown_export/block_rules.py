"""Block-level rules: headings, paragraphs, code blocks, quotes and rules.

Block serializers surround their output with newlines and leave the number of
blank lines between blocks to the engine, which collapses separators to at
most one blank line when it joins sibling output.
"""

import re

from src.document_model.models import DocumentNode, NodeKind

from .rules import RenderContext, make_rule

MIN_HEADING_LEVEL = 1
MAX_HEADING_LEVEL = 6

CODE_FENCE_CHAR = "`"
MIN_FENCE_LENGTH = 3

HORIZONTAL_RULE = "* * *"


def heading_level(node: DocumentNode) -> int:
    """Read a heading's level; 0 when missing or outside 1-6."""
    level = node.get("level")
    if isinstance(level, bool):
        return 0
    if isinstance(level, str) and level.strip().isdigit():
        level = int(level)
    if not isinstance(level, int):
        return 0
    if MIN_HEADING_LEVEL <= level <= MAX_HEADING_LEVEL:
        return level
    return 0


def render_heading(content: str, node: DocumentNode, context: RenderContext) -> str:
    return "\n" + "#" * heading_level(node) + " " + content + "\n"


def render_paragraph(content: str, node: DocumentNode, context: RenderContext) -> str:
    return "\n\n" + content + "\n\n"


def render_code_block(content: str, node: DocumentNode, context: RenderContext) -> str:
    """Render a fenced code block from the node's raw text.

    The fence is made longer than any backtick fence inside the code so the
    block cannot be closed early.
    """
    code = node.get_text_content()
    language = node.get("language", "")

    fence_length = MIN_FENCE_LENGTH
    for match in re.finditer(r"^`{3,}", code, flags=re.MULTILINE):
        fence_length = max(fence_length, len(match.group(0)) + 1)
    fence = CODE_FENCE_CHAR * fence_length

    if code.endswith("\n"):
        code = code[:-1]
    return f"\n\n{fence}{language}\n{code}\n{fence}\n\n"


def render_blockquote(content: str, node: DocumentNode, context: RenderContext) -> str:
    quoted = content.strip("\n")
    quoted = "\n".join("> " + line for line in quoted.split("\n"))
    return "\n\n" + quoted + "\n\n"


def render_horizontal_rule(content: str, node: DocumentNode, context: RenderContext) -> str:
    return f"\n\n{HORIZONTAL_RULE}\n\n"


HEADING_RULE = make_rule(
    "heading", (NodeKind.HEADING,), render_heading, lambda node: heading_level(node) > 0
)

PARAGRAPH_RULE = make_rule("paragraph", (NodeKind.PARAGRAPH,), render_paragraph)

CODE_BLOCK_RULE = make_rule(
    "code_block", (NodeKind.CODE_BLOCK,), render_code_block, converts_children=False
)

BLOCKQUOTE_RULE = make_rule("blockquote", (NodeKind.BLOCKQUOTE,), render_blockquote)

HORIZONTAL_RULE_RULE = make_rule(
    "horizontal_rule", (NodeKind.HORIZONTAL_RULE,), render_horizontal_rule
)
