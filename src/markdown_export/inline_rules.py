"""Inline style, media and task item rules.

Most of these emit the exporter's Markdown dialect extensions, used where
standard Markdown has no syntax for what the editor produces:

- styled text: ``<span style="color: red; font-size: 18px">text</span>``
- underline: ``<u>text</u>``
- image layout: ``![](a.png) { width="200px" align="center" }``
- task items: ``- [x] done`` / ``- [ ] todo``

The remaining rules cover standard inline Markdown (strong, emphasis, code,
links, hard breaks).
"""

import re

from src.document_model.models import DocumentNode, NodeKind

from .rules import RenderContext, make_rule

IMAGE_ALIGNMENTS = ("left", "center", "right")
DEFAULT_IMAGE_ALIGNMENT = "left"


def _is_styled(node: DocumentNode) -> bool:
    return node.get("color") is not None or node.get("fontSize") is not None


def render_styled_span(content: str, node: DocumentNode, context: RenderContext) -> str:
    """Wrap content in a span carrying its color and font size."""
    styles = []
    if node.get("color") is not None:
        styles.append(f"color: {node.get('color')}")
    if node.get("fontSize") is not None:
        styles.append(f"font-size: {node.get('fontSize')}")
    return f'<span style="{"; ".join(styles)}">{content}</span>'


def _is_underlined(node: DocumentNode) -> bool:
    if node.kind == NodeKind.UNDERLINE:
        return True
    decoration = node.get("textDecoration")
    return isinstance(decoration, str) and decoration.strip().lower() == "underline"


def render_underline(content: str, node: DocumentNode, context: RenderContext) -> str:
    return f"<u>{content}</u>"


def image_alignment(node: DocumentNode) -> str:
    """Work out an image's alignment.

    An explicit ``align`` attribute wins when it holds a known alignment.
    Otherwise the margins decide: both ``auto`` centers the image, a left
    margin of ``auto`` alone pushes it right, anything else is left.
    """
    align = str(node.get("align", "")).strip().lower()
    if align in IMAGE_ALIGNMENTS:
        return align

    margin_left = str(node.get("marginLeft", "")).strip().lower()
    margin_right = str(node.get("marginRight", "")).strip().lower()
    if margin_left == "auto" and margin_right == "auto":
        return "center"
    if margin_left == "auto":
        return "right"
    return DEFAULT_IMAGE_ALIGNMENT


def render_image(content: str, node: DocumentNode, context: RenderContext) -> str:
    """Render an image, appending a layout block for width or alignment."""
    markdown = f"![]({node.get('src')})"

    layout = []
    width = node.get("width")
    if width is not None:
        layout.append(f'width="{width}"')
    align = image_alignment(node)
    if align != DEFAULT_IMAGE_ALIGNMENT:
        layout.append(f'align="{align}"')

    if layout:
        markdown += " { " + " ".join(layout) + " }"
    return markdown


def render_task_item(content: str, node: DocumentNode, context: RenderContext) -> str:
    """Render a task item found outside a list."""
    return f"- [{'x' if node.is_checked else ' '}] {content.strip()}\n"


def render_strong(content: str, node: DocumentNode, context: RenderContext) -> str:
    if not content.strip():
        return ""
    return f"**{content}**"


def render_emphasis(content: str, node: DocumentNode, context: RenderContext) -> str:
    if not content.strip():
        return ""
    return f"_{content}_"


def render_code(content: str, node: DocumentNode, context: RenderContext) -> str:
    """Render inline code with a delimiter longer than any backtick run inside."""
    if not content:
        return ""

    code = content.replace("\r\n", " ").replace("\n", " ")
    padding = " " if re.search(r"^`|`$|^ .*?[^ ].* $", code) else ""

    delimiter = "`"
    runs = re.findall(r"`+", code)
    while delimiter in runs:
        delimiter += "`"
    return f"{delimiter}{padding}{code}{padding}{delimiter}"


def render_link(content: str, node: DocumentNode, context: RenderContext) -> str:
    title = node.get("title")
    title_part = f' "{title}"' if title else ""
    return f"[{content}]({node.get('href')}{title_part})"


def render_hard_break(content: str, node: DocumentNode, context: RenderContext) -> str:
    return "  \n"


STYLED_SPAN_RULE = make_rule("styled_span", (NodeKind.SPAN,), render_styled_span, _is_styled)

UNDERLINE_RULE = make_rule(
    "underline", (NodeKind.UNDERLINE, NodeKind.SPAN), render_underline, _is_underlined
)

IMAGE_RULE = make_rule(
    "image", (NodeKind.IMAGE,), render_image, lambda node: node.get("src") is not None
)

TASK_ITEM_RULE = make_rule("task_item", (NodeKind.TASK_LIST_ITEM,), render_task_item)

STRONG_RULE = make_rule("strong", (NodeKind.STRONG,), render_strong)

EMPHASIS_RULE = make_rule("emphasis", (NodeKind.EMPHASIS,), render_emphasis)

CODE_RULE = make_rule("code", (NodeKind.CODE,), render_code)

LINK_RULE = make_rule(
    "link", (NodeKind.LINK,), render_link, lambda node: node.get("href") is not None
)

HARD_BREAK_RULE = make_rule("hard_break", (NodeKind.HARD_BREAK,), render_hard_break)
