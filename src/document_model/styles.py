"""Inline CSS extraction.

Editor output carries presentation (text color, font size, underline, image
margins and width) in inline ``style`` attributes. These helpers turn such a
declaration list into plain node attributes once, at read time, so the
exporter only ever looks at a static attribute snapshot.
"""

import re
from typing import Dict, Optional

# CSS properties copied onto nodes, keyed by their camelCase attribute name
STYLE_ATTRIBUTES = (
    "color",
    "fontSize",
    "textDecoration",
    "marginLeft",
    "marginRight",
    "width",
)

_DECLARATION_SEPARATOR = re.compile(r";(?![^(]*\))")


def css_to_attribute_name(prop: str) -> str:
    """Convert a CSS property name to its camelCase attribute name.

    Examples:
        >>> css_to_attribute_name("font-size")
        'fontSize'
        >>> css_to_attribute_name("color")
        'color'
    """
    head, *rest = prop.strip().lower().split("-")
    return head + "".join(part.capitalize() for part in rest)


def parse_style(style: Optional[str]) -> Dict[str, str]:
    """Parse an inline style declaration list.

    Semicolons inside parentheses, such as a data URI in ``url(...)``, do
    not split declarations. Later declarations win, as in a browser.

    Args:
        style: Value of a ``style`` attribute, may be None

    Returns:
        Mapping of camelCase property names to trimmed values
    """
    declarations: Dict[str, str] = {}
    if not style:
        return declarations

    for declaration in _DECLARATION_SEPARATOR.split(style):
        if ":" not in declaration:
            continue
        prop, value = declaration.split(":", 1)
        prop = prop.strip()
        value = value.strip()
        if not prop or not value:
            continue
        # Drop !important, the exporter only cares about the value
        value = re.sub(r"\s*!important$", "", value, flags=re.IGNORECASE)
        declarations[css_to_attribute_name(prop)] = value

    return declarations


def style_attributes(style: Optional[str]) -> Dict[str, str]:
    """Extract only the properties the exporter renders.

    Args:
        style: Value of a ``style`` attribute, may be None

    Returns:
        Subset of parse_style() restricted to STYLE_ATTRIBUTES
    """
    parsed = parse_style(style)
    return {name: parsed[name] for name in STYLE_ATTRIBUTES if name in parsed}
