"""Test fixtures for the Markdown exporter tests.

This module provides test fixtures for:
- DocumentNode tree builders (lists, task items, images, styled spans)
- Editor JSON document builders
- A sample document in JSON, HTML and its expected Markdown
"""

from .document_fixtures import (
    SAMPLE_HTML_DOCUMENT,
    SAMPLE_JSON_DOCUMENT,
    SAMPLE_MARKDOWN,
    bullet_list,
    create_json_doc,
    create_json_list,
    create_json_paragraph,
    create_json_text,
    doc,
    heading,
    image,
    list_item,
    ordered_list,
    paragraph,
    styled_span,
    task_item,
    task_list,
)

__all__ = [
    'SAMPLE_HTML_DOCUMENT',
    'SAMPLE_JSON_DOCUMENT',
    'SAMPLE_MARKDOWN',
    'bullet_list',
    'create_json_doc',
    'create_json_list',
    'create_json_paragraph',
    'create_json_text',
    'doc',
    'heading',
    'image',
    'list_item',
    'ordered_list',
    'paragraph',
    'styled_span',
    'task_item',
    'task_list',
]
