"""Integration tests for the Markdown exporter.

These tests run the whole pipeline: reading editor JSON or HTML into a
document tree, converting it with the standard rule set, and writing the
``.md`` export to a temporary directory.

Test Coverage:
- Format agreement: the same document as JSON and as HTML gives the same Markdown
- Editor HTML: task lists, aligned images and inline styles as the editor renders them
- Export: the written file is byte-identical to the preview
"""
