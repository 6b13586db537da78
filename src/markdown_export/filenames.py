"""Filesafe export filenames.

The editor exports a document as ``{title}.md``. Titles are free text, so
this module turns them into filenames that are valid on every common file
system while keeping the title's case and non-ASCII characters.
"""

import re

MARKDOWN_EXTENSION = ".md"
DEFAULT_TITLE = "Untitled"

# Characters invalid or problematic on Windows, macOS or Linux file systems
_UNSAFE_CHARACTERS = re.compile(r'[/\\?%*|"<>&:]')
_CONTROL_CHARACTERS = re.compile(r"[\x00-\x1f\x7f]")


class ExportFilename:
    """Builds filesafe ``.md`` filenames from document titles.

    Conversion rules:
    - Control characters are removed
    - Spaces and unsafe characters (/, \\, ?, %, *, |, ", <, >, &, :) become hyphens
    - Runs of hyphens collapse to one; leading/trailing hyphens and dots are trimmed
    - Case is preserved
    - An empty result falls back to the default title
    - .md is appended unless the title already ends with it

    Examples:
        - "Meeting Notes" -> "Meeting-Notes.md"
        - "Q&A: Launch" -> "Q-A-Launch.md"
        - "" -> "Untitled.md"
    """

    @staticmethod
    def from_title(title: str, default_title: str = DEFAULT_TITLE) -> str:
        """Convert a document title to a filesafe Markdown filename.

        Args:
            title: The document title, may be empty
            default_title: Title used when nothing usable is left

        Returns:
            A filesafe filename ending in .md

        Examples:
            >>> ExportFilename.from_title("Meeting Notes")
            'Meeting-Notes.md'
            >>> ExportFilename.from_title("  ")
            'Untitled.md'
        """
        filename = _CONTROL_CHARACTERS.sub("", title or "").strip()

        if filename.lower().endswith(MARKDOWN_EXTENSION):
            filename = filename[: -len(MARKDOWN_EXTENSION)]

        filename = filename.replace(" ", "-")
        filename = _UNSAFE_CHARACTERS.sub("-", filename)
        filename = re.sub(r"-{2,}", "-", filename)
        filename = filename.strip("-.")

        if not filename:
            if default_title and default_title != title:
                return ExportFilename.from_title(default_title, default_title="")
            filename = DEFAULT_TITLE

        return f"{filename}{MARKDOWN_EXTENSION}"
