"""Export session holding the Markdown preview of one document.

The editor re-converts its document after edits (debounced per keystroke)
and shows the result as a preview; the ``.md`` download is the same string.
An ExportSession keeps that string. Each update runs a conversion pass; if
the pass raises, the session logs it and keeps the previous Markdown so the
editing session carries on with the last good export.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

from src.document_model.models import DocumentNode
from src.models.conversion_result import ConversionResult

from .engine import RuleEngine
from .errors import ExportWriteError
from .filenames import DEFAULT_TITLE, ExportFilename

logger = logging.getLogger(__name__)


class ExportSession:
    """Keeps the latest good Markdown export of a document.

    Sessions belong to one editor and are not meant to be shared between
    threads; the engine they wrap can be.

    Example:
        >>> session = ExportSession(title="Meeting Notes")
        >>> result = session.update(document)
        >>> session.export("exports/")
        PosixPath('exports/Meeting-Notes.md')
    """

    def __init__(
        self,
        engine: Optional[RuleEngine] = None,
        title: Optional[str] = None,
        default_title: str = DEFAULT_TITLE,
    ):
        """Initialize ExportSession.

        Args:
            engine: Rule engine to convert with; defaults to the standard rules
            title: Document title, used for the export filename
            default_title: Filename title used when the title is empty
        """
        self.engine = engine or RuleEngine()
        self.title = title
        self.default_title = default_title
        self._markdown = ""
        self._revision = 0

    @property
    def markdown(self) -> str:
        """Latest successfully converted Markdown ("" before the first update)."""
        return self._markdown

    @property
    def revision(self) -> int:
        """Number of successful conversions so far."""
        return self._revision

    def update(self, root: DocumentNode) -> ConversionResult:
        """Convert the current document state.

        Args:
            root: Snapshot of the editor document

        Returns:
            ConversionResult with the new Markdown, or with the previous
            Markdown and a warning when the conversion failed
        """
        try:
            markdown = self.engine.convert(root)
        except Exception as e:
            logger.exception("Markdown conversion failed, keeping previous export")
            return ConversionResult(
                markdown=self._markdown,
                metadata=self._metadata(),
                warnings=[f"Conversion failed, previous export kept: {e}"],
                converted=False,
            )

        self._markdown = markdown
        self._revision += 1
        logger.debug(f"Converted revision {self._revision} ({len(markdown)} characters)")
        return ConversionResult(markdown=markdown, metadata=self._metadata())

    def export_filename(self) -> str:
        """Filename the export is written under."""
        return ExportFilename.from_title(self.title or "", self.default_title)

    def export(self, target: Union[str, Path]) -> Path:
        """Write the current Markdown to a file.

        The file holds exactly the preview string, UTF-8 encoded, with no
        newline translation.

        Args:
            target: Output file path, or an existing directory to write
                ``export_filename()`` into

        Returns:
            Path of the written file

        Raises:
            ExportWriteError: If the file cannot be written
        """
        path = Path(target)
        if path.is_dir():
            path = path / self.export_filename()

        try:
            if path.parent and not path.parent.exists():
                path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(self._markdown.encode("utf-8"))
        except PermissionError:
            raise ExportWriteError(str(path), "Permission denied")
        except OSError as e:
            raise ExportWriteError(str(path), str(e)) from e

        logger.info(f"Exported Markdown to {path}")
        return path

    def _metadata(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "revision": self._revision,
            "characters": len(self._markdown),
        }
