"""Command-line interface for the Markdown exporter.

This package provides the `docmark` CLI tool that reads an editor document,
converts it with the configured rule set and prints or writes the Markdown,
with colored status output and error handling.
"""

__version__ = "0.1.0"

from .config import ConfigLoader
from .errors import (
    CLIError,
    ConfigError,
    ConfigFilesystemError,
    ConfigNotFoundError,
    InputFileError,
)
from .models import ExitCode, ExportConfig
from .output import OutputHandler

__all__ = [
    'ConfigLoader',
    'ExitCode',
    'ExportConfig',
    'OutputHandler',
    'CLIError',
    'ConfigError',
    'ConfigFilesystemError',
    'ConfigNotFoundError',
    'InputFileError',
]
