"""Main CLI entry point for the docmark command.

This module provides the Typer application that serves as the entry point
for the docmark command-line tool. It converts an editor document (JSON
document state or rendered HTML) to Markdown and prints it or writes a
``.md`` export.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

import typer

from src.cli import __version__
from src.cli.config import ConfigLoader
from src.cli.errors import CLIError, ConfigError, InputFileError
from src.cli.models import ExitCode
from src.cli.output import OutputHandler
from src.document_model.errors import DocumentParseError
from src.document_model.loader import INPUT_FORMATS, load_document
from src.markdown_export.engine import RuleEngine
from src.markdown_export.errors import ExportError, UnknownRuleError
from src.markdown_export.registry import build_rules
from src.markdown_export.session import ExportSession

app = typer.Typer(
    name="docmark",
    help="""Convert rich-text editor documents to Markdown.

QUICK START:
  docmark notes.json                     # Print Markdown to stdout
  docmark notes.html -o exports/         # Write exports/<title>.md
  cat notes.json | docmark -             # Read the document from stdin
  docmark --list-rules                   # Show the rule precedence""",
    add_completion=False,
    rich_markup_mode=None,  # Disable Rich markup to avoid compatibility issues
    no_args_is_help=False,
)

logger = logging.getLogger(__name__)

STDIN_INPUT = "-"


def _configure_logging(verbosity: int, logdir: Optional[str] = None) -> None:
    """Configure logging based on verbosity level.

    Configures only the 'src' namespace logger to avoid affecting third-party
    libraries. The root logger is left unchanged.

    Args:
        verbosity: Verbosity level (0=WARNING, 1=INFO, 2=DEBUG)
        logdir: Optional directory for log files (creates timestamped log file)
    """
    if verbosity == 0:
        level = logging.WARNING
    elif verbosity == 1:
        level = logging.INFO
    else:  # verbosity >= 2
        level = logging.DEBUG

    app_logger = logging.getLogger("src")
    app_logger.setLevel(level)

    # Repeated invocations in one process must not stack handlers
    for handler in list(app_logger.handlers):
        app_logger.removeHandler(handler)
        handler.close()

    log_format = "%(asctime)s [%(levelname)8s] %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S"
    formatter = logging.Formatter(log_format, datefmt=date_format)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    app_logger.addHandler(console_handler)

    if logdir:
        log_path = Path(logdir)
        log_path.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = log_path / f"docmark_{timestamp}.log"

        file_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        file_formatter = logging.Formatter(file_format, datefmt=date_format)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(file_formatter)
        app_logger.addHandler(file_handler)

        logger.info(f"Logging to file: {log_file}")


def _read_input(input_path: str) -> str:
    """Read the input document text.

    Args:
        input_path: File path, or "-" for stdin

    Returns:
        Document text

    Raises:
        InputFileError: If the file cannot be read
    """
    if input_path == STDIN_INPUT:
        return sys.stdin.read()

    try:
        with open(input_path, 'r', encoding='utf-8') as f:
            return f.read()
    except FileNotFoundError:
        raise InputFileError(input_path, "File not found")
    except IsADirectoryError:
        raise InputFileError(input_path, "Is a directory")
    except PermissionError:
        raise InputFileError(input_path, "Permission denied")
    except UnicodeDecodeError as e:
        raise InputFileError(input_path, f"Not UTF-8 text ({e.reason})")
    except OSError as e:
        raise InputFileError(input_path, str(e))


def _document_title(input_path: str, title: Optional[str]) -> Optional[str]:
    """Title for the export: explicit title, else the input file's stem."""
    if title is not None:
        return title
    if input_path == STDIN_INPUT:
        return None
    return Path(input_path).stem


def _run_convert(
    input_path: str,
    output_path: Optional[str],
    input_format: Optional[str],
    config_path: Optional[str],
    title: Optional[str],
    logdir: Optional[str],
    verbosity: int,
    no_color: bool,
) -> None:
    """Run the conversion.

    Args:
        input_path: Input document path, or "-" for stdin
        output_path: Output file or directory; None prints to stdout
        input_format: "auto", "json" or "html"; None uses the configured format
        config_path: Optional explicit configuration file
        title: Document title used for the export filename
        logdir: Directory for log files
        verbosity: Verbosity level
        no_color: Whether to disable colored output
    """
    _configure_logging(verbosity, logdir)

    output = OutputHandler(verbosity=verbosity, no_color=no_color)

    try:
        config = ConfigLoader.load_or_default(config_path)
        rules = build_rules(config.rules, config.exclude_rules)
        engine = RuleEngine(rules)
        output.debug(f"Rules: {', '.join(engine.rule_names)}")

        document_format = (input_format or config.input_format).lower()
        if document_format not in INPUT_FORMATS:
            raise ConfigError(
                f"Input format must be one of: {', '.join(INPUT_FORMATS)}, got '{document_format}'",
                'format'
            )

        content = _read_input(input_path)
        filename = None if input_path == STDIN_INPUT else input_path
        document = load_document(content, document_format, filename)
        output.info(f"Read {input_path}")

        session = ExportSession(
            engine=engine,
            title=_document_title(input_path, title),
            default_title=config.default_title,
        )
        result = session.update(document)

        if not result.converted:
            for warning in result.warnings:
                output.error(warning)
            raise typer.Exit(ExitCode.GENERAL_ERROR)

        if output_path:
            written = session.export(output_path)
            output.success(f"Exported Markdown to {written}")
            if verbosity >= 1:
                output.print_summary(result, str(written))
        else:
            output.print_markdown(result.markdown)
            if verbosity >= 1:
                output.print_summary(result)

        raise typer.Exit(ExitCode.SUCCESS)

    except (InputFileError, DocumentParseError) as e:
        logger.error(f"Cannot read input: {e}")
        output.error(str(e))
        raise typer.Exit(ExitCode.INPUT_ERROR)

    except (CLIError, UnknownRuleError) as e:
        logger.error(f"Configuration failed: {e}")
        output.error(str(e))
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    except ExportError as e:
        logger.error(f"Export failed: {e}")
        output.error(str(e))
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    except typer.Exit:
        raise

    except Exception as e:
        logger.exception("Unexpected error during conversion")
        output.error(f"Unexpected error: {e}")
        raise typer.Exit(ExitCode.GENERAL_ERROR)


def _list_rules(config_path: Optional[str], no_color: bool) -> None:
    """Print the configured rules in precedence order and exit.

    Applies the ``rules`` and ``exclude_rules`` of the configuration file, so
    the listing is the precedence a conversion would use.
    """
    output = OutputHandler(no_color=no_color)

    try:
        config = ConfigLoader.load_or_default(config_path)
        rules = build_rules(config.rules, config.exclude_rules)
    except (CLIError, UnknownRuleError) as e:
        logger.error(f"Configuration failed: {e}")
        output.error(str(e))
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    for position, rule in enumerate(rules, start=1):
        typer.echo(f"{position:2d}. {rule.name}")
    raise typer.Exit()


@app.command()
def main_command(
    input_path: Optional[str] = typer.Argument(
        None,
        help="Editor document to convert (.json or .html), or - for stdin",
        metavar="INPUT",
    ),
    output_path: Optional[str] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output .md file or existing directory (default: print to stdout)",
        metavar="PATH",
    ),
    input_format: Optional[str] = typer.Option(
        None,
        "--format",
        "-f",
        help="Input format: auto, json or html (default: from config, else auto)",
    ),
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        "-c",
        help=f"Configuration file (default: {ConfigLoader.DEFAULT_CONFIG_FILE} if present)",
        metavar="PATH",
    ),
    title: Optional[str] = typer.Option(
        None,
        "--title",
        "-t",
        help="Document title used for the export filename (default: input file name)",
    ),
    list_rules: bool = typer.Option(
        False,
        "--list-rules",
        help="List the configured conversion rules in precedence order and exit",
    ),
    logdir: Optional[str] = typer.Option(
        None,
        "--logdir",
        help="Directory for log files (creates timestamped log file)",
    ),
    verbosity: int = typer.Option(
        0,
        "--verbosity",
        "-v",
        count=True,
        help="Verbosity: -v for info, -vv for debug",
    ),
    no_color: bool = typer.Option(
        False,
        "--no-color",
        help="Disable colored output",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Show version and exit",
    ),
) -> None:
    """Convert a rich-text editor document to Markdown.

    \b
    QUICK START:
      docmark notes.json                     # Print Markdown to stdout
      docmark notes.html -o exports/         # Write exports/<title>.md
      docmark notes.json -o notes.md         # Write a specific file
      cat notes.json | docmark -             # Read the document from stdin

    \b
    CONFIGURATION (.docmark.yaml):
      exclude_rules: [styled_span]           # Disable a rule
      default_title: Untitled                # Filename for untitled documents
    """
    if version:
        typer.echo(f"docmark version {__version__}")
        raise typer.Exit()

    if list_rules:
        _list_rules(config_path, no_color)

    if input_path is None:
        typer.echo("Error: Missing INPUT document (use - to read from stdin)", err=True)
        typer.echo("")
        typer.echo("Example:")
        typer.echo("  docmark notes.json -o exports/")
        raise typer.Exit(ExitCode.INPUT_ERROR)

    _run_convert(
        input_path,
        output_path,
        input_format,
        config_path,
        title,
        logdir,
        verbosity,
        no_color,
    )


def main() -> None:
    """Main entry point for the CLI application.

    This function is called when the module is executed directly or
    when the console script is invoked.
    """
    app()


# Allow running as: python -m src.cli.main
if __name__ == "__main__":
    main()
