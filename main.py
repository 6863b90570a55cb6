"""
Main entry point for the LineDiff command line tool.

This module handles:
- Command line argument parsing
- Logging configuration
- Settings loading and command line overrides
- Running the comparison on a worker thread
- Writing the diff report
- Exception handling
"""

from __future__ import annotations

import argparse
import logging
import sys
import traceback
from dataclasses import asdict, dataclass
from datetime import datetime
from enum import Enum, auto
from pathlib import Path
from typing import Optional, List

from linediff import (
    DiffOptions,
    DiffResult,
    InvalidOptions,
    render_context_report,
    render_report,
    __version__,
)
from linediff.services.file_io import FileIOService
from linediff.services.settings import ApplicationSettings, SettingsManager
from linediff.workers import DiffWorker, FileDiffWorker, TextDiffWorker, run_in_background


# =============================================================================
# Constants
# =============================================================================

APP_NAME = "linediff"
APP_DISPLAY_NAME = "LineDiff"
APP_VERSION = __version__

LOGS_DIR = Path.cwd() / "logs"

# Exit codes, as in diff(1)
EXIT_IDENTICAL = 0
EXIT_DIFFERENT = 1
EXIT_ERROR = 2

EXAMPLE_OLD = """function hello() {
  console.log("Hello World");
  return true;
}

const name = "John";
const age = 25;"""

EXAMPLE_NEW = """function hello() {
  console.log("Hello Universe");
  console.log("Welcome!");
  return true;
}

const name = "Jane";
const age = 30;
const city = "New York";"""


# =============================================================================
# Enums
# =============================================================================

class InputMode(Enum):
    """Where the compared documents come from."""
    FILES = auto()
    EXAMPLE = auto()


# =============================================================================
# Data Classes
# =============================================================================

@dataclass
class CommandLineArgs:
    """Parsed command line arguments."""
    old_path: Optional[str] = None
    new_path: Optional[str] = None
    output_path: Optional[str] = None
    mode: InputMode = InputMode.FILES
    config_file: Optional[str] = None
    encoding: Optional[str] = None
    ignore_whitespace: Optional[bool] = None
    ignore_case: Optional[bool] = None
    show_line_numbers: Optional[bool] = None
    context_lines: Optional[int] = None
    context_only: Optional[bool] = None
    save_settings: bool = False
    log_level: str = "WARNING"
    debug: bool = False


# =============================================================================
# Logging Setup
# =============================================================================

class LogFormatter(logging.Formatter):
    """Custom log formatter with colors for console."""

    COLORS = {
        logging.INFO: '\033[32m',      # Green
        logging.WARNING: '\033[33m',   # Yellow
        logging.ERROR: '\033[31m',     # Red
        logging.CRITICAL: '\033[35m',  # Magenta
    }
    RESET = '\033[0m'

    def __init__(self, use_colors: bool = True):
        super().__init__(
            fmt='%(asctime)s | %(levelname)-8s | %(name)s | %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        self.use_colors = use_colors and sys.stderr.isatty()

    def format(self, record: logging.LogRecord) -> str:
        formatted = super().format(record)

        if self.use_colors:
            color = self.COLORS.get(record.levelno, '')
            return f"{color}{formatted}{self.RESET}"

        return formatted


def setup_logging(level: str = "WARNING", log_file: Optional[Path] = None) -> logging.Logger:
    """
    Configure application logging.

    Console output goes to stderr so the report on stdout stays clean.

    Args:
        level: Log level string
        log_file: Optional file path for logging

    Returns:
        Root logger instance
    """
    numeric_level = getattr(logging, level.upper(), logging.WARNING)

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(numeric_level)
    console_handler.setFormatter(LogFormatter(use_colors=True))
    root_logger.addHandler(console_handler)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(
            log_file,
            encoding='utf-8'
        )
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(LogFormatter(use_colors=False))
        root_logger.addHandler(file_handler)

    # Reduce noise from third-party libraries
    logging.getLogger('chardet').setLevel(logging.WARNING)

    return root_logger


# =============================================================================
# Exception Handling
# =============================================================================

class ExceptionHandler:
    """
    Global exception handler for unhandled exceptions.

    Logs the exception and prints a short message.
    """

    def __init__(self, logger: logging.Logger):
        self.logger = logger

    def handle_exception(
        self,
        exc_type: type,
        exc_value: BaseException,
        exc_tb
    ) -> None:
        """Handle an unhandled exception."""
        # Don't handle keyboard interrupt
        if issubclass(exc_type, KeyboardInterrupt):
            sys.__excepthook__(exc_type, exc_value, exc_tb)
            return

        self.logger.critical(
            "Unhandled exception",
            exc_info=(exc_type, exc_value, exc_tb)
        )

        if self.logger.isEnabledFor(logging.DEBUG):
            traceback.print_exception(exc_type, exc_value, exc_tb)
        else:
            print(f"{APP_NAME}: {exc_type.__name__}: {exc_value}", file=sys.stderr)


# =============================================================================
# Command Line Parsing
# =============================================================================

def parse_arguments(args: Optional[List[str]] = None) -> CommandLineArgs:
    """
    Parse command line arguments.

    Args:
        args: Arguments to parse (defaults to sys.argv)

    Returns:
        Parsed arguments
    """
    parser = argparse.ArgumentParser(
        prog=APP_NAME,
        description="Line-level text comparison with a statistics report",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s old.txt new.txt               Compare two files
  %(prog)s -w -i old.txt new.txt         Ignore case and surrounding whitespace
  %(prog)s --context-only -U 2 a b       Show only changes with 2 lines of context
  %(prog)s --example                     Compare the built-in sample documents
        """
    )

    # Positional arguments
    parser.add_argument(
        'old',
        nargs='?',
        help='Old (original) file'
    )
    parser.add_argument(
        'new',
        nargs='?',
        help='New (modified) file'
    )
    parser.add_argument(
        '--example',
        action='store_true',
        help='Compare the built-in sample documents instead of files'
    )

    # Comparison options (None means "use settings")
    parser.add_argument(
        '-w', '--ignore-whitespace',
        action='store_true',
        default=None,
        help='Ignore leading and trailing whitespace'
    )
    parser.add_argument(
        '-i', '--ignore-case',
        action='store_true',
        default=None,
        help='Ignore case differences'
    )
    parser.add_argument(
        '--no-line-numbers',
        dest='show_line_numbers',
        action='store_false',
        default=None,
        help='Omit old:new line numbers from the report'
    )
    parser.add_argument(
        '-U', '--context-lines',
        type=int,
        default=None,
        metavar='N',
        help='Unchanged lines around each change in --context-only reports'
    )
    parser.add_argument(
        '--context-only',
        action='store_true',
        default=None,
        help='Report only changed hunks instead of every line'
    )

    # Input/output
    parser.add_argument(
        '--encoding',
        help='Force input encoding (auto-detect if omitted)'
    )
    parser.add_argument(
        '-o', '--output',
        help='Write the report to this file instead of stdout'
    )

    # Configuration
    parser.add_argument(
        '-c', '--config',
        help='Settings file path'
    )
    parser.add_argument(
        '--save-settings',
        action='store_true',
        help='Store the effective comparison options in the settings file'
    )

    # Logging
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Enable verbose output'
    )
    parser.add_argument(
        '--debug',
        action='store_true',
        help='Enable debug mode (also logs to a file)'
    )
    parser.add_argument(
        '--log-level',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
        default='WARNING',
        help='Log level'
    )

    # Version
    parser.add_argument(
        '--version',
        action='version',
        version=f'{APP_NAME} {APP_VERSION}'
    )

    parsed = parser.parse_args(args)

    if not parsed.example and not (parsed.old and parsed.new):
        parser.error("two files are required unless --example is given")

    result = CommandLineArgs()
    result.old_path = parsed.old
    result.new_path = parsed.new
    result.output_path = parsed.output
    result.mode = InputMode.EXAMPLE if parsed.example else InputMode.FILES
    result.config_file = parsed.config
    result.encoding = parsed.encoding
    result.ignore_whitespace = parsed.ignore_whitespace
    result.ignore_case = parsed.ignore_case
    result.show_line_numbers = parsed.show_line_numbers
    result.context_lines = parsed.context_lines
    result.context_only = parsed.context_only
    result.save_settings = parsed.save_settings
    result.debug = parsed.debug

    # Log level
    if parsed.debug:
        result.log_level = 'DEBUG'
    elif parsed.verbose:
        result.log_level = 'INFO'
    else:
        result.log_level = parsed.log_level

    return result


# =============================================================================
# Settings
# =============================================================================

def setup_settings(args: CommandLineArgs) -> SettingsManager:
    """
    Set up the settings manager and apply command line overrides.

    Args:
        args: Parsed command line arguments

    Returns:
        SettingsManager whose settings include the overrides
    """
    manager = SettingsManager(Path(args.config_file) if args.config_file else None)
    settings = manager.settings

    comparison = settings.comparison
    for name in ('ignore_whitespace', 'ignore_case', 'show_line_numbers', 'context_lines'):
        value = getattr(args, name)
        if value is not None:
            setattr(comparison, name, value)

    if args.context_only is not None:
        settings.report.context_only = args.context_only

    logging.debug(f"Effective settings: {asdict(settings)}")
    return manager


def create_worker(args: CommandLineArgs, options: DiffOptions) -> DiffWorker:
    """Build the worker that reads and compares the two documents."""
    if args.mode == InputMode.EXAMPLE:
        return TextDiffWorker(EXAMPLE_OLD, EXAMPLE_NEW, options)
    return FileDiffWorker(args.old_path, args.new_path, options, encoding=args.encoding)


def log_step(step: int, total: int, description: str) -> None:
    """Log worker progress."""
    logging.info(f"[{step}/{total}] {description}")


def build_report(
    result: DiffResult,
    options: DiffOptions,
    settings: ApplicationSettings
) -> str:
    """Render the full or context-only report for a result."""
    if settings.report.context_only:
        return render_context_report(result, options)
    return render_report(result, options)


# =============================================================================
# Main Function
# =============================================================================

def main(argv: Optional[List[str]] = None) -> int:
    """
    Command line entry point.

    Returns:
        Exit code: 0 identical, 1 different, 2 on error
    """
    args = parse_arguments(argv)

    log_file = LOGS_DIR / f"{APP_NAME}_{datetime.now():%Y%m%d}.log" if args.debug else None
    logger = setup_logging(args.log_level, log_file)
    logger.info(f"Starting {APP_DISPLAY_NAME} v{APP_VERSION}")

    exception_handler = ExceptionHandler(logger)
    sys.excepthook = exception_handler.handle_exception

    manager = setup_settings(args)
    settings = manager.settings

    try:
        options = settings.to_options()
    except InvalidOptions as e:
        logger.error(f"Invalid options: {e}")
        return EXIT_ERROR

    if args.save_settings and not manager.save(settings):
        logger.warning(f"Could not save settings to {manager.settings_path}")

    worker = create_worker(args, options)
    try:
        result = run_in_background(worker, on_step=log_step)
    except OSError as e:
        logger.error(f"Cannot read input: {e}")
        return EXIT_ERROR

    logger.info(f"Diff statistics: {result.stats}")
    report = build_report(result, options, settings)

    if args.output_path:
        write_result = FileIOService().write_text(
            args.output_path, report + "\n", settings.report.output_encoding
        )
        if not write_result.success:
            logger.error(f"Cannot write report: {write_result.error}")
            return EXIT_ERROR
        logger.info(f"Report written to {args.output_path} ({write_result.bytes_written} bytes)")
    else:
        print(report)

    return EXIT_IDENTICAL if result.is_identical else EXIT_DIFFERENT


# =============================================================================
# Entry Point
# =============================================================================

if __name__ == '__main__':
    sys.exit(main())
