"""
Logging setup for gitinfo.

Logs and summaries go to stderr so that the JSON and assignments printed on
stdout can be piped into other tools.

"""

from __future__ import annotations

import logging
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler
from rich.rule import Rule
from rich.text import Text

console = Console(stderr=True)

FILE_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(module)s:%(lineno)d - %(message)s"


def setup_logging(is_verbose: bool = False, log_file_path: Path | str | None = None) -> None:
	"""
	Route the root logger to stderr and, optionally, to a file.

	Args:
	    is_verbose: Log debug messages instead of warnings and errors only
	    log_file_path: File receiving every debug message, created with its directory

	"""
	log_level = logging.DEBUG if is_verbose else logging.WARNING

	root_logger = logging.getLogger()
	root_logger.setLevel(logging.DEBUG if log_file_path else log_level)
	# repeated calls (one per CLI invocation in tests) must not stack handlers
	for handler in root_logger.handlers[:]:
		root_logger.removeHandler(handler)

	root_logger.addHandler(
		RichHandler(level=log_level, console=console, rich_tracebacks=True, show_path=is_verbose),
	)

	if not log_file_path:
		return
	path = Path(log_file_path)
	try:
		path.parent.mkdir(parents=True, exist_ok=True)
		file_handler = logging.FileHandler(path, mode="a", encoding="utf-8")
	except OSError as e:
		root_logger.warning("Could not log to %s: %s", path, e)
		return
	file_handler.setLevel(logging.DEBUG)
	file_handler.setFormatter(logging.Formatter(FILE_LOG_FORMAT))
	root_logger.addHandler(file_handler)
	root_logger.debug("Logging to file: %s", path)


def _display_summary(message: str, title: str, style: str) -> None:
	console.print()
	console.print(Rule(Text(title, style=f"bold {style}"), style=style))
	console.print(f"\n{message}\n", markup=False, highlight=False)
	console.print(Rule(style=style))
	console.print()


def display_error_summary(error_message: str) -> None:
	"""Print ``error_message`` between red rules titled "Error Summary"."""
	_display_summary(error_message, "Error Summary", "red")


def display_warning_summary(warning_message: str) -> None:
	"""Print ``warning_message`` between yellow rules titled "Warning Summary"."""
	_display_summary(warning_message, "Warning Summary", "yellow")
