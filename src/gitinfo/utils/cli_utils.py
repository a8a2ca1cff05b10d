"""Utility functions for CLI operations in gitinfo."""

from __future__ import annotations

import contextlib
import logging
import os
from typing import TYPE_CHECKING, NoReturn, Self

import typer
from rich.console import Console

from gitinfo.utils.log_setup import console as err_console
from gitinfo.utils.log_setup import display_error_summary, display_warning_summary

if TYPE_CHECKING:
	from collections.abc import Iterator

console = Console()
logger = logging.getLogger(__name__)


# Singleton class to track spinner state
class SpinnerState:
	"""Singleton class to track spinner state."""

	_instance = None
	is_active = False

	def __new__(cls) -> Self:
		"""
		Create or return the singleton instance.

		Returns:
		    The singleton instance of SpinnerState

		"""
		if cls._instance is None:
			cls._instance = super().__new__(cls)
		return cls._instance


@contextlib.contextmanager
def loading_spinner(message: str = "Processing...") -> Iterator[None]:
	"""
	Display a loading spinner on stderr while executing a task.

	Args:
	    message: Message to display alongside the spinner

	Yields:
	    None

	"""
	# No spinner in tests, CI jobs or when stderr is not a terminal
	if os.environ.get("PYTEST_CURRENT_TEST") or os.environ.get("CI") or not err_console.is_terminal:
		yield
		return

	spinner_state = SpinnerState()
	if spinner_state.is_active:
		yield
		return

	try:
		spinner_state.is_active = True
		with err_console.status(message):
			yield
	finally:
		spinner_state.is_active = False


def show_error(message: str, exception: Exception | None = None) -> None:
	"""
	Display an error summary with standardized formatting.

	Args:
	        message: The error message to display
	        exception: Optional exception that caused the error

	"""
	error_text = message
	if exception:
		error_text += f"\n\nDetails: {exception!s}"
		logger.debug("Error occurred", exc_info=exception)

	display_error_summary(error_text)


def show_warning(message: str) -> None:
	"""
	Display a warning summary with standardized formatting.

	Args:
	        message: The warning message to display

	"""
	display_warning_summary(message)


def exit_with_error(message: str, exit_code: int = 1, exception: Exception | None = None) -> NoReturn:
	"""
	Display an error message and exit.

	Args:
	        message: Error message to display
	        exit_code: Exit code to use
	        exception: Optional exception that caused the error

	"""
	show_error(message, exception)
	raise typer.Exit(exit_code) from exception


def handle_keyboard_interrupt() -> NoReturn:
	"""Handles KeyboardInterrupt by printing a message and exiting cleanly."""
	err_console.print("\n[yellow]Operation cancelled by user.[/yellow]")
	raise typer.Exit(130)  # Standard exit code for SIGINT
