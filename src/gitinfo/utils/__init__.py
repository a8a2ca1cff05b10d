"""Utility module for gitinfo package."""

from .cli_utils import console, exit_with_error, loading_spinner, show_error, show_warning
from .log_setup import setup_logging

__all__ = [
	"console",
	"exit_with_error",
	"loading_spinner",
	"setup_logging",
	"show_error",
	"show_warning",
]
