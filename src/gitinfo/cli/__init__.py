"""Command-line interface package for gitinfo."""

import datetime
import logging
import sys
from pathlib import Path
from typing import Annotated

import typer
from dotenv import load_dotenv

from gitinfo import __version__
from gitinfo.utils.log_setup import setup_logging

from .info_cmd import register_command as register_info_commands
from .url_cmd import register_command as register_url_commands

logger = logging.getLogger(__name__)

# Load environment variables from .env files, .env.local first
env_local = Path(".env.local")
if env_local.exists():
	load_dotenv(dotenv_path=env_local)
	logger.debug("Loaded environment variables from %s", env_local)
else:
	env_file = Path(".env")
	if env_file.exists():
		load_dotenv(dotenv_path=env_file)
		logger.debug("Loaded environment variables from %s", env_file)

# Initialize the main CLI app
app = typer.Typer(
	help=f"gitinfo - Extract information about a git reference\n\nVersion: {__version__}",
	no_args_is_help=True,
	context_settings={"help_option_names": ["-h", "--help"]},
)

# --- Global Options Callback ---


def _version_callback(value: bool) -> None:
	"""Callback for --version option."""
	if value:
		typer.echo(f"gitinfo version: {__version__}")
		raise typer.Exit


@app.callback(invoke_without_command=True)
def global_options(
	ctx: typer.Context,
	is_verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable verbose logging.")] = False,
	is_output_log: Annotated[
		bool,
		typer.Option(
			"--save-log",
			help="Enable logging to a file. Logs to logs/gitinfo_{datetime}.log.",
		),
	] = False,
	config_file: Annotated[
		Path | None,
		typer.Option("--config", "-c", help="Configuration file (defaults to ./.gitinfo.yml or the XDG config)."),
	] = None,
	_version: Annotated[
		bool | None,
		typer.Option("--version", help="Show version and exit.", callback=_version_callback, is_eager=True),
	] = None,
) -> None:
	"""Global CLI options and logging setup."""
	ctx.meta["is_verbose"] = is_verbose
	ctx.meta["config_file"] = config_file

	log_file_path_to_use: Path | None = None
	if is_output_log:
		log_dir = Path("logs")
		current_time = datetime.datetime.now(tz=datetime.UTC).strftime("%Y-%m-%d_%H-%M-%S")
		log_file_path_to_use = log_dir / f"gitinfo_{current_time}.log"

	setup_logging(is_verbose=is_verbose or is_output_log, log_file_path=log_file_path_to_use)


# --- Register commands ---

register_info_commands(app)
register_url_commands(app)


# --- Main Entry Point ---
def main() -> int:
	"""Run the CLI application."""
	return app()


if __name__ == "__main__":
	sys.exit(main())
