"""Commands working on remote URLs and git config files."""

import logging
from pathlib import Path
from typing import Annotated

import typer

from gitinfo.git.urls import normalize_remote_url, repository_name, rewrite_ssh_remotes
from gitinfo.utils.cli_utils import exit_with_error, show_warning

logger = logging.getLogger(__name__)

UrlArg = Annotated[str, typer.Argument(help="Remote URL, e.g. git@github.com:org/repo.git")]

NameFlag = Annotated[bool, typer.Option("--name", "-n", help="Print the repository name instead of the URL")]

ConfigFileArg = Annotated[
	Path,
	typer.Argument(
		exists=True,
		dir_okay=False,
		readable=True,
		help="Git config file, e.g. .git/config",
	),
]


def register_command(app: typer.Typer) -> None:
	"""Register the URL commands with the CLI app."""

	@app.command(name="normalize-url")
	def normalize_url_command(url: UrlArg, name: NameFlag = False) -> None:
		"""Print a remote URL in HTTPS form, without credentials."""
		normalized = normalize_remote_url(url)
		if url.strip() and not normalized:
			exit_with_error(f"Could not parse remote URL: {url}")
		typer.echo(repository_name(normalized) if name else normalized)

	@app.command(name="rewrite-config")
	def rewrite_config_command(config_file: ConfigFileArg) -> None:
		"""Print a git config file with SSH remotes rewritten to HTTPS (the file is not modified)."""
		try:
			original = config_file.read_text(encoding="utf-8")
		except OSError as e:
			exit_with_error(f"Could not read {config_file}.", exception=e)

		rewritten = rewrite_ssh_remotes(original)
		if rewritten == original:
			logger.debug("No SSH remote in %s", config_file)
			show_warning(f"No SSH remote found in {config_file}; printing it unchanged.")
		typer.echo(rewritten, nl=False)
