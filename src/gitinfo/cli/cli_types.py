"""Type definitions for CLI parameters."""

from enum import Enum
from pathlib import Path
from typing import Annotated

import typer


class EnvStyle(str, Enum):
	"""Output styles of the env command."""

	SHELL = "shell"
	DOTENV = "dotenv"


RepoDirArg = Annotated[
	Path,
	typer.Argument(
		exists=True,
		file_okay=False,
		help="Work tree or .git directory of the repository",
		show_default=True,
	),
]

RefOpt = Annotated[
	str | None,
	typer.Option("--ref", "-r", help="Git reference to inspect (overrides config, default HEAD)"),
]

RemoteOpt = Annotated[
	str | None,
	typer.Option("--remote", help="Name of the remote to report (overrides config, default origin)"),
]

HashLengthOpt = Annotated[
	int | None,
	typer.Option("--hash-length", help="Length of the commit hash (overrides config, default 40)"),
]

UserFormatOpt = Annotated[
	str | None,
	typer.Option("--user-format", help="Pretty format of the commit user (default %an)"),
]

DateFormatOpt = Annotated[
	str | None,
	typer.Option("--date-format", help="Pretty format of the commit time (default %cI)"),
]

MessageFormatOpt = Annotated[
	str | None,
	typer.Option("--message-format", help="Pretty format of the commit message (default %B)"),
]

OutputOpt = Annotated[
	Path | None,
	typer.Option(
		"--output",
		"-o",
		help="Write the JSON to this file, or into this directory",
	),
]

DestOpt = Annotated[
	Path,
	typer.Option(
		"--dest",
		"-d",
		file_okay=False,
		help="Directory receiving one file per field",
	),
]

PascalKeysOpt = Annotated[
	bool | None,
	typer.Option(
		"--pascal-keys/--field-keys",
		help="Use Ref, CommitHash, URL... as JSON keys instead of ref, commit_hash, url (overrides config)",
		show_default=False,
	),
]

EnvStyleOpt = Annotated[
	EnvStyle | None,
	typer.Option("--style", "-s", help="Assignment style (overrides config)", case_sensitive=False),
]
