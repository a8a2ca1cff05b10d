"""Commands extracting and exporting information about a git reference."""

import logging
from pathlib import Path
from typing import Annotated, Any

import typer
from pydantic import ValidationError
from rich.table import Table

from gitinfo.config import AppConfigSchema, ConfigError, ConfigLoader
from gitinfo.git import ExtractOptions, GitError, GitInfoExtractor, GitReferenceInfo
from gitinfo.git.exporter import format_environment, write_directory, write_json_file
from gitinfo.git.models import INFO_FIELDS, file_key
from gitinfo.git.utils import validate_repo_path
from gitinfo.utils.cli_utils import console, exit_with_error, handle_keyboard_interrupt, loading_spinner

from .cli_types import (
	DateFormatOpt,
	DestOpt,
	EnvStyleOpt,
	HashLengthOpt,
	MessageFormatOpt,
	OutputOpt,
	PascalKeysOpt,
	RefOpt,
	RemoteOpt,
	RepoDirArg,
	UserFormatOpt,
)

logger = logging.getLogger(__name__)

FIELD_LOOKUP = {**{field: field for field in INFO_FIELDS}, **{file_key(field): field for field in INFO_FIELDS}}

FieldArg = Annotated[
	str,
	typer.Argument(help=f"Field to print, one of: {', '.join(map(file_key, INFO_FIELDS))}"),
]


def load_config(ctx: typer.Context) -> AppConfigSchema:
	"""Load the configuration selected by the global options."""
	try:
		return ConfigLoader.get_instance(ctx.meta.get("config_file"), reload=True).get
	except ConfigError as e:
		exit_with_error("Invalid configuration.", exception=e)


def resolve_options(config: AppConfigSchema, **overrides: Any) -> ExtractOptions:
	"""
	Merge command line values over the configured extraction options.

	Args:
	    config: Loaded configuration
	    **overrides: Option values from the command line; None means unset

	Returns:
	    Validated extraction options (CLI > config > default)

	"""
	values = config.git.model_dump()
	values.update({key: value for key, value in overrides.items() if value is not None})
	try:
		return ExtractOptions(**values)
	except ValidationError as e:
		raise typer.BadParameter(str(e)) from e


def extract_info(repo_dir: Path, options: ExtractOptions) -> GitReferenceInfo:
	"""Run the extraction, turning failures into a readable CLI error."""
	repo_path = validate_repo_path(repo_dir)
	if repo_path is None:
		exit_with_error(f"Not a git repository: {repo_dir}")

	try:
		with loading_spinner(f"Reading git info for {options.ref}..."):
			return GitInfoExtractor().extract(repo_path, options)
	except KeyboardInterrupt:
		handle_keyboard_interrupt()
	except GitError as e:
		exit_with_error(f"Could not read git info for {options.ref!r} in {repo_path}.", exception=e)


def register_command(app: typer.Typer) -> None:
	"""Register the git info commands with the CLI app."""

	def _info(
		ctx: typer.Context,
		repo_dir: Path,
		**overrides: Any,
	) -> tuple[AppConfigSchema, GitReferenceInfo]:
		config = load_config(ctx)
		options = resolve_options(config, **overrides)
		return config, extract_info(repo_dir, options)

	@app.command(name="show")
	def show_command(
		ctx: typer.Context,
		repo_dir: RepoDirArg = Path(),
		ref: RefOpt = None,
		remote: RemoteOpt = None,
		hash_length: HashLengthOpt = None,
		user_format: UserFormatOpt = None,
		date_format: DateFormatOpt = None,
		message_format: MessageFormatOpt = None,
	) -> None:
		"""Show information about a git reference as a table."""
		_, info = _info(
			ctx,
			repo_dir,
			ref=ref,
			remote_name=remote,
			commit_hash_length=hash_length,
			commit_user_format=user_format,
			commit_date_format=date_format,
			commit_message_format=message_format,
		)
		table = Table(title=f"Git info for {info.ref}")
		table.add_column("Field", style="cyan", no_wrap=True)
		table.add_column("Value")
		for name, value in info.to_file_set().items():
			table.add_row(name, value)
		console.print(table)

	@app.command(name="json")
	def json_command(
		ctx: typer.Context,
		repo_dir: RepoDirArg = Path(),
		output: OutputOpt = None,
		pascal_keys: PascalKeysOpt = None,
		ref: RefOpt = None,
		remote: RemoteOpt = None,
		hash_length: HashLengthOpt = None,
		user_format: UserFormatOpt = None,
		date_format: DateFormatOpt = None,
		message_format: MessageFormatOpt = None,
	) -> None:
		"""Print information about a git reference as JSON, or write it to a file."""
		config, info = _info(
			ctx,
			repo_dir,
			ref=ref,
			remote_name=remote,
			commit_hash_length=hash_length,
			commit_user_format=user_format,
			commit_date_format=date_format,
			commit_message_format=message_format,
		)
		use_pascal = pascal_keys if pascal_keys is not None else config.output.json_pascal_keys
		try:
			if output is None:
				typer.echo(info.to_json(pascal_keys=use_pascal))
				return
			path = write_json_file(
				info,
				output,
				file_name=config.output.json_file_name,
				pascal_keys=use_pascal,
			)
		except GitError as e:
			exit_with_error("Could not export git info.", exception=e)
		typer.echo(str(path))

	@app.command(name="files")
	def files_command(
		ctx: typer.Context,
		dest: DestOpt,
		repo_dir: RepoDirArg = Path(),
		ref: RefOpt = None,
		remote: RemoteOpt = None,
		hash_length: HashLengthOpt = None,
		user_format: UserFormatOpt = None,
		date_format: DateFormatOpt = None,
		message_format: MessageFormatOpt = None,
	) -> None:
		"""Write information about a git reference to a directory, one file per field."""
		_, info = _info(
			ctx,
			repo_dir,
			ref=ref,
			remote_name=remote,
			commit_hash_length=hash_length,
			commit_user_format=user_format,
			commit_date_format=date_format,
			commit_message_format=message_format,
		)
		try:
			directory = write_directory(info, dest)
		except GitError as e:
			exit_with_error("Could not export git info.", exception=e)
		typer.echo(str(directory))

	@app.command(name="env")
	def env_command(
		ctx: typer.Context,
		repo_dir: RepoDirArg = Path(),
		style: EnvStyleOpt = None,
		ref: RefOpt = None,
		remote: RemoteOpt = None,
		hash_length: HashLengthOpt = None,
		user_format: UserFormatOpt = None,
		date_format: DateFormatOpt = None,
		message_format: MessageFormatOpt = None,
	) -> None:
		"""Print GIT_* environment variable assignments for a git reference."""
		config, info = _info(
			ctx,
			repo_dir,
			ref=ref,
			remote_name=remote,
			commit_hash_length=hash_length,
			commit_user_format=user_format,
			commit_date_format=date_format,
			commit_message_format=message_format,
		)
		env_style = style.value if style is not None else config.output.env_style
		typer.echo(format_environment(info, env_style))

	@app.command(name="get")
	def get_command(
		ctx: typer.Context,
		field: FieldArg,
		repo_dir: RepoDirArg = Path(),
		ref: RefOpt = None,
		remote: RemoteOpt = None,
		hash_length: HashLengthOpt = None,
		user_format: UserFormatOpt = None,
		date_format: DateFormatOpt = None,
		message_format: MessageFormatOpt = None,
	) -> None:
		"""Print a single field of the git reference information."""
		field_name = FIELD_LOOKUP.get(field.lower())
		if field_name is None:
			msg = f"unknown field {field!r}"
			raise typer.BadParameter(msg, param_hint="FIELD")
		_, info = _info(
			ctx,
			repo_dir,
			ref=ref,
			remote_name=remote,
			commit_hash_length=hash_length,
			commit_user_format=user_format,
			commit_date_format=date_format,
			commit_message_format=message_format,
		)
		typer.echo(getattr(info, field_name))
