"""Writers and readers materializing git reference information."""

from __future__ import annotations

import logging
import shlex
from pathlib import Path
from typing import Literal

from gitinfo.git.models import INFO_FIELDS, GitReferenceInfo, file_key
from gitinfo.git.utils import GitInfoExportError

logger = logging.getLogger(__name__)

JSON_FILE_NAME = "git-info.json"

EnvStyle = Literal["shell", "dotenv"]


def write_json_file(
	info: GitReferenceInfo,
	destination: Path | str,
	file_name: str = JSON_FILE_NAME,
	pascal_keys: bool = False,
) -> Path:
	"""
	Write the JSON representation of ``info``.

	Args:
	        info: Reference information to write
	        destination: Target file, or an existing directory to write ``file_name`` into
	        file_name: File name used when ``destination`` is a directory
	        pascal_keys: Write ``Ref``, ``CommitHash``... keys instead of the field names

	Returns:
	        Path of the written file

	Raises:
	        GitInfoExportError: If serialization or writing fails

	"""
	path = Path(destination)
	if path.is_dir():
		path /= file_name

	data = info.to_json(pascal_keys=pascal_keys)
	try:
		path.parent.mkdir(parents=True, exist_ok=True)
		path.write_text(data + "\n", encoding="utf-8")
	except OSError as e:
		msg = f"failed to write git info to {path}: {e}"
		raise GitInfoExportError(msg) from e

	logger.info("Wrote git info to %s", path)
	return path


def write_directory(info: GitReferenceInfo, destination: Path | str) -> Path:
	"""
	Write every field of ``info`` to its own file inside ``destination``.

	Each file holds exactly the field value, without a trailing newline, so
	an empty field gives an empty file.

	Args:
	        info: Reference information to write
	        destination: Directory to create or fill

	Returns:
	        The directory

	Raises:
	        GitInfoExportError: If a file cannot be written

	"""
	directory = Path(destination)
	try:
		directory.mkdir(parents=True, exist_ok=True)
		for name, value in info.to_file_set().items():
			(directory / name).write_text(value, encoding="utf-8", newline="")
	except OSError as e:
		msg = f"failed to write git info files to {directory}: {e}"
		raise GitInfoExportError(msg) from e

	logger.info("Wrote git info files to %s", directory)
	return directory


def read_directory(source: Path | str) -> GitReferenceInfo:
	"""
	Read reference information back from a directory written by :func:`write_directory`.

	Missing files are read as empty values. Values are read back byte for
	byte, line endings included.

	Args:
	        source: Directory holding one file per field

	Returns:
	        The reassembled reference information

	Raises:
	        GitInfoExportError: If the directory cannot be read

	"""
	directory = Path(source)
	if not directory.is_dir():
		msg = f"not a git info directory: {directory}"
		raise GitInfoExportError(msg)

	files: dict[str, str] = {}
	try:
		for field in INFO_FIELDS:
			path = directory / file_key(field)
			if path.is_file():
				# bytes keep \r and \r\n, which text mode would translate
				files[path.name] = path.read_bytes().decode("utf-8")
	except (OSError, UnicodeDecodeError) as e:
		msg = f"failed to read git info files from {directory}: {e}"
		raise GitInfoExportError(msg) from e
	return GitReferenceInfo.from_file_set(files)


def _dotenv_quote(value: str) -> str:
	escaped = value.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n").replace("\r", "\\r")
	return f'"{escaped}"'


def format_environment(info: GitReferenceInfo, style: EnvStyle = "shell") -> str:
	"""
	Render the ``GIT_*`` variables as assignment lines.

	Args:
	        info: Reference information
	        style: ``shell`` for ``export NAME=value`` lines that can be sourced,
	            ``dotenv`` for ``NAME="value"`` lines

	Returns:
	        One assignment per line, in field order

	"""
	if style == "shell":
		lines = [f"export {name}={shlex.quote(value)}" for name, value in info.to_environment().items()]
	elif style == "dotenv":
		lines = [f"{name}={_dotenv_quote(value)}" for name, value in info.to_environment().items()]
	else:
		msg = f"unknown environment style: {style!r}"
		raise ValueError(msg)
	return "\n".join(lines)
