"""Models for git reference information and the options used to extract it."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

from pydantic import AliasGenerator, BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_pascal

from gitinfo.git.utils import GitInfoExportError

if TYPE_CHECKING:
	from collections.abc import Mapping

ENV_PREFIX = "GIT_"

INFO_FIELDS = (
	"ref",
	"branch",
	"tag",
	"commit_hash",
	"commit_user",
	"commit_time",
	"commit_message",
	"version",
	"url",
	"name",
)


def file_key(field_name: str) -> str:
	"""Return the lower-kebab-case output name of a field (``commit_hash`` -> ``commit-hash``)."""
	return field_name.replace("_", "-")


def env_var_name(field_name: str) -> str:
	"""Return the environment variable name of a field (``commit_hash`` -> ``GIT_COMMIT_HASH``)."""
	return f"{ENV_PREFIX}{field_name.upper()}"


def json_key(field_name: str) -> str:
	"""Return the PascalCase JSON key of a field (``commit_hash`` -> ``CommitHash``, ``url`` -> ``URL``)."""
	if field_name == "url":
		return "URL"
	return to_pascal(field_name)


class ExtractOptions(BaseModel):
	"""Options controlling which reference is inspected and how commit data is formatted."""

	model_config = ConfigDict(frozen=True, extra="forbid")

	ref: str = Field(default="HEAD", min_length=1)
	"""Git reference used for every git command."""

	remote_name: str = Field(default="origin", min_length=1)
	"""Name of the remote whose fetch URL is reported."""

	commit_hash_length: int = Field(default=40, ge=4, le=64)
	"""Length of the reported commit hash."""

	commit_user_format: str = "%an"
	"""Pretty format for the commit user, see git-log(1) PRETTY FORMATS."""

	commit_date_format: str = "%cI"
	"""Pretty format for the commit time."""

	commit_message_format: str = "%B"
	"""Pretty format for the commit message."""

	@field_validator("ref", "remote_name")
	@classmethod
	def _reject_option_like(cls, value: str) -> str:
		"""Refuse values git would read as a command line option."""
		if value.startswith("-"):
			msg = f"must not start with '-': {value!r}"
			raise ValueError(msg)
		return value


class GitReferenceInfo(BaseModel):
	"""
	Information about a git reference.

	Built once per extraction and never modified afterwards; all exports are
	projections of the same values.

	"""

	model_config = ConfigDict(
		frozen=True,
		str_strip_whitespace=True,
		alias_generator=AliasGenerator(serialization_alias=json_key),
	)

	ref: str
	"""Git reference used for the git commands."""

	branch: str = ""
	"""Abbreviated branch name of the reference."""

	tag: str = ""
	"""Tag exactly matching the reference, if any."""

	commit_hash: str = ""
	"""Commit hash of the reference, truncated to the requested length."""

	commit_user: str = ""
	"""Commit user, formatted with the user format."""

	commit_time: str = ""
	"""Commit time, formatted with the date format."""

	commit_message: str = ""
	"""Commit message, formatted with the message format."""

	version: str = ""
	"""Nearest tag plus distance, or the abbreviated hash when no tag is reachable."""

	url: str = ""
	"""HTTPS URL of the remote, without credentials."""

	name: str = ""
	"""Repository name (last segment of the URL)."""

	def to_json(self, pascal_keys: bool = False) -> str:
		"""
		Serialize the information as an indented JSON object.

		Args:
		        pascal_keys: Use ``Ref``, ``CommitHash``, ``URL``... instead of the field names

		Returns:
		        JSON text with one key per field, in field order

		Raises:
		        GitInfoExportError: If serialization fails

		"""
		try:
			return json.dumps(self.model_dump(by_alias=pascal_keys), indent=2, ensure_ascii=False)
		except (TypeError, ValueError) as e:
			msg = f"failed to marshal git info: {e}"
			raise GitInfoExportError(msg) from e

	def to_file_set(self) -> dict[str, str]:
		"""Return one named value per field, keyed by its lower-kebab-case name."""
		return {file_key(field): getattr(self, field) for field in INFO_FIELDS}

	def to_environment(self) -> dict[str, str]:
		"""Return the ``GIT_*`` environment variables for this reference."""
		return {env_var_name(field): getattr(self, field) for field in INFO_FIELDS}

	def with_environment(self, env: Mapping[str, str]) -> dict[str, str]:
		"""
		Return a copy of ``env`` with the ``GIT_*`` variables set.

		Existing ``GIT_*`` entries are overwritten; ``env`` itself is left untouched.

		Args:
		        env: Base environment

		Returns:
		        A new mapping holding ``env`` plus the ten ``GIT_*`` variables

		"""
		return {**env, **self.to_environment()}

	@classmethod
	def from_file_set(cls, files: Mapping[str, str]) -> GitReferenceInfo:
		"""Rebuild the information from the output of :meth:`to_file_set`."""
		return cls(**{field: files.get(file_key(field), "") for field in INFO_FIELDS})
