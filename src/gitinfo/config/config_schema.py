"""Schemas for the gitinfo configuration file."""

from typing import Literal

from pydantic import BaseModel, Field

from gitinfo.git.models import ExtractOptions


class OutputSchema(BaseModel):
	"""Configuration of the exported artifacts."""

	json_file_name: str = Field(default="git-info.json", min_length=1)
	"""File name used when the JSON is written into a directory."""

	json_pascal_keys: bool = False
	"""Write PascalCase JSON keys (``CommitHash``) instead of the field names (``commit_hash``)."""

	env_style: Literal["shell", "dotenv"] = "shell"
	"""Style of the assignments printed by the env command."""


class AppConfigSchema(BaseModel):
	"""Root of the gitinfo configuration."""

	git: ExtractOptions = Field(default_factory=ExtractOptions)
	"""Defaults for the extraction options; command line flags take precedence."""

	output: OutputSchema = Field(default_factory=OutputSchema)
