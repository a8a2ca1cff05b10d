"""
Configuration loader for gitinfo.

This module provides functionality for loading and managing
configuration settings.

"""

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError
from xdg.BaseDirectory import xdg_config_home

from gitinfo.config.config_schema import AppConfigSchema

logger = logging.getLogger(__name__)

ENV_PREFIX = "GITINFO_"

# Constant for minimum number of parts in environment variable
MIN_ENV_VAR_PARTS = 2

LOCAL_CONFIG_NAME = ".gitinfo.yml"


class ConfigError(Exception):
	"""Exception raised for configuration errors."""


class ConfigParsingError(ConfigError):
	"""Exception raised when configuration file cannot be parsed."""


class ConfigLoader:
	"""
	Loads and manages configuration for gitinfo using Pydantic schemas.

	Values come from the defaults of the schema, then from a YAML file, then
	from ``GITINFO_<SECTION>_<KEY>`` environment variables.

	"""

	_instance = None  # For singleton pattern

	@classmethod
	def get_instance(cls, config_file: Path | None = None, reload: bool = False) -> "ConfigLoader":
		"""
		Get the singleton instance of ConfigLoader.

		Args:
			config_file: Path to configuration file (optional)
			reload: Whether to reload config even if already loaded

		Returns:
			ConfigLoader: Singleton instance

		"""
		if cls._instance is None or reload:
			cls._instance = cls(config_file)
		return cls._instance

	def __init__(self, config_file: Path | None = None) -> None:
		"""
		Initialize the configuration loader.

		Args:
			config_file: Path to configuration file (optional)

		"""
		self._config_file = config_file
		self._resolved_config_file = self._resolve_config_file(config_file)
		self._app_config = self._load_config()

	@property
	def config_file(self) -> Path | None:
		"""The configuration file in use, if any."""
		return self._resolved_config_file

	def _resolve_config_file(self, config_file: Path | None = None) -> Path | None:
		"""
		Resolve the configuration file path.

		If a config file is specified, use that. Otherwise, look in standard locations:
		1. ./.gitinfo.yml in the current directory
		2. $XDG_CONFIG_HOME/gitinfo/config.yml
		3. ~/.gitinfo/config.yml

		Args:
			config_file: Explicitly provided config file path (optional)

		Returns:
			Optional[Path]: Resolved config file path or None if no suitable file found

		"""
		if config_file:
			return Path(config_file).expanduser().resolve()

		local_config = Path(LOCAL_CONFIG_NAME)
		if local_config.exists():
			return local_config

		xdg_config_file = Path(xdg_config_home) / "gitinfo" / "config.yml"
		if xdg_config_file.exists():
			return xdg_config_file

		legacy_config = Path.home() / ".gitinfo" / "config.yml"
		if legacy_config.exists():
			return legacy_config

		return None

	@staticmethod
	def _parse_yaml_file(file_path: Path) -> dict[str, Any]:
		"""
		Parse a YAML file.

		Args:
			file_path: Path to the YAML file to parse

		Returns:
			Parsed YAML content as a dictionary

		Raises:
			yaml.YAMLError: If the file cannot be parsed as valid YAML
		"""
		with file_path.open(encoding="utf-8") as f:
			content = yaml.safe_load(f)
			if content is None:  # Empty file
				return {}
			if not isinstance(content, dict):
				msg = f"File {file_path} does not contain a valid YAML dictionary"
				raise yaml.YAMLError(msg)
			return content

	def _load_config(self) -> AppConfigSchema:
		"""
		Load configuration from file and environment and parse it into AppConfigSchema.

		Returns:
			AppConfigSchema: Loaded and parsed configuration.

		Raises:
			ConfigError: If an explicitly given configuration file does not exist
			ConfigParsingError: If configuration cannot be loaded or validated.

		"""
		file_config: dict[str, Any] = {}
		config_path = self._resolved_config_file
		if config_path:
			if not config_path.exists():
				msg = f"Configuration file not found: {config_path}"
				logger.error(msg)
				raise ConfigError(msg)
			try:
				file_config = self._parse_yaml_file(config_path)
			except (OSError, yaml.YAMLError) as e:
				msg = f"Error loading configuration from {config_path}: {e}"
				logger.exception(msg)
				raise ConfigParsingError(msg) from e
			logger.info("Loaded configuration from %s", config_path)
		else:
			logger.debug("No configuration file found. Using default configuration.")

		self._apply_env_overrides(file_config)

		try:
			return AppConfigSchema(**file_config)
		except ValidationError as e:
			msg = f"Error parsing configuration into schema: {e}"
			logger.debug(msg)
			raise ConfigParsingError(msg) from e

	@staticmethod
	def _apply_env_overrides(config: dict[str, Any]) -> None:
		"""Apply GITINFO_<SECTION>_<KEY> environment variables to the known sections."""
		sections = set(AppConfigSchema.model_fields)
		for env_var, value in os.environ.items():
			if not env_var.startswith(ENV_PREFIX):
				continue
			parts = env_var[len(ENV_PREFIX) :].lower().split("_")
			if len(parts) < MIN_ENV_VAR_PARTS or parts[0] not in sections:
				continue
			section, key = parts[0], "_".join(parts[1:])
			section_config = config.get(section)
			if not isinstance(section_config, dict):
				section_config = {}
				config[section] = section_config
			# pydantic coerces the string to the field type
			section_config[key] = value
			logger.debug("Applied environment override %s: %s", env_var, value)

	@property
	def get(self) -> AppConfigSchema:
		"""
		Get the current application configuration.

		Returns:
			AppConfigSchema: The current configuration
		"""
		return self._app_config
