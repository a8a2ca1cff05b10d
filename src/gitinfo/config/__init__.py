"""Configuration for gitinfo."""

from gitinfo.config.config_loader import ConfigError, ConfigLoader, ConfigParsingError
from gitinfo.config.config_schema import AppConfigSchema, OutputSchema

__all__ = ["AppConfigSchema", "ConfigError", "ConfigLoader", "ConfigParsingError", "OutputSchema"]
