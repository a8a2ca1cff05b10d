"""Tests for configuration loading and validation."""

import os
from pathlib import Path

import pytest
import yaml

from gitinfo.config import AppConfigSchema, ConfigError, ConfigLoader, ConfigParsingError


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run without any user or project configuration."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr("gitinfo.config.config_loader.xdg_config_home", str(tmp_path / "xdg"))
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    for name in list(os.environ):
        if name.startswith("GITINFO_"):
            monkeypatch.delenv(name)


@pytest.fixture
def temp_config_file(tmp_path: Path) -> Path:
    """Path of a configuration file for testing."""
    return tmp_path / "config.yml"


def test_default_config_loading() -> None:
    """Defaults apply when no configuration file exists."""
    config_loader = ConfigLoader(None)

    assert config_loader.config_file is None
    assert config_loader.get == AppConfigSchema()
    assert config_loader.get.git.commit_hash_length == 40
    assert config_loader.get.output.env_style == "shell"
    assert config_loader.get.output.json_pascal_keys is False


def test_custom_config_loading(temp_config_file: Path) -> None:
    """Values from the file override the defaults."""
    custom_config = {
        "git": {"ref": "main", "remote_name": "upstream", "commit_hash_length": 12, "commit_user_format": "%ae"},
        "output": {"json_file_name": "build-info.json", "env_style": "dotenv"},
    }
    temp_config_file.write_text(yaml.dump(custom_config), encoding="utf-8")

    config = ConfigLoader(temp_config_file).get

    assert config.git.ref == "main"
    assert config.git.remote_name == "upstream"
    assert config.git.commit_hash_length == 12
    assert config.git.commit_user_format == "%ae"
    assert config.git.commit_message_format == "%B"
    assert config.output.json_file_name == "build-info.json"
    assert config.output.env_style == "dotenv"


def test_local_config_is_found(tmp_path: Path) -> None:
    """A .gitinfo.yml in the working directory is used."""
    (tmp_path / ".gitinfo.yml").write_text("git:\n  commit_hash_length: 8\n", encoding="utf-8")

    config_loader = ConfigLoader(None)

    assert config_loader.config_file == Path(".gitinfo.yml")
    assert config_loader.get.git.commit_hash_length == 8


def test_xdg_config_is_found(tmp_path: Path) -> None:
    """The XDG configuration is used when there is no local file."""
    xdg_file = tmp_path / "xdg" / "gitinfo" / "config.yml"
    xdg_file.parent.mkdir(parents=True)
    xdg_file.write_text("git:\n  remote_name: upstream\n", encoding="utf-8")

    config_loader = ConfigLoader(None)

    assert config_loader.config_file == xdg_file
    assert config_loader.get.git.remote_name == "upstream"


def test_environment_overrides_file(temp_config_file: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """GITINFO_<SECTION>_<KEY> variables win over the file."""
    temp_config_file.write_text("git:\n  commit_hash_length: 12\n", encoding="utf-8")
    monkeypatch.setenv("GITINFO_GIT_COMMIT_HASH_LENGTH", "7")
    monkeypatch.setenv("GITINFO_OUTPUT_ENV_STYLE", "dotenv")
    monkeypatch.setenv("GITINFO_OUTPUT_JSON_PASCAL_KEYS", "true")
    monkeypatch.setenv("GITINFO_UNKNOWN_THING", "ignored")

    config = ConfigLoader(temp_config_file).get

    assert config.git.commit_hash_length == 7
    assert config.output.env_style == "dotenv"
    assert config.output.json_pascal_keys is True


def test_formats_with_percent_signs(temp_config_file: Path) -> None:
    """Quoted pretty formats are read verbatim."""
    temp_config_file.write_text('git:\n  commit_date_format: "%ct"\n', encoding="utf-8")

    assert ConfigLoader(temp_config_file).get.git.commit_date_format == "%ct"


@pytest.mark.parametrize(
    "content",
    [
        "git:\n  commit_hash_length: not_a_number\n",
        "git:\n  commit_hash_length: 2\n",
        "git:\n  ref: --all\n",
        "git:\n  unknown_option: 1\n",
        "output:\n  env_style: yaml\n",
    ],
)
def test_config_validation(temp_config_file: Path, content: str) -> None:
    """Invalid values are reported as parsing errors."""
    temp_config_file.write_text(content, encoding="utf-8")

    with pytest.raises(ConfigParsingError, match="Error parsing configuration into schema"):
        ConfigLoader(temp_config_file)


def test_config_must_be_a_mapping(temp_config_file: Path) -> None:
    """A YAML document that is not a mapping is rejected."""
    temp_config_file.write_text("- just\n- a list\n", encoding="utf-8")

    with pytest.raises(ConfigParsingError, match="Error loading configuration"):
        ConfigLoader(temp_config_file)


def test_empty_config_file(temp_config_file: Path) -> None:
    """An empty file gives the defaults."""
    temp_config_file.write_text("", encoding="utf-8")

    assert ConfigLoader(temp_config_file).get == AppConfigSchema()


def test_nonexistent_config_file(tmp_path: Path) -> None:
    """An explicitly given file must exist."""
    with pytest.raises(ConfigError, match="Configuration file not found:"):
        ConfigLoader(tmp_path / "nonexistent" / "config.yml")


def test_get_instance_reload(temp_config_file: Path) -> None:
    """The singleton is reused unless a reload is requested."""
    temp_config_file.write_text("git:\n  ref: main\n", encoding="utf-8")

    first = ConfigLoader.get_instance(temp_config_file, reload=True)
    assert ConfigLoader.get_instance() is first

    temp_config_file.write_text("git:\n  ref: develop\n", encoding="utf-8")
    reloaded = ConfigLoader.get_instance(temp_config_file, reload=True)

    assert reloaded is not first
    assert reloaded.get.git.ref == "develop"
