"""Global test fixtures and configuration."""

from __future__ import annotations

import shutil
import subprocess
import threading
from typing import TYPE_CHECKING, Any

import pytest

from gitinfo.git.utils import GitCommandError

if TYPE_CHECKING:
	from collections.abc import Callable, Sequence
	from pathlib import Path

FULL_HASH = "0123456789abcdef0123456789abcdef01234567"
COMMIT_DATE = "2024-01-02T03:04:05+00:00"


class FakeRunner:
	"""Command runner answering git queries from a table keyed by the git arguments."""

	def __init__(self, responses: dict[tuple[str, ...], str | Exception]) -> None:
		self.responses = responses
		self.calls: list[tuple[str, ...]] = []
		self._lock = threading.Lock()

	def run(self, cwd: Path, args: Sequence[str]) -> str:
		# args look like: git -c safe.directory=<dir> <subcommand...>
		key = tuple(args[3:])
		with self._lock:
			self.calls.append(key)
		response = self.responses.get(key)
		if response is None:
			raise GitCommandError(args, 128, f"fatal: no fake response for {' '.join(key)}")
		if isinstance(response, Exception):
			raise response
		return response


def missing(*args: str) -> GitCommandError:
	"""Build the error git reports for a failed query."""
	return GitCommandError(["git", *args], 128, "fatal: not found")


@pytest.fixture
def fake_responses() -> dict[tuple[str, ...], str | Exception]:
	"""Git answers for HEAD with default options: branch main, no tag, an SSH origin."""
	return {
		("rev-parse", "--abbrev-ref", "HEAD"): "main\n",
		("describe", "--tags", "--exact-match", "HEAD"): missing("describe", "--tags", "--exact-match", "HEAD"),
		("rev-parse", "--short=40", "HEAD"): f"{FULL_HASH}\n",
		("show", "-s", "--format=%an", "HEAD"): "Jane Doe\n",
		("show", "-s", "--format=%cI", "HEAD"): f"{COMMIT_DATE}\n",
		("show", "-s", "--format=%B", "HEAD"): "Initial commit\n\n",
		("describe", "--tags", "--always", "HEAD"): "0123456\n",
		("config", "--get", "remote.origin.url"): "git@github.com:acme/widgets.git\n",
	}


@pytest.fixture
def fake_runner(fake_responses: dict[tuple[str, ...], str | Exception]) -> FakeRunner:
	"""Fake runner using the default responses; tests may edit ``fake_runner.responses``."""
	return FakeRunner(fake_responses)


@pytest.fixture
def git_env(monkeypatch: pytest.MonkeyPatch) -> None:
	"""Isolate git from the user configuration and pin commit identities and dates."""
	monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
	monkeypatch.setenv("GIT_CONFIG_GLOBAL", "/dev/null")
	monkeypatch.setenv("GIT_AUTHOR_NAME", "Jane Doe")
	monkeypatch.setenv("GIT_AUTHOR_EMAIL", "jane@example.com")
	monkeypatch.setenv("GIT_COMMITTER_NAME", "Jane Doe")
	monkeypatch.setenv("GIT_COMMITTER_EMAIL", "jane@example.com")
	monkeypatch.setenv("GIT_AUTHOR_DATE", COMMIT_DATE)
	monkeypatch.setenv("GIT_COMMITTER_DATE", COMMIT_DATE)


@pytest.fixture
def git() -> Callable[..., str]:
	"""Return a helper running git in a repository and returning its stdout."""
	if shutil.which("git") is None:
		pytest.skip("git is not installed")

	def run(repo: Path, *args: str, **kwargs: Any) -> str:
		result = subprocess.run(  # noqa: S603
			["git", "-c", "commit.gpgsign=false", "-c", "tag.gpgsign=false", *args],  # noqa: S607
			cwd=repo,
			capture_output=True,
			text=True,
			check=True,
			**kwargs,
		)
		return result.stdout

	return run


@pytest.fixture
def git_repo(tmp_path: Path, git: Callable[..., str], git_env: None) -> Path:
	"""Create a repository on branch main with a single commit and no remote."""
	repo = tmp_path / "widgets"
	repo.mkdir()
	git(repo, "init", "-q")
	git(repo, "symbolic-ref", "HEAD", "refs/heads/main")
	(repo / "README.md").write_text("# widgets\n", encoding="utf-8")
	git(repo, "add", "README.md")
	git(repo, "commit", "-q", "-m", "Initial commit")
	return repo
