"""Git command execution and error types for gitinfo."""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
	from collections.abc import Sequence

logger = logging.getLogger(__name__)


class GitError(Exception):
	"""Custom exception for Git-related errors."""


class GitCommandError(GitError):
	"""Raised when a single git invocation fails."""

	def __init__(self, command: Sequence[str], returncode: int | None = None, stderr: str = "") -> None:
		"""
		Initialize the error from the failed invocation.

		Args:
		        command: Full argument list that was executed
		        returncode: Exit status, or None when the process could not start
		        stderr: Captured diagnostic output

		"""
		self.command = list(command)
		self.returncode = returncode
		self.stderr = stderr.strip()
		details = self.stderr or (f"exit status {returncode}" if returncode is not None else "command did not run")
		super().__init__(f"Git command failed: {' '.join(self.command)}\nError: {details}")


class GitInfoError(GitError):
	"""Raised when a required piece of git reference information cannot be extracted."""


class InvalidReferenceError(GitInfoError):
	"""Raised when the requested reference cannot be resolved at all."""


class GitInfoExportError(GitError):
	"""Raised when git reference information cannot be serialized or written."""


def git_command(repo_dir: Path | str, *args: str) -> list[str]:
	"""
	Build a git argument list that trusts ``repo_dir``.

	The repository snapshot may be owned by another user than the one running
	git, so every invocation marks it as a safe directory. The marker is passed
	on the command line and never written to a config file.

	Args:
	        repo_dir: Repository directory the command will run in
	        *args: Git subcommand and its arguments

	Returns:
	        The complete argument list, starting with ``git``

	"""
	return ["git", "-c", f"safe.directory={repo_dir}", *args]


def run_git_command(command: Sequence[str], cwd: Path | str | None = None) -> str:
	"""Run a Git command and return its output.

	Args:
	    command: Git command to run
	    cwd: Working directory (optional)

	Returns:
	    Command output as string

	Raises:
	    GitCommandError: If the command fails or git cannot be started
	"""
	try:
		result = subprocess.run(  # noqa: S603
			list(command),
			cwd=cwd,
			capture_output=True,
			text=True,
			check=True,
		)
	except subprocess.CalledProcessError as e:
		error = GitCommandError(command, e.returncode, e.stderr or e.stdout or "")
		logger.debug("%s", error)
		raise error from e
	except OSError as e:
		error = GitCommandError(command, None, str(e))
		logger.debug("%s", error)
		raise error from e
	else:
		return result.stdout


class CommandRunner(Protocol):
	"""Anything able to execute a command in a directory and return its stdout."""

	def run(self, cwd: Path, args: Sequence[str]) -> str:
		"""Execute ``args`` in ``cwd`` and return raw stdout, raising GitCommandError on failure."""
		...


class SubprocessRunner:
	"""Command runner backed by a local ``git`` executable."""

	def run(self, cwd: Path, args: Sequence[str]) -> str:
		"""
		Execute a command through :func:`run_git_command`.

		Args:
		        cwd: Working directory
		        args: Full argument list

		Returns:
		        Raw stdout of the command

		"""
		return run_git_command(args, cwd=cwd)


def validate_repo_path(path: Path | None = None) -> Path | None:
	"""Validate and return the repository path.

	Args:
	    path: Optional path to validate (defaults to current directory)

	Returns:
	    The resolved path if it is inside a git work tree or git directory, None otherwise
	"""
	if path is None:
		path = Path.cwd()
	path = path.expanduser().resolve()
	if not path.is_dir():
		return None
	try:
		run_git_command(git_command(path, "rev-parse", "--git-dir"), cwd=path)
	except GitError:
		return None
	return path
