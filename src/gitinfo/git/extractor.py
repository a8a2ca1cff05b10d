"""Extraction of git reference information from a repository directory."""

from __future__ import annotations

import asyncio
import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from gitinfo.git.models import ExtractOptions, GitReferenceInfo
from gitinfo.git.urls import normalize_remote_url, repository_name
from gitinfo.git.utils import (
	CommandRunner,
	GitCommandError,
	GitInfoError,
	InvalidReferenceError,
	SubprocessRunner,
	git_command,
)

if TYPE_CHECKING:
	from typing import Any

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExtractionStep:
	"""
	One git query contributing a single field of the reference information.

	``args`` and ``purpose`` are templates formatted with the extraction
	options, so the step table stays declarative.

	"""

	field: str
	"""Field of GitReferenceInfo filled by this step."""

	args: tuple[str, ...]
	"""Git arguments, formatted with the options."""

	purpose: str
	"""What the step fetches, used in error messages."""

	is_fatal: bool = True
	"""Whether a failure aborts the whole extraction or yields an empty value."""

	error_type: type[GitInfoError] = GitInfoError
	"""Exception raised when a fatal step fails."""

	runs_first: bool = False
	"""Resolved before the other steps are started."""

	def arguments(self, options: ExtractOptions) -> list[str]:
		"""Return the git arguments for ``options``."""
		values = options.model_dump()
		return [arg.format(**values) for arg in self.args]

	def describe(self, options: ExtractOptions) -> str:
		"""Return the purpose of the step for ``options``."""
		values: dict[str, Any] = {key: repr(value) for key, value in options.model_dump().items()}
		return self.purpose.format(**values)


EXTRACTION_STEPS: tuple[ExtractionStep, ...] = (
	ExtractionStep(
		field="branch",
		args=("rev-parse", "--abbrev-ref", "{ref}"),
		purpose="branch",
		error_type=InvalidReferenceError,
		runs_first=True,
	),
	ExtractionStep(
		field="tag",
		args=("describe", "--tags", "--exact-match", "{ref}"),
		purpose="tag",
		is_fatal=False,
	),
	ExtractionStep(
		field="commit_hash",
		args=("rev-parse", "--short={commit_hash_length}", "{ref}"),
		purpose="commit hash with length {commit_hash_length}",
	),
	ExtractionStep(
		field="commit_user",
		args=("show", "-s", "--format={commit_user_format}", "{ref}"),
		purpose="commit user with format {commit_user_format}",
	),
	ExtractionStep(
		field="commit_time",
		args=("show", "-s", "--format={commit_date_format}", "{ref}"),
		purpose="commit time with format {commit_date_format}",
	),
	ExtractionStep(
		field="commit_message",
		args=("show", "-s", "--format={commit_message_format}", "{ref}"),
		purpose="commit message with format {commit_message_format}",
	),
	ExtractionStep(
		field="version",
		args=("describe", "--tags", "--always", "{ref}"),
		purpose="version",
	),
	ExtractionStep(
		field="url",
		args=("config", "--get", "remote.{remote_name}.url"),
		purpose="remote URL",
		is_fatal=False,
	),
)


class GitInfoExtractor:
	"""
	Extracts information about a git reference.

	Every step of :data:`EXTRACTION_STEPS` is a read-only git query. The
	reference is resolved first; the other queries then run concurrently in
	a private thread pool and the first fatal failure cancels the remaining
	ones. No record is built when a fatal step fails.

	Cancelling only stops waiting: a git process that is already running is
	left to finish in its worker thread and its output is discarded. Queries
	that have not started yet are never run.

	"""

	def __init__(self, runner: CommandRunner | None = None) -> None:
		"""
		Initialize the extractor.

		Args:
		        runner: Command runner used for git queries (defaults to a subprocess runner)

		"""
		self.runner: CommandRunner = runner or SubprocessRunner()

	def extract(self, repo_dir: Path | str, options: ExtractOptions | None = None) -> GitReferenceInfo:
		"""
		Extract information about a reference of the repository in ``repo_dir``.

		Must not be called from a running event loop; use :meth:`extract_async` there.

		Args:
		        repo_dir: Work tree or ``.git`` directory of the repository
		        options: Extraction options (defaults apply when omitted)

		Returns:
		        The reference information

		Raises:
		        InvalidReferenceError: If the reference cannot be resolved
		        GitInfoError: If any other required information cannot be read

		"""
		return asyncio.run(self.extract_async(repo_dir, options))

	async def extract_async(self, repo_dir: Path | str, options: ExtractOptions | None = None) -> GitReferenceInfo:
		"""Asynchronous variant of :meth:`extract`."""
		options = options or ExtractOptions()
		# safe.directory only matches absolute paths
		repo_path = Path(repo_dir).expanduser().resolve()
		logger.debug("Extracting git info for %s at %s", options.ref, repo_path)

		raw: dict[str, str] = {}
		executor = ThreadPoolExecutor(max_workers=len(EXTRACTION_STEPS), thread_name_prefix="gitinfo")
		try:
			for step in (step for step in EXTRACTION_STEPS if step.runs_first):
				raw[step.field] = await self._run_step(executor, repo_path, step, options)

			steps = [step for step in EXTRACTION_STEPS if not step.runs_first]
			values = await self._run_concurrently(executor, repo_path, steps, options)
		finally:
			# do not block on git processes whose result is no longer needed
			executor.shutdown(wait=False, cancel_futures=True)
		raw.update(zip((step.field for step in steps), values, strict=True))

		url = normalize_remote_url(raw.pop("url"))
		info = GitReferenceInfo(ref=options.ref, url=url, name=repository_name(url), **raw)
		logger.debug("Extracted git info: %s", info)
		return info

	async def _run_concurrently(
		self,
		executor: ThreadPoolExecutor,
		repo_path: Path,
		steps: list[ExtractionStep],
		options: ExtractOptions,
	) -> list[str]:
		"""Run ``steps`` concurrently, cancelling the others on the first fatal failure."""
		tasks = [asyncio.create_task(self._run_step(executor, repo_path, step, options)) for step in steps]
		try:
			return await asyncio.gather(*tasks)
		except BaseException as e:
			for task in tasks:
				task.cancel()
			outcomes = await asyncio.gather(*tasks, return_exceptions=True)
			if isinstance(e, GitInfoError):
				# of the steps that finished, report the earliest failure in table order
				failures = [outcome for outcome in outcomes if isinstance(outcome, GitInfoError)]
				raise failures[0] from failures[0].__cause__
			raise

	async def _run_step(
		self,
		executor: ThreadPoolExecutor,
		repo_path: Path,
		step: ExtractionStep,
		options: ExtractOptions,
	) -> str:
		"""Run one extraction step and apply its failure policy."""
		args = git_command(repo_path, *step.arguments(options))
		loop = asyncio.get_running_loop()
		try:
			output = await loop.run_in_executor(executor, self.runner.run, repo_path, args)
		except GitCommandError as e:
			if not step.is_fatal:
				logger.debug("No %s for %s: %s", step.describe(options), options.ref, e.stderr)
				return ""
			msg = f"failed to get {step.describe(options)}: {e.stderr or e}"
			logger.debug(msg)
			raise step.error_type(msg) from e
		return output.strip()


def extract_git_info(
	repo_dir: Path | str,
	runner: CommandRunner | None = None,
	**options: Any,
) -> GitReferenceInfo:
	"""
	Extract reference information with options given as keyword arguments.

	Args:
	        repo_dir: Work tree or ``.git`` directory of the repository
	        runner: Optional command runner
	        **options: Fields of :class:`ExtractOptions`

	Returns:
	        The reference information

	"""
	return GitInfoExtractor(runner).extract(repo_dir, ExtractOptions(**options))
