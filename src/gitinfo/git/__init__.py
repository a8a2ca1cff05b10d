"""Git reference information: extraction, URL normalization and export."""

from gitinfo.git.extractor import EXTRACTION_STEPS, ExtractionStep, GitInfoExtractor, extract_git_info
from gitinfo.git.models import ExtractOptions, GitReferenceInfo
from gitinfo.git.urls import normalize_remote_url, repository_name, rewrite_ssh_remotes
from gitinfo.git.utils import (
	CommandRunner,
	GitCommandError,
	GitError,
	GitInfoError,
	GitInfoExportError,
	InvalidReferenceError,
	SubprocessRunner,
	run_git_command,
)

__all__ = [
	"EXTRACTION_STEPS",
	"CommandRunner",
	"ExtractOptions",
	"ExtractionStep",
	"GitCommandError",
	"GitError",
	"GitInfoError",
	"GitInfoExportError",
	"GitInfoExtractor",
	"GitReferenceInfo",
	"InvalidReferenceError",
	"SubprocessRunner",
	"extract_git_info",
	"normalize_remote_url",
	"repository_name",
	"rewrite_ssh_remotes",
	"run_git_command",
]
