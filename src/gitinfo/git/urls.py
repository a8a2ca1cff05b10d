"""Remote URL helpers: SSH shorthand rewriting and credential stripping."""

from __future__ import annotations

import logging
import posixpath
import re
from urllib.parse import urlsplit, urlunsplit

logger = logging.getLogger(__name__)

# user@host:path, where neither user nor host contain a slash or a colon
SSH_SHORTHAND_RE = re.compile(r"^(?P<user>[^@/:\s]+)@(?P<host>[^:/\s]+):(?P<path>.*)$")

# git@host: anywhere in a text, as found in .git/config url entries
GIT_HOSTNAME_RE = re.compile(r"git@(?P<host>[^:\s]+):")

GIT_SUFFIX = ".git"


def normalize_remote_url(raw_url: str) -> str:
	"""
	Normalize a git remote URL into a credential-free HTTPS form.

	SSH shorthands such as ``git@github.com:org/repo.git`` become
	``https://github.com/org/repo``. Any ``user:password@`` part of a regular
	URL is removed so the result is safe to export.

	Args:
	        raw_url: Remote URL as configured in git

	Returns:
	        The normalized URL, or an empty string when the input is empty or
	        cannot be parsed

	"""
	url = raw_url.strip()
	if not url:
		return ""

	# drop every trailing .git, not just the last one
	while url.endswith(GIT_SUFFIX):
		url = url.removesuffix(GIT_SUFFIX)

	match = SSH_SHORTHAND_RE.match(url)
	if match:
		url = f"https://{match.group('host')}/{match.group('path').lstrip('/')}"

	try:
		parts = urlsplit(url)
	except ValueError:
		logger.debug("Could not parse remote URL %r", url)
		return ""

	# never leak the user info
	netloc = parts.netloc.rpartition("@")[2]
	return urlunsplit(parts._replace(netloc=netloc))


def repository_name(url: str) -> str:
	"""Return the last path segment of a (normalized) remote URL."""
	url = url.strip().rstrip("/")
	if not url:
		return ""
	return posixpath.basename(url)


def rewrite_ssh_remotes(config_text: str) -> str:
	"""
	Rewrite every ``git@host:`` shorthand of a git config text to ``https://host/``.

	Tools that can only fetch over HTTPS (with a token) need the remotes of a
	cloned repository rewritten before they touch it.

	Args:
	        config_text: Content of a ``.git/config`` file

	Returns:
	        The rewritten text, identical to the input when it has no SSH remote

	"""
	return GIT_HOSTNAME_RE.sub(lambda match: f"https://{match.group('host')}/", config_text)
