"""Factory for selecting the appropriate TextSource implementation.

Exposes create_text_source, the single place that inspects the shape of a
user-supplied source string.
"""

from __future__ import annotations

from typing import Optional

from clients.github import GitHubClient, parse_github_url
from core.errors import InvalidSourceError
from core.interfaces import TextSource
from core.log import get_logger
from sources.github_source import GitHubSource
from sources.local_source import FileSystemSource

GITHUB_PREFIX = "https://github.com"

_log = get_logger("sources.factory")


def create_text_source(
    source: str,
    *,
    github_timeout: float = 20.0,
    http_verify: bool = True,
    github_client: Optional[GitHubClient] = None,
) -> TextSource:
    """
    Factory that returns the correct TextSource implementation.

    Dispatch:
    1. A string starting with https://github.com -> GitHubSource.
    2. Anything else is a local directory -> FileSystemSource.
    """
    value = (source or "").strip()
    if not value:
        raise InvalidSourceError("Missing source path or URL")

    if value.startswith(GITHUB_PREFIX):
        location = parse_github_url(value)
        client = github_client or GitHubClient(timeout=github_timeout, verify=http_verify)
        _log.debug("using GitHub source %s", location)
        return GitHubSource(client=client, location=location)

    _log.debug("using filesystem source %s", value)
    return FileSystemSource(value)
