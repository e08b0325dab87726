"""MCP tool that lists the text files of a source.

Registers the 'list_files' tool which indexes a local directory or a
GitHub repository with the same filtering the interactive session uses.
"""

from __future__ import annotations

from typing import List, Optional

from mcp.server.fastmcp import FastMCP

from clients.github import GitHubClient
from config import EXTRA_BINARY_EXTENSIONS, EXTRA_TEXT_EXTENSIONS, HTTP_VERIFY
from core.models import FilterConfig
from sources.source_factory import create_text_source


def build_filter(
    extra_text_extensions: Optional[List[str]] = None,
    extra_binary_extensions: Optional[List[str]] = None,
) -> FilterConfig:
    # Request overrides are added to the environment defaults
    return FilterConfig.from_iterables(
        [*EXTRA_TEXT_EXTENSIONS, *(extra_text_extensions or [])],
        [*EXTRA_BINARY_EXTENSIONS, *(extra_binary_extensions or [])],
    )


def register(mcp: FastMCP, *, github_client: Optional[GitHubClient] = None) -> None:
    @mcp.tool(name="list_files")
    async def list_files(
        source: str = ".",
        extra_text_extensions: Optional[List[str]] = None,
        extra_binary_extensions: Optional[List[str]] = None,
    ) -> List[str]:
        """List the text files of a source and return their sorted paths.

        Params:
          - source: local directory path, or a GitHub URL such as
            https://github.com/owner/repo or
            https://github.com/owner/repo/tree/<branch>/<subdir>.
          - extra_text_extensions: extensions to treat as text even if the
            built-in table lists them as binary.
          - extra_binary_extensions: extensions to always exclude.

        Returns:
          Sorted list of POSIX paths relative to the source root.

        Raises:
          InvalidSourceError, PathNotFoundError, RepoNotFoundError,
          RateLimitExceededError and other TextSourceError subclasses.
        """
        src = create_text_source(source, http_verify=HTTP_VERIFY, github_client=github_client)
        files = await src.index(build_filter(extra_text_extensions, extra_binary_extensions))
        return sorted(f.path for f in files)
