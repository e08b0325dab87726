"""MCP tool that reads one text file from a source.

Registers the 'read_file' tool which validates inputs and delegates to the
backend's content fetch (UTF-8 only).
"""

from __future__ import annotations

from typing import Optional

from mcp.server.fastmcp import FastMCP

from clients.github import GitHubClient
from config import HTTP_VERIFY
from core.errors import InvalidSourceError
from core.models import SourceFile
from core.paths import is_safe_relpath, normalize_posix_relpath
from sources.source_factory import create_text_source


def register(mcp: FastMCP, *, github_client: Optional[GitHubClient] = None) -> None:
    @mcp.tool(name="read_file")
    async def read_file(source: str = ".", path: str = "") -> str:
        """Read a text file from a source and return its UTF-8 contents.

        Parameters:
          - source: local directory path or GitHub URL (see list_files).
          - path: file path relative to the source root (required).

        Returns:
          The file contents as a string.

        Raises:
          InvalidSourceError for a missing/unsafe path, PathNotFoundError,
          NotTextFileError when the file is not UTF-8, and GitHub errors.
        """
        rel = normalize_posix_relpath(path)
        if not is_safe_relpath(rel):
            raise InvalidSourceError("Missing or invalid file path")

        src = create_text_source(source, http_verify=HTTP_VERIFY, github_client=github_client)
        return await src.content(SourceFile(path=rel, origin=src.origin))
