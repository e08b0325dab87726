"""MCP tool that merges the text files of a source into one blob.

Registers 'merge_files' which indexes the source, keeps the requested
paths (all files when none are given), concatenates them with START/END
FILE delimiters and optionally writes the result to a file.
"""

from __future__ import annotations

from typing import List, Optional

from mcp.server.fastmcp import FastMCP

from clients.github import GitHubClient
from config import HTTP_VERIFY
from core.paths import normalize_posix_relpath
from output.merge import files_for_paths, merge_files as merge_source_files
from output.writers import write_file
from sources.source_factory import create_text_source
from tools.list_files import build_filter


def register(mcp: FastMCP, *, github_client: Optional[GitHubClient] = None) -> None:
    @mcp.tool(name="merge_files")
    async def merge_files(
        source: str = ".",
        paths: Optional[List[str]] = None,
        output_path: Optional[str] = None,
        extra_text_extensions: Optional[List[str]] = None,
        extra_binary_extensions: Optional[List[str]] = None,
    ) -> str:
        """Merge files of a source and return the merged text.

        Params:
          - source: local directory path or GitHub URL (see list_files).
          - paths: relative paths to include; omitted means every indexed file.
            Paths that are not in the index are ignored.
          - output_path: when set, the merged text is also written there.
          - extra_text_extensions / extra_binary_extensions: see list_files.

        Returns:
          The merged text; files are ordered by path and non-UTF-8 files are
          skipped.
        """
        src = create_text_source(source, http_verify=HTTP_VERIFY, github_client=github_client)
        index = await src.index(build_filter(extra_text_extensions, extra_binary_extensions))

        wanted = [f.path for f in index] if paths is None else [normalize_posix_relpath(p) for p in paths]
        merged = await merge_source_files(src, files_for_paths(index, wanted))

        if output_path and output_path.strip():
            write_file(output_path, merged)
        return merged
