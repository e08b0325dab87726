"""Merge engine: concatenate selected files into one delimited text blob.

Each included file is wrapped as

    --- START FILE: <path> ---
    <content>
    --- END FILE: <path> ---
    <blank line>

Files whose content is not UTF-8 are skipped; any other fetch error aborts
the whole merge. Content is fetched one file at a time.
"""

from __future__ import annotations

from typing import Iterable, List, Sequence

from core.errors import NotTextFileError
from core.interfaces import TextSource
from core.log import get_logger
from core.models import SourceFile

_log = get_logger("merge")


def format_file_block(path: str, content: str) -> str:
    return f"--- START FILE: {path} ---\n{content}\n--- END FILE: {path} ---\n\n"


def files_for_paths(index: Sequence[SourceFile], paths: Iterable[str]) -> List[SourceFile]:
    """Resolve selected paths against an index, sorted by path.

    Paths that are not in the index are dropped.
    """
    by_path = {f.path: f for f in index}
    wanted = set(paths)
    return [by_path[p] for p in sorted(wanted) if p in by_path]


async def merge_files(source: TextSource, files: Iterable[SourceFile]) -> str:
    parts: List[str] = []
    skipped = 0

    for source_file in files:
        try:
            content = await source.content(source_file)
        except NotTextFileError as e:
            skipped += 1
            _log.info("skipping non-text file %s: %s", source_file.path, e)
            continue
        parts.append(format_file_block(source_file.path, content))

    _log.info("merged %d files (%d skipped as non-text)", len(parts), skipped)
    return "".join(parts)
