from __future__ import annotations

import asyncio
import os
from pathlib import Path
from typing import List, Union

from core.errors import (
    InvalidSourceError,
    NotTextFileError,
    PathNotFoundError,
    PermissionDeniedError,
    SourceIOError,
)
from core.extensions import is_text_path
from core.ignore_rules import IgnoreRules
from core.log import get_logger
from core.models import FileSystemOrigin, FilterConfig, SourceFile
from core.paths import is_safe_relpath


"""Local filesystem TextSource implementation.

Walks a directory tree depth-first, skipping hidden and backup entries,
paths matched by the root `.gitignore` and binary extensions. Blocking IO
runs in a worker thread so the event loop stays responsive.
"""

_log = get_logger("sources.local")


def _os_error(path: Union[str, Path], err: OSError) -> Exception:
    if isinstance(err, PermissionError):
        return PermissionDeniedError(str(path))
    if isinstance(err, FileNotFoundError):
        return PathNotFoundError(str(path))
    return SourceIOError(f"IO error on {path}: {err}")


def _skip_name(name: str) -> bool:
    return name.startswith(".") or name.endswith("~")


class FileSystemSource:
    # Local filesystem implementation of TextSource.

    def __init__(self, root_path: Union[str, Path]) -> None:
        base = Path(root_path).expanduser()
        try:
            exists = base.exists()
            is_dir = exists and base.is_dir()
        except OSError as e:
            raise _os_error(base, e) from e
        if not exists:
            raise PathNotFoundError(str(base))
        if not is_dir:
            raise InvalidSourceError(f"Not a directory: {base}")

        # Fail early if the root itself cannot be listed
        try:
            with os.scandir(base):
                pass
        except OSError as e:
            raise PermissionDeniedError(str(base)) from e

        self._base_path = base
        self._origin = FileSystemOrigin(base_path=base)
        self._ignore_rules = IgnoreRules.load(base)

    @property
    def origin(self) -> FileSystemOrigin:
        return self._origin

    def _collect(self, dir_path: Path, rel_dir: str, out: List[SourceFile], filter_config: FilterConfig) -> None:
        try:
            with os.scandir(dir_path) as it:
                entries = list(it)
        except OSError as e:
            raise _os_error(dir_path, e) from e

        for entry in entries:
            name = entry.name
            if _skip_name(name):
                continue

            rel_path = f"{rel_dir}/{name}" if rel_dir else name
            if self._ignore_rules.is_ignored(rel_path):
                continue
            if not is_text_path(rel_path, filter_config):
                continue

            try:
                # Symlinked directories are not followed to avoid cycles
                if entry.is_dir(follow_symlinks=False):
                    self._collect(Path(entry.path), rel_path, out, filter_config)
                elif entry.is_file():
                    out.append(SourceFile(path=rel_path, origin=self._origin))
            except OSError as e:
                raise _os_error(entry.path, e) from e

    async def index(self, filter_config: FilterConfig) -> List[SourceFile]:
        def _do() -> List[SourceFile]:
            out: List[SourceFile] = []
            self._collect(self._base_path, "", out, filter_config)
            return out

        files = await asyncio.to_thread(_do)
        _log.info("indexed %d files under %s", len(files), self._base_path)
        return files

    async def content(self, source_file: SourceFile) -> str:
        origin = source_file.origin
        if not isinstance(origin, FileSystemOrigin):
            raise InvalidSourceError(f"File {source_file.path} does not belong to a filesystem source")
        if not is_safe_relpath(source_file.path):
            raise InvalidSourceError(f"Invalid relative path: {source_file.path}")

        full_path = origin.base_path / source_file.path

        def _do() -> str:
            try:
                data = full_path.read_bytes()
            except OSError as e:
                raise _os_error(full_path, e) from e
            try:
                return data.decode("utf-8")
            except UnicodeDecodeError as e:
                raise NotTextFileError(str(full_path)) from e

        return await asyncio.to_thread(_do)
