"""Immutable dataclasses describing files, origins and filter settings.

Includes the per-file model (SourceFile) tagged with the backend that
produced it, the session-wide extension overrides (FilterConfig) and the
output destination choices used by the merge step.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Optional, Set, Union


@dataclass(frozen=True)
class FileSystemOrigin:
    base_path: Path


@dataclass(frozen=True)
class GitHubOrigin:
    owner: str
    repo: str
    branch: str


Origin = Union[FileSystemOrigin, GitHubOrigin]


@dataclass(frozen=True)
class SourceFile:
    """One file of an index snapshot.

    `path` is POSIX style and relative to the backend root (or GitHub
    subpath). Equality is by (path, origin).
    """

    path: str
    origin: Origin


def _normalize_extensions(values: Optional[Iterable[str]]) -> Set[str]:
    out: Set[str] = set()
    for raw in values or ():
        ext = (raw or "").strip().lstrip(".").lower()
        if ext:
            out.add(ext)
    return out


@dataclass
class FilterConfig:
    """Per-session extension overrides.

    Binary overrides take precedence over text overrides, which take
    precedence over the built-in binary table.
    """

    extra_text_extensions: Set[str] = field(default_factory=set)
    extra_binary_extensions: Set[str] = field(default_factory=set)

    @classmethod
    def from_iterables(
        cls,
        text: Optional[Iterable[str]] = None,
        binary: Optional[Iterable[str]] = None,
    ) -> "FilterConfig":
        return cls(
            extra_text_extensions=_normalize_extensions(text),
            extra_binary_extensions=_normalize_extensions(binary),
        )

    def copy(self) -> "FilterConfig":
        # Snapshot used for one index run so later edits don't leak into it
        return FilterConfig(
            extra_text_extensions=set(self.extra_text_extensions),
            extra_binary_extensions=set(self.extra_binary_extensions),
        )


class OutputDestination(enum.Enum):
    FILE_AND_CLIPBOARD = "file_and_clipboard"
    FILE = "file"
    CLIPBOARD = "clipboard"

    @property
    def writes_file(self) -> bool:
        return self in (OutputDestination.FILE_AND_CLIPBOARD, OutputDestination.FILE)

    @property
    def writes_clipboard(self) -> bool:
        return self in (OutputDestination.FILE_AND_CLIPBOARD, OutputDestination.CLIPBOARD)
