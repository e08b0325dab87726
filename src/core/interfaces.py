"""Core protocol and interface definitions.

Defines the TextSource protocol implemented by the filesystem and GitHub
backends so the factory, merge engine and controller can treat them
uniformly.
"""

from __future__ import annotations

from typing import List, Protocol

from core.models import FilterConfig, Origin, SourceFile


class TextSource(Protocol):
    """Contract for any text source (local directory, GitHub repository)."""

    @property
    def origin(self) -> Origin:
        ...

    async def index(self, filter_config: FilterConfig) -> List[SourceFile]:
        ...

    async def content(self, source_file: SourceFile) -> str:
        ...
