from __future__ import annotations

from typing import List, Optional

from clients.github import GitHubClient, GitHubLocation
from core.errors import InvalidSourceError, NotTextFileError
from core.extensions import is_text_path
from core.log import get_logger
from core.models import FilterConfig, GitHubOrigin, SourceFile
from core.paths import normalize_posix_relpath


"""GitHub-backed TextSource implementation.

- The index is the recursive tree of the configured branch, blobs only.
- With a subpath, only files below it are kept and paths are relative to it.
- No ignore file is fetched; only the extension classifier applies.
"""

_log = get_logger("sources.github")


def _clean_subpath(subpath: Optional[str]) -> str:
    # Treat '', '.', '/' as the repository root
    s = normalize_posix_relpath(subpath or "").strip("/")
    return "" if s in ("", ".") else s


class GitHubSource:
    def __init__(self, *, client: GitHubClient, location: GitHubLocation) -> None:
        self._client = client
        self._location = location
        self._subpath = _clean_subpath(location.subpath)
        self._origin = GitHubOrigin(owner=location.owner, repo=location.repo, branch=location.branch)

    @property
    def subpath(self) -> str:
        return self._subpath

    @property
    def origin(self) -> GitHubOrigin:
        return self._origin

    def _relative(self, repo_path: str) -> Optional[str]:
        # Map a repository path to a subpath-relative one; None when outside
        path = normalize_posix_relpath(repo_path)
        if not path:
            return None
        if not self._subpath:
            return path
        prefix = self._subpath + "/"
        if not path.startswith(prefix):
            return None
        rel = path[len(prefix):]
        return rel or None

    async def index(self, filter_config: FilterConfig) -> List[SourceFile]:
        loc = self._location
        entries = await self._client.fetch_tree(owner=loc.owner, repo=loc.repo, branch=loc.branch)

        out: List[SourceFile] = []
        for item in entries:
            if item.get("type") != "blob":
                continue
            raw_path = item.get("path")
            if not isinstance(raw_path, str):
                continue

            rel_path = self._relative(raw_path)
            if rel_path is None:
                continue
            if not is_text_path(rel_path, filter_config):
                continue
            out.append(SourceFile(path=rel_path, origin=self._origin))

        _log.info(
            "indexed %d files from %s/%s@%s%s",
            len(out),
            loc.owner,
            loc.repo,
            loc.branch,
            f" ({self._subpath})" if self._subpath else "",
        )
        return out

    async def content(self, source_file: SourceFile) -> str:
        origin = source_file.origin
        if not isinstance(origin, GitHubOrigin):
            raise InvalidSourceError(f"File {source_file.path} does not belong to a GitHub source")

        rel = normalize_posix_relpath(source_file.path)
        repo_path = f"{self._subpath}/{rel}" if self._subpath else rel

        data = await self._client.fetch_raw(
            owner=origin.owner,
            repo=origin.repo,
            branch=origin.branch,
            path=repo_path,
        )
        try:
            return data.decode("utf-8")
        except UnicodeDecodeError as e:
            raise NotTextFileError(repo_path) from e
