from __future__ import annotations

from dataclasses import dataclass
from typing import Optional
from urllib.parse import urlsplit

from core.errors import InvalidSourceError
from core.paths import normalize_posix_relpath


GITHUB_HOST = "github.com"
DEFAULT_BRANCH = "main"


@dataclass(frozen=True)
class GitHubLocation:
    owner: str
    repo: str
    branch: str = DEFAULT_BRANCH
    subpath: Optional[str] = None


def parse_github_url(url: str) -> GitHubLocation:
    # Accepts https://github.com/<owner>/<repo>[.git][/tree/<branch>[/<subpath...>]]
    raw = (url or "").strip()
    try:
        parts = urlsplit(raw)
    except ValueError as e:
        raise InvalidSourceError(f"Invalid GitHub URL: {raw}") from e

    if parts.scheme != "https" or (parts.hostname or "").lower() != GITHUB_HOST:
        raise InvalidSourceError(f"Not a GitHub URL: {raw}")

    segments = [seg for seg in parts.path.split("/") if seg]
    if len(segments) < 2:
        raise InvalidSourceError(f"GitHub URL must name an owner and a repository: {raw}")

    owner = segments[0]
    repo = segments[1]
    if repo.endswith(".git"):
        repo = repo[: -len(".git")]
    if not repo:
        raise InvalidSourceError(f"GitHub URL must name an owner and a repository: {raw}")

    branch = DEFAULT_BRANCH
    subpath: Optional[str] = None
    rest = segments[2:]
    if len(rest) >= 2 and rest[0] == "tree":
        branch = rest[1]
        if len(rest) > 2:
            subpath = "/".join(rest[2:])

    return GitHubLocation(owner=owner, repo=repo, branch=branch, subpath=subpath)


def normalize_path(path: str) -> str:
    # Keep GitHub paths stable and OS-independent:
    # - Convert "\" to "/"
    # - Drop leading "/" and repeated "./"
    # - Require a non-empty relative path
    path_clean = normalize_posix_relpath(path)
    if not path_clean:
        raise InvalidSourceError("path must be non-empty")
    return path_clean
