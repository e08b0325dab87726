"""GitHub client module: list repository trees and fetch raw file bytes.

This module provides a small async client focused on the two anonymous,
read-only operations the GitHub backend needs: the recursive Git Trees
listing (api.github.com) and raw file downloads
(raw.githubusercontent.com). HTTP statuses are mapped onto the project's
error types here so the source layer only deals with domain errors.
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional
from urllib.parse import quote

import httpx

from core.errors import (
    GitHubError,
    NetworkError,
    PathNotFoundError,
    RateLimitExceededError,
    RepoNotFoundError,
)
from core.log import get_logger

from .inputs import normalize_path

_log = get_logger("github")


class GitHubClient:
    """Async GitHub client for tree listings and raw file content.

    Purpose:
      - fetch_tree(owner, repo, branch) -> List[dict] (entries with path/type)
      - fetch_raw(owner, repo, branch, path) -> bytes

    Key behavior:
      - Anonymous requests only (public repositories).
      - One request at a time per call; callers fetch files sequentially.
      - 403 -> RateLimitExceededError, 404 -> RepoNotFoundError (tree) or
        PathNotFoundError (raw), other non-2xx -> GitHubError.
    """

    BASE_URL = "https://api.github.com"
    RAW_BASE_URL = "https://raw.githubusercontent.com"
    JSON_ACCEPT = "application/vnd.github+json"

    def __init__(
        self,
        *,
        timeout: float = 20.0,
        verify: bool = True,
        user_agent: str = "text-merge-mcp",
    ) -> None:
        self._timeout = float(timeout)
        self._verify = bool(verify)
        self._user_agent = user_agent
        self._headers = self._build_headers()

    async def fetch_tree(self, *, owner: str, repo: str, branch: str) -> List[Dict[str, Any]]:
        """Return the recursive tree entries of `branch` (blobs and subtrees)."""
        url = f"/repos/{owner}/{repo}/git/trees/{quote(branch, safe='')}"

        async with self._create_client() as client:
            resp = await self._request(client, url, params={"recursive": "1"})

        if resp.status_code == 403:
            raise RateLimitExceededError()
        if resp.status_code == 404:
            raise RepoNotFoundError(f"{owner}/{repo}@{branch}")
        self._raise_for_status(resp)

        try:
            payload = resp.json()
        except ValueError as e:
            raise GitHubError(f"Invalid tree response: {e}", status_code=resp.status_code) from e

        tree = payload.get("tree") if isinstance(payload, dict) else None
        if not isinstance(tree, list):
            raise GitHubError("Tree response has no 'tree' list", status_code=resp.status_code)

        if payload.get("truncated"):
            # GitHub caps recursive listings; the index will be incomplete
            _log.warning("tree listing for %s/%s@%s was truncated by GitHub", owner, repo, branch)

        _log.debug("tree %s/%s@%s: %d entries", owner, repo, branch, len(tree))
        return [item for item in tree if isinstance(item, dict)]

    async def fetch_raw(self, *, owner: str, repo: str, branch: str, path: str) -> bytes:
        """Download the raw bytes of one file."""
        path_clean = normalize_path(path)
        url = f"{self.RAW_BASE_URL}/{owner}/{repo}/{quote(branch, safe='')}/{quote(path_clean)}"

        async with self._create_client() as client:
            resp = await self._request(client, url)

        if resp.status_code == 404:
            raise PathNotFoundError(path_clean)
        if resp.status_code == 403:
            raise RateLimitExceededError()
        self._raise_for_status(resp)
        return resp.content

    # --- HTTP helpers ---

    def _build_headers(self) -> dict[str, str]:
        return {
            "Accept": self.JSON_ACCEPT,
            "User-Agent": self._user_agent,
        }

    def _create_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.BASE_URL,
            headers=self._headers,
            timeout=self._timeout,
            verify=self._verify,
            follow_redirects=True,
        )

    def _raise_for_status(self, resp: httpx.Response) -> None:
        if resp.is_success:
            return
        body = (resp.text or "").strip() or resp.reason_phrase
        raise GitHubError(f"{resp.status_code} {body}", status_code=resp.status_code)

    async def _request(
        self,
        client: httpx.AsyncClient,
        url: str,
        *,
        params: Optional[Mapping[str, Any]] = None,
    ) -> httpx.Response:
        try:
            return await client.get(url, params=dict(params or {}))
        except httpx.HTTPError as e:
            raise NetworkError(f"GitHub request failed (GET {url}): {e}") from e
