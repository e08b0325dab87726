from __future__ import annotations

from typing import Optional


class TextSourceError(Exception):
    """Base error for text sources and the merge pipeline."""


class InvalidSourceError(TextSourceError):
    """Raised for a malformed path/URL, or a file requested against the wrong backend."""

    def __init__(self, message: str = "Invalid source path or URL") -> None:
        super().__init__(message)


class PathNotFoundError(TextSourceError):
    """Raised when a directory or file does not exist."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Path not found: {path}")
        self.path = path


class PermissionDeniedError(TextSourceError):
    """Raised when a directory or file cannot be read because of permissions."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Permission denied: {path}")
        self.path = path


class SourceIOError(TextSourceError):
    """Raised for low-level disk failures."""


class NotTextFileError(TextSourceError):
    """Raised when file content is not valid UTF-8 text."""

    def __init__(self, path: str) -> None:
        super().__init__(f"File is not valid UTF-8 text: {path}")
        self.path = path


class NetworkError(TextSourceError):
    """Raised when an HTTP request fails at the transport level."""


class GitHubError(TextSourceError):
    """Raised when GitHub answers with an unexpected non-2xx status."""

    def __init__(self, message: str, *, status_code: Optional[int] = None) -> None:
        super().__init__(f"GitHub API error: {message}")
        self.message = message
        self.status_code = status_code


class RateLimitExceededError(TextSourceError):
    """Raised on HTTP 403 from GitHub."""

    def __init__(self) -> None:
        super().__init__("GitHub rate limit exceeded")


class RepoNotFoundError(TextSourceError):
    """Raised on HTTP 404 from the repository tree listing."""

    def __init__(self, repo: str = "") -> None:
        super().__init__(f"GitHub repository not found: {repo}" if repo else "GitHub repository not found")
        self.repo = repo


class OutputError(Exception):
    """Raised when the merged text cannot be written to its destination."""


class TokenizerError(Exception):
    """Raised when the tokenizer collaborator cannot count tokens."""
