import pytest

from clients.github import GitHubClient
from core.errors import InvalidSourceError, PathNotFoundError
from core.models import FileSystemOrigin, GitHubOrigin
from sources.github_source import GitHubSource
from sources.local_source import FileSystemSource
from sources.source_factory import create_text_source


class FakeGitHubClient:
    pass


def test_create_text_source_local(tmp_path):
    src = create_text_source(str(tmp_path))
    assert isinstance(src, FileSystemSource)
    assert src.origin == FileSystemOrigin(base_path=tmp_path)


def test_create_text_source_strips_whitespace(tmp_path):
    src = create_text_source(f"  {tmp_path}  ")
    assert isinstance(src, FileSystemSource)


@pytest.mark.parametrize("value", ["", "   ", None])
def test_create_text_source_empty_is_invalid(value):
    with pytest.raises(InvalidSourceError):
        create_text_source(value)


def test_create_text_source_missing_local_path(tmp_path):
    with pytest.raises(PathNotFoundError):
        create_text_source(str(tmp_path / "missing"))


def test_create_text_source_github_uses_injected_client():
    injected = FakeGitHubClient()
    src = create_text_source(
        "https://github.com/octocat/Hello-World/tree/dev/docs",
        github_client=injected,
        http_verify=False,
    )
    assert isinstance(src, GitHubSource)
    assert src.origin == GitHubOrigin(owner="octocat", repo="Hello-World", branch="dev")
    assert src.subpath == "docs"
    # Access private field to verify DI in tests.
    assert getattr(src, "_client") is injected


def test_create_text_source_github_builds_client():
    src = create_text_source("https://github.com/octocat/Hello-World", github_timeout=3.0)
    client = getattr(src, "_client")
    assert isinstance(client, GitHubClient)
    assert client._timeout == 3.0


def test_create_text_source_malformed_github_url():
    with pytest.raises(InvalidSourceError):
        create_text_source("https://github.com/only-owner")
