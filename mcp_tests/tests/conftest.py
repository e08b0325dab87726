import pytest

from core.errors import NotTextFileError
from core.models import GitHubOrigin, SourceFile


class DummyMCP:
    """Minimal FastMCP stand-in to capture tool registration."""

    def __init__(self) -> None:
        self.tools = {}

    def tool(self, *, name: str):
        def _decorator(fn):
            self.tools[name] = fn
            return fn
        return _decorator


class FakeTextSource:
    """In-memory TextSource: path -> str content, or bytes for undecodable files."""

    def __init__(self, files=None, *, errors=None, origin=None):
        self.origin = origin or GitHubOrigin(owner="o", repo="r", branch="main")
        self._files = dict(files or {})
        self._errors = dict(errors or {})
        self.index_calls = []
        self.content_calls = []

    async def index(self, filter_config):
        self.index_calls.append(filter_config)
        return [SourceFile(path=p, origin=self.origin) for p in self._files]

    async def content(self, source_file):
        self.content_calls.append(source_file.path)
        if source_file.path in self._errors:
            raise self._errors[source_file.path]
        value = self._files[source_file.path]
        if isinstance(value, bytes):
            raise NotTextFileError(source_file.path)
        return value


@pytest.fixture
def dummy_mcp():
    return DummyMCP()
