import pytest

from clients import tokenizer
from core.errors import TokenizerError


class FakeEncoding:
    def __init__(self):
        self.calls = []

    def encode(self, text, *, allowed_special=()):
        self.calls.append((text, allowed_special))
        return text.split()


@pytest.fixture(autouse=True)
def _clear_cache():
    tokenizer._ENCODINGS.clear()
    yield
    tokenizer._ENCODINGS.clear()


def test_count_tokens_uses_named_encoding(monkeypatch):
    enc = FakeEncoding()
    requested = []

    def get_encoding(name):
        requested.append(name)
        return enc

    monkeypatch.setattr(tokenizer.tiktoken, "get_encoding", get_encoding)

    assert tokenizer.count_tokens("one two three") == 3
    assert tokenizer.count_tokens("<|endoftext|> four", encoding="o200k_base") == 2

    # Encoding is built once per name
    assert requested == ["o200k_base"]
    assert enc.calls[-1] == ("<|endoftext|> four", "all")


def test_count_tokens_empty_text(monkeypatch):
    monkeypatch.setattr(tokenizer.tiktoken, "get_encoding", lambda name: FakeEncoding())
    assert tokenizer.count_tokens("") == 0


def test_unknown_encoding_raises_tokenizer_error(monkeypatch):
    def get_encoding(name):
        raise ValueError(f"Unknown encoding {name}")

    monkeypatch.setattr(tokenizer.tiktoken, "get_encoding", get_encoding)

    with pytest.raises(TokenizerError):
        tokenizer.count_tokens("x", encoding="nope")
