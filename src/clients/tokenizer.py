from __future__ import annotations

from typing import Any, Dict

import tiktoken

from core.errors import TokenizerError
from core.log import get_logger

_log = get_logger("tokenizer")

# Encodings are expensive to build; keep one per name for the process
_ENCODINGS: Dict[str, Any] = {}


def _encoding(name: str) -> Any:
    enc = _ENCODINGS.get(name)
    if enc is None:
        try:
            enc = tiktoken.get_encoding(name)
        except Exception as e:  # tiktoken raises ValueError/OSError/requests errors
            raise TokenizerError(f"Cannot load tokenizer encoding '{name}': {e}") from e
        _ENCODINGS[name] = enc
    return enc


def count_tokens(text: str, *, encoding: str = "o200k_base") -> int:
    """Count tokens in `text`; special-token markers are encoded as special tokens."""
    _log.debug("counting tokens for %d characters", len(text or ""))
    enc = _encoding(encoding)
    return len(enc.encode(text or "", allowed_special="all"))
