"""Configuration and environment helpers for the project.

Provides small helpers to read typed environment variables and exposes
project-level configuration constants used across the codebase (e.g.
HTTP_VERIFY, GITHUB_TIMEOUT, POLL_INTERVAL, default source/output and the
session extension overrides).
"""

from __future__ import annotations

import os
from typing import FrozenSet


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        return float(raw.strip())
    except ValueError:
        return default


def _env_set(name: str) -> FrozenSet[str]:
    # Comma separated, case-insensitive, leading dots tolerated (".txt" == "txt")
    raw = os.environ.get(name) or ""
    return frozenset(
        item.strip().lstrip(".").lower()
        for item in raw.split(",")
        if item.strip().lstrip(".")
    )


# Network / HTTP
HTTP_VERIFY = _env_bool("HTTP_VERIFY", True)
GITHUB_TIMEOUT = _env_float("GITHUB_TIMEOUT", 20.0)
GITHUB_USER_AGENT = os.environ.get("GITHUB_USER_AGENT", "text-merge-mcp").strip() or "text-merge-mcp"

# Session defaults
DEFAULT_SOURCE = os.environ.get("DEFAULT_SOURCE", ".").strip() or "."
DEFAULT_OUTPUT_PATH = os.environ.get("DEFAULT_OUTPUT_PATH", "merged.txt").strip()
POLL_INTERVAL = _env_float("POLL_INTERVAL", 0.1)

# Extension overrides applied on top of the built-in binary table
EXTRA_TEXT_EXTENSIONS = _env_set("EXTRA_TEXT_EXTENSIONS")
EXTRA_BINARY_EXTENSIONS = _env_set("EXTRA_BINARY_EXTENSIONS")

# Tokenizer
TOKENIZER_ENCODING = os.environ.get("TOKENIZER_ENCODING", "o200k_base").strip() or "o200k_base"

# Logging
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").strip().upper() or "INFO"
