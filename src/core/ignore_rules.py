"""Simplified `.gitignore` matcher.

Supported pattern forms:
- `/name` anchored to the root (the path itself or anything below it);
  `/*suffix` also matches any path ending with `suffix`.
- `pre*post` a single-wildcard prefix/suffix test on the whole path; the
  prefix and suffix may overlap ("ab*b" matches "ab").
- `name` or `dir/name` literal; matches the path itself or anything below
  it. A bare name (no '/') also matches any single path segment.
A trailing '/' is ignored. Negation ('!'), '**' and character classes are
not supported.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Tuple

from core.log import get_logger

IGNORE_FILE_NAME = ".gitignore"

_log = get_logger("ignore_rules")


def parse_lines(lines: Iterable[str]) -> Tuple[str, ...]:
    out = []
    for line in lines:
        trimmed = (line or "").strip()
        if not trimmed or trimmed.startswith("#"):
            continue
        out.append(trimmed)
    return tuple(out)


def match_pattern(rel_path: str, pattern: str) -> bool:
    """Test one raw pattern against a POSIX relative path."""
    trimmed = pattern[:-1] if pattern.endswith("/") else pattern
    if not trimmed:
        return False

    if trimmed.startswith("/"):
        anchored = trimmed[1:]
        if not anchored:
            return False
        if rel_path == anchored or rel_path.startswith(anchored + "/"):
            return True
        if anchored.startswith("*"):
            return rel_path.endswith(anchored.lstrip("*"))
        return False

    if "*" in trimmed:
        prefix, _, suffix = trimmed.partition("*")
        # Any further '*' in the suffix is matched literally
        return rel_path.startswith(prefix) and rel_path.endswith(suffix)

    if rel_path == trimmed or rel_path.startswith(trimmed + "/"):
        return True
    if "/" not in trimmed:
        return trimmed in rel_path.split("/")
    return False


@dataclass(frozen=True)
class IgnoreRules:
    patterns: Tuple[str, ...] = ()

    @classmethod
    def from_lines(cls, lines: Iterable[str]) -> "IgnoreRules":
        return cls(patterns=parse_lines(lines))

    @classmethod
    def load(cls, root: Path) -> "IgnoreRules":
        """Read `<root>/.gitignore`; a missing or unreadable file yields no rules."""
        ignore_path = root / IGNORE_FILE_NAME
        if not ignore_path.is_file():
            return cls()
        try:
            text = ignore_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            _log.warning("could not read %s: %s", ignore_path, e)
            return cls()
        rules = cls.from_lines(text.splitlines())
        _log.debug("loaded %d ignore patterns from %s", len(rules.patterns), ignore_path)
        return rules

    def is_ignored(self, rel_path: str) -> bool:
        return any(match_pattern(rel_path, p) for p in self.patterns)
