from __future__ import annotations

import posixpath
from typing import Optional, Tuple

"""
Path utilities used across the project.

Provides consistent POSIX-style normalization, segment splitting and
extension lookup used by the sources, the ignore matcher and the
selection state.
"""


def normalize_posix_relpath(p: str) -> str:
    """Normalize a user path to a clean POSIX relative path.

    Converts backslashes to '/', trims whitespace, removes leading '/'
    and repeated './' markers.
    """
    s = (p or "").strip()
    s = s.replace("\\", "/")        # Unify path separators across OSes.
    s = s.lstrip("/")               # Prevent accidental absolute paths.
    while s.startswith("./"):       # Drop repeated "./" prefixes.
        s = s[2:]
    return s


def split_posix(p: str) -> Tuple[str, ...]:
    """Split a POSIX path into non-empty segments."""
    s = (p or "").strip().replace("\\", "/").strip("/")
    if not s:
        return tuple()
    return tuple(seg for seg in s.split("/") if seg)


def is_safe_relpath(p: str) -> bool:
    """True for a non-empty relative path without '..' segments."""
    parts = split_posix(p)
    return bool(parts) and ".." not in parts and not (p or "").startswith("/")


def file_extension(p: str) -> Optional[str]:
    """Lowercased extension of the last segment, without the dot.

    Returns None when there is none; a leading dot alone (".env") is not an
    extension.
    """
    name = posixpath.basename((p or "").replace("\\", "/"))
    _, ext = posixpath.splitext(name)
    if not ext or ext == ".":
        return None
    return ext[1:].lower()
