"""Text vs. binary classification by file extension.

The built-in table lists formats that are never useful as merged text:
executables, archives, images, audio, video, office documents, databases,
fonts, bytecode and package formats.
"""

from __future__ import annotations

from typing import FrozenSet, Optional

from core.models import FilterConfig
from core.paths import file_extension


BINARY_EXTENSIONS: FrozenSet[str] = frozenset(
    {
        # Executables and objects
        "exe", "dll", "so", "dylib", "bin", "app", "msi", "sys", "com", "o", "obj", "class",
        # Archives and compressed
        "zip", "rar", "7z", "tar", "gz", "bz2", "xz", "iso", "dmg", "img", "tgz",
        # Images
        "jpg", "jpeg", "png", "gif", "bmp", "tiff", "webp", "ico", "svg", "eps", "raw", "cr2",
        "nef", "heic",
        # Audio
        "mp3", "wav", "ogg", "flac", "m4a", "wma", "aac", "mid", "midi", "aiff",
        # Video
        "mp4", "avi", "mkv", "mov", "wmv", "flv", "webm", "m4v", "mpg", "mpeg", "3gp",
        # Documents and publishing
        "pdf", "doc", "docx", "xls", "xlsx", "ppt", "pptx", "pages", "numbers", "key", "indd",
        "psd", "ai",
        # Databases and data
        "db", "sqlite", "mdb", "accdb", "dbf", "dat", "mdf", "sdf",
        # Fonts
        "ttf", "otf", "woff", "woff2", "eot",
        # Bytecode, packages, libraries, caches
        "pyc", "pyo", "pyd", "jar", "war", "deb", "rpm", "lib", "a", "pak", "cache", "idx",
        "mo", "gmo", "pdb",
    }
)


def is_text(extension: Optional[str], config: FilterConfig) -> bool:
    """Decide whether files with `extension` should be treated as text.

    Files without an extension are always text.
    """
    ext = (extension or "").strip().lstrip(".").lower()
    if not ext:
        return True
    if ext in config.extra_binary_extensions:
        return False
    if ext in config.extra_text_extensions:
        return True
    return ext not in BINARY_EXTENSIONS


def is_text_path(path: str, config: FilterConfig) -> bool:
    return is_text(file_extension(path), config)
