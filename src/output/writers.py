from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

import pyperclip

from core.errors import OutputError
from core.log import get_logger
from core.models import OutputDestination

_log = get_logger("output")


def write_file(path: Union[str, Path], text: str) -> Path:
    raw = str(path or "").strip()
    if not raw:
        raise OutputError("Output file path is empty")

    out = Path(raw).expanduser()
    try:
        data = text.encode("utf-8")
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_bytes(data)
    except (OSError, UnicodeError) as e:
        raise OutputError(f"Error writing file {out}: {e}") from e

    _log.info("wrote %d characters to %s", len(text), out)
    return out


def copy_to_clipboard(text: str) -> None:
    try:
        pyperclip.copy(text)
    except (pyperclip.PyperclipException, UnicodeError) as e:
        raise OutputError(f"Clipboard is not available: {e}") from e
    _log.info("copied %d characters to the clipboard", len(text))


def deliver(destination: OutputDestination, text: str, output_path: Optional[str] = None) -> None:
    """Hand merged text to the file and/or clipboard writer.

    The file is written first; a file error means the clipboard is not touched.
    """
    if destination.writes_file:
        write_file(output_path or "", text)
    if destination.writes_clipboard:
        copy_to_clipboard(text)
