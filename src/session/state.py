"""Session state owned by the controller.

Holds the current source target, the live backend, the last index
snapshot and the selection sets a front end mutates. Selections are keyed
by path; the extension set additionally carries the "*" marker meaning
"every extension selected".
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Set

from core.interfaces import TextSource
from core.models import FilterConfig, OutputDestination, SourceFile
from core.paths import file_extension
from output.merge import files_for_paths

ALL_EXTENSIONS = "*"


def extension_key(path: str) -> str:
    # Files without an extension are grouped under ""
    return file_extension(path) or ""


@dataclass
class SessionState:
    source_path: str = "."
    output_path: str = "merged.txt"
    destination: OutputDestination = OutputDestination.FILE_AND_CLIPBOARD
    filter_config: FilterConfig = field(default_factory=FilterConfig)

    source: Optional[TextSource] = None
    files: List[SourceFile] = field(default_factory=list)
    selected_files: Set[str] = field(default_factory=set)
    selected_extensions: Set[str] = field(default_factory=set)

    last_error: Optional[Exception] = None
    last_output: Optional[str] = None
    last_token_count: Optional[int] = None

    # --- index lifecycle ---

    def replace_index(self, source: TextSource, files: List[SourceFile]) -> None:
        self.source = source
        self.files = list(files)
        self.last_error = None
        self.reset_selection()

    def clear_index(self, error: Optional[Exception] = None) -> None:
        self.source = None
        self.files = []
        self.last_error = error
        self.reset_selection()

    def reset_selection(self) -> None:
        """Select every file and every extension of the current index."""
        self.selected_files = {f.path for f in self.files}
        self.selected_extensions = set(self.extensions())

    # --- queries ---

    def extensions(self) -> List[str]:
        return [ALL_EXTENSIONS] + sorted({extension_key(f.path) for f in self.files})

    def paths(self) -> List[str]:
        return sorted(f.path for f in self.files)

    def selected_source_files(self) -> List[SourceFile]:
        return files_for_paths(self.files, self.selected_files)

    # --- selection edits ---

    def _paths_with_extension(self, ext: str) -> List[str]:
        return [f.path for f in self.files if extension_key(f.path) == ext]

    def _sync_all_marker(self) -> None:
        real = set(self.extensions()) - {ALL_EXTENSIONS}
        if real <= self.selected_extensions:
            self.selected_extensions.add(ALL_EXTENSIONS)
        else:
            self.selected_extensions.discard(ALL_EXTENSIONS)

    def toggle_file(self, path: str) -> None:
        if path not in {f.path for f in self.files}:
            return

        ext = extension_key(path)
        if path in self.selected_files:
            self.selected_files.discard(path)
            self.selected_extensions.discard(ext)
        else:
            self.selected_files.add(path)
            if all(p in self.selected_files for p in self._paths_with_extension(ext)):
                self.selected_extensions.add(ext)
        self._sync_all_marker()

    def toggle_extension(self, ext: str) -> None:
        if ext == ALL_EXTENSIONS:
            if ALL_EXTENSIONS in self.selected_extensions:
                self.selected_extensions.clear()
                self.selected_files.clear()
            else:
                self.reset_selection()
            return

        if ext not in self.extensions():
            return

        if ext in self.selected_extensions:
            self.selected_extensions.discard(ext)
            self.selected_files.difference_update(self._paths_with_extension(ext))
        else:
            self.selected_extensions.add(ext)
            self.selected_files.update(self._paths_with_extension(ext))
        self._sync_all_marker()
