"""Filesystem capability used by the pipeline for temp artifacts."""

from __future__ import annotations

import fnmatch
from pathlib import Path
import time
from typing import Callable, Protocol, runtime_checkable


SPLIT_FOLDER = "split"
DECRYPTED_FOLDER = "decrypted"
HTML_FOLDER = "html"
TEXT_ORIGINAL_FOLDER = "txt/original"
TEXT_TRANSLATED_FOLDER = "txt/translate"

WORK_FOLDERS: tuple[str, ...] = (
    DECRYPTED_FOLDER,
    SPLIT_FOLDER,
    HTML_FOLDER,
    TEXT_ORIGINAL_FOLDER,
    TEXT_TRANSLATED_FOLDER,
)


@runtime_checkable
class Storage(Protocol):
    """Narrow file capability: the pipeline never touches the filesystem directly."""

    def folder_path(self, folder: str) -> Path:
        """Return *folder* under the work root, creating it."""

    def path_for(self, folder: str, name: str) -> Path:
        """Return the path of *name* inside *folder*, creating the folder."""

    def ensure_dir(self, path: Path) -> Path:
        """Create *path* (and parents) when missing."""

    def exists(self, path: Path) -> bool:
        """Return True when *path* is an existing regular file."""

    def read_text(self, path: Path) -> str:
        """Read a UTF-8 text artifact."""

    def write_text(self, path: Path, content: str) -> Path:
        """Write a UTF-8 text artifact, creating parent folders."""

    def delete(self, path: Path) -> bool:
        """Remove a file; return False when it did not exist."""

    def list_matching(self, folder: str, pattern: str) -> list[Path]:
        """List files in *folder* whose name matches a glob *pattern*."""

    def list_older_than(self, folder: str, max_age_seconds: float) -> list[Path]:
        """List files in *folder* not modified within *max_age_seconds*."""


class LocalStorage:
    """Storage rooted at a work directory on the local disk."""

    def __init__(self, root: str | Path, *, clock: Callable[[], float] = time.time) -> None:
        self._root = Path(root)
        self._clock = clock

    @property
    def root(self) -> Path:
        return self._root

    def folder(self, folder: str) -> Path:
        return self._root / folder

    def folder_path(self, folder: str) -> Path:
        return self.ensure_dir(self.folder(folder))

    def path_for(self, folder: str, name: str) -> Path:
        return self.folder_path(folder) / name

    def ensure_dir(self, path: Path) -> Path:
        path.mkdir(parents=True, exist_ok=True)
        return path

    def exists(self, path: Path) -> bool:
        return path.is_file()

    def read_text(self, path: Path) -> str:
        return path.read_text(encoding="utf-8", errors="replace")

    def write_text(self, path: Path, content: str) -> Path:
        self.ensure_dir(path.parent)
        path.write_text(content, encoding="utf-8")
        return path

    def delete(self, path: Path) -> bool:
        try:
            path.unlink()
        except FileNotFoundError:
            return False
        return True

    def list_matching(self, folder: str, pattern: str) -> list[Path]:
        directory = self.folder(folder)
        if not directory.is_dir():
            return []
        lowered = pattern.lower()
        return sorted(
            path
            for path in directory.iterdir()
            if path.is_file() and fnmatch.fnmatch(path.name.lower(), lowered)
        )

    def list_older_than(self, folder: str, max_age_seconds: float) -> list[Path]:
        directory = self.folder(folder)
        if not directory.is_dir():
            return []
        threshold = self._clock() - max_age_seconds
        expired: list[Path] = []
        for path in sorted(directory.iterdir()):
            if not path.is_file():
                continue
            try:
                modified = path.stat().st_mtime
            except FileNotFoundError:
                continue
            if modified < threshold:
                expired.append(path)
        return expired
