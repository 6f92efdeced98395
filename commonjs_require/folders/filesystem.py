"""Filesystem-backed folders."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from .base import Folder

logger = logging.getLogger(__name__)


class FilesystemFolder(Folder):
    """Folder rooted on a directory of the local filesystem."""

    def __init__(self, root: Path, path: str, parent: Folder | None = None, encoding: str = "utf-8"):
        super().__init__(path, parent)
        self.root = root
        self.encoding = encoding

    @classmethod
    def create(cls, root: str | Path, encoding: str = "utf-8") -> FilesystemFolder:
        """Create the top folder of a filesystem installation.

        Args:
            root: Directory to expose; relative paths are made absolute
            encoding: Text encoding used to decode files

        Returns:
            FilesystemFolder with no parent
        """
        absolute = Path(root).absolute()
        path = str(absolute)
        if not path.endswith(os.sep):
            path += os.sep
        return cls(absolute, path, None, encoding)

    def get_file(self, name: str) -> str | None:
        file = self.root / name
        if not file.is_file():
            return None

        try:
            return file.read_text(encoding=self.encoding)
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"[folder:read] Could not read {file}: {e}")
            return None

    def get_folder(self, name: str) -> FilesystemFolder | None:
        folder = self.root / name
        if not folder.is_dir():
            return None

        return FilesystemFolder(folder, self.path + name + os.sep, self, self.encoding)
