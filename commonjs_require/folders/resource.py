"""Folders backed by resources bundled inside an importable package."""

from __future__ import annotations

import logging
from importlib import resources
from importlib.resources.abc import Traversable

from .base import Folder

logger = logging.getLogger(__name__)


class ResourceFolder(Folder):
    """Folder over ``importlib.resources`` traversables.

    Display paths start at ``/`` regardless of where the package lives, so
    resolved module ids stay stable across installs.
    """

    def __init__(self, node: Traversable, path: str, parent: Folder | None = None, encoding: str = "utf-8"):
        super().__init__(path, parent)
        self.node = node
        self.encoding = encoding

    @classmethod
    def create(cls, package: str, path: str = "", encoding: str = "utf-8") -> ResourceFolder:
        """Create the top folder for resources of ``package``.

        Args:
            package: Importable package name holding the resources
            path: Optional sub-directory inside the package, ``/`` separated
            encoding: Text encoding used to decode resources
        """
        node = resources.files(package)
        for part in path.strip("/").split("/"):
            if part:
                node = node.joinpath(part)
        return cls(node, "/", None, encoding)

    def get_file(self, name: str) -> str | None:
        resource = self.node.joinpath(name)
        if not resource.is_file():
            return None

        try:
            return resource.read_text(encoding=self.encoding)
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"[folder:read] Could not read resource {self.path}{name}: {e}")
            return None

    def get_folder(self, name: str) -> ResourceFolder | None:
        child = self.node.joinpath(name)
        if not child.is_dir():
            return None

        return ResourceFolder(child, self.path + name + "/", self, self.encoding)
