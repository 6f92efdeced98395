"""Folder abstraction the resolver navigates.

A Folder is a cheap, value-like node: a canonical absolute path ending with a
separator, a non-owning link to its parent, and lookups for the files and
subfolders it contains. Parent links always point toward the root.
"""

from __future__ import annotations

import logging
from abc import ABC
from abc import abstractmethod
from collections.abc import Iterable

from ..errors import NavigationError

logger = logging.getLogger(__name__)


class Folder(ABC):
    """Storage node exposing file and subfolder lookup."""

    def __init__(self, path: str, parent: Folder | None = None):
        self.path = path
        self.parent = parent

    @abstractmethod
    def get_file(self, name: str) -> str | None:
        """Return the text content of file ``name``, or None if absent."""

    @abstractmethod
    def get_folder(self, name: str) -> Folder | None:
        """Return subfolder ``name``, or None if absent."""

    def get_parent(self) -> Folder | None:
        return self.parent

    def get_path(self) -> str:
        return self.path

    def top(self) -> Folder:
        """Return the topmost ancestor of this folder."""
        current = self
        while current.parent is not None:
            current = current.parent
        return current

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.path})"


def resolve_folder(folder: Folder, segments: Iterable[str]) -> Folder | None:
    """Walk from ``folder`` through directory segments.

    ``.`` stays put, ``..`` moves to the parent and any other segment enters
    the named subfolder. The walk fails as soon as a step has nowhere to go,
    including ``..`` at the top folder.

    Args:
        folder: Starting folder
        segments: Directory segments, excluding the final file name

    Returns:
        The folder reached, or None if the walk got stuck

    Raises:
        NavigationError: An empty segment was passed in
    """
    current: Folder | None = folder
    for name in segments:
        if name == "":
            raise NavigationError(f"Empty path segment while navigating from {folder.path}")
        if name == ".":
            continue
        if name == "..":
            current = current.parent
        else:
            current = current.get_folder(name)

        # Whenever we get stuck we bail out
        if current is None:
            logger.debug(f"[folder:walk] no folder for '{name}' below {folder.path}")
            return None

    return current
