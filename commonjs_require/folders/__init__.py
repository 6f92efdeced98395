"""Folder backends the resolver can walk."""

from .base import Folder
from .base import resolve_folder
from .filesystem import FilesystemFolder
from .resource import ResourceFolder

__all__ = [
    "Folder",
    "FilesystemFolder",
    "ResourceFolder",
    "resolve_folder",
]
