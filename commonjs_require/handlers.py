"""Custom file handlers.

A handler compiles files with a given suffix into a Module, taking priority
over the built-in ``.js``/``.json`` handling for that suffix. Handlers are
registered per installation.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable
from collections.abc import Iterable
from typing import TYPE_CHECKING

import yaml

if TYPE_CHECKING:
    from .folders import Folder
    from .module import Module

logger = logging.getLogger(__name__)

# (folder, resolved_path, source, requesting_module) -> Module
Compiler = Callable[["Folder", str, str, "Module"], "Module | None"]


def builtin_kind(filename: str) -> str | None:
    """Classify a file for the built-in compilers.

    Returns:
        "json" for .json files, "script" for .js files and files without an
        extension, None for anything else
    """
    lowered = filename.lower()
    if lowered.endswith(".json"):
        return "json"
    if lowered.endswith(".js") or not os.path.splitext(lowered)[1]:
        return "script"
    return None


class HandlerRegistry:
    """Suffix to compiler mapping for one installation."""

    def __init__(self):
        self._compilers: dict[str, Compiler] = {}

    def register(self, suffixes: str | Iterable[str], compiler: Compiler) -> None:
        """Associate one or more file suffixes with a compiler.

        Args:
            suffixes: Suffix or suffixes such as ``.yaml``; matched case-insensitively
            compiler: Callable building the Module for a resolved file
        """
        if isinstance(suffixes, str):
            suffixes = [suffixes]
        for suffix in suffixes:
            if not suffix:
                raise ValueError("Handler suffix must not be empty")
            self._compilers[suffix.lower()] = compiler
            logger.debug(f"[require:handler] registered {suffix}")

    def find(self, filename: str) -> Compiler | None:
        """Return the compiler for the longest registered suffix of ``filename``."""
        lowered = filename.lower()
        matches = [suffix for suffix in self._compilers if lowered.endswith(suffix)]
        if not matches:
            return None
        return self._compilers[max(matches, key=len)]

    def supports(self, filename: str) -> bool:
        """Check whether a file with this name can be compiled at all."""
        return self.find(filename) is not None or builtin_kind(filename) is not None

    def suffixes(self) -> list[str]:
        return sorted(self._compilers)


class YamlHandler:
    """Compiles YAML documents into their parsed value, like JSON modules."""

    file_endings = (".yaml", ".yml")

    def __call__(self, folder: Folder, resolved_path: str, source: str, requesting_module: Module) -> Module:
        created = requesting_module.new_child(folder, resolved_path)
        created.exports = yaml.safe_load(source)
        created.loaded = True
        return created

    def install(self, registry: HandlerRegistry) -> None:
        registry.register(self.file_endings, self)


BUILTIN_HANDLERS: dict[str, Callable[[], YamlHandler]] = {
    "yaml": YamlHandler,
}
