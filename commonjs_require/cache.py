"""Per-installation module cache.

Maps resolved paths (and the requested locations that led to them) to loaded
modules. Entries are only ever added, except when evaluating a new module
fails and its half-built entry has to go.
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .module import Module

logger = logging.getLogger(__name__)


class ModuleCache:
    """Resolved-path to Module mapping for one installation."""

    def __init__(self):
        self._modules: dict[str, Module] = {}
        self._lock = threading.RLock()

    def get(self, path: str) -> Module | None:
        with self._lock:
            return self._modules.get(path)

    def add(self, path: str, module: Module) -> Module:
        """Insert ``module`` under ``path`` unless the path is already taken.

        Returns:
            The module stored under ``path`` after the call
        """
        with self._lock:
            existing = self._modules.get(path)
            if existing is not None:
                return existing
            self._modules[path] = module
            logger.debug(f"[require:cache] {path} -> {module.filename}")
            return module

    def discard(self, module: Module) -> None:
        """Drop every key that maps to ``module``."""
        with self._lock:
            stale = [path for path, cached in self._modules.items() if cached is module]
            for path in stale:
                del self._modules[path]
            if stale:
                logger.debug(f"[require:cache] dropped {module.filename}")

    def paths(self) -> list[str]:
        with self._lock:
            return list(self._modules)

    def modules(self) -> list[Module]:
        """Distinct cached modules in insertion order."""
        with self._lock:
            seen: dict[int, Module] = {}
            for module in self._modules.values():
                seen.setdefault(id(module), module)
            return list(seen.values())

    def __contains__(self, path: object) -> bool:
        with self._lock:
            return path in self._modules

    def __len__(self) -> int:
        with self._lock:
            return len(self._modules)

    def __repr__(self) -> str:
        return f"ModuleCache({len(self)} entries)"
