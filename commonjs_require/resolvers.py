"""Resolution strategies - turn a folder and a name into a loadable unit.

Resolution order at one location (first match wins):
1. DirectFile: ``name``, ``name.js``, ``name.json``
2. PackageMain: ``name/package.json`` main entry, resolved recursively
3. IndexJs: ``name/index.js``
4. IndexJson: ``name/index.json``

Every probe consults the module cache before touching storage, so a path
that has been loaded once is never read again.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING
from typing import ClassVar

from .errors import ModuleNotFound
from .evaluation import read_package_main
from .folders import Folder
from .folders import resolve_folder
from .paths import split_path

if TYPE_CHECKING:
    from .cache import ModuleCache
    from .handlers import HandlerRegistry
    from .module import Module

logger = logging.getLogger(__name__)

DIRECTORY_NAMES = (".", "..")


@dataclass
class ResolvedUnit:
    """A resolved loadable unit.

    Either ``module`` is set (cache hit) or ``source`` holds the text read
    from storage.
    """

    folder: Folder
    name: str
    path: str
    source: str | None = None
    module: Module | None = None
    requested: str | None = None
    strategy: str = ""


class ResolverStrategy:
    """One way of finding a unit for ``name`` inside ``folder``."""

    kind: ClassVar[str] = ""

    def attempt(self, resolver: Resolver, folder: Folder, name: str, entered: frozenset[str]) -> ResolvedUnit | None:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class DirectFile(ResolverStrategy):
    kind = "file"

    def attempt(self, resolver, folder, name, entered):
        if name in DIRECTORY_NAMES:
            return None
        for candidate in (name, name + ".js", name + ".json"):
            unit = resolver.probe(folder, candidate)
            if unit is not None:
                return unit
        return None


class _DirectoryStrategy(ResolverStrategy):
    """Strategies that treat ``name`` as a directory."""

    def attempt(self, resolver, folder, name, entered):
        directory = as_directory(folder, name)
        if directory is None:
            return None
        return self.attempt_directory(resolver, directory, entered)

    def attempt_directory(self, resolver: Resolver, directory: Folder, entered: frozenset[str]) -> ResolvedUnit | None:
        raise NotImplementedError


class PackageMain(_DirectoryStrategy):
    kind = "package-main"

    def attempt_directory(self, resolver, directory, entered):
        if directory.path in entered:
            logger.warning(f"[package:main] main entries loop back into {directory.path}")
            return None

        manifest = directory.get_file("package.json")
        if manifest is None:
            return None

        main = read_package_main(manifest)
        if main is None:
            return None

        try:
            segments = split_path(main)
        except ModuleNotFound:
            logger.warning(f"[package:main] Ignoring malformed main '{main}' in {directory.path}")
            return None

        logger.debug(f"[package:main] {directory.path}package.json -> {main}")
        return resolver.resolve_segments(directory, segments, entered | {directory.path})


class IndexJs(_DirectoryStrategy):
    kind = "index-js"

    def attempt_directory(self, resolver, directory, entered):
        return resolver.probe(directory, "index.js")


class IndexJson(_DirectoryStrategy):
    kind = "index-json"

    def attempt_directory(self, resolver, directory, entered):
        return resolver.probe(directory, "index.json")


DEFAULT_STRATEGIES: tuple[ResolverStrategy, ...] = (DirectFile(), PackageMain(), IndexJs(), IndexJson())


def as_directory(folder: Folder, name: str) -> Folder | None:
    if name == ".":
        return folder
    if name == "..":
        return folder.parent
    return folder.get_folder(name)


class Resolver:
    """Composes resolution strategies with first-success semantics."""

    def __init__(
        self,
        cache: ModuleCache,
        handlers: HandlerRegistry,
        strategies: tuple[ResolverStrategy, ...] = DEFAULT_STRATEGIES,
    ):
        self.cache = cache
        self.handlers = handlers
        self.strategies = strategies

    def resolve_segments(
        self, folder: Folder, segments: list[str], entered: frozenset[str] = frozenset()
    ) -> ResolvedUnit | None:
        """Resolve path segments starting at ``folder``.

        Args:
            folder: Folder the segments are relative to
            segments: Non-empty path segments, the last one naming the unit
            entered: Package directories already being resolved through

        Returns:
            ResolvedUnit, or None when no strategy finds anything
        """
        *directories, name = segments
        target = resolve_folder(folder, directories)
        if target is None:
            return None

        requested = None
        if name not in DIRECTORY_NAMES:
            requested = target.path + name
            cached = self.cache.get(requested)
            if cached is not None:
                logger.debug(f"[require:cache] hit {requested}")
                return ResolvedUnit(target, name, cached.filename, module=cached, requested=requested, strategy="cache")

        for strategy in self.strategies:
            unit = strategy.attempt(self, target, name, entered)
            if unit is not None:
                # The outermost request wins, it is the one worth aliasing
                unit.requested = requested
                if unit.module is None:
                    unit.strategy = strategy.kind
                return unit

        return None

    def probe(self, folder: Folder, name: str) -> ResolvedUnit | None:
        """Look up one concrete file, cache first."""
        path = folder.path + name
        cached = self.cache.get(path)
        if cached is not None:
            logger.debug(f"[require:cache] hit {path}")
            return ResolvedUnit(folder, name, path, module=cached, strategy="cache")

        if not self.handlers.supports(name):
            return None

        source = folder.get_file(name)
        if source is None:
            return None

        return ResolvedUnit(folder, name, path, source=source)
