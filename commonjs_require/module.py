"""Module records and the require algorithm.

``Module.require`` is the recursive entry point:

1. Split and classify the specifier (prefixed vs bare)
2. Prefixed: resolve only from the requester's folder (or the top folder for ``/``)
3. Bare: resolve through ``node_modules`` of the requester's folder, then of each ancestor
4. Reuse a cached module, or compile the unit, caching it before evaluation so
   that cyclic requires see the in-progress exports
5. Link the module as a child of the requester and return its exports
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING
from typing import Any

from .errors import ModuleNotFound
from .evaluation import ScriptObject
from .evaluation import parse_json
from .folders import Folder
from .handlers import builtin_kind
from .paths import is_absolute
from .paths import is_prefixed
from .paths import split_path
from .paths import split_resolved_path
from .resolvers import ResolvedUnit

if TYPE_CHECKING:
    from .runtime import Installation

logger = logging.getLogger(__name__)

NODE_MODULES = "node_modules"


class RequireFunction:
    """The ``require`` callable handed to hosted code.

    Calling it loads a module; ``require.main`` is the tree's main module and
    ``require.resolve`` reports a resolved path without loading anything.
    """

    def __init__(self, module: Module):
        self._module = module

    def __call__(self, specifier: str) -> Any:
        return self._module.require(specifier)

    @property
    def main(self) -> Module:
        return self._module.main

    def resolve(self, specifier: str) -> str:
        return self._module.resolve(specifier)

    def __repr__(self) -> str:
        return f"<require of {self._module.filename}>"


class Module:
    """One loaded unit and its place in the module tree.

    Attributes:
        filename: Resolved absolute path, or the root sentinel for the main module
        loaded: False until evaluation has completed
        parent: Module that first required this one (None for the main module)
        children: Modules required from this one, in call order, duplicates kept
        exports: Current exports value; evaluated code may replace it entirely
        main: The tree's main module, shared by every descendant
        folder: Folder the unit lives in; relative requires start here
    """

    def __init__(self, installation: Installation, folder: Folder, filename: str, parent: Module | None = None):
        self._installation = installation
        self.folder = folder
        self.filename = filename
        self.loaded = False
        self.parent = parent
        self.children: list[Module] = []
        self.exports: Any = ScriptObject()
        self.main: Module = parent.main if parent is not None else self
        self._require_function = RequireFunction(self)

    @property
    def id(self) -> str:
        return self.filename

    @property
    def require_function(self) -> RequireFunction:
        return self._require_function

    def new_child(self, folder: Folder, filename: str) -> Module:
        """Create a not-yet-loaded module required from this one."""
        return Module(self._installation, folder, filename, parent=self)

    def require(self, specifier: str) -> Any:
        """Load a module and return its exports.

        Args:
            specifier: Prefixed (``./x``, ``../x``, ``/x``) or bare (``pkg/x``) specifier

        Returns:
            The exports of the resolved module, identical for every requester

        Raises:
            ModuleNotFound: Nothing matched the specifier
        """
        unit = self._find(specifier)
        found = self._load(unit, specifier)
        self.children.append(found)
        return found.exports

    def resolve(self, specifier: str) -> str:
        """Return the path ``specifier`` resolves to, without loading it."""
        return self._find(specifier).path

    def _find(self, specifier: str) -> ResolvedUnit:
        segments = split_path(specifier)
        resolver = self._installation.resolver

        if is_prefixed(specifier):
            start = self.folder.top() if is_absolute(specifier) else self.folder
            unit = resolver.resolve_segments(start, segments)
        else:
            # Bare names only ever come from node_modules, nearest folder first
            unit = None
            current: Folder | None = self.folder
            while unit is None and current is not None:
                node_modules = current.get_folder(NODE_MODULES)
                if node_modules is not None:
                    unit = resolver.resolve_segments(node_modules, segments)
                current = current.parent

        if unit is None:
            logger.debug(f"[require:resolve] {specifier} from {self.filename} -> not found")
            raise ModuleNotFound(specifier)

        logger.debug(f"[require:resolve] {specifier} from {self.filename} -> {unit.path} ({unit.strategy})")
        return unit

    def _load(self, unit: ResolvedUnit, specifier: str) -> Module:
        found = unit.module
        if found is None:
            found = self._compile(unit)
            if found is None:
                raise ModuleNotFound(specifier)

        # Keep an entry for the requested location too, so the same request
        # later skips the directory walk and package.json parsing.
        if unit.requested and unit.requested != found.filename:
            self._installation.cache.add(unit.requested, found)

        return found

    def _compile(self, unit: ResolvedUnit) -> Module | None:
        compiler = self._installation.handlers.find(unit.name)
        if compiler is not None:
            created = compiler(unit.folder, unit.path, unit.source, self)
            if created is None:
                logger.warning(f"[require:load] handler for {unit.path} produced no module")
                return None
            return self._installation.cache.add(unit.path, created)

        kind = builtin_kind(unit.name)
        if kind == "script":
            return self._compile_script(unit)
        if kind == "json":
            return self._compile_json(unit)

        # Unsupported module type
        return None

    def _compile_script(self, unit: ResolvedUnit) -> Module:
        cache = self._installation.cache
        created = self.new_child(unit.folder, unit.path)
        # Cached before evaluation: a cyclic require finds the partial exports
        cache.add(unit.path, created)

        dirname, basename = split_resolved_path(unit.path)
        scope = dict(self._installation.scope)
        scope.update(
            {
                "module": created,
                "exports": created.exports,
                "require": created.require_function,
                "__filename": basename,
                "__dirname": dirname,
            }
        )

        logger.debug(f"[require:load] evaluating {unit.path}")
        try:
            created.exports = self._installation.evaluator.evaluate(unit.source, scope, unit.path)
        except Exception:
            cache.discard(created)
            raise

        created.loaded = True
        return created

    def _compile_json(self, unit: ResolvedUnit) -> Module:
        exports = parse_json(unit.source)
        created = self.new_child(unit.folder, unit.path)
        created.exports = exports
        created.loaded = True
        return self._installation.cache.add(unit.path, created)

    def __repr__(self) -> str:
        return f"Module({self.filename!r}, loaded={self.loaded})"
