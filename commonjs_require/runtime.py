"""Installation surface - bind ``require``/``module``/``exports`` into a scope.

Each installation owns its module cache, handler registry and main module.
Several installations may share one evaluator and one backing storage
without seeing each other's modules.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from collections.abc import MutableMapping
from typing import Any

from .cache import ModuleCache
from .evaluation import Evaluator
from .evaluation import PythonScriptEvaluator
from .folders import Folder
from .handlers import Compiler
from .handlers import HandlerRegistry
from .module import Module
from .module import RequireFunction
from .resolvers import Resolver

logger = logging.getLogger(__name__)

MAIN_ID = "<main>"


class Installation:
    """One isolated require context rooted at a folder."""

    def __init__(
        self,
        folder: Folder,
        scope: MutableMapping[str, Any] | None = None,
        evaluator: Evaluator | None = None,
    ):
        self.folder = folder
        self.scope: MutableMapping[str, Any] = scope if scope is not None else {}
        self.evaluator: Evaluator = evaluator if evaluator is not None else PythonScriptEvaluator()
        self.cache = ModuleCache()
        self.handlers = HandlerRegistry()
        self.resolver = Resolver(self.cache, self.handlers)

        self.main = Module(self, folder, MAIN_ID)
        self.main.loaded = True

        self.scope["require"] = self.main.require_function
        self.scope["module"] = self.main
        self.scope["exports"] = self.main.exports

    @property
    def require(self) -> RequireFunction:
        return self.main.require_function

    def register_handler(self, suffixes: str | Iterable[str], compiler: Compiler) -> None:
        """Compile files with these suffixes through ``compiler``.

        Registered suffixes take priority over the built-in ``.js``/``.json``
        handling.
        """
        self.handlers.register(suffixes, compiler)

    def __repr__(self) -> str:
        return f"Installation({self.folder.path}, {len(self.cache)} cached)"


def install(
    folder: Folder,
    scope: MutableMapping[str, Any] | None = None,
    *,
    evaluator: Evaluator | None = None,
    handlers: dict[str, Compiler] | None = None,
) -> Installation:
    """Install a main module rooted at ``folder`` into ``scope``.

    Args:
        folder: Top folder modules are resolved from
        scope: Mapping receiving ``require``, ``module`` and ``exports``; its other
            entries are copied into every evaluated module's scope
        evaluator: Evaluation bridge (default: PythonScriptEvaluator)
        handlers: Optional suffix to compiler mapping to register

    Returns:
        The Installation handle
    """
    installation = Installation(folder, scope, evaluator)
    for suffix, compiler in (handlers or {}).items():
        installation.register_handler(suffix, compiler)

    logger.debug(f"[require:install] main module rooted at {folder.path}")
    return installation
