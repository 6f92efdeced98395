"""Evaluation and JSON bridges.

The require engine never runs code itself. Script sources are handed to an
``Evaluator`` together with a fresh scope, and the evaluator reports the final
exports value. ``PythonScriptEvaluator`` is the bridge used when the host does
not plug in its own engine.
"""

from __future__ import annotations

import json
import logging
from typing import Any
from typing import Protocol

logger = logging.getLogger(__name__)


class ScriptObject(dict):
    """Dictionary whose keys are also reachable as attributes.

    Used as the initial ``exports`` value and for parsed JSON objects, so hosted
    code can write ``exports.name = value`` and callers can read either
    ``exports.name`` or ``exports["name"]``.
    """

    def __getattr__(self, name: str) -> Any:
        try:
            return self[name]
        except KeyError:
            raise AttributeError(name) from None

    def __setattr__(self, name: str, value: Any) -> None:
        self[name] = value

    def __delattr__(self, name: str) -> None:
        try:
            del self[name]
        except KeyError:
            raise AttributeError(name) from None

    def __repr__(self) -> str:
        return f"ScriptObject({dict.__repr__(self)})"


class Evaluator(Protocol):
    """Executes module source text against a prepared scope."""

    def evaluate(self, source: str, scope: dict[str, Any], filename: str) -> Any:
        """Run ``source`` and return the module's final exports value.

        The scope holds ``module``, ``exports``, ``require``, ``__filename`` and
        ``__dirname``. Code may replace ``module.exports`` wholesale.
        """
        ...


class PythonScriptEvaluator:
    """Runs module sources as Python code.

    ``exports.answer = 42`` and ``module.exports = require('./other')`` are
    valid Python, so simple CommonJS-style modules run as-is.
    """

    def evaluate(self, source: str, scope: dict[str, Any], filename: str) -> Any:
        code = compile(source, filename, "exec")
        exec(code, scope)
        return scope["module"].exports

    def __repr__(self) -> str:
        return "PythonScriptEvaluator()"


def parse_json(text: str) -> Any:
    """Parse JSON text, turning objects into ScriptObjects.

    Raises:
        json.JSONDecodeError: Text is not valid JSON
    """
    return json.loads(text, object_hook=ScriptObject)


def read_package_main(text: str) -> str | None:
    """Extract the ``main`` entry of a package.json document.

    Returns:
        The main path when it is a non-empty string, None otherwise
    """
    try:
        manifest = json.loads(text)
    except ValueError as e:
        logger.warning(f"[package:main] Ignoring malformed package.json: {e}")
        return None

    if not isinstance(manifest, dict):
        logger.warning("[package:main] Ignoring package.json that is not an object")
        return None

    main = manifest.get("main")
    if main is None:
        return None
    if not isinstance(main, str) or not main.strip():
        logger.warning(f"[package:main] Ignoring non-string main entry: {main!r}")
        return None

    return main
