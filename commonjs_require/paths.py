"""Specifier and path helpers.

Specifiers are split into non-empty segments and classified as prefixed
(``/``, ``./``, ``../``) or bare. Bare specifiers are only ever looked up
through ``node_modules`` folders.
"""

from __future__ import annotations

import os
import re

from .errors import ModuleNotFound

_SEPARATORS = re.compile(r"[/\\]")
_PREFIXES = ("/", "./", "../", ".\\", "..\\", "\\")


def split_path(specifier: str | None) -> list[str]:
    """Split a specifier into its path segments.

    Leading and trailing separators are ignored; an empty segment anywhere
    else is malformed.

    Args:
        specifier: Module specifier, e.g. ``./lib/foo`` or ``lodash/fp``

    Returns:
        Ordered non-empty segments

    Raises:
        ModuleNotFound: Specifier is missing, empty or malformed
    """
    if not specifier or not isinstance(specifier, str):
        raise ModuleNotFound(specifier)

    segments = _SEPARATORS.split(specifier)
    if segments and segments[0] == "":
        segments = segments[1:]
    if segments and segments[-1] == "":
        segments = segments[:-1]

    if not segments or "" in segments:
        raise ModuleNotFound(specifier)

    return segments


def is_prefixed(specifier: str) -> bool:
    """Check whether a specifier is relative/absolute rather than bare."""
    return specifier in (".", "..") or specifier.startswith(_PREFIXES)


def is_absolute(specifier: str) -> bool:
    return specifier.startswith(("/", "\\"))


def split_resolved_path(path: str) -> tuple[str, str]:
    """Split a resolved path at its final separator into (dirname, filename).

    ``/sub1/a.js`` gives ``("/sub1", "a.js")`` and ``/a.js`` gives ``("", "a.js")``.
    A path without any separator (the root sentinel) is all filename.
    """
    index = max(path.rfind("/"), path.rfind(os.sep))
    if index < 0:
        return "", path
    return path[:index], path[index + 1 :]
