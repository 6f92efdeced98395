"""Error types raised by the require engine.

Only resolution failures are wrapped here. Errors raised while a module is
being evaluated propagate to the ``require`` caller unchanged.
"""

from __future__ import annotations

MODULE_NOT_FOUND = "MODULE_NOT_FOUND"


class RequireError(Exception):
    """Base class for require engine errors."""


class ModuleNotFound(RequireError):
    """A specifier could not be resolved to a loadable unit.

    Attributes:
        code: Stable machine-readable code, always ``MODULE_NOT_FOUND``
        specifier: The specifier exactly as it was requested
    """

    code = MODULE_NOT_FOUND

    def __init__(self, specifier: object):
        self.specifier = specifier
        shown = "<null>" if specifier is None else specifier
        super().__init__(f"Cannot find module '{shown}'")


class NavigationError(RequireError):
    """An empty path segment reached the folder walk."""
