"""Error message formatting for the command line.

Ensures errors always render with a useful message, and that coded errors
(``MODULE_NOT_FOUND``) show their code.
"""

from __future__ import annotations

from rich.markup import escape as _escape_markup


def format_error_message(e: BaseException, *, include_type: bool = True) -> str:
    """Format an exception into a useful display message.

    Examples:
        >>> format_error_message(ModuleNotFound("./x"))
        "ModuleNotFound [MODULE_NOT_FOUND]: Cannot find module './x'"

        >>> format_error_message(ValueError("invalid input"), include_type=False)
        'invalid input'
    """
    error_str = str(e) or "(no additional details)"
    if not include_type:
        return error_str

    label = type(e).__name__
    code = getattr(e, "code", None)
    if isinstance(code, str):
        label = f"{label} [{code}]"
    return f"{label}: {error_str}"


def escape_markup(value: object) -> str:
    """Escape a value for safe interpolation into Rich markup strings."""
    return _escape_markup(str(value))
