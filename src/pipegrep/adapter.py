"""
Subject-first versions of the grep family.

Each function takes the subject first and the pattern second, so it can be
dropped into a pipe-style chain where the running value becomes the first
argument. The call is forwarded to the same-named function in
`pipegrep.engine` with the classic argument order, every flag passed through
unchanged, and the engine's result (or exception) returned as is.
"""

from typing import Any

from . import engine
from .types import MatchData

__all__ = ["gregexpr", "grep", "grepl", "gsub", "regexec", "regexpr", "sub"]


def grep(
    x: Any,
    pattern: Any,
    ignore_case: bool = False,
    perl: bool = False,
    value: bool = False,
    fixed: bool = False,
    use_bytes: bool = False,
    invert: bool = False,
) -> list[Any]:
    """
    Find the elements of `x` that match `pattern`.

    Example:
        >>> grep(["apple", "banana", "cherry"], "an")
        [2]

    """
    return engine.grep(pattern, x, ignore_case, perl, value, fixed, use_bytes, invert)


def grepl(
    x: Any,
    pattern: Any,
    ignore_case: bool = False,
    perl: bool = False,
    fixed: bool = False,
    use_bytes: bool = False,
) -> list[bool | None] | bool | None:
    """Tell whether each element of `x` matches `pattern`."""
    return engine.grepl(pattern, x, ignore_case, perl, fixed, use_bytes)


def sub(
    x: Any,
    pattern: Any,
    replacement: Any,
    ignore_case: bool = False,
    perl: bool = False,
    fixed: bool = False,
    use_bytes: bool = False,
) -> Any:
    """Replace the first match of `pattern` in each element of `x`."""
    return engine.sub(pattern, replacement, x, ignore_case, perl, fixed, use_bytes)


def gsub(
    x: Any,
    pattern: Any,
    replacement: Any,
    ignore_case: bool = False,
    perl: bool = False,
    fixed: bool = False,
    use_bytes: bool = False,
) -> Any:
    """
    Replace every match of `pattern` in each element of `x`.

    Example:
        >>> gsub("a1b2c3", "[0-9]", "#")
        'a#b#c#'

    """
    return engine.gsub(pattern, replacement, x, ignore_case, perl, fixed, use_bytes)


def regexpr(
    text: Any,
    pattern: Any,
    ignore_case: bool = False,
    perl: bool = False,
    fixed: bool = False,
    use_bytes: bool = False,
) -> MatchData:
    """Locate the first match of `pattern` in each element of `text`."""
    return engine.regexpr(pattern, text, ignore_case, perl, fixed, use_bytes)


def gregexpr(
    text: Any,
    pattern: Any,
    ignore_case: bool = False,
    perl: bool = False,
    fixed: bool = False,
    use_bytes: bool = False,
) -> list[MatchData]:
    """Locate every match of `pattern` in each element of `text`."""
    return engine.gregexpr(pattern, text, ignore_case, perl, fixed, use_bytes)


def regexec(
    text: Any,
    pattern: Any,
    ignore_case: bool = False,
    fixed: bool = False,
    use_bytes: bool = False,
) -> list[MatchData]:
    """Locate the first match of `pattern` and its sub-expressions in each element of `text`."""
    return engine.regexec(pattern, text, ignore_case, perl=False, fixed=fixed, use_bytes=use_bytes)
