"""Compiles patterns for each dialect and caches the compiled objects."""

import logging
from functools import lru_cache
from typing import Any

import regex

from .config import get_settings
from .types import Dialect

__all__ = ["compile_pattern", "reset_cache", "resolve_dialect"]

logger = logging.getLogger(__name__)


def resolve_dialect(*, perl: bool, fixed: bool) -> Dialect:
    """Pick the dialect selected by the `perl` and `fixed` switches; `fixed` wins."""
    if fixed:
        return Dialect.FIXED
    if perl:
        return Dialect.PERL
    return Dialect.EXTENDED


def _compile(pattern: str | bytes, dialect: Dialect, ignore_case: bool) -> Any:  # noqa: ANN401, FBT001
    """Compile `pattern` without consulting the cache."""
    logger.debug("Compiling %s pattern %r (ignore_case=%s)", dialect.value, pattern, ignore_case)
    if dialect is Dialect.FIXED:
        # Literal text never honours case folding.
        return regex.compile(regex.escape(pattern))

    flags = regex.IGNORECASE if ignore_case else 0
    if dialect is Dialect.EXTENDED:
        # POSIX 1003.2 semantics: leftmost-longest alternation.
        flags |= regex.POSIX
    return regex.compile(pattern, flags)


_cached_compile = lru_cache(maxsize=get_settings().pattern_cache_size)(_compile)


def reset_cache(maxsize: int) -> None:
    """Rebuild the compiled-pattern cache with room for `maxsize` entries."""
    global _cached_compile  # noqa: PLW0603
    _cached_compile = lru_cache(maxsize=maxsize)(_compile)
    logger.debug("Pattern cache reset (maxsize=%d)", maxsize)


def compile_pattern(pattern: str | bytes, dialect: Dialect, *, ignore_case: bool = False) -> Any:  # noqa: ANN401
    """
    Return a compiled `regex` pattern object for the given dialect.

    Byte patterns produce byte-matching objects; text patterns produce
    Unicode-matching ones.

    Args:
        pattern: The pattern text, already encoded when matching bytes.
        dialect: How to interpret the pattern.
        ignore_case: Whether to match case-insensitively. Ignored for FIXED.

    Returns:
        The compiled pattern.

    Raises:
        regex.error: If the pattern is malformed for the dialect.

    """
    return _cached_compile(pattern, dialect, ignore_case)
