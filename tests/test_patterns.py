"""Tests for pattern compilation and caching."""

import pytest
import regex

from pipegrep import patterns
from pipegrep.config import get_settings
from pipegrep.types import Dialect


@pytest.mark.parametrize(
    ("perl", "fixed", "expected"),
    [
        (False, False, Dialect.EXTENDED),
        (True, False, Dialect.PERL),
        (False, True, Dialect.FIXED),
        (True, True, Dialect.FIXED),
    ],
)
def test_resolve_dialect(perl: bool, fixed: bool, expected: Dialect) -> None:
    """fixed overrides perl, and neither means extended."""
    assert patterns.resolve_dialect(perl=perl, fixed=fixed) is expected


def test_fixed_patterns_are_literal_and_case_sensitive() -> None:
    """FIXED escapes metacharacters and ignores ignore_case."""
    compiled = patterns.compile_pattern("a+b", Dialect.FIXED, ignore_case=True)
    assert compiled.search("xa+by") is not None
    assert compiled.search("aab") is None
    assert compiled.search("A+B") is None


def test_extended_patterns_use_posix_matching() -> None:
    """EXTENDED compiles with the POSIX flag."""
    compiled = patterns.compile_pattern("a|ab", Dialect.EXTENDED)
    assert compiled.flags & regex.POSIX
    assert compiled.search("ab").group() == "ab"


def test_ignore_case_applies_to_regex_dialects() -> None:
    """ignore_case is honoured by PERL and EXTENDED."""
    assert patterns.compile_pattern("abc", Dialect.PERL, ignore_case=True).search("ABC") is not None
    assert patterns.compile_pattern("abc", Dialect.EXTENDED, ignore_case=True).search("ABC") is not None


def test_byte_patterns_compile_for_bytes() -> None:
    """Byte patterns produce byte-matching objects."""
    compiled = patterns.compile_pattern(b"\\d", Dialect.PERL)
    assert compiled.search(b"a1") is not None


def test_cache_hits_and_reset() -> None:
    """Repeated compilations hit the cache; reset_cache starts afresh."""
    patterns.reset_cache(8)
    patterns.compile_pattern("x+", Dialect.PERL)
    patterns.compile_pattern("x+", Dialect.PERL)
    info = patterns._cached_compile.cache_info()  # noqa: SLF001
    assert info.hits == 1
    assert info.maxsize == 8

    patterns.reset_cache(0)
    assert patterns._cached_compile.cache_info().currsize == 0  # noqa: SLF001
    patterns.reset_cache(get_settings().pattern_cache_size)


def test_malformed_pattern_raises() -> None:
    """regex.error propagates from compilation."""
    with pytest.raises(regex.error):
        patterns.compile_pattern("(", Dialect.PERL)
