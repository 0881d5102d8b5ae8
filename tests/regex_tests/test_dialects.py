"""
Tests for the regex library behaviours each dialect relies on.

The extended dialect uses the POSIX flag, the fixed dialect escapes its
pattern, and the Perl dialect uses the library defaults.
"""

import regex


def test_posix_flag_prefers_longest_alternative() -> None:
    """Test regex.POSIX picks the longest of several matches at the same start."""
    assert regex.search("a|ab", "abc").group() == "a"
    assert regex.search("a|ab", "abc", regex.POSIX).group() == "ab"


def test_posix_flag_with_byte_patterns() -> None:
    """Test regex.POSIX also applies to byte patterns."""
    match = regex.search(b"x|xyz", b"__xyz", regex.POSIX)
    assert match is not None
    assert match.span() == (2, 5)


def test_posix_bracket_classes() -> None:
    """Test POSIX character classes inside brackets."""
    assert regex.findall("[[:digit:]]+", "a12b345") == ["12", "345"]
    assert regex.findall("[[:alpha:]]+", "ab1cd") == ["ab", "cd"]


def test_escape_text_pattern() -> None:
    """Test regex.escape makes metacharacters literal."""
    pattern = regex.escape("a.b*c")
    assert regex.search(pattern, "a.b*c") is not None
    assert regex.search(pattern, "axbbc") is None


def test_escape_bytes_pattern() -> None:
    """Test regex.escape keeps bytes as bytes."""
    pattern = regex.escape(b"1+1")
    assert isinstance(pattern, bytes)
    assert regex.sub(pattern, b"2", b"1+1=2") == b"2=2"


def test_angle_bracket_named_groups() -> None:
    """Test (?<name>...) named groups and groupindex metadata."""
    compiled = regex.compile(r"(?<year>\d{4})-(\d{2})")
    assert compiled.groups == 2
    assert compiled.groupindex["year"] == 1
    assert compiled.search("on 2024-05").group("year") == "2024"


def test_unset_group_reports_minus_one() -> None:
    """Test an optional group that did not participate has span (-1, -1)."""
    match = regex.search("a(x)?b", "ab")
    assert match is not None
    assert match.start(1) == -1
    assert match.end(1) == -1


def test_subn_with_callable_on_bytes() -> None:
    """Test subn accepts a callable replacement for byte subjects."""
    result, count = regex.subn(b"[0-9]", lambda m: b"<" + m.group() + b">", b"a1b2")
    assert result == b"a<1>b<2>"
    assert count == 2


def test_ignorecase_flag_with_posix() -> None:
    """Test IGNORECASE combines with POSIX."""
    match = regex.search("hello", "Say HELLO", regex.IGNORECASE | regex.POSIX)
    assert match is not None
    assert match.group() == "HELLO"
