"""Tests for replacement template parsing."""

import regex

from pipegrep.replacement import compile_replacement


def _expand(pattern: str | bytes, template: str | bytes, subject: str | bytes, **kwargs: bool) -> str | bytes:
    return regex.sub(pattern, compile_replacement(template, **kwargs), subject)


def test_group_references() -> None:
    """Numbered references expand to their groups."""
    assert _expand(r"(\d+)-(\d+)", r"\2-\1", "10-20") == "20-10"


def test_unset_group_expands_to_empty() -> None:
    """A group that did not participate expands to an empty string."""
    assert _expand("a(x)?", r"[\1]", "a") == "[]"


def test_reference_beyond_group_count_expands_to_empty() -> None:
    """A reference to a group the pattern does not have expands to an empty string."""
    assert _expand("b", r"<\3>", "abc") == "a<>c"


def test_escaped_characters_stand_for_themselves() -> None:
    """Other escapes drop the backslash, and a trailing backslash is kept."""
    assert _expand("b", r"\n\\", "abc") == "an\\c"
    assert _expand("b", "x\\", "abc") == "ax\\c"


def test_case_switches_in_perl_mode() -> None:
    """\\U and \\L convert the rest of the replacement until \\E."""
    assert _expand(r"(\w+) (\w+)", r"\U\1\E \L\2", "big DEAL", perl=True) == "BIG deal"
    assert _expand(r"(\w+)", r"\Ux\1y", "ab", perl=True) == "XABY"


def test_case_switches_without_perl_are_literal() -> None:
    """Outside the Perl dialect \\U is just 'U'."""
    assert _expand(r"(\w+)", r"\U\1", "ab") == "Uab"


def test_fixed_template_is_verbatim() -> None:
    """Fixed templates are inserted without parsing."""
    assert _expand("b", r"\1\U", "abc", fixed=True) == r"a\1\Uc"


def test_bytes_template() -> None:
    """Byte templates expand to bytes, including non-ASCII literal bytes."""
    assert _expand(rb"(\d)", b"\xff\\1", b"a1") == b"a\xff1"
    assert _expand(rb"(\w+)", rb"\U\1", b"ab", perl=True) == b"AB"
