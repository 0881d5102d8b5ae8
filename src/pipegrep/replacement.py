"""Parses replacement templates into substitution callables."""

from collections.abc import Callable
from typing import Any, AnyStr

__all__ = ["compile_replacement"]

_LITERAL = "literal"
_GROUP = "group"
_CASE = "case"

_CASE_ESCAPES = frozenset("ULE")


def _tokenize(template: str, *, perl: bool) -> list[tuple[str, Any]]:
    """
    Split a replacement template into literal, group and case-switch tokens.

    `\\0`-`\\9` are back-references; `\\U`, `\\L` and `\\E` switch case only in
    the Perl dialect. Any other escaped character stands for itself.
    """
    tokens: list[tuple[str, Any]] = []
    literal: list[str] = []

    def flush() -> None:
        if literal:
            tokens.append((_LITERAL, "".join(literal)))
            literal.clear()

    i = 0
    while i < len(template):
        char = template[i]
        if char != "\\" or i + 1 == len(template):
            literal.append(char)
            i += 1
            continue

        escaped = template[i + 1]
        if escaped.isdigit() and escaped.isascii():
            flush()
            tokens.append((_GROUP, int(escaped)))
        elif perl and escaped in _CASE_ESCAPES:
            flush()
            tokens.append((_CASE, escaped))
        else:
            literal.append(escaped)
        i += 2

    flush()
    return tokens


def _apply_case(piece: AnyStr, mode: str | None) -> AnyStr:
    if mode == "U":
        return piece.upper()
    if mode == "L":
        return piece.lower()
    return piece


def compile_replacement(template: AnyStr, *, fixed: bool = False, perl: bool = False) -> Callable[[Any], AnyStr]:
    """
    Build a callable usable as the `repl` argument of `regex.sub`.

    Args:
        template: The replacement text. Bytes templates expand to bytes.
        fixed: Treat the template literally, with no escapes.
        perl: Honour the `\\U`, `\\L` and `\\E` case switches.

    Returns:
        A function mapping a match object to its replacement.

    """
    if fixed:
        return lambda _match: template

    is_bytes = isinstance(template, bytes)
    # latin-1 maps every byte to one code point and back again.
    text = template.decode("latin-1") if is_bytes else template
    tokens = _tokenize(text, perl=perl)
    if is_bytes:
        tokens = [(kind, value.encode("latin-1") if kind == _LITERAL else value) for kind, value in tokens]
    empty = template[:0]

    def expand(match: Any) -> AnyStr:  # noqa: ANN401
        pieces = []
        mode = None
        for kind, value in tokens:
            if kind == _CASE:
                mode = None if value == "E" else value
                continue
            if kind == _GROUP:
                piece = match.group(value) if value <= len(match.groups()) else None
                value = empty if piece is None else piece
            pieces.append(_apply_case(value, mode))
        return empty.join(pieces)

    return expand
