"""
Pattern-first grep family built on the `regex` library.

These functions take the pattern first and the subject second, the classic
argument order. Subjects are vectors: a `str`, `bytes` or None is treated as a
vector of length one, and any other iterable is consumed element by element.
None stands for a missing value.

Positions reported by `regexpr`, `gregexpr` and `regexec` are 1-based, with -1
meaning "no match". Under `use_bytes` they count bytes of the encoded subject.
"""

import inspect
import logging
import os
import warnings
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from .config import get_settings
from .patterns import compile_pattern, resolve_dialect
from .replacement import compile_replacement
from .types import Dialect, MatchData

__all__ = ["gregexpr", "grep", "grepl", "gsub", "regexec", "regexpr", "sub"]

logger = logging.getLogger(__name__)

_PACKAGE_DIR = str(Path(__file__).parent) + os.sep

Element = str | bytes | None


@dataclass
class _Prepared:
    """A compiled pattern plus the mode it must be applied in."""

    compiled: Any
    dialect: Dialect
    use_bytes: bool
    encoding: str

    def encode(self, element: str | bytes) -> str | bytes:
        """Convert a subject element to the type the compiled pattern expects."""
        if self.use_bytes and isinstance(element, str):
            return element.encode(self.encoding, "surrogateescape")
        return element

    def restore(self, original: str | bytes, result: str | bytes) -> str | bytes:
        """Convert a result back to the type of the element it came from."""
        if isinstance(original, str) and isinstance(result, bytes):
            return result.decode(self.encoding, "surrogateescape")
        return result

    def search(self, element: str | bytes) -> Any:
        return self.compiled.search(self.encode(element))


def _warn_caller(message: str) -> None:
    """Issue a UserWarning attributed to the nearest caller outside this package."""
    frame = inspect.currentframe()
    stacklevel = 1
    while frame is not None and frame.f_code.co_filename.startswith(_PACKAGE_DIR):
        frame = frame.f_back
        stacklevel += 1
    warnings.warn(message, UserWarning, stacklevel=stacklevel)


def _warn(message: str) -> None:
    if get_settings().warn_ignored_arguments:
        _warn_caller(message)


def _coerce(element: Any) -> Element:
    if element is None or isinstance(element, str | bytes):
        return element
    return str(element)


def _as_vector(x: Any) -> tuple[list[Element], bool]:
    """Return the subject as a list of elements and whether it was a scalar."""
    if x is None or isinstance(x, str | bytes) or not isinstance(x, Iterable):
        return [_coerce(x)], True
    return [_coerce(element) for element in x], False


def _first(value: Any, name: str) -> Element:
    """Reduce a pattern or replacement argument to a single value."""
    if value is None or isinstance(value, str | bytes) or not isinstance(value, Iterable):
        return _coerce(value)
    items = list(value)
    if not items:
        msg = f"invalid '{name}' argument"
        raise ValueError(msg)
    if len(items) > 1:
        _warn_caller(f"argument '{name}' has length > 1 and only the first element will be used")
    return _coerce(items[0])


def _require_pattern(pattern: Any) -> str | bytes:
    pattern = _first(pattern, "pattern")
    if pattern is None:
        msg = "a missing (None) pattern is not allowed for regexpr, gregexpr and regexec"
        raise ValueError(msg)
    return pattern


def _prepare(
    pattern: str | bytes,
    elements: list[Element],
    *,
    ignore_case: bool,
    perl: bool,
    fixed: bool,
    use_bytes: bool,
    extra: Element = None,
) -> _Prepared:
    """Resolve the dialect and byte mode for a call and compile its pattern."""
    if fixed and perl:
        _warn("argument 'perl=True' will be ignored")
    if fixed and ignore_case:
        _warn("argument 'ignore_case=True' will be ignored")

    # Any bytes input forces byte semantics for the whole call.
    use_bytes = (
        use_bytes
        or isinstance(pattern, bytes)
        or isinstance(extra, bytes)
        or any(isinstance(element, bytes) for element in elements)
    )
    settings = get_settings()
    if use_bytes and isinstance(pattern, str):
        pattern = pattern.encode(settings.encoding, "surrogateescape")

    dialect = resolve_dialect(perl=perl, fixed=fixed)
    logger.debug(
        "Matching %d element(s) with %s pattern %r (use_bytes=%s)",
        len(elements),
        dialect.value,
        pattern,
        use_bytes,
    )
    compiled = compile_pattern(pattern, dialect, ignore_case=ignore_case and not fixed)
    return _Prepared(compiled=compiled, dialect=dialect, use_bytes=use_bytes, encoding=settings.encoding)


def grep(
    pattern: Any,
    x: Any,
    ignore_case: bool = False,
    perl: bool = False,
    value: bool = False,
    fixed: bool = False,
    use_bytes: bool = False,
    invert: bool = False,
) -> list[Any]:
    """
    Find the elements of `x` that match `pattern`.

    Args:
        pattern: The pattern to look for.
        x: The subject vector.
        ignore_case: Match case-insensitively.
        perl: Use Perl-compatible syntax.
        value: Return the matching elements instead of their indices.
        fixed: Match `pattern` as literal text.
        use_bytes: Match byte-by-byte on the encoded subject.
        invert: Select the elements that do not match.

    Returns:
        The 1-based indices of the selected elements, or the elements
        themselves when `value` is set. A missing pattern yields one None per
        element.

    """
    pattern = _first(pattern, "pattern")
    elements, _ = _as_vector(x)
    if pattern is None:
        return [None] * len(elements)

    prepared = _prepare(pattern, elements, ignore_case=ignore_case, perl=perl, fixed=fixed, use_bytes=use_bytes)
    hits = [element is not None and prepared.search(element) is not None for element in elements]
    selected = [index for index, hit in enumerate(hits) if hit != invert]
    if value:
        return [elements[index] for index in selected]
    return [index + 1 for index in selected]


def grepl(
    pattern: Any,
    x: Any,
    ignore_case: bool = False,
    perl: bool = False,
    fixed: bool = False,
    use_bytes: bool = False,
) -> list[bool | None] | bool | None:
    """Tell, for each element of `x`, whether it matches `pattern`."""
    pattern = _first(pattern, "pattern")
    elements, scalar = _as_vector(x)
    if pattern is None:
        results: list[bool | None] = [None] * len(elements)
    else:
        prepared = _prepare(pattern, elements, ignore_case=ignore_case, perl=perl, fixed=fixed, use_bytes=use_bytes)
        results = [element is not None and prepared.search(element) is not None for element in elements]
    return results[0] if scalar else results


def _substitute_one(
    prepared: _Prepared,
    repl: Any,
    element: Element,
    *,
    count: int,
    empty_pattern: bool,
) -> Element:
    if element is None:
        return None
    subject = prepared.encode(element)

    if empty_pattern and count == 0:
        # An empty pattern puts the replacement in front of every character.
        filler = prepared.compiled.sub(repl, subject[:0])
        if not subject:
            return prepared.restore(element, filler)
        result = subject[:0].join(filler + subject[i : i + 1] for i in range(len(subject)))
        return prepared.restore(element, result)

    result, replaced = prepared.compiled.subn(repl, subject, count=count)
    if not replaced:
        return element
    return prepared.restore(element, result)


def _substitute(
    pattern: Any,
    replacement: Any,
    x: Any,
    *,
    ignore_case: bool,
    perl: bool,
    fixed: bool,
    use_bytes: bool,
    count: int,
) -> list[Element] | Element:
    pattern = _first(pattern, "pattern")
    replacement = _first(replacement, "replacement")
    elements, scalar = _as_vector(x)

    if pattern is None:
        results: list[Element] = [None] * len(elements)
    else:
        prepared = _prepare(
            pattern,
            elements,
            ignore_case=ignore_case,
            perl=perl,
            fixed=fixed,
            use_bytes=use_bytes,
            extra=replacement,
        )
        if replacement is None:
            results = [None if element is None or prepared.search(element) else element for element in elements]
        else:
            template = prepared.encode(replacement)
            repl = compile_replacement(template, fixed=fixed, perl=perl and not fixed)
            results = [
                _substitute_one(prepared, repl, element, count=count, empty_pattern=not pattern)
                for element in elements
            ]
    return results[0] if scalar else results


def sub(
    pattern: Any,
    replacement: Any,
    x: Any,
    ignore_case: bool = False,
    perl: bool = False,
    fixed: bool = False,
    use_bytes: bool = False,
) -> list[Element] | Element:
    """
    Replace the first match of `pattern` in each element of `x`.

    `replacement` may refer to groups with `\\1`-`\\9` (`\\0` is the whole
    match). With `perl`, `\\U` and `\\L` upper- or lower-case the rest of the
    replacement and `\\E` ends the conversion. With `fixed` it is literal.

    Returns:
        The substituted vector, or a single value for a scalar subject.
        Elements without a match are returned unchanged.

    """
    return _substitute(
        pattern,
        replacement,
        x,
        ignore_case=ignore_case,
        perl=perl,
        fixed=fixed,
        use_bytes=use_bytes,
        count=1,
    )


def gsub(
    pattern: Any,
    replacement: Any,
    x: Any,
    ignore_case: bool = False,
    perl: bool = False,
    fixed: bool = False,
    use_bytes: bool = False,
) -> list[Element] | Element:
    """Replace every match of `pattern` in each element of `x`; see `sub`."""
    return _substitute(
        pattern,
        replacement,
        x,
        ignore_case=ignore_case,
        perl=perl,
        fixed=fixed,
        use_bytes=use_bytes,
        count=0,
    )


def _group_names(compiled: Any) -> list[str]:
    names = [""] * compiled.groups
    for name, index in compiled.groupindex.items():
        names[index - 1] = name
    return names


def _group_spans(match: Any, group_count: int) -> tuple[list[int | None], list[int | None]]:
    """1-based starts and lengths of groups 1..group_count; unset groups give (0, 0)."""
    starts: list[int | None] = []
    lengths: list[int | None] = []
    for group in range(1, group_count + 1):
        starts.append(match.start(group) + 1)
        lengths.append(match.end(group) - match.start(group))
    return starts, lengths


def regexpr(
    pattern: Any,
    text: Any,
    ignore_case: bool = False,
    perl: bool = False,
    fixed: bool = False,
    use_bytes: bool = False,
) -> MatchData:
    """
    Locate the first match of `pattern` in each element of `text`.

    Returns:
        A MatchData with one start and length per element. With `perl` and a
        pattern containing groups it also carries the capture positions.

    Raises:
        ValueError: If `pattern` is missing.

    """
    pattern = _require_pattern(pattern)
    elements, _ = _as_vector(text)
    prepared = _prepare(pattern, elements, ignore_case=ignore_case, perl=perl, fixed=fixed, use_bytes=use_bytes)

    group_count = prepared.compiled.groups
    with_captures = prepared.dialect is Dialect.PERL and group_count > 0

    starts: list[int | None] = []
    lengths: list[int | None] = []
    capture_starts: list[list[int | None]] = []
    capture_lengths: list[list[int | None]] = []
    for element in elements:
        if element is None:
            starts.append(None)
            lengths.append(None)
            capture_starts.append([None] * group_count)
            capture_lengths.append([None] * group_count)
            continue

        match = prepared.search(element)
        if match is None:
            starts.append(-1)
            lengths.append(-1)
            capture_starts.append([-1] * group_count)
            capture_lengths.append([-1] * group_count)
            continue

        starts.append(match.start() + 1)
        lengths.append(match.end() - match.start())
        group_starts, group_lengths = _group_spans(match, group_count)
        capture_starts.append(group_starts)
        capture_lengths.append(group_lengths)

    if not with_captures:
        return MatchData(starts, lengths, use_bytes=prepared.use_bytes)
    return MatchData(
        starts,
        lengths,
        use_bytes=prepared.use_bytes,
        capture_start=capture_starts,
        capture_length=capture_lengths,
        capture_names=_group_names(prepared.compiled),
    )


def _all_matches(prepared: _Prepared, element: Element, *, with_captures: bool) -> MatchData:
    group_count = prepared.compiled.groups
    names = _group_names(prepared.compiled) if with_captures else None
    if element is None:
        if with_captures:
            return MatchData([None], [None], prepared.use_bytes, [[None] * group_count], [[None] * group_count], names)
        return MatchData([None], [None], use_bytes=prepared.use_bytes)

    subject = prepared.encode(element)
    starts: list[int | None] = []
    lengths: list[int | None] = []
    capture_starts: list[list[int | None]] = []
    capture_lengths: list[list[int | None]] = []
    for match in prepared.compiled.finditer(subject):
        if subject and match.start() == match.end() == len(subject):
            continue
        starts.append(match.start() + 1)
        lengths.append(match.end() - match.start())
        group_starts, group_lengths = _group_spans(match, group_count)
        capture_starts.append(group_starts)
        capture_lengths.append(group_lengths)

    if not starts:
        starts, lengths = [-1], [-1]
        capture_starts, capture_lengths = [[-1] * group_count], [[-1] * group_count]

    if not with_captures:
        return MatchData(starts, lengths, use_bytes=prepared.use_bytes)
    return MatchData(starts, lengths, prepared.use_bytes, capture_starts, capture_lengths, names)


def gregexpr(
    pattern: Any,
    text: Any,
    ignore_case: bool = False,
    perl: bool = False,
    fixed: bool = False,
    use_bytes: bool = False,
) -> list[MatchData]:
    """Locate every disjoint match of `pattern`; one MatchData per element of `text`."""
    pattern = _require_pattern(pattern)
    elements, _ = _as_vector(text)
    prepared = _prepare(pattern, elements, ignore_case=ignore_case, perl=perl, fixed=fixed, use_bytes=use_bytes)
    with_captures = prepared.dialect is Dialect.PERL and prepared.compiled.groups > 0
    return [_all_matches(prepared, element, with_captures=with_captures) for element in elements]


def regexec(
    pattern: Any,
    text: Any,
    ignore_case: bool = False,
    perl: bool = False,
    fixed: bool = False,
    use_bytes: bool = False,
) -> list[MatchData]:
    """
    Locate the first match and its parenthesised sub-expressions.

    Each element of `text` yields a MatchData whose first entry is the whole
    match and whose following entries are the groups in order. A group that
    did not take part in the match is reported at position 0 with length 0.
    """
    pattern = _require_pattern(pattern)
    elements, _ = _as_vector(text)
    prepared = _prepare(pattern, elements, ignore_case=ignore_case, perl=perl, fixed=fixed, use_bytes=use_bytes)

    results: list[MatchData] = []
    for element in elements:
        if element is None:
            results.append(MatchData([None], [None], use_bytes=prepared.use_bytes))
            continue
        match = prepared.search(element)
        if match is None:
            results.append(MatchData([-1], [-1], use_bytes=prepared.use_bytes))
            continue
        group_starts, group_lengths = _group_spans(match, prepared.compiled.groups)
        results.append(
            MatchData(
                [match.start() + 1, *group_starts],
                [match.end() - match.start(), *group_lengths],
                use_bytes=prepared.use_bytes,
            ),
        )
    return results
