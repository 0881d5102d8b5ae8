"""Defines shared data structures and types for PipeGrep."""

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum
from typing import AnyStr, overload

from .config import get_settings


class Dialect(str, Enum):
    """The pattern dialects the engine understands."""

    FIXED = "fixed"
    EXTENDED = "extended"
    PERL = "perl"


@dataclass
class MatchData:
    """
    Position and length descriptor for matches in a vector of subjects.

    Positions are 1-based. A value of -1 marks "no match" and None marks a
    missing input. When `use_bytes` is set, positions and lengths count bytes
    of the encoded subject rather than characters.

    Attributes:
        start: Start position of each match.
        match_length: Length of each match, aligned with `start`.
        use_bytes: Whether positions are byte offsets.
        capture_start: Per-match start of each capture group (Perl dialect only).
        capture_length: Per-match length of each capture group.
        capture_names: Name of each capture group, "" for unnamed groups.

    """

    start: list[int | None]
    match_length: list[int | None]
    use_bytes: bool = False
    capture_start: list[list[int | None]] | None = None
    capture_length: list[list[int | None]] | None = None
    capture_names: list[str] | None = field(default=None)

    def __post_init__(self) -> None:
        """Validate that starts and lengths line up."""
        if len(self.start) != len(self.match_length):
            msg = f"start ({len(self.start)}) and match_length ({len(self.match_length)}) must have the same length"
            raise ValueError(msg)

    def __len__(self) -> int:
        return len(self.start)

    def __iter__(self) -> Iterator[int | None]:
        return iter(self.start)

    @overload
    def __getitem__(self, index: int) -> int | None: ...

    @overload
    def __getitem__(self, index: slice) -> list[int | None]: ...

    def __getitem__(self, index: int | slice) -> int | None | list[int | None]:
        return self.start[index]

    @property
    def matched(self) -> list[bool]:
        """Whether each position denotes an actual match."""
        return [pos is not None and pos > 0 for pos in self.start]

    def regmatches(self, text: AnyStr) -> list[AnyStr]:
        """
        Extract the matched substrings of `text` described by this descriptor.

        This applies to descriptors covering a single subject, as returned by
        `gregexpr` and `regexec`. Group positions of 0 (a group that did not
        take part in the match) yield an empty string.

        Args:
            text: The subject the descriptor was computed from. When the
                descriptor counts bytes and `text` is a str, it is encoded
                with the configured encoding before slicing.

        Returns:
            The matched substrings, in order.

        """
        if self.use_bytes and isinstance(text, str):
            encoding = get_settings().encoding
            raw = text.encode(encoding, "surrogateescape")
            return [piece.decode(encoding, "surrogateescape") for piece in self._slice(raw)]
        return self._slice(text)

    def _slice(self, text: AnyStr) -> list[AnyStr]:
        pieces: list[AnyStr] = []
        for start, length in zip(self.start, self.match_length):
            if start is None or length is None or start < 0:
                continue
            begin = max(start - 1, 0)
            pieces.append(text[begin : begin + length])
        return pieces
