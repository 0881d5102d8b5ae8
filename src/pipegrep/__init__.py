"""PipeGrep: subject-first grep, sub and regexpr functions for pipe-style chains."""

import importlib.metadata

from .adapter import grep, grepl, gregexpr, gsub, regexec, regexpr, sub
from .pipeline import Step, chain, pipe, step
from .types import Dialect, MatchData

__all__ = [
    "Dialect",
    "MatchData",
    "Step",
    "chain",
    "gregexpr",
    "grep",
    "grepl",
    "gsub",
    "pipe",
    "regexec",
    "regexpr",
    "step",
    "sub",
]


def _get_version() -> str:
    """
    Retrieve the package version from metadata.

    Returns:
        The version string, or a development version if not installed.

    """
    try:
        return importlib.metadata.version("PipeGrep")
    except importlib.metadata.PackageNotFoundError:
        # Running from a source checkout
        return "0.0.0-dev"


__version__ = _get_version()
