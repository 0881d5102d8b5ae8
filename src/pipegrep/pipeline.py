"""Helpers for threading a value through a chain of subject-first calls."""

from collections.abc import Callable
from functools import reduce
from typing import Any

__all__ = ["Step", "chain", "pipe", "step"]


class Step:
    """
    A deferred call that receives the running value as its first argument.

    `value | step(gsub, "[0-9]", "#")` is the same as `gsub(value, "[0-9]", "#")`.
    """

    __slots__ = ("args", "func", "kwargs")

    def __init__(self, func: Callable[..., Any], *args: Any, **kwargs: Any) -> None:  # noqa: ANN401
        if not callable(func):
            msg = f"Step target must be callable, got {type(func).__name__}"
            raise TypeError(msg)
        self.func = func
        self.args = args
        self.kwargs = kwargs

    def __call__(self, value: Any) -> Any:  # noqa: ANN401
        return self.func(value, *self.args, **self.kwargs)

    def __ror__(self, value: Any) -> Any:  # noqa: ANN401
        return self(value)

    def __repr__(self) -> str:
        name = getattr(self.func, "__name__", repr(self.func))
        parts = [repr(arg) for arg in self.args] + [f"{key}={val!r}" for key, val in self.kwargs.items()]
        return f"step({', '.join([name, *parts])})"


def step(func: Callable[..., Any], *args: Any, **kwargs: Any) -> Step:  # noqa: ANN401
    """Create a Step calling `func(value, *args, **kwargs)`."""
    return Step(func, *args, **kwargs)


def _as_step(candidate: Any) -> Callable[[Any], Any]:  # noqa: ANN401
    """Normalise a Step, a plain callable, or a `(func, *args)` tuple."""
    if isinstance(candidate, tuple):
        if not candidate:
            msg = "An empty tuple is not a valid pipeline step."
            raise TypeError(msg)
        return Step(candidate[0], *candidate[1:])
    if callable(candidate):
        return candidate
    msg = f"Pipeline steps must be callables or tuples, got {type(candidate).__name__}"
    raise TypeError(msg)


def pipe(value: Any, *steps: Any) -> Any:  # noqa: ANN401
    """
    Thread `value` through `steps`, feeding each result into the next step.

    Args:
        value: The initial subject.
        *steps: Step objects, single-argument callables, or `(func, *args)` tuples.

    Returns:
        The result of the last step, or `value` if there are no steps.

    Example:
        >>> from pipegrep import gsub, grepl
        >>> pipe("a1b2", (gsub, "[0-9]", ""), (grepl, "^ab$"))
        True

    """
    return reduce(lambda acc, current: current(acc), [_as_step(s) for s in steps], value)


def chain(*steps: Any) -> Callable[[Any], Any]:  # noqa: ANN401
    """Compose `steps` into one reusable callable."""
    normalised = [_as_step(s) for s in steps]

    def run(value: Any) -> Any:  # noqa: ANN401
        return reduce(lambda acc, current: current(acc), normalised, value)

    return run
