"""
Resolution of the `levels` option into the set of heading levels that get labels.

The option is either a single max level (`3` means H1-H3) or a `{start, finish}`
mapping (`{"start": 2, "finish": 4}` means H2-H4). Levels outside the range are still
counted, they just never receive a visible label.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from autoheaders.errors import (
    InvalidLevelType,
    InvertedRange,
    NonNumericBound,
    OutOfRange,
)

MIN_LEVEL = 1
MAX_LEVEL = 6

LevelSpec = int | Mapping[str, Any]


@dataclass(frozen=True)
class LevelScope:
    """
    Which heading levels (H1-H6) receive a label.

    `flags[0]` is H1, `flags[5]` is H6. Always contiguous between `start` and `finish`.
    """

    start: int
    finish: int

    @property
    def flags(self) -> tuple[bool, bool, bool, bool, bool, bool]:
        f = [self.start <= level <= self.finish for level in range(MIN_LEVEL, MAX_LEVEL + 1)]
        return (f[0], f[1], f[2], f[3], f[4], f[5])

    @property
    def levels(self) -> frozenset[int]:
        return frozenset(range(self.start, self.finish + 1))

    def __contains__(self, level: object) -> bool:
        return isinstance(level, int) and self.start <= level <= self.finish

    def __str__(self) -> str:
        if self.start == self.finish:
            return f"H{self.start}"
        return f"H{self.start}-H{self.finish}"


def _is_int(value: object) -> bool:
    # bool is an int subclass but never a valid level
    return isinstance(value, int) and not isinstance(value, bool)


def resolve_levels(spec: object) -> LevelScope:
    """
    Turn a level spec into a `LevelScope`.

    Raises:
        InvalidLevelType: `spec` is neither an int nor a mapping.
        NonNumericBound: a `start`/`finish` bound is not an int.
        InvertedRange: `start > finish`.
        OutOfRange: a bound falls outside 1-6.
    """
    if _is_int(spec):
        assert isinstance(spec, int)
        start, finish = MIN_LEVEL, spec
    elif isinstance(spec, Mapping):
        start = spec.get("start")  # pyright: ignore[reportUnknownMemberType]
        finish = spec.get("finish")  # pyright: ignore[reportUnknownMemberType]
        if not _is_int(start) or not _is_int(finish):
            raise NonNumericBound()
        assert isinstance(start, int) and isinstance(finish, int)
        if start > finish:
            raise InvertedRange()
    else:
        raise InvalidLevelType()

    for bound in (start, finish):
        if not MIN_LEVEL <= bound <= MAX_LEVEL:
            raise OutOfRange()

    return LevelScope(start=start, finish=finish)


def parse_level_spec(text: str) -> LevelSpec:
    """
    Parse a command-line level spec: `"3"` for a max level, or `"2-4"` / `"2:4"` for a
    start/finish range. Non-numeric parts are kept as strings so that `resolve_levels()`
    reports them.
    """
    text = text.strip()
    for sep in ("-", ":"):
        if sep in text:
            start, finish = (part.strip() for part in text.split(sep, 1))
            return {"start": _maybe_int(start), "finish": _maybe_int(finish)}
    value = _maybe_int(text)
    if isinstance(value, int):
        return value
    raise InvalidLevelType(f"Invalid heading levels: {text!r}")


def _maybe_int(text: str) -> int | str:
    return int(text) if text.isdigit() else text
