"""
Counter state for hierarchical heading numbering.

This module provides:
- Number styles for label segments (arabic or alphabetic) and their conversions
- `CounterState`, the per-document state machine shared by both renderers

Key concepts:
- Each heading level H1-H6 has a `CounterEntry` with a `current` value and a `reset`
  baseline.
- Seeding from the signifier sets both to `start - 1`, so the first heading at a level
  gets the signifier's value.
- Advancing at level L first resets every deeper level: `current := reset`, then
  `reset := 0`. A seeded baseline is therefore used by the first subtree only; later
  subtrees count from 1 again.
- Then `current[L]` is incremented and, if L is in scope, the label is composed from
  levels 1..L.

Usage:
    from autoheaders.numbering.counters import CounterState

    state = CounterState.seed(["1", "1"], resolve_levels(6))
    state.advance(1, "-")  # "1-"
    state.advance(2, "-")  # "1-1-"
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum

from autoheaders.errors import InvalidLevelType, MalformedSignifier
from autoheaders.numbering.level_range import MAX_LEVEL, MIN_LEVEL, LevelScope


class NumberStyle(str, Enum):
    """Number style used for every label segment in a document."""

    arabic = "arabic"  # 1, 2, 3, 10, 100
    alpha_upper = "alpha_upper"  # A, B, C, ... Z, AA, AB
    alpha_lower = "alpha_lower"  # a, b, c, ... z, aa, ab


# === Number Conversion Functions ===


def int_to_alpha(n: int) -> str:
    """Convert an integer to uppercase alphabetic string (A, B, ..., Z, AA, AB, ...)."""
    if n <= 0:
        raise ValueError("Alpha values must be positive")
    result = []
    while n > 0:
        n -= 1
        result.append(chr(ord("A") + (n % 26)))
        n //= 26
    return "".join(reversed(result))


def alpha_to_int(s: str) -> int:
    """Convert an alphabetic string to integer (A=1, B=2, ..., Z=26, AA=27, ...)."""
    s = s.upper()
    result = 0
    for char in s:
        result = result * 26 + (ord(char) - ord("A") + 1)
    return result


def to_number(style: NumberStyle, value: int) -> str:
    """
    Convert a counter value to its string form. Values below 1 have no alphabetic
    form (e.g. an H1 counter before the first H1) and are always rendered as integers.
    """
    if value <= 0 or style == NumberStyle.arabic:
        return str(value)
    elif style == NumberStyle.alpha_upper:
        return int_to_alpha(value)
    else:
        return int_to_alpha(value).lower()


def from_number(style: NumberStyle, text: str) -> int:
    """Convert a signifier token back to an integer."""
    if style == NumberStyle.arabic:
        return int(text)
    return alpha_to_int(text)


def _is_ascii_alpha(token: str) -> bool:
    return token.isascii() and token.isalpha()


def _is_ascii_digits(token: str) -> bool:
    return token.isascii() and token.isdigit()


def infer_style(tokens: Sequence[str]) -> NumberStyle:
    """
    Infer the single number style for a set of signifier tokens.

    Raises:
        MalformedSignifier: tokens are empty or mix digits and letters.
    """
    if not tokens:
        raise MalformedSignifier()
    if all(_is_ascii_digits(t) for t in tokens):
        return NumberStyle.arabic
    if all(_is_ascii_alpha(t) for t in tokens):
        if all(t.islower() for t in tokens):
            return NumberStyle.alpha_lower
        return NumberStyle.alpha_upper
    raise MalformedSignifier(
        "The markdown file has the signifier, but it is misconfigured: "
        f"tokens must be all digits or all letters, got {list(tokens)!r}"
    )


# === Data Structures ===


@dataclass
class CounterEntry:
    """Live counter for one heading level."""

    reset: int
    current: int


@dataclass
class CounterState:
    """
    Counter values for H1-H6 at the current position in one document.

    Create one per document with `seed()`; never share it between documents.
    """

    entries: dict[int, CounterEntry]
    scope: LevelScope
    style: NumberStyle = NumberStyle.arabic
    scoped_levels: frozenset[int] = field(init=False)

    def __post_init__(self) -> None:
        self.scoped_levels = frozenset(
            level for level in self.entries if level in self.scope
        )

    @classmethod
    def seed(cls, tokens: Sequence[str], scope: LevelScope) -> CounterState:
        """
        Build the starting state from signifier tokens.

        Tokens beyond the sixth are ignored. Missing tokens are padded with "1" in
        numeric mode or "A" in alphabetic mode.
        """
        tokens = list(tokens[:MAX_LEVEL])
        style = infer_style(tokens)
        pad = "1" if style == NumberStyle.arabic else "A"
        tokens += [pad] * (MAX_LEVEL - len(tokens))

        entries: dict[int, CounterEntry] = {}
        for level, token in enumerate(tokens, start=MIN_LEVEL):
            try:
                start = from_number(style, token) - 1
            except ValueError as e:
                raise MalformedSignifier(
                    "The markdown file has the signifier, but it is misconfigured: "
                    f"start value for H{level} cannot be read ({e})"
                ) from e
            entries[level] = CounterEntry(reset=start, current=start)
        return cls(entries=entries, scope=scope, style=style)

    def advance(self, level: int, separator: str) -> str | None:
        """
        Move the cursor past a heading at `level` and return its label, or `None` if
        the level is not in scope.
        """
        if not MIN_LEVEL <= level <= MAX_LEVEL:
            raise InvalidLevelType(f"Heading level must be between 1 and 6, got {level!r}")

        for deeper in range(MAX_LEVEL, level, -1):
            entry = self.entries[deeper]
            entry.current = entry.reset
            entry.reset = 0

        self.entries[level].current += 1

        if level not in self.scoped_levels:
            return None
        return self.label(level, separator)

    def label(self, level: int, separator: str) -> str:
        """Compose the label for `level` from the current counters, without advancing."""
        parts = [
            to_number(self.style, self.entries[lv].current) for lv in range(MIN_LEVEL, level + 1)
        ]
        return separator.join(parts) + separator

    def snapshot(self) -> list[int]:
        """Current counter values for H1-H6."""
        return [self.entries[level].current for level in range(MIN_LEVEL, MAX_LEVEL + 1)]
