"""
Parsing of the starting-counter declaration ("signifier") at the top of a document.

Two spellings are recognized, and either must be the first thing in the document:

    @autoHeader:2-1
    <!-- autoHeader:2-1 -->

The tokens are split on the configured separator. Their homogeneity (all digits or all
letters) is checked later, when the counter state is seeded.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from autoheaders.errors import MismatchedSeparator, MissingSignifier

_SIGNIFIER_PATTERN = re.compile(
    r"^(?:@autoHeader:|<!--[ \t]*autoHeader:)[ \t]*(?P<tokens>\S+?)(?:[ \t]*-->)?(?=\s|$)"
)

# Characters commonly used between counter segments. Seeing one of these in the
# signifier, but not the configured separator, means the two disagree.
SEPARATOR_CHARS = frozenset(".-),:~")


@dataclass(frozen=True)
class Signifier:
    """
    A parsed signifier. `tokens` are the trimmed, unvalidated start values in level
    order; `raw` is the token string as written.
    """

    tokens: tuple[str, ...]
    raw: str


def parse_signifier(text: str, separator: str) -> Signifier:
    """
    Find the signifier at the start of `text` and split it on `separator`.

    Raises:
        MissingSignifier: the document does not start with a signifier.
        MismatchedSeparator: the signifier is joined with a different separator.
    """
    match = _SIGNIFIER_PATTERN.match(text.strip())
    if not match:
        raise MissingSignifier()

    raw = match.group("tokens")
    if separator not in raw and any(c in raw for c in SEPARATOR_CHARS - {separator}):
        raise MismatchedSeparator(
            f"The config separator {separator!r} does not match the signifier {raw!r}"
        )

    tokens = tuple(token.strip() for token in raw.split(separator))
    return Signifier(tokens=tokens, raw=raw)


def strip_signifier(text: str) -> str:
    """
    Remove the signifier line from `text`: any leading blank lines plus the first
    non-blank line. The rest of the document is returned verbatim.
    """
    lines = text.lstrip().split("\n")
    return "\n".join(lines[1:])
