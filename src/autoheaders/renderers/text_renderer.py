"""
Heading numbering over raw Markdown text.

Used before Markdown is converted to HTML (the `sidebar = true` mode), so that the
labels also appear anywhere the host builds a table of contents from the source.
Only ATX headings (`#` through `######`) are recognized, one per line.
"""

from __future__ import annotations

import re

from autoheaders.numbering.counters import CounterState

HEADING_PATTERN = re.compile(r"^(#{1,6})[ \t]+(.*)$", re.MULTILINE)


def render_text(text: str, state: CounterState, separator: str) -> str:
    """
    Return `text` with every in-scope heading prefixed by its label.

    Headings are processed strictly top to bottom since each label depends on the
    ones before it. Non-heading lines and out-of-scope headings are left as is.
    """

    def number_heading(match: re.Match[str]) -> str:
        hashes, title = match.group(1), match.group(2)
        label = state.advance(len(hashes), separator)
        if label is None:
            return match.group(0)
        return f"{hashes} {label} {title}"

    return HEADING_PATTERN.sub(number_heading, text)
