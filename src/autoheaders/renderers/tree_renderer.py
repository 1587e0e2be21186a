"""
Heading numbering over a parsed Marko document tree.

Used after Markdown has been parsed (the `sidebar = false` mode): headings are taken
from the tree in document order and the label is prepended to each heading's inline
content. Both ATX and setext headings are numbered.

Must produce exactly the labels `render_text()` produces for the same sequence of
heading levels, since both drive the same `CounterState`.
"""

from __future__ import annotations

from collections.abc import Sequence

from marko import Markdown, block, inline
from marko.block import Document

from autoheaders.numbering.counters import CounterState

HeadingNode = block.Heading | block.SetextHeading


def collect_headings(doc: Document) -> list[HeadingNode]:
    """Return all headings in a Marko document, in document order."""
    headings: list[HeadingNode] = []

    def collect(element: object) -> None:
        if isinstance(element, (block.Heading, block.SetextHeading)):
            headings.append(element)
        else:
            children = getattr(element, "children", None)
            if isinstance(children, list):
                for child in children:  # pyright: ignore[reportUnknownVariableType]
                    collect(child)  # pyright: ignore[reportUnknownArgumentType]

    collect(doc)
    return headings


def _prepend_text(heading: HeadingNode, prefix: str) -> None:
    """
    Prepend `prefix` to the heading's content. Extends a leading `RawText` node, or
    inserts a new one when the heading starts with other inline markup.
    """
    children = heading.children
    if isinstance(children, str):
        heading.children = prefix + children
        return

    first = children[0] if children else None
    if isinstance(first, inline.RawText) and isinstance(first.children, str):
        first.children = prefix + first.children
    else:
        children.insert(0, inline.RawText(prefix))


def render_tree(headings: Sequence[HeadingNode], state: CounterState, separator: str) -> None:
    """
    Number `headings` in place, in the given (document) order.

    All labels are computed before any node is touched, so a failure leaves the tree
    unmodified.
    """
    labels = [state.advance(heading.level, separator) for heading in headings]

    for heading, label in zip(headings, labels):
        if label is not None:
            _prepend_text(heading, f"{label} ")


def render_html(markdown: str, state: CounterState | None, separator: str) -> str:
    """
    Parse `markdown`, number its headings and render the result to HTML. With no
    `state` the headings are rendered as written.
    """
    md = Markdown()
    doc = md.parse(markdown)
    if state is not None:
        render_tree(collect_headings(doc), state, separator)
    return md.render(doc)
