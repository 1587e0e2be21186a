"""
Host-facing entry points for automatic heading numbering.

The module-level functions are strict: they raise an `AutoHeaderError` on any problem.
`AutoHeaders` wraps them for a host pipeline. It is constructed with a config and
applies the `debug` policy, so with `debug=False` every failure is logged and the input
comes back unmodified.

Usage:
    engine = AutoHeaders(AutoHeadersConfig(separator=".", levels={"start": 2, "finish": 4}))

    # Whole pipeline, selected by `sidebar`:
    output = engine.process(markdown)

    # Or step by step, the way a host with its own Markdown parser would:
    state, cleaned = engine.seed(markdown)
    numbered = engine.render_text(cleaned, state)
"""

from __future__ import annotations

from collections.abc import Sequence

from autoheaders.config import DEFAULT_SEPARATOR, AutoHeadersConfig, ResolvedConfig
from autoheaders.errors import AutoHeaderError, ExitingError, report_error
from autoheaders.numbering.counters import CounterState
from autoheaders.numbering.signifier import parse_signifier, strip_signifier
from autoheaders.renderers import text_renderer, tree_renderer
from autoheaders.renderers.tree_renderer import HeadingNode


def parse_signifier_and_seed(
    document_text: str, config: ResolvedConfig
) -> tuple[CounterState, str]:
    """
    Read the signifier, seed a fresh `CounterState` and return it together with the
    document minus the signifier line.
    """
    signifier = parse_signifier(document_text, config.separator)
    state = CounterState.seed(signifier.tokens, config.scope)
    return state, strip_signifier(document_text)


def render_text(cleaned_text: str, state: CounterState, config: ResolvedConfig) -> str:
    return text_renderer.render_text(cleaned_text, state, config.separator)


def render_tree(
    headings: Sequence[HeadingNode], state: CounterState, config: ResolvedConfig
) -> None:
    tree_renderer.render_tree(headings, state, config.separator)


class AutoHeaders:
    """
    Heading numbering engine bound to one configuration.

    Holds no counter state of its own: every document gets a freshly seeded
    `CounterState`, so one engine can serve any number of documents.
    """

    def __init__(self, config: AutoHeadersConfig | None = None) -> None:
        self.config: AutoHeadersConfig = config or AutoHeadersConfig()
        self.debug: bool = bool(self.config.debug)
        self.options: ResolvedConfig | None = None
        try:
            self.options = self.config.resolved()
        except AutoHeaderError as e:
            report_error(e, debug=self.debug)

    def seed(self, document_text: str) -> tuple[CounterState | None, str]:
        """
        Seed counters from the document's signifier.

        Returns `(state, text_without_signifier)`, or `(None, document_text)` if the
        configuration or signifier is invalid and `debug` is off.
        """
        try:
            if self.options is None:
                raise ExitingError()
            return parse_signifier_and_seed(document_text, self.options)
        except AutoHeaderError as e:
            report_error(e, debug=self.debug)
            return None, document_text

    def render_text(self, cleaned_text: str, state: CounterState | None) -> str:
        """Number headings in Markdown text. Returns `cleaned_text` unchanged on failure."""
        try:
            if state is None or self.options is None:
                raise ExitingError()
            return render_text(cleaned_text, state, self.options)
        except AutoHeaderError as e:
            report_error(e, debug=self.debug)
            return cleaned_text

    def render_tree(self, headings: Sequence[HeadingNode], state: CounterState | None) -> None:
        """Number heading nodes in place. Leaves them untouched on failure."""
        try:
            if state is None or self.options is None:
                raise ExitingError()
            render_tree(headings, state, self.options)
        except AutoHeaderError as e:
            report_error(e, debug=self.debug)

    def render_html(self, cleaned_text: str, state: CounterState | None) -> str:
        """
        Convert Markdown to HTML, numbering the headings of the parsed tree. On failure
        the HTML is rendered with the headings as written.
        """
        try:
            if state is None or self.options is None:
                raise ExitingError()
            return tree_renderer.render_html(cleaned_text, state, self.options.separator)
        except AutoHeaderError as e:
            report_error(e, debug=self.debug)
            return tree_renderer.render_html(cleaned_text, None, DEFAULT_SEPARATOR)

    def process(self, document_text: str) -> str:
        """
        Run the full pipeline on one document: Markdown out when `sidebar` is on,
        HTML out otherwise.
        """
        state, cleaned = self.seed(document_text)
        if self.config.sidebar:
            return self.render_text(cleaned, state)
        return self.render_html(cleaned, state)
