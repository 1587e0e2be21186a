"""
autoheaders: outline numbering ("2-1-3-") for Markdown headings.
"""

from autoheaders.config import AutoHeadersConfig
from autoheaders.engine import (
    AutoHeaders,
    parse_signifier_and_seed,
    render_text,
    render_tree,
)
from autoheaders.errors import AutoHeaderError, ErrorKind
from autoheaders.numbering.counters import CounterState

__all__ = [
    "AutoHeaderError",
    "AutoHeaders",
    "AutoHeadersConfig",
    "CounterState",
    "ErrorKind",
    "parse_signifier_and_seed",
    "render_text",
    "render_tree",
]
