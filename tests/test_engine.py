"""Tests for the host-facing engine and its debug/degrade policy."""

from __future__ import annotations

import logging
import sys
from textwrap import dedent

import pytest
from marko import Markdown

from autoheaders import AutoHeaders, AutoHeadersConfig, parse_signifier_and_seed, render_text
from autoheaders.errors import (
    ConfigurationNotSet,
    ErrorKind,
    ExitingError,
    InvalidLevelRange,
    InvalidSidebarFlag,
    MalformedSignifier,
    MismatchedSeparator,
    MissingSignifier,
)
from autoheaders.renderers.tree_renderer import collect_headings

DOC = dedent(
    """\
    <!-- autoHeader:1-1 -->
    # Intro
    ## Scope
    ## Terms
    # Design
    ## Goals
    """
)

NUMBERED = dedent(
    """\
    # 1- Intro
    ## 1-1- Scope
    ## 1-2- Terms
    # 2- Design
    ## 2-1- Goals
    """
)


def test_process_text_mode() -> None:
    assert AutoHeaders().process(DOC) == NUMBERED


def test_process_html_mode() -> None:
    html = AutoHeaders(AutoHeadersConfig(sidebar=False)).process(DOC)
    assert "<h1>1- Intro</h1>" in html
    assert "<h2>1-2- Terms</h2>" in html
    assert "<h2>2-1- Goals</h2>" in html
    assert "autoHeader" not in html


def test_process_is_repeatable() -> None:
    """Counters are seeded per document, never carried over."""
    engine = AutoHeaders()
    assert engine.process(DOC) == NUMBERED
    assert engine.process(DOC) == NUMBERED


def test_separator_alias_and_levels() -> None:
    config = AutoHeadersConfig(separator="dot", levels={"start": 2, "finish": 2})
    doc = "@autoHeader:1.1\n# Intro\n## Scope\n### Detail\n"
    assert AutoHeaders(config).process(doc) == "# Intro\n## 1.1. Scope\n### Detail\n"


def test_step_by_step() -> None:
    engine = AutoHeaders()
    state, cleaned = engine.seed(DOC)
    assert state is not None
    assert not cleaned.startswith("<!--")
    assert engine.render_text(cleaned, state) == NUMBERED


def test_step_by_step_tree() -> None:
    engine = AutoHeaders(AutoHeadersConfig(sidebar=False))
    state, cleaned = engine.seed(DOC)
    headings = collect_headings(Markdown().parse(cleaned))
    engine.render_tree(headings, state)
    first = headings[0].children[0]
    assert first.children == "1- Intro"  # pyright: ignore[reportAttributeAccessIssue]


def test_module_level_functions() -> None:
    options = AutoHeadersConfig(separator=")").resolved()
    state, cleaned = parse_signifier_and_seed("@autoHeader:2\n# A\n# B\n", options)
    assert cleaned == "# A\n# B\n"
    assert render_text(cleaned, state, options) == "# 2) A\n# 3) B\n"


# === Failures with debug on ===


@pytest.mark.parametrize(
    ("doc", "error"),
    [
        ("# Intro\n", MissingSignifier),
        ("@autoHeader:1-A\n# Intro\n", MalformedSignifier),
        ("@autoHeader:1.1\n# Intro\n", MismatchedSeparator),
    ],
)
def test_document_errors_raise_in_debug(doc: str, error: type[Exception]) -> None:
    with pytest.raises(error):
        AutoHeaders().process(doc)


@pytest.mark.parametrize(
    ("config", "error"),
    [
        (AutoHeadersConfig(levels={"start": 3, "finish": 2}), InvalidLevelRange),
        (AutoHeadersConfig(separator=None), ConfigurationNotSet),
        (AutoHeadersConfig(separator="--"), ConfigurationNotSet),
        (AutoHeadersConfig(levels=None), ConfigurationNotSet),
        (AutoHeadersConfig(separator=5), ConfigurationNotSet),  # pyright: ignore[reportArgumentType]
        (AutoHeadersConfig(separator=[".", "-"]), ConfigurationNotSet),  # pyright: ignore[reportArgumentType]
        (AutoHeadersConfig(sidebar="yes"), InvalidSidebarFlag),  # pyright: ignore[reportArgumentType]
    ],
)
def test_config_errors_raise_in_debug(config: AutoHeadersConfig, error: type[Exception]) -> None:
    with pytest.raises(error):
        AutoHeaders(config)


def test_render_without_state_raises_exiting_error() -> None:
    with pytest.raises(ExitingError) as exc:
        AutoHeaders().render_text("# Intro\n", None)
    assert exc.value.kind == ErrorKind.exiting_error


# === Failures with debug off ===


@pytest.mark.parametrize(
    "doc",
    [
        "# Intro\n## Scope\n",
        "@autoHeader:1-A\n# Intro\n",
        "<!-- autoHeader:1.1 -->\n# Intro\n",
    ],
)
def test_document_errors_pass_through(doc: str, caplog: pytest.LogCaptureFixture) -> None:
    engine = AutoHeaders(AutoHeadersConfig(debug=False))
    with caplog.at_level(logging.WARNING):
        assert engine.process(doc) == doc
    assert any(record.levelno == logging.WARNING for record in caplog.records)


def test_malformed_signifier_logged_with_kind(caplog: pytest.LogCaptureFixture) -> None:
    engine = AutoHeaders(AutoHeadersConfig(debug=False))
    with caplog.at_level(logging.WARNING):
        engine.seed("@autoHeader:1-A\n")
    assert "malformed_signifier" in caplog.text


def test_config_errors_pass_through(caplog: pytest.LogCaptureFixture) -> None:
    config = AutoHeadersConfig(levels={"start": 3, "finish": 2}, debug=False)
    with caplog.at_level(logging.WARNING):
        engine = AutoHeaders(config)
        assert engine.process(DOC) == DOC
    assert "invalid_level_range" in caplog.text
    assert "exiting_error" in caplog.text


def test_html_mode_without_labels_on_failure() -> None:
    engine = AutoHeaders(AutoHeadersConfig(sidebar=False, debug=False))
    html = engine.process("# Intro\n\n## Scope\n")
    assert "<h1>Intro</h1>" in html
    assert "<h2>Scope</h2>" in html


def test_tree_untouched_without_state() -> None:
    engine = AutoHeaders(AutoHeadersConfig(debug=False))
    headings = collect_headings(Markdown().parse("# Intro\n"))
    engine.render_tree(headings, None)
    assert headings[0].children[0].children == "Intro"  # pyright: ignore[reportAttributeAccessIssue]


@pytest.mark.parametrize("separator", [5, [".", "-"]])
def test_non_string_separator_passes_through(
    separator: object, caplog: pytest.LogCaptureFixture
) -> None:
    config = AutoHeadersConfig(separator=separator, debug=False)  # pyright: ignore[reportArgumentType]
    with caplog.at_level(logging.WARNING):
        engine = AutoHeaders(config)
        assert engine.process(DOC) == DOC
    assert "configuration_not_set" in caplog.text


@pytest.mark.skipif(
    not hasattr(sys, "get_int_max_str_digits"), reason="no int string conversion limit"
)
def test_overlong_signifier_passes_through(caplog: pytest.LogCaptureFixture) -> None:
    doc = "@autoHeader:" + "9" * (sys.get_int_max_str_digits() + 1) + "\n# A\n"
    with caplog.at_level(logging.WARNING):
        assert AutoHeaders(AutoHeadersConfig(debug=False)).process(doc) == doc
    assert "malformed_signifier" in caplog.text


def test_html_failure_in_debug_raises() -> None:
    engine = AutoHeaders(AutoHeadersConfig(sidebar=False))
    with pytest.raises(ExitingError):
        engine.render_html("# Intro\n", None)
