"""Tests for reading the starting-counter signifier."""

from __future__ import annotations

import pytest

from autoheaders.errors import ErrorKind, MismatchedSeparator, MissingSignifier
from autoheaders.numbering.signifier import parse_signifier, strip_signifier


def test_at_form() -> None:
    signifier = parse_signifier("@autoHeader:1-2-3\n# Title\n", "-")
    assert signifier.tokens == ("1", "2", "3")
    assert signifier.raw == "1-2-3"


def test_comment_form() -> None:
    signifier = parse_signifier("<!-- autoHeader:2-1 -->\n# Title\n", "-")
    assert signifier.tokens == ("2", "1")


def test_comment_form_without_space() -> None:
    assert parse_signifier("<!-- autoHeader:A-B-->", "-").tokens == ("A", "B")


def test_single_token() -> None:
    assert parse_signifier("@autoHeader:4", ".").tokens == ("4",)


def test_leading_whitespace_allowed() -> None:
    assert parse_signifier("\n\n   @autoHeader:1.1\n", ".").tokens == ("1", "1")


def test_bracket_separator() -> None:
    assert parse_signifier("@autoHeader:1)2)3", ")").tokens == ("1", "2", "3")


def test_tokens_are_not_validated() -> None:
    """Homogeneity is checked when seeding counters, not here."""
    assert parse_signifier("@autoHeader:1-A", "-").tokens == ("1", "A")


@pytest.mark.parametrize(
    "text",
    [
        "# Title\n@autoHeader:1\n",
        "Some text\n<!-- autoHeader:1 -->\n",
        "@autoheader:1\n",
        "@autoHeader:\n# Title\n",
        "",
    ],
)
def test_missing_signifier(text: str) -> None:
    with pytest.raises(MissingSignifier) as exc:
        parse_signifier(text, "-")
    assert exc.value.kind == ErrorKind.missing_signifier


def test_mismatched_separator() -> None:
    with pytest.raises(MismatchedSeparator) as exc:
        parse_signifier("@autoHeader:1.2.3\n", "-")
    assert exc.value.kind == ErrorKind.mismatched_separator


def test_strip_signifier() -> None:
    text = "@autoHeader:1\n# Title\n\nBody\n"
    assert strip_signifier(text) == "# Title\n\nBody\n"


def test_strip_signifier_after_blank_lines() -> None:
    text = "\n\n<!-- autoHeader:1 -->\n# Title\n"
    assert strip_signifier(text) == "# Title\n"


def test_strip_signifier_only_line() -> None:
    assert strip_signifier("@autoHeader:1") == ""
