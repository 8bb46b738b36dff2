# hndigest/tests/test_text_utils.py
import pytest

from hndigest.utils.text_utils import strip_html, truncate


@pytest.mark.parametrize("text", ["", "abc", "あいうえお", "x" * 200])
def test_truncate_within_limit_is_unchanged(text):
    assert truncate(text, 200) == text
    assert truncate(truncate(text, 200), 200) == text


def test_truncate_counts_characters_not_bytes():
    text = "日本語" * 100  # 300 chars, 900 bytes
    out = truncate(text, 200)
    assert len(out) == 200
    assert out.endswith("...")
    assert out[:197] == text[:197]


def test_truncate_is_idempotent():
    once = truncate("a" * 1000, 800)
    assert truncate(once, 800) == once


def test_truncate_tiny_limit():
    assert truncate("abcdef", 2) == "ab"
    assert truncate("abcdef", 3) == "..."


def test_strip_html_removes_tags_and_collapses_whitespace():
    html = "<p>Hello <b>world</b></p>\n\n<ul>\t<li>one</li>  <li>two</li></ul>"
    assert strip_html(html) == "Hello world one two"


def test_strip_html_removes_span_between_lone_brackets():
    assert strip_html("a < b and c > d") == "a d"
    assert strip_html("no tags here") == "no tags here"


def test_strip_html_is_idempotent():
    html = '<div class="x">  <a href="/y">link</a>\n text </div> '
    once = strip_html(html)
    assert strip_html(once) == once
    assert once == " link text "


@pytest.mark.parametrize("html, expected", [
    ("a <b c", "a <b c"),  # unterminated tag is left alone
    ("x<a<b>>y", "x>y"),  # the first > closes the span
    ("<<a>b>", "b>"),
    ("1 < 2 <i>and</i>  3 >", "1 and 3 >"),  # a lone < swallows up to the next >
    ("tail <", "tail <"),
])
def test_strip_html_idempotent_on_odd_brackets(html, expected):
    once = strip_html(html)
    assert once == expected
    assert strip_html(once) == once
