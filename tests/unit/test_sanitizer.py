# ============================================================================
# FILE: tests/unit/test_sanitizer.py
# ============================================================================
"""
Unit tests for text sanitization, HTML escaping and truncation
"""

import time

import pytest

from geriatric_case.utils.sanitizer import (
    escape_html,
    sanitize_text,
    strip_tags,
    truncate_text,
)


@pytest.mark.parametrize("value", [None, 123, {}, [], ""])
def test_invalid_input_yields_empty_string(value):
    """Non-strings and empty strings degrade to ''"""
    assert sanitize_text(value) == ""
    assert escape_html(value) == ""
    assert truncate_text(value, 10) == ""


def test_sanitize_removes_script_tags():
    result = sanitize_text("<script>alert('xss')</script>Hello")
    assert "<script" not in result
    assert "Hello" in result


def test_sanitize_removes_event_handler_markup():
    result = sanitize_text('<img src=x onerror="alert(1)">85F')
    assert result == "85F"


def test_sanitize_handles_nested_malformed_tags():
    """Re-stripping catches tags revealed by the previous pass"""
    result = sanitize_text("<scr<script>ipt>alert(1)</script>")
    assert "<" not in result


def test_sanitize_removes_control_characters():
    result = sanitize_text("Aspirin\x00 81mg\x07\x1b daily\x7f")
    assert result == "Aspirin 81mg daily"


def test_sanitize_keeps_newlines_tabs_and_unicode():
    text = "Na 128\n\tK 4.1\r\nCafé 中文 🩺"
    assert sanitize_text(text) == text


def test_sanitize_leaves_entities_alone():
    assert sanitize_text("&lt;b&gt; stays") == "&lt;b&gt; stays"


def test_strip_tags_is_stable():
    assert strip_tags("no markup here") == "no markup here"


def test_strip_tags_nested_brackets_keep_stray_close():
    """The first "<" opens the tag and the first ">" closes it"""
    assert strip_tags("<<b>>x") == ">x"


@pytest.mark.parametrize("text", [
    "<scr<script>ipt>alert(1)</script>",
    "<<b>>x",
    "<a href='x' onclick='y'>link</a> >> <<",
    "Cr <1.2, K <5 and BNP >400",
    "<img src=x onerror=alert(1)/\x00\x07>tail",
    "<<<<>>>>",
    "\x1b[31m<b>red</b>\x7f",
    "&lt;script&gt; <\n> text",
])
def test_sanitize_is_idempotent(text):
    once = sanitize_text(text)
    assert sanitize_text(once) == once


def test_sanitize_lab_comparisons_is_fast():
    text = "Cr <1.2 " * 12_500
    start = time.perf_counter()
    result = sanitize_text(text)
    assert time.perf_counter() - start < 1.0
    assert result == text


def test_sanitize_unclosed_brackets_is_fast():
    start = time.perf_counter()
    assert sanitize_text("<" * 100_000) == "<" * 100_000
    assert sanitize_text("<" * 50_000 + ">" * 50_000) == ">" * 49_999
    assert time.perf_counter() - start < 1.0


def test_escape_html_all_specials():
    assert escape_html("<a&b>'\"") == "&lt;a&amp;b&gt;&#39;&quot;"


def test_escape_html_single_pass():
    """Existing entities are escaped again, not left as entities"""
    assert escape_html("&amp;") == "&amp;amp;"


def test_escape_then_sanitize_order_for_documents():
    raw = '<b>Fall</b> & "syncope"'
    assert escape_html(sanitize_text(raw)) == "Fall &amp; &quot;syncope&quot;"


def test_truncate_short_text_unchanged():
    assert truncate_text("Short", 10) == "Short"
    assert truncate_text("Exactly10!", 10) == "Exactly10!"


def test_truncate_long_text():
    result = truncate_text("This is a very long text", 10)
    assert result == "This is..."
    assert len(result) == 10


def test_truncate_custom_suffix():
    assert truncate_text("Lisinopril 10mg daily", 12, suffix="…") == "Lisinopril …"


def test_truncate_limit_smaller_than_suffix():
    assert truncate_text("Metformin", 2) == "..."
