"""
Tests for the wrapped multi-locale string codec
"""
from lexicache.utils.wrapping import parse, unwrap, wrap


def test_wrap():
    assert wrap({"en-US": "Hello", "tr-TR": "Merhaba"}) == "<en-US>Hello</en-US><tr-TR>Merhaba</tr-TR>"
    assert wrap({}) == ""


def test_parse_reads_every_segment():
    text = "<en-US>Hello</en-US><tr-TR>Merhaba</tr-TR>"

    assert parse(text) == {"en-US": "Hello", "tr-TR": "Merhaba"}
    assert parse("plain text") == {}


def test_parse_keeps_multiline_values():
    assert parse("<en-US>line one\nline two</en-US>") == {"en-US": "line one\nline two"}


def test_unwrap_picks_locale():
    text = wrap({"en-US": "Hello", "tr-TR": "Merhaba"})

    assert unwrap(text, "tr-TR") == "Merhaba"


def test_unwrap_falls_back():
    text = wrap({"en-US": "Hello", "tr-TR": "Merhaba"})

    assert unwrap(text, "de-DE") == "Hello"
    assert unwrap(text, "de-DE", fallback_locale="tr-TR") == "Merhaba"


def test_unwrap_passes_plain_strings_through():
    assert unwrap("Hello", "tr-TR") == "Hello"
    assert unwrap("<de-DE>Hallo</de-DE>", "tr-TR") == "<de-DE>Hallo</de-DE>"
