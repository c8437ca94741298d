"""
Multi-locale wrapped strings.

Several locales' values can be packed into one stored value:

    <en-US>Hello</en-US><tr-TR>Merhaba</tr-TR>

These helpers are a plain codec; the service never applies them.
"""
import re
from typing import Dict, Mapping

WRAPPED_SEGMENT = re.compile(r"<([^<>/]+)>(.*?)</\1>", re.DOTALL)


def wrap(values: Mapping[str, str]) -> str:
    """
    Pack locale -> value pairs into one string.

    Args:
        values: Mapping of locale code to text

    Returns:
        Concatenated <code>text</code> segments, in mapping order
    """
    return "".join(f"<{locale}>{value}</{locale}>" for locale, value in values.items())


def parse(text: str) -> Dict[str, str]:
    """Inverse of wrap(). Text outside segments is ignored."""
    return {match.group(1): match.group(2) for match in WRAPPED_SEGMENT.finditer(text)}


def unwrap(text: str, locale: str, fallback_locale: str = "en-US") -> str:
    """
    Pick one locale's value out of a wrapped string.

    Returns:
        The locale's segment, else the fallback locale's segment, else the
        input unchanged (plain, unwrapped values pass straight through)
    """
    for code in (locale, fallback_locale):
        match = re.search(f"<{re.escape(code)}>(.*?)</{re.escape(code)}>", text, re.DOTALL)
        if match:
            return match.group(1)
    return text
