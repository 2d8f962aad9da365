"""Micro-parsers for derived record fields.

These functions slice short values out of raw extracted strings: topic ids
out of link paths, usernames out of profile links, tag names out of node
links, elapsed-time phrases out of decorated metadata lines, and counts
out of short labels. decode_cf_email undoes Cloudflare email protection
so addresses read as text.

Every parser is total. When an expected delimiter is missing the result is
the empty string (or None for usernames), never an IndexError or
ValueError.
"""

from __future__ import annotations

import re

TOPIC_PREFIX = "/t/"
TAG_PREFIX = "/go/"
FRAGMENT_SEPARATOR = "#"

# "前" is the suffix meaning "ago" in elapsed-time phrases ("36 天前").
AGO_MARKER = "前"
BULLET = "•"

_LEADING_INT = re.compile(r"\s*([0-9]+)")


def normalize_whitespace(text: str) -> str:
    """Collapse whitespace runs into single spaces and trim the ends.

    Non-breaking spaces count as whitespace.

    Examples:
        >>> normalize_whitespace("  a \\n\\t b\\u00a0 c ")
        'a b c'
    """
    return " ".join(text.split())


def strip_whitespace(text: str) -> str:
    """Remove every whitespace character from ``text``."""
    return "".join(text.split())


def slice_after(value: str | None, prefix: str) -> str:
    """Return the part of ``value`` after the first occurrence of ``prefix``.

    Examples:
        >>> slice_after("/go/programming", "/go/")
        'programming'
        >>> slice_after("https://www.v2ex.com/go/qna", "/go/")
        'qna'
        >>> slice_after("/member/alice", "/go/")
        ''
    """
    if not value:
        return ""
    start = value.find(prefix)
    if start < 0:
        return ""
    return value[start + len(prefix) :]


def slice_between(value: str | None, prefix: str, end: str) -> str:
    """Return the part of ``value`` between ``prefix`` and the next ``end``.

    Both delimiters must be present; otherwise the result is empty.

    Examples:
        >>> slice_between("/t/12345#reply10", "/t/", "#")
        '12345'
        >>> slice_between("/t/12345", "/t/", "#")
        ''
    """
    tail = slice_after(value, prefix)
    stop = tail.find(end)
    if stop < 0:
        return ""
    return tail[:stop]


def extract_topic_id(link: str | None) -> str:
    """Extract the topic id from a topic link such as ``/t/12345#reply10``."""
    return slice_between(link, TOPIC_PREFIX, FRAGMENT_SEPARATOR)


def extract_tag_name(link: str | None) -> str:
    """Extract the node short name from a node link such as ``/go/qna``."""
    return slice_after(link, TAG_PREFIX)


def extract_username(link: str | None) -> str | None:
    """Extract the username from a profile link such as ``/member/alice``.

    Returns:
        The text after the final ``/``, or None when there is no link at
        all. None means "unknown"; an empty string means the link ended in
        a slash.
    """
    if not link:
        return None
    return link[link.rfind("/") + 1 :]


def extract_time_phrase(
    text: str | None,
    marker: str = AGO_MARKER,
    separator: str = BULLET,
) -> str:
    """Extract the elapsed-time phrase from a decorated metadata line.

    The line looks like ``"•  36 天前  •  最后回复来自"``: bullet-separated
    segments, one of which ends with the "ago" marker. Whitespace is
    removed first, so the phrase comes back compacted (``"36天前"``).

    Args:
        text: The raw metadata line.
        marker: Character that ends the phrase (kept in the result).
        separator: Character that separates segments.

    Returns:
        The phrase through the first marker, or ``""`` if there is no marker.
    """
    if not text or marker not in text:
        return ""

    compact = strip_whitespace(text)
    end = compact.find(marker)
    start = compact.rfind(separator, 0, end) + 1
    return compact[start : end + len(marker)].strip()


def extract_leading_int(text: str | None) -> int:
    """Return the integer a text starts with, or 0.

    Examples:
        >>> extract_leading_int("2 条未读提醒")
        2
        >>> extract_leading_int("没有未读提醒")
        0
    """
    match = _LEADING_INT.match(text or "")
    return int(match.group(1)) if match else 0


def decode_cf_email(encoded: str | None) -> str:
    """Decode an address obfuscated by Cloudflare's email protection.

    The ``data-cfemail`` value is hex: the first byte is a key and every
    following byte is one character XORed with it. Malformed input decodes
    to ``""``.

    Examples:
        >>> decode_cf_email("422302206c212d")
        'a@b.co'
        >>> decode_cf_email("not hex")
        ''
    """
    try:
        data = bytes.fromhex(encoded or "")
    except ValueError:
        return ""
    if not data:
        return ""
    key = data[0]
    return "".join(chr(byte ^ key) for byte in data[1:])
