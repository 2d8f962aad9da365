"""URL normalization for avatar images.

Listing pages embed small avatar variants, often as protocol-relative URLs.
adjust_avatar rewrites them to an absolute https URL of the large variant.
"""

from __future__ import annotations

import re
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

DEFAULT_SCHEME = "https"

# v2ex serves avatars as <uid>_mini.png (24px), _normal.png (48px) and
# _large.png (73px); gravatar proxies take the size as the "s" parameter.
_SIZE_VARIANT_RE = re.compile(r"_(?:mini|normal)(\.[A-Za-z0-9]+)$")
LARGE_SUFFIX = "_large"
LARGE_GRAVATAR_SIZE = "73"


def adjust_avatar(url: str | None) -> str:
    """Normalize an avatar URL to an absolute URL of its large variant.

    Args:
        url: Raw avatar ``src`` as found in the page.

    Returns:
        The normalized URL, or ``""`` for an empty input.

    Examples:
        >>> adjust_avatar("//cdn.v2ex.com/avatar/c4ca/4238/1_normal.png?m=1")
        'https://cdn.v2ex.com/avatar/c4ca/4238/1_large.png?m=1'
        >>> adjust_avatar("https://cdn.v2ex.com/gravatar/abc?s=48&d=retro")
        'https://cdn.v2ex.com/gravatar/abc?s=73&d=retro'
    """
    if not url:
        return ""

    url = url.strip()
    if url.startswith("//"):
        url = f"{DEFAULT_SCHEME}:{url}"

    parts = urlsplit(url)
    path = _SIZE_VARIANT_RE.sub(rf"{LARGE_SUFFIX}\1", parts.path)

    query = parts.query
    if "/gravatar/" in path and query:
        params = [
            (key, LARGE_GRAVATAR_SIZE if key == "s" else value)
            for key, value in parse_qsl(query, keep_blank_values=True)
        ]
        query = urlencode(params)

    return urlunsplit(
        (parts.scheme, parts.netloc, path, query, parts.fragment)
    )
