#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2vdom/utils/security.py
"""URL safety helpers.

This module provides the URL handling shared by the compiler and the
sanitizer: normalization of link targets before they are placed on ``href``
and ``src`` attributes, protocol detection for allow-list checks, and
detection of schemes that are never safe to emit.

"""

from __future__ import annotations

import logging
import re
import string
from urllib.parse import quote, urlparse

from md2vdom.constants import DANGEROUS_SCHEMES, URI_SAFE_CHARACTERS

logger = logging.getLogger(__name__)

_PERCENT_ESCAPE = re.compile(r"%[0-9A-Fa-f]{2}")
_KEEP_CHARACTERS = frozenset(string.ascii_letters + string.digits + URI_SAFE_CHARACTERS)


def normalize_uri(uri: str) -> str:
    """Percent-encode the characters of a URI that are unsafe in an attribute.

    Existing ``%XX`` escapes are kept as they are, reserved and unreserved
    characters pass through, and everything else (whitespace, control
    characters, non-ASCII text) is UTF-8 percent-encoded. The scheme is never
    rewritten.

    Parameters
    ----------
    uri : str
        Link or image target as written in the source

    Returns
    -------
    str
        Normalized URI

    Examples
    --------
    >>> normalize_uri("https://example.com/a b")
    'https://example.com/a%20b'
    >>> normalize_uri("/caf%C3%A9")
    '/caf%C3%A9'
    >>> normalize_uri("/café")
    '/caf%C3%A9'

    """
    result: list[str] = []
    index = 0
    length = len(uri)

    while index < length:
        character = uri[index]
        if character == "%" and _PERCENT_ESCAPE.match(uri, index):
            result.append(uri[index : index + 3])
            index += 3
            continue
        if character in _KEEP_CHARACTERS:
            result.append(character)
        else:
            result.append(quote(character, safe="", errors="surrogatepass"))
        index += 1

    return "".join(result)


def is_relative_url(url: str) -> bool:
    """Check if a URL is relative (has no scheme before its path, query, or fragment).

    A URL is relative when it has no colon, or when a ``/``, ``?`` or ``#``
    occurs before the first colon.

    Parameters
    ----------
    url : str
        URL to check

    Returns
    -------
    bool
        True if URL is relative, False otherwise

    Examples
    --------
    >>> is_relative_url("#section")
    True
    >>> is_relative_url("/path:with-colon")
    True
    >>> is_relative_url("https://example.com")
    False

    """
    url_stripped = url.strip()
    colon = url_stripped.find(":")
    if colon == -1:
        return True

    for marker in ("/", "?", "#"):
        position = url_stripped.find(marker)
        if position != -1 and position < colon:
            return True

    return False


def get_url_protocol(url: str) -> str | None:
    """Return the lower-cased protocol of an absolute URL, or None for relative URLs."""
    if is_relative_url(url):
        return None
    return url.strip()[: url.strip().find(":")].lower()


def is_url_scheme_dangerous(url: str) -> bool:
    """Check if a URL uses a dangerous scheme.

    Dangerous schemes include javascript:, vbscript:, data:text/html, and others
    that can be used for XSS attacks or malicious code execution.

    Parameters
    ----------
    url : str
        URL to check

    Returns
    -------
    bool
        True if URL uses a dangerous scheme, False otherwise

    Examples
    --------
    >>> is_url_scheme_dangerous("https://example.com")
    False
    >>> is_url_scheme_dangerous("javascript:alert('xss')")
    True
    >>> is_url_scheme_dangerous("/relative/path")
    False

    """
    if not url or not url.strip():
        return False

    # Browsers ignore embedded tabs and newlines in schemes
    url_lower = re.sub(r"[\x00-\x20]", "", url).lower()

    if is_relative_url(url_lower):
        return False

    for dangerous_scheme in DANGEROUS_SCHEMES:
        if url_lower.startswith(dangerous_scheme):
            return True

    try:
        scheme = urlparse(url_lower).scheme
    except ValueError:
        # If URL parsing fails, consider it potentially dangerous
        logger.debug(f"Could not parse URL {url!r}, treating it as dangerous")
        return True

    return scheme in ("javascript", "vbscript")


__all__ = [
    "normalize_uri",
    "is_relative_url",
    "get_url_protocol",
    "is_url_scheme_dangerous",
]
