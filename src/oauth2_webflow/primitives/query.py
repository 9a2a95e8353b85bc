"""Query parameter encoding shared by the Web Server flow artifacts.

Every artifact of the flow is a bag of named parameters bound to a URL or to
a form-encoded request body. This module owns the rules for turning field
values into query strings and back.
"""

from __future__ import annotations

from collections.abc import Mapping
from urllib.parse import parse_qsl, unquote_plus, urlencode, urlsplit, urlunsplit


def encode_value(value: object) -> str:
    """Encode a single parameter value for the wire.

    Booleans are lowercase ``"true"``/``"false"``; strings pass through
    unchanged; anything else goes through ``str()``.
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return value
    return str(value)


def to_query_params(fields: Mapping[str, object]) -> dict[str, str]:
    """Encode fields keyed by wire name, omitting unset (``None``) ones."""
    return {
        name: encode_value(value) for name, value in fields.items() if value is not None
    }


def append_query(base_url: str, params: Mapping[str, str]) -> str:
    """Append parameters to a URL, keeping its existing query and fragment.

    Existing query segments are kept byte-for-byte, except those whose
    decoded name matches one of ``params``; those are replaced, so the
    appended values are the only ones on the wire.

    Args:
        base_url: Encoded base URL, possibly with a query component
        params: Already-encoded parameters to add

    Returns:
        The composed URL
    """
    parts = urlsplit(base_url)
    query = urlencode(list(params.items()))

    if parts.query:
        existing = [
            segment
            for segment in parts.query.split("&")
            if unquote_plus(segment.split("=", 1)[0]) not in params
        ]
        query = "&".join(filter(None, ["&".join(existing), query]))

    return urlunsplit((parts.scheme, parts.netloc, parts.path, query, parts.fragment))


def parse_query(url: str) -> dict[str, str]:
    """Decode the query component of a URL.

    The first occurrence of a repeated key wins and blank values are kept.
    Malformed input yields whatever could be decoded, never an exception.
    """
    try:
        query = urlsplit(url).query
    except ValueError:
        # urlsplit rejects e.g. unbalanced IPv6 brackets; fall back to the raw tail
        _, _, query = url.partition("?")
        query = query.split("#", 1)[0]

    params: dict[str, str] = {}
    for name, value in parse_qsl(query, keep_blank_values=True):
        params.setdefault(name, value)
    return params
