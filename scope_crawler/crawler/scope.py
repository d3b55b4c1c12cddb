"""
URL resolution and scope filtering for ScopeCrawler.
"""
from __future__ import annotations

import re
from urllib.parse import urlsplit

from yarl import URL

from scope_crawler.errors import ParseError

__all__ = ("normalize_url", "in_scope")

_CONTROL_RE = re.compile(r"[\x00-\x1f\x7f]")
_BAD_ESCAPE_RE = re.compile(r"%(?![0-9A-Fa-f]{2})")


def _parse(value: str) -> URL:
    if _CONTROL_RE.search(value):
        raise ParseError(f"invalid control character in URL {value!r}")
    try:
        parts = urlsplit(value)
        # accessing port validates it (non-numeric or out of range)
        parts.port
    except ValueError as exc:
        raise ParseError(f"invalid URL {value!r}: {exc}") from exc
    # the query is kept verbatim, everything else must hold valid escapes
    for piece in (parts.netloc, parts.path, parts.fragment):
        if _BAD_ESCAPE_RE.search(piece):
            raise ParseError(f"invalid escape in URL {value!r}")
    try:
        return URL(value)
    except (ValueError, TypeError) as exc:
        raise ParseError(f"invalid URL {value!r}: {exc}") from exc


def normalize_url(base: str, ref: str) -> str:
    """
    Resolve *ref* (absolute or relative) against *base* and return the
    canonical, percent-encoded absolute URL string.

    Equivalent spellings (``a b`` and ``a%20b``, raw and encoded non-ASCII
    paths) come out identical. Raises ParseError if either value is not a
    syntactically valid URL.
    """
    base_url = _parse(base)
    ref_url = _parse(ref)
    try:
        resolved = base_url.join(ref_url) if ref else base_url
    except ValueError as exc:
        raise ParseError(f"cannot resolve {ref!r} against {base!r}: {exc}") from exc
    return str(resolved)


def in_scope(seed: str, candidate: str) -> bool:
    """Return True if *candidate* starts with the literal *seed* string."""
    return candidate.startswith(seed)
