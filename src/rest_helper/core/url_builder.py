"""
URL joining, validation and query encoding.
"""
import logging
import re
from typing import Iterable, List, Tuple
from urllib.parse import SplitResult, parse_qsl, urlencode, urlsplit, urlunsplit

import httpx

from ..errors import URLSyntaxError

logger = logging.getLogger("rest_helper.url_builder")

_CONTROL_CHAR_RE = re.compile(r"[\x00-\x1f\x7f]")
_BAD_ESCAPE_RE = re.compile(r"%(?![0-9A-Fa-f]{2})")


def validate_url(raw: str) -> None:
    """Reject control characters and malformed percent-escapes.

    Raises:
        URLSyntaxError: ``raw`` cannot be a URL.
    """
    if _CONTROL_CHAR_RE.search(raw):
        raise URLSyntaxError(raw, "invalid control character in URL")
    match = _BAD_ESCAPE_RE.search(raw)
    if match:
        raise URLSyntaxError(raw, f"invalid URL escape {raw[match.start():match.start() + 3]!r}")


def clean_path(path: str) -> str:
    """Lexically normalize a slash-separated path.

    Collapses repeated slashes, drops ``.`` segments and resolves ``..``
    against the preceding segment. A rooted path never climbs above ``/``.
    """
    rooted = path.startswith("/")
    segments = []
    for segment in path.split("/"):
        if segment in ("", "."):
            continue
        if segment == "..":
            if segments and segments[-1] != "..":
                segments.pop()
            elif not rooted:
                segments.append("..")
            continue
        segments.append(segment)

    cleaned = "/".join(segments)
    if rooted:
        return "/" + cleaned
    return cleaned or "."


def join_paths(*elems: str) -> str:
    """Join non-empty path elements with ``/`` and clean the result."""
    joined = "/".join(e for e in elems if e)
    if not joined:
        return ""
    return clean_path(joined)


def _split(raw: str) -> SplitResult:
    try:
        return urlsplit(raw)
    except ValueError as e:
        raise URLSyntaxError(raw, str(e)) from e


def join_url(base_url: str, path: str) -> str:
    """Join ``path`` onto the path of ``base_url``.

    The base URL's query and fragment are kept. A query or fragment written
    into ``path`` is split off and merged in rather than escaped into the
    path. A trailing slash on ``path`` is preserved.

    >>> join_url("http://localhost", "/test")
    'http://localhost/test'
    >>> join_url("http://localhost/api/", "//v1/users/")
    'http://localhost/api/v1/users/'

    Raises:
        URLSyntaxError: ``base_url`` or ``path`` is malformed.
    """
    validate_url(base_url)
    validate_url(path)
    parts = _split(base_url)

    path, _, fragment = path.partition("#")
    path, _, query = path.partition("?")

    if parts.path.startswith("/"):
        joined = join_paths(parts.path, path)
    else:
        joined = join_paths("/" + parts.path, path)[1:]
    if path.endswith("/") and not joined.endswith("/"):
        joined += "/"
    if parts.netloc and joined and not joined.startswith("/"):
        joined = "/" + joined

    merged_query = "&".join(q for q in (parts.query, query) if q)
    url = urlunsplit((parts.scheme, parts.netloc, joined, merged_query, fragment or parts.fragment))
    logger.debug(f"join_url: base_url={base_url!r}, path={path!r} -> {url!r}")
    return url


def parse_url(raw: str) -> httpx.URL:
    """Parse ``raw`` into an httpx.URL.

    Raises:
        URLSyntaxError: ``raw`` is malformed.
    """
    validate_url(raw)
    _split(raw)
    try:
        return httpx.URL(raw)
    except (httpx.InvalidURL, TypeError, ValueError) as e:
        raise URLSyntaxError(raw, str(e)) from e


def query_pairs(url: httpx.URL) -> List[Tuple[str, str]]:
    """Return the name/value pairs already present in the URL query."""
    raw = url.query.decode("ascii") if url.query else ""
    return parse_qsl(raw, keep_blank_values=True)


def encode_query(pairs: Iterable[Tuple[str, str]]) -> str:
    """Encode query pairs sorted by key.

    The sort is stable, so values sharing a key keep their insertion order.
    """
    return urlencode(sorted(pairs, key=lambda pair: pair[0]))
