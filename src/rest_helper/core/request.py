"""
Request building and execution.

A Request keeps one ordered header list and one list of added query pairs.
Both are applied when the outgoing httpx.Request is built, so mutations made
before and after construction go through the same store.
"""
import logging
import re
from typing import TYPE_CHECKING, Any, Iterator, Optional

import httpx

from ..config import mask_headers
from ..errors import RequestBuildError, TransportError
from ..parsers.json_parser import CONTENT_TYPE_JSON, encode_json
from ..parsers.xml_parser import CONTENT_TYPE_XML, encode_xml
from ..types import BodySource, HeaderPairs, QueryPairs, RequestOption
from .response import Response
from .url_builder import encode_query, query_pairs

if TYPE_CHECKING:
    from ..helper import Helper

logger = logging.getLogger("rest_helper.request")

HEADER_CONTENT_TYPE = "Content-Type"
HEADER_CONTENT_LENGTH = "Content-Length"

_METHOD_TOKEN_RE = re.compile(r"^[!#$%&'*+\-.^_`|~0-9A-Za-z]+$")
_READ_CHUNK_SIZE = 64 * 1024


def _iter_reader(reader: Any) -> Iterator[bytes]:
    while True:
        chunk = reader.read(_READ_CHUNK_SIZE)
        if not chunk:
            return
        yield chunk.encode("utf-8") if isinstance(chunk, str) else chunk


class Request:
    """A single outgoing request built from a Helper."""

    def __init__(self, helper: "Helper", method: str, url: httpx.URL):
        self._helper = helper
        self._method = method
        self._url = url
        self._headers: HeaderPairs = []
        self._query: QueryPairs = []
        self._body: Optional[BodySource] = None

    @property
    def helper(self) -> "Helper":
        return self._helper

    @property
    def method(self) -> str:
        return self._method

    @property
    def url(self) -> str:
        """The final request URL, query encoded and sorted by key."""
        return str(self._final_url())

    @property
    def headers(self) -> HeaderPairs:
        """Header name/value pairs in the order they were added."""
        return list(self._headers)

    @property
    def body(self) -> Optional[BodySource]:
        return self._body

    def get_header(self, name: str) -> Optional[str]:
        """Return the last value added under ``name`` (case-insensitive)."""
        lowered = name.lower()
        for key, value in reversed(self._headers):
            if key.lower() == lowered:
                return value
        return None

    def add_header(self, name: str, value: str) -> None:
        """Add a header. Existing values under the same name are kept."""
        self._headers.append((name, value))

    def set_header(self, name: str, value: str) -> None:
        """Replace every value under ``name`` (case-insensitive) with ``value``."""
        self.remove_header(name)
        self._headers.append((name, value))

    def remove_header(self, name: str) -> None:
        lowered = name.lower()
        self._headers = [(k, v) for k, v in self._headers if k.lower() != lowered]

    def add_query(self, name: str, value: Any) -> None:
        """Add a query parameter. Existing values under the same name are kept."""
        self._query.append((name, str(value)))

    def set_body(self, body: Optional[BodySource]) -> None:
        self._body = body

    def _final_url(self) -> httpx.URL:
        if not self._query:
            return self._url
        pairs = query_pairs(self._url) + self._query
        return self._url.copy_with(query=encode_query(pairs).encode("ascii"))

    def _content(self) -> Any:
        body = self._body
        if body is None or isinstance(body, (bytes, str)):
            return body
        if hasattr(body, "read"):
            return _iter_reader(body)
        return body

    def build(self) -> httpx.Request:
        """Build the outgoing httpx.Request.

        Raises:
            RequestBuildError: the method is not a valid token, or httpx
                rejects the URL, headers or body.
        """
        if not _METHOD_TOKEN_RE.match(self._method):
            raise RequestBuildError(f"invalid method {self._method!r}")
        try:
            return self._helper.client.build_request(
                self._method,
                self._final_url(),
                headers=list(self._headers),
                content=self._content(),
                timeout=self._helper.httpx_timeout,
            )
        except (httpx.InvalidURL, TypeError, ValueError) as e:
            raise RequestBuildError(f"cannot build {self._method} request: {e}") from e

    def do(self) -> Response:
        """Send the request through the Helper's client.

        The caller must close the returned Response.

        Raises:
            TransportError: network, timeout or TLS failure. ``e.response``
                records the failure.
            RuntimeError: the Helper has been closed.
        """
        if self._helper.closed:
            raise RuntimeError("Helper has been closed")

        request = self.build()
        logger.debug(
            f"Request.do: {self._method} {request.url} "
            f"headers={mask_headers(self._headers)}"
        )

        try:
            raw = self._helper.client.send(request, stream=True)
        except httpx.HTTPError as e:
            logger.debug(f"Request.do: {self._method} {request.url} failed: {e!r}")
            response = Response(self._helper, transport_error=e)
            raise TransportError(response.error(), response=response) from e

        logger.debug(f"Request.do: {self._method} {request.url} -> {raw.status_code}")
        return Response(self._helper, raw)

    def __repr__(self) -> str:
        return f"<Request {self._method} {self.url}>"


# Request options


def with_query(name: str, value: Any) -> RequestOption:
    """Add a query parameter."""

    def option(request: Request) -> None:
        request.add_query(name, value)

    return option


def with_request_header(name: str, value: str) -> RequestOption:
    """Add a request header (additive)."""

    def option(request: Request) -> None:
        request.add_header(name, value)

    return option


def with_body(body: BodySource) -> RequestOption:
    """Send ``body`` as-is: bytes, str, an iterable of bytes or a readable file.

    Iterators and readers are consumed when the request is sent, so such a
    Request can only be sent once.
    """

    def option(request: Request) -> None:
        request.remove_header(HEADER_CONTENT_LENGTH)
        request.set_body(body)

    return option


def with_json(value: Any) -> RequestOption:
    """Serialize ``value`` as JSON and send it as the body.

    Sets Content-Type and Content-Length. Serialization errors propagate out
    of request construction as SerializationError.
    """

    def option(request: Request) -> None:
        data = encode_json(value)
        request.set_header(HEADER_CONTENT_TYPE, CONTENT_TYPE_JSON)
        request.set_header(HEADER_CONTENT_LENGTH, str(len(data)))
        request.set_body(data)

    return option


def with_xml(value: Any, root: Optional[str] = None) -> RequestOption:
    """Serialize ``value`` as XML and send it as the body.

    Sets Content-Type and Content-Length. Serialization errors propagate out
    of request construction as SerializationError.
    """

    def option(request: Request) -> None:
        data = encode_xml(value, root=root)
        request.set_header(HEADER_CONTENT_TYPE, CONTENT_TYPE_XML)
        request.set_header(HEADER_CONTENT_LENGTH, str(len(data)))
        request.set_body(data)

    return option


def with_content_type(content_type: str) -> RequestOption:
    """Override the Content-Type header."""

    def option(request: Request) -> None:
        request.set_header(HEADER_CONTENT_TYPE, content_type)

    return option
