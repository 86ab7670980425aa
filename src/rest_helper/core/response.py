"""
Response wrapper with a cached body and media-type dispatch.
"""
import logging
import re
from typing import TYPE_CHECKING, Any, Optional

import httpx

from ..errors import BodyReadError
from ..parsers.json_parser import CONTENT_TYPE_JSON
from ..parsers.registry import BUILTIN_PARSERS
from ..parsers.xml_parser import CONTENT_TYPE_XML

if TYPE_CHECKING:
    from ..helper import Helper

logger = logging.getLogger("rest_helper.response")

OK_STATUSES = frozenset({200, 201, 204})

_TOKEN = r"[!#$%&'*+\-.^_`|~0-9a-z]+"
_MEDIA_TYPE_RE = re.compile(rf"^{_TOKEN}(/{_TOKEN})?$")


def parse_media_type(value: Optional[str]) -> str:
    """Return the lower-cased base media type of a Content-Type value.

    Parameters are discarded. Missing or malformed values give ``""``.
    """
    if not value:
        return ""
    base, _, _ = value.partition(";")
    media_type = base.strip().lower()
    if not _MEDIA_TYPE_RE.match(media_type):
        return ""
    return media_type


class Response:
    """Result of Request.do().

    The body is read at most once and cached, together with any read error.
    Not safe for concurrent use from several threads.
    """

    def __init__(
        self,
        helper: "Helper",
        response: Optional[httpx.Response] = None,
        transport_error: Optional[Exception] = None,
    ):
        self._helper = helper
        self._response = response
        self._transport_error = transport_error
        self._body_read = False
        self._body: bytes = b""
        self._body_error: Optional[BodyReadError] = None

    @property
    def status(self) -> int:
        """HTTP status code, 0 when no response was received."""
        if self._response is None:
            return 0
        return self._response.status_code

    @property
    def headers(self) -> httpx.Headers:
        if self._response is None:
            return httpx.Headers()
        return self._response.headers

    @property
    def transport_error(self) -> Optional[Exception]:
        return self._transport_error

    @property
    def raw(self) -> Optional[httpx.Response]:
        return self._response

    def is_ok(self) -> bool:
        """True for 200, 201 and 204.

        A transport failure reports the Helper's ``transport_error_ok``
        setting (True unless configured otherwise).
        """
        if self._transport_error is not None:
            return self._helper.transport_error_ok
        return self.status in OK_STATUSES

    def error(self) -> str:
        """The transport failure message, else the status line (``"404 Not Found"``)."""
        if self._transport_error is not None:
            return str(self._transport_error) or type(self._transport_error).__name__
        reason = self._response.reason_phrase if self._response is not None else ""
        return f"{self.status} {reason}".rstrip()

    def body_bytes(self) -> bytes:
        """Read the whole body once; later calls return the cached bytes.

        Raises:
            BodyReadError: reading failed, or no response was received. The
                same error is raised again on later calls.
        """
        if not self._body_read:
            self._body_read = True
            self._read_body()
        if self._body_error is not None:
            raise self._body_error
        return self._body

    def _read_body(self) -> None:
        if self._response is None:
            self._body_error = BodyReadError(f"no response body: {self.error()}")
            return
        try:
            self._body = self._response.read()
        except (httpx.HTTPError, httpx.StreamError) as e:
            logger.debug(f"Response.body_bytes: read failed: {e!r}")
            error = BodyReadError(str(e) or type(e).__name__)
            error.__cause__ = e
            self._body_error = error
        else:
            logger.debug(f"Response.body_bytes: read {len(self._body)} bytes")

    def text(self) -> str:
        """The body decoded with the response charset (UTF-8 if none)."""
        data = self.body_bytes()
        encoding = self._response.encoding if self._response is not None else None
        return data.decode(encoding or "utf-8", errors="replace")

    def parse_content_type(self) -> str:
        """Base media type of the Content-Type header, ``""`` if malformed."""
        return parse_media_type(self.headers.get("content-type"))

    def parse(self, model: Any = None) -> Any:
        """Decode the body with the parser for the response media type.

        A custom parser registered on the Helper for the exact media type is
        used first; otherwise JSON and XML are built in.

        Args:
            model: Optional type (pydantic model, dataclass, typing generic)
                to validate the decoded value into.

        Raises:
            UnknownContentTypeError: no parser for the media type.
        """
        media_type = self.parse_content_type()
        parser = self._helper.parsers.resolve(media_type)
        logger.debug(f"Response.parse: media_type={media_type!r}, parser={parser!r}")
        return parser.decode(self.body_bytes(), model)

    def parse_json(self, model: Any = None) -> Any:
        """Decode the body as JSON regardless of Content-Type."""
        return BUILTIN_PARSERS[CONTENT_TYPE_JSON].decode(self.body_bytes(), model)

    def parse_xml(self, model: Any = None) -> Any:
        """Decode the body as XML regardless of Content-Type."""
        return BUILTIN_PARSERS[CONTENT_TYPE_XML].decode(self.body_bytes(), model)

    def close(self) -> None:
        """Release the connection. Safe to call more than once."""
        if self._response is not None:
            self._response.close()

    def __enter__(self) -> "Response":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"<Response [{self.error()}]>"
