"""
Errors raised by rest_helper.

Every failure is surfaced to the immediate caller; nothing here is retried.
"""
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .core.response import Response


class RestHelperError(Exception):
    """Base class for rest_helper errors."""

    code = "REST_HELPER_ERROR"


class URLSyntaxError(RestHelperError, ValueError):
    """The base URL, path or joined URL cannot be parsed."""

    code = "URL_SYNTAX"

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"invalid URL {url!r}: {reason}")
        self.url = url
        self.reason = reason


class RequestBuildError(RestHelperError):
    """The outgoing request cannot be constructed from method, URL and body."""

    code = "REQUEST_BUILD"


class SerializationError(RestHelperError):
    """A JSON or XML request body could not be serialized."""

    code = "SERIALIZATION"

    def __init__(self, fmt: str, reason: str) -> None:
        super().__init__(f"cannot serialize {fmt} body: {reason}")
        self.format = fmt
        self.reason = reason


class TransportError(RestHelperError):
    """Network, timeout or TLS failure while executing a request.

    ``response`` is a Response that records the failure, so callers can use
    ``error()`` and ``is_ok()`` the same way as for a completed exchange.
    """

    code = "TRANSPORT"

    def __init__(self, message: str, response: Optional["Response"] = None) -> None:
        super().__init__(message)
        self.response = response


class BodyReadError(RestHelperError):
    """Reading the response body failed."""

    code = "BODY_READ"


class UnknownContentTypeError(RestHelperError):
    """No parser is available for the response media type."""

    code = "UNKNOWN_CONTENT_TYPE"

    def __init__(self, content_type: str) -> None:
        super().__init__(f"unknown content-type: '{content_type}'")
        self.content_type = content_type
