"""
Request defaults, request building and content-type aware response parsing
on top of httpx.

    helper = new(with_base_url("https://api.example.com"), with_basic_auth("u", "p"))
    request = helper.get("/items", with_query("page", 2))
    with request.do() as response:
        items = response.parse()
"""
from .types import HelperOption, HttpMethod, RequestOption, ParserFunc
from .errors import (
    RestHelperError,
    URLSyntaxError,
    RequestBuildError,
    SerializationError,
    TransportError,
    BodyReadError,
    UnknownContentTypeError,
)
from .config import (
    DEFAULT_TIMEOUT,
    HelperConfig,
    TimeoutConfig,
    normalize_timeout,
    with_base_url,
    with_timeout,
    with_header,
    with_parser,
    with_basic_auth,
    with_bearer_auth,
    with_transport_error_ok,
)
from .parsers import (
    Parser,
    CallableParser,
    JSONParser,
    XMLParser,
    ParserRegistry,
)
from .core.request import (
    Request,
    with_query,
    with_request_header,
    with_body,
    with_json,
    with_xml,
    with_content_type,
)
from .core.response import Response
from .helper import Helper
from .factory import new, create_helper

__all__ = [
    # Types
    "HelperOption",
    "HttpMethod",
    "RequestOption",
    "ParserFunc",
    # Errors
    "RestHelperError",
    "URLSyntaxError",
    "RequestBuildError",
    "SerializationError",
    "TransportError",
    "BodyReadError",
    "UnknownContentTypeError",
    # Config
    "DEFAULT_TIMEOUT",
    "HelperConfig",
    "TimeoutConfig",
    "normalize_timeout",
    "with_base_url",
    "with_timeout",
    "with_header",
    "with_parser",
    "with_basic_auth",
    "with_bearer_auth",
    "with_transport_error_ok",
    # Parsers
    "Parser",
    "CallableParser",
    "JSONParser",
    "XMLParser",
    "ParserRegistry",
    # Request / Response
    "Helper",
    "Request",
    "Response",
    "with_query",
    "with_request_header",
    "with_body",
    "with_json",
    "with_xml",
    "with_content_type",
    # Factory
    "new",
    "create_helper",
]

__version__ = "0.1.0"
