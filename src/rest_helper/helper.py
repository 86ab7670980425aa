"""
Helper: reusable request defaults and the shared httpx client.
"""
import logging
from typing import Dict, Optional, Union

import httpx

from .config import (
    DEFAULT_TIMEOUT,
    HelperConfig,
    apply_options,
    to_httpx_timeout,
)
from .core.request import Request
from .core.url_builder import join_url, parse_url
from .parsers.registry import ParserRegistry
from .types import HelperOption, HttpMethod, RequestOption, TimeoutValue

logger = logging.getLogger("rest_helper.helper")


class Helper:
    """Builds requests against one API with shared defaults.

    Options are applied in order to a fresh configuration. The timeout
    defaults to ``DEFAULT_TIMEOUT`` seconds unless an option overrides it.
    One httpx.Client is created per Helper and reused by every request;
    pass ``httpx_client`` to supply your own (e.g. with a mock transport).
    """

    def __init__(
        self,
        *options: HelperOption,
        timeout: TimeoutValue = DEFAULT_TIMEOUT,
        httpx_client: Optional[httpx.Client] = None,
    ):
        self._config = apply_options(HelperConfig(timeout=timeout), *options)
        self._timeout = to_httpx_timeout(self._config.timeout)
        if httpx_client is not None:
            self._client = httpx_client
        else:
            self._client = httpx.Client(timeout=self._timeout)
        self._closed = False

    @property
    def config(self) -> HelperConfig:
        return self._config

    @property
    def base_url(self) -> str:
        return self._config.base_url

    @property
    def headers(self) -> Dict[str, str]:
        return dict(self._config.headers)

    @property
    def timeout(self) -> TimeoutValue:
        return self._config.timeout

    @property
    def httpx_timeout(self) -> httpx.Timeout:
        return self._timeout

    @property
    def parsers(self) -> ParserRegistry:
        return self._config.parsers

    @property
    def transport_error_ok(self) -> bool:
        return self._config.transport_error_ok

    @property
    def client(self) -> httpx.Client:
        return self._client

    @property
    def closed(self) -> bool:
        return self._closed

    def new_request(
        self, method: Union[HttpMethod, str], path: str, *options: RequestOption
    ) -> Request:
        """Build a request for ``path`` relative to the base URL.

        Default headers are added first, then ``options`` in order.

        Raises:
            URLSyntaxError: the joined URL is malformed.
            SerializationError: a JSON/XML body option could not serialize.
            RequestBuildError: method or URL rejected by the HTTP layer.
        """
        target = path
        if self._config.base_url:
            target = join_url(self._config.base_url, path)
        url = parse_url(target)

        request = Request(self, method, url)
        for name, value in self._config.headers.items():
            request.add_header(name, value)
        for option in options:
            option(request)

        request.build()
        logger.debug(f"Helper.new_request: {request!r}")
        return request

    def get(self, path: str, *options: RequestOption) -> Request:
        """GET request."""
        return self.new_request("GET", path, *options)

    def post(self, path: str, *options: RequestOption) -> Request:
        """POST request."""
        return self.new_request("POST", path, *options)

    def put(self, path: str, *options: RequestOption) -> Request:
        """PUT request."""
        return self.new_request("PUT", path, *options)

    def patch(self, path: str, *options: RequestOption) -> Request:
        """PATCH request."""
        return self.new_request("PATCH", path, *options)

    def delete(self, path: str, *options: RequestOption) -> Request:
        """DELETE request."""
        return self.new_request("DELETE", path, *options)

    def close(self) -> None:
        """Close the underlying client."""
        if not self._closed:
            self._client.close()
            self._closed = True

    def __enter__(self) -> "Helper":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"Helper({self._config!r})"
