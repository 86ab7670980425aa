"""
Configuration for rest_helper.

A Helper is assembled from option callables applied in order to a fresh
HelperConfig. Scalar settings (base URL, timeout) take the last value given;
headers and parsers are merged by key.
"""
import logging
from dataclasses import dataclass, field
from typing import Dict, Mapping, Union

import httpx
from pydantic import SecretStr

from .auth.encoding import encode_basic_auth, encode_bearer_auth, mask_auth_value
from .parsers.registry import ParserLike, ParserRegistry
from .types import HeaderPairs, HelperOption, TimeoutValue

logger = logging.getLogger("rest_helper.config")

SENSITIVE_HEADERS = frozenset({"authorization", "x-api-key", "proxy-authorization"})


@dataclass
class TimeoutConfig:
    """Timeout configuration in seconds."""

    connect: float = 15.0
    read: float = 15.0
    write: float = 15.0
    pool: float = 15.0


# Default values
DEFAULT_TIMEOUT = 15.0


@dataclass
class HelperConfig:
    """Helper configuration, mutated by HelperOption callables."""

    base_url: str = ""
    timeout: TimeoutValue = DEFAULT_TIMEOUT
    headers: Dict[str, str] = field(default_factory=dict)
    parsers: ParserRegistry = field(default_factory=ParserRegistry)
    # Whether is_ok() reports True for a response whose request failed in
    # transport. True keeps the permissive historical behaviour.
    transport_error_ok: bool = True

    def __repr__(self) -> str:
        return (
            f"HelperConfig(base_url={self.base_url!r}, "
            f"timeout={self.timeout!r}, "
            f"headers={mask_headers(self.headers)!r}, "
            f"parsers={self.parsers!r}, "
            f"transport_error_ok={self.transport_error_ok!r})"
        )


def mask_headers(
    headers: Union[Dict[str, str], HeaderPairs]
) -> Union[Dict[str, str], HeaderPairs]:
    """Mask credential headers for safe logging.

    Accepts a mapping or a list of name/value pairs and returns the same shape.
    """
    items = headers.items() if isinstance(headers, Mapping) else headers
    masked = [
        (name, mask_auth_value(value) if name.lower() in SENSITIVE_HEADERS else value)
        for name, value in items
    ]
    return dict(masked) if isinstance(headers, Mapping) else masked


def normalize_timeout(timeout: Union[TimeoutConfig, float, None]) -> TimeoutConfig:
    """Normalize timeout config."""
    if timeout is None:
        return TimeoutConfig()
    if isinstance(timeout, (int, float)):
        return TimeoutConfig(connect=timeout, read=timeout, write=timeout, pool=timeout)
    return timeout


def to_httpx_timeout(timeout: Union[TimeoutConfig, float, None]) -> httpx.Timeout:
    resolved = normalize_timeout(timeout)
    return httpx.Timeout(
        connect=resolved.connect,
        read=resolved.read,
        write=resolved.write,
        pool=resolved.pool,
    )


# Helper options


def with_base_url(base: str) -> HelperOption:
    """Set the base URL every request path is joined onto."""

    def option(config: HelperConfig) -> None:
        config.base_url = base

    return option


def with_timeout(timeout: TimeoutValue) -> HelperOption:
    """Set the request timeout (seconds or TimeoutConfig)."""

    def option(config: HelperConfig) -> None:
        config.timeout = timeout

    return option


def with_header(name: str, value: str) -> HelperOption:
    """Add or overwrite a default header sent with every request."""

    def option(config: HelperConfig) -> None:
        config.headers[name] = value

    return option


def with_parser(media_type: str, parser: ParserLike) -> HelperOption:
    """Register a parser (Parser instance or ``fn(data) -> value``) for a media type."""

    def option(config: HelperConfig) -> None:
        config.parsers.register(media_type, parser)

    return option


def with_basic_auth(username: str, password: Union[str, SecretStr]) -> HelperOption:
    """Send ``Authorization: Basic <base64(username:password)>`` by default."""
    return with_header("Authorization", encode_basic_auth(username, password))


def with_bearer_auth(token: Union[str, SecretStr]) -> HelperOption:
    """Send ``Authorization: Bearer <token>`` by default."""
    return with_header("Authorization", encode_bearer_auth(token))


def with_transport_error_ok(permissive: bool) -> HelperOption:
    """Choose what is_ok() reports for a request that failed in transport.

    ``True`` (default) does not flag transport failures; ``False`` treats
    them as not OK.
    """

    def option(config: HelperConfig) -> None:
        config.transport_error_ok = permissive

    return option


def apply_options(config: HelperConfig, *options: HelperOption) -> HelperConfig:
    """Apply ``options`` to ``config`` in order and return it."""
    for option in options:
        option(config)
    logger.debug(f"apply_options: {config!r}")
    return config
