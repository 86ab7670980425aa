"""
Factory functions for creating helpers.
"""
from typing import Dict, Mapping, Optional, Tuple, Union

import httpx
from pydantic import SecretStr

from .config import (
    DEFAULT_TIMEOUT,
    with_base_url,
    with_basic_auth,
    with_bearer_auth,
    with_header,
    with_parser,
)
from .helper import Helper
from .parsers.registry import ParserLike
from .types import HelperOption, TimeoutValue


def new(*options: HelperOption, **kwargs) -> Helper:
    """Create a Helper from options (``New(options...)``)."""
    return Helper(*options, **kwargs)


def create_helper(
    base_url: str = "",
    headers: Optional[Dict[str, str]] = None,
    timeout: TimeoutValue = DEFAULT_TIMEOUT,
    parsers: Optional[Mapping[str, ParserLike]] = None,
    basic_auth: Optional[Tuple[str, Union[str, SecretStr]]] = None,
    bearer_token: Optional[Union[str, SecretStr]] = None,
    httpx_client: Optional[httpx.Client] = None,
) -> Helper:
    """
    Create a Helper from keyword arguments.

    Each argument maps onto the matching option; ``basic_auth`` and
    ``bearer_token`` both set the Authorization header, bearer applied last.

    Example:
        helper = create_helper(
            base_url="https://api.example.com/v1",
            headers={"Accept": "application/json"},
            basic_auth=("user", "secret"),
        )
        with helper.get("/users").do() as response:
            users = response.parse()
    """
    options = []
    if base_url:
        options.append(with_base_url(base_url))
    for name, value in (headers or {}).items():
        options.append(with_header(name, value))
    for media_type, parser in (parsers or {}).items():
        options.append(with_parser(media_type, parser))
    if basic_auth is not None:
        options.append(with_basic_auth(*basic_auth))
    if bearer_token is not None:
        options.append(with_bearer_auth(bearer_token))
    return Helper(*options, timeout=timeout, httpx_client=httpx_client)
