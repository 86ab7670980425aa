"""
Credential encoding for the Authorization header.
"""
import base64
from typing import Optional, Union

from pydantic import SecretStr

Secret = Union[str, SecretStr]


def _base64_encode(text: str) -> str:
    return base64.b64encode(text.encode("utf-8")).decode("utf-8")


def _reveal(value: Optional[Secret]) -> str:
    if value is None:
        return ""
    if isinstance(value, SecretStr):
        return value.get_secret_value()
    return value


def encode_basic_auth(username: str, password: Secret) -> str:
    """Return the ``Basic <base64(username:password)>`` header value.

    Empty usernames and passwords are allowed (RFC 7617 does not forbid them).
    """
    credentials = f"{username}:{_reveal(password)}"
    return f"Basic {_base64_encode(credentials)}"


def encode_bearer_auth(token: Secret) -> str:
    """Return the ``Bearer <token>`` header value."""
    value = _reveal(token)
    if not value:
        raise ValueError("bearer auth requires a token")
    return f"Bearer {value}"


def mask_auth_value(value: Optional[str], visible_chars: int = 10) -> str:
    """Mask a credential for safe logging, keeping the scheme prefix readable."""
    if not value:
        return "<empty>"
    if len(value) <= visible_chars:
        return "*" * len(value)
    return value[:visible_chars] + "*" * (len(value) - visible_chars)
