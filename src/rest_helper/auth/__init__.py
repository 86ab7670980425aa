"""
Authorization header encoding for rest_helper.
"""
from .encoding import (
    encode_basic_auth,
    encode_bearer_auth,
    mask_auth_value,
)

__all__ = [
    "encode_basic_auth",
    "encode_bearer_auth",
    "mask_auth_value",
]
