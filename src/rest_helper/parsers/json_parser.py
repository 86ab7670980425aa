"""
JSON encoding and decoding.
"""
import dataclasses
import json
from typing import Any

from pydantic import BaseModel

from ..errors import SerializationError
from .base import Parser

CONTENT_TYPE_JSON = "application/json"


def _default(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return dataclasses.asdict(value)
    if isinstance(value, (set, frozenset)):
        return list(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def encode_json(value: Any) -> bytes:
    """Serialize ``value`` as compact UTF-8 JSON.

    Raises:
        SerializationError: ``value`` (or something nested in it) has no JSON
            form. NaN and infinite floats are rejected.
    """
    if isinstance(value, BaseModel):
        value = value.model_dump(mode="json")
    try:
        text = json.dumps(
            value, default=_default, separators=(",", ":"), ensure_ascii=False, allow_nan=False
        )
    except (TypeError, ValueError) as e:
        raise SerializationError("JSON", str(e)) from e
    return text.encode("utf-8")


class JSONParser(Parser):
    """Built-in parser for ``application/json``."""

    media_type = CONTENT_TYPE_JSON

    def parse(self, data: bytes) -> Any:
        return json.loads(data)
