"""
Parser interface for response bodies.
"""
import logging
from abc import ABC, abstractmethod
from typing import Any, Optional

from pydantic import TypeAdapter

from ..types import ParserFunc

logger = logging.getLogger("rest_helper.parsers")


class Parser(ABC):
    """Decodes a raw response body for one media type."""

    media_type: Optional[str] = None

    @abstractmethod
    def parse(self, data: bytes) -> Any:
        """Decode raw body bytes."""
        ...

    def validate(self, value: Any, model: Any) -> Any:
        """Coerce a decoded value into ``model``.

        Validation errors from pydantic are propagated unchanged.
        """
        return TypeAdapter(model).validate_python(value)

    def decode(self, data: bytes, model: Any = None) -> Any:
        """Parse ``data`` and, when ``model`` is given, validate into it."""
        value = self.parse(data)
        if model is None:
            return value
        logger.debug(f"{type(self).__name__}.decode: validating into {model!r}")
        return self.validate(value, model)


class CallableParser(Parser):
    """Adapts a plain ``fn(data) -> value`` function to the Parser interface."""

    def __init__(self, fn: ParserFunc, media_type: Optional[str] = None):
        self._fn = fn
        self.media_type = media_type

    def parse(self, data: bytes) -> Any:
        return self._fn(data)

    def __repr__(self) -> str:
        return f"CallableParser(fn={self._fn!r}, media_type={self.media_type!r})"
