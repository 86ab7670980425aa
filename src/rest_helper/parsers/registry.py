"""
Media-type keyed parser registry.
"""
import logging
from typing import Dict, Mapping, Optional, Union

from ..errors import UnknownContentTypeError
from ..types import ParserFunc
from .base import CallableParser, Parser
from .json_parser import JSONParser
from .xml_parser import XMLParser

logger = logging.getLogger("rest_helper.parsers.registry")

ParserLike = Union[Parser, ParserFunc, None]

BUILTIN_PARSERS: Mapping[str, Parser] = {
    JSONParser.media_type: JSONParser(),
    XMLParser.media_type: XMLParser(),
}


def create_parser(parser: ParserLike, media_type: Optional[str] = None) -> Optional[Parser]:
    """Normalize a Parser, plain callable or None into an optional Parser."""
    if parser is None or isinstance(parser, Parser):
        return parser
    if callable(parser):
        return CallableParser(parser, media_type)
    raise TypeError(f"parser for {media_type!r} must be a Parser or callable, got {type(parser).__name__}")


class ParserRegistry:
    """Custom parsers keyed by exact media type, with JSON/XML built in.

    A custom parser registered for a media type wins over the built-in one.
    A media type registered with ``None`` falls through to the built-ins.
    """

    def __init__(self, parsers: Optional[Mapping[str, ParserLike]] = None):
        self._custom: Dict[str, Optional[Parser]] = {}
        for media_type, parser in (parsers or {}).items():
            self.register(media_type, parser)

    def register(self, media_type: str, parser: ParserLike) -> None:
        """Insert or overwrite the parser for ``media_type``."""
        self._custom[media_type] = create_parser(parser, media_type)

    def get(self, media_type: str) -> Optional[Parser]:
        custom = self._custom.get(media_type)
        if custom is not None:
            return custom
        return BUILTIN_PARSERS.get(media_type)

    def resolve(self, media_type: str) -> Parser:
        """Return the parser for ``media_type``.

        Raises:
            UnknownContentTypeError: neither a custom nor a built-in parser matches.
        """
        parser = self.get(media_type)
        if parser is None:
            logger.debug(f"ParserRegistry.resolve: no parser for media_type={media_type!r}")
            raise UnknownContentTypeError(media_type)
        return parser

    def __contains__(self, media_type: object) -> bool:
        return isinstance(media_type, str) and self.get(media_type) is not None

    def __repr__(self) -> str:
        return f"ParserRegistry(custom={sorted(self._custom)!r})"
