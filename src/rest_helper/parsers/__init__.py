"""
Response body parsers for rest_helper.
"""
from .base import Parser, CallableParser
from .json_parser import JSONParser, encode_json, CONTENT_TYPE_JSON
from .xml_parser import XMLParser, encode_xml, element_to_data, CONTENT_TYPE_XML
from .registry import ParserRegistry, BUILTIN_PARSERS, create_parser

__all__ = [
    "Parser",
    "CallableParser",
    "JSONParser",
    "XMLParser",
    "ParserRegistry",
    "BUILTIN_PARSERS",
    "create_parser",
    "encode_json",
    "encode_xml",
    "element_to_data",
    "CONTENT_TYPE_JSON",
    "CONTENT_TYPE_XML",
]
