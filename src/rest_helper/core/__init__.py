"""
Core modules for rest_helper.
"""
from .request import (
    Request,
    with_query,
    with_request_header,
    with_body,
    with_json,
    with_xml,
    with_content_type,
)
from .response import Response, parse_media_type, OK_STATUSES
from .url_builder import (
    join_url,
    parse_url,
    clean_path,
    encode_query,
)

__all__ = [
    "Request",
    "Response",
    "with_query",
    "with_request_header",
    "with_body",
    "with_json",
    "with_xml",
    "with_content_type",
    "parse_media_type",
    "OK_STATUSES",
    "join_url",
    "parse_url",
    "clean_path",
    "encode_query",
]
