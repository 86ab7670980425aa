"""
Tests for config.py
Logic testing: Decision/Branch, Boundary Value, State coverage
"""
import base64

import pytest
from pydantic import SecretStr

from rest_helper.config import (
    DEFAULT_TIMEOUT,
    HelperConfig,
    TimeoutConfig,
    apply_options,
    mask_headers,
    normalize_timeout,
    to_httpx_timeout,
    with_base_url,
    with_basic_auth,
    with_bearer_auth,
    with_header,
    with_parser,
    with_timeout,
    with_transport_error_ok,
)
from rest_helper.parsers import CallableParser, JSONParser


class TestNormalizeTimeout:
    """Tests for normalize_timeout function."""

    # Decision: None returns the default
    def test_normalize_timeout_none(self):
        result = normalize_timeout(None)
        assert result == TimeoutConfig()
        assert result.read == DEFAULT_TIMEOUT

    # Decision: float applies to every phase
    def test_normalize_timeout_float(self):
        result = normalize_timeout(2.5)
        assert (result.connect, result.read, result.write, result.pool) == (2.5, 2.5, 2.5, 2.5)

    # Decision: TimeoutConfig returned as-is
    def test_normalize_timeout_object(self):
        config = TimeoutConfig(connect=1.0, read=2.0, write=3.0, pool=4.0)
        assert normalize_timeout(config) is config

    # Boundary: zero is valid
    def test_normalize_timeout_zero(self):
        assert normalize_timeout(0).read == 0

    # Path: conversion to httpx.Timeout
    def test_to_httpx_timeout(self):
        timeout = to_httpx_timeout(TimeoutConfig(connect=1.0, read=2.0, write=3.0, pool=4.0))
        assert timeout.connect == 1.0
        assert timeout.read == 2.0
        assert timeout.write == 3.0
        assert timeout.pool == 4.0


class TestHelperOptions:
    """Tests for helper option callables."""

    # Happy Path: defaults
    def test_defaults(self):
        config = apply_options(HelperConfig())
        assert config.base_url == ""
        assert config.timeout == DEFAULT_TIMEOUT == 15.0
        assert config.headers == {}
        assert config.transport_error_ok is True

    # State: later scalar options win
    def test_scalar_last_write_wins(self):
        config = apply_options(
            HelperConfig(),
            with_base_url("http://a"),
            with_timeout(1),
            with_base_url("http://b"),
            with_timeout(2),
        )
        assert config.base_url == "http://b"
        assert config.timeout == 2

    # State: headers merge by key
    def test_headers_merge(self):
        config = apply_options(
            HelperConfig(),
            with_header("X-A", "1"),
            with_header("X-B", "2"),
            with_header("X-A", "3"),
        )
        assert config.headers == {"X-A": "3", "X-B": "2"}

    # Path: parser registration
    def test_with_parser_callable(self):
        config = apply_options(HelperConfig(), with_parser("text/csv", lambda data: data))
        parser = config.parsers.get("text/csv")
        assert isinstance(parser, CallableParser)
        assert parser.media_type == "text/csv"

    # Path: parser registration overwrites
    def test_with_parser_overwrite(self):
        custom = JSONParser()
        config = apply_options(
            HelperConfig(),
            with_parser("text/csv", lambda data: data),
            with_parser("text/csv", custom),
        )
        assert config.parsers.get("text/csv") is custom

    # Path: basic auth header
    def test_with_basic_auth(self):
        config = apply_options(HelperConfig(), with_basic_auth("user", "pass"))
        expected = base64.b64encode(b"user:pass").decode()
        assert config.headers["Authorization"] == f"Basic {expected}"

    # Path: basic auth with SecretStr
    def test_with_basic_auth_secret(self):
        config = apply_options(HelperConfig(), with_basic_auth("user", SecretStr("pass")))
        assert config.headers["Authorization"] == "Basic dXNlcjpwYXNz"

    # State: auth option overwrites an earlier Authorization header
    def test_basic_auth_overwrites_header(self):
        config = apply_options(
            HelperConfig(),
            with_header("Authorization", "Token x"),
            with_basic_auth("user", "pass"),
        )
        assert config.headers == {"Authorization": "Basic dXNlcjpwYXNz"}

    # Path: bearer auth header
    def test_with_bearer_auth(self):
        config = apply_options(HelperConfig(), with_bearer_auth("tok"))
        assert config.headers["Authorization"] == "Bearer tok"

    # Decision: transport error policy
    def test_with_transport_error_ok(self):
        config = apply_options(HelperConfig(), with_transport_error_ok(False))
        assert config.transport_error_ok is False


class TestMaskHeaders:
    """Tests for mask_headers function."""

    # Decision: credential headers masked
    def test_masks_authorization(self):
        masked = mask_headers({"Authorization": "Basic dXNlcjpwYXNz", "Accept": "*/*"})
        assert masked["Authorization"] == "Basic dXNl" + "*" * 8
        assert masked["Accept"] == "*/*"

    # Path: pair lists keep order, duplicates and shape
    def test_masks_pairs(self):
        pairs = [("Accept", "*/*"), ("x-api-key", "secret-key-12345"), ("Accept", "text/xml")]
        assert mask_headers(pairs) == [
            ("Accept", "*/*"),
            ("x-api-key", "secret-key" + "*" * 6),
            ("Accept", "text/xml"),
        ]

    # Path: repr never shows the credential
    def test_repr_masks_authorization(self):
        config = apply_options(HelperConfig(), with_basic_auth("user", "pass"))
        assert "dXNlcjpwYXNz" not in repr(config)
