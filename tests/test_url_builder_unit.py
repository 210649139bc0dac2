#!/usr/bin/env python3
"""
Unit Tests for the URL builder
Covers host/path/query resolution, transformation placement and signing
"""

import hashlib
import hmac
from unittest.mock import patch

import pytest

from imgurl.core.errors import InvalidArgumentError
from imgurl.models.request import UrlRequestContext
from imgurl.services.url_builder import (
    ResultUrlParts,
    UrlBuilder,
    extend_url_options,
    generate_url,
    parse_query,
    render_query,
)

ENDPOINT = "https://ik.imagekit.io/demo/"
IMAGE_URL = "https://ik.imagekit.io/demo/default-image.jpg"


def _sign(key: str, message: str) -> str:
    return hmac.new(key.encode(), message.encode(), hashlib.sha1).hexdigest()


class TestExtendUrlOptions:
    """Test cases for merging request context defaults."""

    def test_defaults_are_applied(self, request_context):
        options = extend_url_options(request_context, {"path": "/a.jpg"})
        assert options == {
            "public_key": "public_key",
            "private_key": "private_key",
            "url_endpoint": ENDPOINT,
            "transformation_position": "path",
            "path": "/a.jpg",
        }

    def test_caller_values_win(self, request_context):
        options = extend_url_options(request_context, {"url_endpoint": "https://other.io/", "private_key": "k2"})
        assert options["url_endpoint"] == "https://other.io/"
        assert options["private_key"] == "k2"


class TestUrlBuilder:
    """Test cases for URL generation."""

    @pytest.fixture(autouse=True)
    def _builder(self, request_context):
        self.builder = UrlBuilder(request_context)

    def test_no_path_or_src_returns_empty_string(self):
        assert self.builder.generate_url({}) == ""
        assert self.builder.generate_url({"path": "", "src": ""}) == ""

    def test_empty_options_with_blank_context(self):
        assert UrlBuilder(UrlRequestContext()).generate_url({}) == ""

    def test_path_joined_with_single_slash(self):
        assert self.builder.generate_url({"path": "/default-image.jpg"}) == IMAGE_URL

    def test_endpoint_without_trailing_slash(self):
        url = self.builder.generate_url({
            "path": "default-image.jpg",
            "url_endpoint": "https://ik.imagekit.io/demo",
        })
        assert url == IMAGE_URL

    def test_endpoint_without_path(self):
        url = self.builder.generate_url({"path": "/a.jpg", "url_endpoint": "https://ik.imagekit.io"})
        assert url == "https://ik.imagekit.io/a.jpg"

    def test_endpoint_scheme_and_port_are_kept(self):
        url = self.builder.generate_url({"path": "/a.jpg", "url_endpoint": "http://localhost:8080/img/"})
        assert url == "http://localhost:8080/img/a.jpg"

    def test_trailing_slash_and_fragment_are_removed_from_path(self):
        assert self.builder.generate_url({"path": "/folder/"}) == "https://ik.imagekit.io/demo/folder"
        assert self.builder.generate_url({"path": "/a.jpg#top"}) == "https://ik.imagekit.io/demo/a.jpg"

    def test_relative_path_is_percent_encoded(self):
        url = self.builder.generate_url({"path": "/my folder/img 1.jpg"})
        assert url == "https://ik.imagekit.io/demo/my%20folder/img%201.jpg"

    def test_already_encoded_path_is_not_encoded_twice(self):
        url = self.builder.generate_url({"path": "/img%201.jpg"})
        assert url == "https://ik.imagekit.io/demo/img%201.jpg"

    def test_path_with_host_is_left_unencoded(self):
        url = self.builder.generate_url({"path": "https://other.com/img.jpg"})
        assert url == "https://ik.imagekit.io/demo/https://other.com/img.jpg"

    def test_transformation_in_path(self):
        url = self.builder.generate_url({
            "path": "/default-image.jpg",
            "transformation": [{"height": 300, "width": 400}],
            "transformation_position": "path",
        })
        assert url == "https://ik.imagekit.io/demo/tr:h-300,w-400/default-image.jpg"

    def test_chained_transformation_in_path(self):
        url = self.builder.generate_url({
            "path": "/default-image.jpg",
            "transformation": [{"height": 300, "width": 400}, {"rotation": 90}],
        })
        assert url == "https://ik.imagekit.io/demo/tr:h-300,w-400:rt-90/default-image.jpg"

    def test_transformation_in_query(self):
        url = self.builder.generate_url({
            "path": "/default-image.jpg",
            "transformation": [{"height": 300, "width": 400}],
            "transformation_position": "query",
        })
        assert url == "https://ik.imagekit.io/demo/default-image.jpg?tr=h-300,w-400"

    def test_empty_transformation_is_ignored(self):
        url = self.builder.generate_url({"path": "/default-image.jpg", "transformation": []})
        assert url == IMAGE_URL
        url = self.builder.generate_url({"path": "/default-image.jpg", "transformation": "h-300"})
        assert url == IMAGE_URL

    def test_chain_of_empty_steps_is_ignored(self):
        url = self.builder.generate_url({"path": "/default-image.jpg", "transformation": [{}, {}, {}]})
        assert url == IMAGE_URL
        url = self.builder.generate_url({
            "path": "/default-image.jpg",
            "transformation": [{}, {}, {}],
            "transformation_position": "query",
        })
        assert url == IMAGE_URL

    def test_src_forces_query_position(self):
        url = self.builder.generate_url({
            "src": "https://example.com/image.jpg",
            "transformation": [{"height": 300, "width": 400}],
            "transformation_position": "path",
        })
        assert url == "https://example.com/image.jpg?tr=h-300,w-400"

    def test_src_forces_query_position_over_invalid_value(self):
        url = self.builder.generate_url({
            "src": "https://example.com/image.jpg",
            "transformation_position": "sideways",
        })
        assert url == "https://example.com/image.jpg"

    def test_src_existing_query_is_kept(self):
        url = self.builder.generate_url({
            "src": "https://example.com/image.jpg?v=1",
            "transformation": [{"width": 100}],
        })
        assert url == "https://example.com/image.jpg?v=1&tr=w-100"

    def test_src_userinfo_and_port_are_preserved(self):
        url = self.builder.generate_url({"src": "https://user:pw@example.com:8443/a/b.jpg"})
        assert url == "https://user:pw@example.com:8443/a/b.jpg"

    def test_src_does_not_mutate_options(self):
        options = {"src": "https://example.com/image.jpg"}
        self.builder.generate_url(options)
        assert options == {"src": "https://example.com/image.jpg"}

    def test_query_parameters_override_existing_query(self):
        url = self.builder.generate_url({
            "path": "/default-image.jpg?v=1&flag&w=2",
            "query_parameters": {"v": "2", "x": "y"},
        })
        assert url == "https://ik.imagekit.io/demo/default-image.jpg?v=2&w=2&x=y"

    def test_encoded_ampersand_in_existing_query_is_kept_encoded(self):
        url = self.builder.generate_url({"path": "/a.jpg?q=a%26b&n=x%23y"})
        assert url == "https://ik.imagekit.io/demo/a.jpg?q=a%26b&n=x%23y"

    def test_query_parameter_without_value_renders_key_only(self):
        url = self.builder.generate_url({"path": "/a.jpg", "query_parameters": {"debug": ""}})
        assert url == "https://ik.imagekit.io/demo/a.jpg?debug"

    def test_invalid_transformation_position(self):
        with pytest.raises(InvalidArgumentError) as exc_info:
            self.builder.generate_url({"path": "/a.jpg", "transformation_position": "header"})
        assert exc_info.value.error_code == "invalid_argument"
        assert isinstance(exc_info.value, ValueError)

    def test_invalid_position_is_checked_before_empty_input(self):
        with pytest.raises(InvalidArgumentError):
            self.builder.generate_url({"transformation_position": "header"})

    def test_output_is_deterministic(self):
        options = {
            "path": "/default-image.jpg",
            "transformation": [{"height": 300}],
            "signed": True,
            "expire_seconds": 0,
        }
        assert self.builder.generate_url(options) == self.builder.generate_url(options)


class TestSignedUrls:
    """Test cases for signed URL generation."""

    def setup_method(self):
        self.builder = UrlBuilder(UrlRequestContext(
            private_key="private_key",
            url_endpoint=ENDPOINT,
        ))

    def test_signed_without_expiry(self):
        url = self.builder.generate_url({"path": "/default-image.jpg", "signed": True, "expire_seconds": 0})
        expected = _sign("private_key", "default-image.jpg9999999999")
        assert url == f"{IMAGE_URL}?signature={expected}"
        assert "expires=" not in url

    def test_signed_with_expiry(self):
        with patch("imgurl.services.signer.time.time", return_value=1600000000):
            url = self.builder.generate_url({"path": "/default-image.jpg", "signed": True, "expire_seconds": 300})
        expected = _sign("private_key", "default-image.jpg1600000300")
        assert url == f"{IMAGE_URL}?signature={expected}&expires=1600000300"

    def test_signed_expiry_close_to_now(self):
        import time

        url = self.builder.generate_url({"path": "/default-image.jpg", "signed": True, "expire_seconds": 300})
        expires = int(url.rsplit("expires=", 1)[1])
        assert abs(expires - (int(time.time()) + 300)) <= 5
        assert "signature=" in url

    def test_signature_covers_transformation_query(self):
        url = self.builder.generate_url({
            "path": "/default-image.jpg",
            "transformation": [{"height": 300, "width": 400}],
            "transformation_position": "query",
            "signed": True,
        })
        expected = _sign("private_key", "default-image.jpg?tr=h-300,w-4009999999999")
        assert url == f"{IMAGE_URL}?tr=h-300,w-400&signature={expected}"

    def test_option_private_key_overrides_context(self):
        url = self.builder.generate_url({"path": "/default-image.jpg", "signed": True, "private_key": "other"})
        assert url.endswith(_sign("other", "default-image.jpg9999999999"))

    def test_unsigned_url_has_no_signature(self):
        assert "signature=" not in self.builder.generate_url({"path": "/default-image.jpg", "signed": False})


class TestQueryHelpers:
    """Test cases for query parsing and rendering."""

    def test_parse_query_drops_bare_keys(self):
        assert parse_query("a=1&flag&b=") == {"a": "1", "b": ""}

    def test_parse_query_keeps_first_value(self):
        assert parse_query("a=1&a=2") == {"a": "1"}

    def test_parse_query_decodes_values(self):
        assert parse_query("q=a%20b+c") == {"q": "a b c"}

    def test_parse_empty_query(self):
        assert parse_query("") == {}

    def test_render_query(self):
        assert render_query({"a": 1, "b": "", "c": None}) == "a=1&b&c"

    def test_render_query_escapes_separators(self):
        assert render_query({"q": "a&b", "f": "x#y", "s": "a b"}) == "q=a%26b&f=x%23y&s=a%20b"

    def test_render_query_keeps_transformation_delimiters(self):
        assert render_query({"tr": "h-300,w-400:rt-90"}) == "tr=h-300,w-400:rt-90"

    def test_result_url_parts_render(self):
        assert ResultUrlParts(host="h.io/", path="a.jpg").render() == "https://h.io/a.jpg"
        assert ResultUrlParts(scheme="http", host="h.io", path="/a", query="x=1").render() == "http://h.io/a?x=1"


class TestGenerateUrlFunction:
    """Test cases for the module level convenience function."""

    def test_uses_given_context(self, request_context):
        assert generate_url({"path": "/default-image.jpg"}, request_context) == IMAGE_URL
