"""
Unit tests for canonicalization helpers.
"""

import pytest

from aws3_signer import EncodingError, EndpointParseError, SignableRequest
from aws3_signer.canonical import (
    append_uri,
    canonicalized_query_string,
    canonicalized_resource_path,
    host_header,
    is_using_non_default_port,
    payload_without_query_params,
    should_use_https_scheme,
    url_encode,
)


class TestResourcePath:
    """Test URI joining and path canonicalization."""

    @pytest.mark.parametrize("base,path,expected", [
        ("", "", "/"),
        ("", "/foo", "/foo"),
        ("/", "/foo", "/foo"),
        ("/base", "foo", "/base/foo"),
        ("/base/", "/foo", "/base/foo"),
        ("/base", "", "/base/"),
        (None, None, "/"),
    ])
    def test_append_uri(self, base, path, expected):
        assert append_uri(base, path) == expected

    def test_empty_path(self):
        assert canonicalized_resource_path("") == "/"
        assert canonicalized_resource_path(None) == "/"

    def test_path_encoding_keeps_separators(self):
        assert canonicalized_resource_path("/a b/c~d/e*f") == "/a%20b/c~d/e%2Af"

    def test_leading_slash_added(self):
        assert canonicalized_resource_path("items") == "/items"

    def test_non_ascii_path(self):
        assert canonicalized_resource_path("/café") == "/caf%C3%A9"


class TestQueryString:
    """Test query string canonicalization."""

    def test_sorted_by_name_then_value(self):
        params = [("b", "2"), ("a", "1"), ("a", "0")]

        assert canonicalized_query_string(params) == "a=0&a=1&b=2"

    def test_mapping_accepted(self):
        assert canonicalized_query_string({"zebra": "1", "apple": "2"}) == "apple=2&zebra=1"

    def test_empty(self):
        assert canonicalized_query_string([]) == ""
        assert canonicalized_query_string(None) == ""

    def test_percent_encoding(self):
        params = [("Filter Name", "a/b+c"), ("tilde", "~x*")]

        assert canonicalized_query_string(params) == "Filter%20Name=a%2Fb%2Bc&tilde=~x%2A"

    def test_sorted_after_encoding(self):
        params = [("a-", "1"), ("a/", "2")]

        assert canonicalized_query_string(params) == "a%2F=2&a-=1"

    def test_none_value(self):
        assert canonicalized_query_string([("Marker", None)]) == "Marker="

    def test_url_encode(self):
        assert url_encode("a/b c") == "a%2Fb%20c"
        assert url_encode("a/b c", path=True) == "a/b%20c"
        assert url_encode(None) == ""


class TestEndpoint:
    """Test endpoint parsing and Host header derivation."""

    @pytest.mark.parametrize("endpoint,expected", [
        ("https://example.com", "example.com"),
        ("https://Example.COM/path", "example.com"),
        ("https://example.com:443", "example.com"),
        ("http://example.com:80", "example.com"),
        ("https://example.com:8443", "example.com:8443"),
        ("http://example.com:443", "example.com:443"),
        ("https://[2001:db8::1]:8443/path", "[2001:db8::1]:8443"),
        ("https://[2001:db8::1]/path", "[2001:db8::1]"),
    ])
    def test_host_header(self, endpoint, expected):
        assert host_header(endpoint) == expected

    def test_non_default_port(self):
        assert is_using_non_default_port("http://localhost:8080") is True
        assert is_using_non_default_port("http://localhost:80") is False
        assert is_using_non_default_port("http://localhost") is False
        assert is_using_non_default_port("http://localhost:0") is False

    def test_zero_port_omitted_from_host_header(self):
        assert host_header("http://example.com:0") == "example.com"

    def test_should_use_https_scheme(self):
        assert should_use_https_scheme("https://example.com") is True
        assert should_use_https_scheme("HTTP://example.com") is False

    def test_unknown_scheme(self):
        with pytest.raises(EndpointParseError) as exc_info:
            should_use_https_scheme("ftp://example.com")

        assert "ftp" in str(exc_info.value)

    def test_malformed_port_chains_cause(self):
        with pytest.raises(EndpointParseError) as exc_info:
            host_header("https://example.com:99999")

        assert isinstance(exc_info.value.__cause__, ValueError)


class TestPayload:
    """Test payload selection for the string to sign."""

    def test_empty_content(self):
        assert payload_without_query_params(SignableRequest("https://example.com")) == ""

    def test_body_included(self):
        request = SignableRequest("https://example.com", content='{"key": "value"}')

        assert payload_without_query_params(request) == '{"key": "value"}'

    def test_form_encoded_parameters_excluded(self):
        request = SignableRequest(
            "https://example.com",
            http_method="POST",
            parameters={"Action": "Describe", "Name": "my name"},
            content=b"Action=Describe&Name=my+name",
        )

        assert payload_without_query_params(request) == ""

    def test_form_body_differing_from_parameters_included(self):
        request = SignableRequest(
            "https://example.com",
            http_method="POST",
            parameters={"Action": "Describe"},
            content=b"Action=Delete",
        )

        assert payload_without_query_params(request) == "Action=Delete"

    def test_form_body_without_parameters_included(self):
        request = SignableRequest("https://example.com", http_method="POST", content=b"a=1")

        assert payload_without_query_params(request) == "a=1"

    def test_invalid_utf8(self):
        request = SignableRequest("https://example.com", content=b"\xc3\x28")

        with pytest.raises(EncodingError):
            payload_without_query_params(request)
