"""
Unit tests for SignableRequest.
"""

from aws3_signer import SignableRequest


class TestSignableRequest:

    def test_defaults(self):
        request = SignableRequest("https://example.com")

        assert request.http_method == "GET"
        assert request.resource_path == ""
        assert request.headers == {}
        assert request.parameters == []
        assert request.content == b""
        assert request.time_offset == 0

    def test_mapping_parameters_flattened(self):
        request = SignableRequest("https://example.com", parameters={"a": ["1", "0"], "b": "2"})

        assert request.parameters == [("a", "1"), ("a", "0"), ("b", "2")]

    def test_add_parameter(self):
        request = SignableRequest("https://example.com")
        request.add_parameter("Action", "Describe")
        request.add_parameter("Action", "Other")

        assert request.parameters == [("Action", "Describe"), ("Action", "Other")]

    def test_add_header_replaces_case_variants(self):
        request = SignableRequest("https://example.com", headers={"x-amz-date": "old", "Accept": "*/*"})

        request.add_header("X-Amz-Date", "new")

        assert request.headers == {"Accept": "*/*", "X-Amz-Date": "new"}
        assert request.get_header("x-AMZ-date") == "new"

    def test_get_missing_header(self):
        assert SignableRequest("https://example.com").get_header("Host") is None

    def test_str_content_encoded(self):
        request = SignableRequest("https://example.com", content="café")

        assert request.content == "café".encode('utf-8')
