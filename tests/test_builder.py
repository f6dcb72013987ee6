"""Tests for request building."""

import json
import re

import pytest

from lightnet import Endpoint, HTTPMethod, UploadInfo, UploadType
from lightnet.http import EncodingFailedError, InvalidURLError
from lightnet.http.builder import (
    build_multipart_body,
    build_request,
    encode_query,
    join_url,
    new_boundary,
    percent_encode,
    stringify,
)

BASE_URL = "https://x.test"
FIXED_BOUNDARY = "Boundary=0000-TEST"


def _build(endpoint, upload_info=None, **kwargs):
    return build_request(
        endpoint,
        BASE_URL,
        20.0,
        upload_info,
        boundary_factory=lambda: FIXED_BOUNDARY,
        **kwargs,
    )


class TestPercentEncode:
    """Tests for query value encoding."""

    def test_space(self):
        """Test spaces become %20."""
        assert percent_encode("a b") == "a%20b"

    def test_unreserved_kept(self):
        """Test letters, digits and -._~ stay unescaped."""
        value = "AZaz09-._~"
        assert percent_encode(value) == value

    @pytest.mark.parametrize("char", list("!$&'()*+,;=:/?#[]@%\"<>"))
    def test_reserved_escaped(self, char):
        """Test every reserved or unsafe character is escaped."""
        encoded = percent_encode(char)
        assert encoded.startswith("%")
        assert re.fullmatch(r"(%[0-9A-F]{2})+", encoded)

    def test_unicode(self):
        """Test non-ASCII text is UTF-8 percent-encoded."""
        assert percent_encode("é") == "%C3%A9"

    def test_value_types(self):
        """Test numbers, booleans and None are stringified."""
        assert percent_encode(42) == "42"
        assert percent_encode(1.5) == "1.5"
        assert percent_encode(True) == "true"
        assert percent_encode(False) == "false"
        assert percent_encode(None) == "null"

    def test_stringify_bytes(self):
        """Test bytes are decoded as UTF-8."""
        assert stringify(b"abc") == "abc"


class TestEncodeQuery:
    """Tests for query string encoding."""

    def test_insertion_order(self):
        """Test entries keep insertion order."""
        assert encode_query({"b": 1, "a": 2, "c": 3}) == "b=1&a=2&c=3"

    def test_one_entry_per_key(self):
        """Test each distinct key appears once."""
        query = encode_query({"q": "x y", "limit": 10, "flag": True})
        entries = query.split("&")
        assert len(entries) == 3
        assert sorted(entry.split("=")[0] for entry in entries) == ["flag", "limit", "q"]

    def test_only_unreserved_unescaped(self):
        """Test values contain nothing outside the unreserved set except escapes."""
        query = encode_query({"a": "x/y?z", "b": "1+1=2", "c": "ok-._~"})
        for entry in query.split("&"):
            _, value = entry.split("=", 1)
            assert re.fullmatch(r"([A-Za-z0-9\-._~]|%[0-9A-F]{2})*", value)


class TestJoinUrl:
    """Tests for base URL and path joining."""

    def test_leading_slash(self):
        """Test a path with a leading slash."""
        assert join_url("https://x.test", "/api/ping") == "https://x.test/api/ping"

    def test_without_leading_slash(self):
        """Test a path without a leading slash."""
        assert join_url("https://x.test", "api/ping") == "https://x.test/api/ping"

    def test_base_path_prefix_kept(self):
        """Test a base URL path prefix is preserved."""
        assert join_url("https://x.test/v1/", "/users") == "https://x.test/v1/users"

    def test_empty_path(self):
        """Test an empty path resolves to the base root."""
        assert join_url("https://x.test", "") == "https://x.test/"

    def test_path_unsafe_chars_quoted(self):
        """Test spaces in the path are escaped."""
        assert join_url("https://x.test", "/a b") == "https://x.test/a%20b"

    @pytest.mark.parametrize(
        "base_url",
        ["not a url", "x.test", "https://", "http://x.test:notaport", "https://x.test/?q=1", "https://x.test/#frag"],
    )
    def test_invalid_base(self, base_url):
        """Test unusable base URLs raise InvalidURLError."""
        with pytest.raises(InvalidURLError):
            join_url(base_url, "/api")


class TestBuildRequest:
    """Tests for build_request."""

    def test_ping_scenario(self):
        """Test GET with a query param encodes the URL and sets form content type."""
        endpoint = Endpoint("/api/ping", http_method=HTTPMethod.GET, url_params={"q": "a b"})
        request = build_request(endpoint, "https://x.test", 20.0)

        assert request.url == "https://x.test/api/ping?q=a%20b"
        assert request.headers["Content-Type"] == "application/x-www-form-urlencoded; charset=utf-8"
        assert request.method == HTTPMethod.GET
        assert request.body is None
        assert request.timeout == 20.0

    def test_no_params_no_content_type(self):
        """Test a bare GET has no body and no content type."""
        request = _build(Endpoint("/api/ping"))
        assert request.url == "https://x.test/api/ping"
        assert "Content-Type" not in request.headers
        assert request.body is None

    def test_json_body(self):
        """Test body params are sent as JSON with application/json."""
        endpoint = Endpoint("/items", http_method=HTTPMethod.POST, body_params={"name": "lamp", "qty": 2})
        request = _build(endpoint)

        assert json.loads(request.body) == {"name": "lamp", "qty": 2}
        assert request.headers["Content-Type"] == "application/json"
        assert request.method == HTTPMethod.POST

    def test_json_body_is_pretty_printed(self):
        """Test the JSON body is indented."""
        request = _build(Endpoint("/items", body_params={"a": 1}))
        assert request.body == b'{\n  "a": 1\n}'

    def test_json_body_caller_content_type_wins(self):
        """Test a caller Content-Type header is not replaced by application/json."""
        endpoint = Endpoint(
            "/items",
            body_params={"a": 1},
            http_headers={"Content-Type": "application/vnd.api+json"},
        )
        request = _build(endpoint)
        assert request.headers["Content-Type"] == "application/vnd.api+json"
        assert json.loads(request.body) == {"a": 1}

    def test_json_body_with_url_params_keeps_form_content_type(self):
        """Test the URL-param stage content type wins over application/json."""
        endpoint = Endpoint("/items", url_params={"v": 1}, body_params={"a": 1})
        request = _build(endpoint)
        assert request.headers["Content-Type"] == "application/x-www-form-urlencoded; charset=utf-8"
        assert json.loads(request.body) == {"a": 1}

    def test_default_headers_lowest_precedence(self):
        """Test client default headers are overridden by endpoint headers."""
        endpoint = Endpoint("/items", http_headers={"X-Client": "endpoint"})
        request = _build(endpoint, default_headers={"X-Client": "default", "Accept": "application/json"})
        assert request.headers["X-Client"] == "endpoint"
        assert request.headers["Accept"] == "application/json"

    def test_default_content_type_suppresses_form_default(self):
        """Test a default Content-Type counts as already present."""
        endpoint = Endpoint("/items", url_params={"v": 1})
        request = _build(endpoint, default_headers={"Content-Type": "text/plain"})
        assert request.headers["Content-Type"] == "text/plain"

    def test_caller_headers_override_case_insensitively(self):
        """Test caller headers replace computed ones regardless of case."""
        endpoint = Endpoint("/api", url_params={"q": 1}, http_headers={"content-type": "text/plain"})
        request = _build(endpoint)
        assert request.headers.getall("Content-Type") == ["text/plain"]

    def test_empty_body_params_no_body(self):
        """Test empty body params produce no body."""
        request = _build(Endpoint("/items", body_params={}))
        assert request.body is None
        assert "Content-Type" not in request.headers

    @pytest.mark.parametrize("value", [object(), float("nan"), {1, 2}])
    def test_unencodable_body(self, value):
        """Test non-JSON values raise EncodingFailedError."""
        with pytest.raises(EncodingFailedError):
            _build(Endpoint("/items", body_params={"bad": value}))

    def test_invalid_base_url(self):
        """Test an invalid base URL raises InvalidURLError."""
        with pytest.raises(InvalidURLError):
            build_request(Endpoint("/api"), "not a url", 20.0)

    def test_idempotent(self):
        """Test building twice yields identical URL, headers and body."""
        endpoint = Endpoint(
            "/items",
            http_method=HTTPMethod.POST,
            url_params={"q": "a b", "n": 3},
            body_params={"x": [1, 2], "y": {"z": None}},
            http_headers={"Authorization": "Bearer t"},
        )
        first = _build(endpoint)
        second = _build(endpoint)
        assert first.url == second.url
        assert dict(first.headers) == dict(second.headers)
        assert first.body == second.body

    def test_does_not_mutate_endpoint(self):
        """Test building leaves the endpoint unchanged."""
        endpoint = Endpoint("/items", url_params={"q": 1}, body_params={"a": 1})
        _build(endpoint, UploadInfo(UploadType.IMAGE, b"abc"))
        assert endpoint.http_headers == {}
        assert endpoint.body_params == {"a": 1}


class TestMultipart:
    """Tests for multipart uploads."""

    def test_image_upload_single_part(self):
        """Test an image upload without body params has exactly one part."""
        request = _build(Endpoint("/upload", http_method=HTTPMethod.POST), UploadInfo(UploadType.IMAGE, b"12345"))
        body = request.body

        assert body.count(f"--{FIXED_BOUNDARY}\r\n".encode()) == 1
        assert b"Content-Type: image/jpeg\r\n\r\n12345\r\n" in body
        assert b'name="file"; filename="placeholder.jpeg"' in body
        assert body.endswith(f"--{FIXED_BOUNDARY}--\r\n".encode())
        assert request.headers["Content-Type"] == f"multipart/form-data; boundary={FIXED_BOUNDARY}"

    def test_exact_layout(self):
        """Test the byte-exact multipart layout with one field."""
        body = build_multipart_body({"caption": "hi"}, UploadInfo(UploadType.VIDEO, b"\x00\x01"), "B")
        assert body == (
            b"--B\r\n"
            b'Content-Disposition: form-data; name="caption"\r\n\r\n'
            b"hi\r\n"
            b"--B\r\n"
            b'Content-Disposition: form-data; name="file"; filename="placeholder.mov"\r\n'
            b"Content-Type: video/mp4\r\n\r\n"
            b"\x00\x01\r\n"
            b"--B--\r\n"
        )

    def test_sections_per_body_param(self):
        """Test one section per body param plus exactly one file section."""
        endpoint = Endpoint("/upload", body_params={"title": "t", "album": 7, "public": True})
        request = _build(endpoint, UploadInfo(UploadType.IMAGE, b"img"))
        body = request.body

        for key in ("title", "album", "public"):
            assert body.count(f'Content-Disposition: form-data; name="{key}"\r\n'.encode()) == 1
        assert body.count(b'name="file"; filename=') == 1
        assert b"true\r\n" in body
        assert body.count(f"--{FIXED_BOUNDARY}\r\n".encode()) == 4

    def test_multipart_content_type_beats_caller_header(self):
        """Test the multipart Content-Type always wins."""
        endpoint = Endpoint("/upload", http_headers={"Content-Type": "application/json"})
        request = _build(endpoint, UploadInfo(UploadType.IMAGE, b"x"))
        assert request.headers.getall("Content-Type") == [f"multipart/form-data; boundary={FIXED_BOUNDARY}"]

    def test_header_and_body_share_boundary(self):
        """Test the generated boundary is used in both header and body."""
        request = build_request(Endpoint("/upload"), BASE_URL, 60.0, UploadInfo(UploadType.IMAGE, b"x"))
        boundary = request.headers["Content-Type"].split("boundary=", 1)[1]
        assert boundary.startswith("Boundary=")
        assert request.body.startswith(f"--{boundary}\r\n".encode())

    @pytest.mark.parametrize("data", [None, b""])
    def test_upload_without_data_falls_back(self, data):
        """Test missing upload data degenerates to a JSON request."""
        endpoint = Endpoint("/upload", body_params={"a": 1})
        request = _build(endpoint, UploadInfo(UploadType.IMAGE, data))
        assert request.headers["Content-Type"] == "application/json"
        assert json.loads(request.body) == {"a": 1}

    def test_new_boundary_unique(self):
        """Test generated boundaries differ and are upper-case UUIDs."""
        first, second = new_boundary(), new_boundary()
        assert first != second
        assert re.fullmatch(r"Boundary=[0-9A-F]{8}-[0-9A-F]{4}-[0-9A-F]{4}-[0-9A-F]{4}-[0-9A-F]{12}", first)
