"""
Wardrobe Backend — Resource URL Builder Tests
==============================================
"""

from starlette.requests import Request

from wardrobe.services.urls import DEFAULT_BASE_URL, build_resource_url


def _request(host="wardrobe.example.org", scheme="https", root_path=""):
    scope = {
        "type": "http",
        "method": "POST",
        "scheme": scheme,
        "server": (host, 443),
        "path": "/garments",
        "root_path": root_path,
        "query_string": b"",
        "headers": [(b"host", host.encode())],
    }
    return Request(scope)


class TestBuildResourceUrl:

    def test_from_request(self):
        assert build_resource_url(_request(), "/garments/3") == "https://wardrobe.example.org/garments/3"

    def test_from_absolute_base(self):
        assert build_resource_url("http://api.example.com/", "garments/3") == "http://api.example.com/garments/3"

    def test_base_with_prefix_path(self):
        assert build_resource_url("https://example.com/api", "/labels/1") == "https://example.com/api/labels/1"

    def test_relative_string_is_the_path(self):
        assert build_resource_url("/users/ana") == f"{DEFAULT_BASE_URL}/users/ana"

    def test_nothing_given(self):
        assert build_resource_url(None, "/comments/9") == f"{DEFAULT_BASE_URL}/comments/9"

    def test_custom_default(self):
        assert build_resource_url(None, "/x", default_base="http://h:1/") == "http://h:1/x"
