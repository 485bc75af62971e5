"""
Wardrobe Backend — Resource URL Builder
========================================

What:  Builds the absolute URL that goes into `Location` headers and into the
       `url` field of every 201 body.

Base URL resolution (first match wins):
    1. A Request object           → "<scheme>://<host>[root_path]" of that request
    2. An absolute http(s) string → used as the base as-is
    3. Anything else              → DEFAULT_BASE_URL

Joining never produces a double slash and always yields an absolute URL:
    build_resource_url("http://api.example.com/", "garments/3")
        → "http://api.example.com/garments/3"
"""

import re
from typing import Optional, Union

from starlette.requests import Request

DEFAULT_BASE_URL = "http://localhost:8000"

_ABSOLUTE_URL = re.compile(r"^https?://", re.IGNORECASE)


def _join(base: str, path: str) -> str:
    base = base.rstrip("/")
    if not path:
        return base
    if not path.startswith("/"):
        path = "/" + path
    return base + path


def build_resource_url(
    source: Union[Request, str, None],
    path: Optional[str] = None,
    default_base: str = DEFAULT_BASE_URL,
) -> str:
    """
    Build an absolute resource URL.

    Args:
        source:       The current Request, an absolute base URL, or None.
                      A relative string is treated as the path when `path`
                      is omitted.
        path:         Resource path, e.g. "/garments/12".
        default_base: Base used when `source` is neither a Request nor an
                      absolute URL.
    """
    if isinstance(source, Request):
        # request.base_url already honours root_path and the Host header
        return _join(str(source.base_url), path or "")

    if isinstance(source, str) and _ABSOLUTE_URL.match(source):
        return _join(source, path or "")

    if path is None and isinstance(source, str):
        path = source
    return _join(default_base, path or "")


def location_for(request: Request, path: str) -> str:
    """
    URL for a `Location` header: the configured BASE_URL when set (deployments
    behind a proxy), otherwise the scheme and host the client used.
    """
    settings = getattr(request.app.state, "settings", None)
    base_url = getattr(settings, "base_url", None)
    return build_resource_url(base_url or request, path)
