"""HTTP method selection for remote probes."""

from __future__ import annotations

from typing import Iterable, Optional
from urllib.parse import urlsplit

HEAD = "HEAD"
GET = "GET"

_DEFAULT_PORTS = {"http": 80, "https": 443}


def url_origin(uri: str) -> Optional[str]:
    """Return the canonical ``scheme://host[:port]`` origin of ``uri``, or None without a host."""
    try:
        parts = urlsplit(uri)
        port = parts.port
    except ValueError:
        return None
    if not parts.hostname:
        return None
    scheme = parts.scheme.lower()
    host = parts.hostname.lower()
    if ":" in host:
        host = f"[{host}]"
    if port is None or _DEFAULT_PORTS.get(scheme) == port:
        return f"{scheme}://{host}"
    return f"{scheme}://{host}:{port}"


def select_method(uri: str, prefer_get: Iterable[str] = ()) -> str:
    """Return GET when ``uri`` shares an origin with a ``prefer_get`` entry, else HEAD."""
    origin = url_origin(uri)
    if origin is None:
        return HEAD
    if any(url_origin(candidate) == origin for candidate in prefer_get):
        return GET
    return HEAD


__all__ = ["GET", "HEAD", "select_method", "url_origin"]
