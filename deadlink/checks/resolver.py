"""Resolution of relative references against a base URI or file path."""

from __future__ import annotations

from pathlib import Path
from typing import Optional
from urllib.parse import urljoin

UNRESOLVABLE_MESSAGE = (
    "Unable to resolve the relative URI. Please check if the base URI is correctly specified."
)


class UnresolvableURIError(ValueError):
    """Raised when a relative URI has no base to be resolved against."""

    def __init__(self, uri: str) -> None:
        super().__init__(UNRESOLVABLE_MESSAGE)
        self.uri = uri


def select_base(base_uri: Optional[str], file_path: Optional[str | Path]) -> Optional[str]:
    """Return the explicit base URI, falling back to the linted file's path."""
    if base_uri:
        return base_uri
    if file_path:
        return str(file_path)
    return None


def resolve_relative(uri: str, base: Optional[str]) -> str:
    """Resolve ``uri`` against ``base`` following RFC 3986 reference resolution."""
    if not base:
        raise UnresolvableURIError(uri)
    return urljoin(base, uri)


__all__ = ["UNRESOLVABLE_MESSAGE", "UnresolvableURIError", "resolve_relative", "select_base"]
