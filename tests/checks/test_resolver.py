"""Tests for relative URI resolution."""

from __future__ import annotations

import pytest

from deadlink.checks.resolver import (
    UNRESOLVABLE_MESSAGE,
    UnresolvableURIError,
    resolve_relative,
    select_base,
)


def test_resolves_against_file_path() -> None:
    assert resolve_relative("./foo.md", "/docs/guide/README.md") == "/docs/guide/foo.md"
    assert resolve_relative("../img/logo.png", "/docs/guide/README.md") == "/docs/img/logo.png"


def test_resolves_against_base_uri() -> None:
    assert resolve_relative("../img.png", "https://example.com/docs/") == "https://example.com/img.png"
    assert resolve_relative("/root", "https://example.com/docs/page") == "https://example.com/root"
    assert resolve_relative("?q=1", "https://example.com/a/b") == "https://example.com/a/b?q=1"
    assert resolve_relative("#top", "https://example.com/a/b") == "https://example.com/a/b#top"


def test_missing_base_raises() -> None:
    with pytest.raises(UnresolvableURIError) as excinfo:
        resolve_relative("./foo", None)
    assert str(excinfo.value) == UNRESOLVABLE_MESSAGE
    assert excinfo.value.uri == "./foo"


def test_select_base_prefers_explicit_base_uri() -> None:
    assert select_base("https://example.com/", "/docs/README.md") == "https://example.com/"
    assert select_base(None, "/docs/README.md") == "/docs/README.md"
    assert select_base("", None) is None
