"""Document model and parsers used by the link checker."""

from __future__ import annotations

from pathlib import Path

from .markdown import parse_markdown
from .nodes import Node, NodeType, traverse
from .text import parse_text

MARKDOWN_SUFFIXES = {".md", ".markdown", ".mdown", ".mkd"}
SYNTAXES = ("markdown", "text")


def detect_syntax(file_path: str | Path | None) -> str:
    """Return the parser name for ``file_path`` based on its suffix."""
    if file_path is None:
        return "markdown"
    return "markdown" if Path(file_path).suffix.lower() in MARKDOWN_SUFFIXES else "text"


def parse_document(text: str, syntax: str | None = None, *, file_path: str | Path | None = None) -> Node:
    """Parse ``text`` with the requested syntax, or the one implied by ``file_path``."""
    resolved = syntax or detect_syntax(file_path)
    if resolved == "markdown":
        return parse_markdown(text)
    if resolved == "text":
        return parse_text(text)
    raise ValueError(f"Unsupported document syntax: {resolved!r} (expected one of {', '.join(SYNTAXES)})")


__all__ = [
    "MARKDOWN_SUFFIXES",
    "Node",
    "NodeType",
    "SYNTAXES",
    "detect_syntax",
    "parse_document",
    "parse_markdown",
    "parse_text",
    "traverse",
]
