"""Plain-text documents: one paragraph per blank-line separated block."""

from __future__ import annotations

import re

from .nodes import Node, NodeType

_BLOCK_PATTERN = re.compile(r"\S(?:.*?\S)?(?=\r?\n[ \t]*\r?\n|\s*\Z)", re.DOTALL)


def parse_text(text: str) -> Node:
    """Parse plain ``text`` into a document of ``Paragraph`` > ``Str`` nodes."""
    document = Node(NodeType.DOCUMENT, text, (0, len(text)))
    for match in _BLOCK_PATTERN.finditer(text):
        span = (match.start(), match.end())
        paragraph = document.append(Node(NodeType.PARAGRAPH, match.group(0), span))
        paragraph.append(Node(NodeType.STR, match.group(0), span))
    return document


__all__ = ["parse_text"]
