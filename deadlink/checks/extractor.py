"""Extraction of URI occurrences from text and link nodes."""

from __future__ import annotations

import re
from typing import List, Optional

from ..document.nodes import Node, NodeType
from ..logging import get_logger
from ..models import URIOccurrence

# Scheme-optional URL with a 2-6 letter TLD followed by a permissive path/query tail.
URI_PATTERN = re.compile(
    r"(?:https?:)?//(?:www\.)?[-a-zA-Z0-9@:%._+~#=]{2,256}\.[a-z]{2,6}\b"
    r"(?:[-a-zA-Z0-9@:%_+.~#?&/=]*)"
)

_logger = get_logger("extractor")


def is_quoted(node: Node) -> bool:
    """Return True when ``node`` sits inside a block quotation."""
    return node.is_child_of([NodeType.BLOCK_QUOTE])


def extract_from_text(node: Node) -> List[URIOccurrence]:
    """Return every URI found in a ``Str`` node's source text.

    Text inside block quotes and link labels yields nothing; the enclosing link
    node is checked instead.
    """
    if is_quoted(node) or node.is_child_of([NodeType.LINK]):
        return []
    return [
        URIOccurrence(node=node, uri=match.group(0), index=match.start())
        for match in URI_PATTERN.finditer(node.raw)
    ]


def extract_from_link(node: Node) -> Optional[URIOccurrence]:
    """Return the occurrence for a link node, or None for placeholder and quoted links."""
    if is_quoted(node):
        return None
    if not node.url:
        return None
    index = node.raw.find(node.url)
    if index < 0:
        _logger.debug("Link target %s not found in its source; reporting at offset 0", node.url)
        index = 0
    return URIOccurrence(node=node, uri=node.url, index=index)


__all__ = ["URI_PATTERN", "extract_from_link", "extract_from_text", "is_quoted"]
