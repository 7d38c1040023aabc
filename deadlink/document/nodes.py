"""Node model for parsed documents."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Iterable, Iterator, List, Mapping, Optional, Tuple


class NodeType(str, Enum):
    """Tags for the node kinds produced by the document parsers."""

    DOCUMENT = "Document"
    PARAGRAPH = "Paragraph"
    HEADING = "Heading"
    STR = "Str"
    LINK = "Link"
    EMPHASIS = "Emphasis"
    STRONG = "Strong"
    IMAGE = "Image"
    CODE = "Code"
    CODE_BLOCK = "CodeBlock"
    BLOCK_QUOTE = "BlockQuote"
    HTML = "Html"


@dataclass(eq=False)
class Node:
    """A span of the source document.

    ``range`` holds absolute, half-open character offsets into the source text
    and ``raw`` is the exact source slice covered by the node. Link nodes carry
    their target in ``url``; ``None`` marks a placeholder anchor.
    """

    type: NodeType
    raw: str
    range: Tuple[int, int]
    children: List["Node"] = field(default_factory=list)
    parent: Optional["Node"] = field(default=None, repr=False)
    url: Optional[str] = None

    @property
    def start(self) -> int:
        return self.range[0]

    @property
    def end(self) -> int:
        return self.range[1]

    def append(self, child: "Node") -> "Node":
        child.parent = self
        self.children.append(child)
        return child

    def ancestors(self) -> Iterator["Node"]:
        current = self.parent
        while current is not None:
            yield current
            current = current.parent

    def is_child_of(self, types: Iterable[NodeType]) -> bool:
        """Return True when any ancestor of this node has one of ``types``."""
        wanted = set(types)
        return any(ancestor.type in wanted for ancestor in self.ancestors())


Handler = Callable[[Node], None]


def traverse(node: Node, handlers: Mapping[NodeType, Handler]) -> None:
    """Visit ``node`` and its descendants depth-first, calling the handler for each tag."""
    stack = [node]
    while stack:
        current = stack.pop()
        handler = handlers.get(current.type)
        if handler is not None:
            handler(current)
        stack.extend(reversed(current.children))


__all__ = ["Handler", "Node", "NodeType", "traverse"]
