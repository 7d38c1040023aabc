"""Core data models shared across deadlink components."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, List, Optional, Protocol, Tuple

if TYPE_CHECKING:  # pragma: no cover - typing aid
    from .document.nodes import Node


@dataclass(frozen=True)
class URIOccurrence:
    """A link candidate found in a node, with its offset in the node's source."""

    node: "Node"
    uri: str
    index: int


@dataclass(frozen=True)
class ProbeResult:
    """Outcome of a single liveness probe."""

    ok: bool
    message: str = ""
    redirected: bool = False
    redirect_to: Optional[str] = None


@dataclass(frozen=True)
class Fix:
    """Replacement of a half-open range, relative to the reported node's start."""

    range: Tuple[int, int]
    text: str


@dataclass
class Diagnostic:
    """A problem reported against a node."""

    node: "Node"
    message: str
    index: int
    fix: Optional[Fix] = None

    @property
    def offset(self) -> int:
        """Absolute offset of the problem in the source document."""
        return self.node.range[0] + self.index


FixFactory = Callable[[Tuple[int, int], str], Fix]


def replace_text_range(range: Tuple[int, int], text: str) -> Fix:
    """Build a fix replacing ``range`` with ``text``."""
    start, end = range
    if start < 0 or end < start:
        raise ValueError(f"Invalid fix range: {range!r}")
    return Fix(range=(start, end), text=text)


class DiagnosticSink(Protocol):
    """Receives diagnostics emitted by the link checker."""

    def report(self, node: "Node", message: str, index: int, fix: Optional[Fix] = None) -> None:
        """Record a problem at ``index`` within ``node``."""


class DiagnosticCollector:
    """Sink that keeps every reported diagnostic in memory."""

    def __init__(self) -> None:
        self.diagnostics: List[Diagnostic] = []

    def report(self, node: "Node", message: str, index: int, fix: Optional[Fix] = None) -> None:
        self.diagnostics.append(Diagnostic(node=node, message=message, index=index, fix=fix))

    def sorted(self) -> List[Diagnostic]:
        return sorted(self.diagnostics, key=lambda diagnostic: diagnostic.offset)


__all__ = [
    "Diagnostic",
    "DiagnosticCollector",
    "DiagnosticSink",
    "Fix",
    "FixFactory",
    "ProbeResult",
    "URIOccurrence",
    "replace_text_range",
]
