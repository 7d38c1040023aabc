"""Application of diagnostic fixes to document text."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, List, Tuple

from ..models import Diagnostic

# Characters that may continue a URI; anything else ends the replaced span.
_URI_CHAR = re.compile(r"[-A-Za-z0-9@:%_+.~#?&/=]")
_BREAKS_URI = re.compile(r"[\s<>\"`]")


@dataclass
class FixResult:
    """Rewritten text plus bookkeeping about which fixes were applied."""

    text: str
    applied: int
    skipped: int


class TextFixer:
    """Applies the fixes attached to diagnostics.

    A fix is skipped when it overlaps an earlier one, or when the text it would
    replace is not a single URI token inside its node. The second case covers
    relative links, whose fix range is sized from the resolved URI.
    """

    def apply(self, text: str, diagnostics: Iterable[Diagnostic]) -> FixResult:
        edits: List[Tuple[int, int, str]] = []
        skipped = 0
        for diagnostic in diagnostics:
            if diagnostic.fix is None:
                continue
            base = diagnostic.node.range[0]
            start, end = diagnostic.fix.range
            if not _replaces_uri(text, base + start, base + end, diagnostic.node.range[1]):
                skipped += 1
                continue
            edits.append((base + start, base + end, diagnostic.fix.text))

        edits.sort(key=lambda edit: (edit[0], edit[1]))
        accepted: List[Tuple[int, int, str]] = []
        last_end = -1
        for start, end, replacement in edits:
            if start < last_end:
                skipped += 1
                continue
            accepted.append((start, end, replacement))
            last_end = end

        output = text
        for start, end, replacement in reversed(accepted):
            output = output[:start] + replacement + output[end:]
        return FixResult(text=output, applied=len(accepted), skipped=skipped)


def _replaces_uri(text: str, start: int, end: int, node_end: int) -> bool:
    if start >= end or end > node_end or end > len(text):
        return False
    segment = text[start:end]
    if _BREAKS_URI.search(segment) or segment.count("(") != segment.count(")"):
        return False
    return end == node_end or not _URI_CHAR.match(text[end])


__all__ = ["FixResult", "TextFixer"]
