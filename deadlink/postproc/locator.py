"""Offset to line/column conversion."""

from __future__ import annotations

import bisect
from typing import List, Tuple


class SourceLocator:
    """Maps absolute character offsets of ``text`` to 1-based line and column numbers."""

    def __init__(self, text: str) -> None:
        self._line_starts: List[int] = [0]
        for index, char in enumerate(text):
            if char == "\n":
                self._line_starts.append(index + 1)

    def locate(self, offset: int) -> Tuple[int, int]:
        line_index = bisect.bisect_right(self._line_starts, max(offset, 0)) - 1
        return line_index + 1, offset - self._line_starts[line_index] + 1
