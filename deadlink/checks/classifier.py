"""Predicates classifying URIs as local, remote, ignored or redirecting."""

from __future__ import annotations

import functools
import os
import re
from typing import Iterable, Pattern
from urllib.parse import urlparse

REDIRECT_STATUSES = frozenset({301, 302, 303, 307, 308})


def is_relative(uri: str) -> bool:
    """Return True when ``uri`` has no host component."""
    try:
        host = urlparse(uri).netloc
    except ValueError:
        return False
    return not host


def is_local(uri: str) -> bool:
    """Return True when ``uri`` points at the filesystem rather than a remote host."""
    if os.path.isabs(uri):
        return True
    return is_relative(uri)


def is_redirect(status: int) -> bool:
    """Return True for the HTTP redirect status codes."""
    return status in REDIRECT_STATUSES


def is_ignored(uri: str, patterns: Iterable[str] = ()) -> bool:
    """Return True when any glob in ``patterns`` matches the whole of ``uri``."""
    return any(_compile_glob(pattern).fullmatch(uri) for pattern in patterns)


@functools.lru_cache(maxsize=256)
def _compile_glob(pattern: str) -> Pattern[str]:
    """Translate a glob into a regex: ``**`` crosses ``/``, ``*`` and ``?`` do not."""
    parts = []
    index = 0
    length = len(pattern)
    while index < length:
        char = pattern[index]
        if char == "*":
            if pattern.startswith("**", index):
                parts.append(".*")
                index += 2
                continue
            parts.append("[^/]*")
        elif char == "?":
            parts.append("[^/]")
        elif char == "[":
            body_start = index + 2 if pattern.startswith("[!", index) else index + 1
            closing = pattern.find("]", body_start + 1)
            if closing == -1:
                parts.append(re.escape(char))
            else:
                body = pattern[index + 1 : closing].replace("\\", "\\\\")
                if body.startswith("!"):
                    body = "^" + body[1:]
                elif body.startswith("^"):
                    body = "\\" + body
                parts.append("[" + body + "]")
                index = closing + 1
                continue
        elif char == "\\" and index + 1 < length:
            parts.append(re.escape(pattern[index + 1]))
            index += 2
            continue
        else:
            parts.append(re.escape(char))
        index += 1
    return re.compile("".join(parts))


__all__ = ["REDIRECT_STATUSES", "is_ignored", "is_local", "is_redirect", "is_relative"]
