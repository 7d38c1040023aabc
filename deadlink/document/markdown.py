"""A small Markdown parser producing :class:`~deadlink.document.nodes.Node` trees.

Only the constructs that matter for link checking are recognised. Block level:
ATX headings, fenced code blocks, ``>`` block quotes (with lazy continuation
lines) and paragraphs. Inline level: code spans, images, inline links,
autolinks, HTML anchors and ``*``/``_`` emphasis. Anything else is plain text
(``Str``).
"""

from __future__ import annotations

import re
from typing import List, Optional, Tuple

from .nodes import Node, NodeType

_FENCE_PATTERN = re.compile(r"^ {0,3}(`{3,}|~{3,})")
_HEADING_PATTERN = re.compile(r"^ {0,3}#{1,6}(?:[ \t]+|$)")
_QUOTE_PATTERN = re.compile(r"^ {0,3}> ?")

# One level of nesting: balanced parentheses in destinations, brackets in labels.
_LINK_DESTINATION = r"(?:[^()\s<>]|\([^()\s]*\))*"
_LINK_LABEL = r"(?:[^\[\]]|\[[^\[\]]*\])*"
_LINK_TITLE = r"""(?:\s+(?:"[^"]*"|'[^']*'|\([^()]*\)))?"""

_INLINE_PATTERN = re.compile(
    r"(?P<code>(?P<ticks>`+).+?(?P=ticks))"
    rf"|(?P<image>!\[{_LINK_LABEL}\]\(\s*(?:<[^<>\n]*>|{_LINK_DESTINATION}){_LINK_TITLE}\s*\))"
    rf"|(?P<link>\[(?P<link_text>{_LINK_LABEL})\]\(\s*"
    rf"(?:<(?P<angle_url>[^<>\n]*)>|(?P<link_url>{_LINK_DESTINATION})){_LINK_TITLE}\s*\))"
    r"|(?P<autolink><(?P<auto_url>[a-zA-Z][a-zA-Z0-9+.-]{1,31}:[^<>\s]*)>)"
    r"|(?P<anchor>(?i:<a\b(?P<attrs>[^>]*)>(?P<anchor_text>.*?)</a\s*>))"
    r"|(?P<emphasis>(?:(?P<star>\*{1,2})|(?<![A-Za-z0-9])(?P<under>_{1,2}))"
    r"(?=[^\s*_])(?P<emphasis_text>.+?)(?<=[^\s*_])"
    r"(?:(?P=star)|(?P=under)(?![A-Za-z0-9])))",
    re.DOTALL,
)
_HREF_PATTERN = re.compile(r"""href\s*=\s*(?:"([^"]*)"|'([^']*)'|([^\s"'>]+))""", re.IGNORECASE)

Line = Tuple[int, str]


def parse_markdown(text: str) -> Node:
    """Parse Markdown ``text`` into a document node."""
    document = Node(NodeType.DOCUMENT, text, (0, len(text)))
    lines = _split_lines(text)
    index = 0
    while index < len(lines):
        start, line = lines[index]
        if not line.strip():
            index += 1
            continue

        fence = _FENCE_PATTERN.match(line)
        if fence:
            index = _consume_fence(text, lines, index, fence.group(1), document)
            continue

        if _QUOTE_PATTERN.match(line):
            index = _consume_quote(text, lines, index, document)
            continue

        heading = _HEADING_PATTERN.match(line)
        if heading:
            end = start + len(line)
            node = document.append(Node(NodeType.HEADING, text[start:end], (start, end)))
            parse_inline(text, node, start + heading.end(), end)
            index += 1
            continue

        index = _consume_paragraph(text, lines, index, document)
    return document


def parse_inline(text: str, parent: Node, start: int, end: int) -> None:
    """Append inline nodes for ``text[start:end]`` to ``parent``.

    Link labels and emphasis are parsed recursively, so a badge such as
    ``[![alt](img)](target)`` yields a link to ``target`` holding an image.
    """
    cursor = start
    for match in _INLINE_PATTERN.finditer(text, start, end):
        if match.start() > cursor:
            _append_str(text, parent, cursor, match.start())
        cursor = match.end()
        span = (match.start(), match.end())
        raw = match.group(0)

        if match.group("code") is not None:
            parent.append(Node(NodeType.CODE, raw, span))
        elif match.group("image") is not None:
            parent.append(Node(NodeType.IMAGE, raw, span))
        elif match.group("link") is not None:
            url = match.group("angle_url")
            if url is None:
                url = match.group("link_url")
            link = parent.append(Node(NodeType.LINK, raw, span, url=url))
            parse_inline(text, link, match.start("link_text"), match.end("link_text"))
        elif match.group("autolink") is not None:
            link = parent.append(Node(NodeType.LINK, raw, span, url=match.group("auto_url")))
            _append_str(text, link, match.start("auto_url"), match.end("auto_url"))
        elif match.group("anchor") is not None:
            link = parent.append(
                Node(NodeType.LINK, raw, span, url=_extract_href(match.group("attrs")))
            )
            _append_str(text, link, match.start("anchor_text"), match.end("anchor_text"))
        else:
            delimiter = match.group("star") or match.group("under")
            node_type = NodeType.STRONG if len(delimiter) == 2 else NodeType.EMPHASIS
            emphasis = parent.append(Node(node_type, raw, span))
            parse_inline(text, emphasis, match.start("emphasis_text"), match.end("emphasis_text"))

    if cursor < end:
        _append_str(text, parent, cursor, end)


def _append_str(text: str, parent: Node, start: int, end: int) -> None:
    if start >= end:
        return
    parent.append(Node(NodeType.STR, text[start:end], (start, end)))


def _extract_href(attrs: str) -> Optional[str]:
    match = _HREF_PATTERN.search(attrs or "")
    if not match:
        return None
    return next(group for group in match.groups() if group is not None)


def _split_lines(text: str) -> List[Line]:
    lines: List[Line] = []
    offset = 0
    for chunk in text.splitlines(keepends=True):
        lines.append((offset, chunk.rstrip("\r\n")))
        offset += len(chunk)
    return lines


def _line_end(line: Line) -> int:
    return line[0] + len(line[1])


def _consume_fence(text: str, lines: List[Line], index: int, marker: str, parent: Node) -> int:
    closing = marker[0] * len(marker)
    last = index + 1
    while last < len(lines) and not lines[last][1].lstrip().startswith(closing):
        last += 1
    last = min(last, len(lines) - 1)
    start, end = lines[index][0], _line_end(lines[last])
    parent.append(Node(NodeType.CODE_BLOCK, text[start:end], (start, end)))
    return last + 1


def _consume_quote(text: str, lines: List[Line], index: int, parent: Node) -> int:
    last = index
    while last + 1 < len(lines):
        candidate = lines[last + 1][1]
        if not (_QUOTE_PATTERN.match(candidate) or _continues_lazily(lines[last][1], candidate)):
            break
        last += 1
    start, end = lines[index][0], _line_end(lines[last])
    quote = parent.append(Node(NodeType.BLOCK_QUOTE, text[start:end], (start, end)))
    for line_start, line in lines[index : last + 1]:
        marker = _QUOTE_PATTERN.match(line)
        content_start = line_start + (marker.end() if marker else 0)
        content_end = line_start + len(line)
        if not text[content_start:content_end].strip():
            continue
        paragraph = quote.append(
            Node(NodeType.PARAGRAPH, text[content_start:content_end], (content_start, content_end))
        )
        parse_inline(text, paragraph, content_start, content_end)
    return last + 1


def _continues_lazily(previous: str, candidate: str) -> bool:
    """A line without ``>`` still belongs to a quote that ends in paragraph text."""
    if not candidate.strip() or _starts_block(candidate):
        return False
    return bool(_QUOTE_PATTERN.sub("", previous, count=1).strip())


def _starts_block(line: str) -> bool:
    return bool(
        _FENCE_PATTERN.match(line) or _QUOTE_PATTERN.match(line) or _HEADING_PATTERN.match(line)
    )


def _consume_paragraph(text: str, lines: List[Line], index: int, parent: Node) -> int:
    last = index
    while last + 1 < len(lines):
        candidate = lines[last + 1][1]
        if not candidate.strip() or _starts_block(candidate):
            break
        last += 1
    start, end = lines[index][0], _line_end(lines[last])
    paragraph = parent.append(Node(NodeType.PARAGRAPH, text[start:end], (start, end)))
    parse_inline(text, paragraph, start, end)
    return last + 1


__all__ = ["parse_inline", "parse_markdown"]
