"""Tests for fix application and source positions."""

from __future__ import annotations

from deadlink.document.nodes import Node, NodeType
from deadlink.models import Diagnostic, Fix
from deadlink.postproc.fixer import TextFixer
from deadlink.postproc.locator import SourceLocator


def test_fixes_are_applied_relative_to_their_node() -> None:
    text = "a http://old.example.com/x b\n[l](http://old.example.com/y)\n"
    first = Node(NodeType.STR, text[0:28], (0, 28))
    link_start = text.index("[l]")
    link = Node(NodeType.LINK, "[l](http://old.example.com/y)", (link_start, link_start + 29))
    diagnostics = [
        Diagnostic(node=link, message="m", index=4, fix=Fix(range=(4, 28), text="https://new.example.com/y")),
        Diagnostic(node=first, message="m", index=2, fix=Fix(range=(2, 26), text="https://new.example.com/x")),
        Diagnostic(node=first, message="dead", index=2),
    ]

    result = TextFixer().apply(text, diagnostics)

    assert result.applied == 2
    assert result.skipped == 0
    assert result.text == "a https://new.example.com/x b\n[l](https://new.example.com/y)\n"


def test_overlapping_fixes_are_skipped() -> None:
    text = "http://a.example.com/"
    node = Node(NodeType.STR, text, (0, len(text)))
    diagnostics = [
        Diagnostic(node=node, message="m", index=0, fix=Fix(range=(0, 21), text="X")),
        Diagnostic(node=node, message="m", index=5, fix=Fix(range=(5, 10), text="Y")),
    ]
    result = TextFixer().apply(text, diagnostics)
    assert result.text == "X"
    assert (result.applied, result.skipped) == (1, 1)


def test_source_locator_lines_and_columns() -> None:
    locator = SourceLocator("ab\ncd\n\nef")
    assert locator.locate(0) == (1, 1)
    assert locator.locate(1) == (1, 2)
    assert locator.locate(3) == (2, 1)
    assert locator.locate(6) == (3, 1)
    assert locator.locate(8) == (4, 2)


def test_fix_wider_than_the_source_uri_is_skipped() -> None:
    text = "[a](x) and [b](https://keep.example.com/y)\n"
    link = Node(NodeType.LINK, "[a](x)", (0, 6))
    resolved = "https://example.com/docs/x"
    diagnostics = [
        Diagnostic(node=link, message="m", index=4, fix=Fix(range=(4, 4 + len(resolved)), text="https://example.com/z")),
    ]

    result = TextFixer().apply(text, diagnostics)

    assert result.text == text
    assert (result.applied, result.skipped) == (0, 1)


def test_fix_ending_inside_a_uri_is_skipped() -> None:
    text = "see ../../x/y.md"
    node = Node(NodeType.STR, text, (0, len(text)))
    diagnostics = [Diagnostic(node=node, message="m", index=4, fix=Fix(range=(4, 10), text="https://e.com/"))]
    assert TextFixer().apply(text, diagnostics).applied == 0
