"""Tests for the verdict reporter."""

from __future__ import annotations

from deadlink.checks.reporter import VerdictReporter, build_verdict
from deadlink.checks.resolver import UNRESOLVABLE_MESSAGE
from deadlink.document.nodes import Node, NodeType
from deadlink.models import DiagnosticCollector, Fix, ProbeResult, URIOccurrence


def test_dead_link_message_without_fix() -> None:
    verdict = build_verdict("https://example.com/x", 4, ProbeResult(ok=False, message="404 Not Found"))
    assert verdict == ("https://example.com/x is dead. (404 Not Found)", None)


def test_redirect_message_with_fix_covering_the_uri() -> None:
    uri = "http://example.com/old"
    result = ProbeResult(
        ok=True, redirected=True, redirect_to="https://example.com/new", message="301 Moved Permanently"
    )
    verdict = build_verdict(uri, 10, result)
    assert verdict is not None
    message, fix = verdict
    assert message == (
        "http://example.com/old is redirected to https://example.com/new. (301 Moved Permanently)"
    )
    assert fix == Fix(range=(10, 10 + len(uri)), text="https://example.com/new")


def test_alive_link_produces_nothing() -> None:
    assert build_verdict("https://example.com/", 0, ProbeResult(ok=True, message="200 OK")) is None


def test_reporter_sends_to_sink_with_custom_fix_factory() -> None:
    node = Node(NodeType.STR, "see http://example.com/old", (5, 31))
    occurrence = URIOccurrence(node=node, uri="http://example.com/old", index=4)
    sink = DiagnosticCollector()
    ranges = []

    def fix_factory(range: tuple[int, int], text: str) -> Fix:
        ranges.append(range)
        return Fix(range=range, text=text.upper())

    reporter = VerdictReporter(sink, fix_factory)
    reported = reporter.report_result(
        occurrence,
        occurrence.uri,
        ProbeResult(ok=True, redirected=True, redirect_to="https://example.com/new", message="302 Found"),
    )
    reporter.report_unresolvable(occurrence)

    assert reported
    assert ranges == [(4, 26)]
    first, second = sink.diagnostics
    assert first.node is node
    assert first.index == 4
    assert first.offset == 9
    assert first.fix == Fix(range=(4, 26), text="HTTPS://EXAMPLE.COM/NEW")
    assert second.message == UNRESOLVABLE_MESSAGE
    assert second.fix is None


def test_reporter_skips_alive_links() -> None:
    node = Node(NodeType.STR, "x", (0, 1))
    sink = DiagnosticCollector()
    reported = VerdictReporter(sink).report_result(
        URIOccurrence(node=node, uri="https://example.com", index=0),
        "https://example.com",
        ProbeResult(ok=True, message="200 OK"),
    )
    assert not reported
    assert sink.diagnostics == []
