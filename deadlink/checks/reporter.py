"""Translation of probe results into diagnostics."""

from __future__ import annotations

from typing import Optional, Tuple

from ..models import DiagnosticSink, Fix, FixFactory, ProbeResult, URIOccurrence, replace_text_range
from .resolver import UNRESOLVABLE_MESSAGE

Verdict = Tuple[str, Optional[Fix]]


def dead_message(uri: str, result: ProbeResult) -> str:
    return f"{uri} is dead. ({result.message})"


def redirect_message(uri: str, result: ProbeResult) -> str:
    return f"{uri} is redirected to {result.redirect_to}. ({result.message})"


def build_verdict(
    uri: str,
    index: int,
    result: ProbeResult,
    fix_factory: FixFactory = replace_text_range,
) -> Optional[Verdict]:
    """Return the message and optional fix for ``result``, or None when the link is fine."""
    if not result.ok:
        return dead_message(uri, result), None
    if result.redirected and result.redirect_to is not None:
        fix = fix_factory((index, index + len(uri)), result.redirect_to)
        return redirect_message(uri, result), fix
    return None


class VerdictReporter:
    """Reports dead, redirected and unresolvable URIs to a diagnostic sink."""

    def __init__(self, sink: DiagnosticSink, fix_factory: FixFactory = replace_text_range) -> None:
        self.sink = sink
        self.fix_factory = fix_factory

    def report_result(self, occurrence: URIOccurrence, uri: str, result: ProbeResult) -> bool:
        """Report ``result`` for the (resolved) ``uri``; return True when something was reported."""
        verdict = build_verdict(uri, occurrence.index, result, self.fix_factory)
        if verdict is None:
            return False
        message, fix = verdict
        self.sink.report(occurrence.node, message, occurrence.index, fix)
        return True

    def report_unresolvable(self, occurrence: URIOccurrence) -> None:
        self.sink.report(occurrence.node, UNRESOLVABLE_MESSAGE, occurrence.index)


__all__ = ["VerdictReporter", "build_verdict", "dead_message", "redirect_message"]
