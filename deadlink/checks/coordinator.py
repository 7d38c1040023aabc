"""Collects URI occurrences from a document and checks them concurrently."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Callable, Dict, List, Optional

import aiohttp

from ..config import LinkCheckConfig
from ..document.nodes import Handler, Node, NodeType, traverse
from ..logging import get_logger
from ..models import DiagnosticSink, FixFactory, URIOccurrence, replace_text_range
from .classifier import is_ignored, is_relative
from .extractor import extract_from_link, extract_from_text
from .methods import select_method
from .prober import LivenessProber, create_session
from .reporter import VerdictReporter
from .resolver import UnresolvableURIError, resolve_relative, select_base

SessionFactory = Callable[[Optional[float]], aiohttp.ClientSession]


class BatchCoordinator:
    """Accumulates occurrences during traversal and probes them all at end of document."""

    def __init__(
        self,
        config: LinkCheckConfig,
        sink: DiagnosticSink,
        *,
        file_path: str | Path | None = None,
        session_factory: SessionFactory | None = None,
        fix_factory: FixFactory = replace_text_range,
    ) -> None:
        self.config = config
        self.file_path = file_path
        self.reporter = VerdictReporter(sink, fix_factory)
        self.occurrences: List[URIOccurrence] = []
        self._session_factory = session_factory or create_session
        self.logger = get_logger("coordinator")

    def handlers(self) -> Dict[NodeType, Handler]:
        return {NodeType.STR: self.on_text, NodeType.LINK: self.on_link}

    def on_text(self, node: Node) -> None:
        self.occurrences.extend(extract_from_text(node))

    def on_link(self, node: Node) -> None:
        occurrence = extract_from_link(node)
        if occurrence is not None:
            self.occurrences.append(occurrence)

    def collect(self, document: Node) -> List[URIOccurrence]:
        traverse(document, self.handlers())
        self.logger.debug("Collected %d URI occurrence(s)", len(self.occurrences))
        return self.occurrences

    async def finish(self) -> None:
        """Check every collected occurrence and wait until all of them have settled."""
        occurrences, self.occurrences = self.occurrences, []
        if not occurrences:
            return
        async with self._session_factory(self.config.timeout) as session:
            prober = LivenessProber(session)
            outcomes = await asyncio.gather(
                *(self.check(occurrence, prober) for occurrence in occurrences),
                return_exceptions=True,
            )
        for occurrence, outcome in zip(occurrences, outcomes):
            if isinstance(outcome, BaseException):
                self.logger.error(
                    "Checking %s failed unexpectedly: %s",
                    occurrence.uri,
                    outcome,
                    exc_info=outcome,
                )

    async def check(self, occurrence: URIOccurrence, prober: LivenessProber) -> None:
        uri = occurrence.uri
        if is_ignored(uri, self.config.ignore):
            self.logger.debug("Skipping ignored URI %s", uri)
            return

        if is_relative(uri):
            if not self.config.check_relative:
                self.logger.debug("Skipping relative URI %s", uri)
                return
            base = select_base(self.config.base_uri, self.file_path)
            try:
                uri = resolve_relative(uri, base)
            except UnresolvableURIError:
                self.reporter.report_unresolvable(occurrence)
                return

        method = select_method(uri, self.config.prefer_get)
        result = await prober.probe(uri, method)
        self.logger.debug("%s -> ok=%s %s", uri, result.ok, result.message)
        self.reporter.report_result(occurrence, uri, result)


async def lint_document(
    document: Node,
    config: LinkCheckConfig,
    sink: DiagnosticSink,
    *,
    file_path: str | Path | None = None,
    session_factory: SessionFactory | None = None,
    fix_factory: FixFactory = replace_text_range,
) -> None:
    """Traverse ``document``, then check every URI it references."""
    coordinator = BatchCoordinator(
        config,
        sink,
        file_path=file_path,
        session_factory=session_factory,
        fix_factory=fix_factory,
    )
    coordinator.collect(document)
    await coordinator.finish()


__all__ = ["BatchCoordinator", "SessionFactory", "lint_document"]
