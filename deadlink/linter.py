"""Lint pipeline: parse a document, check its links, collect and fix diagnostics."""

from __future__ import annotations

import asyncio
import difflib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional

from .checks.coordinator import SessionFactory, lint_document
from .config import LinkCheckConfig
from .document import parse_document
from .logging import get_logger
from .models import Diagnostic, DiagnosticCollector, Fix, FixFactory, replace_text_range
from .postproc.fixer import TextFixer
from .postproc.locator import SourceLocator


@dataclass
class LintMessage:
    """A diagnostic positioned in the source document."""

    line: int
    column: int
    index: int
    message: str
    fix: Optional[Fix] = None

    @property
    def fixable(self) -> bool:
        return self.fix is not None


@dataclass
class LintResult:
    """Diagnostics produced for one document."""

    file_path: Optional[Path]
    source: str
    diagnostics: List[Diagnostic] = field(default_factory=list)
    messages: List[LintMessage] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.messages


@dataclass
class FixOutcome:
    """Result of applying redirect fixes to a file."""

    path: Path
    diff: str
    dry_run: bool
    applied: int
    remaining: List[LintMessage]


class Linter:
    """Runs the link checks over documents and files."""

    def __init__(
        self,
        config: LinkCheckConfig | None = None,
        *,
        session_factory: SessionFactory | None = None,
        fix_factory: FixFactory = replace_text_range,
        fixer: TextFixer | None = None,
    ) -> None:
        self.config = config or LinkCheckConfig()
        self.session_factory = session_factory
        self.fix_factory = fix_factory
        self.fixer = fixer or TextFixer()
        self.logger = get_logger("linter")

    async def lint_text(
        self,
        text: str,
        *,
        file_path: str | Path | None = None,
        syntax: str | None = None,
    ) -> LintResult:
        """Check every link in ``text``; ``file_path`` is the base for relative links."""
        document = parse_document(text, syntax, file_path=file_path)
        collector = DiagnosticCollector()
        await lint_document(
            document,
            self.config,
            collector,
            file_path=file_path,
            session_factory=self.session_factory,
            fix_factory=self.fix_factory,
        )
        diagnostics = collector.sorted()
        locator = SourceLocator(text)
        messages = []
        for diagnostic in diagnostics:
            line, column = locator.locate(diagnostic.offset)
            messages.append(
                LintMessage(
                    line=line,
                    column=column,
                    index=diagnostic.offset,
                    message=diagnostic.message,
                    fix=diagnostic.fix,
                )
            )
        return LintResult(
            file_path=Path(file_path) if file_path is not None else None,
            source=text,
            diagnostics=diagnostics,
            messages=messages,
        )

    async def lint_file(self, path: str | Path) -> LintResult:
        """Read ``path`` and check its links."""
        file_path = _resolve_path(path)
        self.logger.info("Checking links in %s", file_path)
        text = file_path.read_text(encoding="utf-8")
        result = await self.lint_text(text, file_path=file_path)
        self.logger.info("%s: %d problem(s)", file_path, len(result.messages))
        return result

    def check_files(self, paths: Iterable[str | Path]) -> List[LintResult]:
        """Synchronously check each file in turn."""
        return asyncio.run(self._lint_files(list(paths)))

    def fix_file(self, path: str | Path, *, dry_run: bool = False) -> FixOutcome:
        """Rewrite redirected URIs in ``path`` to their final destination."""
        file_path = _resolve_path(path)
        result = asyncio.run(self.lint_file(file_path))
        fixed = self.fixer.apply(result.source, result.diagnostics)
        diff = "".join(
            difflib.unified_diff(
                result.source.splitlines(keepends=True),
                fixed.text.splitlines(keepends=True),
                fromfile=str(file_path),
                tofile=str(file_path),
            )
        )
        if fixed.skipped:
            self.logger.warning(
                "Skipped %d overlapping or out-of-place fix(es) in %s", fixed.skipped, file_path
            )
        if dry_run:
            self.logger.info("Dry-run completed; %s not written", file_path)
        elif fixed.applied:
            file_path.write_text(fixed.text, encoding="utf-8")
            self.logger.info("Applied %d fix(es) to %s", fixed.applied, file_path)
        remaining = [message for message in result.messages if not message.fixable]
        return FixOutcome(
            path=file_path,
            diff=diff,
            dry_run=dry_run,
            applied=fixed.applied,
            remaining=remaining,
        )

    async def _lint_files(self, paths: List[str | Path]) -> List[LintResult]:
        results = []
        for path in paths:
            results.append(await self.lint_file(path))
        return results


def _resolve_path(path: str | Path) -> Path:
    return Path(path).expanduser().resolve()


__all__ = ["FixOutcome", "LintMessage", "LintResult", "Linter"]
