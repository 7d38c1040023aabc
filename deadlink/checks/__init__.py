"""URI liveness checks: extraction, classification, resolution, probing and reporting."""

from .classifier import is_ignored, is_local, is_redirect, is_relative
from .coordinator import BatchCoordinator, SessionFactory, lint_document
from .extractor import URI_PATTERN, extract_from_link, extract_from_text
from .methods import GET, HEAD, select_method, url_origin
from .prober import LivenessProber, create_session, probe_local
from .reporter import VerdictReporter, build_verdict
from .resolver import UNRESOLVABLE_MESSAGE, UnresolvableURIError, resolve_relative, select_base

__all__ = [
    "BatchCoordinator",
    "GET",
    "HEAD",
    "LivenessProber",
    "SessionFactory",
    "UNRESOLVABLE_MESSAGE",
    "URI_PATTERN",
    "UnresolvableURIError",
    "VerdictReporter",
    "build_verdict",
    "create_session",
    "extract_from_link",
    "extract_from_text",
    "is_ignored",
    "is_local",
    "is_redirect",
    "is_relative",
    "lint_document",
    "probe_local",
    "resolve_relative",
    "select_base",
    "select_method",
    "url_origin",
]
