"""Liveness probes for remote URLs and local paths."""

from __future__ import annotations

import asyncio
import os
import re
from typing import Optional
from urllib.parse import urlsplit
from urllib.request import url2pathname

import aiohttp

from .. import __version__
from ..logging import get_logger
from ..models import ProbeResult
from .classifier import is_local, is_redirect
from .methods import GET, HEAD

USER_AGENT = f"deadlink/{__version__}"

# Probe responses are never decompressed.
_REQUEST_HEADERS = {"Accept-Encoding": "identity"}
_SUFFIX_PATTERN = re.compile(r"[?#].*$", re.DOTALL)

_TRANSPORT_ERRORS = (aiohttp.ClientError, asyncio.TimeoutError, ValueError)


def create_session(timeout: Optional[float] = None) -> aiohttp.ClientSession:
    """Return a client session suitable for probing: no decompression, optional deadline."""
    return aiohttp.ClientSession(
        timeout=aiohttp.ClientTimeout(total=timeout),
        auto_decompress=False,
        headers={"User-Agent": USER_AGENT},
    )


def _is_success(status: int) -> bool:
    return 200 <= status < 300


def _status_message(status: int, reason: Optional[str]) -> str:
    return f"{status} {reason or ''}".rstrip()


def _describe(exc: BaseException) -> str:
    return str(exc) or exc.__class__.__name__


def _request_url(uri: str) -> str:
    # Protocol-relative references carry no scheme of their own.
    if uri.startswith("//"):
        return f"https:{uri}"
    return uri


def local_path(uri: str) -> str:
    """Return the filesystem path for a local URI, without query or fragment."""
    if uri.lower().startswith("file:"):
        return url2pathname(urlsplit(uri).path)
    return _SUFFIX_PATTERN.sub("", uri)


async def probe_local(uri: str) -> ProbeResult:
    """Check that the file or directory behind ``uri`` exists and is accessible."""
    path = local_path(uri)
    loop = asyncio.get_running_loop()
    try:
        await loop.run_in_executor(None, os.stat, path)
    except OSError as exc:
        return ProbeResult(ok=False, message=_describe(exc))
    return ProbeResult(ok=True)


class LivenessProber:
    """Probes URIs over HTTP(S) or on the local filesystem.

    Remote probes start with ``method`` (HEAD unless the caller selected GET)
    and fall back to GET once, either when HEAD gets a non-2xx answer or when
    it fails at the transport level. Redirects are first observed without
    following them so the original status can be reported, then followed to
    learn the final URL.
    """

    def __init__(self, session: aiohttp.ClientSession) -> None:
        self._session = session
        self.logger = get_logger("prober")

    async def probe(self, uri: str, method: str = HEAD) -> ProbeResult:
        if is_local(uri):
            return await probe_local(uri)
        return await self.probe_remote(uri, method)

    async def probe_remote(self, uri: str, method: str = HEAD) -> ProbeResult:
        target = _request_url(uri)
        current = method
        while True:
            try:
                result = await self._attempt(target, current)
            except _TRANSPORT_ERRORS as exc:
                if current != HEAD:
                    self.logger.debug("GET %s failed: %s", uri, _describe(exc))
                    return ProbeResult(ok=False, message=_describe(exc))
                self.logger.debug("HEAD %s failed (%s); retrying with GET", uri, _describe(exc))
            else:
                if result is not None:
                    return result
                self.logger.debug("HEAD %s was not successful; retrying with GET", uri)
            current = GET

    async def _attempt(self, target: str, method: str) -> Optional[ProbeResult]:
        """Run one request; None means a HEAD answer that should be retried with GET."""
        async with self._session.request(
            method, target, allow_redirects=False, headers=_REQUEST_HEADERS
        ) as response:
            status, reason = response.status, response.reason
        self.logger.debug("%s %s -> %s", method, target, status)

        if is_redirect(status):
            async with self._session.request(
                method, target, allow_redirects=True, headers=_REQUEST_HEADERS
            ) as final:
                return ProbeResult(
                    ok=_is_success(final.status),
                    redirected=True,
                    redirect_to=str(final.url),
                    message=_status_message(status, reason),
                )

        if not _is_success(status) and method == HEAD:
            return None

        return ProbeResult(ok=_is_success(status), message=_status_message(status, reason))


__all__ = ["LivenessProber", "USER_AGENT", "create_session", "local_path", "probe_local"]
