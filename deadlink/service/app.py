"""FastAPI application entrypoint for deadlink service mode."""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional

from fastapi import Depends, FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from .. import __version__
from ..config import ConfigError, LinkCheckConfig, config_from_options
from ..linter import LintResult, Linter


class CheckRequest(BaseModel):
    text: str
    file_path: Optional[str] = None
    syntax: Optional[str] = None
    options: Optional[Dict[str, Any]] = None


class FixPayload(BaseModel):
    start: int
    end: int
    text: str


class DiagnosticPayload(BaseModel):
    line: int
    column: int
    index: int
    message: str
    fix: Optional[FixPayload] = None


class CheckResponse(BaseModel):
    diagnostics: List[DiagnosticPayload]


class HealthResponse(BaseModel):
    status: str


LinterFactory = Callable[[LinkCheckConfig], Linter]


def _default_linter(config: LinkCheckConfig) -> Linter:
    return Linter(config)


def _to_response(result: LintResult) -> CheckResponse:
    diagnostics = []
    for message, diagnostic in zip(result.messages, result.diagnostics):
        fix = None
        if diagnostic.fix is not None:
            base = diagnostic.node.range[0]
            start, end = diagnostic.fix.range
            fix = FixPayload(start=base + start, end=base + end, text=diagnostic.fix.text)
        diagnostics.append(
            DiagnosticPayload(
                line=message.line,
                column=message.column,
                index=message.index,
                message=message.message,
                fix=fix,
            )
        )
    return CheckResponse(diagnostics=diagnostics)


def create_app(linter_factory: LinterFactory = _default_linter) -> FastAPI:
    """Create the FastAPI application exposing link checks."""

    app = FastAPI(title="deadlink", version=__version__)

    async def get_linter_factory() -> LinterFactory:
        return linter_factory

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.post("/check", response_model=CheckResponse)
    async def check(
        payload: CheckRequest,
        factory: LinterFactory = Depends(get_linter_factory),
    ) -> CheckResponse:
        config = config_from_options(payload.options)
        linter = factory(config)
        result = await linter.lint_text(
            payload.text, file_path=payload.file_path, syntax=payload.syntax
        )
        return _to_response(result)

    @app.exception_handler(ConfigError)
    async def config_error_handler(_: Any, exc: ConfigError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.exception_handler(ValueError)
    async def value_error_handler(_: Any, exc: ValueError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    return app


def run_service(
    host: str = "127.0.0.1", port: int = 8000
) -> None:  # pragma: no cover - integration path
    import uvicorn

    app = create_app()
    uvicorn.run(app, host=host, port=port)
