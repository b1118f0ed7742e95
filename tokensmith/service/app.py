"""FastAPI application entrypoint for tokensmith service mode."""

from __future__ import annotations

import asyncio
from typing import Any, Callable, Dict, List, Literal, Optional

import uvicorn
from fastapi import Depends, FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from .. import __version__
from ..analysis import render_changelog
from ..errors import ConfigError, TokenInputError
from ..models import CATEGORIES, GenerateRequest, GenerationResult
from ..orchestrator import Orchestrator

Platform = Literal["web", "ios", "android"]
Category = Literal["colors", "typography"]


class GenerateBody(BaseModel):
    light: Dict[str, Any]
    dark: Dict[str, Any]
    values: Dict[str, Any] = Field(default_factory=dict)
    typography: Optional[Dict[str, Any]] = None
    primitives: Optional[Dict[str, Any]] = None
    platforms: List[Platform] = Field(default_factory=lambda: ["web"])
    categories: List[Category] = Field(default_factory=lambda: list(CATEGORIES))
    best_practices: bool = True
    references: Dict[str, str] = Field(default_factory=dict)
    kotlin_package: Optional[str] = None

    def to_request(self) -> GenerateRequest:
        return GenerateRequest(
            light=self.light,
            dark=self.dark,
            values=self.values,
            typography=self.typography,
            primitives=self.primitives,
            platforms=tuple(self.platforms),
            categories=tuple(self.categories),
            best_practices=self.best_practices,
            references=dict(self.references),
            kotlin_package=self.kotlin_package,
        )


class GeneratedFileModel(BaseModel):
    filename: str
    content: str
    format: str
    platform: str
    reference_content: Optional[str] = None


class WarningModel(BaseModel):
    kind: str
    message: str
    details: Optional[List[str]] = None


class StatsModel(BaseModel):
    primitive_colors: int = 0
    semantic_colors: int = 0
    spacing_steps: int = 0
    typography_styles: int = 0
    shadow_tokens: int = 0
    border_tokens: int = 0
    opacity_tokens: int = 0
    radius_tokens: int = 0
    gradient_tokens: int = 0
    motion_tokens: int = 0


class GenerateResponse(BaseModel):
    files: List[GeneratedFileModel]
    warnings: List[WarningModel]
    stats: StatsModel
    conventions: Dict[str, Any]


class AnalyzeResponse(GenerateResponse):
    report: Dict[str, Any]
    changelog: str


class HealthResponse(BaseModel):
    status: str
    version: str


def _default_orchestrator() -> Orchestrator:
    return Orchestrator()


def _generate_response(result: GenerationResult) -> Dict[str, Any]:
    stats = result.stats
    return {
        "files": [GeneratedFileModel(**file.to_dict()) for file in result.files],
        "warnings": [WarningModel(**warning.to_dict()) for warning in result.warnings],
        "stats": StatsModel(**vars(stats)),
        "conventions": result.conventions.to_dict() if result.conventions is not None else {},
    }


async def _in_executor(func: Callable[[], Any]) -> Any:
    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:  # pragma: no cover - fallback path when not in async context
        return func()
    return await loop.run_in_executor(None, func)


def create_app(
    orchestrator_factory: Callable[[], Orchestrator] = _default_orchestrator,
) -> FastAPI:
    """Create the FastAPI application exposing tokensmith operations."""

    app = FastAPI(title="Tokensmith Service", version=__version__)

    async def get_orchestrator() -> Orchestrator:
        # Lazy-instantiate per request to keep state predictable.
        return orchestrator_factory()

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok", version=__version__)

    @app.post("/generate", response_model=GenerateResponse)
    async def generate(
        payload: GenerateBody,
        orchestrator: Orchestrator = Depends(get_orchestrator),
    ) -> GenerateResponse:
        request = payload.to_request()
        result = await _in_executor(lambda: orchestrator.generate(request))
        return GenerateResponse(**_generate_response(result))

    @app.post("/analyze", response_model=AnalyzeResponse)
    async def analyze(
        payload: GenerateBody,
        orchestrator: Orchestrator = Depends(get_orchestrator),
    ) -> AnalyzeResponse:
        request = payload.to_request()

        def _run() -> AnalyzeResponse:
            result = orchestrator.generate(request)
            report = orchestrator.analyze(result, request.light, request.dark)
            return AnalyzeResponse(
                **_generate_response(result),
                report=report.to_dict(),
                changelog=render_changelog(report, request.platforms),
            )

        return await _in_executor(_run)

    @app.exception_handler(TokenInputError)
    async def token_input_handler(_: Any, exc: TokenInputError) -> JSONResponse:
        return JSONResponse(status_code=422, content={"detail": str(exc)})

    @app.exception_handler(ConfigError)
    async def config_error_handler(_: Any, exc: ConfigError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.exception_handler(RuntimeError)
    async def runtime_error_handler(
        _: Any, exc: RuntimeError
    ) -> JSONResponse:  # pragma: no cover - simple mapping
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    return app


def run_service(
    host: str = "127.0.0.1", port: int = 8000
) -> None:  # pragma: no cover - integration path
    app = create_app()
    uvicorn.run(app, host=host, port=port)


__all__ = ["create_app", "run_service"]
