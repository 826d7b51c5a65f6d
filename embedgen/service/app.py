"""FastAPI application entrypoint for embedgen service mode."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any, Callable, List, Optional

import uvicorn
from fastapi import Depends, FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ..config import load_config
from ..errors import EmbedGenError, InputNotFoundError
from ..generator import GenerationResult, GenerationSettings, Generator


class GenerateRequest(BaseModel):
    inputs: List[str]
    output_dir: Optional[str] = None
    base_name: Optional[str] = None
    namespace: Optional[str] = None
    style: Optional[str] = None
    on_duplicate: Optional[str] = None
    dry_run: bool = False


class GenerateResponse(BaseModel):
    header_path: str
    source_path: str
    file_count: int
    dry_run: bool
    header: Optional[str] = None
    source: Optional[str] = None


class HealthResponse(BaseModel):
    status: str


def _default_generator() -> Generator:
    return Generator()


def create_app(
    generator_factory: Callable[[], Generator] = _default_generator,
) -> FastAPI:
    """Create the FastAPI application exposing embedgen generation."""

    app = FastAPI(title="embedgen Service", version="1.0.0")

    async def get_generator() -> Generator:
        # Fresh generator per request keeps runs independent.
        return generator_factory()

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.post("/generate", response_model=GenerateResponse)
    async def generate(
        payload: GenerateRequest,
        generator: Generator = Depends(get_generator),
    ) -> GenerateResponse:
        def _run() -> GenerationResult:
            output_dir = Path(payload.output_dir) if payload.output_dir else None
            config = load_config(Path.cwd())
            settings = GenerationSettings.from_config(
                config,
                output_dir=output_dir,
                base_name=payload.base_name,
                namespace=payload.namespace,
                style=payload.style,
                on_duplicate=payload.on_duplicate,
            )
            return generator.run(payload.inputs, settings, dry_run=payload.dry_run)

        loop = asyncio.get_running_loop()
        result = await loop.run_in_executor(None, _run)
        return GenerateResponse(
            header_path=str(result.header_path),
            source_path=str(result.source_path),
            file_count=result.file_count,
            dry_run=result.dry_run,
            header=result.header_text,
            source=result.source_text,
        )

    @app.exception_handler(InputNotFoundError)
    async def input_not_found_handler(_: Any, exc: InputNotFoundError) -> JSONResponse:
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(EmbedGenError)
    async def embedgen_error_handler(_: Any, exc: EmbedGenError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.exception_handler(ValueError)
    async def value_error_handler(_: Any, exc: ValueError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    return app


def run_service(
    host: str = "127.0.0.1", port: int = 8000
) -> None:  # pragma: no cover - integration path
    app = create_app()
    uvicorn.run(app, host=host, port=port)
