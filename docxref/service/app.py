"""FastAPI application entrypoint for docxref service mode."""

from __future__ import annotations

import asyncio
from typing import Any, Callable, Dict, List, Optional

from fastapi import Depends, FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ..index import DuplicateAnchorError
from ..orchestrator import AnalysisResult, Orchestrator, RunOverrides


class AnalyzeRequest(BaseModel):
    path: str
    min_lines: Optional[int] = None
    min_references: Optional[int] = None
    graph_format: Optional[str] = None
    edge_weights: Optional[bool] = None


class AnalyzeResponse(BaseModel):
    documents: int
    anchors: int
    references: int
    reports: Dict[str, List[Dict[str, Any]]]
    graph: str


class HealthResponse(BaseModel):
    status: str


def _default_orchestrator() -> Orchestrator:
    return Orchestrator()


def create_app(
    orchestrator_factory: Callable[[], Orchestrator] = _default_orchestrator,
) -> FastAPI:
    """Create the FastAPI application exposing corpus analysis."""

    app = FastAPI(title="docxref service", version="1.0.0")

    async def get_orchestrator() -> Orchestrator:
        return orchestrator_factory()

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.post("/analyze", response_model=AnalyzeResponse)
    async def analyze(
        payload: AnalyzeRequest,
        orchestrator: Orchestrator = Depends(get_orchestrator),
    ) -> AnalyzeResponse:
        overrides = RunOverrides(
            min_lines=payload.min_lines,
            min_references=payload.min_references,
            graph_format=payload.graph_format,
            edge_weights=payload.edge_weights,
        )

        def _run() -> AnalysisResult:
            config = orchestrator.load_config(payload.path, overrides=overrides)
            return orchestrator.run(payload.path, config=config)

        # Analysis is CPU and disk bound; keep it off the event loop.
        loop = asyncio.get_running_loop()
        result = await loop.run_in_executor(None, _run)

        return AnalyzeResponse(
            documents=len(result.manifest.documents),
            anchors=len(result.index.anchors),
            references=len(result.index.references),
            reports=orchestrator.renderer.as_dict(result.reports),
            graph=orchestrator.render_graph(result),
        )

    @app.exception_handler(FileNotFoundError)
    async def file_not_found_handler(_: Any, exc: FileNotFoundError) -> JSONResponse:
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(NotADirectoryError)
    async def not_a_directory_handler(_: Any, exc: NotADirectoryError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.exception_handler(DuplicateAnchorError)
    async def duplicate_anchor_handler(_: Any, exc: DuplicateAnchorError) -> JSONResponse:
        return JSONResponse(
            status_code=409,
            content={
                "detail": str(exc),
                "anchor_id": exc.anchor_id,
                "locations": [exc.first, exc.second],
            },
        )

    @app.exception_handler(RuntimeError)
    async def runtime_error_handler(_: Any, exc: RuntimeError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.exception_handler(ValueError)
    async def value_error_handler(_: Any, exc: ValueError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    return app


def run_service(host: str = "127.0.0.1", port: int = 8000) -> None:  # pragma: no cover - integration path
    import uvicorn

    uvicorn.run(create_app(), host=host, port=port)
