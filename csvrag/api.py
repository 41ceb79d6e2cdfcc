from __future__ import annotations

"""
FastAPI application serving the retriever to the site's chat widget.

- Loads both CSV sources at startup; a failed load leaves the app up in
  a degraded state that answers with the canned help reply
- ``use_rag=false`` on a query skips retrieval and returns that same reply
- ``/query`` is retrieval-only and never errors on odd query text
- ``/reload`` rebuilds the index from the sources and swaps it in
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from .answer import DEFAULT_REPLY, Answer
from .config import EngineConfig, HealthResponse, QueryRequest
from .engine import RetrievalEngine
from .errors import LoadError


def _engine(request: Request) -> RetrievalEngine:
    return request.app.state.engine


def _health(engine: RetrievalEngine) -> HealthResponse:
    return HealthResponse(
        status="ok" if engine.ready else "degraded",
        documents=engine.document_count,
    )


def create_app(config: Optional[EngineConfig] = None) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        engine = RetrievalEngine(config or EngineConfig.from_env())
        app.state.engine = engine
        logger.info("Starting app warmup...")
        try:
            await engine.init()
        except LoadError as e:
            logger.warning("Knowledge base not loaded, serving default replies: {}", e)
        logger.info("Warmup complete.")
        yield

    app = FastAPI(title="csvrag", lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health", response_model=HealthResponse)
    def health(request: Request) -> HealthResponse:
        return _health(_engine(request))

    @app.post("/query", response_model=Answer)
    def answer_query(req: QueryRequest, request: Request) -> Answer:
        text = req.query.strip()
        if not text:
            raise HTTPException(status_code=422, detail="Query must be non-empty")
        engine = _engine(request)
        if not req.use_rag or not engine.ready:
            return Answer(answer=DEFAULT_REPLY, sources=[])
        return engine.query(text, k=req.k)

    @app.post("/reload", response_model=HealthResponse)
    async def reload(request: Request) -> HealthResponse:
        engine = _engine(request)
        try:
            await engine.init()
        except LoadError as e:
            raise HTTPException(status_code=503, detail=str(e)) from e
        return _health(engine)

    return app


app = create_app()
