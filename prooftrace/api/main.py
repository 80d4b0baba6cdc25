from __future__ import annotations

"""
Trace API surface.

Design intent:
- Keep routing thin; every decision lives in the service facade.
- Return the uniform {ok, ...} body for every trace route.
- Run blocking facade calls in the thread pool so injected latency never
  stalls the event loop.
"""

import logging
from typing import Optional

from fastapi import FastAPI, Query, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse, Response
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from prooftrace.internal_core.config import TraceConfig, load_config
from prooftrace.internal_core.trace_store import InMemoryTraceStore
from prooftrace.schema.seed import make_seed_trace
from prooftrace.service.facade import ServiceResult, TraceService
from prooftrace.service.instability import NetworkSimulator

logger = logging.getLogger(__name__)

_STATUS_BY_KIND = {
    "SchemaViolation": 400,
    "NotFound": 404,
    "TransportFailure": 500,
}


class MemoExportRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    draft: str = Field(default="", max_length=200_000)


def _respond(result: ServiceResult) -> JSONResponse:
    status_code = 200 if result.ok else _STATUS_BY_KIND.get(result.kind or "", 500)
    return JSONResponse(result.to_body(), status_code=status_code)


def _get_service(request: Request) -> TraceService:
    return request.app.state.trace_service


def create_app(
    config: Optional[TraceConfig] = None,
    store: Optional[InMemoryTraceStore] = None,
    service: Optional[TraceService] = None,
) -> FastAPI:
    config = config or load_config()
    logging.getLogger("prooftrace").setLevel(config.TRACE_LOG_LEVEL)

    if service is None:
        store = store if store is not None else InMemoryTraceStore()
        disturbance = NetworkSimulator.from_config(config) if config.TRACE_SIMULATE_NETWORK else None
        service = TraceService(store, disturbance=disturbance)

    if config.TRACE_SEED_ON_STARTUP:
        seeded = service.create(make_seed_trace().to_wire())
        if not seeded.ok:
            logger.warning("seed_on_startup_failed error=%s", seeded.error)

    app = FastAPI(title="proof trace service")
    app.state.config = config
    app.state.trace_service = service

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(config.TRACE_CORS_ORIGINS),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/healthz")
    async def healthz() -> dict[str, str]:
        return {"status": "ok"}

    @app.post("/api/traces")
    async def create_trace(request: Request) -> JSONResponse:
        body = await request.body()
        result = await run_in_threadpool(_get_service(request).create, body)
        return _respond(result)

    @app.get("/api/traces")
    async def list_traces(
        request: Request,
        doc_id: Optional[str] = Query(default=None, alias="docId"),
        client_id: Optional[str] = Query(default=None, alias="clientId"),
    ) -> JSONResponse:
        result = await run_in_threadpool(_get_service(request).list, doc_id, client_id)
        return _respond(result)

    @app.delete("/api/traces")
    async def delete_traces(
        request: Request,
        doc_id: Optional[str] = Query(default=None, alias="docId"),
    ) -> JSONResponse:
        result = await run_in_threadpool(_get_service(request).delete, doc_id)
        return _respond(result)

    @app.get("/api/traces/{trace_id}")
    async def get_trace(request: Request, trace_id: str) -> JSONResponse:
        result = await run_in_threadpool(_get_service(request).get, trace_id)
        return _respond(result)

    @app.post("/api/traces/{trace_id}/memo")
    async def export_memo(request: Request, trace_id: str) -> Response:
        raw = await request.body()
        try:
            payload = MemoExportRequest.model_validate_json(raw or b"{}")
        except ValidationError as exc:
            errors = exc.errors()
            message = errors[0].get("msg", "Invalid request") if errors else "Invalid request"
            return JSONResponse({"ok": False, "error": f"Invalid request: {message}"}, status_code=400)

        result = await run_in_threadpool(_get_service(request).export_memo, trace_id, payload.draft)
        if not result.ok:
            return _respond(result)
        filename = result.payload["filename"]
        return HTMLResponse(
            result.payload["html"],
            headers={"Content-Disposition": f'attachment; filename="{filename}"'},
        )

    @app.get("/api/audit")
    async def list_audit_events(
        request: Request,
        doc_id: Optional[str] = Query(default=None, alias="docId"),
    ) -> JSONResponse:
        result = await run_in_threadpool(_get_service(request).audit, doc_id)
        return _respond(result)

    return app


app = create_app()
