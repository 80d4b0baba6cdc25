from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional

from prooftrace.internal_core.audit import log_event
from prooftrace.internal_core.errors import (
    FieldIssue,
    TraceServiceError,
    TraceValidationError,
)
from prooftrace.internal_core.trace_store import InMemoryTraceStore
from prooftrace.memo.render import memo_filename, render_memo_html

logger = logging.getLogger(__name__)

Disturbance = Callable[[str], None]

_REQUEST_PREFIX = "Invalid request"


@dataclass(frozen=True)
class ServiceResult:
    ok: bool
    payload: Dict[str, Any] = field(default_factory=dict)
    error: str = ""
    kind: Optional[str] = None

    @classmethod
    def success(cls, **payload: Any) -> "ServiceResult":
        return cls(ok=True, payload=payload)

    @classmethod
    def failure(cls, exc: BaseException) -> "ServiceResult":
        kind = exc.kind if isinstance(exc, TraceServiceError) else "TransportFailure"
        message = str(exc).strip() or "Server error"
        return cls(ok=False, error=message, kind=kind)

    def to_body(self) -> Dict[str, Any]:
        if self.ok:
            return {"ok": True, **self.payload}
        return {"ok": False, "error": self.error}


def _parse_body(body: Any) -> Any:
    if isinstance(body, (bytes, bytearray)):
        try:
            body = bytes(body).decode("utf-8")
        except UnicodeDecodeError as exc:
            raise TraceValidationError(
                [FieldIssue(field_path="root", message="Request body is not UTF-8")],
                prefix=_REQUEST_PREFIX,
            ) from exc
    if isinstance(body, str):
        try:
            return json.loads(body)
        except ValueError as exc:
            raise TraceValidationError(
                [FieldIssue(field_path="root", message="Malformed JSON body")],
                prefix=_REQUEST_PREFIX,
            ) from exc
    return body


def _blank_to_none(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = str(value)
    return value if value else None


class TraceService:
    """Uniform ok/error facade over an injected trace store.

    ``disturbance`` is called with the operation name before each
    operation; whatever it raises is reported like any other failure.
    """

    def __init__(self, store: InMemoryTraceStore, disturbance: Optional[Disturbance] = None):
        self._store = store
        self._disturbance = disturbance

    @property
    def store(self) -> InMemoryTraceStore:
        return self._store

    def _disturb(self, operation: str) -> None:
        if self._disturbance is not None:
            self._disturbance(operation)

    def _fail(self, operation: str, exc: BaseException, doc_id: Optional[str] = None) -> ServiceResult:
        result = ServiceResult.failure(exc)
        if isinstance(exc, TraceServiceError):
            logger.info("trace_%s_failed kind=%s error=%s", operation, result.kind, result.error)
        else:
            logger.exception("trace_%s_unexpected_error", operation)
        if doc_id:
            log_event(
                self._store,
                "ERROR",
                code=f"{operation.upper()}_{result.kind}",
                detail=result.error,
                doc_id=doc_id,
            )
        return result

    def create(self, body: Any) -> ServiceResult:
        doc_id: Optional[str] = None
        try:
            self._disturb("create")
            raw = _parse_body(body)
            if isinstance(raw, dict) and isinstance(raw.get("docId"), str):
                doc_id = raw["docId"]
            trace, overwrite = self._store.upsert(raw)
        except Exception as exc:
            return self._fail("create", exc, doc_id)

        log_event(
            self._store,
            "TRACE_OVERWRITTEN" if overwrite else "TRACE_CREATED",
            code="OVERWRITE" if overwrite else "CREATE",
            detail=f"client_id={trace.client_id} confidence={trace.confidence}",
            doc_id=trace.doc_id,
            trace_id=trace.id,
        )
        logger.info("trace_created id=%s doc_id=%s overwrite=%s", trace.id, trace.doc_id, overwrite)
        return ServiceResult.success(trace=trace.to_wire())

    def list(self, doc_id: Optional[str] = None, client_id: Optional[str] = None) -> ServiceResult:
        try:
            self._disturb("list")
            traces = self._store.list_traces(
                doc_id=_blank_to_none(doc_id),
                client_id=_blank_to_none(client_id),
            )
        except Exception as exc:
            return self._fail("list", exc)
        return ServiceResult.success(traces=[t.to_wire() for t in traces])

    def get(self, trace_id: str) -> ServiceResult:
        try:
            self._disturb("get")
            trace = self._store.get(trace_id)
        except Exception as exc:
            return self._fail("get", exc)
        return ServiceResult.success(trace=trace.to_wire())

    def delete(self, doc_id: Optional[str]) -> ServiceResult:
        try:
            self._disturb("delete")
            if not doc_id:
                raise TraceValidationError(
                    [FieldIssue(field_path="docId", message="Missing docId")],
                    prefix=_REQUEST_PREFIX,
                )
            deleted = self._store.delete_by_doc(doc_id)
        except Exception as exc:
            return self._fail("delete", exc, doc_id)

        log_event(
            self._store,
            "TRACES_DELETED",
            code="DELETE_BY_DOC",
            detail=f"deleted={deleted}",
            doc_id=doc_id,
        )
        logger.info("traces_deleted doc_id=%s deleted=%s", doc_id, deleted)
        return ServiceResult.success(deleted=deleted)

    def export_memo(self, trace_id: str, draft_text: str) -> ServiceResult:
        try:
            self._disturb("export")
            trace = self._store.get(trace_id)
            document = render_memo_html(trace, draft_text)
        except Exception as exc:
            return self._fail("export", exc)
        return ServiceResult.success(html=document, filename=memo_filename(trace))

    def audit(self, doc_id: Optional[str] = None) -> ServiceResult:
        try:
            self._disturb("audit")
            events = self._store.list_audit_events(doc_id=_blank_to_none(doc_id))
        except Exception as exc:
            return self._fail("audit", exc)
        return ServiceResult.success(events=[e.model_dump() for e in events])
