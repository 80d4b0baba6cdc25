from __future__ import annotations

import datetime as _dt
from typing import Optional

from .contracts import AuditEvent, AuditEventType
from .trace_store import InMemoryTraceStore


def _ts_iso() -> str:
    return _dt.datetime.now(_dt.timezone.utc).isoformat()


def _sanitize_detail(detail: str) -> str:
    # Never include draft text or claim bodies in detail.
    detail = (detail or "").replace("\n", " ").strip()
    if len(detail) > 200:
        detail = detail[:200] + "…"
    return detail


def log_event(
    store: InMemoryTraceStore,
    event_type: AuditEventType,
    code: str,
    detail: str,
    doc_id: Optional[str] = None,
    trace_id: Optional[str] = None,
) -> AuditEvent:
    event = AuditEvent(
        ts_iso=_ts_iso(),
        type=event_type,
        code=code,
        detail=_sanitize_detail(detail),
        doc_id=doc_id,
        trace_id=trace_id,
    )
    store.append_audit_event(event)
    return event
