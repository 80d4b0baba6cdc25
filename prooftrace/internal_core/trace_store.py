from __future__ import annotations

from collections import deque
from threading import RLock
from typing import Any, Deque, List, MutableMapping, Optional, Tuple

from prooftrace.schema.validation import validate_trace

from .contracts import AuditEvent, Trace
from .errors import TraceNotFoundError


class InMemoryTraceStore:
    """Versioned traces keyed by id, grouped by docId.

    ``storage`` must preserve insertion order; it is the only ordering
    signal, since ``createdAt`` is a free-form display label. Every public
    method holds one lock over the whole store. The audit log keeps the
    most recent ``max_audit_events`` entries and outlives deleted traces.
    """

    def __init__(
        self,
        storage: Optional[MutableMapping[str, Trace]] = None,
        max_audit_events: int = 1000,
    ):
        if max_audit_events < 1:
            raise ValueError(f"max_audit_events must be >= 1, got {max_audit_events}")
        self._lock = RLock()
        self._traces: MutableMapping[str, Trace] = {} if storage is None else storage
        self._audit_events: Deque[AuditEvent] = deque(maxlen=max_audit_events)

    def create(self, trace: Any) -> Trace:
        """Validate and store ``trace``, returning the stored version.

        An id collision replaces the prior entry in place, keeping its
        original position in the version order.
        """
        stored, _ = self.upsert(trace)
        return stored

    def upsert(self, trace: Any) -> Tuple[Trace, bool]:
        """Like ``create``, also reporting whether an existing id was replaced."""
        validated = validate_trace(trace)
        with self._lock:
            replaced = validated.id in self._traces
            self._traces[validated.id] = validated
        return validated, replaced

    def get(self, trace_id: str) -> Trace:
        with self._lock:
            trace = self._traces.get(trace_id)
        if trace is None:
            raise TraceNotFoundError(trace_id)
        return trace

    def list_traces(
        self,
        doc_id: Optional[str] = None,
        client_id: Optional[str] = None,
    ) -> List[Trace]:
        with self._lock:
            traces = list(self._traces.values())
        if doc_id is not None:
            traces = [t for t in traces if t.doc_id == doc_id]
        if client_id is not None:
            traces = [t for t in traces if t.client_id == client_id]
        traces.reverse()
        return traces

    def list_by_doc(self, doc_id: str) -> List[Trace]:
        return self.list_traces(doc_id=doc_id)

    def delete_by_doc(self, doc_id: str) -> int:
        with self._lock:
            doomed = [trace_id for trace_id, t in self._traces.items() if t.doc_id == doc_id]
            for trace_id in doomed:
                del self._traces[trace_id]
        return len(doomed)

    def count(self) -> int:
        with self._lock:
            return len(self._traces)

    def append_audit_event(self, event: AuditEvent) -> None:
        with self._lock:
            self._audit_events.append(event)

    def list_audit_events(self, doc_id: Optional[str] = None) -> List[AuditEvent]:
        with self._lock:
            events = list(self._audit_events)
        if doc_id is None:
            return events
        return [e for e in events if e.doc_id == doc_id]
