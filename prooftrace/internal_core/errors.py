from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, List, Sequence

MAX_REPORTED_ISSUES = 5


@dataclass(frozen=True)
class FieldIssue:
    field_path: str
    message: str


class TraceServiceError(Exception):
    """Base class for failures reported to trace service callers."""

    kind: ClassVar[str] = "TransportFailure"


class TraceValidationError(TraceServiceError, ValueError):
    """Raised when input does not conform to the Trace schema."""

    kind: ClassVar[str] = "SchemaViolation"

    def __init__(self, issues: Sequence[FieldIssue], prefix: str = "Invalid Trace object"):
        self.issues: List[FieldIssue] = list(issues)[:MAX_REPORTED_ISSUES]
        summary = "; ".join(f"{item.field_path}: {item.message}" for item in self.issues)
        super().__init__(f"{prefix}: {summary}" if summary else prefix)


class TraceNotFoundError(TraceServiceError, KeyError):
    """Raised when no stored trace matches the requested id."""

    kind: ClassVar[str] = "NotFound"

    def __init__(self, trace_id: str):
        self.trace_id = trace_id
        super().__init__(f"Trace not found: {trace_id}")

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message.
        return str(self.args[0])


class TransportFailureError(TraceServiceError):
    """Opaque failure raised outside the core, e.g. simulated instability."""

    kind: ClassVar[str] = "TransportFailure"
