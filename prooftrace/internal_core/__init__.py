from .config import TraceConfig, load_config
from .errors import (
    FieldIssue,
    TraceNotFoundError,
    TraceServiceError,
    TraceValidationError,
    TransportFailureError,
)
from .trace_store import InMemoryTraceStore

__all__ = [
    "TraceConfig",
    "load_config",
    "FieldIssue",
    "TraceNotFoundError",
    "TraceServiceError",
    "TraceValidationError",
    "TransportFailureError",
    "InMemoryTraceStore",
]
