"""
Trace schema boundary.

Design intent:
- Validate untyped input into immutable Trace versions.
- Report violations as bounded, path-addressed issues.
- Never let seed or derived versions bypass validation.
"""

from .seed import SEED_DOC_ID, SEED_DRAFT_TEXT, make_seed_trace
from .validation import derive_trace_version, validate_trace

__all__ = [
    "SEED_DOC_ID",
    "SEED_DRAFT_TEXT",
    "derive_trace_version",
    "make_seed_trace",
    "validate_trace",
]
