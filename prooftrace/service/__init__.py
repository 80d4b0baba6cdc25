"""
Trace service boundary.

Design intent:
- Wrap the store behind one uniform ok/error result contract.
- Treat injected instability as an ordinary, opaque failure.
- Keep transport concerns (status codes, framing) out of the core.
"""

from .facade import ServiceResult, TraceService
from .instability import NetworkSimulator

__all__ = ["NetworkSimulator", "ServiceResult", "TraceService"]
