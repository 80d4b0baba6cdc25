"""
HTTP transport boundary for the proof trace service.

Design intent:
- Expose thin endpoints over the trace service facade.
- Map facade failure kinds onto status codes and nothing else.
- Keep every dependency on app.state so tests can swap it per case.
"""
