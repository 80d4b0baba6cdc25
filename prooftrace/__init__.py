"""
Proof trace backend package.

Design intent:
- Model the advisory trace that justifies an AI-generated draft.
- Keep schema, versioned storage and memo export independent of transport.
- Surface every failure as a predictable, human-readable result.
"""
