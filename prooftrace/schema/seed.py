from __future__ import annotations

"""
Seeded demo trace.

Design intent:
- Mimic function-calling output in the downstream storage shape.
- Stay fully deterministic so exports and tests are reproducible.
"""

from typing import Any, Dict, Mapping, Optional

from prooftrace.internal_core.contracts import Trace

from .validation import to_wire_keys, validate_trace

SEED_DOC_ID = "email_2026_02_24_001"

SEED_DRAFT_TEXT = """Subject: Quick check-in on VAT + cash runway

Hi ACME team,

Based on recent activity, it looks like VAT payable may increase this quarter due to higher sales volume. I’d also like to flag that cash runway could tighten in the next 6–8 weeks if the current burn continues.

Two quick actions I recommend:
1) Review payment terms and follow-ups for slow-paying customers (especially invoices >45 days).
2) Confirm whether any refunds/credit notes are expected that are not yet reflected.

If you’d like, I can prepare a short advisory memo with the key numbers and references.

Best,
(Accountant)"""


def _seed_payload() -> Dict[str, Any]:
    return {
        "id": "trc_001",
        "orgId": "org_dytto_demo",
        "clientId": "client_acme_042",
        "docId": SEED_DOC_ID,
        "createdAt": "2 mins ago",
        "claims": [
            "VAT payable likely increased due to higher Q1 sales volume.",
            "Client cash runway may tighten in 6–8 weeks if current burn persists.",
            "Recommend adjusting payment terms for two slow-paying customers.",
        ],
        "assumptions": [
            "Assuming no major refunds/credit notes not yet recorded.",
            "Assuming payroll remains within ±5% of last month.",
            "Assuming outstanding invoices older than 45 days are at higher default risk.",
        ],
        "evidence": [
            {
                "id": "ev_1",
                "title": "Q1 sales ledger summary",
                "source": "Ledger",
                "reference": "exact://ledger/summary?q=2026-Q1",
                "timestamp": "Today, 10:12",
            },
            {
                "id": "ev_2",
                "title": "Client email: delayed payment (Customer B)",
                "source": "Email",
                "reference": "gmail://thread/18c9…",
                "timestamp": "Yesterday, 17:40",
            },
            {
                "id": "ev_3",
                "title": "Invoice aging report (last 30 days)",
                "source": "Client File",
                "reference": "files://acme/invoices/aging-30d.pdf",
                "timestamp": "Today, 09:03",
            },
        ],
        "calculations": [
            {
                "id": "cal_1",
                "label": "VAT delta (rough)",
                "formula": "(Sales_Q1 - Sales_Q4) × VAT_rate",
                "result": "≈ €4,200",
            },
            {
                "id": "cal_2",
                "label": "Runway estimate",
                "formula": "Cash_balance ÷ Avg_monthly_burn",
                "result": "≈ 1.7 months",
            },
        ],
        "citations": [
            "Belgium VAT guidance: periodic return requirements (high-level)",
            "Firm policy: advisory memos must include source references",
        ],
        "confidence": "medium",
        "riskFlags": ["needs_human_review", "missing_source"],
    }


def make_seed_trace(overrides: Optional[Mapping[str, Any]] = None) -> Trace:
    merged = {**_seed_payload(), **to_wire_keys(overrides or {})}
    # Re-validate so an override can never produce an invalid seed.
    return validate_trace(merged)
