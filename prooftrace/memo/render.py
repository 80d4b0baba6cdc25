from __future__ import annotations

import html
import re
from typing import Iterable

from prooftrace.internal_core.contracts import CalculationItem, EvidenceItem, Trace

_FILENAME_UNSAFE_RE = re.compile(r"[^A-Za-z0-9._-]")

_MEMO_STYLE = """
  body{font-family:ui-sans-serif,system-ui,-apple-system,Segoe UI,Roboto; background:#faf7f2; color:#111; margin:0; padding:24px;}
  .wrap{max-width:920px; margin:0 auto;}
  .h{background:#fff; border:1px solid rgba(0,0,0,.1); border-radius:18px; padding:18px;}
  .k{font-size:12px; opacity:.65; letter-spacing:.08em;}
  h1{margin:8px 0 0; font-size:22px;}
  .meta{margin-top:6px; font-size:12px; opacity:.65;}
  .grid{display:grid; grid-template-columns:1fr; gap:14px; margin-top:14px;}
  .card{background:#fffdf9; border:1px solid rgba(0,0,0,.1); border-radius:14px; padding:12px;}
  .sec{background:#fff; border:1px solid rgba(0,0,0,.1); border-radius:18px; padding:14px;}
  .t{font-weight:600; font-size:14px;}
  .m{font-size:12px; opacity:.7; margin-top:4px;}
  .r{margin-top:8px; font-size:14px;}
  .pill{font-size:11px; background:rgba(0,0,0,.05); padding:4px 8px; border-radius:999px;}
  .row{display:flex; justify-content:space-between; gap:12px; align-items:flex-start;}
  .ref{margin-top:8px; font-size:12px; opacity:.7; word-break:break-all;}
  pre{white-space:pre-wrap; background:#fff; border:1px solid rgba(0,0,0,.1); border-radius:18px; padding:14px; margin:0;}
  ul{margin:8px 0 0; padding-left:18px;}
"""


def _esc(value: str) -> str:
    return html.escape(str(value), quote=True)


def _bullets(items: Iterable[str]) -> str:
    return "".join(f"<li>{_esc(item)}</li>" for item in items)


def _evidence_card(item: EvidenceItem) -> str:
    return (
        '\n      <div class="card">'
        '\n        <div class="row">'
        "\n          <div>"
        f'\n            <div class="t">{_esc(item.title)}</div>'
        f'\n            <div class="m">{_esc(item.source)} • {_esc(item.timestamp)}</div>'
        "\n          </div>"
        '\n          <div class="pill">source</div>'
        "\n        </div>"
        f'\n        <div class="ref">{_esc(item.reference)}</div>'
        "\n      </div>"
    )


def _calculation_card(item: CalculationItem) -> str:
    return (
        '\n      <div class="card">'
        f'\n        <div class="t">{_esc(item.label)}</div>'
        f'\n        <div class="m">{_esc(item.formula)}</div>'
        f'\n        <div class="r">{_esc(item.result)}</div>'
        "\n      </div>"
    )


def _section(title: str, body: str) -> str:
    return (
        '\n      <div class="sec">'
        f'\n        <div class="t">{_esc(title)}</div>'
        f"\n        {body}"
        "\n      </div>\n"
    )


def render_memo_html(trace: Trace, draft_text: str) -> str:
    """Render ``trace`` and its draft as a standalone HTML advisory memo.

    Sections appear in a fixed order: header, draft, claims, evidence,
    calculations, assumptions, citations. Items keep the order received.
    """
    risk_flags = ", ".join(trace.risk_flags) if trace.risk_flags else "none"
    meta = " • ".join(
        [
            f"Org: {_esc(trace.org_id)}",
            f"Client: {_esc(trace.client_id)}",
            f"Trace: {_esc(trace.id)}",
            f"Doc: {_esc(trace.doc_id)}",
            _esc(trace.created_at),
        ]
    )
    evidence = "".join(_evidence_card(item) for item in trace.evidence)
    calculations = "".join(_calculation_card(item) for item in trace.calculations)

    sections = "".join(
        [
            _section(
                "Draft advisory",
                f'<div class="m">Generated message</div>\n        <pre>{_esc(draft_text)}</pre>',
            ),
            _section("Claims", f"<ul>{_bullets(trace.claims)}</ul>"),
            _section("Evidence", f'<div class="grid">{evidence}</div>'),
            _section("Calculations", f'<div class="grid">{calculations}</div>'),
            _section("Assumptions", f"<ul>{_bullets(trace.assumptions)}</ul>"),
            _section("Citations", f"<ul>{_bullets(trace.citations)}</ul>"),
        ]
    )

    return f"""<!doctype html>
<html>
<head>
<meta charset="utf-8" />
<meta name="viewport" content="width=device-width,initial-scale=1" />
<title>Advisory Memo • {_esc(trace.client_id)} • {_esc(trace.id)}</title>
<style>{_MEMO_STYLE}</style>
</head>
<body>
  <div class="wrap">
    <div class="h">
      <div class="k">ADVISORY MEMO (PROOF MODE EXPORT)</div>
      <h1>Proof Mode Trace</h1>
      <div class="meta">{meta}</div>
      <div class="meta">Confidence: {_esc(trace.confidence)} • Risk flags: {_esc(risk_flags)}</div>
    </div>

    <div class="grid">{sections}    </div>
  </div>
</body>
</html>
"""


def memo_filename(trace: Trace) -> str:
    client = _FILENAME_UNSAFE_RE.sub("_", trace.client_id)
    trace_id = _FILENAME_UNSAFE_RE.sub("_", trace.id)
    return f"advisory-memo_{client}_{trace_id}.html"
