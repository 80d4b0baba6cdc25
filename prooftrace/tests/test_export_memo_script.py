import json

import pytest

from prooftrace.schema import make_seed_trace
from prooftrace.scripts.export_memo import export_memo


def test_export_memo_defaults_to_seed(tmp_path) -> None:
    out_path = export_memo(None, None, tmp_path / "out")
    assert out_path.name == "advisory-memo_client_acme_042_trc_001.html"
    text = out_path.read_text(encoding="utf-8")
    assert "Proof Mode Trace" in text
    assert "Quick check-in on VAT" in text


def test_export_memo_from_files(tmp_path) -> None:
    trace_path = tmp_path / "trace.json"
    trace_path.write_text(json.dumps(make_seed_trace({"id": "trc_file"}).to_wire()), encoding="utf-8")
    draft_path = tmp_path / "draft.txt"
    draft_path.write_text("Custom draft & notes", encoding="utf-8")

    out_path = export_memo(trace_path, draft_path, tmp_path)
    assert out_path.name == "advisory-memo_client_acme_042_trc_file.html"
    assert "Custom draft &amp; notes" in out_path.read_text(encoding="utf-8")


def test_export_memo_rejects_invalid_trace(tmp_path) -> None:
    payload = make_seed_trace().to_wire()
    payload["claims"] = []
    trace_path = tmp_path / "trace.json"
    trace_path.write_text(json.dumps(payload), encoding="utf-8")
    with pytest.raises(SystemExit) as exc_info:
        export_memo(trace_path, None, tmp_path)
    assert "claims" in str(exc_info.value)


def test_export_memo_rejects_malformed_json(tmp_path) -> None:
    trace_path = tmp_path / "trace.json"
    trace_path.write_text("{oops", encoding="utf-8")
    with pytest.raises(SystemExit):
        export_memo(trace_path, None, tmp_path)
