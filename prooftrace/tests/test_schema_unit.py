import re
from datetime import datetime

import pytest
from pydantic import ValidationError

from prooftrace.internal_core.errors import TraceValidationError
from prooftrace.schema import (
    SEED_DOC_ID,
    SEED_DRAFT_TEXT,
    derive_trace_version,
    make_seed_trace,
    validate_trace,
)
from prooftrace.utils.ids import new_id, now_label


def _payload() -> dict:
    return make_seed_trace().to_wire()


def _issue_paths(exc_info) -> list[str]:
    return [issue.field_path for issue in exc_info.value.issues]


def test_validate_trace_returns_structurally_equal_value() -> None:
    payload = _payload()
    trace = validate_trace(payload)
    assert trace.to_wire() == payload
    assert trace.doc_id == SEED_DOC_ID
    assert trace.risk_flags == ("needs_human_review", "missing_source")


def test_validate_trace_defaults_missing_risk_flags_to_empty() -> None:
    payload = _payload()
    del payload["riskFlags"]
    trace = validate_trace(payload)
    assert trace.risk_flags == ()
    assert trace.to_wire()["riskFlags"] == []


def test_validate_trace_accepts_empty_risk_flags() -> None:
    payload = _payload()
    payload["riskFlags"] = []
    assert validate_trace(payload).to_wire() == payload


def test_validate_trace_accepts_duplicate_risk_flags() -> None:
    payload = _payload()
    payload["riskFlags"] = ["missing_source", "missing_source"]
    assert validate_trace(payload).risk_flags == ("missing_source", "missing_source")


def test_validate_trace_missing_field_cites_path() -> None:
    payload = _payload()
    del payload["claims"]
    with pytest.raises(TraceValidationError) as exc_info:
        validate_trace(payload)
    assert _issue_paths(exc_info) == ["claims"]
    assert exc_info.value.kind == "SchemaViolation"
    assert str(exc_info.value).startswith("Invalid Trace object: claims:")


@pytest.mark.parametrize(
    ("field", "value"),
    [
        ("orgId", ""),
        ("orgId", 42),
        ("createdAt", None),
        ("claims", []),
        ("citations", "not a list"),
        ("confidence", "certain"),
        ("evidence", []),
        ("calculations", []),
    ],
)
def test_validate_trace_rejects_bad_top_level_values(field: str, value: object) -> None:
    payload = _payload()
    payload[field] = value
    with pytest.raises(TraceValidationError) as exc_info:
        validate_trace(payload)
    assert _issue_paths(exc_info)[0].split(".")[0] == field


def test_validate_trace_reports_nested_paths() -> None:
    payload = _payload()
    payload["evidence"][1]["source"] = "Fax"
    payload["calculations"][0]["formula"] = ""
    payload["assumptions"][2] = ""
    payload["riskFlags"] = ["bogus"]
    with pytest.raises(TraceValidationError) as exc_info:
        validate_trace(payload)
    assert set(_issue_paths(exc_info)) == {
        "evidence.1.source",
        "calculations.0.formula",
        "assumptions.2",
        "riskFlags.0",
    }


@pytest.mark.parametrize("value", ["a string", None, [1, 2, 3], 7])
def test_validate_trace_non_mapping_is_root_violation(value: object) -> None:
    with pytest.raises(TraceValidationError) as exc_info:
        validate_trace(value)
    assert _issue_paths(exc_info) == ["root"]


def test_validate_trace_caps_reported_issues_at_five() -> None:
    with pytest.raises(TraceValidationError) as exc_info:
        validate_trace({})
    assert len(exc_info.value.issues) == 5
    assert all(issue.message for issue in exc_info.value.issues)


def test_validate_trace_rejects_unknown_fields() -> None:
    payload = _payload()
    payload["draft"] = "should not be here"
    with pytest.raises(TraceValidationError) as exc_info:
        validate_trace(payload)
    assert _issue_paths(exc_info) == ["draft"]


def test_trace_is_immutable() -> None:
    trace = make_seed_trace()
    with pytest.raises(ValidationError):
        trace.confidence = "high"
    assert isinstance(trace.claims, tuple)
    assert isinstance(trace.evidence, tuple)


def test_make_seed_trace_is_deterministic_and_valid() -> None:
    first = make_seed_trace()
    second = make_seed_trace()
    assert first == second
    assert first.id == "trc_001"
    assert len(first.claims) == 3
    assert len(first.evidence) == 3
    assert len(first.calculations) == 2
    assert first.confidence == "medium"


def test_make_seed_trace_applies_overrides_by_wire_or_attribute_name() -> None:
    trace = make_seed_trace({"confidence": "high", "client_id": "client_other", "riskFlags": []})
    assert trace.confidence == "high"
    assert trace.client_id == "client_other"
    assert trace.risk_flags == ()
    assert trace.org_id == "org_dytto_demo"


def test_make_seed_trace_rejects_invalid_overrides() -> None:
    with pytest.raises(TraceValidationError) as exc_info:
        make_seed_trace({"claims": []})
    assert _issue_paths(exc_info) == ["claims"]


def test_derive_trace_version_keeps_doc_and_replaces_identity() -> None:
    seed = make_seed_trace()
    derived = derive_trace_version(
        seed,
        {"confidence": "high"},
        id_factory=lambda prefix: f"{prefix}_002",
        label_factory=lambda: "Today, 10:00",
    )
    assert derived.id == "trc_002"
    assert derived.created_at == "Today, 10:00"
    assert derived.doc_id == seed.doc_id
    assert derived.confidence == "high"
    assert derived.claims == seed.claims
    assert seed.confidence == "medium"


def test_derive_trace_version_generates_fresh_id_by_default() -> None:
    seed = make_seed_trace()
    derived = derive_trace_version(seed)
    assert derived.id != seed.id
    assert re.fullmatch(r"trc_[a-z0-9]{12}", derived.id)


def test_derive_trace_version_rejects_doc_change() -> None:
    with pytest.raises(TraceValidationError) as exc_info:
        derive_trace_version(make_seed_trace(), {"docId": "email_other"})
    assert _issue_paths(exc_info) == ["docId"]


def test_ids_helpers() -> None:
    assert re.fullmatch(r"ev_[a-z0-9]{12}", new_id("ev"))
    assert now_label(datetime(2026, 2, 24, 9, 5)) == "Today, 09:05"


def test_validate_trace_rejects_attribute_names_as_wire_keys() -> None:
    payload = _payload()
    payload["org_id"] = payload.pop("orgId")
    with pytest.raises(TraceValidationError) as exc_info:
        validate_trace(payload)
    paths = _issue_paths(exc_info)
    assert "orgId" in paths
    assert "org_id" in paths


def test_validate_trace_rejects_duplicate_evidence_and_calculation_ids() -> None:
    payload = _payload()
    payload["evidence"][1]["id"] = "ev_1"
    payload["calculations"][1]["id"] = "cal_1"
    with pytest.raises(TraceValidationError) as exc_info:
        validate_trace(payload)
    assert _issue_paths(exc_info) == ["evidence.1.id", "calculations.1.id"]
    assert "Duplicate id 'ev_1' within evidence" in str(exc_info.value)


def test_validate_trace_allows_same_id_across_evidence_and_calculations() -> None:
    payload = _payload()
    payload["calculations"][0]["id"] = "ev_1"
    assert validate_trace(payload).calculations[0].id == "ev_1"


def test_seed_draft_text_keeps_typographic_apostrophes() -> None:
    assert "I’d also like to flag" in SEED_DRAFT_TEXT
    assert "If you’d like" in SEED_DRAFT_TEXT
    assert "'" not in SEED_DRAFT_TEXT
