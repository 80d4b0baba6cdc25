from __future__ import annotations

from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Set, Union

from pydantic import ValidationError

from prooftrace.internal_core.contracts import Trace
from prooftrace.internal_core.errors import MAX_REPORTED_ISSUES, FieldIssue, TraceValidationError
from prooftrace.utils.ids import new_id, now_label

_WIRE_NAMES: Dict[str, str] = {
    name: (field.alias or name) for name, field in Trace.model_fields.items()
}


def _field_path(loc: Sequence[Union[str, int]]) -> str:
    return ".".join(str(part) for part in loc) or "root"


def to_wire_keys(overrides: Mapping[str, Any]) -> Dict[str, Any]:
    """Accept attribute names (``org_id``) as well as wire names (``orgId``)."""
    return {_WIRE_NAMES.get(str(key), str(key)): value for key, value in overrides.items()}


def _duplicate_id_issues(trace: Trace) -> List[FieldIssue]:
    issues: List[FieldIssue] = []
    for group, items in (("evidence", trace.evidence), ("calculations", trace.calculations)):
        seen: Set[str] = set()
        for index, item in enumerate(items):
            if item.id in seen:
                issues.append(
                    FieldIssue(
                        field_path=f"{group}.{index}.id",
                        message=f"Duplicate id '{item.id}' within {group}",
                    )
                )
            seen.add(item.id)
    return issues


def validate_trace(payload: Any) -> Trace:
    """Validate arbitrary input into a Trace.

    Raises TraceValidationError with at most five field issues. Paths are
    dot-joined wire names and list indexes (``evidence.0.source``); a
    violation at the top level is reported as ``root``. Evidence and
    calculation ids must be unique within their own sequence.
    """
    if isinstance(payload, Trace):
        payload = payload.to_wire()
    try:
        trace = Trace.model_validate(payload)
    except ValidationError as exc:
        issues = [
            FieldIssue(
                field_path=_field_path(error.get("loc", ())),
                message=str(error.get("msg") or "Invalid value"),
            )
            for error in exc.errors()[:MAX_REPORTED_ISSUES]
        ]
        raise TraceValidationError(issues) from exc

    duplicates = _duplicate_id_issues(trace)
    if duplicates:
        raise TraceValidationError(duplicates)
    return trace


def derive_trace_version(
    base: Trace,
    overrides: Optional[Mapping[str, Any]] = None,
    *,
    id_factory: Callable[[str], str] = new_id,
    label_factory: Callable[[], str] = now_label,
) -> Trace:
    """Copy ``base`` with overrides into a new version of the same document."""
    updates = to_wire_keys(overrides or {})
    if "docId" in updates and updates["docId"] != base.doc_id:
        raise TraceValidationError(
            [FieldIssue(field_path="docId", message="Derived versions must keep the base docId")]
        )
    updates.setdefault("id", id_factory("trc"))
    updates.setdefault("createdAt", label_factory())
    return validate_trace({**base.to_wire(), **updates})
