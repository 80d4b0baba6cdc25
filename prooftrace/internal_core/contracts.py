from __future__ import annotations

from typing import Annotated, Any, Dict, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, StringConstraints

NonEmptyStr = Annotated[str, StringConstraints(strict=True, min_length=1)]

Confidence = Literal["high", "medium", "low"]

RiskFlag = Literal[
    "hallucination_risk",
    "missing_source",
    "needs_human_review",
]

EvidenceSource = Literal["Email", "Ledger", "Client File", "Calendar"]


class EvidenceItem(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    id: NonEmptyStr
    title: NonEmptyStr
    source: EvidenceSource
    # Opaque locator (URL, mailbox thread, file path).
    reference: NonEmptyStr
    # Display label only, never parsed.
    timestamp: NonEmptyStr


class CalculationItem(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    id: NonEmptyStr
    label: NonEmptyStr
    formula: NonEmptyStr
    result: NonEmptyStr


class Trace(BaseModel):
    """One immutable version of the justification record for a draft."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    id: NonEmptyStr
    org_id: NonEmptyStr = Field(alias="orgId")
    client_id: NonEmptyStr = Field(alias="clientId")
    doc_id: NonEmptyStr = Field(alias="docId")
    created_at: NonEmptyStr = Field(alias="createdAt")

    claims: Tuple[NonEmptyStr, ...] = Field(min_length=1)
    assumptions: Tuple[NonEmptyStr, ...] = Field(min_length=1)
    evidence: Tuple[EvidenceItem, ...] = Field(min_length=1)
    calculations: Tuple[CalculationItem, ...] = Field(min_length=1)
    citations: Tuple[NonEmptyStr, ...] = Field(min_length=1)

    confidence: Confidence
    risk_flags: Tuple[RiskFlag, ...] = Field(default=(), alias="riskFlags")

    def to_wire(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


AuditEventType = Literal[
    "TRACE_CREATED",
    "TRACE_OVERWRITTEN",
    "TRACES_DELETED",
    "ERROR",
]


class AuditEvent(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    ts_iso: str
    type: AuditEventType
    code: str
    detail: str
    doc_id: Optional[str] = None
    trace_id: Optional[str] = None
