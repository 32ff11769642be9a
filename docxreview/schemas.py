# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2025-2026 Chukwuemeka Obi

"""Wire-format schemas for the document import service, and the mapping to our models.

Everything the server sends is checked against these models before
anything else looks at it.  The mapping functions are exhaustive: each
field of a wire model lands on exactly one attribute of the in-memory
model, and decisions go back out with every field they carry.
"""

from __future__ import annotations

from typing import Any, Literal, TypeVar

import arrow
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .exceptions import TransportError
from .models import (
    ApprovalDecision,
    ImportSession,
    ImportStats,
    ImportSummary,
    MatchConfidence,
    ReviewRecord,
    UpdateResult,
)


class _WireModel(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)


class SummaryBody(_WireModel):
    total_extracted: int = Field(..., ge=0)
    total_matched: int = Field(..., ge=0)
    ready_for_review: int = Field(..., ge=0)


class ErrorBody(_WireModel):
    success: Literal[False] = False
    message: str = ""
    error_code: str | None = None


class UploadResponse(_WireModel):
    success: bool
    message: str = ""
    session_id: str = Field(..., min_length=1)
    summary: SummaryBody


class ReviewRow(_WireModel):
    student_id: int
    matric_no: str = Field(..., min_length=1)
    student_name: str
    current_class_of_degree: str | None = None
    proposed_class_of_degree: str
    match_confidence: Literal["exact", "partial"]
    needs_update: bool
    approved: bool = False
    source: str
    row_number: int | None = None


class SessionResponse(_WireModel):
    success: bool
    session_id: str = Field(..., min_length=1)
    original_filename: str
    summary: SummaryBody
    review_data: list[ReviewRow]
    expires_at: str

    @field_validator("expires_at")
    @classmethod
    def _parseable_timestamp(cls, v: str) -> str:
        try:
            arrow.get(v)
        except (ValueError, TypeError) as e:
            raise ValueError(f"not a timestamp: {v!r}") from e
        return v


class UpdateResultBody(_WireModel):
    updated_count: int = Field(..., ge=0)
    error_count: int = Field(..., ge=0)
    errors: list[str] = Field(default_factory=list)
    success: bool | None = None


class ApprovalResponse(_WireModel):
    success: bool
    message: str = ""
    result: UpdateResultBody


class StatsBody(_WireModel):
    total_students: int = Field(..., ge=0)
    students_with_class_degree: int = Field(..., ge=0)
    students_without_class_degree: int = Field(..., ge=0)
    class_degree_distribution: dict[str, int] = Field(default_factory=dict)


class StatsResponse(_WireModel):
    success: bool
    stats: StatsBody


Schema = TypeVar("Schema", bound=BaseModel)


def parse_payload(schema: type[Schema], payload: Any) -> Schema:
    """Validate a decoded JSON body against a schema.

    Returns:
        The validated model.

    Raises:
        TransportError: the body does not have the expected shape; the
            message lists the offending fields.
    """
    try:
        return schema.model_validate(payload)
    except ValidationError as e:
        problems = "; ".join(
            "{}: {}".format(".".join(str(p) for p in err["loc"]) or "body", err["msg"])
            for err in e.errors()
        )
        raise TransportError(
            f"Unexpected reply from server ({schema.__name__}): {problems}"
        ) from None


def error_message(payload: Any, default: str) -> str:
    """Pull the human-readable message out of an error body, if it has one."""
    if isinstance(payload, dict):
        try:
            body = ErrorBody.model_validate(payload)
        except ValidationError:
            return payload.get("message") or default
        return body.message or default
    return default


def summary_from_wire(s: SummaryBody) -> ImportSummary:
    return ImportSummary(
        total_extracted=s.total_extracted,
        total_matched=s.total_matched,
        ready_for_review=s.ready_for_review,
    )


def record_from_wire(row: ReviewRow) -> ReviewRecord:
    return ReviewRecord(
        student_id=row.student_id,
        matric_no=row.matric_no,
        student_name=row.student_name,
        current_class_of_degree=row.current_class_of_degree,
        proposed_class_of_degree=row.proposed_class_of_degree,
        match_confidence=MatchConfidence(row.match_confidence),
        needs_update=row.needs_update,
        approved=row.approved,
        source=row.source,
        row_number=row.row_number,
    )


def session_from_upload(body: UploadResponse, filename: str) -> ImportSession:
    return ImportSession(
        session_id=body.session_id,
        original_filename=filename,
        summary=summary_from_wire(body.summary),
    )


def session_from_wire(body: SessionResponse) -> ImportSession:
    return ImportSession(
        session_id=body.session_id,
        original_filename=body.original_filename,
        summary=summary_from_wire(body.summary),
        expires_at=arrow.get(body.expires_at),
        records=[record_from_wire(r) for r in body.review_data],
    )


def update_result_from_wire(body: ApprovalResponse) -> UpdateResult:
    r = body.result
    return UpdateResult(
        success=body.success if r.success is None else r.success,
        updated_count=r.updated_count,
        error_count=r.error_count,
        errors=tuple(r.errors),
    )


def stats_from_wire(body: StatsResponse) -> ImportStats:
    s = body.stats
    return ImportStats(
        total_students=s.total_students,
        students_with_class_degree=s.students_with_class_degree,
        students_without_class_degree=s.students_without_class_degree,
        class_degree_distribution=dict(s.class_degree_distribution),
    )


def decisions_to_wire(
    session_id: str, decisions: list[ApprovalDecision]
) -> dict[str, Any]:
    return {
        "session_id": session_id,
        "approvals": [d.to_wire() for d in decisions],
    }
