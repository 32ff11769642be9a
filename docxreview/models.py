# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2025-2026 Chukwuemeka Obi

"""In-memory types for an import session and the decisions made on it."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, NamedTuple

import arrow


class MatchConfidence(str, Enum):
    EXACT = "exact"
    PARTIAL = "partial"


class ImportSource(str, Enum):
    TABLE = "table"
    TEXT = "text"


class ClassOfDegree(str, Enum):
    FIRST_CLASS = "First Class"
    SECOND_CLASS_UPPER = "Second Class Upper"
    SECOND_CLASS_LOWER = "Second Class Lower"
    THIRD_CLASS = "Third Class"
    PASS = "Pass"


def is_valid_class_of_degree(value: str | None) -> bool:
    """Is this one of the degree classes the student records accept."""
    return value in {c.value for c in ClassOfDegree}


class RecordState(Enum):
    INFORMATIONAL = "informational"
    PENDING = "pending"
    APPROVED = "approved"


class Outcome(Enum):
    FULL_SUCCESS = "full_success"
    PARTIAL_SUCCESS = "partial_success"
    TOTAL_FAILURE = "total_failure"


class TimeRemaining(NamedTuple):
    hours: int
    minutes: int
    expired: bool


@dataclass(frozen=True)
class ImportSummary:
    total_extracted: int
    total_matched: int
    ready_for_review: int


@dataclass
class ReviewRecord:
    """One candidate update of a student's class of degree.

    Records with ``needs_update`` false are informational only: their
    ``approved`` flag is always false.
    """

    student_id: int
    matric_no: str
    student_name: str
    current_class_of_degree: str | None
    proposed_class_of_degree: str
    match_confidence: MatchConfidence
    needs_update: bool
    approved: bool = False
    source: str = ImportSource.TABLE.value
    row_number: int | None = None

    def __post_init__(self) -> None:
        if not self.needs_update:
            self.approved = False

    @property
    def state(self) -> RecordState:
        if not self.needs_update:
            return RecordState.INFORMATIONAL
        if self.approved:
            return RecordState.APPROVED
        return RecordState.PENDING

    def decision(self) -> ApprovalDecision:
        return ApprovalDecision(
            student_id=self.student_id,
            matric_no=self.matric_no,
            proposed_class_of_degree=self.proposed_class_of_degree,
            approved=self.approved,
        )

    def copy(self) -> ReviewRecord:
        return replace(self)


@dataclass(frozen=True)
class ApprovalDecision:
    student_id: int
    matric_no: str
    proposed_class_of_degree: str
    approved: bool

    def to_wire(self) -> dict[str, Any]:
        return {
            "student_id": self.student_id,
            "matric_no": self.matric_no,
            "proposed_class_of_degree": self.proposed_class_of_degree,
            "approved": self.approved,
        }


@dataclass
class ImportSession:
    """A server-side review session as seen by the client.

    Right after upload only the id, filename and summary are known;
    ``expires_at`` and ``records`` are filled in by fetching the session.
    """

    session_id: str
    original_filename: str
    summary: ImportSummary
    expires_at: arrow.Arrow | None = None
    records: list[ReviewRecord] = field(default_factory=list)

    def is_expired(self, now: arrow.Arrow | None = None) -> bool:
        if self.expires_at is None:
            return False
        if now is None:
            now = arrow.utcnow()
        return self.expires_at <= now

    def time_remaining(self, now: arrow.Arrow | None = None) -> TimeRemaining:
        """How long until the server forgets this session.

        Returns:
            hours and minutes left, with ``expired`` true (and both zero)
            once the expiry instant has passed.
        """
        if self.expires_at is None:
            return TimeRemaining(0, 0, False)
        if now is None:
            now = arrow.utcnow()
        seconds = int((self.expires_at - now).total_seconds())
        if seconds <= 0:
            return TimeRemaining(0, 0, True)
        return TimeRemaining(seconds // 3600, (seconds % 3600) // 60, False)


@dataclass(frozen=True)
class UpdateResult:
    success: bool
    updated_count: int
    error_count: int
    errors: tuple[str, ...] = ()


@dataclass(frozen=True)
class ImportStats:
    total_students: int
    students_with_class_degree: int
    students_without_class_degree: int
    class_degree_distribution: dict[str, int] = field(default_factory=dict)
