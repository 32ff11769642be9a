# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2025-2026 Adaeze Nwankwo
# Copyright (C) 2026 Chukwuemeka Obi

"""The local working copy of approve/reject decisions for one import session.

Nothing in here talks to the network.  A ledger is loaded from a fetched
session, edited by the reviewer, and turned into decisions for the
committer.  Once those decisions have been committed the ledger is
consumed and refuses further edits.
"""

from __future__ import annotations

import logging
import threading
from enum import Enum
from typing import NamedTuple

from .exceptions import LedgerNotLoaded, SessionConsumed
from .models import (
    ApprovalDecision,
    ImportSession,
    ReviewRecord,
    is_valid_class_of_degree,
)


log = logging.getLogger("ledger")


class FilterType(str, Enum):
    ALL = "all"
    NEEDS_UPDATE = "needs_update"
    APPROVED = "approved"
    # actionable but not (yet) approved
    REJECTED = "rejected"


class LedgerStatistics(NamedTuple):
    total: int
    needs_update: int
    approved: int
    no_update_needed: int


def _as_filter_type(filter_type: FilterType | str) -> FilterType:
    try:
        return FilterType(filter_type)
    except ValueError:
        raise ValueError(
            f'Unknown filter "{filter_type}": expected one of '
            + ", ".join(f.value for f in FilterType)
        ) from None


def _matches(record: ReviewRecord, term: str, filter_type: FilterType) -> bool:
    if term and not (
        term in record.matric_no.casefold() or term in record.student_name.casefold()
    ):
        return False
    if filter_type == FilterType.NEEDS_UPDATE:
        return record.needs_update
    if filter_type == FilterType.APPROVED:
        return record.approved
    if filter_type == FilterType.REJECTED:
        return record.needs_update and not record.approved
    return True


class ReviewLedger:
    """Approve/reject decisions for the records of one session.

    Every read and every change holds the same lock, so a bulk change is
    seen either not at all or completely.
    """

    def __init__(self, session: ImportSession | None = None) -> None:
        self._lock = threading.RLock()
        self._records: list[ReviewRecord] = []
        self.session: ImportSession | None = None
        self.consumed = False
        if session is not None:
            self.load(session)

    def load(self, session: ImportSession) -> None:
        """Take a private copy of a fetched session's records, replacing anything held."""
        with self._lock:
            self.session = session
            self._records = [r.copy() for r in session.records]
            self.consumed = False
            dupes = len(self._records) - len({r.matric_no for r in self._records})
            if dupes:
                log.warning(
                    "session %s has %d duplicated matric numbers",
                    session.session_id,
                    dupes,
                )
            odd = sorted(
                {
                    r.proposed_class_of_degree
                    for r in self._records
                    if r.needs_update
                    and not is_valid_class_of_degree(r.proposed_class_of_degree)
                }
            )
            if odd:
                log.warning(
                    "session %s proposes unknown degree classes: %s",
                    session.session_id,
                    ", ".join(odd),
                )
            log.debug(
                "loaded %d records from session %s",
                len(self._records),
                session.session_id,
            )

    def discard(self) -> None:
        """Forget the session and all decisions."""
        with self._lock:
            self.session = None
            self._records = []
            self.consumed = False

    @property
    def is_loaded(self) -> bool:
        return self.session is not None

    @property
    def session_id(self) -> str | None:
        return self.session.session_id if self.session else None

    def _check_mutable(self) -> None:
        if self.session is None:
            raise LedgerNotLoaded()
        if self.consumed:
            raise SessionConsumed()

    def mark_consumed(self) -> None:
        with self._lock:
            self.consumed = True

    def records(self) -> list[ReviewRecord]:
        """Copies of all records, in session order."""
        with self._lock:
            return [r.copy() for r in self._records]

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def set_approval(self, matric_no: str, approved: bool) -> int:
        """Approve or reject the record(s) with this matric number.

        Informational records (no update needed) are left alone.  If the
        matric number is somehow duplicated, every copy is changed.

        Returns:
            How many records were actually changed.

        Raises:
            LedgerNotLoaded: no session yet.
            SessionConsumed: these decisions were already committed.
            KeyError: no record has this matric number.
        """
        with self._lock:
            self._check_mutable()
            found = [r for r in self._records if r.matric_no == matric_no]
            if not found:
                raise KeyError(f'No record with matric number "{matric_no}"')
            changed = 0
            for r in found:
                if not r.needs_update:
                    continue
                if r.approved != approved:
                    r.approved = approved
                    changed += 1
            return changed

    def bulk_set_approval(
        self,
        approved: bool,
        search_term: str = "",
        filter_type: FilterType | str = FilterType.ALL,
    ) -> int:
        """Approve or reject every actionable record in the current view.

        Only records that match ``search_term`` and ``filter_type`` are
        touched, as the reviewer sees them, not the whole session.

        Returns:
            How many records were changed.
        """
        ft = _as_filter_type(filter_type)
        term = search_term.strip().casefold()
        with self._lock:
            self._check_mutable()
            scope = [r for r in self._records if _matches(r, term, ft)]
            changed = 0
            for r in scope:
                if r.needs_update and r.approved != approved:
                    r.approved = approved
                    changed += 1
            log.debug(
                "bulk %s: %d of %d in view changed",
                "approve" if approved else "reject",
                changed,
                len(scope),
            )
            return changed

    def filter(
        self,
        search_term: str = "",
        filter_type: FilterType | str = FilterType.ALL,
    ) -> list[ReviewRecord]:
        """The records in view for a search and filter, as copies.

        The search is a case-insensitive substring match on either the
        matric number or the student's name.
        """
        ft = _as_filter_type(filter_type)
        term = search_term.strip().casefold()
        with self._lock:
            return [r.copy() for r in self._records if _matches(r, term, ft)]

    def statistics(self) -> LedgerStatistics:
        """Counts over the whole session, whatever is currently in view."""
        with self._lock:
            needs = sum(1 for r in self._records if r.needs_update)
            return LedgerStatistics(
                total=len(self._records),
                needs_update=needs,
                approved=sum(1 for r in self._records if r.approved),
                no_update_needed=len(self._records) - needs,
            )

    def approved_count(self) -> int:
        with self._lock:
            return sum(1 for r in self._records if r.approved)

    def decisions(self) -> list[ApprovalDecision]:
        """A snapshot of the decision on every record, in session order."""
        with self._lock:
            return [r.decision() for r in self._records]
