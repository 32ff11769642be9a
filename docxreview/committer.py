# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2025-2026 Chukwuemeka Obi

"""Commit the reviewer's decisions to the server and say how it went."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass

from .exceptions import LedgerNotLoaded, NoApprovals, SessionConsumed
from .ledger import ReviewLedger
from .models import ApprovalDecision, Outcome, UpdateResult


log = logging.getLogger("committer")


def classify(result: UpdateResult) -> Outcome:
    """Sort a server result into full success, partial success or total failure."""
    if result.updated_count == 0:
        return Outcome.TOTAL_FAILURE
    if result.error_count > 0:
        return Outcome.PARTIAL_SUCCESS
    return Outcome.FULL_SUCCESS


def check_some_approved(decisions: list[ApprovalDecision]) -> None:
    """Raise NoApprovals if not a single decision is an approval."""
    if not any(d.approved for d in decisions):
        raise NoApprovals()


def _plural(n: int, word: str) -> str:
    return f"{n} {word}{'' if n == 1 else 's'}"


@dataclass(frozen=True)
class CommitReport:
    outcome: Outcome
    result: UpdateResult
    session_consumed: bool

    @property
    def errors(self) -> tuple[str, ...]:
        return self.result.errors

    def summary(self) -> str:
        """One or two sentences for the reviewer."""
        parts = []
        if self.result.updated_count > 0:
            parts.append(
                "Successfully updated "
                + _plural(self.result.updated_count, "student record")
            )
        if self.result.error_count > 0:
            parts.append(
                _plural(self.result.error_count, "record") + " failed to update"
            )
        if not parts:
            parts.append("No student records were updated")
        return ". ".join(parts) + "."


class ApprovalCommitter:
    """Turn a ledger into one batch of decisions and submit it.

    Every record in the session is sent, not just those in view, so that
    a filter left on at submit time never hides a decision.  After a
    full or partial success the ledger is consumed: submitting again
    needs a freshly fetched session.
    """

    def __init__(self, messenger, ledger: ReviewLedger) -> None:
        self.msgr = messenger
        self.ledger = ledger
        self._mutex = threading.Lock()

    def submit(self) -> CommitReport:
        """Submit all decisions in the ledger.

        Raises:
            LedgerNotLoaded: no session in the ledger.
            SessionConsumed: these decisions were already committed.
            NoApprovals: nothing approved; nothing was sent.
            ApprovalFailed: the server could not apply them.  The ledger
                is untouched, so submitting again is fine.
        """
        with self._mutex:
            if not self.ledger.is_loaded:
                raise LedgerNotLoaded()
            if self.ledger.consumed:
                raise SessionConsumed()
            session_id = self.ledger.session_id
            decisions = self.ledger.decisions()
            check_some_approved(decisions)

            log.info(
                "submitting %d decisions (%d approved) for session %s",
                len(decisions),
                sum(1 for d in decisions if d.approved),
                session_id,
            )
            result = self.msgr.submit_approvals(session_id, decisions)
            outcome = classify(result)
            consumed = outcome != Outcome.TOTAL_FAILURE
            if consumed:
                self.ledger.mark_consumed()
            log.info("session %s: outcome %s", session_id, outcome.value)
            return CommitReport(outcome=outcome, result=result, session_consumed=consumed)
