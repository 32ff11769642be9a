# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2026 Chukwuemeka Obi

from unittest.mock import MagicMock

from pytest import raises

from docxreview.committer import ApprovalCommitter, classify
from docxreview.conftest import make_session_payload
from docxreview.exceptions import (
    ApprovalFailed,
    LedgerNotLoaded,
    NoApprovals,
    SessionConsumed,
)
from docxreview.ledger import ReviewLedger
from docxreview.models import Outcome, UpdateResult
from docxreview.schemas import SessionResponse, parse_payload, session_from_wire


def _ledger(**kw) -> ReviewLedger:
    payload = make_session_payload(**kw)
    return ReviewLedger(session_from_wire(parse_payload(SessionResponse, payload)))


def test_classify() -> None:
    assert classify(UpdateResult(True, 7, 3, ("a",) * 3)) == Outcome.PARTIAL_SUCCESS
    assert classify(UpdateResult(True, 5, 0)) == Outcome.FULL_SUCCESS
    assert classify(UpdateResult(False, 0, 4)) == Outcome.TOTAL_FAILURE
    assert classify(UpdateResult(True, 0, 0)) == Outcome.TOTAL_FAILURE


def test_no_approvals_sends_nothing() -> None:
    msgr = MagicMock()
    ledger = _ledger(n_actionable=5, n_info=2)
    with raises(NoApprovals):
        ApprovalCommitter(msgr, ledger).submit()
    msgr.submit_approvals.assert_not_called()


def test_empty_session_sends_nothing() -> None:
    msgr = MagicMock()
    ledger = _ledger(n_actionable=0, n_info=0)
    with raises(NoApprovals):
        ApprovalCommitter(msgr, ledger).submit()
    msgr.submit_approvals.assert_not_called()


def test_unloaded_ledger() -> None:
    msgr = MagicMock()
    with raises(LedgerNotLoaded):
        ApprovalCommitter(msgr, ReviewLedger()).submit()
    msgr.submit_approvals.assert_not_called()


def test_full_success_then_resubmit_refused() -> None:
    msgr = MagicMock()
    msgr.submit_approvals.return_value = UpdateResult(True, 5, 0)
    ledger = _ledger(n_actionable=35, n_info=10)
    for n in range(5):
        ledger.set_approval(f"VUG/CSC/21/{n:04d}", True)
    committer = ApprovalCommitter(msgr, ledger)

    report = committer.submit()
    assert report.outcome == Outcome.FULL_SUCCESS
    assert report.session_consumed
    assert ledger.consumed
    assert report.summary() == "Successfully updated 5 student records."

    session_id, decisions = msgr.submit_approvals.call_args.args
    assert session_id == "abc123"
    # all records are sent, not just the approved ones
    assert len(decisions) == 45
    assert sum(d.approved for d in decisions) == 5

    with raises(SessionConsumed):
        committer.submit()
    assert msgr.submit_approvals.call_count == 1


def test_all_records_sent_whatever_the_view() -> None:
    msgr = MagicMock()
    msgr.submit_approvals.return_value = UpdateResult(True, 1, 0)
    ledger = _ledger(n_actionable=3, n_info=2)
    ledger.bulk_set_approval(True, "0001")
    ledger.filter("0001", "approved")
    ApprovalCommitter(msgr, ledger).submit()
    _, decisions = msgr.submit_approvals.call_args.args
    assert len(decisions) == 5


def test_partial_success_consumes_and_reports_errors() -> None:
    msgr = MagicMock()
    msgr.submit_approvals.return_value = UpdateResult(
        True, 7, 3, ("row 4: locked", "row 9: locked", "row 12: no such student")
    )
    ledger = _ledger(n_actionable=10, n_info=0)
    ledger.bulk_set_approval(True)
    report = ApprovalCommitter(msgr, ledger).submit()
    assert report.outcome == Outcome.PARTIAL_SUCCESS
    assert report.session_consumed
    assert len(report.errors) == 3
    assert "3 records failed to update" in report.summary()
    assert "7 student records" in report.summary()


def test_total_failure_leaves_ledger_usable() -> None:
    msgr = MagicMock()
    msgr.submit_approvals.return_value = UpdateResult(False, 0, 2, ("x", "y"))
    ledger = _ledger(n_actionable=2, n_info=0)
    ledger.bulk_set_approval(True)
    committer = ApprovalCommitter(msgr, ledger)
    report = committer.submit()
    assert report.outcome == Outcome.TOTAL_FAILURE
    assert not report.session_consumed
    assert not ledger.consumed
    msgr.submit_approvals.return_value = UpdateResult(True, 2, 0)
    assert committer.submit().outcome == Outcome.FULL_SUCCESS


def test_approval_failed_leaves_ledger_usable() -> None:
    msgr = MagicMock()
    msgr.submit_approvals.side_effect = ApprovalFailed("Database unavailable")
    ledger = _ledger(n_actionable=2, n_info=0)
    ledger.set_approval("VUG/CSC/21/0000", True)
    with raises(ApprovalFailed, match="Database"):
        ApprovalCommitter(msgr, ledger).submit()
    assert not ledger.consumed
    assert ledger.approved_count() == 1
