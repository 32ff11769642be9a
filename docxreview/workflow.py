# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2026 Adaeze Nwankwo

"""One reviewer's pass through an import: upload, review, commit."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import BinaryIO

from .auth import Authorizer
from .committer import ApprovalCommitter, CommitReport
from .exceptions import SessionGone
from .ledger import FilterType, LedgerStatistics, ReviewLedger
from .models import ImportSession, ImportStats, ReviewRecord
from .upload import UploadGate


log = logging.getLogger("workflow")


class ImportReview:
    """Ties the upload, the ledger and the committer together for one reviewer.

    Every operation asks the authorizer first.  If the server reports the
    session missing or expired, the ledger is dropped and
    ``must_restart`` is set: the only way on is a new upload.
    """

    def __init__(self, messenger, authorizer: Authorizer) -> None:
        self.msgr = messenger
        self.authorizer = authorizer
        self.gate = UploadGate(messenger)
        self.ledger = ReviewLedger()
        self.committer = ApprovalCommitter(messenger, self.ledger)
        self.must_restart = False

    def upload(
        self,
        source: str | Path | BinaryIO,
        *,
        filename: str | None = None,
        size: int | None = None,
    ) -> ImportSession:
        self.authorizer.check("upload")
        return self.gate.upload(source, filename=filename, size=size)

    def open(self, session_id: str) -> ImportSession:
        """Fetch a session and load it into a fresh ledger.

        Raises:
            NotFound, Expired: the session is gone; ``must_restart`` is set.
            TransportError: try again, nothing was discarded.
        """
        self.authorizer.check("review")
        try:
            session = self.msgr.fetch_session(session_id)
        except SessionGone as e:
            log.info("session %s is gone: %s", session_id, e)
            self.ledger.discard()
            self.must_restart = True
            raise
        self.ledger.load(session)
        self.must_restart = False
        return session

    @property
    def session(self) -> ImportSession | None:
        return self.ledger.session

    def approve(self, matric_no: str) -> int:
        self.authorizer.check("decide")
        return self.ledger.set_approval(matric_no, True)

    def reject(self, matric_no: str) -> int:
        self.authorizer.check("decide")
        return self.ledger.set_approval(matric_no, False)

    def approve_all(
        self, search_term: str = "", filter_type: FilterType | str = FilterType.ALL
    ) -> int:
        self.authorizer.check("decide")
        return self.ledger.bulk_set_approval(True, search_term, filter_type)

    def reject_all(
        self, search_term: str = "", filter_type: FilterType | str = FilterType.ALL
    ) -> int:
        self.authorizer.check("decide")
        return self.ledger.bulk_set_approval(False, search_term, filter_type)

    def view(
        self, search_term: str = "", filter_type: FilterType | str = FilterType.ALL
    ) -> list[ReviewRecord]:
        self.authorizer.check("review")
        return self.ledger.filter(search_term, filter_type)

    def statistics(self) -> LedgerStatistics:
        return self.ledger.statistics()

    def commit(self) -> CommitReport:
        self.authorizer.check("commit")
        report = self.committer.submit()
        if report.session_consumed:
            log.info("session %s consumed: %s", self.ledger.session_id, report.summary())
        return report

    def stats(self) -> ImportStats:
        self.authorizer.check("stats")
        return self.msgr.get_import_stats()

    def export(self, dest: Path) -> Path:
        self.authorizer.check("export")
        return self.msgr.download_student_data(dest)
