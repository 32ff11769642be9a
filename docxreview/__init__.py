# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2025-2026 Chukwuemeka Obi
# Copyright (C) 2025-2026 Adaeze Nwankwo

"""Docxreview is the admin-side DOCX import review client.

Docxreview uploads degree-class documents, fetches the server's review
session, keeps the approve/reject decisions locally and commits them
back to the student information service.
"""

__copyright__ = "Copyright (C) 2025-2026 Chukwuemeka Obi, Adaeze Nwankwo, et al"
__credits__ = "The Docxreview Developers"
__license__ = "AGPL-3.0-or-later"

from .common import __version__, MAX_FILE_SIZE, ALLOWED_EXTENSIONS
from .models import (
    ApprovalDecision,
    ClassOfDegree,
    ImportSession,
    ImportStats,
    ImportSummary,
    MatchConfidence,
    Outcome,
    ReviewRecord,
    UpdateResult,
)
from .messenger import ImportMessenger
from .upload import UploadGate, validate_file
from .ledger import ReviewLedger, FilterType
from .committer import ApprovalCommitter, classify
from .workflow import ImportReview

__all__ = [
    "ApprovalCommitter",
    "ApprovalDecision",
    "ClassOfDegree",
    "FilterType",
    "ImportMessenger",
    "ImportReview",
    "ImportSession",
    "ImportStats",
    "ImportSummary",
    "MatchConfidence",
    "Outcome",
    "ReviewLedger",
    "ReviewRecord",
    "UpdateResult",
    "UploadGate",
    "classify",
    "validate_file",
]
