# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2026 Chukwuemeka Obi


"""Scriptable docxreview tools for the command line."""

__copyright__ = "Copyright (C) 2025-2026 Chukwuemeka Obi, Adaeze Nwankwo, et al"
__credits__ = "The Docxreview Developers"
__license__ = "AGPL-3.0-or-later"


from docxreview.common import __version__

from .start_messenger import with_review, start_messenger
from .review_tools import (
    approve_and_commit,
    export_data,
    format_table,
    show_review,
    show_stats,
    upload_document,
)

# what you get from "from docxreview.cli import *"
__all__ = [
    "approve_and_commit",
    "export_data",
    "show_review",
    "show_stats",
    "upload_document",
]
