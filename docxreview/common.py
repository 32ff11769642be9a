# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2025-2026 Chukwuemeka Obi

# Any module that needs the version should import it from here
__version__ = "0.3.0"

import sys

if sys.version_info < (3, 10):
    raise RuntimeError("Docxreview requires Python 3.10 or newer")

# 10 MiB, the largest document the extraction service accepts
MAX_FILE_SIZE = 10 * 1024 * 1024
ALLOWED_EXTENSIONS = (".docx",)

API_PREFIX = "/api/nysc/admin/docx-import"

# (connect, read) timeouts in seconds for each kind of call
Default_Timeouts = {
    "fetch": (5, 15),
    "upload": (15, 60),
    "submit": (15, 30),
    "stats": (5, 15),
    "export": (15, 60),
}
