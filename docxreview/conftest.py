# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2026 Chukwuemeka Obi

import json
from typing import Any

import arrow
import pytest
import requests


def make_row(n: int, *, needs_update: bool = True, **kw) -> dict[str, Any]:
    row = {
        "student_id": 1000 + n,
        "matric_no": f"VUG/CSC/21/{n:04d}",
        "student_name": f"Student Number{n}",
        "current_class_of_degree": None if needs_update else "Second Class Upper",
        "proposed_class_of_degree": "Second Class Upper",
        "match_confidence": "exact",
        "needs_update": needs_update,
        "approved": False,
        "source": "table",
        "row_number": n + 1,
    }
    row.update(kw)
    return row


def make_session_payload(
    n_actionable: int = 35, n_info: int = 10, **kw
) -> dict[str, Any]:
    rows = [make_row(i) for i in range(n_actionable)]
    rows += [make_row(n_actionable + i, needs_update=False) for i in range(n_info)]
    payload = {
        "success": True,
        "session_id": "abc123",
        "original_filename": "report.docx",
        "summary": {
            "total_extracted": 50,
            "total_matched": len(rows),
            "ready_for_review": len(rows),
        },
        "review_data": rows,
        "expires_at": arrow.utcnow().shift(hours=6).isoformat(),
    }
    payload.update(kw)
    return payload


def make_response(
    status: int = 200,
    payload: Any = None,
    *,
    text: str | None = None,
    headers: dict[str, str] | None = None,
    reason: str = "",
) -> requests.Response:
    """A real requests.Response, as if it came off the wire."""
    r = requests.Response()
    r.status_code = status
    r.reason = reason or ("OK" if status < 400 else "Error")
    r.url = "https://portal.test/api"
    if payload is not None:
        r._content = json.dumps(payload).encode()
        r.headers["Content-Type"] = "application/json"
    elif text is not None:
        r._content = text.encode()
    else:
        r._content = b""
    r._content_consumed = True
    if headers:
        r.headers.update(headers)
    return r


@pytest.fixture
def session_payload() -> dict[str, Any]:
    return make_session_payload()
