# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2026 Chukwuemeka Obi

from dataclasses import fields

from pytest import raises

from docxreview.conftest import make_row, make_session_payload
from docxreview.exceptions import TransportError
from docxreview.models import MatchConfidence, ReviewRecord
from docxreview.schemas import (
    ApprovalResponse,
    ReviewRow,
    SessionResponse,
    error_message,
    parse_payload,
    record_from_wire,
    session_from_wire,
    update_result_from_wire,
)


def test_session_mapping() -> None:
    payload = make_session_payload(n_actionable=3, n_info=2)
    session = session_from_wire(parse_payload(SessionResponse, payload))
    assert session.session_id == "abc123"
    assert session.original_filename == "report.docx"
    assert session.summary.total_extracted == 50
    assert len(session.records) == 5
    assert session.expires_at is not None
    assert [r.matric_no for r in session.records] == [
        r["matric_no"] for r in payload["review_data"]
    ]


def test_record_mapping_is_exhaustive() -> None:
    row = make_row(7, match_confidence="partial", source="text", row_number=None)
    r = record_from_wire(parse_payload(ReviewRow, row))
    assert {f.name for f in fields(ReviewRecord)} == set(ReviewRow.model_fields)
    for name in ReviewRow.model_fields:
        value = getattr(r, name)
        if isinstance(value, MatchConfidence):
            value = value.value
        assert value == row[name]


def test_server_cannot_preapprove_informational() -> None:
    row = make_row(1, needs_update=False, approved=True)
    assert record_from_wire(parse_payload(ReviewRow, row)).approved is False


def test_bad_confidence_is_rejected() -> None:
    row = make_row(1, match_confidence="fuzzy")
    with raises(TransportError, match="match_confidence"):
        parse_payload(ReviewRow, row)


def test_missing_field_is_rejected() -> None:
    payload = make_session_payload()
    del payload["review_data"]
    with raises(TransportError, match="review_data"):
        parse_payload(SessionResponse, payload)


def test_bad_timestamp_is_rejected() -> None:
    payload = make_session_payload(expires_at="next tuesday")
    with raises(TransportError, match="expires_at"):
        parse_payload(SessionResponse, payload)


def test_not_a_dict_is_rejected() -> None:
    with raises(TransportError):
        parse_payload(SessionResponse, ["not", "a", "session"])


def test_update_result_mapping() -> None:
    body = parse_payload(
        ApprovalResponse,
        {
            "success": True,
            "result": {
                "updated_count": 7,
                "error_count": 3,
                "errors": ["a", "b", "c"],
            },
        },
    )
    res = update_result_from_wire(body)
    assert res.success
    assert (res.updated_count, res.error_count) == (7, 3)
    assert res.errors == ("a", "b", "c")


def test_error_message() -> None:
    assert error_message({"success": False, "message": "Bad file"}, "x") == "Bad file"
    assert error_message({"success": False}, "default") == "default"
    assert error_message(None, "default") == "default"
    assert error_message("<html>", "default") == "default"
