# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2026 Chukwuemeka Obi
# Copyright (C) 2026 Adaeze Nwankwo

from __future__ import annotations

from pathlib import Path

from docxreview.cli import with_review
from docxreview.committer import CommitReport
from docxreview.models import ReviewRecord
from docxreview.upload import format_file_size


def format_table(records: list[ReviewRecord]) -> str:
    """Plain-text table of review records, one per line."""
    header = f"{'matric no':<16} {'name':<28} {'current':<20} {'proposed':<20} {'match':<8} status"
    lines = [header, "-" * len(header)]
    for r in records:
        lines.append(
            f"{r.matric_no:<16} {r.student_name[:28]:<28} "
            f"{(r.current_class_of_degree or '-'):<20} "
            f"{r.proposed_class_of_degree:<20} {r.match_confidence.value:<8} "
            f"{r.state.value}"
        )
    return "\n".join(lines)


@with_review
def upload_document(path: Path, *, review) -> str:
    """Upload a document, print its summary and return the new session id."""
    path = Path(path)
    size = path.stat().st_size
    session = review.upload(path)
    s = session.summary
    print(f'Uploaded "{session.original_filename}" ({format_file_size(size)})')
    print(f"  session id:        {session.session_id}")
    print(f"  extracted:         {s.total_extracted}")
    print(f"  matched:           {s.total_matched}")
    print(f"  ready for review:  {s.ready_for_review}")
    return session.session_id


@with_review
def show_review(
    session_id: str, *, search: str = "", filter_type: str = "all", review
) -> None:
    """Print the statistics and the (filtered) records of a session."""
    session = review.open(session_id)
    left = session.time_remaining()
    print(f'Session {session.session_id} for "{session.original_filename}"')
    print(f"  expires in {left.hours}h {left.minutes}m")
    st = review.statistics()
    print(
        f"  {st.total} records: {st.needs_update} need update, "
        f"{st.no_update_needed} no update needed, {st.approved} approved"
    )
    print(format_table(review.view(search, filter_type)))


@with_review
def approve_and_commit(
    session_id: str,
    matric_numbers: list[str] | None = None,
    *,
    approve_all: bool = False,
    search: str = "",
    filter_type: str = "all",
    review,
) -> CommitReport:
    """Fetch a session, approve the given records (or all in view) and commit."""
    review.open(session_id)
    if approve_all:
        review.approve_all(search, filter_type)
    for m in matric_numbers or []:
        review.approve(m)
    report = review.commit()
    print(report.summary())
    for err in report.errors:
        print(f"  {err}")
    return report


@with_review
def show_stats(*, review) -> None:
    st = review.stats()
    print(f"Students: {st.total_students}")
    print(f"  with class of degree:     {st.students_with_class_degree}")
    print(f"  without class of degree:  {st.students_without_class_degree}")
    for k, v in sorted(st.class_degree_distribution.items()):
        print(f"  {k:<24}  {v}")


@with_review
def export_data(dest: Path, *, review) -> Path:
    p = review.export(Path(dest))
    print(f"Saved {p}")
    return p
