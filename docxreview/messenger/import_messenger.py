# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2025-2026 Chukwuemeka Obi
# Copyright (C) 2026 Adaeze Nwankwo

"""Talk to the document import endpoints of the server."""

from __future__ import annotations

import logging
from email.message import EmailMessage
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import BinaryIO
from urllib.parse import quote

import requests
from requests_toolbelt import MultipartEncoder

from ..common import API_PREFIX
from ..exceptions import (
    ApprovalFailed,
    AuthenticationError,
    Expired,
    NotAuthorized,
    NotFound,
    TransportError,
    UploadFailed,
)
from ..models import ApprovalDecision, ImportSession, ImportStats, UpdateResult
from ..schemas import (
    ApprovalResponse,
    SessionResponse,
    StatsResponse,
    UploadResponse,
    decisions_to_wire,
    error_message,
    parse_payload,
    session_from_wire,
    stats_from_wire,
    update_result_from_wire,
)
from .base_messenger import BaseMessenger, _json_or_none


log = logging.getLogger("messenger")

DOCX_MIME_TYPE = (
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
)
Default_Export_Filename = "student_nysc_data.xlsx"


class ImportMessenger(BaseMessenger):
    """Upload documents, fetch review sessions and submit approvals."""

    def upload_docx(self, fh: BinaryIO, filename: str) -> UploadResponse:
        """Send a document to the extraction service.

        This does no checking of the file: see :func:`docxreview.upload.validate_file`.

        Args:
            fh: an open binary file.
            filename: the name the server will see.

        Returns:
            The validated reply, including the new session id and summary.

        Raises:
            UploadFailed: network trouble, timeout, an error status, or
                a reply we could not understand.  The message is the
                server's, when it sent one.
        """
        with self.SRmutex:
            try:
                dat = MultipartEncoder(
                    fields={"docx_file": (filename, fh, DOCX_MIME_TYPE)}
                )
                response = self.post_auth(
                    f"{API_PREFIX}/upload",
                    data=dat,
                    headers={"Content-Type": dat.content_type},
                    timeout=self.timeouts["upload"],
                )
                response.raise_for_status()
                payload = response.json()
            except requests.HTTPError as e:
                log.warning("upload of %s refused: %s", filename, e)
                raise UploadFailed(
                    error_message(_json_or_none(response), f"Upload failed: {e}")
                ) from None
            except (requests.ConnectionError, requests.Timeout) as e:
                log.warning("upload of %s: timeout/connect error: %s", filename, e)
                raise UploadFailed(
                    f"Upload failed: could not reach the server: {e}"
                ) from None
            except (requests.RequestException, ValueError) as e:
                raise UploadFailed(f"Upload failed: unreadable reply: {e}") from None

        if isinstance(payload, dict) and payload.get("success") is False:
            raise UploadFailed(error_message(payload, "Upload failed"))
        try:
            body = parse_payload(UploadResponse, payload)
        except TransportError as e:
            raise UploadFailed(str(e)) from None
        log.info(
            "uploaded %s: session %s, %d extracted, %d matched",
            filename,
            body.session_id,
            body.summary.total_extracted,
            body.summary.total_matched,
        )
        return body

    def fetch_session(self, session_id: str) -> ImportSession:
        """Get an import session and all its review records.

        Args:
            session_id: as issued by the upload, or from a link.

        Returns:
            The session, with its records in server order.

        Raises:
            ValueError: empty session id.
            NotFound: no such session, or it was already used.
            Expired: the session is past its expiry time.
            AuthenticationError: the server did not accept our token.
            NotAuthorized: the server says we may not see it.
            TransportError: network trouble, timeout or a malformed
                reply.  Trying again is reasonable.
        """
        if not session_id:
            raise ValueError("A session id is required")
        with self.SRmutex:
            try:
                response = self.get_auth(
                    f"{API_PREFIX}/review/{quote(session_id, safe='')}",
                    timeout=self.timeouts["fetch"],
                )
                response.raise_for_status()
                payload = response.json()
            except requests.HTTPError as e:
                msg = error_message(_json_or_none(response), "")
                if response.status_code == 401:
                    raise AuthenticationError(msg or None) from None
                if response.status_code == 403:
                    raise NotAuthorized(
                        msg or "You do not have permission to review imports"
                    ) from None
                if response.status_code == 404:
                    raise NotFound() from None
                if response.status_code == 410:
                    raise Expired() from None
                log.warning("fetching session %s: %s", session_id, e)
                raise TransportError(
                    msg or f"Failed to load review data: {e}"
                ) from None
            except (requests.ConnectionError, requests.Timeout) as e:
                log.warning("fetching session %s: timeout/connect error", session_id)
                raise TransportError(
                    f"Failed to load review data: could not reach the server: {e}"
                ) from None
            except (requests.RequestException, ValueError) as e:
                raise TransportError(
                    f"Failed to load review data: unreadable reply: {e}"
                ) from None

        if isinstance(payload, dict) and payload.get("success") is False:
            raise TransportError(error_message(payload, "Failed to load review data"))
        session = session_from_wire(parse_payload(SessionResponse, payload))
        if session.is_expired():
            raise Expired()
        log.info(
            "fetched session %s (%s): %d records",
            session.session_id,
            session.original_filename,
            len(session.records),
        )
        return session

    def submit_approvals(
        self, session_id: str, decisions: list[ApprovalDecision]
    ) -> UpdateResult:
        """Send the decisions for a session in one batch.

        The request is always sent, whatever the decisions say: the
        server decides what actually changes.

        Returns:
            The server's account of what was updated.  Some records
            failing while others succeed is a normal result, not an
            exception.

        Raises:
            ApprovalFailed: nothing could be applied, or we cannot tell;
                carries the server's message when there is one.
        """
        with self.SRmutex:
            try:
                response = self.post_auth(
                    f"{API_PREFIX}/approve",
                    json=decisions_to_wire(session_id, decisions),
                    timeout=self.timeouts["submit"],
                )
                response.raise_for_status()
                payload = response.json()
            except requests.HTTPError as e:
                log.warning("submitting approvals for %s: %s", session_id, e)
                raise ApprovalFailed(
                    error_message(_json_or_none(response), f"Failed to apply updates: {e}")
                ) from None
            except (requests.ConnectionError, requests.Timeout) as e:
                log.warning("submitting approvals: timeout/connect error: %s", e)
                raise ApprovalFailed(
                    "Failed to apply updates: could not reach the server; "
                    "nothing is known to have been saved"
                ) from None
            except (requests.RequestException, ValueError) as e:
                raise ApprovalFailed(
                    f"Failed to apply updates: unreadable reply: {e}"
                ) from None

        if isinstance(payload, dict) and payload.get("success") is False:
            raise ApprovalFailed(error_message(payload, "Failed to apply updates"))
        try:
            body = parse_payload(ApprovalResponse, payload)
        except TransportError as e:
            raise ApprovalFailed(str(e)) from None
        result = update_result_from_wire(body)
        log.info(
            "session %s: %d updated, %d failed",
            session_id,
            result.updated_count,
            result.error_count,
        )
        for err in result.errors:
            log.warning("update error: %s", err)
        return result

    def get_import_stats(self) -> ImportStats:
        """How many students have a class of degree on file, and the distribution.

        Raises:
            AuthenticationError
            NotAuthorized
            TransportError
        """
        with self.SRmutex:
            try:
                response = self.get_auth(
                    f"{API_PREFIX}/stats", timeout=self.timeouts["stats"]
                )
                response.raise_for_status()
                payload = response.json()
            except requests.HTTPError as e:
                msg = error_message(_json_or_none(response), "")
                if response.status_code == 401:
                    raise AuthenticationError(msg or None) from None
                if response.status_code == 403:
                    raise NotAuthorized(msg or response.reason) from None
                raise TransportError(
                    msg or f"Failed to load statistics: {e}"
                ) from None
            except (requests.RequestException, ValueError) as e:
                raise TransportError(f"Failed to load statistics: {e}") from None

        if isinstance(payload, dict) and payload.get("success") is False:
            raise TransportError(error_message(payload, "Failed to load statistics"))
        return stats_from_wire(parse_payload(StatsResponse, payload))

    def download_student_data(self, dest: Path) -> Path:
        """Download the spreadsheet of all students' NYSC data.

        Args:
            dest: directory in which to save the file.

        Returns:
            The path of the saved file, named as the server suggests.

        Raises:
            AuthenticationError
            NotAuthorized
            TransportError
        """
        dest = Path(dest)
        response = None
        tmp = None
        with self.SRmutex:
            try:
                response = self.get_auth(
                    f"{API_PREFIX}/export-student-data",
                    stream=True,
                    timeout=self.timeouts["export"],
                )
                response.raise_for_status()
                msg = EmailMessage()
                cd = response.headers.get("Content-Disposition")
                if cd:
                    msg["Content-Disposition"] = cd
                # only keep the name, never a path the server sent
                filename = Path(msg.get_filename() or Default_Export_Filename).name
                outfile = dest / filename
                # a broken download must not leave a file under the final name
                with NamedTemporaryFile(
                    "wb", dir=dest, prefix=f".{filename}.", suffix=".part", delete=False
                ) as tmp:
                    for chunk in response.iter_content(chunk_size=8192):
                        tmp.write(chunk)
                Path(tmp.name).replace(outfile)
            except requests.HTTPError as e:
                msg_text = error_message(_json_or_none(response), "")
                if response.status_code == 401:
                    raise AuthenticationError(msg_text or None) from None
                if response.status_code == 403:
                    raise NotAuthorized(msg_text or response.reason) from None
                raise TransportError(msg_text or f"Export failed: {e}") from None
            except requests.RequestException as e:
                raise TransportError(f"Export failed: {e}") from None
            finally:
                if tmp is not None:
                    Path(tmp.name).unlink(missing_ok=True)
                if response is not None:
                    response.close()
        log.info("saved student data to %s", outfile)
        return outfile
