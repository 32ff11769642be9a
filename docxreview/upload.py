# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2025-2026 Chukwuemeka Obi

"""Check a document locally, then hand it to the extraction service."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import BinaryIO

from .common import ALLOWED_EXTENSIONS, MAX_FILE_SIZE
from .exceptions import ValidationError
from .models import ImportSession
from .schemas import session_from_upload


log = logging.getLogger("upload")


def format_file_size(nbytes: int) -> str:
    """Human-friendly size, e.g., "0 Bytes", "512 Bytes", "1.5 KB", "10 MB"."""
    if nbytes <= 0:
        return "0 Bytes"
    units = ["Bytes", "KB", "MB", "GB"]
    i = 0
    while i < len(units) - 1 and nbytes >= 1024 ** (i + 1):
        i += 1
    value = f"{nbytes / 1024**i:.2f}".rstrip("0").rstrip(".")
    return f"{value} {units[i]}"


def validate_file(filename: str, size: int) -> None:
    """Refuse files the server would refuse anyway.

    Args:
        filename: name of the candidate document.
        size: its size in bytes.

    Raises:
        ValidationError: with ``rule`` set to ``"extension"`` for a
            file not ending in ``.docx`` (any case), ``"empty"`` for a
            zero-byte file or ``"size"`` for one over 10 MiB.
    """
    if not filename or not filename.lower().endswith(ALLOWED_EXTENSIONS):
        raise ValidationError("Please select a valid .docx file", rule="extension")
    if size <= 0:
        raise ValidationError("File appears to be empty", rule="empty")
    if size > MAX_FILE_SIZE:
        raise ValidationError(
            f"File size must be less than {format_file_size(MAX_FILE_SIZE)}, "
            f"got {format_file_size(size)}",
            rule="size",
        )


def _measure(fh: BinaryIO) -> int:
    pos = fh.tell()
    fh.seek(0, os.SEEK_END)
    size = fh.tell()
    fh.seek(pos)
    return size - pos


class UploadGate:
    """Validate a candidate document and upload it, giving back the new session.

    Nothing is sent unless the file passes :func:`validate_file`.  Failed
    uploads are not retried: that is up to the caller.
    """

    def __init__(self, messenger) -> None:
        self.msgr = messenger

    def upload(
        self,
        source: str | Path | BinaryIO,
        *,
        filename: str | None = None,
        size: int | None = None,
    ) -> ImportSession:
        """Upload a document.

        Args:
            source: a path, or a binary file object.

        Keyword Args:
            filename: the name to declare; required for a file object
                without a ``name``.
            size: the declared size in bytes; measured if omitted.

        Returns:
            The new session: its id, the file name and the server's
            summary.  Records and expiry come from fetching it.

        Raises:
            ValidationError: the file failed a local check, nothing sent.
            UploadFailed: the server could not be reached or refused it.
            FileNotFoundError: a path was given but no such file exists.
        """
        if isinstance(source, (str, Path)):
            path = Path(source)
            if filename is None:
                filename = path.name
            if size is None:
                size = path.stat().st_size
            validate_file(filename, size)
            with path.open("rb") as fh:
                return self._send(fh, filename)

        if filename is None:
            filename = Path(getattr(source, "name", "") or "").name
        if size is None:
            size = _measure(source)
        validate_file(filename, size)
        return self._send(source, filename)

    def _send(self, fh: BinaryIO, filename: str) -> ImportSession:
        log.debug("uploading %s", filename)
        body = self.msgr.upload_docx(fh, filename)
        return session_from_upload(body, filename)
