# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2025-2026 Chukwuemeka Obi
# Copyright (C) 2026 Adaeze Nwankwo

"""Exceptions for the Docxreview software.

Serious exceptions are for situations the current import session cannot
recover from: the only way forward is a fresh upload.  Benign are for
signaling expected (or at least not unexpected) situations; the same
operation can usually be retried or corrected in place.
"""


class DocxReviewException(Exception):
    """Catch-all parent of all Docxreview-related exceptions."""

    pass


class SeriousException(DocxReviewException):
    """The current session is unusable and must be abandoned."""

    pass


class BenignException(DocxReviewException):
    """A not-unexpected situation, often signaling an error condition."""

    pass


class ValidationError(BenignException):
    """A candidate file failed a local check before any upload.

    The ``rule`` attribute names the check that failed: one of
    ``"extension"``, ``"empty"`` or ``"size"``.
    """

    def __init__(self, msg=None, *, rule=None):
        if not msg:
            msg = "File failed validation"
        super().__init__(msg)
        self.rule = rule


class ConnectionFailure(BenignException):
    """The server location could not be understood."""

    pass


class TransportError(BenignException):
    """Network trouble, a timeout, or a reply we could not make sense of.

    The operation can be retried without discarding the session.
    """

    pass


class UploadFailed(BenignException):
    pass


class ApprovalFailed(BenignException):
    def __init__(self, msg=None):
        if not msg:
            msg = "Failed to apply updates"
        super().__init__(msg)


class NoApprovals(BenignException):
    """Nothing was approved, so there is nothing to submit."""

    def __init__(self, msg=None):
        if not msg:
            msg = "Please approve at least one record before applying updates"
        super().__init__(msg)


class AuthenticationError(BenignException):
    """You are not authenticated, with precisely that as the default message."""

    def __init__(self, msg=None):
        if not msg:
            msg = "You are not authenticated."
        super().__init__(msg)


class NotAuthorized(BenignException):
    """Your role lacks the permission needed for this operation."""

    pass


class LedgerNotLoaded(BenignException):
    """A decision was attempted before any session was loaded."""

    def __init__(self, msg=None):
        if not msg:
            msg = "No import session has been loaded"
        super().__init__(msg)


class SessionGone(SeriousException):
    """The import session is no longer available on the server."""

    pass


class NotFound(SessionGone):
    def __init__(self, msg=None):
        if not msg:
            msg = "Session not found or expired"
        super().__init__(msg)


class Expired(SessionGone):
    def __init__(self, msg=None):
        if not msg:
            msg = "Session has expired"
        super().__init__(msg)


class SessionConsumed(SeriousException):
    """The decisions for this session were already committed."""

    def __init__(self, msg=None):
        if not msg:
            msg = "These decisions were already submitted: reload the session first"
        super().__init__(msg)
