# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2026 Chukwuemeka Obi

import functools
from typing import Any

from docxreview.auth import Authorizer, EnvToken, StaticToken
from docxreview.messenger import ImportMessenger
from docxreview.workflow import ImportReview


def start_messenger(
    server: str | None,
    token: str | None = None,
    verify_ssl: bool = True,
    timeouts: dict[str, Any] | None = None,
) -> ImportMessenger:
    """Start and return a new messenger, with a token or reading it from the environment."""
    credentials = StaticToken(token) if token else EnvToken()
    msgr = ImportMessenger(
        server, credentials=credentials, verify_ssl=verify_ssl, timeouts=timeouts
    )
    msgr.start()
    return msgr


def with_review(f):
    """Decorator for flexible credentials or an already open review.

    The wrapped function gets a keyword argument ``review``: either
    the :class:`ImportReview` the caller passed, or a new one built
    from ``review=(server, token, role)`` whose messenger is stopped
    afterwards.
    """

    @functools.wraps(f)
    def wrapped(*args, **kwargs):
        review = kwargs.get("review")
        if isinstance(review, ImportReview):
            return f(*args, **kwargs)

        server, token, role = kwargs.pop("review")
        msgr = start_messenger(server, token)
        kwargs["review"] = ImportReview(msgr, Authorizer(role))
        try:
            return f(*args, **kwargs)
        finally:
            msgr.stop()

    return wrapped
