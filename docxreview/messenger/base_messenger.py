# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2025-2026 Chukwuemeka Obi
# Copyright (C) 2026 Adaeze Nwankwo

from __future__ import annotations

import logging
import threading
from typing import Any

import requests
import urllib3

from ..auth import CredentialProvider, EnvToken, bearer_header
from ..common import Default_Timeouts, __version__
from ..exceptions import ConnectionFailure


log = logging.getLogger("messenger")


class BaseMessenger:
    """Basic communication with the student information server.

    Handles the connection, timeouts and the bearer token; subclasses
    add the actual API calls.

    Instance Variables:
        session (requests.Session | None): set once started.
        timeouts (dict): ``(connect, read)`` seconds for each kind of
            call, keyed by ``"fetch"``, ``"upload"``, ``"submit"``,
            ``"stats"`` and ``"export"``.
    """

    def __init__(
        self,
        server: str | None = None,
        *,
        credentials: CredentialProvider | None = None,
        scheme: str | None = None,
        verify_ssl: bool = True,
        timeouts: dict[str, Any] | None = None,
    ) -> None:
        """Initialize a new messenger.

        Args:
            server: URL, or None to default to localhost.

        Keyword Arguments:
            credentials: something that hands out the bearer token,
                asked afresh on every request.  Defaults to reading
                the ``DOCXREVIEW_TOKEN`` environment variable.
            scheme: Fallback scheme (http or https) to use if the server
                string does not include a scheme prefix.  Defaults to
                ``"https"``.
            verify_ssl: controls whether SSL certs are checked.
            timeouts: overrides for some or all of the default
                ``(connect, read)`` timeouts.

        Raises:
            ConnectionFailure: the server string is not a usable URL.
        """
        if not server:
            server = "127.0.0.1"
        # trailing control characters or whitespace from copy-paste
        server = server.strip()

        try:
            parsed_url = urllib3.util.parse_url(server)
        except urllib3.exceptions.LocationParseError as e:
            raise ConnectionFailure(f'Cannot parse the URL "{server}"') from e

        if not parsed_url.scheme or not parsed_url.host:
            if scheme is None:
                scheme = "https"
            server = f"{scheme}://{server}"
            try:
                parsed_url = urllib3.util.parse_url(server)
            except urllib3.exceptions.LocationParseError as e:
                raise ConnectionFailure(f'Cannot parse the URL "{server}"') from e
        if not parsed_url.host:
            raise ConnectionFailure(f'No host in the URL "{server}"')

        while server.endswith("/"):
            server = server[:-1]
        self.base = server
        self.scheme = parsed_url.scheme
        self.session: requests.Session | None = None
        self.credentials = credentials if credentials is not None else EnvToken()
        self.timeouts = dict(Default_Timeouts)
        if timeouts:
            for k, v in timeouts.items():
                if k not in self.timeouts:
                    raise ValueError(f'Unknown kind of timeout "{k}"')
                self.timeouts[k] = tuple(v)
        self.SRmutex = threading.Lock()
        self.verify_ssl = verify_ssl
        if not self.verify_ssl:
            self._shutup_urllib3()

    def _shutup_urllib3(self) -> None:
        # unverified certs give a warning on every single request
        urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)

    @property
    def server(self) -> str:
        return self.base

    def _headers(self, extra: dict[str, str] | None = None) -> dict[str, str]:
        headers = {"User-Agent": f"docxreview/{__version__}", "Accept": "application/json"}
        headers.update(bearer_header(self.credentials))
        if extra:
            headers.update(extra)
        return headers

    def get_auth(self, url: str, *args, **kwargs) -> requests.Response:
        """Perform a GET method on a URL with a bearer token."""
        if "timeout" not in kwargs:
            kwargs["timeout"] = self.timeouts["fetch"]
        kwargs["headers"] = self._headers(kwargs.get("headers"))
        assert self.session
        return self.session.get(self.base + url, *args, **kwargs)

    def post_auth(self, url: str, *args, **kwargs) -> requests.Response:
        """Perform a POST method on a URL with a bearer token."""
        if "timeout" not in kwargs:
            kwargs["timeout"] = self.timeouts["submit"]
        kwargs["headers"] = self._headers(kwargs.get("headers"))
        assert self.session
        return self.session.post(self.base + url, *args, **kwargs)

    def _start_session(self) -> None:
        """Start the requests session, low-level without any checks."""
        self.session = requests.Session()
        # retries only help with connection setup: nothing was sent yet
        self.session.mount(
            f"{self.scheme}://", requests.adapters.HTTPAdapter(max_retries=2)
        )
        self.session.verify = self.verify_ssl

    def start(self) -> None:
        """Start the messenger session."""
        if self.session:
            log.debug("already have a requests-session")
            return
        log.debug("starting a new requests-session to %s", self.base)
        self._start_session()

    def stop(self) -> None:
        """Stop the messenger."""
        if self.session:
            log.debug("stopping requests-session")
            self.session.close()
            self.session = None

    def isStarted(self) -> bool:
        return bool(self.session)

    def __enter__(self) -> BaseMessenger:
        self.start()
        return self

    def __exit__(self, *exc) -> None:
        self.stop()


def _json_or_none(response: requests.Response) -> Any:
    """The decoded body of a reply, or None if it isn't JSON."""
    try:
        return response.json()
    except ValueError:
        return None
