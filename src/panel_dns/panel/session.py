"""Authenticated panel session — login, terms approval and the cookie-carrying client."""

from __future__ import annotations

import logging
from dataclasses import dataclass

import httpx

from panel_dns.errors import AuthenticationError, TermsNotAcceptedError, TransportError
from panel_dns.models import Credentials

logger = logging.getLogger(__name__)

LOGIN_FAILED_MARKER = 'class="login-error"'
TERMS_PENDING_MARKER = 'name="approve_terms"'
LOGGED_IN_MARKER = "action=logout"


@dataclass(frozen=True)
class Session:
    """Authenticated state for one invocation.

    The panel identifies the login purely by cookie, so the session is the
    ``httpx.Client`` holding the cookie jar plus the panel URL every action is
    addressed against. The panel answers 200 for in-page errors, so callers
    inspect ``response.text`` rather than the status code.
    """

    client: httpx.Client
    base_url: str

    def request(self, method: str, action: str, data: dict | None = None, **params: str) -> httpx.Response:
        try:
            resp = self.client.request(
                method,
                self.base_url,
                params={"action": action, **params},
                data=data,
            )
        except httpx.HTTPError as exc:
            raise TransportError(f"Panel request '{action}' failed: {exc}") from exc
        logger.debug("Panel action '%s' returned HTTP %s", action, resp.status_code)
        return resp

    def get(self, action: str, **params: str) -> httpx.Response:
        return self.request("GET", action, **params)

    def post(self, action: str, data: dict, **params: str) -> httpx.Response:
        return self.request("POST", action, data=data, **params)


class SessionClient:
    """Logs in to the panel and hands back a :class:`Session`."""

    def __init__(self, base_url: str, http_client: httpx.Client) -> None:
        self._base_url = base_url
        self._client = http_client

    def login(self, credentials: Credentials, accept_terms: bool) -> Session:
        """Authenticate and, when allowed, approve pending terms of service.

        Raises:
            AuthenticationError: The panel rejected the credentials or showed no logged-in page.
            TermsNotAcceptedError: Terms are pending and ``accept_terms`` is false.
            TransportError: The panel could not be reached.
        """
        session = Session(client=self._client, base_url=self._base_url)
        resp = session.post(
            "login",
            data={"username": credentials.username, "password": credentials.password},
        )
        body = resp.text

        if LOGIN_FAILED_MARKER in body:
            raise AuthenticationError(
                f"Panel rejected the login for '{credentials.username}' (HTTP {resp.status_code})"
            )

        if TERMS_PENDING_MARKER in body:
            if not accept_terms:
                raise TermsNotAcceptedError(
                    "The panel requires accepting updated terms; run without DeclineTerms to approve them"
                )
            logger.warning("Approving pending panel terms for '%s'", credentials.username)
            session.post("approve_terms", data={"approve": "1"})
        elif LOGGED_IN_MARKER not in body:
            raise AuthenticationError(f"Login page for '{credentials.username}' did not confirm a session (HTTP {resp.status_code})")

        logger.info("Logged in to panel as '%s'", credentials.username)
        return session
