"""Create and delete ACME challenge TXT records through the panel."""

from __future__ import annotations

import logging
from typing import Self

import httpx

from panel_dns.credentials.base import CredentialStore
from panel_dns.errors import PanelDnsError, RecordCreationError, RecordDeletionError, ZoneNotFoundError
from panel_dns.panel.records import RecordLocator
from panel_dns.panel.session import Session, SessionClient
from panel_dns.panel.zones import ZoneResolver

logger = logging.getLogger(__name__)

SUCCESS_MARKER = 'class="success"'
_CHALLENGE_TTL = 300


class RecordMutator:
    """Runs one login → zone → (locate) → mutate sequence per call.

    Each call logs in fresh; nothing from a previous call is reused except the
    underlying HTTP client.
    """

    def __init__(
        self,
        base_url: str,
        credential_store: CredentialStore,
        zone_resolver: ZoneResolver | None = None,
        record_locator: RecordLocator | None = None,
        _http_client: httpx.Client | None = None,
    ) -> None:
        self._store = credential_store
        self._client = _http_client or httpx.Client(follow_redirects=True)
        self._session_client = SessionClient(base_url, self._client)
        self._zones = zone_resolver or ZoneResolver()
        self._records = record_locator or RecordLocator()

    def __enter__(self) -> Self:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying HTTP client."""
        self._client.close()

    def _open_zone(self, identifier: str, accept_terms: bool) -> tuple[Session, str]:
        session = self._session_client.login(self._store.load(), accept_terms)
        try:
            zone = self._zones.resolve(session, identifier)
        except ZoneNotFoundError:
            raise
        except PanelDnsError as exc:
            raise ZoneNotFoundError(f"Could not resolve the zone for '{identifier}': {exc}") from exc
        return session, zone

    def create(self, identifier: str, record_name: str, txt_value: str, accept_terms: bool = True) -> None:
        session, zone = self._open_zone(identifier, accept_terms)
        resp = session.post(
            "add_txt",
            data={"name": record_name, "value": txt_value, "ttl": str(_CHALLENGE_TTL)},
            domain=zone,
        )
        if SUCCESS_MARKER not in resp.text:
            raise RecordCreationError(
                f"Panel did not confirm creation of TXT record '{record_name}' in zone '{zone}' (HTTP {resp.status_code})"
            )
        logger.info("Created TXT record '%s' in zone '%s'", record_name, zone)

    def delete(self, identifier: str, record_name: str, txt_value: str, accept_terms: bool = True) -> None:
        session, zone = self._open_zone(identifier, accept_terms)
        record_id = self._records.find(session, zone, record_name, txt_value)
        resp = session.get("delete_txt", domain=zone, id=record_id)
        if SUCCESS_MARKER not in resp.text:
            raise RecordDeletionError(
                f"Panel did not confirm deletion of TXT record '{record_name}' (id {record_id}) "
                f"in zone '{zone}' (HTTP {resp.status_code})"
            )
        logger.info("Deleted TXT record '%s' (id %s) from zone '%s'", record_name, record_id, zone)
