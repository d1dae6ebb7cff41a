"""Zone discovery — match an FQDN's parent suffixes against the account's zone overview."""

from __future__ import annotations

import logging

from panel_dns.errors import ZoneNotFoundError
from panel_dns.panel.session import Session

logger = logging.getLogger(__name__)


def candidate_zones(fqdn: str) -> list[str]:
    """Return the proper parent suffixes of ``fqdn``, most specific first.

    The name itself and the bare TLD are never candidates, so
    ``a.b.example.com`` yields ``["b.example.com", "example.com"]``. A leading
    wildcard label and a trailing dot are ignored.
    """
    labels = fqdn.removeprefix("*.").rstrip(".").split(".")
    return [".".join(labels[i:]) for i in range(1, len(labels) - 1)]


class ZoneResolver:
    """Finds which hosted zone a name belongs to by scanning the zone overview page."""

    def resolve(self, session: Session, fqdn: str) -> str:
        body = session.get("domains").text

        zone = None
        # Every hit overwrites the previous one, so the least specific listed suffix wins.
        for candidate in candidate_zones(fqdn):
            if candidate in body:
                zone = candidate

        if zone is None:
            raise ZoneNotFoundError(f"No zone in the account's domain list is a parent of '{fqdn}'")
        logger.info("Resolved '%s' to zone '%s'", fqdn, zone)
        return zone
