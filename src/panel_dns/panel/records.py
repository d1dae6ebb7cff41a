"""Record lookup — scrape a zone's DNS setup table for a TXT record's panel id."""

from __future__ import annotations

import logging
import re

from panel_dns.errors import RecordNotFoundError
from panel_dns.panel.session import Session

logger = logging.getLogger(__name__)


def record_row_pattern(record_name: str, txt_value: str) -> re.Pattern[str]:
    """Build the pattern for a listing row holding ``record_name`` and ``txt_value``.

    The two cells must be adjacent. The id is the first standalone ``id=`` query
    parameter (not ``domain_id=`` or ``zoneid=``) that follows them in the same table row.
    """
    return re.compile(
        rf"<td>{re.escape(record_name)}</td>\s*<td>{re.escape(txt_value)}</td>"
        r"(?:(?!</tr>).)*?\bid=[^&\"'<>\s]+",
        re.DOTALL,
    )


class RecordLocator:
    """Finds the provider-assigned id of a TXT record in the zone's record listing."""

    def find(self, session: Session, zone: str, record_name: str, txt_value: str) -> str:
        """Return the id of the first row matching ``record_name`` and ``txt_value``.

        Rows with the same name and value are not told apart; the first one
        listed is returned.

        Raises:
            RecordNotFoundError: No row matches.
        """
        body = session.get("dns_setup", domain=zone).text
        match = record_row_pattern(record_name, txt_value).search(body)
        if match is None:
            raise RecordNotFoundError(f"TXT record '{record_name}' with the given value not found in zone '{zone}'")
        record_id = match.group(0).rsplit("=", 1)[1]
        logger.info("Found TXT record '%s' in zone '%s' with id %s", record_name, zone, record_id)
        return record_id
