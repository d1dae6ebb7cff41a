"""Panel client factory — wire the session, scrapers and credential store together."""

from __future__ import annotations

from panel_dns.config import AppConfig
from panel_dns.credentials import get_credential_store
from panel_dns.panel.mutator import RecordMutator


def get_record_mutator(config: AppConfig) -> RecordMutator:
    """Build a RecordMutator for the configured panel and credential store."""
    if not config.panel_base_url:
        raise ValueError("PANEL_BASE_URL is required for record operations")
    return RecordMutator(
        base_url=config.panel_base_url,
        credential_store=get_credential_store(config),
    )
