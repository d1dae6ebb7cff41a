"""Credential store factory — resolve the configured backend to an implementation."""

from __future__ import annotations

from panel_dns.config import AppConfig
from panel_dns.credentials.base import CredentialStore
from panel_dns.credentials.file import FileCredentialStore
from panel_dns.credentials.keyvault import KeyVaultCredentialStore


def get_credential_store(config: AppConfig, store_name: str | None = None) -> CredentialStore:
    """Instantiate a credential store by name.

    Args:
        config: Application configuration.
        store_name: Override the backend selected by ``CREDENTIAL_STORE``.
    """
    name = (store_name or config.credential_store).lower()

    if name == "file":
        return FileCredentialStore(config.credential_file)

    if name == "keyvault":
        if not config.keyvault_url:
            raise ValueError("AZURE_KEYVAULT_URL is required when CREDENTIAL_STORE=keyvault")
        return KeyVaultCredentialStore(
            vault_url=config.keyvault_url,
            secret_name=config.credential_secret_name,
        )

    raise ValueError(f"Unknown credential store: '{name}'")
