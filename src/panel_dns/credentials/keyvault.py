"""Credential store backed by an Azure Key Vault secret."""

from __future__ import annotations

import json
import logging

from azure.core.exceptions import ResourceNotFoundError
from azure.identity import DefaultAzureCredential
from azure.keyvault.secrets import SecretClient

from panel_dns.credentials.base import CredentialStore
from panel_dns.errors import CredentialsNotSet
from panel_dns.models import Credentials

logger = logging.getLogger(__name__)

_credential: DefaultAzureCredential | None = None


def get_azure_credential() -> DefaultAzureCredential:
    """Return a cached DefaultAzureCredential instance."""
    global _credential
    if _credential is None:
        _credential = DefaultAzureCredential()
    return _credential


class KeyVaultCredentialStore(CredentialStore):
    """Stores credentials as a JSON secret; read access is governed by the vault's RBAC."""

    def __init__(
        self,
        vault_url: str,
        secret_name: str,
        _secret_client: SecretClient | None = None,
    ) -> None:
        self._secret_name = secret_name
        self._client = _secret_client or SecretClient(vault_url, get_azure_credential())

    def load(self) -> Credentials:
        try:
            secret = self._client.get_secret(self._secret_name)
        except ResourceNotFoundError as exc:
            raise CredentialsNotSet(f"Key Vault secret '{self._secret_name}' does not exist; run 'setcred' first") from exc
        if not secret.value:
            raise CredentialsNotSet(f"Key Vault secret '{self._secret_name}' is empty")
        try:
            return Credentials.from_dict(json.loads(secret.value))
        except (ValueError, KeyError, TypeError) as exc:
            raise CredentialsNotSet(f"Key Vault secret '{self._secret_name}' is not a stored credential") from exc

    def save(self, credentials: Credentials) -> None:
        self._client.set_secret(
            self._secret_name,
            json.dumps(credentials.to_dict()),
            content_type="application/json",
        )
        logger.info("Saved credentials for '%s' to Key Vault secret '%s'", credentials.username, self._secret_name)
