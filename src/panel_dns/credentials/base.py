"""Abstract base class for credential stores."""

from __future__ import annotations

from abc import ABC, abstractmethod

from panel_dns.models import Credentials


class CredentialStore(ABC):
    """Persists the panel login so that only the principal who saved it can read it back."""

    @abstractmethod
    def load(self) -> Credentials:
        """Return the stored credentials.

        Raises:
            CredentialsNotSet: Nothing has been saved, or the stored data is unusable.
        """

    @abstractmethod
    def save(self, credentials: Credentials) -> None:
        """Store credentials, replacing any previous value."""
