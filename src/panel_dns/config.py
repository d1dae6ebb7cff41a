"""Configuration loading and validation from environment variables."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

_APP_DIR_NAME = "panel-dns-hook"
_DEFAULT_CREDENTIAL_STORE = "file"
_DEFAULT_SECRET_NAME = "panel-dns-credentials"
_DEFAULT_LOG_LEVEL = "INFO"


def default_credential_file() -> Path:
    """Per-user credential file location, honouring XDG_CONFIG_HOME."""
    xdg = os.environ.get("XDG_CONFIG_HOME")
    base = Path(xdg) if xdg else Path.home() / ".config"
    return base / _APP_DIR_NAME / "credentials"


@dataclass(frozen=True)
class AppConfig:
    """Application configuration loaded from environment variables."""

    credential_file: Path
    panel_base_url: str | None = None
    credential_store: str = _DEFAULT_CREDENTIAL_STORE
    keyvault_url: str | None = None
    credential_secret_name: str = _DEFAULT_SECRET_NAME
    log_level: int = logging.INFO


def _parse_log_level(raw: str) -> int:
    level = logging.getLevelName(raw.upper())
    if not isinstance(level, int):
        raise ValueError(f"LOG_LEVEL must be a logging level name, got: {raw!r}")
    return level


def load_config() -> AppConfig:
    """Load and validate application configuration from environment variables.

    Backend-specific settings (``PANEL_BASE_URL`` for record operations,
    ``AZURE_KEYVAULT_URL`` for the Key Vault store) are checked by the
    factories that need them, so ``setcred`` works without a panel URL.
    """
    raw_file = os.environ.get("CREDENTIAL_FILE")
    credential_file = Path(raw_file).expanduser() if raw_file else default_credential_file()

    return AppConfig(
        credential_file=credential_file,
        panel_base_url=os.environ.get("PANEL_BASE_URL") or None,
        credential_store=os.environ.get("CREDENTIAL_STORE", _DEFAULT_CREDENTIAL_STORE),
        keyvault_url=os.environ.get("AZURE_KEYVAULT_URL") or None,
        credential_secret_name=os.environ.get("CREDENTIAL_SECRET_NAME", _DEFAULT_SECRET_NAME),
        log_level=_parse_log_level(os.environ.get("LOG_LEVEL", _DEFAULT_LOG_LEVEL)),
    )
