"""Shared test fixtures for panel-dns-hook."""

import pytest

import panel_dns.credentials.keyvault as _kv


def pytest_runtest_setup(item):
    """Reset module-level caches between tests."""
    _kv._credential = None


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch, tmp_path):
    """Keep the developer's own panel settings and credentials out of the tests."""
    for name in (
        "PANEL_BASE_URL",
        "CREDENTIAL_STORE",
        "CREDENTIAL_FILE",
        "AZURE_KEYVAULT_URL",
        "CREDENTIAL_SECRET_NAME",
        "LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
