"""Credential store backed by a Fernet-encrypted file in the user's config directory."""

from __future__ import annotations

import json
import logging
import os
import stat
from pathlib import Path

from cryptography.fernet import Fernet, InvalidToken

from panel_dns.credentials.base import CredentialStore
from panel_dns.errors import CredentialsNotSet, InsecureCredentialsError
from panel_dns.models import Credentials

logger = logging.getLogger(__name__)

_FILE_MODE = 0o600
_DIR_MODE = 0o700


def _write_private(path: Path, data: bytes) -> None:
    """Write ``data`` so that only the current user can read it, even on first creation."""
    fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, _FILE_MODE)
    with os.fdopen(fd, "wb") as fh:
        fh.write(data)
    # os.open only applies the mode when the file is new
    os.chmod(path, _FILE_MODE)


def _check_private(path: Path) -> None:
    if os.name != "posix":
        return
    mode = path.stat().st_mode
    if mode & (stat.S_IRWXG | stat.S_IRWXO):
        raise InsecureCredentialsError(
            f"{path} is accessible by other users (mode {stat.filemode(mode)}); run 'chmod 600 {path}'"
        )


class FileCredentialStore(CredentialStore):
    """Stores credentials as encrypted JSON next to a per-user key file.

    Both files are created with mode 0600 inside a 0700 directory.
    """

    def __init__(self, path: Path) -> None:
        self._path = Path(path)
        self._key_path = self._path.with_name(self._path.name + ".key")

    @property
    def path(self) -> Path:
        return self._path

    def _load_key(self) -> bytes:
        _check_private(self._key_path)
        return self._key_path.read_bytes()

    def load(self) -> Credentials:
        if not self._path.exists() or not self._key_path.exists():
            raise CredentialsNotSet(f"No credentials stored at {self._path}; run 'setcred' first")
        _check_private(self._path)

        try:
            plaintext = Fernet(self._load_key()).decrypt(self._path.read_bytes())
            return Credentials.from_dict(json.loads(plaintext))
        except (InvalidToken, ValueError, KeyError, TypeError) as exc:
            raise CredentialsNotSet(f"Credentials at {self._path} could not be decrypted; run 'setcred' again") from exc

    def _key_for_save(self) -> bytes:
        """Reuse the existing key so the current ciphertext stays readable until it is replaced."""
        if self._key_path.exists():
            key = self._load_key()
            try:
                Fernet(key)
                return key
            except ValueError:
                logger.warning("Key file %s is unusable; generating a new key", self._key_path)
        key = Fernet.generate_key()
        _write_private(self._key_path, key)
        return key

    def save(self, credentials: Credentials) -> None:
        self._path.parent.mkdir(mode=_DIR_MODE, parents=True, exist_ok=True)
        token = Fernet(self._key_for_save()).encrypt(json.dumps(credentials.to_dict()).encode())
        tmp_path = self._path.with_name(self._path.name + ".tmp")
        _write_private(tmp_path, token)
        try:
            os.replace(tmp_path, self._path)
        except OSError:
            tmp_path.unlink(missing_ok=True)
            raise
        logger.info("Saved credentials for '%s' to %s", credentials.username, self._path)
