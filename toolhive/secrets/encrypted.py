"""Secret storage in a single AES-GCM encrypted JSON file."""

import json
import os
import threading
from typing import Dict, List, Optional

from toolhive.secrets import aes


class EncryptedManager:
    """Keeps secrets in memory and mirrors them to an encrypted file."""

    def __init__(self, file_path: str, key: bytes, secrets: Optional[Dict[str, str]] = None) -> None:
        self._file_path = file_path
        self._key = bytes(key)
        self._secrets: Dict[str, str] = dict(secrets or {})
        self._lock = threading.RLock()

    @property
    def file_path(self) -> str:
        return self._file_path

    def get_secret(self, name: str) -> str:
        """Return the value of a secret."""
        if not name:
            raise ValueError("secret name cannot be empty")
        with self._lock:
            try:
                return self._secrets[name]
            except KeyError:
                raise LookupError(f"secret not found: {name}") from None

    def set_secret(self, name: str, value: str) -> None:
        """Store a secret and rewrite the file."""
        if not name:
            raise ValueError("secret name cannot be empty")
        with self._lock:
            self._secrets[name] = value
            self._write_file()

    def delete_secret(self, name: str) -> None:
        """Remove a secret and rewrite the file."""
        if not name:
            raise ValueError("secret name cannot be empty")
        with self._lock:
            if name not in self._secrets:
                raise LookupError(f"cannot delete non-existent secret: {name}")
            del self._secrets[name]
            self._write_file()

    def list_secrets(self) -> List[str]:
        """Return the names of all stored secrets."""
        with self._lock:
            return list(self._secrets)

    def cleanup(self) -> None:
        """Remove every secret."""
        with self._lock:
            self._secrets.clear()
            self._write_file()

    def _write_file(self) -> None:
        contents = json.dumps(
            {"secrets": self._secrets}, sort_keys=True, separators=(",", ":")
        ).encode("utf-8")
        try:
            encrypted = aes.encrypt(contents, self._key)
        except ValueError as exc:
            raise ValueError(f"failed to encrypt secrets: {exc}") from exc
        try:
            fd = os.open(self._file_path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
            with os.fdopen(fd, "wb") as handle:
                handle.write(encrypted)
        except OSError as exc:
            raise OSError(f"failed to write secrets to file: {exc}") from exc


def new_encrypted_manager(file_path: str, key: bytes) -> EncryptedManager:
    """Open (creating if needed) an encrypted secrets file and load it."""
    if not key:
        raise ValueError("key cannot be empty")

    file_path = os.path.normpath(file_path)
    try:
        fd = os.open(file_path, os.O_CREAT | os.O_RDWR, 0o600)
    except OSError as exc:
        raise OSError(f"failed to open secrets file: {exc}") from exc
    try:
        with os.fdopen(fd, "rb") as handle:
            raw = handle.read()
    except OSError as exc:
        raise OSError(f"failed to read secrets file: {exc}") from exc

    secrets: Dict[str, str] = {}
    if raw:
        try:
            decrypted = aes.decrypt(raw, key)
        except ValueError as exc:
            raise ValueError(f"unable to decrypt secrets file: {exc}") from exc
        try:
            contents = json.loads(decrypted)
        except ValueError as exc:
            raise ValueError(f"failed to decode secrets file: {exc}") from exc
        if not isinstance(contents, dict):
            raise ValueError("failed to decode secrets file: expected a JSON object")
        stored = contents.get("secrets") or {}
        if not isinstance(stored, dict) or not all(
            isinstance(k, str) and isinstance(v, str) for k, v in stored.items()
        ):
            raise ValueError("failed to decode secrets file: secrets must map strings to strings")
        secrets.update(stored)

    return EncryptedManager(file_path, key, secrets)