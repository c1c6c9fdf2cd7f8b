"""Storage of runner state as files under the XDG state directory."""

import io
import os
import shutil
from pathlib import Path
from typing import IO, Any, List, Optional, Protocol, Union, runtime_checkable

DEFAULT_APP_NAME = "toolhive"
RUN_CONFIGS_DIR = "runconfigs"
FILE_EXTENSION = ".json"

_CHUNK = 64 * 1024


@runtime_checkable
class Store(Protocol):
    """Named blobs of runner state."""

    def save(self, name: str, reader: IO[Any]) -> None: ...

    def load(self, name: str, writer: IO[Any]) -> None: ...

    def get_reader(self, name: str) -> IO[str]: ...

    def get_writer(self, name: str) -> IO[str]: ...

    def delete(self, name: str) -> None: ...

    def list(self) -> List[str]: ...

    def exists(self, name: str) -> bool: ...


def _default_state_home() -> Path:
    configured = os.environ.get("XDG_STATE_HOME", "")
    if configured and os.path.isabs(configured):
        return Path(configured)
    return Path.home() / ".local" / "state"


def _not_found(name: str) -> FileNotFoundError:
    return FileNotFoundError(f"state '{name}' not found")


class LocalStore:
    """A :class:`Store` keeping one JSON file per name on the local disk."""

    def __init__(self, app_name: str = "", state_home: Optional[Union[str, Path]] = None) -> None:
        if not app_name:
            app_name = DEFAULT_APP_NAME
        home = Path(state_home) if state_home is not None else _default_state_home()
        self._base_path = home / app_name / RUN_CONFIGS_DIR
        try:
            self._base_path.mkdir(mode=0o750, parents=True, exist_ok=True)
        except OSError as exc:
            raise OSError(f"failed to create state directory: {exc}") from exc

    @property
    def base_path(self) -> Path:
        return self._base_path

    def _file_path(self, name: str) -> Path:
        if not name.endswith(FILE_EXTENSION):
            name = name + FILE_EXTENSION
        return self._base_path / name

    def _open_for_write(self, name: str, mode: str) -> IO[Any]:
        try:
            fd = os.open(self._file_path(name), os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        except OSError as exc:
            raise OSError(f"failed to create file: {exc}") from exc
        if "b" in mode:
            return os.fdopen(fd, mode)
        return os.fdopen(fd, mode, encoding="utf-8")

    def save(self, name: str, reader: IO[Any]) -> None:
        """Store everything read from ``reader`` (text or binary) under ``name``."""
        with self._open_for_write(name, "wb") as handle:
            try:
                while True:
                    chunk = reader.read(_CHUNK)
                    if not chunk:
                        break
                    if isinstance(chunk, str):
                        chunk = chunk.encode("utf-8")
                    handle.write(chunk)
            except OSError as exc:
                raise OSError(f"failed to write data to file: {exc}") from exc

    def load(self, name: str, writer: IO[Any]) -> None:
        """Write the data stored under ``name`` to ``writer`` (text or binary)."""
        try:
            handle = open(self._file_path(name), "rb")
        except FileNotFoundError:
            raise _not_found(name) from None
        except OSError as exc:
            raise OSError(f"failed to open state file: {exc}") from exc
        with handle:
            try:
                if isinstance(writer, io.TextIOBase):
                    writer.write(handle.read().decode("utf-8"))
                else:
                    shutil.copyfileobj(handle, writer, _CHUNK)
            except OSError as exc:
                raise OSError(f"failed to read data from file: {exc}") from exc

    def get_reader(self, name: str) -> IO[str]:
        """Open the state stored under ``name`` for reading as text."""
        try:
            return open(self._file_path(name), "r", encoding="utf-8")
        except FileNotFoundError:
            raise _not_found(name) from None
        except OSError as exc:
            raise OSError(f"failed to open state file: {exc}") from exc

    def get_writer(self, name: str) -> IO[str]:
        """Open (truncating) the state under ``name`` for writing as text."""
        return self._open_for_write(name, "w")

    def delete(self, name: str) -> None:
        """Remove the state stored under ``name``."""
        try:
            os.remove(self._file_path(name))
        except FileNotFoundError:
            raise _not_found(name) from None
        except OSError as exc:
            raise OSError(f"failed to delete state file: {exc}") from exc

    def list(self) -> List[str]:
        """Return the names of all stored states, sorted."""
        try:
            entries = sorted(os.scandir(self._base_path), key=lambda entry: entry.name)
        except FileNotFoundError:
            return []
        except OSError as exc:
            raise OSError(f"failed to read state directory: {exc}") from exc
        return [
            entry.name[: -len(FILE_EXTENSION)]
            for entry in entries
            if not entry.is_dir() and entry.name.endswith(FILE_EXTENSION)
        ]

    def exists(self, name: str) -> bool:
        """Report whether state is stored under ``name``."""
        try:
            os.stat(self._file_path(name))
        except FileNotFoundError:
            return False
        except OSError as exc:
            raise OSError(f"failed to check if state exists: {exc}") from exc
        return True


def new_store(app_name: str) -> Store:
    """Create the state store; only local storage exists."""
    return LocalStore(app_name)