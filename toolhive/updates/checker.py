"""Periodic check for a newer released version of ToolHive."""

import json
import os
import re
import time
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

from toolhive.updates.client import VersionClient
from toolhive.versions import get_version_info

UPDATE_FILE_PATH_SUFFIX = os.path.join("toolhive", "updates.json")
UPDATE_INTERVAL_SECONDS = 4 * 60 * 60

_DIGITS = re.compile(r"[0-9]+")
_IDENT = re.compile(r"[0-9A-Za-z-]+")


@dataclass(frozen=True)
class _Semver:
    major: str
    minor: str
    patch: str
    short: str
    prerelease: str
    build: str


def _parse_int(text: str) -> Tuple[Optional[str], str]:
    match = _DIGITS.match(text)
    if match is None:
        return None, text
    number = match.group(0)
    if number[0] == "0" and len(number) != 1:
        return None, text
    return number, text[len(number):]


def _valid_prerelease(text: str) -> bool:
    for ident in text[1:].split("."):
        if not _IDENT.fullmatch(ident):
            return False
        if ident.isdigit() and ident[0] == "0" and len(ident) != 1:
            return False
    return True


def _valid_build(text: str) -> bool:
    return all(_IDENT.fullmatch(ident) for ident in text[1:].split("."))


def _parse(version: str) -> Optional[_Semver]:
    if not version or version[0] != "v":
        return None
    major, rest = _parse_int(version[1:])
    if major is None:
        return None
    if rest == "":
        return _Semver(major, "0", "0", ".0.0", "", "")
    if rest[0] != ".":
        return None
    minor, rest = _parse_int(rest[1:])
    if minor is None:
        return None
    if rest == "":
        return _Semver(major, minor, "0", ".0", "", "")
    if rest[0] != ".":
        return None
    patch, rest = _parse_int(rest[1:])
    if patch is None:
        return None

    prerelease = ""
    if rest.startswith("-"):
        end = rest.find("+")
        prerelease = rest if end == -1 else rest[:end]
        if not _valid_prerelease(prerelease):
            return None
        rest = rest[len(prerelease):]

    build = ""
    if rest.startswith("+"):
        build = rest
        if not _valid_build(build):
            return None
        rest = ""

    if rest:
        return None
    return _Semver(major, minor, patch, "", prerelease, build)


def _is_valid(version: str) -> bool:
    return _parse(version) is not None


def _canonical(version: str) -> str:
    parsed = _parse(version)
    if parsed is None:
        return ""
    if parsed.build:
        return version[: len(version) - len(parsed.build)]
    return version + parsed.short


def _compare_int(x: str, y: str) -> int:
    if x == y:
        return 0
    if (len(x), x) < (len(y), y):
        return -1
    return 1


def _compare_prerelease(x: str, y: str) -> int:
    if x == y:
        return 0
    if not x:
        return 1
    if not y:
        return -1
    left, right = x[1:].split("."), y[1:].split(".")
    for a, b in zip(left, right):
        if a == b:
            continue
        a_num, b_num = a.isdigit(), b.isdigit()
        if a_num and b_num:
            return _compare_int(a, b)
        if a_num != b_num:
            return -1 if a_num else 1
        return -1 if a < b else 1
    if len(left) == len(right):
        return 0
    return -1 if len(left) < len(right) else 1


def _compare(v: str, w: str) -> int:
    pv, pw = _parse(v), _parse(w)
    if pv is None and pw is None:
        return 0
    if pv is None:
        return -1
    if pw is None:
        return 1
    for a, b in ((pv.major, pw.major), (pv.minor, pw.minor), (pv.patch, pw.patch)):
        result = _compare_int(a, b)
        if result:
            return result
    return _compare_prerelease(pv.prerelease, pw.prerelease)


def notify_if_update_available(current_version: str, latest_version: str) -> None:
    """Print a notice when ``latest_version`` is newer than ``current_version``."""
    current, latest = current_version, latest_version
    if not _is_valid(current):
        current = f"v{current}"
    if not _is_valid(latest):
        latest = f"v{latest}"
    if _compare(_canonical(current), _canonical(latest)) < 0:
        print(
            f"A new version of ToolHive is available: {latest_version}\n"
            f"Currently running: {current_version}"
        )


@dataclass
class UpdateChecker:
    """Asks the update service at most every few hours and remembers the answer."""

    instance_id: str
    current_version: str
    update_file_path: str
    version_client: VersionClient
    previous_api_response: str = ""

    def check_latest_version(self) -> None:
        """Check for a newer version, printing a notice if there is one."""
        try:
            stat = os.stat(self.update_file_path)
        except FileNotFoundError:
            stat = None
        except OSError as exc:
            raise OSError(f"failed to stat update file: {exc}") from exc

        if stat is not None and time.time() - stat.st_mtime < UPDATE_INTERVAL_SECONDS:
            notify_if_update_available(self.current_version, self.previous_api_response)
            return

        print("checking for updates...")

        try:
            latest_version = self.version_client.get_latest_version(
                self.instance_id, self.current_version
            )
        except (OSError, ValueError, RuntimeError) as exc:
            raise RuntimeError(f"failed to check for updates: {exc}") from exc

        notify_if_update_available(self.current_version, latest_version)

        contents = json.dumps(
            {"instance_id": self.instance_id, "latest_version": latest_version},
            separators=(",", ":"),
        ).encode("utf-8")
        try:
            fd = os.open(self.update_file_path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
            with os.fdopen(fd, "wb") as handle:
                handle.write(contents)
        except OSError as exc:
            raise OSError(f"failed to write updated file: {exc}") from exc


def _data_home() -> Path:
    configured = os.environ.get("XDG_DATA_HOME", "")
    if configured and os.path.isabs(configured):
        return Path(configured)
    return Path.home() / ".local" / "share"


def new_update_checker(version_client: VersionClient) -> UpdateChecker:
    """Create a checker whose state lives in the XDG data directory."""
    path = _data_home() / UPDATE_FILE_PATH_SUFFIX
    try:
        path.parent.mkdir(mode=0o700, parents=True, exist_ok=True)
    except OSError as exc:
        raise OSError(f"unable to access update file path {exc}") from exc

    instance_id = ""
    previous_version = ""
    try:
        raw = path.read_bytes()
    except FileNotFoundError:
        instance_id = str(uuid.uuid4())
    except OSError as exc:
        raise OSError(f"failed to read update file: {exc}") from exc
    else:
        try:
            contents = json.loads(raw)
        except (ValueError, UnicodeDecodeError) as exc:
            raise ValueError(f"failed to deserialize update file: {exc}") from exc
        if contents is not None:
            if not isinstance(contents, dict):
                raise ValueError("failed to deserialize update file: expected a JSON object")
            instance_id = contents.get("instance_id") or ""
            previous_version = contents.get("latest_version") or ""
            if not isinstance(instance_id, str) or not isinstance(previous_version, str):
                raise ValueError("failed to deserialize update file: fields must be strings")

    return UpdateChecker(
        instance_id=instance_id,
        current_version=get_version_info().version,
        update_file_path=str(path),
        version_client=version_client,
        previous_api_response=previous_version,
    )