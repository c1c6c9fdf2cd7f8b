"""Client for the update service that reports the latest released version."""

import json
import os
import urllib.error
import urllib.request
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

INSTANCE_ID_HEADER = "X-Instance-ID"
USER_AGENT_HEADER = "User-Agent"
DEFAULT_VERSION_API = "https://updates.codegate.ai/api/v1/version"


@runtime_checkable
class VersionClient(Protocol):
    """Something that can ask for the latest version."""

    def get_latest_version(self, instance_id: str, current_version: str) -> str: ...


@dataclass
class DefaultVersionClient:
    """Asks the update API with a plain HTTP GET."""

    version_endpoint: str = DEFAULT_VERSION_API

    def get_latest_version(self, instance_id: str, current_version: str) -> str:
        """Return the ``version`` field of the API's JSON reply."""
        user_agent = f"toolhive/{current_version}"
        if os.environ.get("TOOLHIVE_DEV", ""):
            user_agent += " dev"

        try:
            request = urllib.request.Request(
                self.version_endpoint,
                method="GET",
                headers={INSTANCE_ID_HEADER: instance_id, USER_AGENT_HEADER: user_agent},
            )
        except ValueError as exc:
            raise ValueError(f"failed to create request: {exc}") from exc

        try:
            with urllib.request.urlopen(request) as response:
                status = response.status
                body = response.read() if status == 200 else b""
        except urllib.error.HTTPError as exc:
            exc.close()
            raise RuntimeError(f"update API returned non-200 status code: {exc.code}") from None
        except (urllib.error.URLError, OSError) as exc:
            raise ConnectionError(f"failed to send request to update API: {exc}") from exc

        if status != 200:
            raise RuntimeError(f"update API returned non-200 status code: {status}")

        try:
            payload = json.loads(body)
        except (ValueError, UnicodeDecodeError) as exc:
            raise ValueError(f"failed to parse JSON response: {exc}") from exc
        if payload is None:
            return ""
        if not isinstance(payload, dict):
            raise ValueError("failed to parse JSON response: expected a JSON object")
        version = payload.get("version")
        if version is None:
            return ""
        if not isinstance(version, str):
            raise ValueError("failed to parse JSON response: version must be a string")
        return version


def new_version_client() -> VersionClient:
    """Return a client for the default update API."""
    return DefaultVersionClient(version_endpoint=DEFAULT_VERSION_API)