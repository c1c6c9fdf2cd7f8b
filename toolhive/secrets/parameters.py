"""Secret provider protocol and parsing of ``--secret`` parameters."""

import re
from dataclasses import dataclass
from typing import List, Protocol, runtime_checkable

_SECRET_PARAM = re.compile(r"([^,]+),target=(.+)")


@runtime_checkable
class Provider(Protocol):
    """Something that can manage secrets."""

    def get_secret(self, name: str) -> str: ...

    def set_secret(self, name: str, value: str) -> None: ...

    def delete_secret(self, name: str) -> None: ...

    def list_secrets(self) -> List[str]: ...

    def cleanup(self) -> None: ...


@dataclass(frozen=True)
class SecretParameter:
    """A parsed ``<name>,target=<target>`` parameter."""

    name: str
    target: str


def parse_secret_parameter(parameter: str) -> SecretParameter:
    """Parse a parameter of the form ``<name>,target=<target>``."""
    if not parameter:
        raise ValueError("secret parameter cannot be empty")
    match = _SECRET_PARAM.fullmatch(parameter)
    if match is None:
        raise ValueError(f"invalid secret parameter format: {parameter}")
    return SecretParameter(name=match.group(1), target=match.group(2))