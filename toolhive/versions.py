"""Version information for the application."""

import platform
import re
import sys
from dataclasses import asdict, dataclass
from datetime import datetime
from typing import Dict

UNKNOWN = "unknown"

# Overridden at release time.
VERSION = "dev"
COMMIT = UNKNOWN
BUILD_DATE = UNKNOWN

_RFC3339 = re.compile(
    r"(\d{4})-(\d{2})-(\d{2})[Tt](\d{2}):(\d{2}):(\d{2})(?:\.\d+)?([Zz]|[+-]\d{2}:\d{2})"
)


@dataclass(frozen=True)
class VersionInfo:
    """Version, build and platform details."""

    version: str
    commit: str
    build_date: str
    python_version: str
    platform: str

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)


def _format_build_date(value: str) -> str:
    match = _RFC3339.fullmatch(value)
    if match is None:
        return value
    year, month, day, hour, minute, second = (int(g) for g in match.groups()[:6])
    try:
        stamp = datetime(year, month, day, hour, minute, second)
    except ValueError:
        return value
    zone = match.group(7)
    zone_name = "UTC" if zone in ("Z", "z") else zone.replace(":", "")
    return f"{stamp:%Y-%m-%d %H:%M:%S} {zone_name}"


def get_version_info() -> VersionInfo:
    """Return the current version information."""
    build_date = BUILD_DATE
    if build_date != UNKNOWN:
        build_date = _format_build_date(build_date)
    return VersionInfo(
        version=VERSION,
        commit=COMMIT,
        build_date=build_date,
        python_version=platform.python_version(),
        platform=f"{sys.platform}/{platform.machine().lower()}",
    )