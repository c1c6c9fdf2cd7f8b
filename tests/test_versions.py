import platform
import sys

from toolhive import versions


def test_defaults():
    info = versions.get_version_info()
    assert info.version == "dev"
    assert info.commit == "unknown"
    assert info.build_date == "unknown"


def test_runtime_details():
    info = versions.get_version_info()
    assert info.python_version == platform.python_version()
    assert info.platform.startswith(sys.platform + "/")


def test_utc_build_date_is_formatted(monkeypatch):
    monkeypatch.setattr(versions, "BUILD_DATE", "2024-03-05T10:20:30Z")
    assert versions.get_version_info().build_date == "2024-03-05 10:20:30 UTC"


def test_offset_build_date_is_formatted(monkeypatch):
    monkeypatch.setattr(versions, "BUILD_DATE", "2024-03-05T10:20:30.123+02:00")
    assert versions.get_version_info().build_date == "2024-03-05 10:20:30 +0200"


def test_unparseable_build_date_is_kept(monkeypatch):
    monkeypatch.setattr(versions, "BUILD_DATE", "yesterday")
    assert versions.get_version_info().build_date == "yesterday"


def test_invalid_calendar_date_is_kept(monkeypatch):
    monkeypatch.setattr(versions, "BUILD_DATE", "2024-02-31T10:20:30Z")
    assert versions.get_version_info().build_date == "2024-02-31T10:20:30Z"


def test_release_values_and_dict(monkeypatch):
    monkeypatch.setattr(versions, "VERSION", "v1.2.3")
    monkeypatch.setattr(versions, "COMMIT", "abc123")
    info = versions.get_version_info()
    data = info.to_dict()
    assert data["version"] == "v1.2.3"
    assert data["commit"] == "abc123"
    assert set(data) == {"version", "commit", "build_date", "python_version", "platform"}