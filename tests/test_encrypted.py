import os
from concurrent.futures import ThreadPoolExecutor

import pytest

from toolhive.secrets import aes
from toolhive.secrets.encrypted import EncryptedManager, new_encrypted_manager


@pytest.fixture
def key():
    return os.urandom(32)


@pytest.fixture
def temp_file(tmp_path):
    path = tmp_path / "secrets-test.json"
    path.touch()
    return str(path)


def test_get_secret(temp_file, key):
    manager = new_encrypted_manager(temp_file, key)
    with pytest.raises(LookupError, match="not found"):
        manager.get_secret("non-existent")
    with pytest.raises(ValueError, match="cannot be empty"):
        manager.get_secret("")
    manager.set_secret("test-key", "test-value")
    assert manager.get_secret("test-key") == "test-value"


def test_set_secret(temp_file, key):
    manager = new_encrypted_manager(temp_file, key)
    with pytest.raises(ValueError, match="cannot be empty"):
        manager.set_secret("", "test-value")
    manager.set_secret("test-key", "test-value")
    assert manager.get_secret("test-key") == "test-value"
    manager.set_secret("test-key", "updated-value")
    assert manager.get_secret("test-key") == "updated-value"

    reloaded = new_encrypted_manager(temp_file, key)
    assert reloaded.get_secret("test-key") == "updated-value"


def test_file_is_not_plaintext(temp_file, key):
    manager = new_encrypted_manager(temp_file, key)
    manager.set_secret("test-key", "test-value")
    with open(temp_file, "rb") as handle:
        raw = handle.read()
    assert b"test-value" not in raw
    assert b'{"secrets":{"test-key":"test-value"}}' == aes.decrypt(raw, key)


def test_delete_secret(temp_file, key):
    manager = new_encrypted_manager(temp_file, key)
    with pytest.raises(LookupError, match="cannot delete non-existent"):
        manager.delete_secret("non-existent")
    with pytest.raises(ValueError, match="cannot be empty"):
        manager.delete_secret("")
    manager.set_secret("test-key", "test-value")
    manager.delete_secret("test-key")
    with pytest.raises(LookupError, match="not found"):
        manager.get_secret("test-key")

    reloaded = new_encrypted_manager(temp_file, key)
    with pytest.raises(LookupError, match="not found"):
        reloaded.get_secret("test-key")


def test_list_secrets(temp_file, key):
    manager = new_encrypted_manager(temp_file, key)
    assert manager.list_secrets() == []
    for i in (1, 2, 3):
        manager.set_secret(f"key{i}", f"value{i}")
    assert sorted(manager.list_secrets()) == ["key1", "key2", "key3"]

    reloaded = new_encrypted_manager(temp_file, key)
    assert sorted(reloaded.list_secrets()) == ["key1", "key2", "key3"]


def test_cleanup(temp_file, key):
    manager = new_encrypted_manager(temp_file, key)
    manager.set_secret("key1", "value1")
    manager.set_secret("key2", "value2")
    assert len(manager.list_secrets()) == 2
    manager.cleanup()
    assert manager.list_secrets() == []

    reloaded = new_encrypted_manager(temp_file, key)
    assert reloaded.list_secrets() == []


def test_new_encrypted_manager(temp_file, key, tmp_path):
    manager = new_encrypted_manager(temp_file, key)
    assert isinstance(manager, EncryptedManager)
    assert manager.list_secrets() == []

    missing = str(tmp_path / "non-existent-dir" / "secrets.json")
    with pytest.raises(OSError, match="failed to open secrets file"):
        new_encrypted_manager(missing, key)

    with pytest.raises(ValueError, match="key cannot be empty"):
        new_encrypted_manager(temp_file, b"")

    manager.set_secret("test-key", "test-value")
    reloaded = new_encrypted_manager(temp_file, key)
    assert reloaded.get_secret("test-key") == "test-value"

    with pytest.raises(ValueError, match="unable to decrypt"):
        new_encrypted_manager(temp_file, os.urandom(32))


def test_new_manager_creates_missing_file(tmp_path, key):
    path = tmp_path / "fresh.json"
    manager = new_encrypted_manager(str(path), key)
    assert path.exists()
    assert manager.list_secrets() == []


def test_undecodable_contents(temp_file, key):
    with open(temp_file, "wb") as handle:
        handle.write(aes.encrypt(b"not json", key))
    with pytest.raises(ValueError, match="failed to decode secrets file"):
        new_encrypted_manager(temp_file, key)


def test_concurrency(temp_file, key):
    manager = new_encrypted_manager(temp_file, key)
    manager.set_secret("test-key", "test-value")

    def work(i):
        value = manager.get_secret("test-key")
        manager.set_secret(f"key-{i}", f"value-{i}")
        return value

    with ThreadPoolExecutor(max_workers=10) as pool:
        results = list(pool.map(work, range(10)))

    assert results == ["test-value"] * 10
    names = manager.list_secrets()
    assert len(names) == 11
    assert "test-key" in names
    assert all(f"key-{i}" in names for i in range(10))

    reloaded = new_encrypted_manager(temp_file, key)
    assert sorted(reloaded.list_secrets()) == sorted(names)