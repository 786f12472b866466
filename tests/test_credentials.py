"""Unit tests for the credential stores."""
import json
import logging
import os
import stat

import pytest

from chotto.credentials import KEY_PREFIX, CredentialStore, create_credential_store
from chotto.credentials.file import FileCredentialStore
from chotto.credentials.in_memory import InMemoryCredentialStore
from chotto.llm import Provider


@pytest.fixture(params=["memory", "file"])
def store(request, tmp_path):
    """Each credential backend, empty."""
    if request.param == "memory":
        return create_credential_store("memory")
    return create_credential_store("file", path=tmp_path / "credentials.json")


class TestCredentialStoreInterface:
    """Tests for the abstract CredentialStore interface."""

    def test_store_is_abstract(self):
        with pytest.raises(TypeError):
            CredentialStore()  # type: ignore

    def test_storage_key_is_namespaced(self):
        assert CredentialStore.storage_key(Provider.OPENAI) == f"{KEY_PREFIX}openai"
        assert CredentialStore.storage_key("google") == "chotto-gpt-api-key-google"

    def test_unknown_provider_rejected(self):
        with pytest.raises(ValueError):
            CredentialStore.storage_key("mistral")


class TestCredentialStores:
    """Behavior shared by every backend."""

    def test_missing_key_is_empty(self, store):
        assert store.get(Provider.ANTHROPIC) == ""
        assert not store.has(Provider.ANTHROPIC)

    def test_set_trims(self, store):
        store.set(Provider.OPENAI, "  sk-abc \n")
        assert store.get("openai") == "sk-abc"
        assert store.has(Provider.OPENAI)

    def test_blank_removes(self, store):
        store.set(Provider.OPENAI, "sk-abc")
        store.set(Provider.OPENAI, "   ")
        assert store.get(Provider.OPENAI) == ""

    def test_providers_are_independent(self, store):
        store.set(Provider.OPENAI, "sk-abc")
        store.set(Provider.GOOGLE, "g-key")
        assert store.get(Provider.OPENAI) == "sk-abc"
        assert store.get(Provider.GOOGLE) == "g-key"
        assert store.get(Provider.ANTHROPIC) == ""


class TestFileCredentialStore:
    """Tests for FileCredentialStore."""

    def test_persists_across_instances(self, tmp_path):
        path = tmp_path / "nested" / "credentials.json"
        FileCredentialStore(path).set(Provider.ANTHROPIC, "ant-key")

        assert FileCredentialStore(path).get(Provider.ANTHROPIC) == "ant-key"
        assert json.loads(path.read_text()) == {"chotto-gpt-api-key-anthropic": "ant-key"}

    def test_owner_only_permissions(self, tmp_path):
        path = tmp_path / "credentials.json"
        FileCredentialStore(path).set(Provider.OPENAI, "sk-abc")
        assert stat.S_IMODE(path.stat().st_mode) == 0o600

    def test_secret_never_written_with_open_permissions(self, tmp_path, monkeypatch):
        """The file holding the secret is owner-only before it reaches its final path."""
        path = tmp_path / "credentials.json"
        modes = []
        real_replace = os.replace

        def recording_replace(src, dst):
            modes.append(stat.S_IMODE(os.stat(src).st_mode))
            real_replace(src, dst)

        monkeypatch.setattr(os, "replace", recording_replace)
        FileCredentialStore(path).set(Provider.OPENAI, "sk-abc")

        assert modes == [0o600]
        assert json.loads(path.read_text()) == {"chotto-gpt-api-key-openai": "sk-abc"}
        assert [p.name for p in tmp_path.iterdir()] == ["credentials.json"]

    def test_corrupt_file_reads_as_empty(self, tmp_path):
        path = tmp_path / "credentials.json"
        path.write_text("{not json")
        store = FileCredentialStore(path)

        assert store.get(Provider.OPENAI) == ""

        store.set(Provider.OPENAI, "sk-abc")
        assert store.get(Provider.OPENAI) == "sk-abc"

    def test_invalid_utf8_reads_as_empty(self, tmp_path, caplog):
        path = tmp_path / "credentials.json"
        path.write_bytes(b"\xff\xfe")

        with caplog.at_level(logging.WARNING, logger="chotto"):
            assert FileCredentialStore(path).get(Provider.OPENAI) == ""

        assert "UnicodeDecodeError" in caplog.text

    def test_unreadable_path_reads_as_empty(self, tmp_path):
        path = tmp_path / "credentials.json"
        path.mkdir()

        store = FileCredentialStore(path)

        assert store.get(Provider.OPENAI) == ""
        assert not store.has(Provider.OPENAI)

    def test_non_string_values_ignored(self, tmp_path):
        path = tmp_path / "credentials.json"
        path.write_text(json.dumps({"chotto-gpt-api-key-openai": 42}))
        assert FileCredentialStore(path).get(Provider.OPENAI) == ""


class TestCredentialFactory:
    """Tests for credential store factory function."""

    def test_create_memory_store(self):
        store = create_credential_store("memory", secrets={Provider.OPENAI: "sk-abc"})
        assert isinstance(store, InMemoryCredentialStore)
        assert store.backend_type == "memory"
        assert store.get(Provider.OPENAI) == "sk-abc"

    def test_create_file_store(self, tmp_path):
        store = create_credential_store("file", path=tmp_path / "c.json")
        assert isinstance(store, FileCredentialStore)
        assert store.backend_type == "file"

    def test_create_store_unknown_type(self):
        with pytest.raises(ValueError, match="Unsupported credential backend"):
            create_credential_store("keyring")
