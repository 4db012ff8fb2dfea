"""
Credential slots: precedence rule and the persisted file store.
"""
from __future__ import annotations

import json
import os
import stat
import sys

import pytest

from studio_admin.gateway.session import (
    ADMIN_SLOT,
    CLIENT_SLOT,
    FileCredentialStore,
    InMemoryCredentialStore,
    SessionCredentials,
)


def test_precedence_client_over_admin():
    creds = SessionCredentials(admin_token="a", client_token="c")
    assert creds.bearer_token() == "c"
    assert creds.active_slot == CLIENT_SLOT
    assert creds.authorization_header() == {"Authorization": "Bearer c"}


def test_admin_only_and_empty():
    assert SessionCredentials(admin_token="a").authorization_header() == {"Authorization": "Bearer a"}
    assert SessionCredentials().authorization_header() == {}
    assert SessionCredentials().active_slot is None


def test_empty_strings_count_as_unset():
    creds = SessionCredentials(admin_token="a", client_token="")
    assert creds.bearer_token() == "a"
    assert SessionCredentials(admin_token="", client_token="").authorization_header() == {}


def test_in_memory_store_roundtrip():
    store = InMemoryCredentialStore(admin_token="a")
    store.set(CLIENT_SLOT, "c")
    assert SessionCredentials.from_store(store).bearer_token() == "c"
    store.delete(CLIENT_SLOT)
    assert SessionCredentials.from_store(store).bearer_token() == "a"
    store.set(ADMIN_SLOT, "")
    assert store.get(ADMIN_SLOT) is None


def test_unknown_slot_is_rejected():
    store = InMemoryCredentialStore()
    with pytest.raises(ValueError):
        store.get("refresh-token")


def test_file_store_persists_between_instances(tmp_path):
    path = tmp_path / "nested" / "credentials.json"
    FileCredentialStore(path).set(ADMIN_SLOT, "adm")
    FileCredentialStore(path).set(CLIENT_SLOT, "cli")
    reread = FileCredentialStore(path)
    assert reread.get(ADMIN_SLOT) == "adm"
    assert reread.get(CLIENT_SLOT) == "cli"
    assert json.loads(path.read_text(encoding="utf-8")) == {ADMIN_SLOT: "adm", CLIENT_SLOT: "cli"}


@pytest.mark.skipif(sys.platform.startswith("win"), reason="POSIX permissions")
def test_file_store_is_user_only(tmp_path):
    path = tmp_path / "credentials.json"
    FileCredentialStore(path).set(ADMIN_SLOT, "adm")
    assert stat.S_IMODE(os.stat(path).st_mode) == 0o600


@pytest.mark.skipif(sys.platform.startswith("win"), reason="POSIX permissions")
def test_file_store_creates_file_user_only_under_open_umask(tmp_path, monkeypatch: pytest.MonkeyPatch):
    path = tmp_path / "credentials.json"
    stale = tmp_path / "credentials.json.tmp"
    stale.write_text("{}", encoding="utf-8")
    stale.chmod(0o666)

    def _no_chmod(*args, **kwargs):
        raise AssertionError("permissions must be set at creation")

    monkeypatch.setattr(os, "chmod", _no_chmod)
    previous = os.umask(0)
    try:
        FileCredentialStore(path).set(ADMIN_SLOT, "adm")
    finally:
        os.umask(previous)
    assert stat.S_IMODE(os.stat(path).st_mode) == 0o600
    assert not stale.exists()


def test_file_store_delete(tmp_path):
    path = tmp_path / "credentials.json"
    store = FileCredentialStore(path)
    store.set(ADMIN_SLOT, "adm")
    store.set(CLIENT_SLOT, "cli")
    store.delete(CLIENT_SLOT)
    assert store.get(CLIENT_SLOT) is None
    assert store.get(ADMIN_SLOT) == "adm"
    store.delete(CLIENT_SLOT)


def test_file_store_missing_file_reads_empty(tmp_path):
    store = FileCredentialStore(tmp_path / "absent.json")
    assert store.get(ADMIN_SLOT) is None
    assert not (tmp_path / "absent.json").exists()


def test_file_store_tolerates_garbage(tmp_path, caplog):
    path = tmp_path / "credentials.json"
    path.write_text("{{ not json", encoding="utf-8")
    store = FileCredentialStore(path)
    assert store.get(ADMIN_SLOT) is None
    assert "not valid JSON" in caplog.text
    store.set(ADMIN_SLOT, "fresh")
    assert store.get(ADMIN_SLOT) == "fresh"


def test_file_store_ignores_foreign_keys_and_blank_values(tmp_path):
    path = tmp_path / "credentials.json"
    path.write_text(json.dumps({ADMIN_SLOT: "", "other": "x", CLIENT_SLOT: 5}), encoding="utf-8")
    store = FileCredentialStore(path)
    assert SessionCredentials.from_store(store).active_slot is None
