import json
import os
import stat
import tempfile
from unittest.mock import patch
from pathlib import Path

import pytest

from core.encryption.cipher import Cipher
from core.exceptions import EntrySchemaError, InvalidVaultSchemaError, VaultIOError
from core.vault.store import Entry, VaultStore


@pytest.fixture
def vault_file(tmp_path) -> Path:
    return tmp_path / "vault.json"


def test_missing_file_is_created_empty(vault_file):
    assert VaultStore(vault_file).load() == {}
    assert json.loads(vault_file.read_text()) == {}


def test_persistence_round_trip(vault_file):
    cipher = Cipher(Cipher.generate_key())
    VaultStore(vault_file).upsert(
        "github", Entry(cipher.encrypt("alice"), cipher.encrypt("s3cret"))
    )

    entry = VaultStore(vault_file).get("github")

    assert cipher.decrypt_text(entry.username) == "alice"
    assert cipher.decrypt_text(entry.password) == "s3cret"


def test_file_layout_is_pretty_printed_object(vault_file):
    VaultStore(vault_file).upsert("mail", Entry("u-token", "p-token"))

    contents = vault_file.read_text()
    assert contents == json.dumps(
        {"mail": {"username": "u-token", "password": "p-token"}}, indent=2
    )


def test_names_are_case_insensitive(vault_file):
    store = VaultStore(vault_file)
    store.upsert("GitHub", Entry("u", "p"))

    assert store.get("github") == Entry("u", "p")
    assert store.get("GITHUB") == Entry("u", "p")
    assert list(store.load()) == ["github"]


def test_upsert_overwrites_whole_entry(vault_file):
    store = VaultStore(vault_file)
    store.upsert("mail", Entry("u1", "p1"))
    store.upsert("mail", Entry("u2", "p2"))

    assert store.load() == {"mail": {"username": "u2", "password": "p2"}}


def test_upsert_keeps_other_entries(vault_file):
    store = VaultStore(vault_file)
    store.upsert("mail", Entry("u1", "p1"))
    store.upsert("bank", Entry("u2", "p2"))

    assert set(store.load()) == {"mail", "bank"}


def test_get_absent_entry_returns_none(vault_file):
    assert VaultStore(vault_file).get("nothing") is None


def test_delete_missing_on_empty_vault(vault_file):
    store = VaultStore(vault_file)

    assert store.delete("missing") is False
    assert json.loads(vault_file.read_text()) == {}


def test_delete_present_entry(vault_file):
    store = VaultStore(vault_file)
    store.upsert("github", Entry("u", "p"))

    assert store.delete("GitHub") is True
    assert store.get("github") is None
    assert store.load() == {}


@pytest.mark.parametrize("contents", ["[]", '"text"', "42", "null", "{broken", ""])
def test_invalid_schema_is_reported_and_file_untouched(vault_file, contents):
    vault_file.write_text(contents)
    store = VaultStore(vault_file)

    with pytest.raises(InvalidVaultSchemaError):
        store.load()
    with pytest.raises(InvalidVaultSchemaError):
        store.upsert("mail", Entry("u", "p"))

    assert vault_file.read_text() == contents


def test_non_utf8_file_is_invalid_schema(vault_file):
    vault_file.write_bytes(b"\xff\xfe{}")

    with pytest.raises(InvalidVaultSchemaError, match="UTF-8"):
        VaultStore(vault_file).load()


@pytest.mark.parametrize(
    "record, reason",
    [
        ({"username": "u"}, "missing 'password'"),
        ({"password": "p"}, "missing 'username'"),
        ({"username": 1, "password": "p"}, "'username' is not a string"),
        ("flat string", "not an object"),
        (None, "not an object"),
    ],
)
def test_malformed_entry_is_distinct_from_not_found(vault_file, record, reason):
    vault_file.write_text(json.dumps({"mail": record}))

    with pytest.raises(EntrySchemaError, match=reason):
        VaultStore(vault_file).get("mail")


def test_delete_of_malformed_entry_still_works(vault_file):
    vault_file.write_text(json.dumps({"mail": None}))

    assert VaultStore(vault_file).delete("mail") is True


def test_unwritable_location_raises_io_error(tmp_path):
    store = VaultStore(tmp_path / "no_such_dir" / "vault.json")

    with pytest.raises(VaultIOError):
        store.load()


def test_no_temp_file_left_behind(vault_file):
    VaultStore(vault_file).upsert("mail", Entry("u", "p"))

    assert [p.name for p in vault_file.parent.iterdir()] == ["vault.json"]


def test_interleaved_stores_lose_updates(vault_file):
    """Read-modify-write without locking: the last writer wins."""
    first = VaultStore(vault_file)
    second = VaultStore(vault_file)
    first.load()

    snapshot = second.load()
    first.upsert("mail", Entry("u1", "p1"))
    snapshot["bank"] = Entry("u2", "p2").to_dict()
    second._persist(snapshot)

    assert set(VaultStore(vault_file).load()) == {"bank"}


def test_each_write_uses_its_own_temp_file(vault_file):
    VaultStore(vault_file).load()
    created = []

    def recording_mkstemp(*args, **kwargs):
        fd, name = real_mkstemp(*args, **kwargs)
        created.append(Path(name))
        return fd, name

    real_mkstemp = tempfile.mkstemp
    with patch("core.vault.store.tempfile.mkstemp", side_effect=recording_mkstemp):
        VaultStore(vault_file).upsert("mail", Entry("u1", "p1"))
        VaultStore(vault_file).upsert("bank", Entry("u2", "p2"))

    assert len(created) == 2
    assert created[0] != created[1]
    assert all(p.parent == vault_file.parent for p in created)
    assert all(p.name.startswith(".vault.json.") for p in created)
    assert [p.name for p in vault_file.parent.iterdir()] == ["vault.json"]


@pytest.mark.skipif(os.name == "nt", reason="POSIX permissions only")
def test_vault_file_is_owner_only(vault_file):
    VaultStore(vault_file).upsert("mail", Entry("u", "p"))

    assert stat.S_IMODE(vault_file.stat().st_mode) == 0o600


def test_failed_write_keeps_previous_vault(vault_file):
    store = VaultStore(vault_file)
    store.upsert("mail", Entry("u", "p"))
    before = vault_file.read_text()

    def disk_full(fd, *args, **kwargs):
        os.close(fd)
        raise OSError(28, "No space left on device")

    with patch("core.vault.store.os.fdopen", side_effect=disk_full):
        with pytest.raises(VaultIOError, match="No space left"):
            store.upsert("bank", Entry("u2", "p2"))

    assert vault_file.read_text() == before
    assert [p.name for p in vault_file.parent.iterdir()] == ["vault.json"]
