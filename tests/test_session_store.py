"""
Тесты SessionStore: раскладка ключей и восстановление состояния.
"""
import json
from unittest.mock import patch

from expense_tracker.app import create_store
from expense_tracker.models import Account, SessionSnapshot
from expense_tracker.services.session_store import SessionStore


def test_load_empty_store(session_store):
    snapshot = session_store.load()

    assert snapshot.token is None
    assert snapshot.user is None
    assert snapshot.accounts == []
    assert snapshot.current_account_id is None


def test_save_uses_web_client_keys(session_store, kv_store, alice):
    """Имена ключей и формат значений совпадают с localStorage веб-клиента."""
    session_store.save(SessionSnapshot(
        token="tok",
        user=alice,
        accounts=[alice],
        current_account_id=alice.id,
    ))

    assert kv_store.get("token") == "tok"
    assert kv_store.get("currentAccountId") == "u1"
    assert json.loads(kv_store.get("user")) == {
        "_id": "u1",
        "fullName": "Alice",
        "email": "alice@example.com",
        "profileImageUrl": None,
    }
    assert [a["_id"] for a in json.loads(kv_store.get("accounts"))] == ["u1"]


def test_save_and_load_round_trip(session_store, alice, bob):
    snapshot = SessionSnapshot(token="tok", user=bob, accounts=[alice, bob], current_account_id=bob.id)
    session_store.save(snapshot)

    assert session_store.load() == snapshot


def test_save_without_session_removes_token_and_user(session_store, kv_store, alice):
    session_store.save(SessionSnapshot(token="tok", user=alice, accounts=[alice], current_account_id="u1"))
    session_store.save(SessionSnapshot(accounts=[alice]))

    assert kv_store.get("token") is None
    assert kv_store.get("user") is None
    assert kv_store.get("currentAccountId") is None
    assert session_store.load().accounts == [alice]


def test_user_without_token_is_not_restored(session_store, kv_store, alice):
    kv_store.write({"user": json.dumps(alice.to_storage()), "accounts": "[]"})

    snapshot = session_store.load()

    assert snapshot.user is None
    assert snapshot.token is None


def test_corrupted_values_are_dropped(session_store, kv_store):
    kv_store.write({"token": "tok", "user": "{not json", "accounts": '{"a": 1}'})

    snapshot = session_store.load()

    assert snapshot.token == "tok"
    assert snapshot.user is None
    assert snapshot.accounts == []


def test_invalid_and_duplicate_accounts_are_skipped(session_store, kv_store):
    kv_store.set("accounts", json.dumps([
        {"_id": "u1", "fullName": "Alice", "email": "a@example.com"},
        {"fullName": "Без id"},
        {"_id": "u1", "fullName": "Alice (копия)", "email": "a@example.com"},
        {"_id": "u2", "fullName": "Bob", "email": "b@example.com"},
    ]))

    accounts = session_store.load().accounts

    assert [a.id for a in accounts] == ["u1", "u2"]
    assert accounts[0].full_name == "Alice"


def test_numeric_ids_are_read_as_strings(session_store, kv_store):
    kv_store.set("accounts", json.dumps([{"_id": 42, "fullName": "N", "email": "n@example.com"}]))

    assert session_store.load().accounts == [Account(id="42", full_name="N", email="n@example.com")]


def test_client_storage_keys_have_app_prefix(mock_page, alice):
    with patch("expense_tracker.app.settings") as mock_settings:
        mock_settings.storage_backend = "client_storage"
        store = SessionStore(create_store(mock_page))

    store.save(SessionSnapshot(token="tok", user=alice, accounts=[alice], current_account_id=alice.id))

    assert sorted(mock_page.client_storage.data) == [
        "expense_tracker.accounts",
        "expense_tracker.currentAccountId",
        "expense_tracker.token",
        "expense_tracker.user",
    ]
    assert store.load().current_account_id == "u1"
