"""
Unit тесты для AccountManager.
"""
import unittest
from unittest.mock import Mock, patch

import pytest

from expense_tracker.models import Account, AuthResponse, AuthState, ProfileUpdate, SessionSnapshot
from expense_tracker.services.account_manager import AccountManager, LOGIN_FAILED_MESSAGE
from expense_tracker.services.api_client import ApiClient
from expense_tracker.services.session_store import SessionStore
from expense_tracker.utils.exceptions import (
    AccountNotFoundError,
    ApiError,
    AuthError,
    NetworkError,
    StorageError,
    UpdateError,
    UploadError,
)

ALICE = Account(id="u1", full_name="Alice", email="alice@example.com")
BOB = Account(id="u2", full_name="Bob", email="bob@example.com")
CAROL = Account(id="u3", full_name="Carol", email="carol@example.com")


@pytest.fixture
def auth_service():
    with patch("expense_tracker.services.account_manager.auth_service") as mock_service:
        yield mock_service


@pytest.fixture
def client():
    return Mock(spec=ApiClient)


@pytest.fixture
def manager(session_store, client, auth_service):
    manager = AccountManager(session_store, client)
    manager.initialize()
    return manager


def login_as(manager, auth_service, account, token="tok"):
    auth_service.login.return_value = AuthResponse(user=account, token=token)
    return manager.login(account.email, "secret")


class TestInitialize:
    """Загрузка сохранённого состояния."""

    def test_starts_loading_and_unauthenticated(self, session_store, client):
        manager = AccountManager(session_store, client)

        assert manager.is_loading
        assert manager.state == AuthState.UNAUTHENTICATED

    def test_empty_store(self, manager, client):
        assert not manager.is_loading
        assert not manager.is_authenticated
        assert manager.accounts == []
        client.set_token.assert_called_with(None)

    def test_restores_saved_session(self, session_store, client):
        session_store.save(SessionSnapshot(token="tok", user=BOB, accounts=[ALICE, BOB], current_account_id="u2"))

        manager = AccountManager(session_store, client)
        manager.initialize()

        assert manager.is_authenticated
        assert manager.user == BOB
        assert manager.current_account_id == "u2"
        assert [a.id for a in manager.accounts] == ["u1", "u2"]
        client.set_token.assert_called_with("tok")

    def test_active_user_missing_from_accounts_is_added(self, session_store, client):
        session_store.save(SessionSnapshot(token="tok", user=BOB, accounts=[ALICE], current_account_id="u2"))

        manager = AccountManager(session_store, client)
        manager.initialize()

        assert [a.id for a in manager.accounts] == ["u1", "u2"]
        assert manager.current_account_id == "u2"

    def test_storage_error_starts_without_session(self, client):
        store = Mock(spec=SessionStore)
        store.load.side_effect = StorageError("disk")

        manager = AccountManager(store, client)
        manager.initialize()

        assert not manager.is_loading
        assert not manager.is_authenticated

    def test_notifies_listeners(self, session_store, client):
        listener = Mock()
        manager = AccountManager(session_store, client)
        manager.subscribe(listener)

        manager.initialize()

        listener.assert_called_once_with(manager)


class TestLogin:
    def test_first_login_adds_account(self, manager, auth_service, client):
        """KnownAccounts=[] и успешный вход: единственный аккаунт, он же активный."""
        session = login_as(manager, auth_service, ALICE)

        assert manager.accounts == [ALICE]
        assert manager.current_account_id == "u1"
        assert session.active_user_id == "u1"
        assert session.auth_token == "tok"
        client.set_token.assert_called_with("tok")

    def test_login_with_known_id_does_not_duplicate(self, manager, auth_service):
        login_as(manager, auth_service, ALICE)
        login_as(manager, auth_service, BOB)
        renamed = ALICE.model_copy(update={"full_name": "Alice B."})
        login_as(manager, auth_service, renamed, token="tok2")

        assert [a.id for a in manager.accounts] == ["u1", "u2"]
        assert manager.accounts[0].full_name == "Alice B."
        assert manager.current_account_id == "u1"
        assert manager.token == "tok2"

    def test_server_rejection_keeps_state(self, manager, auth_service):
        login_as(manager, auth_service, ALICE)
        auth_service.login.side_effect = ApiError("HTTP 401", status_code=401, server_message="Неверный пароль")

        with pytest.raises(AuthError, match="Неверный пароль"):
            manager.login("bob@example.com", "wrong")

        assert manager.accounts == [ALICE]
        assert manager.current_account_id == "u1"

    def test_rejection_without_message_uses_default(self, manager, auth_service):
        auth_service.login.side_effect = ApiError("HTTP 500", status_code=500)

        with pytest.raises(AuthError, match=LOGIN_FAILED_MESSAGE):
            manager.login("alice@example.com", "secret")

    def test_network_error_is_auth_error(self, manager, auth_service):
        auth_service.login.side_effect = NetworkError("Не удалось подключиться к серверу")

        with pytest.raises(AuthError, match="Не удалось подключиться"):
            manager.login("alice@example.com", "secret")

        assert not manager.is_authenticated

    def test_save_failure_keeps_memory_state(self, client, auth_service):
        store = Mock(spec=SessionStore)
        store.load.return_value = SessionSnapshot()
        manager = AccountManager(store, client)
        manager.initialize()
        store.save.side_effect = StorageError("disk full")
        auth_service.login.return_value = AuthResponse(user=ALICE, token="tok")

        with pytest.raises(StorageError):
            manager.login("alice@example.com", "secret")

        assert manager.accounts == []
        assert not manager.is_authenticated


class TestRegister:
    def test_register_adds_account_and_activates(self, manager, auth_service):
        login_as(manager, auth_service, ALICE)
        auth_service.register.return_value = AuthResponse(user=BOB, token="tok-b")

        manager.register({"full_name": "Bob", "email": "bob@example.com", "password": "secret1"})

        assert [a.id for a in manager.accounts] == ["u1", "u2"]
        assert manager.current_account_id == "u2"
        assert manager.token == "tok-b"

    def test_register_rejected(self, manager, auth_service):
        auth_service.register.side_effect = ApiError("HTTP 400", status_code=400, server_message="Email уже занят")

        with pytest.raises(AuthError, match="Email уже занят"):
            manager.register({"full_name": "Bob", "email": "bob@example.com", "password": "secret1"})

        assert manager.accounts == []


class TestSwitchAccount:
    def test_switch_to_known_account(self, manager, auth_service):
        login_as(manager, auth_service, ALICE)
        login_as(manager, auth_service, BOB)

        manager.switch_account("u1")

        assert manager.user == ALICE
        assert manager.current_account_id == "u1"
        assert manager.token == "tok"

    def test_switch_to_unknown_account_fails_without_mutation(self, manager, auth_service):
        login_as(manager, auth_service, ALICE)
        before = manager.snapshot()

        with pytest.raises(AccountNotFoundError):
            manager.switch_account("missing")

        assert manager.snapshot() == before

    def test_switch_without_session(self, manager, auth_service):
        login_as(manager, auth_service, ALICE)
        manager.logout()

        with pytest.raises(AuthError):
            manager.switch_account("u1")

        assert not manager.is_authenticated

    def test_switch_to_active_account_is_noop(self, manager, auth_service):
        login_as(manager, auth_service, ALICE)
        listener = Mock()
        manager.subscribe(listener)

        manager.switch_account("u1")

        listener.assert_not_called()


class TestRemoveAccount:
    def test_remove_active_switches_to_remaining(self, manager, auth_service):
        """KnownAccounts=[A,B], active=A, удаление A: активным становится B."""
        login_as(manager, auth_service, ALICE)
        login_as(manager, auth_service, BOB)
        manager.switch_account("u1")

        manager.remove_account("u1")

        assert [a.id for a in manager.accounts] == ["u2"]
        assert manager.current_account_id == "u2"
        assert manager.user == BOB
        assert manager.is_authenticated

    def test_remove_last_account_clears_session(self, manager, auth_service, client):
        login_as(manager, auth_service, ALICE)

        manager.remove_account("u1")

        assert manager.accounts == []
        assert manager.user is None
        assert manager.token is None
        assert manager.current_account_id is None
        assert manager.state == AuthState.UNAUTHENTICATED
        client.set_token.assert_called_with(None)

    def test_remove_inactive_account_keeps_session(self, manager, auth_service):
        login_as(manager, auth_service, ALICE)
        login_as(manager, auth_service, BOB)
        login_as(manager, auth_service, CAROL)

        manager.remove_account("u2")

        assert [a.id for a in manager.accounts] == ["u1", "u3"]
        assert manager.current_account_id == "u3"

    def test_remove_unknown_account_is_noop(self, manager, auth_service):
        login_as(manager, auth_service, ALICE)
        listener = Mock()
        manager.subscribe(listener)

        manager.remove_account("missing")

        assert manager.accounts == [ALICE]
        listener.assert_not_called()


class TestLogout:
    def test_logout_keeps_known_accounts(self, manager, auth_service, client):
        login_as(manager, auth_service, ALICE)
        login_as(manager, auth_service, BOB)

        manager.logout()

        assert not manager.is_authenticated
        assert manager.session is None
        assert manager.current_account_id is None
        assert [a.id for a in manager.accounts] == ["u1", "u2"]
        client.set_token.assert_called_with(None)

    def test_login_after_logout_reuses_entry(self, manager, auth_service):
        login_as(manager, auth_service, ALICE)
        login_as(manager, auth_service, BOB)
        manager.logout()

        login_as(manager, auth_service, ALICE)

        assert [a.id for a in manager.accounts] == ["u1", "u2"]
        assert manager.current_account_id == "u1"


class TestProfile:
    def test_upload_image_returns_url(self, manager, auth_service):
        auth_service.upload_image.return_value = "http://img.test/1.png"

        assert manager.upload_image("/tmp/a.png") == "http://img.test/1.png"

    @pytest.mark.parametrize("error", [
        ApiError("HTTP 413", status_code=413, server_message="Файл слишком большой"),
        NetworkError(),
        FileNotFoundError("a.png"),
    ])
    def test_upload_image_errors(self, manager, auth_service, error):
        auth_service.upload_image.side_effect = error

        with pytest.raises(UploadError):
            manager.upload_image("/tmp/a.png")

    def test_update_profile_updates_cached_account(self, manager, auth_service):
        login_as(manager, auth_service, ALICE)
        login_as(manager, auth_service, BOB)
        manager.switch_account("u1")
        updated = ALICE.model_copy(update={"full_name": "Alice B.", "profile_image_url": "http://img.test/a.png"})
        auth_service.update_profile.return_value = updated

        result = manager.update_profile(ProfileUpdate(full_name="Alice B."))

        assert result == updated
        assert manager.user == updated
        assert manager.accounts[0] == updated
        assert [a.id for a in manager.accounts] == ["u1", "u2"]

    def test_update_profile_requires_session(self, manager, auth_service):
        with pytest.raises(UpdateError):
            manager.update_profile({"full_name": "X"})

        auth_service.update_profile.assert_not_called()

    def test_update_profile_server_error(self, manager, auth_service):
        login_as(manager, auth_service, ALICE)
        auth_service.update_profile.side_effect = ApiError("HTTP 400", status_code=400, server_message="Плохое имя")

        with pytest.raises(UpdateError, match="Плохое имя"):
            manager.update_profile({"full_name": "X"})

        assert manager.user == ALICE

    def test_refresh_user(self, manager, auth_service):
        login_as(manager, auth_service, ALICE)
        fresh = ALICE.model_copy(update={"email": "new@example.com"})
        auth_service.get_user.return_value = fresh

        assert manager.refresh_user() == fresh
        assert manager.accounts == [fresh]

    def test_refresh_user_without_session(self, manager, auth_service):
        assert manager.refresh_user() is None
        auth_service.get_user.assert_not_called()

    def test_refresh_user_rejected_token(self, manager, auth_service):
        login_as(manager, auth_service, ALICE)
        auth_service.get_user.side_effect = ApiError("HTTP 401", status_code=401)

        with pytest.raises(AuthError):
            manager.refresh_user()


class TestPersistenceAndListeners(unittest.TestCase):
    """Состояние переживает перезапуск; подписчики получают уведомления."""

    def setUp(self):
        self.store = {}
        self.kv = Mock()
        self.kv.read.side_effect = lambda keys: {key: self.store.get(key) for key in keys}
        self.kv.write.side_effect = self._write
        self.session_store = SessionStore(self.kv)
        self.client = Mock(spec=ApiClient)

        self.auth_patcher = patch("expense_tracker.services.account_manager.auth_service")
        self.auth_service = self.auth_patcher.start()

    def tearDown(self):
        self.auth_patcher.stop()

    def _write(self, values):
        for key, value in values.items():
            if value is None:
                self.store.pop(key, None)
            else:
                self.store[key] = value

    def _new_manager(self):
        manager = AccountManager(self.session_store, self.client)
        manager.initialize()
        return manager

    def test_state_survives_restart(self):
        first = self._new_manager()
        login_as(first, self.auth_service, ALICE, token="tok-a")
        login_as(first, self.auth_service, BOB, token="tok-b")
        first.switch_account("u1")

        second = self._new_manager()

        self.assertEqual(second.snapshot(), first.snapshot())
        self.assertEqual(second.current_account_id, "u1")
        self.assertEqual(second.token, "tok-b")

    def test_logout_survives_restart(self):
        first = self._new_manager()
        login_as(first, self.auth_service, ALICE)
        first.logout()

        second = self._new_manager()

        self.assertFalse(second.is_authenticated)
        self.assertEqual([a.id for a in second.accounts], ["u1"])
        self.assertNotIn("token", self.store)

    def test_unsubscribe_stops_notifications(self):
        manager = self._new_manager()
        listener = Mock()
        unsubscribe = manager.subscribe(listener)

        login_as(manager, self.auth_service, ALICE)
        unsubscribe()
        manager.logout()

        listener.assert_called_once_with(manager)

    def test_failing_listener_does_not_break_others(self):
        manager = self._new_manager()
        broken = Mock(side_effect=RuntimeError("boom"))
        listener = Mock()
        manager.subscribe(broken)
        manager.subscribe(listener)

        login_as(manager, self.auth_service, ALICE)

        self.assertTrue(manager.is_authenticated)
        listener.assert_called_once_with(manager)

    def test_teardown_closes_client_and_clears_listeners(self):
        manager = self._new_manager()
        listener = Mock()
        manager.subscribe(listener)

        manager.teardown()
        login_as(manager, self.auth_service, ALICE)

        self.client.close.assert_called_once()
        listener.assert_not_called()
