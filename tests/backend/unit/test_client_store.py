"""
Unit tests for the client state container (pure updates and persistence).
"""
import pytest

from expohub.client import store
from expohub.client.store import AppState

USER = {
    "user_id": "u-1",
    "email": "ada@expohub.io",
    "name": "Ada",
    "role": "user",
    "created_at": "2024-05-01T10:00:00.000Z",
}


def _logged_in() -> AppState:
    return store.login_succeeded(AppState(), USER, "tok-1")


class TestInitialState:
    def test_initial_state_is_loading_and_anonymous(self):
        state = AppState()
        auth = state.authentication_state
        assert auth.current_user is None
        assert auth.auth_token is None
        assert auth.authentication_status.is_authenticated is False
        assert auth.authentication_status.is_loading is True
        assert state.notifications.new_notifications_count == 0
        assert state.search_filters.category is None


class TestAuthenticationUpdates:
    def test_login_started_clears_error(self):
        failed = store.login_failed(AppState(), "Invalid email or password")
        started = store.login_started(failed)
        assert started.authentication_state.error_message is None
        assert started.authentication_state.authentication_status.is_loading is True

    def test_login_succeeded(self):
        state = _logged_in()
        auth = state.authentication_state
        assert auth.current_user.user_id == "u-1"
        assert auth.auth_token == "tok-1"
        assert auth.authentication_status.is_authenticated is True
        assert auth.authentication_status.is_loading is False

    def test_updates_do_not_mutate_input(self):
        before = AppState()
        store.login_succeeded(before, USER, "tok-1")
        assert before.authentication_state.auth_token is None

    def test_login_failed_keeps_anonymous(self):
        state = store.login_failed(store.login_started(AppState()), "Invalid email or password")
        auth = state.authentication_state
        assert auth.error_message == "Invalid email or password"
        assert auth.authentication_status.is_loading is False
        assert auth.authentication_status.is_authenticated is False

    def test_logged_out_resets_auth_only(self):
        state = store.search_filters_set(_logged_in(), category="tech")
        state = store.logged_out(state)
        assert state.authentication_state.auth_token is None
        assert state.authentication_state.authentication_status.is_loading is False
        assert state.search_filters.category == "tech"

    def test_auth_initialized_without_token(self):
        state = store.auth_initialized(AppState(), None)
        assert state.authentication_state.authentication_status.is_loading is False
        assert state.authentication_state.authentication_status.is_authenticated is False

    def test_auth_failed_clears_session(self):
        state = store.auth_failed(_logged_in())
        assert state.authentication_state.current_user is None
        assert state.authentication_state.error_message == "Failed to authenticate"


class TestNotificationUpdates:
    def test_notifications_loaded_sets_count(self):
        items = [
            {"notification_id": "n2", "message": "b", "type": "registration", "created_at": "2024-05-02T00:00:00.000Z"},
            {"notification_id": "n1", "message": "a", "type": "registration", "created_at": "2024-05-01T00:00:00.000Z"},
        ]
        state = store.notifications_loaded(AppState(), items)
        assert state.notifications.new_notifications_count == 2
        assert [n.notification_id for n in state.notifications.notification_list] == ["n2", "n1"]

    def test_notification_received_prepends(self):
        state = store.notifications_loaded(AppState(), [{"message": "old", "type": "info"}])
        state = store.notification_received(state, {"message": "new", "type": "info"})
        assert state.notifications.new_notifications_count == 2
        assert state.notifications.notification_list[0].message == "new"


class TestSearchFilters:
    def test_filters_merge(self):
        state = store.search_filters_set(AppState(), category="tech")
        state = store.search_filters_set(state, location="Berlin")
        assert state.search_filters.category == "tech"
        assert state.search_filters.location == "Berlin"

    def test_unknown_filter_rejected(self):
        with pytest.raises(ValueError):
            store.search_filters_set(AppState(), venue="hall 1")


class TestPersistence:
    def test_persist_drops_transient_fields(self):
        state = store.login_started(_logged_in())
        snapshot = store.persist(state)
        auth = snapshot["authentication_state"]
        assert auth["auth_token"] == "tok-1"
        assert auth["current_user"]["email"] == "ada@expohub.io"
        assert auth["authentication_status"] == {"is_authenticated": True, "is_loading": False}
        assert auth["error_message"] is None

    def test_restore_round_trip(self):
        state = store.notifications_loaded(_logged_in(), [{"message": "m", "type": "t"}])
        state = store.search_filters_set(state, date="2024-05-01")
        restored = store.restore(store.persist(state))
        assert restored.authentication_state.current_user.name == "Ada"
        assert restored.notifications.new_notifications_count == 1
        assert restored.search_filters.date == "2024-05-01"

    def test_restore_empty_snapshot_gives_initial_state(self):
        assert store.restore(None) == AppState()
