# expohub/client/store.py
"""
Client-side application state.

The state is an immutable tree of pydantic models; every transition is a pure
function `(state, ...) -> new state`. Nothing here performs I/O: see
`expohub.client.api.ExpoClient` for the actions that talk to the server.
"""
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class CurrentUser(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    user_id: str
    email: str
    name: str
    role: str = "user"
    created_at: Optional[str] = None


class AuthenticationStatus(BaseModel):
    model_config = ConfigDict(frozen=True)

    is_authenticated: bool = False
    is_loading: bool = True


class AuthenticationState(BaseModel):
    model_config = ConfigDict(frozen=True)

    current_user: Optional[CurrentUser] = None
    auth_token: Optional[str] = None
    authentication_status: AuthenticationStatus = Field(default_factory=AuthenticationStatus)
    error_message: Optional[str] = None


class NotificationItem(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    notification_id: Optional[str] = None
    message: str
    type: str
    created_at: Optional[str] = None


class NotificationsState(BaseModel):
    model_config = ConfigDict(frozen=True)

    new_notifications_count: int = 0
    notification_list: tuple[NotificationItem, ...] = ()


class SearchFilters(BaseModel):
    model_config = ConfigDict(frozen=True)

    date: Optional[str] = None
    category: Optional[str] = None
    location: Optional[str] = None


class AppState(BaseModel):
    model_config = ConfigDict(frozen=True)

    authentication_state: AuthenticationState = Field(default_factory=AuthenticationState)
    notifications: NotificationsState = Field(default_factory=NotificationsState)
    search_filters: SearchFilters = Field(default_factory=SearchFilters)


def _with_auth(state: AppState, **changes) -> AppState:
    return state.model_copy(update={
        "authentication_state": state.authentication_state.model_copy(update=changes),
    })


def _status(is_authenticated: bool, is_loading: bool) -> AuthenticationStatus:
    return AuthenticationStatus(is_authenticated=is_authenticated, is_loading=is_loading)


# ===== Authentication =====
def login_started(state: AppState) -> AppState:
    status = state.authentication_state.authentication_status
    return _with_auth(
        state,
        authentication_status=status.model_copy(update={"is_loading": True}),
        error_message=None,
    )


def login_succeeded(state: AppState, user: dict, auth_token: str) -> AppState:
    return state.model_copy(update={
        "authentication_state": AuthenticationState(
            current_user=CurrentUser.model_validate(user),
            auth_token=auth_token,
            authentication_status=_status(True, False),
        ),
    })


def login_failed(state: AppState, message: str) -> AppState:
    status = state.authentication_state.authentication_status
    return _with_auth(
        state,
        authentication_status=status.model_copy(update={"is_loading": False}),
        error_message=message,
    )


def logged_out(state: AppState) -> AppState:
    return state.model_copy(update={
        "authentication_state": AuthenticationState(authentication_status=_status(False, False)),
    })


def auth_initialized(state: AppState, user: Optional[dict]) -> AppState:
    """Session restore finished; `user=None` means there was no token to restore."""
    if user is None:
        status = state.authentication_state.authentication_status
        return _with_auth(state, authentication_status=status.model_copy(update={"is_loading": False}))
    return login_succeeded(state, user, state.authentication_state.auth_token)


def auth_failed(state: AppState) -> AppState:
    return state.model_copy(update={
        "authentication_state": AuthenticationState(
            authentication_status=_status(False, False),
            error_message="Failed to authenticate",
        ),
    })


# ===== Notifications =====
def notifications_loaded(state: AppState, items: list[dict]) -> AppState:
    notifications = tuple(NotificationItem.model_validate(i) for i in items)
    return state.model_copy(update={
        "notifications": NotificationsState(
            new_notifications_count=len(notifications),
            notification_list=notifications,
        ),
    })


def notification_received(state: AppState, item: dict) -> AppState:
    """Prepend a pushed `notification/created` payload (list is newest first)."""
    current = state.notifications
    return state.model_copy(update={
        "notifications": NotificationsState(
            new_notifications_count=current.new_notifications_count + 1,
            notification_list=(NotificationItem.model_validate(item),) + current.notification_list,
        ),
    })


# ===== Search filters =====
def search_filters_set(state: AppState, **filters: Optional[str]) -> AppState:
    """Merge the given filters into the current ones; unknown keys are rejected."""
    unknown = set(filters) - set(SearchFilters.model_fields)
    if unknown:
        raise ValueError(f"unknown search filter(s): {', '.join(sorted(unknown))}")
    return state.model_copy(update={"search_filters": state.search_filters.model_copy(update=filters)})


# ===== Persistence =====
def persist(state: AppState) -> dict[str, Any]:
    """
    Snapshot of the state worth keeping across restarts.
    Loading flags and error messages are never persisted.
    """
    auth = state.authentication_state
    return {
        "authentication_state": {
            "current_user": auth.current_user.model_dump(mode="json") if auth.current_user else None,
            "auth_token": auth.auth_token,
            "authentication_status": {
                "is_authenticated": auth.authentication_status.is_authenticated,
                "is_loading": False,
            },
            "error_message": None,
        },
        "notifications": state.notifications.model_dump(mode="json"),
        "search_filters": state.search_filters.model_dump(mode="json"),
    }


def restore(data: Optional[dict[str, Any]]) -> AppState:
    """Rebuild a state from a `persist` snapshot (an empty snapshot gives the initial state)."""
    if not data:
        return AppState()
    return AppState.model_validate(data)
