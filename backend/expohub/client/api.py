# expohub/client/api.py
"""
HTTP actions for the client state container.

Each action calls the API, feeds the result through a pure update from
`expohub.client.store`, keeps the result as `client.state` and returns it.
"""
import logging
from typing import Optional

import httpx

from expohub.client import store
from expohub.client.store import AppState

logger = logging.getLogger(__name__)


def _error_message(exc: Exception, default: str) -> str:
    """Prefer the server's `message` from the error envelope."""
    if isinstance(exc, httpx.HTTPStatusError):
        try:
            return exc.response.json().get("message") or default
        except ValueError:
            return default
    return str(exc) or default


class ExpoClient:
    """
    Async API client bound to one AppState.

    Usage:
        async with ExpoClient("http://localhost:3000") as client:
            state = await client.login_user("ada@expohub.io", "secret123")
    """

    def __init__(
        self,
        base_url: str,
        state: Optional[AppState] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.state = state or AppState()
        self._http = httpx.AsyncClient(base_url=base_url, transport=transport, timeout=10.0)

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        await self.aclose()

    async def aclose(self):
        await self._http.aclose()

    def _auth_headers(self) -> dict:
        return {"Authorization": f"Bearer {self.state.authentication_state.auth_token}"}

    def _commit(self, state: AppState) -> AppState:
        self.state = state
        return state

    # -------- authentication --------
    async def login_user(self, email: str, password: str) -> AppState:
        """
        Log in, then load the profile behind the new token.
        On failure the server's message ends up in `error_message`.
        """
        self._commit(store.login_started(self.state))
        try:
            resp = await self._http.post("/api/auth/login", json={"email": email, "password": password})
            resp.raise_for_status()
            token = resp.json()["auth_token"]
            me = await self._http.get("/api/users/me", headers={"Authorization": f"Bearer {token}"})
            me.raise_for_status()
        except httpx.HTTPError as exc:
            return self._commit(store.login_failed(self.state, _error_message(exc, "Login failed")))
        return self._commit(store.login_succeeded(self.state, me.json(), token))

    def logout_user(self) -> AppState:
        return self._commit(store.logged_out(self.state))

    async def initialize_auth(self) -> AppState:
        """Restore a persisted session by re-verifying its token."""
        if not self.state.authentication_state.auth_token:
            return self._commit(store.auth_initialized(self.state, None))
        try:
            resp = await self._http.get("/api/auth/verify", headers=self._auth_headers())
            resp.raise_for_status()
        except httpx.HTTPError as exc:
            logger.info("[client] session restore failed: %r", exc)
            return self._commit(store.auth_failed(self.state))
        return self._commit(store.auth_initialized(self.state, resp.json()))

    # -------- notifications --------
    async def fetch_notifications(self) -> AppState:
        """Reload the caller's notifications; a failed fetch leaves the state unchanged."""
        auth = self.state.authentication_state
        if not (auth.current_user and auth.auth_token):
            return self.state
        try:
            resp = await self._http.get(
                f"/api/notifications/{auth.current_user.user_id}",
                headers=self._auth_headers(),
            )
            resp.raise_for_status()
        except httpx.HTTPError as exc:
            logger.warning("[client] failed to fetch notifications: %r", exc)
            return self.state
        return self._commit(store.notifications_loaded(self.state, resp.json()))

    # -------- real-time events --------
    def apply_event(self, frame: dict) -> AppState:
        """
        Feed one `{"event", "data"}` frame from the `/ws` socket into the state.

        Only `notification/created` addressed to the logged-in user changes
        anything; other frames leave the state as it is.
        """
        current = self.state.authentication_state.current_user
        data = frame.get("data") or {}
        if frame.get("event") != "notification/created" or not current:
            return self.state
        if data.get("user_id") != current.user_id:
            logger.debug("[client] ignoring notification for user_id=%s", data.get("user_id"))
            return self.state
        return self._commit(store.notification_received(self.state, data))

    # -------- search --------
    def set_search_filters(self, **filters: Optional[str]) -> AppState:
        return self._commit(store.search_filters_set(self.state, **filters))
