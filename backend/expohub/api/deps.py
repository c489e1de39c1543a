# expohub/api/deps.py
import logging
import uuid
from typing import Iterable

import jwt
from fastapi import Depends, Header, Query, status

from expohub.core.errors import ApiError, validation_error
from expohub.core.security import decode_access_token
from expohub.models.user import User
from expohub.schemas.common import SearchParams

logger = logging.getLogger("uvicorn.error")


def bearer_token(authorization: str | None) -> str | None:
    """Extract the token from an `Authorization: Bearer xxx` header value."""
    if authorization and authorization.lower().startswith("bearer "):
        return authorization.split(" ", 1)[1].strip() or None
    return None


async def resolve_user(token: str | None) -> User:
    """
    Resolve a bearer token to a stored user.
    Shared by the HTTP dependency and the WebSocket handshake.

    Raises:
        ApiError (401): No token (AUTH_TOKEN_MISSING)
        ApiError (403): Invalid, expired or foreign-signed token (AUTH_TOKEN_INVALID)
        ApiError (401): Token is valid but the user is gone (AUTH_USER_NOT_FOUND)
    """
    if not token:
        raise ApiError(status.HTTP_401_UNAUTHORIZED, "Access token required", "AUTH_TOKEN_MISSING")

    try:
        payload = decode_access_token(token)
        user_id = uuid.UUID(str(payload.get("user_id")))
    except (jwt.InvalidTokenError, ValueError) as exc:
        logger.info("[auth] rejected token: %r", exc)
        raise ApiError(status.HTTP_403_FORBIDDEN, "Invalid or expired token", "AUTH_TOKEN_INVALID")

    user = await User.get_or_none(id=user_id)
    if not user:
        raise ApiError(status.HTTP_401_UNAUTHORIZED, "Invalid token", "AUTH_USER_NOT_FOUND")
    return user


async def get_current_user(authorization: str | None = Header(default=None)) -> User:
    """
    FastAPI dependency to get the current authenticated user.

    Usage:
        @router.get("/protected")
        async def protected_route(user: User = Depends(get_current_user)):
            return {"user_id": str(user.id)}
    """
    return await resolve_user(bearer_token(authorization))


async def require_admin(current: User = Depends(get_current_user)) -> User:
    """
    FastAPI dependency to ensure the current user is an administrator.

    Raises:
        ApiError (403): If user is not an admin (FORBIDDEN_ADMIN_ONLY)
    """
    if getattr(current, "role", "user") != "admin":
        raise ApiError(status.HTTP_403_FORBIDDEN, "Admin access required", "FORBIDDEN_ADMIN_ONLY")
    return current


def ensure_owner(owner_id, user: User) -> None:
    """Ownership check: the caller must be the owning user."""
    if str(owner_id) != str(user.id):
        raise ApiError(status.HTTP_403_FORBIDDEN, "Access denied", "ACCESS_DENIED")


def search_params(sort_keys: Iterable[str]):
    """
    Build a dependency that parses the shared list parameters
    (query, limit, offset, sort_by, sort_order) for one entity.
    The first entry of `sort_keys` is the default sort key.
    """
    allowed = tuple(sort_keys)

    async def _dependency(
        query: str | None = Query(default=None, description="Case-insensitive substring filter"),
        limit: int = Query(10, ge=1, le=100),
        offset: int = Query(0, ge=0),
        sort_by: str = Query(allowed[0]),
        sort_order: str = Query("desc", pattern="^(asc|desc)$"),
    ) -> SearchParams:
        if sort_by not in allowed:
            raise validation_error([{
                "loc": ["query", "sort_by"],
                "msg": f"sort_by must be one of: {', '.join(allowed)}",
            }])
        return SearchParams(query=query, limit=limit, offset=offset, sort_by=sort_by, sort_order=sort_order)

    return _dependency
