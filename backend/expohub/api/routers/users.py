# expohub/api/routers/users.py
import uuid
from typing import Any

from fastapi import APIRouter, Body, Depends, status
from tortoise.exceptions import IntegrityError

from expohub.api.deps import ensure_owner, get_current_user, search_params
from expohub.api.search import apply_search
from expohub.core.errors import ApiError, parse_body
from expohub.core.pubsub import channel
from expohub.core.security import hash_password
from expohub.models.user import User
from expohub.schemas.common import SearchParams
from expohub.schemas.user import (
    USER_SEARCH_FIELDS,
    USER_SORT_KEYS,
    UserUpdateIn,
    user_event,
    user_to_dict,
)

router = APIRouter(prefix="/users", tags=["users"])

@router.get("")
async def search_users(
    params: SearchParams = Depends(search_params(USER_SORT_KEYS)),
    _: User = Depends(get_current_user),
):
    """Search user profiles by name/email (authenticated callers only)."""
    rows = await apply_search(User.all(), params, USER_SEARCH_FIELDS)
    return [user_to_dict(u) for u in rows]

@router.get("/me")
async def get_me(user: User = Depends(get_current_user)):
    return user_to_dict(user)

@router.get("/{user_id}")
async def get_user_profile(user_id: uuid.UUID, _: User = Depends(get_current_user)):
    """
    Get a user's public profile.

    Raises:
        ApiError (404): USER_NOT_FOUND
    """
    u = await User.get_or_none(id=user_id)
    if not u:
        raise ApiError(status.HTTP_404_NOT_FOUND, "User not found", "USER_NOT_FOUND")
    return user_to_dict(u)

@router.patch("/{user_id}")
async def update_user_profile(
    user_id: uuid.UUID,
    body: Any = Body(default=None),
    user: User = Depends(get_current_user),
):
    """
    Update the caller's own profile (email, name, password).

    The ownership check runs before payload validation, so editing somebody
    else's profile is always ACCESS_DENIED. Broadcasts `user/profileUpdated`.

    Error codes:
        - ACCESS_DENIED (403): user_id is not the caller
        - VALIDATION_ERROR (400): malformed fields
        - NO_UPDATE_FIELDS (400): nothing to change
        - USER_ALREADY_EXISTS (400): new email belongs to another account
    """
    ensure_owner(user_id, user)
    changes = parse_body(UserUpdateIn, {} if body is None else body).model_dump(exclude_unset=True, exclude_none=True)
    if not changes:
        raise ApiError(status.HTTP_400_BAD_REQUEST, "No fields to update", "NO_UPDATE_FIELDS")

    if "email" in changes and changes["email"] != user.email:
        if await User.filter(email=changes["email"]).exclude(id=user.id).exists():
            raise ApiError(status.HTTP_400_BAD_REQUEST, "User with this email already exists", "USER_ALREADY_EXISTS")
        user.email = changes["email"]
    if "name" in changes:
        user.name = changes["name"]
    if "password" in changes:
        user.password_hash = hash_password(changes["password"])

    try:
        await user.save()
    except IntegrityError:
        raise ApiError(status.HTTP_400_BAD_REQUEST, "User with this email already exists", "USER_ALREADY_EXISTS")

    await channel.broadcast("user/profileUpdated", user_event(user))
    return user_to_dict(user)
