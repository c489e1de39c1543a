# expohub/api/routers/registrations.py
import logging
import uuid

from fastapi import APIRouter, Depends, Query, status
from tortoise.exceptions import IntegrityError
from tortoise.transactions import in_transaction

from expohub.api.deps import ensure_owner, get_current_user, search_params
from expohub.api.search import apply_search
from expohub.core.errors import ApiError
from expohub.core.pubsub import channel
from expohub.models.expo import Expo, ExpoRegistration
from expohub.models.notification import Notification
from expohub.models.user import User
from expohub.schemas.common import SearchParams
from expohub.schemas.expo import REGISTRATION_SORT_KEYS, RegistrationCreateIn, registration_to_dict
from expohub.services.notifications import REGISTRATION_MESSAGE, push_notification

logger = logging.getLogger("uvicorn.error")

router = APIRouter(prefix="/expo-registrations", tags=["registrations"])

def _already_registered() -> ApiError:
    return ApiError(status.HTTP_400_BAD_REQUEST, "User already registered for this expo", "ALREADY_REGISTERED")

@router.post("", status_code=status.HTTP_201_CREATED)
async def register_for_expo(body: RegistrationCreateIn, user: User = Depends(get_current_user)):
    """
    Register the caller for an expo.

    Side effects, in order:
        1. a registration row and a notification row for the caller, in one transaction
        2. broadcast `expo/registrationCreated`, after the commit
        3. `notification/created` to the caller's room

    Error codes:
        - ACCESS_DENIED (403): body.user_id is not the caller
        - EXPO_NOT_FOUND (404)
        - ALREADY_REGISTERED (400)
    """
    ensure_owner(body.user_id, user)
    if not await Expo.filter(id=body.expo_id).exists():
        raise ApiError(status.HTTP_404_NOT_FOUND, "Expo not found", "EXPO_NOT_FOUND")
    if await ExpoRegistration.filter(user_id=user.id, expo_id=body.expo_id).exists():
        raise _already_registered()

    try:
        async with in_transaction():
            reg = await ExpoRegistration.create(user_id=user.id, expo_id=body.expo_id)
            note = await Notification.create(user_id=user.id, message=REGISTRATION_MESSAGE, type="registration")
    except IntegrityError:
        raise _already_registered()

    logger.info("[registrations] user_id=%s registered for expo_id=%s", user.id, body.expo_id)
    payload = registration_to_dict(reg)
    await channel.broadcast("expo/registrationCreated", payload)
    await push_notification(note)
    return payload

@router.get("")
async def list_my_registrations(
    expo_id: uuid.UUID | None = Query(default=None),
    params: SearchParams = Depends(search_params(REGISTRATION_SORT_KEYS)),
    user: User = Depends(get_current_user),
):
    qs = ExpoRegistration.filter(user_id=user.id)
    if expo_id:
        qs = qs.filter(expo_id=expo_id)
    rows = await apply_search(qs, params)
    return [registration_to_dict(r) for r in rows]
