# expohub/api/routers/expos.py
import logging
import uuid
from typing import Any

from fastapi import APIRouter, Body, Depends, status

from expohub.api.deps import get_current_user, search_params
from expohub.api.search import apply_search
from expohub.core.errors import ApiError, parse_body
from expohub.core.pubsub import channel
from expohub.models.expo import EventSchedule, Expo
from expohub.models.user import User
from expohub.schemas.common import SearchParams
from expohub.schemas.expo import (
    EXPO_SEARCH_FIELDS,
    EXPO_SORT_KEYS,
    SCHEDULE_SEARCH_FIELDS,
    SCHEDULE_SORT_KEYS,
    EventScheduleCreateIn,
    ExpoCreateIn,
    ExpoUpdateIn,
    expo_to_dict,
    schedule_to_dict,
)

logger = logging.getLogger("uvicorn.error")

router = APIRouter(prefix="/expos", tags=["expos"])
schedules_router = APIRouter(prefix="/event-schedules", tags=["expos"])

async def _get_expo_or_404(expo_id) -> Expo:
    expo = await Expo.get_or_none(id=expo_id)
    if not expo:
        raise ApiError(status.HTTP_404_NOT_FOUND, "Expo not found", "EXPO_NOT_FOUND")
    return expo

@router.get("")
async def list_expos(
    params: SearchParams = Depends(search_params(EXPO_SORT_KEYS)),
):
    """
    Search expos by title/description/category.

    Defaults: newest date first, 10 per page.
    """
    rows = await apply_search(Expo.all(), params, EXPO_SEARCH_FIELDS)
    return [expo_to_dict(e) for e in rows]

@router.post("", status_code=status.HTTP_201_CREATED)
async def create_expo(body: ExpoCreateIn, user: User = Depends(get_current_user)):
    expo = await Expo.create(**body.model_dump())
    logger.info("[expos] created expo_id=%s by user_id=%s", expo.id, user.id)
    return expo_to_dict(expo)

@router.get("/{expo_id}")
async def get_expo(expo_id: uuid.UUID):
    return expo_to_dict(await _get_expo_or_404(expo_id))

@router.patch("/{expo_id}")
async def update_expo(
    expo_id: uuid.UUID,
    body: Any = Body(default=None),
    _: User = Depends(get_current_user),
):
    """
    Partially update an expo and broadcast `expo/updated`.

    Expos have no owner column, so any authenticated user may edit.

    Error codes:
        - EXPO_NOT_FOUND (404)
        - VALIDATION_ERROR (400)
        - NO_UPDATE_FIELDS (400)
    """
    expo = await _get_expo_or_404(expo_id)
    changes = parse_body(ExpoUpdateIn, {} if body is None else body).model_dump(exclude_unset=True, exclude_none=True)
    if not changes:
        raise ApiError(status.HTTP_400_BAD_REQUEST, "No fields to update", "NO_UPDATE_FIELDS")

    expo.update_from_dict(changes)
    await expo.save(update_fields=list(changes))

    payload = expo_to_dict(expo)
    await channel.broadcast("expo/updated", payload)
    return payload

@router.get("/{expo_id}/schedules")
async def list_expo_schedules(
    expo_id: uuid.UUID,
    params: SearchParams = Depends(search_params(SCHEDULE_SORT_KEYS)),
):
    """Agenda of one expo, searchable by event name and speaker."""
    await _get_expo_or_404(expo_id)
    rows = await apply_search(EventSchedule.filter(expo_id=expo_id), params, SCHEDULE_SEARCH_FIELDS)
    return [schedule_to_dict(s) for s in rows]

@schedules_router.post("", status_code=status.HTTP_201_CREATED)
async def create_event_schedule(body: EventScheduleCreateIn, _: User = Depends(get_current_user)):
    await _get_expo_or_404(body.expo_id)
    s = await EventSchedule.create(**body.model_dump())
    return schedule_to_dict(s)
