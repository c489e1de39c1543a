# expohub/api/routers/exhibitors.py
import logging
import uuid
from typing import Any

from fastapi import APIRouter, Body, Depends, Query, status
from tortoise.exceptions import IntegrityError

from expohub.api.deps import ensure_owner, get_current_user, search_params
from expohub.api.search import apply_search
from expohub.core.errors import ApiError, parse_body
from expohub.models.exhibitor import Exhibitor, VirtualBooth
from expohub.models.user import User
from expohub.schemas.common import SearchParams
from expohub.schemas.exhibitor import (
    BOOTH_SEARCH_FIELDS,
    BOOTH_SORT_KEYS,
    EXHIBITOR_SEARCH_FIELDS,
    EXHIBITOR_SORT_KEYS,
    BoothCreateIn,
    BoothUpdateIn,
    ExhibitorCreateIn,
    ExhibitorUpdateIn,
    booth_to_dict,
    exhibitor_to_dict,
)

logger = logging.getLogger("uvicorn.error")

router = APIRouter(prefix="/exhibitors", tags=["exhibitors"])
booths_router = APIRouter(prefix="/virtual-booths", tags=["exhibitors"])

def _no_update_fields() -> ApiError:
    return ApiError(status.HTTP_400_BAD_REQUEST, "No fields to update", "NO_UPDATE_FIELDS")

async def _get_exhibitor_or_404(exhibitor_id) -> Exhibitor:
    x = await Exhibitor.get_or_none(id=exhibitor_id)
    if not x:
        raise ApiError(status.HTTP_404_NOT_FOUND, "Exhibitor not found", "EXHIBITOR_NOT_FOUND")
    return x

async def _get_booth_or_404(booth_id) -> VirtualBooth:
    b = await VirtualBooth.get_or_none(id=booth_id).select_related("exhibitor")
    if not b:
        raise ApiError(status.HTTP_404_NOT_FOUND, "Virtual booth not found", "BOOTH_NOT_FOUND")
    return b

# ===== Exhibitors =====
@router.post("", status_code=status.HTTP_201_CREATED)
async def create_exhibitor(body: ExhibitorCreateIn, user: User = Depends(get_current_user)):
    """
    Create the caller's exhibitor profile (at most one per user).

    Error codes:
        - ACCESS_DENIED (403): body.user_id is not the caller
        - EXHIBITOR_EXISTS (400)
    """
    ensure_owner(body.user_id, user)
    exists_error = ApiError(status.HTTP_400_BAD_REQUEST, "Exhibitor profile already exists", "EXHIBITOR_EXISTS")
    if await Exhibitor.filter(user_id=user.id).exists():
        raise exists_error
    try:
        x = await Exhibitor.create(user_id=user.id, name=body.name, email=body.email, company=body.company)
    except IntegrityError:
        raise exists_error
    logger.info("[exhibitors] created exhibitor_id=%s for user_id=%s", x.id, user.id)
    return exhibitor_to_dict(x)

@router.get("")
async def list_exhibitors(params: SearchParams = Depends(search_params(EXHIBITOR_SORT_KEYS))):
    rows = await apply_search(Exhibitor.all(), params, EXHIBITOR_SEARCH_FIELDS)
    return [exhibitor_to_dict(x) for x in rows]

@router.get("/{exhibitor_id}")
async def get_exhibitor(exhibitor_id: uuid.UUID):
    return exhibitor_to_dict(await _get_exhibitor_or_404(exhibitor_id))

@router.patch("/{exhibitor_id}")
async def update_exhibitor(
    exhibitor_id: uuid.UUID,
    body: Any = Body(default=None),
    user: User = Depends(get_current_user),
):
    """
    Update an exhibitor profile owned by the caller.

    Lookup and ownership run before the payload is validated, so a
    non-owner is refused with ACCESS_DENIED whatever the body contains.
    """
    x = await _get_exhibitor_or_404(exhibitor_id)
    ensure_owner(x.user_id, user)
    changes = parse_body(ExhibitorUpdateIn, {} if body is None else body).changes()
    if not changes:
        raise _no_update_fields()

    x.update_from_dict(changes)
    await x.save(update_fields=list(changes))
    return exhibitor_to_dict(x)

# ===== Virtual booths =====
@booths_router.post("", status_code=status.HTTP_201_CREATED)
async def create_booth(body: BoothCreateIn, user: User = Depends(get_current_user)):
    """
    Create the booth of an exhibitor owned by the caller (at most one per exhibitor).

    Error codes:
        - EXHIBITOR_NOT_FOUND (404)
        - ACCESS_DENIED (403): exhibitor belongs to someone else
        - BOOTH_EXISTS (400)
    """
    x = await _get_exhibitor_or_404(body.exhibitor_id)
    ensure_owner(x.user_id, user)
    exists_error = ApiError(status.HTTP_400_BAD_REQUEST, "Virtual booth already exists for this exhibitor", "BOOTH_EXISTS")
    if await VirtualBooth.filter(exhibitor_id=x.id).exists():
        raise exists_error
    try:
        b = await VirtualBooth.create(
            exhibitor_id=x.id,
            description=body.description,
            media_urls=body.media_urls,
            product_catalog=body.product_catalog,
        )
    except IntegrityError:
        raise exists_error
    logger.info("[booths] created booth_id=%s for exhibitor_id=%s", b.id, x.id)
    return booth_to_dict(b)

@booths_router.get("")
async def list_booths(
    exhibitor_id: uuid.UUID | None = Query(default=None),
    params: SearchParams = Depends(search_params(BOOTH_SORT_KEYS)),
):
    qs = VirtualBooth.all()
    if exhibitor_id:
        qs = qs.filter(exhibitor_id=exhibitor_id)
    rows = await apply_search(qs, params, BOOTH_SEARCH_FIELDS)
    return [booth_to_dict(b) for b in rows]

@booths_router.get("/{booth_id}")
async def get_booth(booth_id: uuid.UUID):
    return booth_to_dict(await _get_booth_or_404(booth_id))

@booths_router.patch("/{booth_id}")
async def update_booth(
    booth_id: uuid.UUID,
    body: Any = Body(default=None),
    user: User = Depends(get_current_user),
):
    """Update a booth; only the user behind its exhibitor may do so."""
    b = await _get_booth_or_404(booth_id)
    ensure_owner(b.exhibitor.user_id, user)
    changes = parse_body(BoothUpdateIn, {} if body is None else body).changes()
    if not changes:
        raise _no_update_fields()

    b.update_from_dict(changes)
    await b.save(update_fields=list(changes))
    return booth_to_dict(b)
