# expohub/api/routers/activity.py
import uuid

from fastapi import APIRouter, Depends, status

from expohub.api.deps import ensure_owner, get_current_user, require_admin, search_params
from expohub.api.search import apply_search
from expohub.models.feedback import Feedback
from expohub.models.interaction import UserInteraction
from expohub.models.notification import Notification
from expohub.models.user import User
from expohub.schemas.activity import (
    FEEDBACK_SEARCH_FIELDS,
    FEEDBACK_SORT_KEYS,
    INTERACTION_SEARCH_FIELDS,
    INTERACTION_SORT_KEYS,
    FeedbackCreateIn,
    InteractionCreateIn,
    NotificationCreateIn,
    feedback_to_dict,
    interaction_to_dict,
    notification_to_dict,
)
from expohub.schemas.common import SearchParams
from expohub.services import record_interaction, send_notification

interactions_router = APIRouter(prefix="/user-interactions", tags=["activity"])
notifications_router = APIRouter(prefix="/notifications", tags=["activity"])
feedback_router = APIRouter(prefix="/feedbacks", tags=["activity"])

# ===== Interactions =====
@interactions_router.post("", status_code=status.HTTP_201_CREATED)
async def create_interaction(body: InteractionCreateIn, user: User = Depends(get_current_user)):
    """REST twin of the `exhibitor/interaction` socket event."""
    interaction = await record_interaction(user, body)
    return interaction_to_dict(interaction)

@interactions_router.get("")
async def list_my_interactions(
    params: SearchParams = Depends(search_params(INTERACTION_SORT_KEYS)),
    user: User = Depends(get_current_user),
):
    rows = await apply_search(UserInteraction.filter(user_id=user.id), params, INTERACTION_SEARCH_FIELDS)
    return [interaction_to_dict(i) for i in rows]

# ===== Notifications =====
@notifications_router.get("/{user_id}")
async def list_notifications(user_id: uuid.UUID, user: User = Depends(get_current_user)):
    """
    All notifications of the caller, newest first.

    Raises:
        ApiError (403): user_id is not the caller (ACCESS_DENIED)
    """
    ensure_owner(user_id, user)
    rows = await Notification.filter(user_id=user.id).order_by("-created_at", "-id")
    return [notification_to_dict(n) for n in rows]

@notifications_router.post("", status_code=status.HTTP_201_CREATED)
async def create_notification(body: NotificationCreateIn, _: User = Depends(get_current_user)):
    """
    Send a notification to any user; pushed to the recipient's room only.
    REST twin of the `notification/create` socket event.
    """
    n = await send_notification(body)
    return notification_to_dict(n)

# ===== Feedback =====
@feedback_router.post("", status_code=status.HTTP_201_CREATED)
async def submit_feedback(body: FeedbackCreateIn, user: User = Depends(get_current_user)):
    ensure_owner(body.user_id, user)
    f = await Feedback.create(user_id=user.id, feedback_content=body.feedback_content)
    return feedback_to_dict(f)

@feedback_router.get("")
async def list_feedback(
    params: SearchParams = Depends(search_params(FEEDBACK_SORT_KEYS)),
    _: User = Depends(require_admin),
):
    """Feedback review (admin only)."""
    rows = await apply_search(Feedback.all(), params, FEEDBACK_SEARCH_FIELDS)
    return [feedback_to_dict(f) for f in rows]
