# expohub/services/interactions.py
"""
Recording of user -> exhibitor interactions.
Shared by POST /user-interactions and the `exhibitor/interaction` socket event.
"""
from fastapi import status

from expohub.api.deps import ensure_owner
from expohub.core.errors import ApiError
from expohub.core.pubsub import channel
from expohub.models.exhibitor import Exhibitor
from expohub.models.interaction import UserInteraction
from expohub.models.user import User
from expohub.schemas.activity import InteractionCreateIn, interaction_to_dict

async def record_interaction(user: User, body: InteractionCreateIn) -> UserInteraction:
    """
    Append an interaction for the calling user and broadcast it.

    Raises:
        ApiError (403): body.user_id is not the caller (ACCESS_DENIED)
        ApiError (404): exhibitor does not exist (EXHIBITOR_NOT_FOUND)
    """
    ensure_owner(body.user_id, user)
    if not await Exhibitor.filter(id=body.exhibitor_id).exists():
        raise ApiError(status.HTTP_404_NOT_FOUND, "Exhibitor not found", "EXHIBITOR_NOT_FOUND")

    interaction = await UserInteraction.create(
        user_id=user.id,
        exhibitor_id=body.exhibitor_id,
        interaction_type=body.interaction_type,
    )
    await channel.broadcast("exhibitor/interaction", interaction_to_dict(interaction))
    return interaction
