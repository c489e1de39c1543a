# expohub/services/notifications.py
"""
Notification creation + targeted fan-out.
Used by the REST handlers (registration side effect, POST /notifications)
and by the `notification/create` socket event.
"""
from fastapi import status

from expohub.core.errors import ApiError
from expohub.core.pubsub import channel, user_room
from expohub.models.notification import Notification
from expohub.models.user import User
from expohub.schemas.activity import NotificationCreateIn, notification_to_dict

REGISTRATION_MESSAGE = "Your expo registration was successful!"

async def push_notification(n: Notification) -> None:
    """Send a stored notification to the recipient's room only."""
    await channel.emit_to(user_room(n.user_id), "notification/created", notification_to_dict(n))

async def notify(user_id, message: str, type: str) -> Notification:
    """
    Store a notification and push it to the recipient's room.
    The push happens after the insert and does not undo it on failure.
    """
    n = await Notification.create(user_id=user_id, message=message, type=type)
    await push_notification(n)
    return n

async def send_notification(body: NotificationCreateIn) -> Notification:
    """
    Notify an arbitrary recipient (REST `POST /notifications` and the
    `notification/create` socket event).

    Raises:
        ApiError (404): recipient does not exist (USER_NOT_FOUND)
    """
    if not await User.filter(id=body.user_id).exists():
        raise ApiError(status.HTTP_404_NOT_FOUND, "User not found", "USER_NOT_FOUND")
    return await notify(body.user_id, body.message, body.type)
