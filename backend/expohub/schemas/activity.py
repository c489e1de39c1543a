# expohub/schemas/activity.py
"""
Pydantic schemas and serializers for the append-only entities:
user interactions, notifications, feedback and admin activity logs.
"""
import uuid

from pydantic import BaseModel, Field

from expohub.models.admin_log import AdminActivityLog
from expohub.models.feedback import Feedback
from expohub.models.interaction import UserInteraction
from expohub.models.notification import Notification
from .common import iso

INTERACTION_SORT_KEYS = ("created_at", "interaction_type")
INTERACTION_SEARCH_FIELDS = ("interaction_type",)
FEEDBACK_SORT_KEYS = ("submitted_at",)
FEEDBACK_SEARCH_FIELDS = ("feedback_content",)
ACTIVITY_LOG_SORT_KEYS = ("timestamp",)
ACTIVITY_LOG_SEARCH_FIELDS = ("activity_description",)


class InteractionCreateIn(BaseModel):
    user_id: uuid.UUID
    exhibitor_id: uuid.UUID
    interaction_type: str = Field(min_length=1, max_length=64)  # e.g. "chat", "visit"


class NotificationCreateIn(BaseModel):
    user_id: uuid.UUID  # Recipient
    message: str = Field(min_length=1)
    type: str = Field(min_length=1, max_length=64)


class FeedbackCreateIn(BaseModel):
    user_id: uuid.UUID
    feedback_content: str = Field(min_length=1)


class ActivityLogCreateIn(BaseModel):
    activity_description: str = Field(min_length=1)


def interaction_to_dict(i: UserInteraction) -> dict:
    return {
        "interaction_id": str(i.id),
        "user_id": str(i.user_id),
        "exhibitor_id": str(i.exhibitor_id),
        "interaction_type": i.interaction_type,
        "created_at": iso(i.created_at),
    }


def notification_to_dict(n: Notification) -> dict:
    return {
        "notification_id": str(n.id),
        "user_id": str(n.user_id),
        "message": n.message,
        "type": n.type,
        "created_at": iso(n.created_at),
    }


def feedback_to_dict(f: Feedback) -> dict:
    return {
        "feedback_id": str(f.id),
        "user_id": str(f.user_id),
        "feedback_content": f.feedback_content,
        "submitted_at": iso(f.submitted_at),
    }


def activity_log_to_dict(log: AdminActivityLog) -> dict:
    return {
        "log_id": str(log.id),
        "admin_id": str(log.admin_id),
        "activity_description": log.activity_description,
        "timestamp": iso(log.timestamp),
    }
