# expohub/schemas/user.py
"""
Pydantic schemas and serializers for user profiles.
"""
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from expohub.models.user import User
from .common import iso, normalize_email

USER_SORT_KEYS = ("created_at", "name")
USER_SEARCH_FIELDS = ("name", "email")

class UserUpdateIn(BaseModel):
    """
    Request model for profile updates.
    All fields are optional; only provided fields are written.
    """
    model_config = ConfigDict(extra="ignore")

    email: Optional[EmailStr] = None
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    password: Optional[str] = Field(default=None, min_length=8, max_length=255)

    @field_validator("email", mode="before")
    @classmethod
    def lower_email(cls, v):
        return normalize_email(v)

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, v):
        return v.strip() if isinstance(v, str) else v

def user_to_dict(u: User) -> dict:
    """Public profile of a user (never includes the password hash)."""
    return {
        "user_id": str(u.id),
        "email": u.email,
        "name": u.name,
        "role": u.role,
        "created_at": iso(u.created_at),
    }

def user_event(u: User) -> dict:
    """Payload of user/registered and user/profileUpdated."""
    return {"user_id": str(u.id), "email": u.email, "name": u.name}
