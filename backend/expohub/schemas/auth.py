# expohub/schemas/auth.py
"""
Pydantic schemas for authentication endpoints.
"""
from typing import Optional

from pydantic import BaseModel, EmailStr, Field, field_validator

from .common import normalize_email

class RegisterIn(BaseModel):
    """
    Request model for account registration.
    Email is lower-cased and trimmed before validation; name is trimmed.
    """
    email: EmailStr
    name: str = Field(min_length=1, max_length=255)
    password: str = Field(min_length=8, max_length=255)  # Hashed server-side

    @field_validator("email", mode="before")
    @classmethod
    def lower_email(cls, v):
        return normalize_email(v)

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, v):
        return v.strip() if isinstance(v, str) else v

class LoginIn(BaseModel):
    """
    Request model for login.
    Both fields are optional here so that a missing field becomes
    MISSING_REQUIRED_FIELDS instead of a generic validation error.
    """
    email: Optional[str] = None
    password: Optional[str] = None

class RecoverPasswordIn(BaseModel):
    email: Optional[str] = None

class TokenOut(BaseModel):
    auth_token: str
