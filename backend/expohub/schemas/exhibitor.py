# expohub/schemas/exhibitor.py
"""
Pydantic schemas and serializers for exhibitors and virtual booths.
"""
import uuid
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from expohub.models.exhibitor import Exhibitor, VirtualBooth
from .common import iso, normalize_email

EXHIBITOR_SORT_KEYS = ("created_at", "name")
EXHIBITOR_SEARCH_FIELDS = ("name", "email", "company")
BOOTH_SORT_KEYS = ("description",)
BOOTH_SEARCH_FIELDS = ("description", "product_catalog")


class ExhibitorCreateIn(BaseModel):
    user_id: uuid.UUID
    name: str = Field(min_length=1, max_length=255)
    email: EmailStr
    company: Optional[str] = Field(default=None, max_length=255)

    @field_validator("email", mode="before")
    @classmethod
    def lower_email(cls, v):
        return normalize_email(v)


class ExhibitorUpdateIn(BaseModel):
    """`company` may be cleared with an explicit null; name/email may not."""
    model_config = ConfigDict(extra="ignore")

    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    email: Optional[EmailStr] = None
    company: Optional[str] = Field(default=None, max_length=255)

    @field_validator("email", mode="before")
    @classmethod
    def lower_email(cls, v):
        return normalize_email(v)

    def changes(self) -> dict:
        data = self.model_dump(exclude_unset=True)
        return {k: v for k, v in data.items() if v is not None or k == "company"}


class BoothCreateIn(BaseModel):
    exhibitor_id: uuid.UUID
    description: Optional[str] = None
    media_urls: Optional[str] = None
    product_catalog: Optional[str] = None


class BoothUpdateIn(BaseModel):
    """Every booth field is nullable, so explicit nulls are written through."""
    model_config = ConfigDict(extra="ignore")

    description: Optional[str] = None
    media_urls: Optional[str] = None
    product_catalog: Optional[str] = None

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True)


def exhibitor_to_dict(x: Exhibitor) -> dict:
    return {
        "exhibitor_id": str(x.id),
        "user_id": str(x.user_id),
        "name": x.name,
        "email": x.email,
        "company": x.company,
        "created_at": iso(x.created_at),
    }


def booth_to_dict(b: VirtualBooth) -> dict:
    return {
        "booth_id": str(b.id),
        "exhibitor_id": str(b.exhibitor_id),
        "description": b.description,
        "media_urls": b.media_urls,
        "product_catalog": b.product_catalog,
    }
