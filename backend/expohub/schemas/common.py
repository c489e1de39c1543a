# expohub/schemas/common.py
"""
Shared schema helpers: timestamp normalization and search parameters.
"""
import datetime as dt
from typing import Literal, Optional

from pydantic import BaseModel, Field


def to_utc(value: dt.datetime) -> dt.datetime:
    """Normalize a datetime to aware UTC (naive values are taken as UTC)."""
    if value.tzinfo is None:
        return value.replace(tzinfo=dt.timezone.utc)
    return value.astimezone(dt.timezone.utc)


def iso(value: Optional[dt.datetime]) -> Optional[str]:
    """Render a stored timestamp as ISO-8601 UTC with a Z suffix."""
    if value is None:
        return None
    return to_utc(value).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def normalize_email(value):
    if isinstance(value, str):
        return value.strip().lower()
    return value


class SearchParams(BaseModel):
    """
    Query parameters shared by every list endpoint.
    `sort_by` is checked against the entity's whitelist before it gets here.
    """
    query: Optional[str] = None
    limit: int = Field(10, ge=1, le=100)
    offset: int = Field(0, ge=0)
    sort_by: str
    sort_order: Literal["asc", "desc"] = "desc"
