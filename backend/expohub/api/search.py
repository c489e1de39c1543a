# expohub/api/search.py
from typing import Iterable

from tortoise.expressions import Q
from tortoise.queryset import QuerySet

from expohub.schemas.common import SearchParams


def apply_search(qs: QuerySet, params: SearchParams, text_fields: Iterable[str] = ()) -> QuerySet:
    """
    Apply the shared list pattern to a queryset:
    substring filter over `text_fields` (ORed, case-insensitive), whitelisted
    ordering, then offset/limit.
    """
    fields = tuple(text_fields)
    if params.query and fields:
        qs = qs.filter(Q(*[Q(**{f"{name}__icontains": params.query}) for name in fields], join_type="OR"))

    prefix = "-" if params.sort_order == "desc" else ""
    # id as tie-breaker keeps paging stable when sort values collide
    return qs.order_by(f"{prefix}{params.sort_by}", f"{prefix}id").offset(params.offset).limit(params.limit)
