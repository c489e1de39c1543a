# expohub/models/exhibitor.py
"""
Database models for exhibitors and their virtual booths.
Ownership chain: VirtualBooth -> Exhibitor -> User.
"""
import uuid
from tortoise import fields, models

class Exhibitor(models.Model):
    """
    Organization profile presenting at expos.
    Owned by exactly one user; a user owns at most one exhibitor.
    """
    id = fields.UUIDField(pk=True, default=uuid.uuid4)  # Exposed as exhibitor_id
    user = fields.OneToOneField("models.User", related_name="exhibitor", on_delete=fields.CASCADE)
    name = fields.CharField(max_length=255)
    email = fields.CharField(max_length=255)
    company = fields.CharField(max_length=255, null=True)
    created_at = fields.DatetimeField(auto_now_add=True)

    class Meta:
        table = "exhibitors"


class VirtualBooth(models.Model):
    """
    The single content page of an exhibitor (media, catalog, description).
    """
    id = fields.UUIDField(pk=True, default=uuid.uuid4)  # Exposed as booth_id
    exhibitor = fields.OneToOneField("models.Exhibitor", related_name="booth", on_delete=fields.CASCADE)
    description = fields.TextField(null=True)
    media_urls = fields.TextField(null=True)
    product_catalog = fields.TextField(null=True)

    class Meta:
        table = "virtual_booths"
