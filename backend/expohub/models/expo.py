# expohub/models/expo.py
"""
Database models for expos, attendance registrations and event schedules.
"""
import uuid
from tortoise import fields, models

class Expo(models.Model):
    """
    A scheduled virtual expo.
    `featured` curates the landing page; `date` is a UTC timestamp.
    """
    id = fields.UUIDField(pk=True, default=uuid.uuid4)  # Exposed as expo_id
    title = fields.CharField(max_length=255)
    description = fields.TextField()
    date = fields.DatetimeField(index=True)
    category = fields.CharField(max_length=255)
    location = fields.CharField(max_length=255)
    featured = fields.BooleanField(default=False)

    class Meta:
        table = "expos"


class ExpoRegistration(models.Model):
    """
    A user's intent to attend an expo.
    At most one row per (user, expo); the handler checks before inserting.
    """
    id = fields.UUIDField(pk=True, default=uuid.uuid4)  # Exposed as registration_id
    user = fields.ForeignKeyField("models.User", related_name="registrations", on_delete=fields.CASCADE)
    expo = fields.ForeignKeyField("models.Expo", related_name="registrations", on_delete=fields.CASCADE)
    registered_at = fields.DatetimeField(auto_now_add=True)

    class Meta:
        table = "expo_registrations"
        unique_together = (("user", "expo"),)


class EventSchedule(models.Model):
    id = fields.UUIDField(pk=True, default=uuid.uuid4)  # Exposed as schedule_id
    expo = fields.ForeignKeyField("models.Expo", related_name="schedules", on_delete=fields.CASCADE)
    event_name = fields.CharField(max_length=255)
    event_time = fields.DatetimeField()
    speaker_info = fields.TextField(null=True)

    class Meta:
        table = "event_schedules"
