# expohub/models/notification.py
import uuid
from tortoise import fields, models

class Notification(models.Model):
    """Immutable per-user message, read newest first."""
    id = fields.UUIDField(pk=True, default=uuid.uuid4)  # Exposed as notification_id
    user = fields.ForeignKeyField("models.User", related_name="notifications", on_delete=fields.CASCADE)
    message = fields.TextField()
    type = fields.CharField(max_length=64)
    created_at = fields.DatetimeField(auto_now_add=True, index=True)

    class Meta:
        table = "notifications"
