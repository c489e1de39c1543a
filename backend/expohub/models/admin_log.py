# expohub/models/admin_log.py
import uuid
from tortoise import fields, models

class AdminActivityLog(models.Model):
    id = fields.UUIDField(pk=True, default=uuid.uuid4)  # Exposed as log_id
    admin = fields.ForeignKeyField("models.User", related_name="activity_logs", on_delete=fields.CASCADE)
    activity_description = fields.TextField()
    timestamp = fields.DatetimeField(auto_now_add=True)

    class Meta:
        table = "admin_activity_logs"
