# expohub/models/interaction.py
import uuid
from tortoise import fields, models

class UserInteraction(models.Model):
    """Append-only log of a user's action towards an exhibitor (e.g. "chat")."""
    id = fields.UUIDField(pk=True, default=uuid.uuid4)  # Exposed as interaction_id
    user = fields.ForeignKeyField("models.User", related_name="interactions", on_delete=fields.CASCADE)
    exhibitor = fields.ForeignKeyField("models.Exhibitor", related_name="interactions", on_delete=fields.CASCADE)
    interaction_type = fields.CharField(max_length=64)
    created_at = fields.DatetimeField(auto_now_add=True)

    class Meta:
        table = "user_interactions"
