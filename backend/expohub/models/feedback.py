# expohub/models/feedback.py
import uuid
from tortoise import fields, models

class Feedback(models.Model):
    id = fields.UUIDField(pk=True, default=uuid.uuid4)  # Exposed as feedback_id
    user = fields.ForeignKeyField("models.User", related_name="feedbacks", on_delete=fields.CASCADE)
    feedback_content = fields.TextField()
    submitted_at = fields.DatetimeField(auto_now_add=True)

    class Meta:
        table = "feedbacks"
