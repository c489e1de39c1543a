# expohub/models/user.py
"""
Database model for users.
Represents an account: credentials, profile and role.
"""
import uuid
from tortoise import fields, models

class User(models.Model):
    """
    User database model.

    Relationships:
    - Has at most one Exhibitor (via related_name="exhibitor")
    - Has many ExpoRegistrations, UserInteractions, Notifications and Feedback

    Security:
    - Password is stored as an argon2 hash, never as plain text
    - Email is unique and always stored lower-cased and trimmed
    - Role determines access to admin surfaces ("user" or "admin")
    """
    id = fields.UUIDField(pk=True, default=uuid.uuid4)  # Exposed as user_id
    email = fields.CharField(max_length=255, unique=True, index=True)
    name = fields.CharField(max_length=255)
    password_hash = fields.CharField(max_length=255)
    role = fields.CharField(max_length=16, default="user")
    created_at = fields.DatetimeField(auto_now_add=True)

    class Meta:
        """Tortoise ORM metadata configuration."""
        table = "users"

    @staticmethod
    def normalize_email(email: str) -> str:
        return (email or "").strip().lower()
