# expohub/core/bootstrap.py
"""
Bootstrap module for application initialization.
Handles initial setup tasks such as creating default admin user on first startup.
"""
import logging

from expohub.config import settings
from expohub.core.security import hash_password
from expohub.models.user import User

logger = logging.getLogger("uvicorn.error")

async def ensure_default_admin() -> User | None:
    """
    If no admin exists in the database, create a default admin from settings.
    Only takes effect under the following conditions:
      - Currently no user with role="admin"
      - And ADMIN_PASSWORD is set (no default password is ever used)
    Settings:
      ADMIN_EMAIL    (default: "admin@example.com")
      ADMIN_NAME     (default: "Administrator")
      ADMIN_PASSWORD (required, otherwise won't create)
    """
    if await User.filter(role="admin").exists():
        return None

    if not settings.admin_password:
        logger.warning("[bootstrap] No admin present, but ADMIN_PASSWORD not set -> skip creating default admin.")
        return None

    email = User.normalize_email(settings.admin_email)
    existing = await User.get_or_none(email=email)
    if existing:
        logger.warning("[bootstrap] ADMIN_EMAIL %s belongs to a regular account -> skip creating default admin.", email)
        return None

    u = await User.create(
        email=email,
        name=settings.admin_name,
        password_hash=hash_password(settings.admin_password),
        role="admin",
    )
    logger.warning("[bootstrap] Created default admin -> email=%s id=%s", u.email, u.id)
    return u
