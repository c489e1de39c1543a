# expohub/services/mailer.py
"""
Outbound e-mail.
No provider is wired in yet: messages are logged and a provider-shaped
receipt is returned so callers do not change once one is.
"""
import datetime as dt
import logging
import uuid

logger = logging.getLogger("uvicorn.error")

async def send_password_recovery_email(email: str) -> dict:
    """
    Send a password recovery e-mail.

    Returns:
        dict: receipt with success, message_id, email and sent_at
    """
    message_id = str(uuid.uuid4())
    logger.info("[mailer] password recovery e-mail queued for %s (message_id=%s)", email, message_id)
    return {
        "success": True,
        "message_id": message_id,
        "email": email,
        "sent_at": dt.datetime.now(dt.timezone.utc).isoformat(),
    }
