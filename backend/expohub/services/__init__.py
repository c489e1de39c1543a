"""
Services Module

Write paths shared by the REST routers and the WebSocket endpoint:
- notifications: store a notification and push it to the recipient
- interactions: record a user -> exhibitor interaction and broadcast it
- mailer: outbound e-mail (password recovery)
"""
from .notifications import notify, push_notification, send_notification
from .interactions import record_interaction
from .mailer import send_password_recovery_email

__all__ = [
    "notify",
    "push_notification",
    "send_notification",
    "record_interaction",
    "send_password_recovery_email",
]
