# expohub/models/__init__.py
"""
Database models module initialization.
Exports all Tortoise ORM models for convenient imports throughout the application.

Models exported:
- User: account, credentials and role
- Expo, ExpoRegistration, EventSchedule: expo listings and attendance
- Exhibitor, VirtualBooth: exhibitor profiles and booth pages
- UserInteraction: user -> exhibitor actions
- Notification: per-user messages
- AdminActivityLog: admin audit trail
- Feedback: user feedback
"""
from .user import User
from .expo import Expo, ExpoRegistration, EventSchedule
from .exhibitor import Exhibitor, VirtualBooth
from .interaction import UserInteraction
from .notification import Notification
from .admin_log import AdminActivityLog
from .feedback import Feedback
