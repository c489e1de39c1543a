# expohub/core/__init__.py
"""
Core application modules.
Contains essential infrastructure components:
- bootstrap: default admin creation on first startup
- db: Tortoise configuration and connection management
- errors: error envelope and exception handlers
- pubsub: WebSocket room/broadcast channel
- security: password hashing and access tokens
"""
