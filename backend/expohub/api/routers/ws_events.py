# expohub/api/routers/ws_events.py
import json
import logging

from fastapi import APIRouter, WebSocket, status
from starlette.websockets import WebSocketDisconnect

from expohub.api.deps import bearer_token, resolve_user
from expohub.core.errors import ApiError, parse_body
from expohub.core.pubsub import channel, user_room
from expohub.models.user import User
from expohub.schemas.activity import InteractionCreateIn, NotificationCreateIn
from expohub.services import record_interaction, send_notification

logger = logging.getLogger("uvicorn.error")

router = APIRouter()

async def _send(ws: WebSocket, event: str, data: dict):
    await ws.send_text(json.dumps({"event": event, "data": data}, default=str))

async def _on_interaction(user: User, data) -> tuple[str, dict]:
    body = parse_body(InteractionCreateIn, data)
    interaction = await record_interaction(user, body)
    return "interaction/acknowledged", {"interaction_id": str(interaction.id)}

async def _on_notification(user: User, data) -> tuple[str, dict]:
    body = parse_body(NotificationCreateIn, data)
    n = await send_notification(body)
    return "notification/acknowledged", {"notification_id": str(n.id)}

HANDLERS = {
    "exhibitor/interaction": _on_interaction,
    "notification/create": _on_notification,
}

@router.websocket("/ws")
async def ws_events(ws: WebSocket):
    """
    Real-time event channel.

    Handshake:
        Token comes from `?token=<jwt>` or an `Authorization: Bearer` header and is
        verified once. On failure the socket is closed with 1008 before accept.

    Frames (both directions):
        {"event": "<name>", "data": {...}}

    After accept the socket joins room `user:<id>` and receives every broadcast.
    Client events:
        exhibitor/interaction -> interaction/acknowledged {interaction_id}
        notification/create   -> notification/acknowledged {notification_id}
    Anything that fails answers with `error {message}`; the socket stays open.
    """
    token = ws.query_params.get("token") or bearer_token(ws.headers.get("authorization"))
    try:
        user = await resolve_user(token)
    except ApiError as e:
        logger.info("[ws] handshake rejected: %s", e.error_code)
        await ws.close(code=status.WS_1008_POLICY_VIOLATION)
        return

    await ws.accept()
    channel.connect(ws, user_room(user.id))
    logger.info("[ws] connected user_id=%s (connections=%d)", user.id, channel.connection_count)
    try:
        while True:
            raw = await ws.receive_text()
            try:
                msg = json.loads(raw)
                if not isinstance(msg, dict):
                    raise ValueError("frame is not an object")
            except ValueError:
                await _send(ws, "error", {"message": "Malformed message"})
                continue

            handler = HANDLERS.get(msg.get("event"))
            if handler is None:
                await _send(ws, "error", {"message": f"Unknown event: {msg.get('event')}"})
                continue

            try:
                event, data = await handler(user, msg.get("data") or {})
            except ApiError as e:
                await _send(ws, "error", {"message": e.message, "error_code": e.error_code})
                continue
            except Exception:
                logger.exception("[ws] %s failed for user_id=%s", msg.get("event"), user.id)
                await _send(ws, "error", {"message": "Internal server error"})
                continue
            await _send(ws, event, data)
    except WebSocketDisconnect:
        logger.info("[ws] disconnected user_id=%s", user.id)
    finally:
        channel.disconnect(ws)
