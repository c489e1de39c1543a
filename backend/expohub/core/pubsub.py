# expohub/core/pubsub.py
"""
PubSub module for real-time event fan-out over WebSocket connections.

Writes that other clients care about are re-emitted here with the same payload
that went to the database. Delivery is fire-and-forget: no acknowledgement
tracking, no retry, no replay for clients that connect later.
"""
import json
import logging
from typing import Dict, Set

from starlette.websockets import WebSocket

logger = logging.getLogger("uvicorn.error")


def user_room(user_id) -> str:
    """Name of the per-user room a connection joins after its handshake."""
    return f"user:{user_id}"


class Channel:
    """
    Room-based broadcast channel.

    Architecture:
    - The router authenticates and accepts the socket; this module only routes messages
    - `broadcast` reaches every connected socket
    - `emit_to` reaches the sockets that joined one room (e.g. "user:<id>")
    - A socket whose send fails is dropped from every room

    Data structure:
    - _connections: all live sockets
    - _rooms: Dict[room_name, Set[WebSocket]]
    """
    def __init__(self):
        self._connections: Set[WebSocket] = set()
        self._rooms: Dict[str, Set[WebSocket]] = {}

    # -------- membership --------
    def connect(self, ws: WebSocket, *rooms: str):
        """Register an accepted socket and join it to the given rooms."""
        self._connections.add(ws)
        for room in rooms:
            self._rooms.setdefault(room, set()).add(ws)

    def disconnect(self, ws: WebSocket):
        """Forget a socket and remove it from every room it joined."""
        self._connections.discard(ws)
        for room in list(self._rooms):
            members = self._rooms[room]
            members.discard(ws)
            if not members:
                del self._rooms[room]

    def members(self, room: str) -> Set[WebSocket]:
        return set(self._rooms.get(room, set()))

    @property
    def connection_count(self) -> int:
        return len(self._connections)

    # -------- publish --------
    async def broadcast(self, event: str, payload: dict):
        """Send an event to every connected socket."""
        await self._send(list(self._connections), event, payload)

    async def emit_to(self, room: str, event: str, payload: dict):
        """Send an event only to the sockets in one room."""
        await self._send(list(self._rooms.get(room, set())), event, payload)

    async def _send(self, conns: list, event: str, payload: dict):
        msg = json.dumps({"event": event, "data": payload}, default=str)
        for s in conns:
            try:
                await s.send_text(msg)
            except Exception as exc:
                # Connection already gone; the client can resync over REST
                logger.info("[pubsub] dropping socket after failed send of %s: %r", event, exc)
                self.disconnect(s)

# Global channel instance
# Import this instance in other modules to publish events
channel = Channel()
