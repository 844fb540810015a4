"""WebSocket room manager.

Holds active connections per note and relays messages to the other members
of a room. Use via app.state.ws_manager (set in lifespan). Nothing is
persisted and no ordering is guaranteed beyond per-socket delivery order.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from fastapi import WebSocket

logger = logging.getLogger(__name__)


class NoteRoomManager:
    """Manages WebSocket connections grouped by note id.

    - A socket joins exactly one note room.
    - Broadcasts skip the sender and prune sockets that fail to send.
    - The registry is lock-protected; sends happen outside the lock.
    """

    def __init__(self) -> None:
        """Initialize with empty rooms."""
        self._rooms: dict[str, set[WebSocket]] = {}
        self._socket_to_note: dict[WebSocket, str] = {}
        self._lock = asyncio.Lock()

    async def join(self, websocket: WebSocket, note_id: str) -> None:
        """Register an accepted connection in the note's room.

        Args:
            websocket: Accepted WebSocket.
            note_id: Room key; the caller has already checked read access.
        """
        async with self._lock:
            self._rooms.setdefault(note_id, set()).add(websocket)
            self._socket_to_note[websocket] = note_id

    async def leave(self, websocket: WebSocket) -> str | None:
        """Remove a connection; returns the note id it was in."""
        async with self._lock:
            return self._remove_locked(websocket)

    def _remove_locked(self, websocket: WebSocket) -> str | None:
        note_id = self._socket_to_note.pop(websocket, None)
        if note_id and note_id in self._rooms:
            members = self._rooms[note_id]
            members.discard(websocket)
            if not members:
                del self._rooms[note_id]
        return note_id

    async def broadcast_to_note(
        self,
        note_id: str,
        message: dict[str, Any],
        exclude: WebSocket | None = None,
    ) -> int:
        """Send a JSON message to every member of the room except `exclude`.

        Returns:
            Number of sockets the message was delivered to.
        """
        async with self._lock:
            targets = [ws for ws in self._rooms.get(note_id, set()) if ws is not exclude]
        dead: list[WebSocket] = []
        delivered = 0
        for ws in targets:
            try:
                await ws.send_json(message)
                delivered += 1
            except Exception:
                logger.debug("Dropping dead socket in room %s", note_id)
                dead.append(ws)
        if dead:
            async with self._lock:
                for ws in dead:
                    self._remove_locked(ws)
        return delivered

    async def room_size(self, note_id: str) -> int:
        """Return the number of sockets in a room (lock-safe)."""
        async with self._lock:
            return len(self._rooms.get(note_id, set()))

    async def get_connection_count(self) -> int:
        """Return the total number of active connections (lock-safe)."""
        async with self._lock:
            return len(self._socket_to_note)
