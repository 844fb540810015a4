"""WebSocket room manager for the realtime note relay.

Used by the WebSocket endpoint to join rooms and relay messages.
"""

from app.api.websocket.manager import NoteRoomManager

__all__ = ["NoteRoomManager"]
