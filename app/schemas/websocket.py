"""WebSocket relay message schemas."""

from typing import Any, Literal

from pydantic import BaseModel, Field


class RelayInbound(BaseModel):
    """Message a client sends on /ws/notes/{id}."""

    type: Literal["note-update", "cursor-move"]
    data: dict[str, Any] = Field(default_factory=dict)


class RelayOutbound(BaseModel):
    """Message relayed to the other members of a note room."""

    type: Literal["note-updated", "cursor-moved", "joined", "left"]
    note_id: str
    account_id: str
    data: dict[str, Any] = Field(default_factory=dict)
