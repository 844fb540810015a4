"""WebSocket relay: /ws/notes/{note_id} joins the note's room.

Uses the NoteRoomManager on app.state.ws_manager (set in lifespan). The
Firebase ID token comes as query param ?token=...; the caller needs read
access to the note before the socket is registered. Edits and cursor
moves are relayed to the other members of the room as-is.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect
from pydantic import ValidationError

from app.api.v1.dependencies import (
    get_access_resolver,
    get_account_service,
    get_credential_verifier,
)
from app.application.interfaces.services import ICredentialVerifier
from app.application.services.access_service import NoteAccessResolver
from app.application.services.account_service import AccountService
from app.domain.exceptions import AuthenticationException
from app.schemas.websocket import RelayInbound, RelayOutbound
from app.shared.context import set_current_account

router = APIRouter()

_RELAYED_TYPES = {
    "note-update": "note-updated",
    "cursor-move": "cursor-moved",
}


async def _reject_websocket(websocket: WebSocket, reason: str, code: int = 1008) -> None:
    """Accept then immediately close with code/reason so client gets a proper close frame."""
    await websocket.accept()
    await websocket.close(code=code, reason=reason)


@router.websocket("/notes/{note_id}")
async def note_relay(
    websocket: WebSocket,
    note_id: str,
    verifier: Annotated[ICredentialVerifier, Depends(get_credential_verifier)],
    access: Annotated[NoteAccessResolver, Depends(get_access_resolver)],
    account_service: Annotated[AccountService, Depends(get_account_service)],
):
    """Verify the token and read access, then relay room messages until disconnect."""
    manager = websocket.app.state.ws_manager
    token = websocket.query_params.get("token")
    if not token:
        await _reject_websocket(websocket, "Missing token")
        return
    try:
        identity = await verifier.verify(token)
    except AuthenticationException:
        await _reject_websocket(websocket, "Invalid token")
        return
    account_id = identity.subject_id
    set_current_account(account_id)
    await account_service.ensure_provisioned(identity)
    if await access.get_effective(note_id, account_id) is None:
        await _reject_websocket(websocket, "Note not found")
        return

    await websocket.accept()
    await manager.join(websocket, note_id)
    await manager.broadcast_to_note(
        note_id,
        RelayOutbound(type="joined", note_id=note_id, account_id=account_id).model_dump(),
        exclude=websocket,
    )
    try:
        while True:
            raw = await websocket.receive_text()
            try:
                inbound = RelayInbound.model_validate_json(raw)
            except ValidationError:
                await websocket.send_json({"type": "error", "message": "Unsupported message"})
                continue
            outbound = RelayOutbound(
                type=_RELAYED_TYPES[inbound.type],
                note_id=note_id,
                account_id=account_id,
                data=inbound.data,
            )
            await manager.broadcast_to_note(note_id, outbound.model_dump(), exclude=websocket)
    except WebSocketDisconnect:
        pass
    finally:
        await manager.leave(websocket)
        await manager.broadcast_to_note(
            note_id,
            RelayOutbound(type="left", note_id=note_id, account_id=account_id).model_dump(),
        )
