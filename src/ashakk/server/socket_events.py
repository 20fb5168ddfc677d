"""Socket.IO handlers: translate client events into engine operations.

Each handler returns its acknowledgement, {"success": bool, "error": ...},
and on success pushes the new state to the room. The socket id is the
player id.
"""

import functools

from flask import current_app, request
from flask_socketio import emit, join_room
from pydantic import ValidationError

from ashakk.engine import ActionResult, ErrorKind, GameRoom, RoomAlreadyExistsError
from ashakk.models import create_player
from ashakk.rooms import RoomRegistry
from ashakk.server import socketio
from ashakk.server.payloads import JoinPayload, NumberPayload, PlayPayload, RoomPayload


def _registry() -> RoomRegistry:
    return current_app.extensions["ashakk.rooms"]


def _fail(kind: ErrorKind) -> dict:
    return {"success": False, "error": kind.value}


def _parsed(model):
    """Validate the payload against model; malformed data is acked as InvalidPayload."""

    def decorator(handler):
        @functools.wraps(handler)
        def wrapper(data=None):
            try:
                payload = model.model_validate(data)
            except ValidationError as exc:
                current_app.logger.debug("sid=%s bad %s payload: %s", request.sid, handler.__name__, exc)
                return _fail(ErrorKind.INVALID_PAYLOAD)
            return handler(payload)

        return wrapper

    return decorator


def _push_state(room: GameRoom, result: ActionResult, started: bool = False) -> None:
    """Broadcast views and events after a successful operation.

    Callers hold the room lock so the views match the operation.
    """
    public = room.public_view()
    socketio.emit("game:started" if started else "game:update", public, to=room.room_id)
    for player in room.state.players:
        if player.sid:
            socketio.emit("game:stateUpdate", room.player_view(player.id), to=player.sid)
    for event in result.events:
        socketio.emit("game:event", event.to_payload(), to=room.room_id)
    if room.is_over:
        socketio.emit(
            "game:ended",
            {"leaderboard": list(room.state.leaderboard), "game_state": public},
            to=room.room_id,
        )


def _seated_room(room_id: str):
    """Look up a room the caller is seated in; returns (room, error)."""
    room = _registry().get_room(room_id)
    if room is None:
        return None, ErrorKind.ROOM_NOT_FOUND
    if not room.has_player(request.sid):
        return None, ErrorKind.NOT_IN_ROOM
    return room, None


def _run_turn(room_id: str, operation, **kwargs) -> dict:
    room, error = _seated_room(room_id)
    if error is not None:
        return _fail(error)
    with room.lock:
        result = getattr(room, operation)(request.sid, **kwargs)
        if result.success:
            _push_state(room, result)
    return result.to_ack()


# =============================================================================
# Lobby
# =============================================================================

def handle_connect(auth=None):
    current_app.logger.info("sid=%s connected", request.sid)


def handle_disconnect(reason=None):
    """Forget the socket; drop its room once nobody seated is connected."""
    sid = request.sid
    current_app.logger.info("sid=%s disconnected (%s)", sid, reason)
    registry = _registry()
    room = registry.get_player_room(sid)
    if room is None:
        return
    with room.lock:
        player = room.state.get_player(sid)
        if player is not None:
            player.sid = None
        abandoned = not any(p.sid for p in room.state.players)
    if abandoned:
        registry.delete_room(room.room_id)
        current_app.logger.info("room=%s abandoned", room.room_id)


@_parsed(JoinPayload)
def handle_room_create(payload: JoinPayload) -> dict:
    sid = request.sid
    registry = _registry()
    if registry.get_player_room(sid) is not None:
        return _fail(ErrorKind.ALREADY_IN_ROOM)

    player = create_player(sid, payload.player_name, sid=sid)
    try:
        room = registry.create_room(payload.room_id, [player], sid)
    except RoomAlreadyExistsError as exc:
        return _fail(exc.kind)

    join_room(room.room_id)
    emit("room:created", {"room_id": room.room_id, "game_state": room.player_view(sid)})
    return {"success": True, "room_id": room.room_id}


@_parsed(JoinPayload)
def handle_room_join(payload: JoinPayload) -> dict:
    sid = request.sid
    registry = _registry()
    if registry.get_player_room(sid) is not None:
        return _fail(ErrorKind.ALREADY_IN_ROOM)

    result, room = registry.join_room(payload.room_id, create_player(sid, payload.player_name, sid=sid))
    if not result.success:
        return result.to_ack()

    join_room(room.room_id)
    with room.lock:
        emit("room:joined", {"room_id": room.room_id, "game_state": room.player_view(sid)})
        socketio.emit("game:update", room.public_view(), to=room.room_id)
    return {"success": True, "room_id": room.room_id}


@_parsed(RoomPayload)
def handle_game_start(payload: RoomPayload) -> dict:
    room = _registry().get_room(payload.room_id)
    if room is None:
        return _fail(ErrorKind.ROOM_NOT_FOUND)
    with room.lock:
        result = room.start_game(request.sid)
        if result.success:
            _push_state(room, result, started=True)
    return result.to_ack()


@_parsed(RoomPayload)
def handle_get_state(payload: RoomPayload) -> dict:
    room, error = _seated_room(payload.room_id)
    if error is not None:
        return _fail(error)
    return {"success": True, "game_state": room.player_view(request.sid)}


# =============================================================================
# Turns
# =============================================================================

@_parsed(NumberPayload)
def handle_submit_starter(payload: NumberPayload) -> dict:
    return _run_turn(payload.room_id, "submit_starter", number_choice=payload.number_choice)


@_parsed(PlayPayload)
def handle_play(payload: PlayPayload) -> dict:
    return _run_turn(payload.room_id, "submit_tiles", tiles=payload.tiles)


@_parsed(RoomPayload)
def handle_no_tile(payload: RoomPayload) -> dict:
    return _run_turn(payload.room_id, "submit_no_tile")


@_parsed(RoomPayload)
def handle_accept(payload: RoomPayload) -> dict:
    return _run_turn(payload.room_id, "accept_submission")


@_parsed(NumberPayload)
def handle_choose_number(payload: NumberPayload) -> dict:
    return _run_turn(payload.room_id, "choose_number", number_choice=payload.number_choice)


@_parsed(RoomPayload)
def handle_doubt(payload: RoomPayload) -> dict:
    room, error = _seated_room(payload.room_id)
    if error is not None:
        return _fail(error)
    with room.lock:
        result = room.doubt_submission(request.sid)
        if result.success:
            socketio.emit(
                "game:doubtResolved",
                {
                    "success": True,
                    "penalty": result.penalty.value,
                    "game_state": room.public_view(),
                },
                to=room.room_id,
            )
            _push_state(room, result)
    return result.to_ack()


HANDLERS = {
    "connect": handle_connect,
    "disconnect": handle_disconnect,
    "room:create": handle_room_create,
    "room:join": handle_room_join,
    "room:getState": handle_get_state,
    "game:start": handle_game_start,
    "turn:submitStarter": handle_submit_starter,
    "turn:play": handle_play,
    "turn:noTile": handle_no_tile,
    "turn:accept": handle_accept,
    "turn:doubt": handle_doubt,
    "turn:chooseNumber": handle_choose_number,
}


def register_socketio_handlers() -> None:
    """Bind every handler on the default namespace."""
    for event, handler in HANDLERS.items():
        socketio.on_event(event, handler)
