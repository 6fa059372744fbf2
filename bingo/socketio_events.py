from flask import current_app, request
from flask_socketio import close_room, emit, join_room, leave_room

from bingo import socketio
from bingo.errors import RoomError, RoomNotFound
from bingo.models import ClaimResult, Room
from bingo.services.bingo.board import CELL_COUNT
from bingo.services.bingo.registry import RoomRegistry
from bingo.services.bingo.scheduler import OpponentScheduler


def _get_sid() -> str:
    # type: ignore: request.sid exists in Socket.IO context
    return request.sid  # type: ignore


def _registry() -> RoomRegistry:
    return current_app.extensions['bingo_rooms']


def _scheduler() -> OpponentScheduler:
    return current_app.extensions['bingo_opponent']


def _channel(room_code: str) -> str:
    return f"room:{room_code}"


def _fail(reason: str, message: str) -> None:
    emit('error', {'reason': reason, 'message': message})


def _room_code(data):
    if isinstance(data, str):
        code = data
    elif isinstance(data, dict):
        code = data.get('room_code')
    else:
        code = None
    return code.strip().upper() if isinstance(code, str) and code.strip() else None


def _parse_number(value):
    if isinstance(value, bool):
        return None
    try:
        number = int(value)
    except (TypeError, ValueError):
        return None
    if not 1 <= number <= CELL_COUNT:
        return None
    return number


def broadcast_result(room: Room, result: ClaimResult, namespace=None) -> None:
    """Send a claim outcome to everyone in the room."""
    event = 'game_over' if result.game_over else 'game_update'
    socketio.emit(event, result.to_dict(), to=_channel(room.code), namespace=namespace or '/ws')


def handle_connect():
    emit('connected', {'sid': _get_sid()})


def handle_disconnect(reason=None):
    sid = _get_sid()
    departures = _registry().disconnect(sid)
    for departure in departures:
        channel = _channel(departure.room.code)
        if departure.notify:
            socketio.emit('player_disconnected', {}, to=channel, namespace=request.namespace, skip_sid=sid)
        close_room(channel, namespace=request.namespace)
    current_app.logger.info(f"[disconnect] sid={sid} rooms_closed={[d.room.code for d in departures]}")


def handle_create_room(data=None):
    vs_computer = bool(data.get('vs_computer')) if isinstance(data, dict) else False
    sid = _get_sid()
    room = _registry().create_room(sid, vs_computer=vs_computer)
    join_room(_channel(room.code))
    emit('room_created', {
        'room_code': room.code,
        'board': room.board_for(sid),
        'player_number': room.player_number(sid),
    })
    # Games against the computer start immediately
    if room.vs_computer:
        emit('game_start', room.start_payload())
    current_app.logger.info(f"[room-create] room={room.code} sid={sid} vs_computer={vs_computer}")


def handle_join_room(data=None):
    # Older clients send the bare room code
    room_code = _room_code(data)
    if not room_code:
        _fail('invalid_payload', 'room_code is required')
        return
    sid = _get_sid()
    try:
        room = _registry().join_room(room_code, sid)
    except RoomError as exc:
        current_app.logger.info(f"[room-join-fail] room={room_code} sid={sid} reason={exc.reason}")
        emit('error', exc.to_dict())
        return
    channel = _channel(room.code)
    join_room(channel)
    emit('room_joined', {
        'room_code': room.code,
        'board': room.board_for(sid),
        'player_number': room.player_number(sid),
    })
    emit('game_start', room.start_payload(), to=channel)
    current_app.logger.info(f"[room-join] room={room.code} sid={sid}")


def handle_select_number(data=None):
    room_code = _room_code(data)
    number = _parse_number(data.get('number') if isinstance(data, dict) else None)
    if not room_code:
        _fail('invalid_payload', 'room_code is required')
        return
    if number is None:
        _fail('invalid_payload', f'number must be an integer between 1 and {CELL_COUNT}')
        return
    sid = _get_sid()
    registry = _registry()
    try:
        result = registry.claim(room_code, sid, number)
    except RoomError as exc:
        current_app.logger.info(f"[claim-fail] room={room_code} sid={sid} number={number} reason={exc.reason}")
        emit('error', exc.to_dict())
        return
    room = registry.find(room_code)
    current_app.logger.info(
        f"[claim] room={result.room_code} sid={sid} number={number} game_over={result.game_over}"
    )
    if room is None:
        return
    broadcast_result(room, result, namespace=request.namespace)
    _scheduler().schedule_if_needed(room, namespace=request.namespace)


def handle_leave_room(data=None):
    room_code = _room_code(data)
    if not room_code:
        _fail('invalid_payload', 'room_code is required')
        return
    sid = _get_sid()
    departure = _registry().leave(room_code, sid)
    if departure is None:
        emit('error', RoomNotFound().to_dict())
        return
    channel = _channel(departure.room.code)
    leave_room(channel)
    emit('left', {'room_code': departure.room.code})
    if departure.notify:
        emit('player_disconnected', {}, to=channel)
    close_room(channel)
    current_app.logger.info(f"[room-leave] room={departure.room.code} sid={sid}")


def _start_background_move(fn, *args):
    return socketio.start_background_task(fn, *args)


def _run_inline(fn, *args):
    return fn(*args)


def register_socketio_handlers(flask_app, testing: bool = False) -> None:
    """Register Socket.IO event handlers and the opponent scheduler.

    Always register on namespace '/ws'. When testing is True, also mirror
    handlers on the default namespace '/' and play opponent moves inline.
    """
    flask_app.extensions['bingo_opponent'] = OpponentScheduler(
        flask_app.extensions['bingo_rooms'],
        spawn=_run_inline if testing else _start_background_move,
        sleep=socketio.sleep,
        delay=float(flask_app.config.get('OPPONENT_DELAY_SEC', 1.0)),
        on_result=broadcast_result,
    )

    namespaces = ['/ws', '/'] if testing else ['/ws']
    for namespace in namespaces:
        socketio.on_event('connect', handle_connect, namespace=namespace)
        socketio.on_event('disconnect', handle_disconnect, namespace=namespace)
        socketio.on_event('create_room', handle_create_room, namespace=namespace)
        socketio.on_event('join_room', handle_join_room, namespace=namespace)
        socketio.on_event('select_number', handle_select_number, namespace=namespace)
        socketio.on_event('leave_room', handle_leave_room, namespace=namespace)
