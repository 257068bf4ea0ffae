from flask import current_app, request
from typing import Any, Dict

from rating_rooms import socketio
from rating_rooms.services.rooms import CodeSpaceExhausted, RoomError, RoomRegistry


def _get_sid() -> str:
    # type: ignore: request.sid exists in Socket.IO context
    return request.sid  # type: ignore


def _registry() -> RoomRegistry:
    return current_app.extensions['room_registry']


def _payload(data) -> Dict[str, Any]:
    return data if isinstance(data, dict) else {}


def _fail(exc: RoomError) -> Dict[str, Any]:
    return {'ok': False, 'error': exc.message}


def handle_connect(auth=None):
    current_app.logger.debug(f"[connect] sid={_get_sid()}")


def handle_disconnect(reason=None):
    sid = _get_sid()
    current_app.logger.debug(f"[disconnect] sid={sid} reason={reason}")
    _registry().handle_disconnect(sid)


def handle_create_room(data=None):
    try:
        code, _ = _registry().create(_get_sid())
    except CodeSpaceExhausted:
        current_app.logger.exception("[room-create] could not allocate a room code")
        raise
    return {'ok': True, 'code': code}


def handle_join_room(data=None):
    try:
        session = _registry().lookup(_payload(data).get('code'))
        session.join(_get_sid())
    except RoomError as exc:
        return _fail(exc)
    return {'ok': True, 'code': session.code}


def handle_submit_rating(data=None):
    payload = _payload(data)
    try:
        session = _registry().lookup(payload.get('code'))
        session.submit_rating(_get_sid(), payload.get('value'))
    except RoomError as exc:
        return _fail(exc)
    return {'ok': True}


def handle_clear_ratings(data=None):
    try:
        session = _registry().lookup(_payload(data).get('code'))
        session.clear(_get_sid())
    except RoomError as exc:
        return _fail(exc)
    return {'ok': True}


def handle_end_room(data=None):
    try:
        session = _registry().lookup(_payload(data).get('code'))
        session.end(_get_sid())
    except RoomError as exc:
        return _fail(exc)
    return {'ok': True}


def register_socketio_handlers(namespace: str = '/') -> None:
    """Register the room Socket.IO event handlers on ``namespace``.

    Handlers return the acknowledgement payload; room-wide events go
    through the registry's broadcaster.
    """
    socketio.on_event('connect', handle_connect, namespace=namespace)
    socketio.on_event('disconnect', handle_disconnect, namespace=namespace)
    socketio.on_event('create_room', handle_create_room, namespace=namespace)
    socketio.on_event('join_room', handle_join_room, namespace=namespace)
    socketio.on_event('submit_rating', handle_submit_rating, namespace=namespace)
    socketio.on_event('clear_ratings', handle_clear_ratings, namespace=namespace)
    socketio.on_event('end_room', handle_end_room, namespace=namespace)
