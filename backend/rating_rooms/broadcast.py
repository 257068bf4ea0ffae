from flask_socketio import close_room, join_room

from rating_rooms.models import Stats


class Broadcaster:
    """Room-scoped delivery used by room sessions.

    Connections are identified by their transport id and grouped by
    room code. Implementations must send the same payload to every
    connection subscribed to a code.
    """

    def subscribe(self, connection_id: str, code: str) -> None:
        raise NotImplementedError

    def room_update(self, code: str, stats: Stats, to: str = None) -> None:
        """Send stats to the whole room, or only to connection ``to``."""
        raise NotImplementedError

    def room_ended(self, code: str) -> None:
        raise NotImplementedError

    def close(self, code: str) -> None:
        """Drop every subscription to ``code``."""
        raise NotImplementedError


class SocketIOBroadcaster(Broadcaster):
    """Broadcaster backed by Flask-SocketIO rooms.

    Subscription and close use the Flask-SocketIO helpers, which need an
    app context; Socket.IO event handlers always run inside one.
    """

    def __init__(self, socketio, namespace: str = '/'):
        self.socketio = socketio
        self.namespace = namespace

    def subscribe(self, connection_id, code):
        join_room(code, sid=connection_id, namespace=self.namespace)

    def room_update(self, code, stats, to=None):
        self.socketio.emit('room_update', stats.to_dict(code), to=to or code, namespace=self.namespace)

    def room_ended(self, code):
        self.socketio.emit('room_ended', {'code': code}, to=code, namespace=self.namespace)

    def close(self, code):
        close_room(code, namespace=self.namespace)
