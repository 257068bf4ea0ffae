import logging
import threading

from rating_rooms.models import Room, Stats
from .errors import Forbidden, InvalidRating, RoomNotFound
from .stats import MAX_RATING, MIN_RATING, compute_stats


def parse_rating(value) -> int:
    """Coerce a submitted rating to an int in 1..5 or raise InvalidRating.

    Accepts ints, integral floats (4.0) and numeric strings ("4", "4.0").
    """
    if isinstance(value, bool):
        raise InvalidRating()
    if isinstance(value, int):
        rating = value
    elif isinstance(value, (float, str)):
        try:
            number = float(value)
        except ValueError:
            raise InvalidRating() from None
        if not number.is_integer():
            raise InvalidRating()
        rating = int(number)
    else:
        raise InvalidRating()
    if not MIN_RATING <= rating <= MAX_RATING:
        raise InvalidRating()
    return rating


class RoomSession:
    """One live room: its rating state and the operations that mutate it.

    Every operation runs under the session lock, computes stats once and
    hands the same snapshot to the broadcaster. Once the room has ended
    all operations raise RoomNotFound.
    """

    def __init__(self, room: Room, broadcaster, registry, logger=None):
        self.room = room
        self.ended = False
        self._broadcaster = broadcaster
        self._registry = registry
        self._lock = threading.Lock()
        self.logger = logger or logging.getLogger(__name__)

    @property
    def code(self) -> str:
        return self.room.code

    @property
    def creator_id(self) -> str:
        return self.room.creator_id

    def stats(self) -> Stats:
        with self._lock:
            return compute_stats(self.room.ratings.values())

    def join(self, caller_id: str) -> Stats:
        """Subscribe the caller and send it the current stats.

        Joining is not a room-wide event: only the caller gets the
        update, sent under the room lock so no later broadcast can
        overtake it.
        """
        with self._lock:
            self._ensure_active()
            self._broadcaster.subscribe(caller_id, self.code)
            stats = compute_stats(self.room.ratings.values())
            self._broadcaster.room_update(self.code, stats, to=caller_id)
            self.logger.info(f"[room-join] code={self.code} sid={caller_id}")
            return stats

    def submit_rating(self, caller_id: str, value) -> Stats:
        with self._lock:
            self._ensure_active()
            rating = parse_rating(value)
            self.room.ratings[caller_id] = rating
            self._registry.track(caller_id, self.code)
            stats = self._publish()
            self.logger.debug(f"[room-rate] code={self.code} sid={caller_id} value={rating} count={stats.count}")
            return stats

    def clear(self, caller_id: str) -> Stats:
        with self._lock:
            self._ensure_active()
            self._ensure_creator(caller_id, 'clear')
            for voter_id in list(self.room.ratings):
                if voter_id != self.creator_id:
                    self._registry.untrack(voter_id, self.code)
            self.room.ratings.clear()
            self.logger.info(f"[room-clear] code={self.code}")
            return self._publish()

    def end(self, caller_id: str) -> None:
        with self._lock:
            self._ensure_active()
            self._ensure_creator(caller_id, 'end')
            self._end('ended by creator')

    def handle_disconnect(self, caller_id: str) -> None:
        """Drop a closed connection's vote and end the room if it was the creator's."""
        with self._lock:
            if self.ended:
                return
            if self.room.ratings.pop(caller_id, None) is not None:
                self._publish()
            if caller_id == self.creator_id:
                self._end('creator disconnected')

    def shutdown(self) -> None:
        with self._lock:
            if not self.ended:
                self._end('server shutdown')

    def _ensure_active(self) -> None:
        if self.ended:
            raise RoomNotFound()

    def _ensure_creator(self, caller_id: str, action: str) -> None:
        if caller_id != self.creator_id:
            self.logger.info(f"[room-forbidden] code={self.code} sid={caller_id} action={action}")
            raise Forbidden(action)

    def _publish(self) -> Stats:
        stats = compute_stats(self.room.ratings.values())
        self._broadcaster.room_update(self.code, stats)
        return stats

    def _end(self, reason: str) -> None:
        self.ended = True
        self._broadcaster.room_ended(self.code)
        self._broadcaster.close(self.code)
        self._registry.remove(self.code)
        self.logger.info(f"[room-end] code={self.code} reason={reason}")
