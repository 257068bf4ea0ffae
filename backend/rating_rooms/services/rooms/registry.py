import logging
import random
import threading
from typing import Dict, Optional, Set, Tuple

from rating_rooms.models import Room
from .codes import CODE_LENGTH, MAX_ATTEMPTS, generate_room_code, normalize_code
from .errors import RoomNotFound
from .session import RoomSession


class RoomRegistry:
    """Owns every live room, keyed by code.

    Also keeps a reverse index from connection id to the codes it is
    creator of or has a vote in, so disconnect cleanup only visits
    those rooms.

    Lock order is session lock, then registry lock. The registry lock is
    never held while calling into a session.
    """

    def __init__(
        self,
        broadcaster,
        code_length: int = CODE_LENGTH,
        max_attempts: int = MAX_ATTEMPTS,
        rng: Optional[random.Random] = None,
        logger=None,
    ):
        self.broadcaster = broadcaster
        self.code_length = code_length
        self.max_attempts = max_attempts
        self.logger = logger or logging.getLogger(__name__)
        self._rng = rng
        self._sessions: Dict[str, RoomSession] = {}
        self._rooms_by_connection: Dict[str, Set[str]] = {}
        self._connections_by_room: Dict[str, Set[str]] = {}
        self._lock = threading.RLock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)

    def create(self, creator_id: str) -> Tuple[str, RoomSession]:
        """Create a room owned by ``creator_id`` and subscribe the creator to it."""
        with self._lock:
            code = generate_room_code(
                lambda candidate: candidate in self._sessions,
                length=self.code_length,
                max_attempts=self.max_attempts,
                rng=self._rng,
            )
            session = RoomSession(Room(code, creator_id), self.broadcaster, self, logger=self.logger)
            self._sessions[code] = session
            self._index(creator_id, code)
        self.broadcaster.subscribe(creator_id, code)
        self.logger.info(f"[room-create] code={code} creator={creator_id} live={len(self)}")
        return code, session

    def lookup(self, raw_code) -> RoomSession:
        code = normalize_code(raw_code, self.code_length)
        with self._lock:
            session = self._sessions.get(code) if code else None
        if session is None:
            raise RoomNotFound()
        return session

    def remove(self, code: str) -> bool:
        with self._lock:
            session = self._sessions.pop(code, None)
            if session is None:
                return False
            for connection_id in self._connections_by_room.pop(code, set()):
                self._unindex(connection_id, code)
        self.logger.debug(f"[room-remove] code={code} live={len(self)}")
        return True

    def track(self, connection_id: str, code: str) -> None:
        """Record that ``connection_id`` has a stake (a vote) in ``code``."""
        with self._lock:
            if code in self._sessions:
                self._index(connection_id, code)

    def untrack(self, connection_id: str, code: str) -> None:
        with self._lock:
            members = self._connections_by_room.get(code)
            if members is not None:
                members.discard(connection_id)
            self._unindex(connection_id, code)

    def handle_disconnect(self, connection_id: str) -> None:
        """Reconcile room state after a connection closed. Never raises."""
        with self._lock:
            codes = self._rooms_by_connection.pop(connection_id, set())
            for code in codes:
                members = self._connections_by_room.get(code)
                if members is not None:
                    members.discard(connection_id)
            sessions = [self._sessions[code] for code in sorted(codes) if code in self._sessions]
        for session in sessions:
            try:
                session.handle_disconnect(connection_id)
            except Exception:
                self.logger.exception(f"[room-disconnect] cleanup failed code={session.code} sid={connection_id}")

    def close(self) -> None:
        """End every live room; used at shutdown."""
        with self._lock:
            sessions = list(self._sessions.values())
        for session in sessions:
            try:
                session.shutdown()
            except Exception:
                self.logger.exception(f"[room-shutdown] failed code={session.code}")
        with self._lock:
            self._sessions.clear()
            self._rooms_by_connection.clear()
            self._connections_by_room.clear()

    def _index(self, connection_id: str, code: str) -> None:
        self._rooms_by_connection.setdefault(connection_id, set()).add(code)
        self._connections_by_room.setdefault(code, set()).add(connection_id)

    def _unindex(self, connection_id: str, code: str) -> None:
        codes = self._rooms_by_connection.get(connection_id)
        if codes is None:
            return
        codes.discard(code)
        if not codes:
            del self._rooms_by_connection[connection_id]
