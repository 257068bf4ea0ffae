"""Room domain services: codes, stats, sessions and the registry.

This package holds the room coordination logic that the Socket.IO
handlers call into, keeping transport concerns separated from rating
state and its invariants.
"""

from .codes import ALPHABET, CodeSpaceExhausted, generate_room_code, normalize_code
from .errors import Forbidden, InvalidRating, RoomError, RoomNotFound
from .registry import RoomRegistry
from .session import RoomSession, parse_rating
from .stats import compute_stats

__all__ = [
    'ALPHABET',
    'CodeSpaceExhausted',
    'Forbidden',
    'InvalidRating',
    'RoomError',
    'RoomNotFound',
    'RoomRegistry',
    'RoomSession',
    'compute_stats',
    'generate_room_code',
    'normalize_code',
    'parse_rating',
]
