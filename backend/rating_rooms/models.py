import time
from typing import Dict, List


class Stats:
    """Aggregate view of a room's ratings as sent in ``room_update``."""

    def __init__(self, count: int = 0, avg: float = 0, distribution: List[int] = None):
        self.count = count
        self.avg = avg
        self.distribution = list(distribution) if distribution is not None else [0, 0, 0, 0, 0]

    def to_dict(self, code: str = None):
        data = {
            'count': self.count,
            'avg': self.avg,
            'distribution': list(self.distribution),
        }
        if code is not None:
            data = {'code': code, **data}
        return data

    def __eq__(self, other):
        if not isinstance(other, Stats):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self):
        return f'Stats(count={self.count}, avg={self.avg}, distribution={self.distribution})'


class Room:
    """Plain state of one live room. Only its session mutates ``ratings``."""

    def __init__(self, code: str, creator_id: str, created_at: float = None):
        self.code = code
        self.creator_id = creator_id
        self.ratings: Dict[str, int] = {}
        self.created_at = created_at if created_at is not None else time.time()
