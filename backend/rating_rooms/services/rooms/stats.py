from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

from rating_rooms.models import Stats

MIN_RATING = 1
MAX_RATING = 5


def compute_stats(values: Iterable[int]) -> Stats:
    """Summarize rating values.

    ``count`` is the number of entries. Values outside 1..5 are counted
    but left out of the distribution and the mean; they should never
    get in, this just doesn't rely on it. ``avg`` is the mean rounded
    half up to 2 decimals, 0 when there are no entries.
    """
    values = list(values)
    count = len(values)
    distribution = [0] * MAX_RATING
    total = 0
    for value in values:
        if isinstance(value, int) and not isinstance(value, bool) and MIN_RATING <= value <= MAX_RATING:
            distribution[value - 1] += 1
            total += value
    if not count:
        return Stats(0, 0, distribution)
    avg = (Decimal(total) / Decimal(count)).quantize(Decimal('0.01'), rounding=ROUND_HALF_UP)
    return Stats(count, float(avg), distribution)
