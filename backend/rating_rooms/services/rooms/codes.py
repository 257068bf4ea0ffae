import random
from typing import Callable, Optional

# No 0/O or 1/I so codes can be read out loud and typed back
ALPHABET = 'ABCDEFGHJKLMNPQRSTUVWXYZ23456789'
CODE_LENGTH = 6
MAX_ATTEMPTS = 10
# Raw codes from clients are capped before any other normalization
MAX_RAW_LENGTH = 32


class CodeSpaceExhausted(RuntimeError):
    """No free code found within the retry cap.

    With 32**6 possible codes this only happens when the generator is
    misconfigured (tiny length, broken random source).
    """


def generate_room_code(
    is_taken: Callable[[str], bool],
    length: int = CODE_LENGTH,
    max_attempts: int = MAX_ATTEMPTS,
    rng: Optional[random.Random] = None,
) -> str:
    """Generate a short room code that ``is_taken`` does not reject."""
    choices = (rng or random).choices
    for _ in range(max_attempts):
        code = ''.join(choices(ALPHABET, k=length))
        if not is_taken(code):
            return code
    raise CodeSpaceExhausted(
        f'no free room code after {max_attempts} attempts (length={length})'
    )


def normalize_code(raw, length: int = CODE_LENGTH) -> Optional[str]:
    """Return the canonical form of a client supplied code, or None.

    None means the value can never match a live room; callers treat it
    as a lookup miss.
    """
    if raw is None:
        return None
    code = str(raw)[:MAX_RAW_LENGTH].strip().upper()
    if len(code) != length or any(ch not in ALPHABET for ch in code):
        return None
    return code
