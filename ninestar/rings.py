"""
Nine-position rings (飞星盘) and the circular-list helpers behind them.

A ring lists the star occupying each palace in the fixed order
S, SW, W, NW, N, NE, E, SE, Center.
"""

from typing import Sequence, TypeVar

from ninestar.errors import ElementNotFoundError, EmptyCollectionError
from ninestar.stars import CHAR_TO_NUM, NUM_TO_CHAR

T = TypeVar("T")

DIRECTIONS = ("S", "SW", "W", "NW", "N", "NE", "E", "SE", "Center")
DIRECTION_NAMES = {
    "S": "南",
    "SW": "西南",
    "W": "西",
    "NW": "西北",
    "N": "北",
    "NE": "东北",
    "E": "东",
    "SE": "东南",
    "Center": "中宫",
}

# Lo Shu layout with 5 in the centre, read in DIRECTIONS order
BASE_RING_NUMBERS = (9, 2, 7, 6, 1, 8, 3, 4, 5)
RING_SIZE = len(BASE_RING_NUMBERS)


# ============================================================
# CIRCULAR HELPERS
# ============================================================

def circular_get(seq: Sequence[T], index: int) -> T:
    """Element at `index`, wrapping around in both directions."""
    if len(seq) == 0:
        raise EmptyCollectionError("Sequence cannot be empty.")
    return seq[index % len(seq)]


def rotate(seq: Sequence[T], shift: int) -> list[T]:
    """
    Rotate right by `shift` positions (negative rotates left).

    An empty sequence gives an empty list.
    """
    n = len(seq)
    if n == 0:
        return []
    return [seq[(i - shift) % n] for i in range(n)]


def rotate_to_last(seq: Sequence[T], target: T) -> list[T]:
    """Rotate so the first occurrence of `target` ends up last."""
    n = len(seq)
    if n == 0:
        return []
    try:
        index = list(seq).index(target)
    except ValueError:
        raise ElementNotFoundError(f"Element {target!r} not found in sequence.") from None
    return rotate(seq, (n - 1) - index)


# ============================================================
# RINGS
# ============================================================

def ring_for(center: int) -> list[str]:
    """
    The nine stars (as numerals) for a chart with `center` in the middle.

    Every palace moves by the same amount the centre moved away from 5.
    """
    if center not in NUM_TO_CHAR:
        raise ValueError(f"Center star must be 1-9, got {center!r}")
    delta = (center - 5 + 9) % 9
    return [NUM_TO_CHAR[((n + delta - 1 + 9) % 9) + 1] for n in BASE_RING_NUMBERS]


def calculate_new_ring(base_ring: Sequence[str], shift: int) -> list[str]:
    """
    Shift every numeral of a ring down by `shift`: n' = (n - shift - 1) mod 9 + 1.

    Characters that aren't numerals are passed through unchanged.
    """
    if len(base_ring) != RING_SIZE:
        raise ValueError(f"Base ring must contain {RING_SIZE} elements.")

    new_ring = []
    for char in base_ring:
        n = CHAR_TO_NUM.get(char)
        if n is None:
            new_ring.append(char)
            continue
        new_ring.append(NUM_TO_CHAR[(n - shift - 1) % 9 + 1])
    return new_ring


def is_valid_ring(ring: Sequence[str]) -> bool:
    """True if `ring` holds each of the nine numerals exactly once."""
    return len(ring) == RING_SIZE and set(ring) == set(NUM_TO_CHAR.values())


def ring_by_direction(ring: Sequence[str]) -> dict:
    if len(ring) != RING_SIZE:
        raise ValueError(f"Ring must contain {RING_SIZE} elements.")
    return dict(zip(DIRECTIONS, ring))
