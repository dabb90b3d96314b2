import math
from typing import Iterable, List, Tuple

from arena.models import Collectible

PICKUP_RADIUS = 20.0


def distance(a: Tuple[float, float], b: Tuple[float, float]) -> float:
    return math.hypot(a[0] - b[0], a[1] - b[1])


def check_pickups(position: Tuple[float, float], collectibles: Iterable[Collectible],
                  radius: float = PICKUP_RADIUS) -> List[Collectible]:
    """Return every collectible strictly within ``radius`` of ``position``.

    Call with the already clamped position. A collectible at exactly
    ``radius`` is not picked up.
    """
    return [c for c in collectibles if distance(position, (c.x, c.y)) < radius]
