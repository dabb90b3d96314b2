import random
from typing import Tuple

from arena.messages import AbsoluteMove, MovementIntent, RelativeMove
from arena.models import Player


class Bounds:
    """Playable rectangle: the world minus a margin on every side."""

    def __init__(self, width=640, height=480, margin=20):
        self.min_x = margin
        self.max_x = width - margin
        self.min_y = margin
        self.max_y = height - margin

    @property
    def span_x(self):
        return self.max_x - self.min_x

    @property
    def span_y(self):
        return self.max_y - self.min_y

    @classmethod
    def from_config(cls, config) -> 'Bounds':
        return cls(
            width=config.get('WORLD_WIDTH', 640),
            height=config.get('WORLD_HEIGHT', 480),
            margin=config.get('WORLD_MARGIN', 20),
        )

    def clamp(self, x, y) -> Tuple[float, float]:
        return (
            max(self.min_x, min(self.max_x, x)),
            max(self.min_y, min(self.max_y, y)),
        )

    def contains(self, x, y) -> bool:
        return self.min_x <= x <= self.max_x and self.min_y <= y <= self.max_y

    def random_point(self, rng: random.Random) -> Tuple[int, int]:
        # Upper edge excluded, matching how spawns have always been placed
        return (
            rng.randrange(self.min_x, self.max_x),
            rng.randrange(self.min_y, self.max_y),
        )


def apply_intent(player: Player, intent: MovementIntent, bounds: Bounds) -> None:
    """Move ``player`` according to ``intent``; the result is always clamped."""
    if isinstance(intent, AbsoluteMove):
        target = (intent.x, intent.y)
    elif isinstance(intent, RelativeMove):
        dx, dy = intent.vector
        # No single step crosses more than the playfield
        dx = max(-bounds.span_x, min(bounds.span_x, dx))
        dy = max(-bounds.span_y, min(bounds.span_y, dy))
        target = (player.x + dx, player.y + dy)
    else:
        raise TypeError(f"unsupported intent {intent!r}")
    player.x, player.y = bounds.clamp(*target)
