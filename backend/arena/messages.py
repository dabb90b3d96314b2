"""Wire protocol: one class per Socket.IO event.

Outbound events are built by the session manager and handed to the
dispatcher; ``payload()`` returns the JSON-ready body. Inbound movement
payloads are parsed into ``AbsoluteMove`` or ``RelativeMove``; anything else
raises ``MalformedIntent``.
"""
import math
from typing import Any, Dict, List, Optional, Union

# Server -> client
INIT = 'init'
NEW_PLAYER = 'new-player'
PLAYER_UPDATE = 'player-update'
PLAYER_DISCONNECT = 'player-disconnect'
COLLECTIBLE_UPDATE = 'collectible-update'
# Client -> server
MOVEMENT = 'movement'

DIRECTIONS = {
    'up': (0, -1),
    'down': (0, 1),
    'left': (-1, 0),
    'right': (1, 0),
}


class MalformedIntent(ValueError):
    """Movement payload matched neither the absolute nor the relative shape."""


class Message:
    event: str = ''

    def payload(self) -> Any:
        raise NotImplementedError

    def __repr__(self):
        return f"<{type(self).__name__} {self.payload()!r}>"


class Init(Message):
    event = INIT

    def __init__(self, player_id: str, players: Dict[str, dict], collectibles: List[dict]):
        self.player_id = player_id
        self.players = players
        self.collectibles = collectibles

    def payload(self):
        return {
            'id': self.player_id,
            'players': self.players,
            'collectibles': self.collectibles,
        }


class NewPlayer(Message):
    event = NEW_PLAYER

    def __init__(self, player: dict):
        self.player = player

    def payload(self):
        return dict(self.player)


class PlayerUpdate(Message):
    event = PLAYER_UPDATE

    def __init__(self, player_id: str, x, y, score: int):
        self.player_id = player_id
        self.x = x
        self.y = y
        self.score = score

    def payload(self):
        return {'id': self.player_id, 'x': self.x, 'y': self.y, 'score': self.score}


class PlayerDisconnect(Message):
    event = PLAYER_DISCONNECT

    def __init__(self, player_id: str):
        self.player_id = player_id

    def payload(self):
        # Bare id string, not an object
        return self.player_id


class CollectibleUpdate(Message):
    event = COLLECTIBLE_UPDATE

    def __init__(self, collected_id: int, replacement: dict, player_id: str, score: int):
        self.collected_id = collected_id
        self.replacement = replacement
        self.player_id = player_id
        self.score = score

    def payload(self):
        return {
            'collected': self.collected_id,
            'new': self.replacement,
            'player': {'id': self.player_id, 'score': self.score},
        }


# ---- inbound ----

class AbsoluteMove:
    def __init__(self, x: float, y: float, delta_x: float = 0, delta_y: float = 0):
        self.x = x
        self.y = y
        # Client-side hints, not used for the authoritative position
        self.delta_x = delta_x
        self.delta_y = delta_y


class RelativeMove:
    def __init__(self, direction: str, speed: float):
        self.direction = direction
        self.speed = speed

    @property
    def vector(self):
        dx, dy = DIRECTIONS[self.direction]
        return (dx * self.speed, dy * self.speed)


MovementIntent = Union[AbsoluteMove, RelativeMove]


def _number(value) -> Optional[float]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    # ints are exact at any size; only floats can be inf or nan
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return value


def parse_movement(data, default_speed: float = 4) -> MovementIntent:
    """Turn a raw ``movement`` payload into an intent.

    Absolute ``{x, y}`` wins when both coordinates are present; otherwise a
    ``{direction, speed}`` pair is expected. A missing, zero or non-numeric
    speed falls back to ``default_speed``.
    """
    if not isinstance(data, dict):
        raise MalformedIntent(f"expected an object, got {type(data).__name__}")

    if data.get('x') is not None and data.get('y') is not None:
        x, y = _number(data['x']), _number(data['y'])
        if x is None or y is None:
            raise MalformedIntent('x and y must be finite numbers')
        return AbsoluteMove(
            x, y,
            delta_x=_number(data.get('deltaX')) or 0,
            delta_y=_number(data.get('deltaY')) or 0,
        )

    direction = data.get('direction')
    if isinstance(direction, str) and direction in DIRECTIONS:
        speed = _number(data.get('speed')) or default_speed
        return RelativeMove(direction, speed)

    raise MalformedIntent('neither x/y nor a known direction present')
