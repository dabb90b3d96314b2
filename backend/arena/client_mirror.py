"""Reference consumer of the game protocol.

A browser keeps an advisory copy of the world for drawing. ``ClientMirror``
is that copy in Python: it is fed every received event, predicts the own
player's position before the server confirms it, and eases every other
player toward the last position the server reported. The server copy always
wins; nothing here is ever sent back as truth except movement intents.
"""
from typing import Dict, Iterable, List, Optional

from arena import messages
from arena.services.world.movement import Bounds

SMOOTHING = 0.15

UP_KEYS = ('w', 'arrowup')
DOWN_KEYS = ('s', 'arrowdown')
LEFT_KEYS = ('a', 'arrowleft')
RIGHT_KEYS = ('d', 'arrowright')


class MirroredPlayer:
    def __init__(self, id, x, y, score=0):
        self.id = id
        # Drawn position
        self.x = x
        self.y = y
        # Last position reported by the server
        self.target_x = x
        self.target_y = y
        self.score = score or 0

    @classmethod
    def from_payload(cls, data: dict) -> 'MirroredPlayer':
        return cls(data['id'], data['x'], data['y'], data.get('score', 0))


class ClientMirror:
    def __init__(self, bounds: Optional[Bounds] = None, smoothing: float = SMOOTHING):
        self.bounds = bounds or Bounds()
        self.smoothing = smoothing
        self.own_id: Optional[str] = None
        self.players: Dict[str, MirroredPlayer] = {}
        self.collectibles: List[dict] = []

    @property
    def me(self) -> Optional[MirroredPlayer]:
        return self.players.get(self.own_id) if self.own_id else None

    # ---- inbound ----

    def apply(self, event: str, payload) -> None:
        handler = self._handlers.get(event)
        if handler is None:
            return
        handler(self, payload)

    def _on_init(self, payload):
        self.own_id = payload['id']
        self.players = {pid: MirroredPlayer.from_payload(p) for pid, p in payload['players'].items()}
        self.collectibles = list(payload['collectibles'])

    def _on_new_player(self, payload):
        self.players[payload['id']] = MirroredPlayer.from_payload(payload)

    def _on_player_update(self, payload):
        player = self.players.get(payload['id'])
        if player is None:
            return
        player.target_x, player.target_y = payload['x'], payload['y']
        player.score = payload['score']
        if player.id == self.own_id:
            # Server correction of our own prediction
            player.x, player.y = player.target_x, player.target_y

    def _on_player_disconnect(self, player_id):
        self.players.pop(player_id, None)

    def _on_collectible_update(self, payload):
        self.collectibles = [c for c in self.collectibles if c['id'] != payload['collected']]
        self.collectibles.append(payload['new'])
        scorer = self.players.get(payload['player']['id'])
        if scorer is not None:
            scorer.score = payload['player']['score']

    _handlers = {
        messages.INIT: _on_init,
        messages.NEW_PLAYER: _on_new_player,
        messages.PLAYER_UPDATE: _on_player_update,
        messages.PLAYER_DISCONNECT: _on_player_disconnect,
        messages.COLLECTIBLE_UPDATE: _on_collectible_update,
    }

    # ---- per frame ----

    def step(self) -> None:
        """Ease every other player one frame toward its server position."""
        for player in self.players.values():
            if player.id == self.own_id:
                continue
            player.x += (player.target_x - player.x) * self.smoothing
            player.y += (player.target_y - player.y) * self.smoothing

    # ---- outbound ----

    def sample_intent(self, keys: Iterable[str], speed: float = 5) -> Optional[dict]:
        """Predict the own move for the held keys and build a movement payload.

        Meant to be called on a fixed interval. Returns None when nothing is
        held or the player is not known yet.
        """
        me = self.me
        if me is None:
            return None
        held = {k.lower() for k in keys}
        dx = dy = 0
        if held.intersection(UP_KEYS):
            dy -= speed
        if held.intersection(DOWN_KEYS):
            dy += speed
        if held.intersection(LEFT_KEYS):
            dx -= speed
        if held.intersection(RIGHT_KEYS):
            dx += speed
        if not dx and not dy:
            return None
        me.x, me.y = self.bounds.clamp(me.x + dx, me.y + dy)
        me.target_x, me.target_y = me.x, me.y
        return {'x': me.x, 'y': me.y, 'deltaX': dx, 'deltaY': dy}

    def rank(self) -> str:
        ordered = sorted(self.players.values(), key=lambda p: p.score, reverse=True)
        position = next((i + 1 for i, p in enumerate(ordered) if p.id == self.own_id), 0)
        return f"Rank: {position}/{len(ordered)}"
