import logging
import random
import threading
from typing import List, Optional

from arena.broadcast import Addressing, Dispatcher
from arena.messages import (
    CollectibleUpdate,
    Init,
    MalformedIntent,
    NewPlayer,
    PlayerDisconnect,
    PlayerUpdate,
    parse_movement,
)
from arena.models import Collectible, Player
from .collectibles import CollectibleGenerator
from .collision import PICKUP_RADIUS, check_pickups
from .movement import Bounds, apply_intent
from .store import WorldState


class SessionManager:
    """Runs connect/movement/disconnect events against the world.

    Each public method handles one inbound event end to end: mutations and
    the resulting dispatches happen under one lock, so two events never
    interleave even when the transport calls in from several threads.
    """

    def __init__(self, world: WorldState, generator: CollectibleGenerator, dispatcher: Dispatcher,
                 bounds: Bounds, pickup_radius: float = PICKUP_RADIUS, default_speed: float = 4,
                 rng: Optional[random.Random] = None, logger: Optional[logging.Logger] = None):
        self.world = world
        self.generator = generator
        self.dispatcher = dispatcher
        self.bounds = bounds
        self.pickup_radius = pickup_radius
        self.default_speed = default_speed
        self.rng = rng or random.Random()
        self.logger = logger or logging.getLogger(__name__)
        self.lock = threading.RLock()

    @classmethod
    def from_config(cls, config, dispatcher: Dispatcher, rng: Optional[random.Random] = None,
                    logger: Optional[logging.Logger] = None) -> 'SessionManager':
        """Build a manager and seed the world with the initial collectibles."""
        rng = rng or random.Random()
        bounds = Bounds.from_config(config)
        generator = CollectibleGenerator(bounds, max_value=config.get('MAX_COLLECTIBLE_VALUE', 5), rng=rng)
        manager = cls(
            WorldState(), generator, dispatcher, bounds,
            pickup_radius=config.get('PICKUP_RADIUS', PICKUP_RADIUS),
            default_speed=config.get('DEFAULT_SPEED', 4),
            rng=rng,
            logger=logger,
        )
        manager.seed(config.get('INITIAL_COLLECTIBLES', 3))
        return manager

    def seed(self, count: int) -> None:
        with self.lock:
            for c in self.generator.initial_batch(count):
                self.world.add_collectible(c)
            self.logger.info(f"[world-init] collectibles={count}")

    # ---- lifecycle ----

    def connect(self, sid: str) -> Player:
        with self.lock:
            x, y = self.bounds.random_point(self.rng)
            player = Player(id=sid, x=x, y=y)
            self.world.set_player(player)
            self.dispatcher.attach(sid)

            self.dispatcher.dispatch(
                Init(sid, self.world.snapshot_players(), self.world.snapshot_collectibles()),
                Addressing.UNICAST, sender=sid,
            )
            self.dispatcher.dispatch(NewPlayer(player.to_dict()), Addressing.EXCEPT_SENDER, sender=sid)
            self.logger.info(f"[connect] sid={sid} pos=({x}, {y}) players={len(self.world.list_players())}")
            return player

    def move(self, sid: str, data) -> List[Collectible]:
        """Apply one movement intent; returns the collectibles picked up."""
        with self.lock:
            player = self.world.get_player(sid)
            if player is None:
                self.logger.debug(f"[movement-ignored] sid={sid} reason=unknown-player")
                return []
            try:
                intent = parse_movement(data, default_speed=self.default_speed)
            except MalformedIntent as exc:
                self.logger.debug(f"[movement-ignored] sid={sid} reason={exc}")
                return []

            apply_intent(player, intent, self.bounds)

            collected = check_pickups(player.position, self.world.list_collectibles(), self.pickup_radius)
            for item in collected:
                self._collect(player, item)

            self.dispatcher.dispatch(
                PlayerUpdate(player.id, player.x, player.y, player.score),
                Addressing.EXCEPT_SENDER, sender=sid,
            )
            return collected

    def disconnect(self, sid: str) -> Optional[Player]:
        with self.lock:
            self.dispatcher.detach(sid)
            player = self.world.remove_player(sid)
            if player is None:
                return None
            self.dispatcher.dispatch(PlayerDisconnect(sid), Addressing.EXCEPT_SENDER, sender=sid)
            self.logger.info(f"[disconnect] sid={sid} score={player.score} players={len(self.world.list_players())}")
            return player

    # ---- internals ----

    def _collect(self, player: Player, item: Collectible) -> None:
        player.score += item.value
        self.world.remove_collectible(item.id)
        replacement = self.generator.create()
        self.world.add_collectible(replacement)
        self.dispatcher.dispatch(
            CollectibleUpdate(item.id, replacement.to_dict(), player.id, player.score),
            Addressing.ALL, sender=player.id,
        )
        self.logger.info(
            f"[pickup] sid={player.id} collected={item.id} value={item.value} "
            f"score={player.score} spawned={replacement.id}"
        )
