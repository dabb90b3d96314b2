from typing import Dict, List, Optional

from arena.models import Collectible, Player


class WorldState:
    """Single in-memory copy of the world.

    No validation happens here. Callers (the session manager and the
    collision rules) keep the invariants and serialize access.
    """

    def __init__(self):
        self._players: Dict[str, Player] = {}
        self._collectibles: List[Collectible] = []

    # ---- players ----

    def get_player(self, player_id: str) -> Optional[Player]:
        return self._players.get(player_id)

    def set_player(self, player: Player) -> None:
        self._players[player.id] = player

    def remove_player(self, player_id: str) -> Optional[Player]:
        return self._players.pop(player_id, None)

    def list_players(self) -> List[Player]:
        return list(self._players.values())

    def snapshot_players(self) -> Dict[str, dict]:
        return {pid: p.to_dict() for pid, p in self._players.items()}

    # ---- collectibles ----

    def list_collectibles(self) -> List[Collectible]:
        return list(self._collectibles)

    def add_collectible(self, collectible: Collectible) -> None:
        self._collectibles.append(collectible)

    def remove_collectible(self, collectible_id: int) -> Optional[Collectible]:
        for idx, c in enumerate(self._collectibles):
            if c.id == collectible_id:
                return self._collectibles.pop(idx)
        return None

    def snapshot_collectibles(self) -> List[dict]:
        return [c.to_dict() for c in self._collectibles]
