"""In-process room directory: room ids to engines, players to rooms."""

import logging
import threading
from typing import Iterable, Optional

from ashakk.engine import ActionResult, ErrorKind, GameRoom, RoomAlreadyExistsError
from ashakk.models import Player

logger = logging.getLogger(__name__)


class RoomRegistry:
    """Maps room ids to GameRoom instances and player ids to room ids.

    Pure lookup, no game logic. The registry lock only guards its own
    maps; each room serializes its own operations.
    """

    def __init__(self, max_players: int = 4, min_players: int = 2):
        self._rooms: dict[str, GameRoom] = {}
        self._player_rooms: dict[str, str] = {}  # player id -> room id
        self._lock = threading.Lock()
        self.max_players = max_players
        self.min_players = min_players

    def create_room(self, room_id: str, players: Iterable[Player], game_master_id: str) -> GameRoom:
        """Create and register a new room.

        Raises:
            RoomAlreadyExistsError: If room_id is taken.
        """
        players = list(players)
        with self._lock:
            if room_id in self._rooms:
                raise RoomAlreadyExistsError(f"Room {room_id} already exists")
            room = GameRoom(
                room_id,
                players,
                game_master_id,
                max_players=self.max_players,
                min_players=self.min_players,
            )
            self._rooms[room_id] = room
            for player in players:
                self._player_rooms[player.id] = room_id
        logger.info("room=%s created by %s", room_id, game_master_id)
        return room

    def join_room(self, room_id: str, player: Player) -> tuple[ActionResult, Optional[GameRoom]]:
        """Seat a player in an existing room and remember where they sit.

        Returns:
            The add_player result and the room the player now sits in, or
            None when the join was rejected.
        """
        room = self.get_room(room_id)
        if room is None:
            return ActionResult.fail(ErrorKind.ROOM_NOT_FOUND), None
        result = room.add_player(player)
        if not result.success:
            return result, None
        with self._lock:
            self._player_rooms[player.id] = room_id
        return result, room

    def get_room(self, room_id: str) -> Optional[GameRoom]:
        with self._lock:
            return self._rooms.get(room_id)

    def get_player_room(self, player_id: str) -> Optional[GameRoom]:
        """Get the room a player is seated in, if any."""
        with self._lock:
            room_id = self._player_rooms.get(player_id)
            return self._rooms.get(room_id) if room_id is not None else None

    def delete_room(self, room_id: str) -> bool:
        """Remove a room and its player mappings.

        Returns:
            True if the room existed.
        """
        with self._lock:
            room = self._rooms.pop(room_id, None)
            if room is None:
                return False
            for player in room.state.players:
                if self._player_rooms.get(player.id) == room_id:
                    del self._player_rooms[player.id]
        logger.info("room=%s deleted", room_id)
        return True

    def room_exists(self, room_id: str) -> bool:
        with self._lock:
            return room_id in self._rooms

    def all_room_ids(self) -> list[str]:
        with self._lock:
            return list(self._rooms.keys())

    def __len__(self) -> int:
        with self._lock:
            return len(self._rooms)
