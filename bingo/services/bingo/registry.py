import logging
import random
import threading
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from bingo.errors import RoomNotFound
from bingo.models import ClaimResult, Room, generate_room_code

logger = logging.getLogger(__name__)


@dataclass
class Departure:
    """A room torn down because a participant left.

    ``notify`` is set when a remaining human must be told the other player
    disconnected.
    """
    room: Room
    participant_id: str
    notify: bool


class RoomRegistry:
    """Process-scoped table of active rooms keyed by room code.

    Every operation runs under a single lock, so intents against the
    registry are applied one at a time. Finished rooms are kept until a
    participant leaves.
    """

    def __init__(self, code_length: int = 4, rng: Optional[random.Random] = None):
        self.code_length = code_length
        self._rng = rng
        self._rooms: Dict[str, Room] = {}
        self._lock = threading.RLock()
        self._removal_hooks: List[Callable[[str], None]] = []

    def __len__(self) -> int:
        with self._lock:
            return len(self._rooms)

    def __contains__(self, code) -> bool:
        return self.find(code) is not None

    def add_removal_hook(self, hook: Callable[[str], None]) -> None:
        self._removal_hooks.append(hook)

    def rooms(self) -> List[Room]:
        with self._lock:
            return list(self._rooms.values())

    def create_room(self, creator_id: str, vs_computer: bool = False) -> Room:
        with self._lock:
            code = generate_room_code(self.code_length, self._rng)
            if code in self._rooms:
                logger.warning('Room code %s collided; replacing existing room', code)
            room = Room(code, creator_id, vs_computer=vs_computer, rng=self._rng)
            self._rooms[code] = room
            logger.info('Room %s created by %s%s', code, creator_id, ' (vs computer)' if vs_computer else '')
            return room

    def find(self, code: Optional[str]) -> Optional[Room]:
        if not code:
            return None
        with self._lock:
            return self._rooms.get(code.upper())

    def get(self, code: Optional[str]) -> Room:
        room = self.find(code)
        if not room:
            raise RoomNotFound()
        return room

    def join_room(self, code: str, participant_id: str) -> Room:
        with self._lock:
            room = self.get(code)
            room.join(participant_id)
            logger.info('%s joined room %s', participant_id, room.code)
            return room

    def claim(self, code: str, participant_id: str, number: int) -> ClaimResult:
        with self._lock:
            room = self.get(code)
            result = room.claim(participant_id, number)
            logger.info('Room %s: %s claimed %d', room.code, participant_id, number)
            return result

    def play_opponent_turn(self, code: str, room: Room) -> Optional[ClaimResult]:
        """Apply the scripted opponent's move if ``room`` is still the live room for ``code``."""
        with self._lock:
            if self._rooms.get(code) is not room:
                logger.info('Room %s no longer active; skipping opponent move', code)
                return None
            result = room.opponent_move()
            if result is not None:
                logger.info('Room %s: opponent claimed %d', code, result.selected_number)
            return result

    def leave(self, code: str, participant_id: str) -> Optional[Departure]:
        with self._lock:
            room = self.find(code)
            if not room or participant_id not in room.players:
                return None
            self._remove(room.code)
            return Departure(room, participant_id, notify=not room.vs_computer)

    def disconnect(self, participant_id: str) -> List[Departure]:
        """Tear down every room the participant belongs to."""
        with self._lock:
            departures = []
            for code, room in list(self._rooms.items()):
                if participant_id in room.players:
                    self._remove(code)
                    departures.append(Departure(room, participant_id, notify=not room.vs_computer))
            return departures

    def _remove(self, code: str) -> None:
        self._rooms.pop(code, None)
        logger.info('Room %s deleted', code)
        for hook in self._removal_hooks:
            hook(code)
