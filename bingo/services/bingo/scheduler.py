import logging
import threading
import time
from typing import Callable, Dict, Optional

from bingo.models import ClaimResult, Room

logger = logging.getLogger(__name__)


class PendingMove:
    """One-shot handle for a deferred opponent move in a single room."""

    def __init__(self, room: Room, namespace: Optional[str] = None):
        self.room = room
        self.code = room.code
        self.namespace = namespace
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class OpponentScheduler:
    """Schedule the scripted opponent's reply after a fixed thinking delay.

    - At most one pending move per room code; scheduling again replaces it
    - Removing a room from the registry cancels its pending move
    - When the move fires it is applied only if the registry still holds the
      same room and the turn is still the opponent's
    """

    def __init__(self, registry, spawn: Callable, sleep: Callable[[float], None] = time.sleep,
                 delay: float = 1.0,
                 on_result: Optional[Callable[[Room, ClaimResult, Optional[str]], None]] = None):
        self.registry = registry
        self.delay = delay
        self.on_result = on_result
        self._spawn = spawn
        self._sleep = sleep
        self._pending: Dict[str, PendingMove] = {}
        self._lock = threading.Lock()
        registry.add_removal_hook(self.cancel)

    def pending(self, code: str) -> bool:
        with self._lock:
            return code in self._pending

    def schedule_if_needed(self, room: Optional[Room], namespace: Optional[str] = None) -> Optional[PendingMove]:
        if room is None or not room.awaiting_opponent:
            return None
        return self.schedule(room, namespace)

    def schedule(self, room: Room, namespace: Optional[str] = None) -> PendingMove:
        handle = PendingMove(room, namespace)
        with self._lock:
            previous = self._pending.get(room.code)
            if previous:
                previous.cancel()
            self._pending[room.code] = handle
        logger.info('[opponent-set] room=%s delay=%ss', room.code, self.delay)
        self._spawn(self._worker, handle)
        return handle

    def cancel(self, code: str) -> None:
        with self._lock:
            handle = self._pending.pop(code, None)
        if handle:
            handle.cancel()
            logger.info('[opponent-cancel] room=%s', code)

    def _worker(self, handle: PendingMove) -> None:
        if self.delay > 0:
            self._sleep(self.delay)
        with self._lock:
            if self._pending.get(handle.code) is handle:
                del self._pending[handle.code]
        if handle.cancelled:
            logger.info('[opponent-abort] room=%s cancelled', handle.code)
            return
        result = self.registry.play_opponent_turn(handle.code, handle.room)
        if result is None:
            logger.info('[opponent-abort] room=%s no move made', handle.code)
            return
        logger.info('[opponent-fire] room=%s number=%d', handle.code, result.selected_number)
        if self.on_result:
            self.on_result(handle.room, result, handle.namespace)
