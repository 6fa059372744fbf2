import logging
import random
import string
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set, Union

from bingo.errors import (
    AlreadyClaimed, GameFinished, InvalidJoin, InvalidNumber, NotStarted, NotYourTurn,
)
from bingo.services.bingo.board import CELL_COUNT, generate_board
from bingo.services.bingo.opponent import choose_move
from bingo.services.bingo.scoring import count_lines

logger = logging.getLogger(__name__)

# Reserved participant id for the scripted opponent
OPPONENT_ID = 'AI'
LINES_TO_WIN = 5

PENDING = 'pending'
ACTIVE = 'active'
FINISHED = 'finished'


def generate_room_code(length=4, rng=None):
    """Generate a short base-36 room code, upper-cased.

    Existing codes are not checked; a collision is an accepted risk.
    """
    rng = rng or random
    return ''.join(rng.choices(string.ascii_lowercase + string.digits, k=length)).upper()


@dataclass
class Seat:
    participant_id: str
    board: List[int]
    selected: List[bool] = field(default_factory=lambda: [False] * CELL_COUNT)
    lines: int = 0

    def mark(self, number: int) -> bool:
        """Select ``number`` if it is on this board and rescore. Returns whether it was."""
        try:
            index = self.board.index(number)
        except ValueError:
            return False
        self.selected[index] = True
        self.lines = count_lines(self.selected)
        return True


@dataclass
class ClaimUpdate:
    room_code: str
    selected_number: int
    player_id: str
    current_turn: str
    lines: Dict[str, int]
    game_over = False

    def to_dict(self):
        return {
            'selected_number': self.selected_number,
            'player_id': self.player_id,
            'current_turn': self.current_turn,
            'lines': dict(self.lines),
        }


@dataclass
class GameOver:
    room_code: str
    selected_number: int
    player_id: str
    winner: str
    players: List[str]
    lines: Dict[str, int]
    game_over = True

    def to_dict(self):
        return {
            'winner': self.winner,
            'players': list(self.players),
        }


ClaimResult = Union[ClaimUpdate, GameOver]


class Room:
    """One bingo game between two participants.

    The creator always holds the first seat and moves first. Claims are
    applied to seats in seat order, so the creator wins a tie completed by
    the same number.
    """

    def __init__(self, code: str, creator_id: str, vs_computer: bool = False,
                 rng: Optional[random.Random] = None):
        self.code = code
        self.vs_computer = bool(vs_computer)
        self._rng = rng
        self.seats: List[Seat] = [Seat(creator_id, generate_board(rng))]
        self.claimed: Set[int] = set()
        self.claim_history: List[int] = []
        self.winner: Optional[str] = None
        self.current_turn = creator_id
        if self.vs_computer:
            self.seats.append(Seat(OPPONENT_ID, generate_board(rng)))
            self.status = ACTIVE
        else:
            self.status = PENDING

    @property
    def players(self) -> List[str]:
        return [s.participant_id for s in self.seats]

    @property
    def creator_id(self) -> str:
        return self.seats[0].participant_id

    @property
    def started(self) -> bool:
        return self.status != PENDING

    @property
    def finished(self) -> bool:
        return self.status == FINISHED

    @property
    def is_full(self) -> bool:
        return len(self.seats) >= 2

    @property
    def awaiting_opponent(self) -> bool:
        return self.vs_computer and self.status == ACTIVE and self.current_turn == OPPONENT_ID

    def seat_for(self, participant_id: str) -> Optional[Seat]:
        for seat in self.seats:
            if seat.participant_id == participant_id:
                return seat
        return None

    def board_for(self, participant_id: str) -> Optional[List[int]]:
        seat = self.seat_for(participant_id)
        return list(seat.board) if seat else None

    def player_number(self, participant_id: str) -> Optional[int]:
        for idx, seat in enumerate(self.seats):
            if seat.participant_id == participant_id:
                return idx + 1
        return None

    def line_counts(self) -> Dict[str, int]:
        return {s.participant_id: s.lines for s in self.seats}

    def join(self, participant_id: str) -> Seat:
        if self.vs_computer:
            raise InvalidJoin('Cannot join a game against the computer')
        if self.seat_for(participant_id) is not None:
            raise InvalidJoin('Already in this room')
        if self.is_full:
            raise InvalidJoin('Room is full')
        seat = Seat(participant_id, generate_board(self._rng))
        self.seats.append(seat)
        self.status = ACTIVE
        # current_turn stays with the creator
        return seat

    def claim(self, participant_id: str, number: int) -> ClaimResult:
        if self.status == PENDING:
            raise NotStarted()
        if self.status == FINISHED:
            raise GameFinished()
        if participant_id != self.current_turn:
            raise NotYourTurn()
        if not 1 <= number <= CELL_COUNT:
            raise InvalidNumber()
        if number in self.claimed:
            raise AlreadyClaimed()

        self.claimed.add(number)
        self.claim_history.append(number)

        for seat in self.seats:
            if not seat.mark(number):
                continue
            logger.debug('Room %s: %s now has %d lines', self.code, seat.participant_id, seat.lines)
            if seat.lines >= LINES_TO_WIN:
                self.status = FINISHED
                self.winner = seat.participant_id
                logger.info('Room %s won by %s on %d', self.code, self.winner, number)
                return GameOver(
                    room_code=self.code,
                    selected_number=number,
                    player_id=participant_id,
                    winner=self.winner,
                    players=self.players,
                    lines=self.line_counts(),
                )

        self.current_turn = self._other(participant_id)
        return ClaimUpdate(
            room_code=self.code,
            selected_number=number,
            player_id=participant_id,
            current_turn=self.current_turn,
            lines=self.line_counts(),
        )

    def opponent_move(self) -> Optional[ClaimResult]:
        """Let the scripted opponent claim a number, if it is its turn.

        Returns None when no move is made; the turn then stays with the
        opponent.
        """
        if not self.awaiting_opponent:
            return None
        seat = self.seat_for(OPPONENT_ID)
        number = choose_move(seat.board, seat.selected, self._rng)
        if number is None or number in self.claimed:
            logger.warning('Room %s: opponent has no legal move (picked %s)', self.code, number)
            return None
        return self.claim(OPPONENT_ID, number)

    def start_payload(self):
        return {
            'current_turn': self.current_turn,
            'players': self.players,
            'vs_computer': self.vs_computer,
        }

    def to_dict(self):
        """Public snapshot; boards are private to their owners."""
        return {
            'room_code': self.code,
            'status': self.status,
            'vs_computer': self.vs_computer,
            'players': self.players,
            'current_turn': self.current_turn,
            'lines': self.line_counts(),
            'claimed_numbers': list(self.claim_history),
            'winner': self.winner,
        }

    def _other(self, participant_id: str) -> str:
        for seat in self.seats:
            if seat.participant_id != participant_id:
                return seat.participant_id
        return participant_id
