"""Recoverable room errors.

Each error carries a stable ``reason`` for clients and a readable message.
They are raised before any room state changes and reported back to the
connection that sent the intent.
"""


class RoomError(Exception):
    reason = 'room_error'
    default_message = 'Room operation failed'

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self):
        return {'reason': self.reason, 'message': self.message}


class RoomNotFound(RoomError):
    reason = 'room_not_found'
    default_message = 'Room not found'


class InvalidJoin(RoomError):
    reason = 'invalid_join'
    default_message = 'Room is full'


class NotStarted(RoomError):
    reason = 'not_started'
    default_message = 'Game not started yet'


class NotYourTurn(RoomError):
    reason = 'not_your_turn'
    default_message = 'Not your turn'


class AlreadyClaimed(RoomError):
    reason = 'already_claimed'
    default_message = 'Number already selected'


class GameFinished(RoomError):
    reason = 'game_finished'
    default_message = 'Game is already over'


class InvalidNumber(RoomError):
    reason = 'invalid_number'
    default_message = 'Number must be between 1 and 25'
