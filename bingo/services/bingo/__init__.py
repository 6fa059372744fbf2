"""Bingo domain services: boards, line scoring, opponent policy and timers.

This package contains the room state machine's collaborators and should be
imported by socket handlers and HTTP routes, keeping transport concerns
separated from core game mechanics.
"""

from .board import BOARD_SIZE, CELL_COUNT, generate_board
from .scoring import WINNING_LINES, count_lines

__all__ = ['BOARD_SIZE', 'CELL_COUNT', 'generate_board', 'WINNING_LINES', 'count_lines']
