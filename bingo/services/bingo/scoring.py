from typing import Sequence, Tuple

from .board import BOARD_SIZE


def _build_lines() -> Tuple[Tuple[int, ...], ...]:
    rows = [tuple(row * BOARD_SIZE + col for col in range(BOARD_SIZE)) for row in range(BOARD_SIZE)]
    cols = [tuple(row * BOARD_SIZE + col for row in range(BOARD_SIZE)) for col in range(BOARD_SIZE)]
    diagonal = tuple(i * BOARD_SIZE + i for i in range(BOARD_SIZE))
    anti_diagonal = tuple(i * BOARD_SIZE + (BOARD_SIZE - 1 - i) for i in range(BOARD_SIZE))
    return tuple(rows + cols + [diagonal, anti_diagonal])


# Five rows, five columns, then the two diagonals
WINNING_LINES: Tuple[Tuple[int, ...], ...] = _build_lines()


def count_lines(selected: Sequence[bool]) -> int:
    """Count fully selected rows, columns and diagonals (0..12).

    Always recomputed from the full selection; a single claim can complete
    several lines at once (a corner finishing a row and a diagonal).
    """
    return sum(1 for line in WINNING_LINES if all(selected[i] for i in line))
