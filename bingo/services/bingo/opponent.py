import random
from typing import Optional, Sequence


def choose_move(board: Sequence[int], selected: Sequence[bool],
                rng: Optional[random.Random] = None) -> Optional[int]:
    """Pick a random number from the opponent's own unselected cells.

    Only the opponent's board is consulted; whether the number is still free
    room-wide is checked by the room when the claim is applied.
    """
    rng = rng or random
    open_cells = [i for i, done in enumerate(selected) if not done]
    if not open_cells:
        return None
    return board[rng.choice(open_cells)]
