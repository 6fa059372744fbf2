import random
from typing import List, Optional

BOARD_SIZE = 5
CELL_COUNT = BOARD_SIZE * BOARD_SIZE


def generate_board(rng: Optional[random.Random] = None) -> List[int]:
    """Return a fresh board: the numbers 1..25 in shuffled cell order.

    Fisher-Yates from the last index down to 1, swapping each cell with a
    uniformly chosen cell at or below it.
    """
    rng = rng or random
    numbers = list(range(1, CELL_COUNT + 1))
    for i in range(len(numbers) - 1, 0, -1):
        j = rng.randint(0, i)
        numbers[i], numbers[j] = numbers[j], numbers[i]
    return numbers
