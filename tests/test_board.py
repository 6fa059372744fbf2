import random

from bingo.services.bingo.board import CELL_COUNT, generate_board
from bingo.services.bingo.opponent import choose_move


def test_board_is_permutation_of_1_to_25():
    rng = random.Random(1234)
    for _ in range(200):
        board = generate_board(rng)
        assert len(board) == CELL_COUNT
        assert sorted(board) == list(range(1, 26))


def test_board_is_reproducible_with_seeded_rng():
    assert generate_board(random.Random(7)) == generate_board(random.Random(7))


def test_boards_are_shuffled():
    rng = random.Random(99)
    boards = {tuple(generate_board(rng)) for _ in range(20)}
    assert len(boards) > 1


def test_opponent_picks_only_unselected_cells():
    board = list(range(1, 26))
    selected = [True] * 25
    selected[3] = False
    selected[17] = False
    rng = random.Random(5)
    picks = {choose_move(board, selected, rng) for _ in range(50)}
    assert picks == {4, 18}


def test_opponent_has_no_move_on_full_board():
    assert choose_move(list(range(1, 26)), [True] * 25) is None
