import pytest

from minesticker.board import Board
from minesticker.engine import Minesweeper
from minesticker.generator import GeneratorSettings

CORNER_MINE = ["*..", "...", "..."]


@pytest.fixture
def game():
    g = Minesweeper(3, 3, 1, "classic")
    g.board = Board.from_rows(CORNER_MINE)
    return g


def test_no_guessing_first_reveal_opens_a_safe_area():
    game = Minesweeper(9, 9, 10, seed=5)
    assert game.first_move

    status, payload = game.reveal(4, 4)

    assert status in (0, 1)
    assert not game.first_move
    assert game.board.mines_count == 10
    assert not game.fallback_used
    assert game.generation_attempts >= 1
    assert len(payload["revealed_cells"]) >= 12
    assert (4, 4, 0) in payload["revealed_cells"]


def test_no_guessing_fallback_is_reported():
    settings = GeneratorSettings(max_attempts=3, min_opened=10_000)
    game = Minesweeper(9, 9, 10, settings=settings, seed=1)
    status, _ = game.reveal(0, 0)
    assert status in (0, 1)
    assert game.fallback_used
    assert game.generation_attempts == 3
    assert not game.board.mine_at(0, 0)


def test_classic_first_reveal_clears_starter_area():
    game = Minesweeper(9, 9, 10, "classic", seed=1)
    game.reveal(4, 4)
    for x in range(3, 6):
        for y in range(3, 6):
            assert not game.board.mine_at(x, y)
    assert game.board.mines_count == 10


def test_classic_dense_board_keeps_only_first_cell_safe():
    game = Minesweeper(3, 3, 8, "classic", seed=1)
    status, payload = game.reveal(1, 1)
    assert status == 1
    assert payload["revealed_cells"] == [(1, 1, 8)]


def test_reveal_zero_floods_to_a_win(game):
    status, payload = game.reveal(2, 2)
    assert status == 1
    assert game.won and game.game_over
    assert len(payload["revealed_cells"]) == 8


def test_reveal_mine_loses(game):
    status, payload = game.reveal(0, 0)
    assert status == -1
    assert game.game_over and not game.won
    assert payload["all_mines"] == frozenset({(0, 0)})
    assert payload["revealed_cells_count"] == 0
    assert game.reveal(2, 2) == (0, {})


def test_repeated_reveal_is_a_no_op(game):
    game.reveal(1, 1)
    assert game.reveal(1, 1) == (0, {})


def test_flags_block_reveal_and_are_limited_by_mine_count(game):
    game.reveal(1, 1)
    assert game.toggle_flag(0, 0)
    assert game.remaining_mines == 0
    assert not game.toggle_flag(2, 2)
    assert game.reveal(0, 0) == (0, {})
    assert game.toggle_flag(0, 0)
    assert game.remaining_mines == 1
    assert not game.toggle_flag(1, 1)


def test_flag_before_first_reveal_is_rejected():
    game = Minesweeper(5, 5, 3)
    assert not game.toggle_flag(0, 0)
    assert game.flags_count == 0


def test_chord_opens_neighbors_when_flags_match(game):
    game.reveal(1, 1)
    game.toggle_flag(0, 0)
    status, payload = game.chord(1, 1)
    assert status == 1
    assert game.unrevealed_count == 0
    assert {(x, y) for x, y, _ in payload["revealed_cells"]} == {
        (1, 0), (2, 0), (0, 1), (2, 1), (0, 2), (1, 2), (2, 2)
    }


def test_chord_with_misplaced_flag_hits_the_mine(game):
    game.reveal(1, 1)
    game.toggle_flag(1, 0)
    status, payload = game.chord(1, 1)
    assert status == -1
    assert game.game_over
    assert (0, 0) in payload["all_mines"]


def test_chord_without_matching_flags_does_nothing(game):
    game.reveal(1, 1)
    assert game.chord(1, 1) == (0, {})
    assert game.chord(2, 2) == (0, {})
    assert game.unrevealed_count == 7


def test_out_of_bounds_moves_raise(game):
    with pytest.raises(ValueError):
        game.reveal(3, 0)
    with pytest.raises(ValueError):
        game.toggle_flag(0, -1)
    with pytest.raises(ValueError):
        game.chord(5, 5)


@pytest.mark.parametrize(
    "args, kwargs",
    [
        ((0, 3, 1), {}),
        ((3, 3, 9), {}),
        ((3, 3, 1), {"mines_generation_algorithm": "safe_first_action_rule"}),
    ],
)
def test_invalid_games_are_rejected(args, kwargs):
    with pytest.raises(ValueError):
        Minesweeper(*args, **kwargs)


def test_place_mines_only_once(game):
    with pytest.raises(ValueError):
        game.place_mines(0, 0)


def test_format_board_hides_unrevealed_cells(game):
    game.reveal(1, 1)
    game.toggle_flag(0, 0)
    plain = game.format_board(color=False).splitlines()
    assert plain[2:] == [
        " 0 | F  .  .",
        " 1 | .  1  .",
        " 2 | .  .  .",
    ]
    full = game.format_board(reveal_all=True, color=False).splitlines()
    assert full[2] == " 0 | M  1  0"
