import pytest

from minesticker.knowledge import MINE, UNKNOWN, CellKind, KnowledgeGrid, opened


def test_new_grid_is_fully_unknown():
    grid = KnowledgeGrid(3, 2)
    assert all(state is UNKNOWN for _, state in grid.items())
    assert grid.unknown_count == 6
    assert not grid.is_resolved()


def test_open_and_mark_update_counters():
    grid = KnowledgeGrid(2, 1)
    assert grid.open(0, 0, 1)
    assert grid.mark_mine(1, 0)
    assert grid[0, 0] == opened(1)
    assert grid[1, 0] is MINE
    assert grid.opened_count == 1
    assert grid.mines_count == 1
    assert grid.is_resolved()


def test_repeated_transitions_are_no_ops():
    grid = KnowledgeGrid(2, 1)
    grid.open(0, 0, 0)
    grid.mark_mine(1, 0)
    assert not grid.open(0, 0, 0)
    assert not grid.mark_mine(1, 0)
    assert grid.opened_count == 1
    assert grid.mines_count == 1


def test_states_never_revert():
    grid = KnowledgeGrid(2, 1)
    grid.open(0, 0, 2)
    grid.mark_mine(1, 0)
    with pytest.raises(ValueError):
        grid.mark_mine(0, 0)
    with pytest.raises(ValueError):
        grid.open(0, 0, 3)
    with pytest.raises(ValueError):
        grid.open(1, 0, 1)


def test_opened_count_range():
    assert opened(8).kind is CellKind.OPENED
    with pytest.raises(ValueError):
        opened(9)
    with pytest.raises(ValueError):
        opened(-1)


def test_symbols():
    assert UNKNOWN.symbol() == "."
    assert MINE.symbol() == "M"
    assert opened(3).symbol() == "3"


def test_snapshot_is_detached_from_the_grid():
    grid = KnowledgeGrid(2, 2)
    before = grid.snapshot()
    grid.open(1, 0, 0)
    assert before[0][1] is UNKNOWN
    assert grid.snapshot()[0][1] == opened(0)
