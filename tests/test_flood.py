from minesticker.board import Board
from minesticker.flood import flood_open, flood_region
from minesticker.knowledge import KnowledgeGrid


BOARD = Board.from_rows([
    ".....",
    ".....",
    "...*.",
    ".....",
])


def test_flood_opens_zero_region_and_its_border():
    grid = KnowledgeGrid(BOARD.width, BOARD.height)
    cells = flood_open(grid, BOARD, 0, 0)

    # (3,3), (4,2) and (4,3) sit behind the numbered ring around the mine.
    assert len(cells) == 16
    assert grid[3, 2].is_unknown
    assert grid[4, 3].is_unknown
    assert grid[4, 1].count == 1
    assert grid[2, 1].count == 1
    assert grid[0, 0].count == 0


def test_flood_from_numbered_cell_opens_only_that_cell():
    grid = KnowledgeGrid(BOARD.width, BOARD.height)
    cells = flood_open(grid, BOARD, 2, 2)
    assert cells == [(2, 2, 1)]
    assert grid.opened_count == 1


def test_flood_never_opens_mines():
    grid = KnowledgeGrid(BOARD.width, BOARD.height)
    assert flood_open(grid, BOARD, 3, 2) == []
    assert grid[3, 2].is_unknown


def test_flood_open_is_idempotent():
    grid = KnowledgeGrid(BOARD.width, BOARD.height)
    flood_open(grid, BOARD, 0, 0)
    once = grid.snapshot()

    assert flood_open(grid, BOARD, 0, 0) == []
    assert grid.snapshot() == once


def test_flood_skips_deduced_mines_and_out_of_bounds_start():
    board = Board.from_rows(["*..", "...", "..."])
    grid = KnowledgeGrid(3, 3)
    grid.mark_mine(0, 0)
    flood_open(grid, board, 2, 2)
    assert grid[0, 0].is_mine
    assert grid.is_resolved()
    assert flood_region(board, -1, 5, lambda x, y: True) == []


def test_flood_region_respects_predicate():
    blocked = {(2, 0), (2, 1), (2, 2), (2, 3)}
    cells = flood_region(BOARD, 0, 0, lambda x, y: (x, y) not in blocked)
    assert {(x, y) for x, y, _ in cells} == {(x, y) for x in range(2) for y in range(4)}
