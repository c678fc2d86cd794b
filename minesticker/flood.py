"""Flood-open: open a cell and cascade through zero-count neighbors."""

from collections import deque
from typing import Callable, Deque, List, Set, Tuple

from .board import Board
from .knowledge import KnowledgeGrid


def flood_region(
    board: Board,
    x: int,
    y: int,
    can_open: Callable[[int, int], bool],
) -> List[Tuple[int, int, int]]:
    """
    Collect the cells opened by a flood starting at (x, y).

    Mines are never opened, and cells rejected by `can_open` (already open,
    flagged, ...) are neither opened nor expanded.

    Args:
        board: Board providing mine positions and adjacent counts.
        x: X-coordinate of the starting cell.
        y: Y-coordinate of the starting cell.
        can_open: Predicate telling whether a cell may be opened by this flood.

    Returns:
        A list of cells to open as (x, y, adjacent_mine_count), in visit order.
    """
    frontier: Deque[Tuple[int, int]] = deque([(x, y)])
    visited: Set[Tuple[int, int]] = {(x, y)}
    opened_cells: List[Tuple[int, int, int]] = []

    while frontier:
        cx, cy = frontier.popleft()
        if not board.in_bounds(cx, cy) or board.mine_at(cx, cy):
            continue
        if not can_open(cx, cy):
            continue

        count = board.adjacent_mine_count(cx, cy)
        opened_cells.append((cx, cy, count))

        if count == 0:
            for nx, ny in board.neighbors(cx, cy):
                if (nx, ny) in visited:
                    continue
                visited.add((nx, ny))
                frontier.append((nx, ny))

    return opened_cells


def flood_open(
    knowledge: KnowledgeGrid, board: Board, x: int, y: int
) -> List[Tuple[int, int, int]]:
    """
    Flood-open (x, y) on a knowledge grid, recording OPENED(count) cells.

    Reapplying to an already opened region is a no-op.

    Returns:
        The newly opened cells as (x, y, adjacent_mine_count).
    """
    cells = flood_region(
        board, x, y, lambda cx, cy: knowledge[cx, cy].is_unknown
    )
    for cx, cy, count in cells:
        knowledge.open(cx, cy, count)
    return cells
