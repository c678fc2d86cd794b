"""Deduction engine deciding whether a board can be solved without guessing."""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .board import Board
from .flood import flood_open
from .knowledge import CellState, KnowledgeGrid

DEFAULT_MIN_OPENED = 12
DEFAULT_MAX_ITERATIONS = 100

Snapshot = Tuple[Tuple[CellState, ...], ...]


@dataclass
class DeductionStats:
    """Counters for one run of the fixed-point loop."""

    passes: int = 0
    rule_a_count: int = 0
    rule_b_count: int = 0
    mines_marked: int = 0
    cells_opened: int = 0
    fixed_point: bool = False


@dataclass
class SolvabilityReport:
    """
    Outcome of a solvability check.

    reason is one of:
        "unsafe_start"   the start cell is a mine or touches one
        "small_opening"  the initial flood opened fewer than min_opened cells
        "solved"         every cell ended up OPENED or MINE
        "stalled"        a fixed point was reached with UNKNOWN cells left
        "iteration_cap"  the pass limit was hit with UNKNOWN cells left
    """

    solvable: bool
    reason: str
    knowledge: KnowledgeGrid
    opened_at_start: int = 0
    stats: DeductionStats = field(default_factory=DeductionStats)
    steps: List[Snapshot] = field(default_factory=list)


# -------------------------------------------------------------------------
# Fixed-point deduction
# -------------------------------------------------------------------------


def deduce(
    board: Board,
    knowledge: KnowledgeGrid,
    *,
    max_iterations: int = DEFAULT_MAX_ITERATIONS,
    steps: Optional[List[Snapshot]] = None,
) -> DeductionStats:
    """
    Apply the two single-cell rules to `knowledge` until nothing changes.

    For every OPENED(n) cell with n > 0, with `remaining` = n minus the deduced
    mines around it:
        Rule A: remaining > 0 and remaining == #unknown neighbors
                -> all unknown neighbors are mines.
        Rule B: remaining == 0 and some neighbors are unknown
                -> all unknown neighbors are safe and get flood-opened.

    Args:
        board: The true board, used to read counts of opened cells.
        knowledge: Grid mutated in place.
        max_iterations: Maximum number of full passes.
        steps: If given, a snapshot of the grid is appended after every pass.

    Returns:
        Counters for the run; `fixed_point` is False when the pass limit
        stopped the loop while rules were still firing.
    """
    stats = DeductionStats()
    made_progress = True

    while made_progress and stats.passes < max_iterations:
        made_progress = False
        stats.passes += 1

        for y in range(board.height):
            for x in range(board.width):
                state = knowledge[x, y]
                if not state.is_opened or state.count == 0:
                    continue

                unknown_neighbors: List[Tuple[int, int]] = []
                flagged_count = 0
                for nx, ny in board.neighbors(x, y):
                    neighbor = knowledge[nx, ny]
                    if neighbor.is_unknown:
                        unknown_neighbors.append((nx, ny))
                    elif neighbor.is_mine:
                        flagged_count += 1

                remaining = state.count - flagged_count

                if remaining > 0 and remaining == len(unknown_neighbors):
                    for nx, ny in unknown_neighbors:
                        knowledge.mark_mine(nx, ny)
                    stats.rule_a_count += 1
                    stats.mines_marked += len(unknown_neighbors)
                    made_progress = True

                elif remaining == 0 and unknown_neighbors:
                    for nx, ny in unknown_neighbors:
                        stats.cells_opened += len(flood_open(knowledge, board, nx, ny))
                    stats.rule_b_count += 1
                    made_progress = True

        if steps is not None:
            steps.append(knowledge.snapshot())

    stats.fixed_point = not made_progress
    return stats


# -------------------------------------------------------------------------
# Solvability check
# -------------------------------------------------------------------------


def check_solvability(
    board: Board,
    start_x: int,
    start_y: int,
    *,
    min_opened: int = DEFAULT_MIN_OPENED,
    max_iterations: int = DEFAULT_MAX_ITERATIONS,
    record_steps: bool = False,
) -> SolvabilityReport:
    """
    Simulate a guess-free solve of `board` starting from (start_x, start_y).

    Args:
        board: Candidate board.
        start_x: X-coordinate of the first opened cell.
        start_y: Y-coordinate of the first opened cell.
        min_opened: Smallest acceptable size of the initial opening.
        max_iterations: Maximum number of deduction passes.
        record_steps: If True, keep a knowledge snapshot after the initial
            flood and after every deduction pass.

    Returns:
        A SolvabilityReport; `solvable` is True only when no cell is left UNKNOWN.

    Raises:
        ValueError: If the start cell lies outside the board.
    """
    if not board.in_bounds(start_x, start_y):
        raise ValueError("Start cell is outside the board.")

    knowledge = KnowledgeGrid(board.width, board.height)

    if board.mine_at(start_x, start_y) or board.adjacent_mine_count(start_x, start_y):
        return SolvabilityReport(False, "unsafe_start", knowledge)

    flood_open(knowledge, board, start_x, start_y)
    opened_at_start = knowledge.opened_count

    steps: List[Snapshot] = []
    if record_steps:
        steps.append(knowledge.snapshot())

    if opened_at_start < min_opened:
        return SolvabilityReport(
            False, "small_opening", knowledge, opened_at_start, steps=steps
        )

    stats = deduce(
        board,
        knowledge,
        max_iterations=max_iterations,
        steps=steps if record_steps else None,
    )

    if knowledge.is_resolved():
        reason = "solved"
    elif stats.fixed_point:
        reason = "stalled"
    else:
        reason = "iteration_cap"

    return SolvabilityReport(
        knowledge.is_resolved(), reason, knowledge, opened_at_start, stats, steps
    )


def is_solvable(
    board: Board,
    start_x: int,
    start_y: int,
    *,
    min_opened: int = DEFAULT_MIN_OPENED,
    max_iterations: int = DEFAULT_MAX_ITERATIONS,
) -> bool:
    """Return True if `board` resolves completely by deduction from the start cell."""
    return check_solvability(
        board,
        start_x,
        start_y,
        min_opened=min_opened,
        max_iterations=max_iterations,
    ).solvable
