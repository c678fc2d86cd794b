"""No-guessing board generation with a classic random fallback."""

import logging
import random
import threading
import time
from dataclasses import dataclass
from typing import AbstractSet, Dict, FrozenSet, Iterable, Optional, Set, Tuple

from .board import Board
from .solver import DEFAULT_MAX_ITERATIONS, DEFAULT_MIN_OPENED, is_solvable
from .utils import chebyshev_zone

logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 2000
DEFAULT_FORBIDDEN_RADIUS = 2

# name -> (width, height, mines)
DIFFICULTY_PRESETS: Dict[str, Tuple[int, int, int]] = {
    "easy": (9, 9, 10),
    "normal": (16, 16, 40),
    "hard": (30, 16, 99),
}


class GenerationCancelled(RuntimeError):
    """Raised when a caller cancels a board search between attempts."""


@dataclass(frozen=True)
class GeneratorSettings:
    """
    Tuning knobs for the no-guessing search.

    max_attempts: candidate boards sampled before falling back.
    min_opened: smallest acceptable initial opening around the start.
    max_iterations: deduction passes allowed per candidate.
    forbidden_radius: Chebyshev radius around the start kept free of mines.
    progress_every: log a progress line every this many attempts.
    """

    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    min_opened: int = DEFAULT_MIN_OPENED
    max_iterations: int = DEFAULT_MAX_ITERATIONS
    forbidden_radius: int = DEFAULT_FORBIDDEN_RADIUS
    progress_every: int = 100

    def __post_init__(self) -> None:
        if self.max_attempts < 0:
            raise ValueError("max_attempts must be non-negative.")
        if self.min_opened < 0:
            raise ValueError("min_opened must be non-negative.")
        if self.max_iterations < 1:
            raise ValueError("max_iterations must be at least 1.")
        if self.forbidden_radius < 0:
            raise ValueError("forbidden_radius must be non-negative.")
        if self.progress_every < 1:
            raise ValueError("progress_every must be at least 1.")


@dataclass
class GenerationResult:
    """A generated board plus how it was obtained."""

    board: Board
    attempts: int
    fallback_used: bool
    elapsed: float


def validate_board_request(
    width: int, height: int, mine_count: int, start_x: int, start_y: int
) -> None:
    """
    Check generation arguments.

    Raises:
        ValueError: If dimensions, mine count or start cell are out of range.
    """
    if width < 1 or height < 1:
        raise ValueError("Width and height must be at least 1.")
    if not 0 <= mine_count < width * height:
        raise ValueError("mine_count must be in [0, width * height).")
    if not (0 <= start_x < width and 0 <= start_y < height):
        raise ValueError("Start cell is outside the board.")


def forbidden_zone(
    width: int,
    height: int,
    start_x: int,
    start_y: int,
    radius: int = DEFAULT_FORBIDDEN_RADIUS,
) -> FrozenSet[Tuple[int, int]]:
    """Cells around the start where the no-guessing path never places a mine."""
    return chebyshev_zone(width, height, start_x, start_y, radius)


def sample_mines(
    width: int,
    height: int,
    count: int,
    excluded: AbstractSet[Tuple[int, int]],
    rng: random.Random,
) -> FrozenSet[Tuple[int, int]]:
    """
    Pick `count` distinct cells uniformly at random outside `excluded`.

    Draws are rejected and redrawn when they hit an excluded or already chosen cell.

    Raises:
        ValueError: If fewer than `count` cells are available.
    """
    total = width * height
    available = total - sum(
        1 for x, y in excluded if 0 <= x < width and 0 <= y < height
    )
    if count > available:
        raise ValueError(
            f"Cannot place {count} mines in {available} available cells."
        )

    mines: Set[Tuple[int, int]] = set()
    while len(mines) < count:
        idx = rng.randrange(total)
        cell = (idx % width, idx // width)
        if cell in excluded:
            continue
        mines.add(cell)
    return frozenset(mines)


def generate_classic_board(
    width: int,
    height: int,
    mine_count: int,
    rng: Optional[random.Random] = None,
    safe: Iterable[Tuple[int, int]] = (),
) -> Board:
    """Place mines uniformly at random, keeping only the `safe` cells clear."""
    rng = rng or random.Random()
    return Board(width, height, sample_mines(width, height, mine_count, frozenset(safe), rng))


# -------------------------------------------------------------------------
# No-guessing search
# -------------------------------------------------------------------------


def _search(
    width: int,
    height: int,
    mine_count: int,
    start_x: int,
    start_y: int,
    settings: GeneratorSettings,
    rng: random.Random,
    cancel: Optional[threading.Event],
) -> Tuple[Optional[Board], int]:
    """Run the bounded attempt loop; return the first solvable board and attempts used."""
    zone = forbidden_zone(width, height, start_x, start_y, settings.forbidden_radius)
    if mine_count > width * height - len(zone):
        logger.warning(
            "%d mines do not fit outside the %d-cell start zone of a %dx%d board",
            mine_count,
            len(zone),
            width,
            height,
        )
        return None, 0

    logger.debug(
        "Searching no-guessing %dx%d board with %d mines from (%d, %d)",
        width,
        height,
        mine_count,
        start_x,
        start_y,
    )

    for attempt in range(1, settings.max_attempts + 1):
        if cancel is not None and cancel.is_set():
            raise GenerationCancelled(f"Board search cancelled at attempt {attempt}.")

        mines = sample_mines(width, height, mine_count, zone, rng)
        candidate = Board(width, height, mines)

        if is_solvable(
            candidate,
            start_x,
            start_y,
            min_opened=settings.min_opened,
            max_iterations=settings.max_iterations,
        ):
            logger.info("Found no-guessing board on attempt %d", attempt)
            return candidate, attempt

        if attempt % settings.progress_every == 0:
            logger.debug(
                "Still searching... attempt %d/%d", attempt, settings.max_attempts
            )

    return None, settings.max_attempts


def generate_no_guess_board(
    width: int,
    height: int,
    mine_count: int,
    start_x: int,
    start_y: int,
    *,
    settings: Optional[GeneratorSettings] = None,
    rng: Optional[random.Random] = None,
    cancel: Optional[threading.Event] = None,
) -> Optional[Board]:
    """
    Search for a board solvable by deduction from (start_x, start_y).

    Returns:
        The first solvable candidate, or None when every attempt failed.

    Raises:
        ValueError: If the request is invalid.
        GenerationCancelled: If `cancel` is set before an attempt starts.
    """
    validate_board_request(width, height, mine_count, start_x, start_y)
    board, _ = _search(
        width,
        height,
        mine_count,
        start_x,
        start_y,
        settings or GeneratorSettings(),
        rng or random.Random(),
        cancel,
    )
    return board


def generate(
    width: int,
    height: int,
    mine_count: int,
    start_x: int,
    start_y: int,
    *,
    settings: Optional[GeneratorSettings] = None,
    rng: Optional[random.Random] = None,
    cancel: Optional[threading.Event] = None,
) -> GenerationResult:
    """
    Generate a board, preferring a no-guessing one.

    When the search is exhausted the board comes from classic random placement
    with only the start cell kept clear, and `fallback_used` is set.

    Raises:
        ValueError: If the request is invalid.
        GenerationCancelled: If `cancel` is set before an attempt starts.
    """
    validate_board_request(width, height, mine_count, start_x, start_y)
    settings = settings or GeneratorSettings()
    rng = rng or random.Random()

    started = time.perf_counter()
    board, attempts = _search(
        width, height, mine_count, start_x, start_y, settings, rng, cancel
    )

    fallback_used = board is None
    if board is None:
        logger.warning(
            "Could not find a no-guessing board after %d attempts, using classic",
            attempts,
        )
        board = generate_classic_board(
            width, height, mine_count, rng, safe=((start_x, start_y),)
        )

    return GenerationResult(
        board=board,
        attempts=attempts,
        fallback_used=fallback_used,
        elapsed=time.perf_counter() - started,
    )


def generate_board(
    width: int,
    height: int,
    mine_count: int,
    start_x: int,
    start_y: int,
    *,
    settings: Optional[GeneratorSettings] = None,
    rng: Optional[random.Random] = None,
    cancel: Optional[threading.Event] = None,
) -> Board:
    """Return a board with exactly `mine_count` mines; see generate()."""
    return generate(
        width,
        height,
        mine_count,
        start_x,
        start_y,
        settings=settings,
        rng=rng,
        cancel=cancel,
    ).board
