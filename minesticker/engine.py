"""Minesweeper game engine with first-click board generation, flags and chording."""

import logging
import random
from typing import Dict, FrozenSet, List, Optional, Tuple

from .board import Board
from .flood import flood_region
from .generator import GeneratorSettings, generate, generate_classic_board
from .utils import chebyshev_zone

logger = logging.getLogger(__name__)

GENERATION_ALGORITHMS = ("no_guessing", "classic")


class Minesweeper:
    """Minesweeper game whose mines are placed when the first cell is revealed."""

    def __init__(
        self,
        width: int,
        height: int,
        mines_count: int,
        mines_generation_algorithm: str = "no_guessing",
        *,
        seed: Optional[int] = None,
        settings: Optional[GeneratorSettings] = None,
    ) -> None:
        """
        Initialize a Minesweeper game engine.

        Args:
            width: Board width (number of columns), must be > 0.
            height: Board height (number of rows), must be > 0.
            mines_count: Total number of mines, in [0, width * height).
            mines_generation_algorithm: Mine placement rule; one of
                {"no_guessing", "classic"}.
            seed: Optional seed for reproducible boards.
            settings: Search settings for the "no_guessing" rule.

        Raises:
            ValueError: If dimensions are invalid or algorithm is unrecognized.
        """
        if width <= 0 or height <= 0:
            raise ValueError("Width and height must be positive.")
        if not 0 <= mines_count < width * height:
            raise ValueError("mines_count must be in [0, width * height).")
        if mines_generation_algorithm not in GENERATION_ALGORITHMS:
            raise ValueError(
                'mines_generation_algorithm must be "no_guessing" or "classic".'
            )

        self.width: int = width
        self.height: int = height
        self.mines_count: int = mines_count
        self.mines_generation_algorithm: str = mines_generation_algorithm
        self.settings: GeneratorSettings = settings or GeneratorSettings()
        self.rng: random.Random = random.Random(seed)

        self.board: Optional[Board] = None
        self.fallback_used: bool = False
        self.generation_attempts: int = 0

        self.revealed: List[List[bool]] = [
            [False for _ in range(width)] for _ in range(height)
        ]
        self.flagged: List[List[bool]] = [
            [False for _ in range(width)] for _ in range(height)
        ]
        self.unrevealed_count: int = width * height - mines_count
        self.game_over: bool = False
        self.won: bool = False

    @property
    def first_move(self) -> bool:
        return self.board is None

    @property
    def flags_count(self) -> int:
        return sum(row.count(True) for row in self.flagged)

    @property
    def remaining_mines(self) -> int:
        return self.mines_count - self.flags_count

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def _check_bounds(self, x: int, y: int) -> None:
        if not self.in_bounds(x, y):
            raise ValueError("Cell coordinates are outside the board.")

    def place_mines(self, first_x: int, first_y: int) -> None:
        """
        Generate the board (one-time) around the first revealed cell.

        Raises:
            ValueError: If the board was already generated.
        """
        if self.board is not None:
            raise ValueError("The board is already generated.")

        if self.mines_generation_algorithm == "no_guessing":
            result = generate(
                self.width,
                self.height,
                self.mines_count,
                first_x,
                first_y,
                settings=self.settings,
                rng=self.rng,
            )
            self.board = result.board
            self.fallback_used = result.fallback_used
            self.generation_attempts = result.attempts
        else:
            # Keep the 3x3 starter area clear when there is room for it.
            safe = chebyshev_zone(self.width, self.height, first_x, first_y, 1)
            if self.mines_count > self.width * self.height - len(safe):
                safe = frozenset({(first_x, first_y)})
            self.board = generate_classic_board(
                self.width, self.height, self.mines_count, self.rng, safe=safe
            )

        logger.debug(
            "Placed %d mines (%s) around first cell (%d, %d)",
            self.mines_count,
            self.mines_generation_algorithm,
            first_x,
            first_y,
        )

    def _open(self, x: int, y: int) -> List[Tuple[int, int, int]]:
        """Flood-open from (x, y) through unrevealed, unflagged cells."""
        assert self.board is not None
        cells = flood_region(
            self.board,
            x,
            y,
            lambda cx, cy: not self.revealed[cy][cx] and not self.flagged[cy][cx],
        )
        for cx, cy, _ in cells:
            self.revealed[cy][cx] = True
            self.unrevealed_count -= 1
        return cells

    def _lose(self) -> Dict[str, object]:
        assert self.board is not None
        self.game_over = True
        revealed_cells_count = (
            self.width * self.height - self.mines_count
        ) - self.unrevealed_count
        all_mines: FrozenSet[Tuple[int, int]] = self.board.mines
        return {
            "revealed_cells_count": revealed_cells_count,
            "all_mines": all_mines,
        }

    def _after_open(
        self, revealed_cells: List[Tuple[int, int, int]]
    ) -> Tuple[int, Dict[str, object]]:
        if self.unrevealed_count == 0:
            self.game_over = True
            self.won = True
            return 1, {"revealed_cells": revealed_cells}
        return 0, {"revealed_cells": revealed_cells}

    def reveal(self, x: int, y: int) -> Tuple[int, Dict[str, object]]:
        """
        Reveal a single cell and return a status code plus payload.

        Returns:
            Tuple of (status, payload) where status is:
                - -1: Mine hit (loss)
                - 0: Non-terminal reveal (or no-op)
                - 1: Win (all safe cells revealed)

            Payload contains:
                - For status 0 or 1: {"revealed_cells": List[(x, y, count)]}
                - For status -1: {"revealed_cells_count": int, "all_mines": FrozenSet}

        Raises:
            ValueError: If coordinates are out of bounds.
        """
        self._check_bounds(x, y)

        if self.game_over or self.revealed[y][x] or self.flagged[y][x]:
            return 0, {}

        if self.board is None:
            self.place_mines(x, y)
        assert self.board is not None

        if self.board.mine_at(x, y):
            return -1, self._lose()

        return self._after_open(self._open(x, y))

    def toggle_flag(self, x: int, y: int) -> bool:
        """
        Place or remove a flag on an unrevealed cell.

        Flags cannot outnumber mines and cannot be placed before the first reveal.

        Returns:
            True if the flag state changed.

        Raises:
            ValueError: If coordinates are out of bounds.
        """
        self._check_bounds(x, y)
        if self.game_over or self.board is None or self.revealed[y][x]:
            return False
        if not self.flagged[y][x] and self.remaining_mines <= 0:
            return False
        self.flagged[y][x] = not self.flagged[y][x]
        return True

    def chord(self, x: int, y: int) -> Tuple[int, Dict[str, object]]:
        """
        Reveal every unflagged neighbor of an open numbered cell whose flags match its count.

        Returns:
            Same (status, payload) convention as reveal(); (0, {}) if the chord
            does not apply. A misplaced flag makes the chord hit a mine (status -1).

        Raises:
            ValueError: If coordinates are out of bounds.
        """
        self._check_bounds(x, y)
        if self.game_over or self.board is None or not self.revealed[y][x]:
            return 0, {}

        board = self.board
        neighbors = board.neighbors(x, y)
        adjacent_flags = sum(1 for nx, ny in neighbors if self.flagged[ny][nx])
        if adjacent_flags != board.adjacent_mine_count(x, y):
            return 0, {}

        closed = [
            (nx, ny)
            for nx, ny in neighbors
            if not self.revealed[ny][nx] and not self.flagged[ny][nx]
        ]
        if any(board.mine_at(nx, ny) for nx, ny in closed):
            return -1, self._lose()

        revealed_cells: List[Tuple[int, int, int]] = []
        for nx, ny in closed:
            revealed_cells.extend(self._open(nx, ny))
        return self._after_open(revealed_cells)

    # -------------------------------------------------------------------------
    # Display methods
    # -------------------------------------------------------------------------

    _ANSI_RESET = "\033[0m"
    _ANSI_COORD = "\033[96m"
    _ANSI_MINE = "\033[91m"

    def _c(self, s: str) -> str:
        """Wrap string in coordinate color."""
        return f"{self._ANSI_COORD}{s}{self._ANSI_RESET}"

    def _m(self, s: str) -> str:
        """Wrap string in mine color (red)."""
        return f"{self._ANSI_MINE}{s}{self._ANSI_RESET}"

    def cell_symbol(self, x: int, y: int, reveal_all: bool = False) -> str:
        """Plain symbol for a cell: '.', 'F', 'M' or its adjacent count."""
        if self.board is not None and (reveal_all or self.revealed[y][x]):
            if self.board.mine_at(x, y):
                return "M"
            return str(self.board.adjacent_mine_count(x, y))
        if self.flagged[y][x]:
            return "F"
        return "."

    def format_board(self, reveal_all: bool = False, color: bool = True) -> str:
        """
        Render the board as a multi-line string for terminal display.

        Args:
            reveal_all: If True, show mines and all underlying values.
            color: If False, omit ANSI color codes.

        Returns:
            A formatted multi-line string with coordinate labels and the board grid.
        """
        w, h = self.width, self.height
        c = self._c if color else str
        m = self._m if color else str

        def cell_str(x: int, y: int) -> str:
            s = self.cell_symbol(x, y, reveal_all)
            return m(s) if s == "M" else s

        header_cells = " ".join(f"{x:2d}" for x in range(w))
        out = [c("   ") + c(header_cells)]
        out.append(c("   " + "-" * (3 * w - 1)))

        for y in range(h):
            row_cells = " ".join(f" {cell_str(x, y)}" for x in range(w))
            out.append(c(f"{y:2d} ") + c("|") + row_cells)

        return "\n".join(out)


def play_cli(game: Minesweeper) -> None:
    """
    Run a simple terminal UI for playing Minesweeper.

    Commands: "x y" reveals, "f x y" toggles a flag, "c x y" chords.

    Args:
        game: A Minesweeper instance to play against.
    """
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    print("Minesticker CLI. Coordinates are 0-based. Type 'q' to quit.")
    print("  x y    reveal\n  f x y  toggle flag\n  c x y  chord\n")
    print(game.format_board(reveal_all=False))

    while True:
        s = input(f"\nMove ({game.remaining_mines} mines left): ").strip()
        if s.lower() in {"q", "quit", "exit"}:
            print("Quit.")
            return

        parts = s.replace(",", " ").split()
        action = "r"
        if parts and parts[0].lower() in {"f", "c"}:
            action = parts.pop(0).lower()
        if len(parts) != 2:
            print("Invalid input. Example: 3 5, f 3 5 or c 3 5")
            continue

        try:
            x = int(parts[0])
            y = int(parts[1])
        except ValueError:
            print("Invalid input. Coordinates must be integers.")
            continue

        if not game.in_bounds(x, y):
            print("Invalid input. Cell is outside the board.")
            continue

        if action == "f":
            game.toggle_flag(x, y)
            status = 0
        elif action == "c":
            status, _ = game.chord(x, y)
        else:
            was_first = game.first_move
            status, _ = game.reveal(x, y)
            if was_first and game.fallback_used:
                print("No guess-free board found; this one may need a guess.")

        print()
        print(game.format_board(reveal_all=False))

        if status == -1:
            print("\nYou hit a mine. You lost.")
            print("\nFull board:")
            print(game.format_board(reveal_all=True))
            return

        if status == 1:
            print("\nYou revealed all safe cells. You won!")
            print("\nFull board:")
            print(game.format_board(reveal_all=True))
            return
