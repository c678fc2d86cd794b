"""Knowledge grid used while simulating a logical solve of a board."""

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, Tuple


class CellKind(Enum):
    UNKNOWN = "unknown"
    MINE = "mine"
    OPENED = "opened"


@dataclass(frozen=True)
class CellState:
    """What the simulated player knows about one cell."""

    kind: CellKind
    count: int = 0

    @property
    def is_unknown(self) -> bool:
        return self.kind is CellKind.UNKNOWN

    @property
    def is_mine(self) -> bool:
        return self.kind is CellKind.MINE

    @property
    def is_opened(self) -> bool:
        return self.kind is CellKind.OPENED

    def symbol(self) -> str:
        if self.kind is CellKind.UNKNOWN:
            return "."
        if self.kind is CellKind.MINE:
            return "M"
        return str(self.count)


UNKNOWN = CellState(CellKind.UNKNOWN)
MINE = CellState(CellKind.MINE)
_OPENED = tuple(CellState(CellKind.OPENED, n) for n in range(9))


def opened(count: int) -> CellState:
    """Return the OPENED state for an adjacent mine count in 0..8."""
    if not 0 <= count <= 8:
        raise ValueError(f"Adjacent mine count must be in 0..8, got {count}.")
    return _OPENED[count]


class KnowledgeGrid:
    """
    Per-cell knowledge, fully UNKNOWN at creation.

    Transitions only go forward: UNKNOWN -> MINE or UNKNOWN -> OPENED(n).
    OPENED cells never change and MINE cells are never reopened.
    """

    def __init__(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("Width and height must be positive.")
        self.width: int = width
        self.height: int = height
        self._cells: List[List[CellState]] = [
            [UNKNOWN for _ in range(width)] for _ in range(height)
        ]
        self.opened_count: int = 0
        self.mines_count: int = 0

    def __getitem__(self, xy: Tuple[int, int]) -> CellState:
        x, y = xy
        return self._cells[y][x]

    def mark_mine(self, x: int, y: int) -> bool:
        """
        Record (x, y) as a deduced mine.

        Returns:
            True if the cell changed, False if it was already a mine.

        Raises:
            ValueError: If the cell is already opened.
        """
        current = self._cells[y][x]
        if current.is_mine:
            return False
        if current.is_opened:
            raise ValueError(f"Cell ({x}, {y}) is opened and cannot become a mine.")
        self._cells[y][x] = MINE
        self.mines_count += 1
        return True

    def open(self, x: int, y: int, count: int) -> bool:
        """
        Record (x, y) as opened with its adjacent mine count.

        Returns:
            True if the cell changed, False if it was already opened with the same count.

        Raises:
            ValueError: If the cell is a deduced mine or was opened with another count.
        """
        current = self._cells[y][x]
        if current.is_opened:
            if current.count != count:
                raise ValueError(
                    f"Cell ({x}, {y}) already opened with count {current.count}."
                )
            return False
        if current.is_mine:
            raise ValueError(f"Cell ({x}, {y}) is a deduced mine and cannot be opened.")
        self._cells[y][x] = opened(count)
        self.opened_count += 1
        return True

    @property
    def unknown_count(self) -> int:
        return self.width * self.height - self.opened_count - self.mines_count

    def is_resolved(self) -> bool:
        """True once no cell is UNKNOWN."""
        return self.unknown_count == 0

    def items(self) -> Iterator[Tuple[Tuple[int, int], CellState]]:
        for y, row in enumerate(self._cells):
            for x, state in enumerate(row):
                yield (x, y), state

    def snapshot(self) -> Tuple[Tuple[CellState, ...], ...]:
        """Return an immutable copy of the grid, indexed [y][x]."""
        return tuple(tuple(row) for row in self._cells)
