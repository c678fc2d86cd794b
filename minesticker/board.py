"""Board model: a rectangular minefield with a fixed set of mines."""

from typing import AbstractSet, Dict, FrozenSet, Iterator, Sequence, Tuple

from .utils import get_neighborhoods

_EMPTY: Tuple[Tuple[int, int], ...] = ()


class Board:
    """Immutable minefield: dimensions plus the set of mine coordinates."""

    def __init__(
        self,
        width: int,
        height: int,
        mines: AbstractSet[Tuple[int, int]] = frozenset(),
    ) -> None:
        """
        Build a board from its dimensions and mine coordinates.

        Args:
            width: Board width (number of columns), must be > 0.
            height: Board height (number of rows), must be > 0.
            mines: Coordinates (x, y) holding a mine.

        Raises:
            ValueError: If dimensions are invalid or a mine lies outside the board.
        """
        if width <= 0 or height <= 0:
            raise ValueError("Width and height must be positive.")

        self.width: int = width
        self.height: int = height
        self.mines: FrozenSet[Tuple[int, int]] = frozenset(mines)

        for mx, my in self.mines:
            if not self.in_bounds(mx, my):
                raise ValueError(f"Mine ({mx}, {my}) is outside the board.")

        self._neighborhoods: Dict[
            Tuple[int, int], Tuple[Tuple[int, int], ...]
        ] = get_neighborhoods(width, height)

    @classmethod
    def from_rows(cls, rows: Sequence[str]) -> "Board":
        """
        Build a board from a text picture, one string per row.

        '*' marks a mine; any other character is a safe cell.
        """
        if not rows or any(len(row) != len(rows[0]) for row in rows):
            raise ValueError("Rows must be non-empty and of equal length.")
        mines = {
            (x, y)
            for y, row in enumerate(rows)
            for x, ch in enumerate(row)
            if ch == "*"
        }
        return cls(len(rows[0]), len(rows), mines)

    @property
    def mines_count(self) -> int:
        return len(self.mines)

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def mine_at(self, x: int, y: int) -> bool:
        """Return True if (x, y) holds a mine; out-of-bounds cells never do."""
        return (x, y) in self.mines

    def neighbors(self, x: int, y: int) -> Tuple[Tuple[int, int], ...]:
        """Return the in-bounds 8-neighborhood of (x, y), empty when out of bounds."""
        return self._neighborhoods.get((x, y), _EMPTY)

    def adjacent_mine_count(self, x: int, y: int) -> int:
        return sum(1 for nx, ny in self.neighbors(x, y) if (nx, ny) in self.mines)

    def cells(self) -> Iterator[Tuple[int, int]]:
        """Iterate over every coordinate in row-major order."""
        for y in range(self.height):
            for x in range(self.width):
                yield x, y

    def format_board(self) -> str:
        """Render mines as '*' and safe cells as their adjacent mine count."""
        lines = []
        for y in range(self.height):
            row = []
            for x in range(self.width):
                if (x, y) in self.mines:
                    row.append("*")
                else:
                    row.append(str(self.adjacent_mine_count(x, y)))
            lines.append("".join(row))
        return "\n".join(lines)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return (self.width, self.height, self.mines) == (
            other.width,
            other.height,
            other.mines,
        )

    def __hash__(self) -> int:
        return hash((self.width, self.height, self.mines))

    def __repr__(self) -> str:
        return (
            f"Board(width={self.width}, height={self.height}, "
            f"mines_count={self.mines_count})"
        )
