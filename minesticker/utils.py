"""Grid geometry helpers shared by the board model, solver and generator."""

from typing import Dict, FrozenSet, List, Tuple

# Module-level cache: (width, height) -> {(x,y): ((nx,ny), ...), ...}
_NEIGHBORHOODS_CACHE: Dict[
    Tuple[int, int],
    Dict[Tuple[int, int], Tuple[Tuple[int, int], ...]]
] = {}


def get_neighborhoods(
    width: int, height: int
) -> Dict[Tuple[int, int], Tuple[Tuple[int, int], ...]]:
    """
    Precompute and cache 8-connected neighbor coordinates for every cell in a grid.

    Args:
        width: Grid width (number of columns). Must be positive.
        height: Grid height (number of rows). Must be positive.

    Returns:
        Mapping from each cell (x, y) to a tuple of valid neighboring
        coordinates (nx, ny) under 8-connectivity.

    Raises:
        ValueError: If width or height is non-positive.
    """
    if width <= 0 or height <= 0:
        raise ValueError("width and height must be positive.")

    key = (width, height)
    cached = _NEIGHBORHOODS_CACHE.get(key)
    if cached is not None:
        return cached

    neighborhoods: Dict[Tuple[int, int], Tuple[Tuple[int, int], ...]] = {}
    for y in range(height):
        for x in range(width):
            nbrs: List[Tuple[int, int]] = []
            for dy in (-1, 0, 1):
                for dx in (-1, 0, 1):
                    if dx == 0 and dy == 0:
                        continue
                    nx, ny = x + dx, y + dy
                    if 0 <= nx < width and 0 <= ny < height:
                        nbrs.append((nx, ny))
            neighborhoods[(x, y)] = tuple(nbrs)

    _NEIGHBORHOODS_CACHE[key] = neighborhoods
    return neighborhoods


def chebyshev_zone(
    width: int, height: int, x: int, y: int, radius: int
) -> FrozenSet[Tuple[int, int]]:
    """
    Return every in-bounds cell within Chebyshev distance `radius` of (x, y).

    With radius 1 this is the cell plus its 8-neighborhood; with radius 2 it is
    the 5x5 block centered on the cell, clipped to the grid.
    """
    if radius < 0:
        raise ValueError("radius must be non-negative.")
    return frozenset(
        (cx, cy)
        for cy in range(max(0, y - radius), min(height, y + radius + 1))
        for cx in range(max(0, x - radius), min(width, x + radius + 1))
    )
