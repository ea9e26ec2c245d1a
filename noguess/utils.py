"""Utility functions for the no-guess board generator."""

from typing import Callable, Dict, List, Optional, Tuple

from .errors import ConfigurationError

Position = Tuple[int, int]

# Module-level cache: (rows, cols) -> {(x,y): ((nx,ny), ...), ...}
_NEIGHBORHOODS_CACHE: Dict[Tuple[int, int], Dict[Position, Tuple[Position, ...]]] = {}


def get_neighborhoods(rows: int, cols: int) -> Dict[Position, Tuple[Position, ...]]:
    """
    Precompute and cache 8-connected neighbor coordinates for every cell in a grid.

    Args:
        rows: Number of rows; x ranges over [0, rows). Must be positive.
        cols: Number of columns; y ranges over [0, cols). Must be positive.

    Returns:
        Mapping from each cell (x, y) to a tuple of valid neighboring
        coordinates (nx, ny) under 8-connectivity.

    Raises:
        ConfigurationError: If rows or cols is non-positive.
    """
    if rows <= 0 or cols <= 0:
        raise ConfigurationError("rows and cols must be positive.")

    key = (rows, cols)
    cached = _NEIGHBORHOODS_CACHE.get(key)
    if cached is not None:
        return cached

    neighborhoods: Dict[Position, Tuple[Position, ...]] = {}
    for x in range(rows):
        for y in range(cols):
            nbrs: List[Position] = []
            for dx in (-1, 0, 1):
                for dy in (-1, 0, 1):
                    if dx == 0 and dy == 0:
                        continue
                    nx, ny = x + dx, y + dy
                    if 0 <= nx < rows and 0 <= ny < cols:
                        nbrs.append((nx, ny))
            neighborhoods[(x, y)] = tuple(nbrs)

    _NEIGHBORHOODS_CACHE[key] = neighborhoods
    return neighborhoods


def cascade(
    start: Position,
    neighborhoods: Dict[Position, Tuple[Position, ...]],
    try_open: Callable[[Position], Optional[int]],
) -> List[Position]:
    """
    Open cells outward from ``start`` through zero-count cells.

    ``try_open`` opens one cell and returns its adjacent mine count, or None
    when the cell cannot be opened (already open, flagged or a mine). A cell
    is therefore opened at most once, and only cells opened with a count of
    zero push their neighbors.

    Returns:
        Opened cells in the order they were opened.
    """
    stack: List[Position] = [start]
    opened: List[Position] = []
    while stack:
        pos = stack.pop()
        count = try_open(pos)
        if count is None:
            continue
        opened.append(pos)
        if count == 0:
            stack.extend(neighborhoods[pos])
    return opened
