"""Uniform random mine layouts, optionally keeping a first-move zone clear."""

import random
from typing import FrozenSet, List, Optional, Set

from .errors import ConfigurationError, InvariantViolation
from .utils import Position, get_neighborhoods

# Cells in a full 3x3 neighborhood.
SAFE_ZONE_SIZE = 9


def exclusion_zone(
    rows: int, cols: int, mine_count: int, anchor: Position
) -> FrozenSet[Position]:
    """
    Cells that must stay mine-free around the first move.

    The anchor and its neighbors, unless the board is too dense to keep a
    full 3x3 clear (mine_count > rows * cols - 9), in which case only the
    anchor itself is protected.
    """
    ax, ay = anchor
    if not (0 <= ax < rows and 0 <= ay < cols):
        raise InvariantViolation(f"Anchor {anchor} is outside the board.")

    if mine_count > rows * cols - SAFE_ZONE_SIZE:
        return frozenset({anchor})
    return frozenset(get_neighborhoods(rows, cols)[anchor]) | {anchor}


def sample_mine_positions(
    rows: int,
    cols: int,
    mine_count: int,
    anchor: Optional[Position] = None,
    rng: Optional[random.Random] = None,
) -> FrozenSet[Position]:
    """
    Draw a uniform random set of mine coordinates.

    Args:
        rows: Board rows, must be > 0.
        cols: Board columns, must be > 0.
        mine_count: Number of mines; must be >= 0 and < rows * cols.
        anchor: First-move position whose neighborhood stays clear. None
            samples over the whole board.
        rng: Random source; the module-level generator is used if omitted.

    Returns:
        Exactly mine_count distinct in-bounds (x, y) coordinates.

    Raises:
        ConfigurationError: If dimensions or mine_count are invalid.
    """
    if rows <= 0 or cols <= 0:
        raise ConfigurationError("rows and cols must be positive.")
    if mine_count < 0:
        raise ConfigurationError("mine_count must be non-negative.")
    total_cells = rows * cols
    if mine_count >= total_cells:
        raise ConfigurationError(
            f"mine_count ({mine_count}) must be less than the number of cells ({total_cells})."
        )

    safe: Set[Position] = set()
    if anchor is not None:
        safe = set(exclusion_zone(rows, cols, mine_count, anchor))

    eligible: List[Position] = [
        (x, y) for x in range(rows) for y in range(cols) if (x, y) not in safe
    ]

    # Sample mines uniformly without replacement.
    source = rng if rng is not None else random
    return frozenset(source.sample(eligible, mine_count))
