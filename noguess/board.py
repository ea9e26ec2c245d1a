"""Live minesweeper board: mine layout, adjacency facts and player reveals."""

from typing import Callable, Dict, FrozenSet, Iterable, List, NamedTuple, Optional, Set, Tuple

import numpy as np

from .errors import ConfigurationError, InvariantViolation
from .utils import Position, cascade, get_neighborhoods


class BoardShape(NamedTuple):
    rows: int
    cols: int


class CellFact(NamedTuple):
    """Read-only truth about one cell once mines are placed."""

    is_mine: bool
    adjacent_mine_count: int


class RevealOutcome(NamedTuple):
    opened: Tuple[Position, ...] = ()
    hit_mine: bool = False
    won: bool = False


def count_adjacent_mines(mines: np.ndarray) -> np.ndarray:
    """
    Count mines in the 8-neighborhood of every cell.

    Args:
        mines: Boolean mask of shape (rows, cols), True where a mine sits.

    Returns:
        Integer array of the same shape. Values on mine cells are computed the
        same way but carry no meaning.
    """
    rows, cols = mines.shape
    padded = np.pad(mines.astype(np.int8), 1)
    counts = np.zeros((rows, cols), dtype=np.int8)
    for dx in (-1, 0, 1):
        for dy in (-1, 0, 1):
            if dx == 0 and dy == 0:
                continue
            counts += padded[1 + dx : 1 + dx + rows, 1 + dy : 1 + dy + cols]
    return counts


class Board:
    """
    Minesweeper board whose mines are written exactly once.

    A board may be created blank and filled later: ``planned_mines`` is the
    mine count shown before placement, and a first-move hook, when
    registered, is asked to place the mines on the first reveal.
    """

    def __init__(self, rows: int, cols: int, planned_mines: int = 0) -> None:
        if rows <= 0 or cols <= 0:
            raise ConfigurationError("rows and cols must be positive.")

        self.rows: int = rows
        self.cols: int = cols
        self.planned_mines: int = planned_mines

        self.mines: np.ndarray = np.zeros((rows, cols), dtype=bool)
        self.counts: np.ndarray = np.zeros((rows, cols), dtype=np.int8)
        self.mines_placed: bool = False

        self.revealed: np.ndarray = np.zeros((rows, cols), dtype=bool)
        self.game_over: bool = False

        self._first_move_hook: Optional[Callable[[Position], None]] = None
        self._neighborhoods: Dict[Position, Tuple[Position, ...]] = get_neighborhoods(
            rows, cols
        )

    @classmethod
    def from_layout(cls, rows: int, cols: int, mines: Iterable[Position]) -> "Board":
        """Build a board and place the given mines on it."""
        board = cls(rows, cols)
        board.place_mines(mines)
        return board

    @property
    def shape(self) -> BoardShape:
        return BoardShape(self.rows, self.cols)

    @property
    def total_cells(self) -> int:
        return self.rows * self.cols

    @property
    def mine_count(self) -> int:
        """Mines on the board, or the planned count while it is still blank."""
        if not self.mines_placed:
            return self.planned_mines
        return int(self.mines.sum())

    @property
    def hidden_safe_count(self) -> int:
        return int((~self.revealed & ~self.mines).sum())

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.rows and 0 <= y < self.cols

    def neighbors(self, x: int, y: int) -> Tuple[Position, ...]:
        return self._neighborhoods[(x, y)]

    def place_mines(self, positions: Iterable[Position]) -> None:
        """
        Write the mine layout and compute adjacency counts (one-time).

        Raises:
            InvariantViolation: If mines were already placed, a coordinate is
                out of bounds, or a coordinate appears twice.
        """
        if self.mines_placed:
            raise InvariantViolation("The board already has mines.")

        positions = list(positions)
        unique: Set[Position] = set(positions)
        if len(unique) != len(positions):
            raise InvariantViolation("Mine coordinates contain duplicates.")
        outside = [p for p in unique if not self.in_bounds(*p)]
        if outside:
            raise InvariantViolation(f"Mine coordinates outside the board: {sorted(outside)}")

        for x, y in unique:
            self.mines[x, y] = True
        self.counts = count_adjacent_mines(self.mines)
        self.mines_placed = True

    def get_cell_fact_at(self, x: int, y: int) -> CellFact:
        """
        Return the mine flag and adjacent mine count of a cell.

        Raises:
            InvariantViolation: If the cell is outside the board or the board
                has no mines placed yet.
        """
        if not self.in_bounds(x, y):
            raise InvariantViolation(f"No cell at {(x, y)}.")
        if not self.mines_placed:
            raise InvariantViolation("Cell facts are unknown before mines are placed.")
        return CellFact(bool(self.mines[x, y]), int(self.counts[x, y]))

    def mine_positions(self) -> FrozenSet[Position]:
        return frozenset((int(x), int(y)) for x, y in np.argwhere(self.mines))

    def set_first_move_hook(self, hook: Callable[[Position], None]) -> None:
        """Register the callback that places mines on the first reveal."""
        self._first_move_hook = hook

    def _open(self, pos: Position) -> Optional[int]:
        x, y = pos
        if self.revealed[x, y] or self.mines[x, y]:
            return None
        self.revealed[x, y] = True
        return int(self.counts[x, y])

    def reveal(self, x: int, y: int) -> RevealOutcome:
        """
        Reveal a cell as the player, opening empty regions around it.

        A blank board runs its first-move hook before anything else; the hook
        is skipped once mines are on the board, however they got there.

        Raises:
            InvariantViolation: If (x, y) is outside the board, or the board is
                still blank after the hook (or has no hook).
        """
        if not self.in_bounds(x, y):
            raise InvariantViolation(f"No cell at {(x, y)}.")

        if not self.mines_placed and self._first_move_hook is not None:
            self._first_move_hook((x, y))
        if not self.mines_placed:
            raise InvariantViolation("Mines have not been placed.")

        if self.game_over or self.revealed[x, y]:
            return RevealOutcome()

        if self.mines[x, y]:
            self.revealed[x, y] = True
            self.game_over = True
            return RevealOutcome(opened=((x, y),), hit_mine=True)

        opened = tuple(cascade((x, y), self._neighborhoods, self._open))
        won = self.hidden_safe_count == 0
        self.game_over = won
        return RevealOutcome(opened=opened, won=won)

    def format_board(self, reveal_all: bool = False) -> str:
        """
        Render the board as text: '.' hidden, 'M' mine, digits elsewhere.

        Rows are labelled with x, columns with y.
        """
        lines: List[str] = ["   " + " ".join(f"{y:2d}" for y in range(self.cols))]
        for x in range(self.rows):
            cells = []
            for y in range(self.cols):
                if not (reveal_all or self.revealed[x, y]) or not self.mines_placed:
                    cells.append(" .")
                elif self.mines[x, y]:
                    cells.append(" M")
                else:
                    cells.append(f"{int(self.counts[x, y]):2d}")
            lines.append(f"{x:2d} |" + " ".join(cells))
        return "\n".join(lines)
