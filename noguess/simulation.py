"""Disposable simulation grid used to replay deductive play on a board."""

from enum import Enum
from typing import Dict, List, Optional, Sequence, Tuple

from .board import Board
from .errors import InvariantViolation
from .utils import Position, cascade, get_neighborhoods


class CellState(Enum):
    HIDDEN = "hidden"
    FLAGGED = "flagged"
    REVEALED = "revealed"


class SimulationGrid:
    """
    Private copy of a board's cell facts plus simulated player state.

    Every cell starts hidden. States only move forward: hidden -> revealed
    or hidden -> flagged. ``hidden_safe_count`` tracks non-mine cells that
    are not yet revealed.
    """

    def __init__(
        self, is_mine: Sequence[Sequence[bool]], counts: Sequence[Sequence[int]]
    ) -> None:
        self.rows: int = len(is_mine)
        self.cols: int = len(is_mine[0]) if self.rows else 0
        self._neighborhoods: Dict[Position, Tuple[Position, ...]] = get_neighborhoods(
            self.rows, self.cols
        )

        self.is_mine: List[List[bool]] = [list(row) for row in is_mine]
        self.counts: List[List[int]] = [list(row) for row in counts]
        self.state: List[List[CellState]] = [
            [CellState.HIDDEN for _ in range(self.cols)] for _ in range(self.rows)
        ]
        self.hidden_safe_count: int = sum(
            1 for row in self.is_mine for mine in row if not mine
        )

    @classmethod
    def from_board(cls, board: Board) -> "SimulationGrid":
        """
        Copy every cell fact of a board into a fresh grid.

        Raises:
            InvariantViolation: If the board has no mines placed, since its
                cells then carry no facts.
        """
        is_mine: List[List[bool]] = []
        counts: List[List[int]] = []
        for x in range(board.rows):
            is_mine.append([])
            counts.append([])
            for y in range(board.cols):
                fact = board.get_cell_fact_at(x, y)
                is_mine[x].append(fact.is_mine)
                counts[x].append(fact.adjacent_mine_count)

        return cls(is_mine, counts)

    def neighbors(self, x: int, y: int) -> Tuple[Position, ...]:
        return self._neighborhoods[(x, y)]

    def state_at(self, x: int, y: int) -> CellState:
        return self.state[x][y]

    @property
    def is_solved(self) -> bool:
        return self.hidden_safe_count == 0

    def hidden_neighbors(self, x: int, y: int) -> List[Position]:
        return [
            (nx, ny)
            for nx, ny in self.neighbors(x, y)
            if self.state[nx][ny] is CellState.HIDDEN
        ]

    def flagged_neighbors(self, x: int, y: int) -> List[Position]:
        return [
            (nx, ny)
            for nx, ny in self.neighbors(x, y)
            if self.state[nx][ny] is CellState.FLAGGED
        ]

    def _check_bounds(self, x: int, y: int) -> None:
        if not (0 <= x < self.rows and 0 <= y < self.cols):
            raise InvariantViolation(f"Cell {(x, y)} is outside the simulation grid.")

    def _open(self, pos: Position) -> Optional[int]:
        x, y = pos
        if self.state[x][y] is not CellState.HIDDEN or self.is_mine[x][y]:
            return None
        self.state[x][y] = CellState.REVEALED
        self.hidden_safe_count -= 1
        return self.counts[x][y]

    def reveal(self, x: int, y: int) -> int:
        """
        Cascade-reveal from (x, y).

        A cell that is not hidden, or is a mine, is left untouched. A revealed
        cell with no adjacent mines opens its whole neighborhood, repeating
        until the connected empty region and its numbered border are open.

        Returns:
            Number of cells newly revealed.

        Raises:
            InvariantViolation: If (x, y) is outside the grid.
        """
        self._check_bounds(x, y)

        return len(cascade((x, y), self._neighborhoods, self._open))

    def flag(self, x: int, y: int) -> bool:
        """Mark a hidden cell as a mine. Returns False if it was not hidden."""
        self._check_bounds(x, y)
        if self.state[x][y] is not CellState.HIDDEN:
            return False
        self.state[x][y] = CellState.FLAGGED
        return True
