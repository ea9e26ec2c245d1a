"""Deductive solvability check: cascade reveal plus single-cell inference rules."""

from typing import Any, Dict

from .board import Board
from .errors import InvariantViolation
from .simulation import CellState, SimulationGrid
from .utils import Position


class LogicSolver:
    """
    Replays guess-free play on a SimulationGrid.

    Only two local rules are applied, to every revealed numbered cell, in
    full row-major passes:
    1. If the hidden neighbors plus the flagged neighbors equal the number,
       every hidden neighbor is a mine (flag it).
    2. If the flagged neighbors already equal the number, every hidden
       neighbor is safe (cascade-reveal it).
    Passes repeat until one changes nothing or no safe cell is hidden.
    """

    def __init__(self, grid: SimulationGrid) -> None:
        self.grid = grid

        # Metrics / counters (for analysis)
        self.passes: int = 0
        self.flags_placed: int = 0
        self.safe_deductions: int = 0
        self.cascade_reveals: int = 0

    def apply_rules(self, x: int, y: int) -> bool:
        """
        Apply both inference rules from one revealed numbered cell.

        Returns:
            True if any cell changed state.
        """
        grid = self.grid
        hidden = grid.hidden_neighbors(x, y)
        if not hidden:
            return False

        value = grid.counts[x][y]
        flagged_count = len(grid.flagged_neighbors(x, y))

        if value == flagged_count + len(hidden):
            for nx, ny in hidden:
                grid.flag(nx, ny)
            self.flags_placed += len(hidden)
            return True

        if value == flagged_count:
            for nx, ny in hidden:
                self.safe_deductions += grid.reveal(nx, ny)
            return True

        return False

    def propagate(self) -> bool:
        """
        Run inference passes until fixpoint.

        Returns:
            True if every safe cell ended up revealed.
        """
        grid = self.grid
        changed = True
        while changed and not grid.is_solved:
            changed = False
            self.passes += 1
            for x in range(grid.rows):
                for y in range(grid.cols):
                    if grid.state[x][y] is not CellState.REVEALED:
                        continue
                    if grid.counts[x][y] == 0:
                        continue
                    if self.apply_rules(x, y):
                        changed = True
        return grid.is_solved

    def solve(self, start_position: Position) -> bool:
        """
        Open the start cell, then deduce as far as the rules allow.

        Returns:
            False immediately if the start cell is a mine, otherwise whether
            every non-mine cell was revealed.
        """
        x, y = start_position
        if not (0 <= x < self.grid.rows and 0 <= y < self.grid.cols):
            raise InvariantViolation(f"Start position {start_position} is outside the board.")
        if self.grid.is_mine[x][y]:
            return False

        self.cascade_reveals += self.grid.reveal(x, y)
        return self.propagate()

    def stats(self) -> Dict[str, Any]:
        return {
            "passes": self.passes,
            "flags_placed": self.flags_placed,
            "safe_deductions": self.safe_deductions,
            "cascade_reveals": self.cascade_reveals,
            "hidden_safe_count": self.grid.hidden_safe_count,
        }


def is_solvable(board: Board, start_position: Position) -> bool:
    """
    Check whether a board can be cleared from a start cell without guessing.

    A fresh SimulationGrid is built for every call, so the result depends
    only on the board's facts and the start position.

    Args:
        board: Board with mines placed.
        start_position: (x, y) of the first revealed cell; callers should pass
            a non-mine cell with no adjacent mines.

    Returns:
        True iff deduction alone reveals every non-mine cell.
    """
    solver = LogicSolver(SimulationGrid.from_board(board))
    return solver.solve(start_position)
