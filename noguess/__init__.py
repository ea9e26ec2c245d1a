"""
No-guess Minesweeper board generator

Generates mine layouts that can be cleared by deduction alone:
- Eager verified: sample layouts and replay guess-free play until one clears
- Deferred safe start: place mines after the first move, keeping its 3x3 clear
- Logic solver: cascade reveal plus the two single-cell inference rules
"""

from .board import Board, BoardShape, CellFact, RevealOutcome, count_adjacent_mines
from .errors import ConfigurationError, GenerationExhausted, InvariantViolation
from .generator import (
    BoardGenerator,
    ExhaustionPolicy,
    GenerationAttempt,
    GenerationConfig,
    GenerationResult,
    GenerationStrategy,
    find_zero_cell,
    generate_board,
)
from .sampler import exclusion_zone, sample_mine_positions
from .simulation import CellState, SimulationGrid
from .solver import LogicSolver, is_solvable
from .analysis import (
    format_simulation,
    run_generation_single_test,
    run_generation_many_tests,
    run_generation_level_analysis,
)

__version__ = "1.0.0"

__all__ = [
    # Board
    "Board",
    "BoardShape",
    "CellFact",
    "RevealOutcome",
    "count_adjacent_mines",
    # Errors
    "ConfigurationError",
    "GenerationExhausted",
    "InvariantViolation",
    # Generation
    "BoardGenerator",
    "ExhaustionPolicy",
    "GenerationAttempt",
    "GenerationConfig",
    "GenerationResult",
    "GenerationStrategy",
    "find_zero_cell",
    "generate_board",
    "exclusion_zone",
    "sample_mine_positions",
    # Solver
    "CellState",
    "SimulationGrid",
    "LogicSolver",
    "is_solvable",
    # Analysis functions
    "format_simulation",
    "run_generation_single_test",
    "run_generation_many_tests",
    "run_generation_level_analysis",
]
