"""Board generation: verified no-guess layouts or deferred safe-start layouts."""

import functools
import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import FrozenSet, Optional, Tuple

from .board import Board
from .errors import ConfigurationError, GenerationExhausted, InvariantViolation
from .sampler import sample_mine_positions
from .solver import is_solvable
from .utils import Position

logger = logging.getLogger(__name__)

# Upper bound on sampling attempts so generation cannot block indefinitely.
DEFAULT_ATTEMPT_CAP = 500


class GenerationStrategy(str, Enum):
    EAGER_VERIFIED = "eager_verified"
    DEFERRED_SAFE_START = "deferred_safe_start"


class ExhaustionPolicy(str, Enum):
    DEGRADE = "degrade"
    FAIL = "fail"


@dataclass(frozen=True)
class GenerationConfig:
    """
    Settings for one generation run.

    Attributes:
        rows: Board rows, must be > 0.
        cols: Board columns, must be > 0.
        mine_count: Number of mines, 0 <= mine_count < rows * cols.
        strategy: "eager_verified" samples and verifies layouts up front;
            "deferred_safe_start" waits for the first move and keeps its
            3x3 neighborhood clear.
        attempt_cap: Maximum layouts tried by the eager strategy.
        on_exhaustion: "degrade" plays the last unverified layout when the cap
            is reached; "fail" raises GenerationExhausted instead.
        seed: Optional seed for a private random source.
    """

    rows: int
    cols: int
    mine_count: int
    strategy: GenerationStrategy = GenerationStrategy.EAGER_VERIFIED
    attempt_cap: int = DEFAULT_ATTEMPT_CAP
    on_exhaustion: ExhaustionPolicy = ExhaustionPolicy.DEGRADE
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        if self.rows <= 0 or self.cols <= 0:
            raise ConfigurationError("rows and cols must be positive.")
        if self.mine_count < 0:
            raise ConfigurationError("mine_count must be non-negative.")
        if self.mine_count >= self.total_cells:
            raise ConfigurationError(
                f"mine_count ({self.mine_count}) must be less than the number "
                f"of cells ({self.total_cells})."
            )
        if self.attempt_cap < 1:
            raise ConfigurationError("attempt_cap must be at least 1.")

        try:
            strategy = GenerationStrategy(self.strategy)
        except ValueError:
            raise ConfigurationError(
                'strategy must be "eager_verified" or "deferred_safe_start".'
            ) from None
        try:
            policy = ExhaustionPolicy(self.on_exhaustion)
        except ValueError:
            raise ConfigurationError(
                'on_exhaustion must be "degrade" or "fail".'
            ) from None
        object.__setattr__(self, "strategy", strategy)
        object.__setattr__(self, "on_exhaustion", policy)

    @property
    def total_cells(self) -> int:
        return self.rows * self.cols


@dataclass
class GenerationAttempt:
    mine_count: int
    layout: FrozenSet[Position]
    start_cell: Optional[Position] = None
    verified: bool = False


@dataclass
class GenerationResult:
    """
    Outcome of generate().

    ``verified`` is True only when the eager strategy found a layout that
    deduction clears from ``start_cell``. Deferred boards are never verified
    and have no mines until the first move.
    """

    board: Board
    strategy: GenerationStrategy
    verified: bool = False
    attempts: int = 0
    skipped_attempts: int = 0
    rejected_attempts: int = 0
    start_cell: Optional[Position] = None

    @property
    def exhausted(self) -> bool:
        return (
            self.strategy is GenerationStrategy.EAGER_VERIFIED and not self.verified
        )


def find_zero_cell(board: Board) -> Optional[Position]:
    """Return the first non-mine cell with no adjacent mines, scanning row-major."""
    for x in range(board.rows):
        for y in range(board.cols):
            fact = board.get_cell_fact_at(x, y)
            if not fact.is_mine and fact.adjacent_mine_count == 0:
                return (x, y)
    return None


class BoardGenerator:
    """Builds boards for one strategy, fixed at construction."""

    def __init__(
        self, config: GenerationConfig, rng: Optional[random.Random] = None
    ) -> None:
        self.config = config
        self.strategy: GenerationStrategy = config.strategy
        self.rng: random.Random = rng if rng is not None else random.Random(config.seed)

        self._board: Optional[Board] = None

    def generate(self) -> GenerationResult:
        """
        Produce a board according to the configured strategy.

        Raises:
            GenerationExhausted: Only for the eager strategy with the "fail"
                exhaustion policy.
        """
        if self.strategy is GenerationStrategy.EAGER_VERIFIED:
            return self._generate_verified()
        return self._prepare_deferred()

    # -------------------------------------------------------------------------
    # Eager verified strategy
    # -------------------------------------------------------------------------

    def _run_attempt(self) -> Tuple[Board, GenerationAttempt]:
        cfg = self.config
        layout = sample_mine_positions(
            cfg.rows, cfg.cols, cfg.mine_count, rng=self.rng
        )
        attempt = GenerationAttempt(mine_count=cfg.mine_count, layout=layout)

        candidate = Board(cfg.rows, cfg.cols)
        candidate.place_mines(layout)

        attempt.start_cell = find_zero_cell(candidate)
        if attempt.start_cell is not None:
            attempt.verified = is_solvable(candidate, attempt.start_cell)
        return candidate, attempt

    def _generate_verified(self) -> GenerationResult:
        cfg = self.config
        result = GenerationResult(Board(cfg.rows, cfg.cols, cfg.mine_count), self.strategy)

        for attempt_number in range(1, cfg.attempt_cap + 1):
            candidate, attempt = self._run_attempt()
            result.board = candidate
            result.attempts = attempt_number
            result.start_cell = attempt.start_cell

            if attempt.start_cell is None:
                result.skipped_attempts += 1
                logger.debug("Attempt %d: no zero cell to start from", attempt_number)
                continue

            if attempt.verified:
                result.verified = True
                logger.info(
                    "No-guess board generated after %d attempt(s)", attempt_number
                )
                return result

            result.rejected_attempts += 1
            logger.debug("Attempt %d: layout needs a guess", attempt_number)

        if cfg.on_exhaustion is ExhaustionPolicy.FAIL:
            raise GenerationExhausted(cfg.attempt_cap)

        logger.warning(
            "No no-guess board found after %d attempts; starting with an "
            "unverified layout.",
            cfg.attempt_cap,
        )
        return result

    # -------------------------------------------------------------------------
    # Deferred safe-start strategy
    # -------------------------------------------------------------------------

    def _prepare_deferred(self) -> GenerationResult:
        cfg = self.config
        board = Board(cfg.rows, cfg.cols, planned_mines=cfg.mine_count)
        board.set_first_move_hook(functools.partial(self._place_around, board))
        self._board = board
        return GenerationResult(board, self.strategy)

    def on_first_move(self, position: Position) -> None:
        """
        Place mines on the latest deferred board once the first move is known.

        The 3x3 neighborhood of the move stays mine-free (only the move
        itself on boards too dense for that). Board.reveal() calls this
        itself on a blank board, so sessions may call either one first.

        Raises:
            InvariantViolation: If this generator is not deferred, has no
                board yet, or the board already has its mines.
        """
        if self.strategy is not GenerationStrategy.DEFERRED_SAFE_START:
            raise InvariantViolation("First-move placement requires the deferred strategy.")
        if self._board is None:
            raise InvariantViolation("generate() must be called before the first move.")
        self._place_around(self._board, position)

    def _place_around(self, board: Board, position: Position) -> None:
        if board.mines_placed:
            raise InvariantViolation("The first move was already handled.")

        cfg = self.config
        layout = sample_mine_positions(
            cfg.rows, cfg.cols, cfg.mine_count, anchor=position, rng=self.rng
        )
        board.place_mines(layout)
        logger.info("Mines placed around first move %s", position)


def generate_board(
    config: GenerationConfig, rng: Optional[random.Random] = None
) -> GenerationResult:
    """Generate a board in one call."""
    return BoardGenerator(config, rng=rng).generate()
