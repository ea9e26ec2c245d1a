"""Analysis and benchmarking tools for the board generator."""

import random
from collections import defaultdict
from typing import Dict, List, Optional, Tuple

import matplotlib.pyplot as plt
import numpy as np

from .generator import BoardGenerator, GenerationConfig
from .simulation import CellState, SimulationGrid
from .solver import LogicSolver


def format_simulation(grid: SimulationGrid, *, show_coords: bool = True) -> str:
    """
    Format a simulation grid as a human-readable string.

    Args:
        grid: Grid whose simulated state will be displayed.
        show_coords: If True, include coordinate labels and a header.

    Returns:
        A text grid where hidden cells are '.', flagged cells 'F', and
        revealed cells their adjacent mine count.
    """

    def cell_char(x: int, y: int) -> str:
        state = grid.state[x][y]
        if state is CellState.HIDDEN:
            return "."
        if state is CellState.FLAGGED:
            return "F"
        return str(grid.counts[x][y])

    lines: List[str] = []
    if show_coords:
        header = " ".join(f"{y:2d}" for y in range(grid.cols))
        lines.append("   " + header)
        lines.append("   " + "-" * (3 * grid.cols - 1))

    for x in range(grid.rows):
        row = " ".join(f" {cell_char(x, y)}" for y in range(grid.cols))
        lines.append(f"{x:2d} |" + row if show_coords else row)

    return "\n".join(lines)


def run_generation_single_test(
    rows: int,
    cols: int,
    mine_count: int,
    *,
    attempt_cap: int = 500,
    seed: Optional[int] = None,
    show_board: bool = False,
) -> Dict[str, object]:
    """
    Generate one eager-verified board and replay the deduction on it.

    Args:
        rows: Board rows.
        cols: Board columns.
        mine_count: Total number of mines on the board.
        attempt_cap: Maximum layouts sampled.
        seed: Optional seed for reproducible runs.
        show_board: If True, print the underlying board and the final
            simulated state.

    Returns:
        Generation counters ("verified", "attempts", "skipped_attempts",
        "rejected_attempts") plus the solver counters of the replay on the
        returned board ("passes", "flags_placed", "safe_deductions",
        "cascade_reveals", "hidden_safe_count"). Solver counters are zero
        when the board has no zero cell to start from.
    """
    config = GenerationConfig(
        rows, cols, mine_count, attempt_cap=attempt_cap, seed=seed
    )
    result = BoardGenerator(config).generate()

    out: Dict[str, object] = {
        "verified": result.verified,
        "attempts": result.attempts,
        "skipped_attempts": result.skipped_attempts,
        "rejected_attempts": result.rejected_attempts,
    }

    grid = SimulationGrid.from_board(result.board)
    solver = LogicSolver(grid)
    if result.start_cell is not None:
        solver.solve(result.start_cell)
    out.update(solver.stats())

    if show_board:
        print("Underlying board (mines visible):")
        print(result.board.format_board(reveal_all=True))
        print()
        print("Deduction from the start cell (hidden shown as '.', flags as 'F'):")
        print(format_simulation(grid, show_coords=True))
        print()
        print(f"Verified: {result.verified} after {result.attempts} attempt(s).")

    return out


def run_generation_many_tests(
    rows: int,
    cols: int,
    mine_count: int,
    runs: int,
    *,
    attempt_cap: int = 500,
    seed: Optional[int] = None,
) -> Dict[str, float]:
    """
    Run many independent eager generations and return averaged metrics.

    Args:
        rows: Board rows.
        cols: Board columns.
        mine_count: Total number of mines on the board.
        runs: Number of independent generations.
        attempt_cap: Maximum layouts sampled per generation.
        seed: Optional seed; run i uses a generator derived from it.

    Returns:
        Averages of the per-run counters (prefixed with "avg_"), plus:
        - verified_rate
        - skip_rate: skipped attempts / all attempts
        - reject_rate: rejected attempts / all attempts
    """
    if runs <= 0:
        raise ValueError("runs must be positive.")

    master = random.Random(seed)
    sums: Dict[str, float] = defaultdict(float)
    verified = 0
    total_attempts = 0.0
    total_skipped = 0.0
    total_rejected = 0.0

    for _ in range(runs):
        payload = run_generation_single_test(
            rows,
            cols,
            mine_count,
            attempt_cap=attempt_cap,
            seed=master.randrange(2**32),
        )
        if payload["verified"]:
            verified += 1

        total_attempts += float(payload["attempts"])  # type: ignore[arg-type]
        total_skipped += float(payload["skipped_attempts"])  # type: ignore[arg-type]
        total_rejected += float(payload["rejected_attempts"])  # type: ignore[arg-type]

        for k, v in payload.items():
            if isinstance(v, (int, float)) and not isinstance(v, bool):
                sums[f"avg_{k}"] += float(v)

    out: Dict[str, float] = {k: total / runs for k, total in sums.items()}
    out["verified_rate"] = verified / runs
    out["skip_rate"] = total_skipped / total_attempts if total_attempts > 0 else 0.0
    out["reject_rate"] = total_rejected / total_attempts if total_attempts > 0 else 0.0
    return out


def run_generation_level_analysis(
    runs: int,
    *,
    attempt_cap: int = 500,
    seed: Optional[int] = None,
) -> Dict[str, Dict[str, float]]:
    """
    Run aggregated generation tests on standard difficulty levels and plot summaries.

    Args:
        runs: Number of independent generations per difficulty level.
        attempt_cap: Maximum layouts sampled per generation.
        seed: Optional seed for reproducible runs.

    Returns:
        Mapping from level name to statistics dict returned by
        run_generation_many_tests().

    Standard difficulty levels (rows x cols, mines):
        - Beginner: 9x9, 10 mines
        - Intermediate: 16x16, 40 mines
        - Expert: 16x30, 99 mines
    """
    levels: Dict[str, Tuple[int, int, int]] = {
        "beginner": (9, 9, 10),
        "intermediate": (16, 16, 40),
        "expert": (16, 30, 99),
    }

    results: Dict[str, Dict[str, float]] = {}
    for level, (r, c, m) in levels.items():
        results[level] = run_generation_many_tests(
            r, c, m, runs, attempt_cap=attempt_cap, seed=seed
        )

    level_names = list(levels.keys())
    x = np.arange(len(level_names))

    # 1) Verified rate by level
    verified_rates = [results[n]["verified_rate"] for n in level_names]

    plt.figure()  # type: ignore[misc]
    plt.bar(x, verified_rates)  # type: ignore[misc]
    plt.xticks(x, level_names)  # type: ignore[misc]
    plt.ylabel("Verified rate")  # type: ignore[misc]
    plt.ylim(0.0, 1.0)  # type: ignore[misc]
    plt.title("No-guess boards found within the attempt cap")  # type: ignore[misc]
    plt.tight_layout()
    plt.show()  # type: ignore[misc]

    # 2) Attempt outcomes per generation
    skipped = [results[n]["avg_skipped_attempts"] for n in level_names]
    rejected = [results[n]["avg_rejected_attempts"] for n in level_names]

    bar_w = 0.35
    plt.figure()  # type: ignore[misc]
    plt.bar(x - bar_w / 2, skipped, width=bar_w, label="no zero cell")  # type: ignore[misc]
    plt.bar(x + bar_w / 2, rejected, width=bar_w, label="needs a guess")  # type: ignore[misc]
    plt.xticks(x, level_names)  # type: ignore[misc]
    plt.ylabel("Average discarded layouts")  # type: ignore[misc]
    plt.title("Discarded layouts by reason (per generation)")  # type: ignore[misc]
    plt.legend()  # type: ignore[misc]
    plt.tight_layout()
    plt.show()  # type: ignore[misc]

    # 3) Deduction work on the accepted board
    flags = [results[n]["avg_flags_placed"] for n in level_names]
    deductions = [results[n]["avg_safe_deductions"] for n in level_names]

    plt.figure()  # type: ignore[misc]
    plt.bar(x - bar_w / 2, flags, width=bar_w, label="flags placed")  # type: ignore[misc]
    plt.bar(x + bar_w / 2, deductions, width=bar_w, label="safe deductions")  # type: ignore[misc]
    plt.xticks(x, level_names)  # type: ignore[misc]
    plt.ylabel("Average cells")  # type: ignore[misc]
    plt.title("Deduction rule activity (per generation)")  # type: ignore[misc]
    plt.legend()  # type: ignore[misc]
    plt.tight_layout()
    plt.show()  # type: ignore[misc]

    return results
