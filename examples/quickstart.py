"""
Quickstart example for the no-guess board generator.

This script demonstrates both generation strategies.
"""

import logging

from noguess import (
    BoardGenerator,
    GenerationConfig,
    is_solvable,
    run_generation_many_tests,
)


def main():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    print("=" * 60)
    print("No-guess Board Generator - Quickstart Example")
    print("=" * 60)

    # Example 1: Generate a verified board
    print("\n1. Generating a verified Intermediate board (16x16, 40 mines)...")
    print("-" * 60)

    config = GenerationConfig(rows=16, cols=16, mine_count=40, seed=2024)
    result = BoardGenerator(config).generate()

    print(f"Verified: {result.verified}")
    print(f"Attempts: {result.attempts}")
    print(f"Skipped (no zero cell): {result.skipped_attempts}")
    print(f"Rejected (needed a guess): {result.rejected_attempts}")
    print(f"Start cell: {result.start_cell}")
    if result.start_cell is not None:
        print(f"Re-check: {is_solvable(result.board, result.start_cell)}")

    print("\nFull board:")
    print(result.board.format_board(reveal_all=True))

    # Example 2: Deferred safe start
    print("\n2. Deferred safe start (9x9, 10 mines), first click at (4, 4)...")
    print("-" * 60)

    deferred = BoardGenerator(
        GenerationConfig(rows=9, cols=9, mine_count=10, strategy="deferred_safe_start")
    )
    board = deferred.generate().board
    outcome = board.reveal(4, 4)
    print(f"Mines on board: {board.mine_count}, cells opened: {len(outcome.opened)}")
    print(board.format_board(reveal_all=False))

    # Example 3: Generation statistics by difficulty
    print("\n3. Verified rate by difficulty level (10 generations each)...")
    print("-" * 60)

    logging.getLogger("noguess").setLevel(logging.ERROR)
    difficulties = [
        ("Beginner", 9, 9, 10),
        ("Intermediate", 16, 16, 40),
        ("Expert", 16, 30, 99),
    ]

    for name, r, c, m in difficulties:
        stats = run_generation_many_tests(r, c, m, runs=10, seed=7)
        print(
            f"{name:15s} ({r}x{c}, {m:2d} mines): "
            f"{stats['verified_rate']*100:5.1f}% verified, "
            f"{stats['avg_attempts']:6.1f} attempts on average"
        )

    print("\n" + "=" * 60)
    print("Done!")
    print("=" * 60)


if __name__ == "__main__":
    main()
