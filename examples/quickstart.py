"""
Quickstart example for Minesticker.

This script demonstrates basic usage of the board generator.
"""

import logging
import random

from minesticker import (
    check_solvability,
    format_knowledge,
    generate,
    run_generation_many_tests,
)


def main():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    print("=" * 60)
    print("Minesticker - Quickstart Example")
    print("=" * 60)

    # Example 1: Generate a single board
    print("\n1. Generating a Normal board (16x16, 40 mines) from (8, 8)...")
    print("-" * 60)

    result = generate(16, 16, 40, 8, 8, rng=random.Random(42))
    print(f"Attempts: {result.attempts}")
    print(f"Fallback used: {result.fallback_used}")
    print(f"Elapsed: {result.elapsed * 1000:.1f} ms")
    print(result.board.format_board())

    # Example 2: Replay the deduction on it
    print("\n2. Deduction result:")
    print("-" * 60)
    report = check_solvability(result.board, 8, 8)
    print(format_knowledge(report.knowledge))
    print(f"Solvable: {report.solvable} ({report.reason}, {report.stats.passes} passes)")

    # Example 3: Compare difficulty levels
    print("\n3. Search effort by difficulty level (5 boards each)...")
    print("-" * 60)

    difficulties = [
        ("Easy", 9, 9, 10),
        ("Normal", 16, 16, 40),
        ("Hard", 30, 16, 99),
    ]

    for name, w, h, m in difficulties:
        stats = run_generation_many_tests(w, h, m, runs=5, seed=0)
        print(
            f"{name:8s} ({w}x{h}, {m:2d} mines): "
            f"{stats['avg_attempts']:7.1f} attempts, "
            f"{stats['fallback_rate'] * 100:5.1f}% fallback"
        )

    print("\n" + "=" * 60)
    print("Done! See README.md for more detailed usage instructions.")
    print("=" * 60)


if __name__ == "__main__":
    main()
