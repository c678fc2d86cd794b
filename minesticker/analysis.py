"""Analysis and benchmarking tools for the board generator."""

import random
from collections import defaultdict
from typing import Dict, List, Optional, Tuple

import matplotlib.pyplot as plt
import numpy as np

from .board import Board
from .generator import DIFFICULTY_PRESETS, GeneratorSettings, generate
from .knowledge import KnowledgeGrid
from .solver import check_solvability


def format_knowledge(
    knowledge: KnowledgeGrid, *, show_coords: bool = True
) -> str:
    """
    Format a knowledge grid as a human-readable string.

    Args:
        knowledge: Grid to display.
        show_coords: If True, include coordinate labels and a header.

    Returns:
        A text grid where unknown cells are shown as '.', deduced mines as 'M'
        and opened cells as their adjacent mine count.
    """
    w, h = knowledge.width, knowledge.height

    lines: List[str] = []
    if show_coords:
        header = " ".join(f"{x:2d}" for x in range(w))
        lines.append("   " + header)
        lines.append("   " + "-" * (3 * w - 1))

    for y in range(h):
        row = " ".join(f" {knowledge[x, y].symbol()}" for x in range(w))
        lines.append(f"{y:2d} |" + row if show_coords else row)

    return "\n".join(lines)


def run_generation_single_test(
    width: int,
    height: int,
    mines_count: int,
    start: Optional[Tuple[int, int]] = None,
    *,
    settings: Optional[GeneratorSettings] = None,
    seed: Optional[int] = None,
    show_boards: bool = False,
) -> Dict[str, object]:
    """
    Generate one board and re-run the deduction engine on it.

    Args:
        width: Board width.
        height: Board height.
        mines_count: Total number of mines on the board.
        start: Start cell; defaults to the board center.
        settings: Generator settings.
        seed: Seed for the random generator.
        show_boards: If True, print the board and the final knowledge grid.

    Returns:
        Dict with the board, attempts, fallback flag, elapsed seconds,
        deduction passes and whether the board is solvable.
    """
    settings = settings or GeneratorSettings()
    sx, sy = start if start is not None else (width // 2, height // 2)

    result = generate(
        width, height, mines_count, sx, sy, settings=settings, rng=random.Random(seed)
    )
    report = check_solvability(
        result.board,
        sx,
        sy,
        min_opened=settings.min_opened,
        max_iterations=settings.max_iterations,
    )

    if show_boards:
        print(f"Board {width}x{height}, {mines_count} mines, start ({sx}, {sy})")
        print(result.board.format_board())
        print()
        print("Deduction result (unknowns shown as '.'):")
        print(format_knowledge(report.knowledge, show_coords=True))
        print()
        print(
            f"attempts={result.attempts} fallback={result.fallback_used} "
            f"reason={report.reason}"
        )

    return {
        "board": result.board,
        "attempts": result.attempts,
        "fallback_used": result.fallback_used,
        "elapsed": result.elapsed,
        "passes": report.stats.passes,
        "solvable": report.solvable,
        "reason": report.reason,
    }


def run_generation_many_tests(
    width: int,
    height: int,
    mines_count: int,
    runs: int,
    *,
    settings: Optional[GeneratorSettings] = None,
    seed: Optional[int] = None,
) -> Dict[str, float]:
    """
    Generate many boards and return averaged metrics.

    Returns:
        - avg_attempts, avg_elapsed, avg_passes
        - fallback_rate, solvable_rate
        - median_attempts (successful searches only; 0.0 if none)
    """
    if runs <= 0:
        raise ValueError("runs must be positive.")

    rng = random.Random(seed)
    sums: Dict[str, float] = defaultdict(float)
    successful_attempts: List[int] = []

    for _ in range(runs):
        out = run_generation_single_test(
            width, height, mines_count, settings=settings, seed=rng.randrange(2**32)
        )
        sums["avg_attempts"] += float(out["attempts"])  # type: ignore[arg-type]
        sums["avg_elapsed"] += float(out["elapsed"])  # type: ignore[arg-type]
        sums["avg_passes"] += float(out["passes"])  # type: ignore[arg-type]
        sums["fallback_rate"] += 1.0 if out["fallback_used"] else 0.0
        sums["solvable_rate"] += 1.0 if out["solvable"] else 0.0
        if not out["fallback_used"]:
            successful_attempts.append(int(out["attempts"]))  # type: ignore[arg-type]

    stats: Dict[str, float] = {k: total / runs for k, total in sums.items()}
    stats["median_attempts"] = (
        float(np.median(successful_attempts)) if successful_attempts else 0.0
    )
    return stats


def run_generation_level_analysis(
    runs: int,
    *,
    settings: Optional[GeneratorSettings] = None,
    seed: Optional[int] = None,
    levels: Optional[Dict[str, Tuple[int, int, int]]] = None,
    plot: bool = True,
) -> Dict[str, Dict[str, float]]:
    """
    Benchmark generation on each difficulty level and plot summaries.

    Args:
        runs: Boards generated per level.
        settings: Generator settings.
        seed: Seed for the random generator.
        levels: Mapping name -> (width, height, mines); defaults to DIFFICULTY_PRESETS.
        plot: If True, show matplotlib bar charts.

    Returns:
        Mapping from level name to statistics dict returned by run_generation_many_tests().
    """
    levels = levels or DIFFICULTY_PRESETS

    results: Dict[str, Dict[str, float]] = {}
    for level, (w, h, m) in levels.items():
        results[level] = run_generation_many_tests(
            w, h, m, runs, settings=settings, seed=seed
        )

    if not plot:
        return results

    level_names = list(levels.keys())
    x = np.arange(len(level_names))

    # 1) Search effort
    attempts = [results[n]["avg_attempts"] for n in level_names]
    passes = [results[n]["avg_passes"] for n in level_names]

    bar_w = 0.35
    plt.figure()  # type: ignore[misc]
    plt.bar(x - bar_w / 2, attempts, width=bar_w, label="attempts")  # type: ignore[misc]
    plt.bar(x + bar_w / 2, passes, width=bar_w, label="deduction passes")  # type: ignore[misc]
    plt.xticks(x, level_names)  # type: ignore[misc]
    plt.ylabel("Average per board")  # type: ignore[misc]
    plt.title("Search effort by difficulty level")  # type: ignore[misc]
    plt.legend()  # type: ignore[misc]
    plt.tight_layout()
    plt.show()  # type: ignore[misc]

    # 2) Fallback rate
    fallback_rates = [results[n]["fallback_rate"] for n in level_names]

    plt.figure()  # type: ignore[misc]
    plt.bar(x, fallback_rates)  # type: ignore[misc]
    plt.xticks(x, level_names)  # type: ignore[misc]
    plt.ylabel("Fallback rate")  # type: ignore[misc]
    plt.ylim(0.0, 1.0)  # type: ignore[misc]
    plt.title("Classic fallback rate by difficulty level")  # type: ignore[misc]
    plt.tight_layout()
    plt.show()  # type: ignore[misc]

    return results


def mine_density_map(boards: List[Board]) -> np.ndarray:
    """Return the per-cell fraction of `boards` holding a mine, shaped (height, width)."""
    if not boards:
        raise ValueError("boards must be non-empty.")
    width, height = boards[0].width, boards[0].height
    counts = np.zeros((height, width), dtype=np.float64)
    for board in boards:
        if (board.width, board.height) != (width, height):
            raise ValueError("All boards must share the same dimensions.")
        for mx, my in board.mines:
            counts[my, mx] += 1.0
    return counts / len(boards)
