import pytest

from minesticker.analysis import (
    format_knowledge,
    mine_density_map,
    run_generation_level_analysis,
    run_generation_many_tests,
    run_generation_single_test,
)
from minesticker.board import Board
from minesticker.knowledge import KnowledgeGrid


def test_format_knowledge_without_coords():
    grid = KnowledgeGrid(3, 2)
    grid.open(0, 0, 1)
    grid.mark_mine(1, 0)
    assert format_knowledge(grid, show_coords=False) == " 1  M  .\n .  .  ."


def test_format_knowledge_with_coords():
    grid = KnowledgeGrid(2, 1)
    lines = format_knowledge(grid).splitlines()
    assert lines[0] == "    0  1"
    assert lines[2] == " 0 | .  ."


def test_single_test_reports_generation_and_deduction():
    out = run_generation_single_test(9, 9, 10, seed=4)
    assert out["board"].mines_count == 10
    assert out["attempts"] >= 1
    if not out["fallback_used"]:
        assert out["solvable"]
        assert out["reason"] == "solved"


def test_many_tests_averages():
    stats = run_generation_many_tests(9, 9, 10, 3, seed=11)
    assert set(stats) >= {
        "avg_attempts",
        "avg_elapsed",
        "avg_passes",
        "fallback_rate",
        "solvable_rate",
        "median_attempts",
    }
    assert 0.0 <= stats["fallback_rate"] <= 1.0
    assert stats["solvable_rate"] >= 1.0 - stats["fallback_rate"]
    with pytest.raises(ValueError):
        run_generation_many_tests(9, 9, 10, 0)


def test_level_analysis_without_plots():
    results = run_generation_level_analysis(
        2, seed=3, levels={"tiny": (9, 9, 10)}, plot=False
    )
    assert list(results) == ["tiny"]
    assert results["tiny"]["avg_attempts"] >= 1.0


def test_level_analysis_plots_on_agg_backend():
    results = run_generation_level_analysis(1, seed=3, levels={"tiny": (9, 9, 5)})
    assert "tiny" in results


def test_mine_density_map():
    boards = [Board(2, 2, {(0, 0)}), Board(2, 2, {(0, 0), (1, 1)})]
    density = mine_density_map(boards)
    assert density.shape == (2, 2)
    assert density[0, 0] == 1.0
    assert density[1, 1] == 0.5
    assert density[0, 1] == 0.0
    with pytest.raises(ValueError):
        mine_density_map([])
    with pytest.raises(ValueError):
        mine_density_map([Board(2, 2), Board(3, 2)])
