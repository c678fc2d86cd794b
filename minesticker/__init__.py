"""
Minesticker

Minesweeper board generation that never forces a guess:
- Board model and knowledge grid
- Flood-open shared by gameplay and the solver simulation
- Deduction engine applying the two single-cell rules to a fixed point
- Generate-and-test search with a classic random fallback
"""

from .board import Board
from .engine import Minesweeper, play_cli
from .flood import flood_open, flood_region
from .generator import (
    DIFFICULTY_PRESETS,
    GenerationCancelled,
    GenerationResult,
    GeneratorSettings,
    forbidden_zone,
    generate,
    generate_board,
    generate_classic_board,
    generate_no_guess_board,
)
from .knowledge import CellKind, CellState, KnowledgeGrid
from .solver import (
    DeductionStats,
    SolvabilityReport,
    check_solvability,
    deduce,
    is_solvable,
)
from .analysis import (
    format_knowledge,
    mine_density_map,
    run_generation_level_analysis,
    run_generation_many_tests,
    run_generation_single_test,
)

__version__ = "1.0.0"

__all__ = [
    # Core classes
    "Board",
    "CellKind",
    "CellState",
    "KnowledgeGrid",
    "Minesweeper",
    "GeneratorSettings",
    "GenerationResult",
    "GenerationCancelled",
    "DeductionStats",
    "SolvabilityReport",
    # Generation and solving
    "DIFFICULTY_PRESETS",
    "generate",
    "generate_board",
    "generate_no_guess_board",
    "generate_classic_board",
    "forbidden_zone",
    "check_solvability",
    "deduce",
    "is_solvable",
    "flood_open",
    "flood_region",
    # CLI
    "play_cli",
    # Analysis functions
    "format_knowledge",
    "mine_density_map",
    "run_generation_single_test",
    "run_generation_many_tests",
    "run_generation_level_analysis",
]
