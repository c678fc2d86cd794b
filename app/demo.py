"""
Minesticker - Interactive Board Generator Demo

Run with: streamlit run app/demo.py
"""

import logging
import random
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

import streamlit as st
from typing import AbstractSet, Optional, Tuple

from minesticker import (
    DIFFICULTY_PRESETS,
    Board,
    CellState,
    GeneratorSettings,
    check_solvability,
    forbidden_zone,
    generate,
)

Snapshot = Tuple[Tuple[CellState, ...], ...]

COLORS = {
    "1": "#0000ff",
    "2": "#008000",
    "3": "#ff0000",
    "4": "#000080",
    "5": "#800000",
    "6": "#008080",
    "7": "#000000",
    "8": "#808080",
}


def cell_size_for(width: int) -> Tuple[int, str]:
    """Scale cell size based on board width."""
    if width >= 30:
        return 14, "10px"
    if width >= 25:
        return 16, "11px"
    if width >= 16:
        return 20, "13px"
    return 26, "15px"


def render_cells(
    width: int,
    height: int,
    cell_fn,
    highlight_cell: Optional[Tuple[int, int]] = None,
) -> str:
    """Render a grid where cell_fn(x, y) returns (text, background, text_color)."""
    cell_size, font_size = cell_size_for(width)

    html = '<div style="font-family: monospace; line-height: 1.2;">'
    html += '<table style="border-collapse: collapse; margin: auto;">'
    for y in range(height):
        html += "<tr>"
        for x in range(width):
            text, bg, text_color = cell_fn(x, y)
            if highlight_cell and (x, y) == highlight_cell:
                border = "3px solid #ff0000"
            else:
                border = "1px solid #999"
            html += f'''<td style="
                width: {cell_size}px; height: {cell_size}px;
                text-align: center;
                background: {bg};
                border: {border};
                color: {text_color};
                font-weight: bold;
                font-size: {font_size};
            ">{text}</td>'''
        html += "</tr>"
    html += "</table></div>"
    return html


def render_board_html(
    board: Board,
    start: Tuple[int, int],
    zone: AbstractSet[Tuple[int, int]],
) -> str:
    """Render the full board, shading the forbidden zone around the start."""

    def cell_fn(x: int, y: int) -> Tuple[str, str, str]:
        if board.mine_at(x, y):
            return "M", "#ffcccc", "#ff0000"
        count = board.adjacent_mine_count(x, y)
        bg = "#e6f2ff" if (x, y) in zone else ("#f0f0f0" if count == 0 else "#ffffff")
        return (str(count) if count else " "), bg, COLORS.get(str(count), "#000000")

    return render_cells(board.width, board.height, cell_fn, highlight_cell=start)


def render_snapshot_html(
    snapshot: Snapshot, width: int, height: int, start: Tuple[int, int]
) -> str:
    """Render one deduction pass from a knowledge snapshot."""

    def cell_fn(x: int, y: int) -> Tuple[str, str, str]:
        state = snapshot[y][x]
        if state.is_mine:
            return "F", "#ffa500", "#ffffff"
        if state.is_unknown:
            return ".", "#c0c0c0", "#666666"
        bg = "#f0f0f0" if state.count == 0 else "#ffffff"
        text = str(state.count) if state.count else " "
        return text, bg, COLORS.get(str(state.count), "#000000")

    return render_cells(width, height, cell_fn, highlight_cell=start)


def main():
    st.set_page_config(
        page_title="Minesticker Board Generator",
        page_icon="💣",
        layout="wide",
    )
    logging.basicConfig(level=logging.INFO)

    st.title("Minesticker Board Generator")
    st.markdown("""
    Generates Minesweeper boards that can be cleared from the start cell without guessing.
    """)

    # Sidebar configuration
    st.sidebar.header("Board Configuration")

    preset = st.sidebar.selectbox(
        "Difficulty Preset",
        ["Easy (9x9, 10)", "Normal (16x16, 40)", "Hard (30x16, 99)", "Custom"],
    )

    if preset == "Custom":
        width = st.sidebar.slider("Width", 5, 30, 16)
        height = st.sidebar.slider("Height", 5, 30, 16)
        max_mines = width * height - 1
        mines = st.sidebar.slider("Mines", 0, max_mines, min(40, max_mines))
    else:
        width, height, mines = DIFFICULTY_PRESETS[preset.split()[0].lower()]

    start_x = st.sidebar.slider("Start X", 0, width - 1, width // 2)
    start_y = st.sidebar.slider("Start Y", 0, height - 1, height // 2)

    st.sidebar.header("Search Settings")
    max_attempts = st.sidebar.number_input("Max attempts", 1, 20000, 2000, step=100)
    min_opened = st.sidebar.number_input("Minimum opening", 0, width * height, 12)
    max_iterations = st.sidebar.number_input("Max deduction passes", 1, 1000, 100)
    seed_text = st.sidebar.text_input("Seed (optional)", "")

    settings = GeneratorSettings(
        max_attempts=int(max_attempts),
        min_opened=int(min_opened),
        max_iterations=int(max_iterations),
    )

    if "result" not in st.session_state:
        st.session_state.result = None
        st.session_state.report = None
        st.session_state.start = None

    if st.button("Generate Board", type="primary"):
        rng = random.Random(int(seed_text)) if seed_text.strip() else random.Random()
        with st.spinner("Searching for a no-guessing board..."):
            result = generate(
                width, height, mines, start_x, start_y, settings=settings, rng=rng
            )
        st.session_state.result = result
        st.session_state.report = check_solvability(
            result.board,
            start_x,
            start_y,
            min_opened=settings.min_opened,
            max_iterations=settings.max_iterations,
            record_steps=True,
        )
        st.session_state.start = (start_x, start_y)

    result = st.session_state.result
    report = st.session_state.report
    if result is None:
        st.info("Click 'Generate Board' to search for a board.")
        return

    board = result.board
    start = st.session_state.start
    zone = forbidden_zone(board.width, board.height, start[0], start[1])

    col1, col2 = st.columns([3, 1])

    with col1:
        st.subheader("Board")
        if result.fallback_used:
            st.warning(
                f"No guess-free board found in {result.attempts} attempts; "
                "showing a classic random board."
            )
        st.markdown(render_board_html(board, start, zone), unsafe_allow_html=True)

        if report.steps:
            st.markdown("---")
            st.subheader("Deduction Replay")
            step = st.slider("Pass", 0, len(report.steps) - 1, len(report.steps) - 1)
            label = "initial flood" if step == 0 else f"after pass {step}"
            st.caption(label)
            st.markdown(
                render_snapshot_html(report.steps[step], board.width, board.height, start),
                unsafe_allow_html=True,
            )

    with col2:
        st.subheader("Statistics")
        st.metric("Attempts", result.attempts)
        st.metric("Fallback", "Yes" if result.fallback_used else "No")
        st.metric("Time", f"{result.elapsed * 1000:.1f} ms")
        st.metric("Opened at start", report.opened_at_start)
        st.metric("Deduction passes", report.stats.passes)
        st.text(f"Result: {report.reason}")
        st.text(f"Rule A firings: {report.stats.rule_a_count}")
        st.text(f"Rule B firings: {report.stats.rule_b_count}")

        st.markdown("---")
        st.markdown("""
        **Deduction rules:**
        1. **Rule A**: remaining mines equal unknown neighbors, all are mines
        2. **Rule B**: no remaining mines, all unknown neighbors are safe
        """)


if __name__ == "__main__":
    main()
