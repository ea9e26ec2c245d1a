"""
No-guess Minesweeper Generator - Interactive Demo

Run with: streamlit run app/demo.py
"""

import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

import streamlit as st
from typing import Optional, Tuple

from noguess import (
    Board,
    BoardGenerator,
    CellState,
    ConfigurationError,
    GenerationConfig,
    GenerationStrategy,
    LogicSolver,
    SimulationGrid,
)


def render_board_html(
    board: Board,
    grid: Optional[SimulationGrid] = None,
    highlight_cell: Optional[Tuple[int, int]] = None,
    show_mines: bool = False,
) -> str:
    """Render the board as HTML, optionally overlaying a deduction replay."""
    # Scale cell size based on board width
    if board.cols >= 30:
        cell_size = 14
        font_size = "10px"
    elif board.cols >= 25:
        cell_size = 16
        font_size = "11px"
    elif board.cols >= 16:
        cell_size = 20
        font_size = "13px"
    else:
        cell_size = 26
        font_size = "15px"

    colors = {
        "0": "#cccccc",
        "1": "#0000ff",
        "2": "#008000",
        "3": "#ff0000",
        "4": "#000080",
        "5": "#800000",
        "6": "#008080",
        "7": "#000000",
        "8": "#808080",
        "M": "#ff0000",
        ".": "#666666",
        "F": "#ffffff",
    }

    html = '<div style="font-family: monospace; line-height: 1.2;">'
    html += '<table style="border-collapse: collapse; margin: auto;">'

    for x in range(board.rows):
        html += "<tr>"
        for y in range(board.cols):
            state = grid.state[x][y] if grid is not None else None

            if state is CellState.FLAGGED:
                cell = "F"  # Flagged by deduction
                bg = "#ffa500"
                text_color = "#ffffff"
            elif state is CellState.REVEALED or (
                board.mines_placed and board.revealed[x, y] and not board.mines[x, y]
            ):
                cell = str(int(board.counts[x, y]))
                bg = "#f0f0f0" if cell == "0" else "#ffffff"
                text_color = colors.get(cell, "#000000")
            elif show_mines and board.mines_placed and board.mines[x, y]:
                cell = "M"
                bg = "#ffcccc"
                text_color = "#ff0000"
            else:
                cell = "."
                bg = "#c0c0c0"
                text_color = "#666666"

            border = "2px solid #ff0000" if (x, y) == highlight_cell else "1px solid #999"
            display = cell if cell != "0" else " "

            html += f'''<td style="
                width: {cell_size}px; height: {cell_size}px;
                text-align: center;
                background: {bg};
                border: {border};
                color: {text_color};
                font-weight: bold;
                font-size: {font_size};
            ">{display}</td>'''
        html += "</tr>"

    html += "</table></div>"
    return html


def main():
    st.set_page_config(
        page_title="No-guess Minesweeper Generator",
        page_icon="💣",
        layout="wide",
    )

    st.title("No-guess Minesweeper Generator")
    st.markdown("""
    Generates boards that can be cleared by deduction alone, or boards whose
    first click opens a mine-free 3x3 area.
    """)

    # Sidebar configuration
    st.sidebar.header("Board Configuration")

    preset = st.sidebar.selectbox(
        "Difficulty Preset",
        ["Beginner (9x9, 10)", "Intermediate (16x16, 40)", "Expert (16x30, 99)", "Custom"],
    )

    if preset == "Beginner (9x9, 10)":
        rows, cols, mines = 9, 9, 10
    elif preset == "Intermediate (16x16, 40)":
        rows, cols, mines = 16, 16, 40
    elif preset == "Expert (16x30, 99)":
        rows, cols, mines = 16, 30, 99
    else:
        rows = st.sidebar.slider("Rows", 3, 30, 16)
        cols = st.sidebar.slider("Columns", 3, 30, 16)
        max_mines = rows * cols - 1
        mines = st.sidebar.slider("Mines", 1, max_mines, min(40, max_mines))

    strategy = st.sidebar.selectbox(
        "Generation Strategy",
        [s.value for s in GenerationStrategy],
        help="eager_verified: Sample layouts until one is solvable without guessing. "
             "deferred_safe_start: Place mines after the first click, keeping its 3x3 clear.",
    )

    attempt_cap = st.sidebar.number_input(
        "Attempt cap", min_value=1, max_value=5000, value=500, step=50,
        disabled=strategy != GenerationStrategy.EAGER_VERIFIED.value,
    )

    seed_text = st.sidebar.text_input("Seed (optional)", "")
    seed: Optional[int] = int(seed_text) if seed_text.strip().isdigit() else None

    show_mines = st.sidebar.checkbox("Show mines", value=False)

    if "result" not in st.session_state:
        st.session_state.result = None
        st.session_state.replay = None

    if st.sidebar.button("Generate board", type="primary"):
        try:
            config = GenerationConfig(
                rows, cols, mines,
                strategy=strategy,
                attempt_cap=int(attempt_cap),
                seed=seed,
            )
        except ConfigurationError as e:
            st.sidebar.error(str(e))
        else:
            with st.spinner("Generating..."):
                st.session_state.result = BoardGenerator(config).generate()
            st.session_state.replay = None

    result = st.session_state.result
    if result is None:
        st.info("Choose settings and press **Generate board**.")
        return

    board = result.board
    col1, col2 = st.columns([3, 1])

    with col2:
        st.subheader("Generation")
        st.metric("Strategy", result.strategy.value)
        st.metric("Mines", board.mine_count)
        if result.strategy is GenerationStrategy.EAGER_VERIFIED:
            st.metric("Verified", "yes" if result.verified else "no")
            st.metric("Attempts", result.attempts)
            st.metric("No zero cell", result.skipped_attempts)
            st.metric("Needed a guess", result.rejected_attempts)
            if result.exhausted:
                st.warning("Attempt cap reached; this board may need a guess.")

            if result.start_cell is not None and st.button("Replay deduction"):
                grid = SimulationGrid.from_board(board)
                solver = LogicSolver(grid)
                solver.solve(result.start_cell)
                st.session_state.replay = (grid, solver.stats())

            if st.session_state.replay is not None:
                _, stats = st.session_state.replay
                st.json(stats)
        elif not board.mines_placed:
            st.markdown("Mines are placed on the first click.")
            fx = st.number_input("First click x (row)", 0, board.rows - 1, board.rows // 2)
            fy = st.number_input("First click y (column)", 0, board.cols - 1, board.cols // 2)
            if st.button("Reveal"):
                board.reveal(int(fx), int(fy))
                st.rerun()

    with col1:
        st.subheader("Board")
        grid = st.session_state.replay[0] if st.session_state.replay else None
        st.markdown(
            render_board_html(
                board,
                grid=grid,
                highlight_cell=result.start_cell,
                show_mines=show_mines,
            ),
            unsafe_allow_html=True,
        )


if __name__ == "__main__":
    main()
