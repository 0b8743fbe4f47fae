import io
from contextlib import redirect_stdout

import streamlit as st

from tableau_simplex import SimplexError, parse_task, solve
from tableau_simplex.fields import fmt
from tableau_simplex.plot import plot_2d

st.set_page_config(page_title="Simplex Visualizer", layout="wide")
st.title("Simplex (Tableau) — Solve & Visualize")

# Sidebar options
with st.sidebar:
    st.header("Options")
    method = st.selectbox("Method", ["auto", "simple", "big_m", "two_phase"], index=0)
    show_graph = st.checkbox("Show graph (2 variables only)", value=True)

default_task = """\
x1 + 3x2 <= 18
x1 + x2 <= 8
2x1 + x2 <= 14
z = 2x1 + 3x2 -> max
"""

st.subheader("Task")
task_text = st.text_area("One restriction per line, objective last", default_task, height=220)

col_run, col_reset = st.columns([1, 1])
run = col_run.button("Solve")
if col_reset.button("Reset to template"):
    st.rerun()


if run:
    try:
        task = parse_task(task_text)
    except SimplexError as e:
        st.error(f"Invalid task: {e}")
    else:
        # Capture solver verbose output
        buf = io.StringIO()
        try:
            with redirect_stdout(buf):
                res = solve(task, method=method, verbose=True)
        except SimplexError as e:
            res = None
            st.code(buf.getvalue())
            st.error(f"{type(e).__name__}: {e}")

        if res is not None:
            # Single-column layout: Iterations -> Result -> Graph
            st.subheader("Iterations / Tableaux")
            st.code(buf.getvalue())
            st.subheader("Result")
            st.json({
                "optimal_value": fmt(res.optimal_value),
                "variables": {f"x{i}": fmt(v) for i, v in sorted(res.variables.items())},
                "iterations": res.iterations,
                "method": res.method,
            })
            if res.alternate_optimal:
                st.info("Infinite many optimal solutions along an edge (alternate optimal).")

            st.subheader("Graph")
            if show_graph and task.variable_count() == 2:
                fig = plot_2d(task, res)
                if fig is not None:
                    st.pyplot(fig)
                else:
                    st.info("No feasible region to plot.")
            else:
                st.info("Graph available only for 2 variables.")
