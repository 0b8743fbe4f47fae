"""Command-line entry point: read a task file, solve it, print the result."""

from __future__ import annotations

import argparse
from typing import List, Optional

from .errors import SimplexError
from .methods import solve
from .parser import parse_task

DEFAULT_INPUT = "input.txt"


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="tableau-simplex",
        description="Tableau simplex with direct, Big-M and two-phase methods (shows iterations)",
    )
    p.add_argument("path", nargs="?", default=DEFAULT_INPUT, help=f"task file (default: {DEFAULT_INPUT})")
    p.add_argument("--method", choices=["auto", "simple", "big_m", "two_phase"], default="auto")
    p.add_argument("--no-verbose", action="store_true", help="Hide iteration printouts")
    p.add_argument("--graph", action="store_true", help="Plot restrictions and optimum (2 variables only)")
    return p


def main(argv: Optional[List[str]] = None):
    args = build_parser().parse_args(argv)

    try:
        with open(args.path, "r", encoding="utf-8") as f:
            text = f.read()
    except OSError as e:
        raise SystemExit(f"Cannot read {args.path}: {e.strerror}")

    try:
        task = parse_task(text)
        res = solve(task, method=args.method, verbose=not args.no_verbose)
    except SimplexError as e:
        raise SystemExit(f"{type(e).__name__}: {e}")

    print("\n=== Result ===")
    print(res)
    print("Iterations:", res.iterations)
    print("Method:", res.method)
    if res.alternate_optimal:
        print("Note: Infinite many optimal solutions (alternate optimal).")
        print("Zero reduced-cost nonbasic vars:", [f"x{i}" for i in res.alternate_vars])

    if args.graph:
        from .plot import plot_2d
        import matplotlib.pyplot as plt

        fig = plot_2d(task, res)
        if fig is None:
            print("Graph only supports feasible tasks over 2 variables.")
        else:
            plt.show()


if __name__ == "__main__":
    main()
