"""Graph of a two-variable task: restriction lines, feasible region, optimum."""

from __future__ import annotations

from itertools import combinations
from typing import Optional

import matplotlib.pyplot as plt
import numpy as np

from .fields import fmt
from .solver import Solution
from .task import Relation, Task

EPS = 1e-9


def _dense(task: Task):
    """Restrictions as float rows over x1, x2 plus their relations."""
    A, b, senses = [], [], []
    for r in task.restrictions:
        row = [0.0, 0.0]
        for t in r.terms:
            row[t.index - 1] += float(t.coef)
        A.append(row)
        b.append(float(r.value))
        senses.append(r.relation)
    return A, b, senses


def _feasible(p, A, b, senses) -> bool:
    x, y = p
    ok = True
    for row, bi, s in zip(A, b, senses):
        lhs = row[0]*x + row[1]*y
        if s is Relation.LESS:
            ok &= lhs <= bi + EPS
        elif s is Relation.GREATER:
            ok &= lhs >= bi - EPS
        else:
            ok &= abs(lhs - bi) <= EPS
    return ok and x >= -EPS and y >= -EPS


def bfs_points(task: Task):
    """Feasible intersections of restriction lines and the axes."""
    A, b, senses = _dense(task)
    lines = [(row[0], row[1], bi) for row, bi in zip(A, b)]
    lines.append((1.0, 0.0, 0.0))  # x1 = 0
    lines.append((0.0, 1.0, 0.0))  # x2 = 0
    uniq = []
    for (a1, a2, bi), (c1, c2, bj) in combinations(lines, 2):
        det = a1*c2 - a2*c1
        if abs(det) < 1e-12:
            continue
        x = (bi*c2 - a2*bj) / det
        y = (a1*bj - bi*c1) / det
        if not _feasible((x, y), A, b, senses):
            continue
        if not any(abs(x-x2) < 1e-7 and abs(y-y2) < 1e-7 for (x2, y2) in uniq):
            uniq.append((x, y))
    return uniq


def plot_2d(task: Task, solution: Optional[Solution] = None):
    """Return a matplotlib figure for tasks over x1, x2, or None otherwise."""
    if task.variable_count() != 2:
        return None

    A, b, senses = _dense(task)
    bfs = bfs_points(task)
    if not bfs:
        return None

    xs = [p[0] for p in bfs]
    ys = [p[1] for p in bfs]
    xmin, xmax = 0.0, max(xs)*1.2 + 1.0
    ymin, ymax = 0.0, max(ys)*1.2 + 1.0
    grid_x = np.linspace(xmin, xmax, 400)

    fig, ax = plt.subplots(figsize=(6, 6))

    color_cycle = plt.rcParams.get('axes.prop_cycle', None)
    colors = color_cycle.by_key()['color'] if color_cycle else [f'C{i}' for i in range(10)]
    for i, (row, bi, s) in enumerate(zip(A, b, senses)):
        a1, a2 = row
        c = colors[i % len(colors)]
        label = f"{a1:g}x1 + {a2:g}x2 {s.value} {bi:g}"
        if abs(a2) < 1e-12:
            x0 = bi/a1 if abs(a1) > 1e-12 else 0
            ax.axvline(x0, color=c, alpha=0.7, label=label)
        else:
            ax.plot(grid_x, (bi - a1*grid_x)/a2, color=c, alpha=0.7, label=label)

    # Shade feasible region
    X, Y = np.meshgrid(np.linspace(xmin, xmax, 200), np.linspace(ymin, ymax, 200))
    mask = np.ones_like(X, dtype=bool)
    for row, bi, s in zip(A, b, senses):
        lhs = row[0]*X + row[1]*Y
        if s is Relation.LESS:
            mask &= lhs <= bi + EPS
        elif s is Relation.GREATER:
            mask &= lhs >= bi - EPS
        else:
            mask &= np.abs(lhs - bi) <= EPS
    ax.contourf(X, Y, mask, levels=[0.5, 1.5], colors=['#e8f7ff'], alpha=0.5)

    ax.scatter(xs, ys, s=25, color='#444444', alpha=0.9, label='BFS')

    if solution is not None:
        x1, x2 = solution.values(2)
        xopt, yopt = float(x1), float(x2)
        ax.plot([xopt], [yopt], 'ro', label='optimal')
        ax.annotate(
            f"z* = {fmt(solution.optimal_value)}",
            (xopt, yopt), textcoords="offset points", xytext=(8, 8),
        )

    ax.set_xlim(xmin, xmax)
    ax.set_ylim(ymin, ymax)
    ax.set_xlabel('x1')
    ax.set_ylabel('x2')
    ax.set_title('Restrictions, Feasible Region, Optimum')
    ax.legend(loc='best', fontsize=8)
    ax.grid(True, alpha=0.3)
    fig.tight_layout()
    return fig
