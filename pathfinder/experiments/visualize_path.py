#!/usr/bin/env python3
import argparse, os
from pathlib import Path
import numpy as np
import matplotlib
if "MPLBACKEND" not in os.environ:
    matplotlib.use("Agg")
import matplotlib.pyplot as plt
from matplotlib.patches import Rectangle

from typing import List, Sequence, Tuple

from pathfinder.domains.grid import Grid, Pos
from pathfinder.domains.sliding_tiles import NPuzzle
from pathfinder.search.a_star import PathFinder
from pathfinder.search.errors import NoPathFound

State = Tuple[int, ...]

def draw_board(state: State, cols: int, out_path: Path):
    """One square per cell, numbered tiles shaded, the blank left white."""
    rows = len(state) // cols
    fig, ax = plt.subplots(figsize=(cols, rows))
    for idx, t in enumerate(state):
        r, c = divmod(idx, cols)
        ax.add_patch(Rectangle((c, r), 1, 1, edgecolor="black",
                               facecolor="lightsteelblue" if t else "white"))
        if t:
            ax.text(c + 0.5, r + 0.5, str(t), ha="center", va="center", fontsize=16)
    ax.set_xlim(0, cols); ax.set_ylim(rows, 0)
    ax.set_aspect("equal"); ax.axis("off")
    out_path.parent.mkdir(parents=True, exist_ok=True)
    fig.tight_layout()
    fig.savefig(out_path, dpi=200)
    plt.close(fig)

def draw_grid(grid: Grid, path: Sequence[Pos], upto: int, out_path: Path):
    """Walls in black, the walked part of the path as a line, current cell as a dot."""
    cells = np.zeros((grid.H, grid.W))
    for x, y in grid.walls:
        cells[y, x] = 1.0
    plt.figure(figsize=(4, 4 * grid.H / max(grid.W, 1)))
    ax = plt.gca()
    ax.imshow(cells, cmap="Greys", vmin=0, vmax=1)
    xs = [p[0] for p in path[:upto + 1]]
    ys = [p[1] for p in path[:upto + 1]]
    ax.plot(xs, ys, linewidth=2)
    ax.plot(xs[-1:], ys[-1:], marker="o", markersize=8)
    gx, gy = path[-1]
    ax.plot([gx], [gy], marker="*", markersize=12)
    ax.set_xticks([]); ax.set_yticks([])
    out_path.parent.mkdir(parents=True, exist_ok=True)
    plt.tight_layout()
    plt.savefig(out_path, dpi=150)
    plt.close()

def solve_tiles(args) -> Tuple[List[State], NPuzzle]:
    dom = NPuzzle(args.n)
    start = dom.scramble(args.depth, args.seed)
    h = dom.manhattan if args.heuristic == "manhattan" else dom.linear_conflict
    return PathFinder(dom.neighbors, h).shortest_path(start, dom.GOAL), dom

def solve_grid(args) -> Tuple[List[Pos], Grid]:
    start, goal = (0, 0), (args.width - 1, args.height - 1)
    grid = Grid.random(args.width, args.height, args.density, args.seed, keep_open=[start, goal])
    return PathFinder(grid.neighbors, grid.heuristic_cost).shortest_path(start, goal), grid

def main():
    p = argparse.ArgumentParser(description="Solve one instance and save one image per path step.")
    p.add_argument("--domain", choices=["tiles", "grid"], default="tiles")
    p.add_argument("--heuristic", choices=["manhattan","linear_conflict"], default="manhattan")
    p.add_argument("--n", type=int, default=3)
    p.add_argument("--depth", type=int, default=10)
    p.add_argument("--width", type=int, default=20)
    p.add_argument("--height", type=int, default=20)
    p.add_argument("--density", type=float, default=0.25)
    p.add_argument("--seed", type=int, default=1)
    p.add_argument("--outdir", default="results/figs/example_path")
    args = p.parse_args()

    try:
        if args.domain == "tiles":
            path, dom = solve_tiles(args)
        else:
            path, grid = solve_grid(args)
    except NoPathFound as e:
        print(f"{e}. Try another seed or a lower density.")
        return

    outdir = Path(args.outdir)
    for i, s in enumerate(path):
        if args.domain == "tiles":
            draw_board(s, dom.C, outdir / f"step_{i:03d}.png")
        else:
            draw_grid(grid, path, i, outdir / f"step_{i:03d}.png")
    print(f"Saved {len(path)} frames to {outdir}")

if __name__ == "__main__":
    main()
