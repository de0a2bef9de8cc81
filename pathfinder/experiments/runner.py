from __future__ import annotations
import argparse, csv, logging, random
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, List, Optional

from pathfinder.domains.grid import Grid
from pathfinder.domains.sliding_tiles import NPuzzle, RectPuzzle, make_unsolvable_variant
from pathfinder.heuristics.manhattan import taxicab
from pathfinder.heuristics.zero import zero
from pathfinder.search.a_star import PathFinder, SearchResult, TIE_BREAKS
from pathfinder.search.bfs import bfs

logger = logging.getLogger(__name__)

HEADER = [
    "algorithm", "domain", "heuristic", "depth", "seed",
    "expanded", "generated", "duplicates", "g", "time_sec",
    "peak_open", "peak_closed", "tie_break", "termination", "solvable",
]

@dataclass
class Instance:
    seed: int
    depth: int
    start: Any
    goal: Any
    solvable: bool = True

def gen_tile_instances(dom: RectPuzzle, depths: List[int], per_depth: int,
                       start_seed: int = 0, include_unsolvable: bool = False) -> List[Instance]:
    out: List[Instance] = []
    seed = start_seed
    for d in depths:
        made = 0
        attempts = 0
        while made < per_depth:
            used = seed
            s = dom.scramble(d, used)
            seed += 1
            attempts += 1
            if dom.is_solvable(s):
                out.append(Instance(seed=used, depth=d, start=s, goal=dom.GOAL))
                if include_unsolvable:
                    out.append(Instance(seed=used, depth=d, start=make_unsolvable_variant(s),
                                        goal=dom.GOAL, solvable=False))
                made += 1
            if attempts > per_depth * 2000:
                raise RuntimeError(f"Instance generation took too long at depth={d}. Check solvability logic.")
    return out

def gen_grid_instances(width: int, height: int, density: float, count: int,
                       start_seed: int = 0) -> List[tuple]:
    """
    One random wall layout per seed, start in the top-left corner and the goal
    at a random open cell. Depth is the taxicab distance, a lower bound on g.
    Walls may cut the goal off; such instances are kept and marked unsolvable.
    Returns (grid, instance) pairs.
    """
    out = []
    for seed in range(start_seed, start_seed + count):
        start = (0, 0)
        grid = Grid.random(width, height, density, seed, keep_open=[start])
        cells = [p for p in grid.open_cells() if p != start]
        if not cells:
            logger.warning("seed %d: no open cell besides the start, skipped", seed)
            continue
        goal = random.Random(seed).choice(cells)
        reachable = bfs(start, goal, grid.neighbors, return_path=False).found
        if not reachable:
            logger.debug("seed %d: goal %s is walled off from the start", seed, goal)
        out.append((grid, Instance(seed=seed, depth=grid.heuristic_cost(start, goal),
                                   start=start, goal=goal, solvable=reachable)))
    return out

def choose_tile_domain(args) -> RectPuzzle:
    """
    Board selection precedence: --rows/--cols  >  --n  >  3x3.
    """
    if args.rows is not None and args.cols is not None:
        return RectPuzzle(args.rows, args.cols)
    return NPuzzle(args.n if args.n is not None else 3)

def tile_heuristic(dom: RectPuzzle, name: str) -> Callable[[Any, Any], int]:
    if name == "manhattan":       return dom.manhattan
    if name == "linear_conflict": return dom.linear_conflict
    if name == "zero":            return zero
    raise ValueError(f"Unknown heuristic {name!r} for sliding tiles")

def write_row(w, res: SearchResult, domain: str, heur: str, inst: Instance):
    w.writerow([
        res.algorithm, domain, heur if res.algorithm != "BFS" else "", inst.depth, inst.seed,
        res.expanded, res.generated, res.duplicates, "" if res.g is None else res.g,
        f"{res.time:.6f}", res.peak_open, res.peak_closed, res.tie_break,
        res.termination, int(inst.solvable),
    ])

def run(args) -> int:
    """Run every requested algorithm on every generated instance. Returns the number of rows written."""
    want_a   = args.algo in ("a", "both")
    want_bfs = args.algo in ("bfs", "both")

    if args.domain == "tiles":
        dom = choose_tile_domain(args)
        hfun = tile_heuristic(dom, args.heuristic)
        insts = gen_tile_instances(dom, args.depths, args.per_depth,
                                   include_unsolvable=args.include_unsolvable)
        jobs = [(dom.neighbors, inst) for inst in insts]
        domain_name = f"tiles{dom.R}x{dom.C}"
    else:
        if args.heuristic == "linear_conflict":
            raise ValueError("linear_conflict only applies to sliding tiles")
        pairs = gen_grid_instances(args.width, args.height, args.density, args.per_depth)
        hfun = zero if args.heuristic == "zero" else taxicab
        jobs = [(grid.neighbors, inst) for grid, inst in pairs]
        domain_name = f"grid{args.width}x{args.height}"

    logger.info("%s: %d instances, algo=%s heuristic=%s", domain_name, len(jobs), args.algo, args.heuristic)

    args.out.parent.mkdir(parents=True, exist_ok=True)
    rows = 0
    with args.out.open("w", newline="") as f:
        w = csv.writer(f); w.writerow(HEADER)
        for neighbors_fn, inst in jobs:
            if want_a:
                finder = PathFinder(neighbors_fn, hfun, tie_break=args.tie_break)
                r = finder.search(inst.start, inst.goal, return_path=False)
                write_row(w, r, domain_name, args.heuristic, inst); rows += 1
                logger.debug("A* seed=%d depth=%d g=%s expanded=%d", inst.seed, inst.depth, r.g, r.expanded)
            if want_bfs:
                r = bfs(inst.start, inst.goal, neighbors_fn, return_path=False)
                write_row(w, r, domain_name, args.heuristic, inst); rows += 1
                logger.debug("BFS seed=%d depth=%d g=%s expanded=%d", inst.seed, inst.depth, r.g, r.expanded)
    return rows

def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="A* vs BFS runner over sliding-tile and grid domains")
    ap.add_argument("--algo", choices=["a", "bfs", "both"], default="both")
    ap.add_argument("--heuristic", choices=["manhattan", "linear_conflict", "zero"], default="manhattan")
    ap.add_argument("--tie_break", choices=list(TIE_BREAKS), default="h")
    ap.add_argument("--depths", type=int, nargs="+", default=[4, 8, 12, 16])
    ap.add_argument("--per_depth", type=int, default=10,
                    help="Instances per depth (tiles) or total instances (grid)")
    ap.add_argument("--out", type=Path, default=Path("results/last_run.csv"))

    # domain selection
    ap.add_argument("--domain", choices=["tiles", "grid"], default="tiles")
    ap.add_argument("--n", type=int, default=None, help="Square board size (N×N)")
    ap.add_argument("--rows", type=int, default=None, help="Rows for rectangular board")
    ap.add_argument("--cols", type=int, default=None, help="Cols for rectangular board")
    ap.add_argument("--width", type=int, default=30, help="Grid width")
    ap.add_argument("--height", type=int, default=30, help="Grid height")
    ap.add_argument("--density", type=float, default=0.25, help="Grid wall probability")

    ap.add_argument("--include_unsolvable", action="store_true", help="Also run parity-flipped tile instances")
    ap.add_argument("--log_level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return ap

def main(argv: Optional[List[str]] = None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    )
    rows = run(args)
    print(f"Wrote {args.out} ({rows} rows)")

if __name__ == "__main__":
    main()
