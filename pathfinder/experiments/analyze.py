#!/usr/bin/env python3
import argparse, logging
from pathlib import Path
from typing import List

import numpy as np
import pandas as pd

logger = logging.getLogger(__name__)

METRICS = ("expanded", "generated", "time_sec", "peak_open")

def load_runs(paths: List[Path]) -> pd.DataFrame:
    """Concatenate runner CSVs; numeric columns are coerced, unreadable files skipped."""
    frames = []
    for p in paths:
        try:
            df = pd.read_csv(p)
        except (OSError, pd.errors.ParserError, pd.errors.EmptyDataError) as e:
            logger.warning("skip %s: %s", p, e)
            continue
        df["__src__"] = Path(p).name
        frames.append(df)
    if not frames:
        return pd.DataFrame()
    df = pd.concat(frames, ignore_index=True, sort=False)
    for c in ("depth", "seed", "g", "solvable") + METRICS:
        if c in df.columns:
            df[c] = pd.to_numeric(df[c], errors="coerce")
    if "heuristic" in df.columns:
        df["heuristic"] = df["heuristic"].fillna("")
    return df

def summarize(df: pd.DataFrame, only_ok: bool = True) -> pd.DataFrame:
    """Mean of each metric per (domain, algorithm, heuristic, depth)."""
    if only_ok and "termination" in df.columns:
        df = df[df["termination"].fillna("ok") == "ok"]
    keys = [c for c in ("domain", "algorithm", "heuristic", "depth") if c in df.columns]
    present = [m for m in METRICS if m in df.columns]
    out = (df.groupby(keys, as_index=False)
             .agg(n=("seed", "count"), **{m: (m, "mean") for m in present}))
    return out.sort_values(keys).reset_index(drop=True)

def expansion_ratio(summary: pd.DataFrame, heuristic: str) -> pd.DataFrame:
    """A* (given heuristic) / BFS expansions per domain and depth; < 1 means the heuristic pays off."""
    a = summary[(summary["algorithm"] == "A*") & (summary["heuristic"] == heuristic)]
    b = summary[summary["algorithm"] == "BFS"]
    keys = [c for c in ("domain", "depth") if c in summary.columns]
    m = a.merge(b, on=keys, suffixes=("_a", "_bfs"))
    m["ratio"] = np.where(m["expanded_bfs"] > 0, m["expanded_a"] / m["expanded_bfs"].replace(0, np.nan), np.inf)
    return m[keys + ["expanded_a", "expanded_bfs", "ratio"]]

def main():
    ap = argparse.ArgumentParser(description="Summarize runner CSVs (A* vs BFS).")
    ap.add_argument("csv", nargs="+", type=Path)
    ap.add_argument("--heuristic", default="manhattan", help="Heuristic to compare against BFS")
    ap.add_argument("--out", type=Path, default=None, help="Optional CSV for the summary table")
    args = ap.parse_args()
    logging.basicConfig(level=logging.INFO, format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")

    df = load_runs(args.csv)
    if df.empty:
        print("No rows loaded.")
        return

    summary = summarize(df)
    print("=" * 80)
    print("Mean metrics (termination == ok)")
    print("=" * 80)
    print(summary.to_string(index=False))

    ratios = expansion_ratio(summary, args.heuristic)
    if not ratios.empty:
        print("\n" + "=" * 80)
        print(f"Expanded ratio: A* ({args.heuristic}) / BFS")
        print("=" * 80)
        print(ratios.to_string(index=False, float_format=lambda x: f"{x:.3f}"))

    if args.out is not None:
        args.out.parent.mkdir(parents=True, exist_ok=True)
        summary.to_csv(args.out, index=False)
        print(f"\nWrote {args.out}")

if __name__ == "__main__":
    main()
