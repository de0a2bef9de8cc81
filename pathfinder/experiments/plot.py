#!/usr/bin/env python3
import argparse, os
from pathlib import Path

import numpy as np
import pandas as pd
import matplotlib
# Non-interactive backend unless the caller picked one
if "MPLBACKEND" not in os.environ:
    matplotlib.use("Agg")
import matplotlib.pyplot as plt

from pathfinder.experiments.analyze import load_runs, summarize

def sem(x):
    x = np.asarray(x, float)
    n = np.sum(~np.isnan(x))
    return 0.0 if n <= 1 else np.nanstd(x, ddof=1) / np.sqrt(n)

def label_of(algorithm: str, heuristic: str) -> str:
    return algorithm if not heuristic else f"{algorithm} ({heuristic})"

def plot_metric(df: pd.DataFrame, metric: str, out_path: Path, logy: bool = False, title: str = ""):
    """One line per (algorithm, heuristic): mean metric vs depth with SEM error bars."""
    ok = df[df["termination"].fillna("ok") == "ok"] if "termination" in df.columns else df
    g = (ok.groupby(["algorithm", "heuristic", "depth"], as_index=False)
           .agg(mu=(metric, "mean"), se=(metric, sem)))

    plt.figure(figsize=(6, 4))
    for (algo, heur), sub in g.groupby(["algorithm", "heuristic"]):
        sub = sub.sort_values("depth")
        plt.errorbar(sub["depth"], sub["mu"], yerr=sub["se"], marker="o", capsize=3,
                     label=label_of(algo, heur))
    if logy:
        plt.yscale("log")
    plt.xlabel("Depth")
    plt.ylabel(metric)
    plt.title(title or f"Mean {metric} by depth")
    plt.grid(True, alpha=0.3)
    plt.legend()
    out_path.parent.mkdir(parents=True, exist_ok=True)
    plt.savefig(out_path, dpi=200, bbox_inches="tight")
    plt.close()
    print(f"Saved: {out_path}")

def main():
    ap = argparse.ArgumentParser(description="Plot runner CSV metrics vs depth.")
    ap.add_argument("csv", nargs="+", type=Path)
    ap.add_argument("--metrics", nargs="+", default=["expanded", "time_sec"])
    ap.add_argument("--logy", action="store_true")
    ap.add_argument("--save", default="results/plots")
    ap.add_argument("--name", default=None, help="File name prefix (defaults to first CSV stem)")
    args = ap.parse_args()

    df = load_runs(args.csv)
    if df.empty:
        print("No rows loaded.")
        return

    name = args.name or args.csv[0].stem
    for m in args.metrics:
        if m not in df.columns:
            print(f"skip {m}: not a column")
            continue
        plot_metric(df, m, Path(args.save) / f"{name}_{m}.png", logy=args.logy)

    print(summarize(df).to_string(index=False))

if __name__ == "__main__":
    main()
