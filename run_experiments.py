#!/usr/bin/env python3
import subprocess, sys
from pathlib import Path

def run(desc, cmd):
    print(f"\n=== {desc} ===\n{cmd}")
    r = subprocess.run(cmd, shell=True)
    if r.returncode != 0:
        sys.exit(r.returncode)

def main():
    Path("results").mkdir(exist_ok=True)
    run("8-puzzle Manhattan", "python -m pathfinder.experiments.runner --domain tiles --depths 4 8 12 16 --per_depth 10 --heuristic manhattan --algo both --out results/p8_manhattan.csv")
    run("8-puzzle LinearConflict", "python -m pathfinder.experiments.runner --domain tiles --depths 4 8 12 16 --per_depth 10 --heuristic linear_conflict --algo a --out results/p8_linear_conflict.csv")
    run("Grid taxicab", "python -m pathfinder.experiments.runner --domain grid --width 40 --height 40 --density 0.25 --per_depth 30 --heuristic manhattan --algo both --out results/grid_manhattan.csv")
    run("Summary", "python -m pathfinder.experiments.analyze results/p8_manhattan.csv results/p8_linear_conflict.csv results/grid_manhattan.csv --out results/summary.csv")
    run("Plots", "python -m pathfinder.experiments.plot results/p8_manhattan.csv results/p8_linear_conflict.csv --name p8 --logy")

if __name__ == "__main__":
    main()
