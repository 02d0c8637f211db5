"""
Compare solve times across evaluation runs.

Each run directory holds the metrics.csv written by dpll-evaluate; one box per run
(and per expected status with --by-status) is drawn from its wall_time_s column.

Usage:
  dpll-plot outputs/run1 outputs/run2 --out plots/runs.png --by-status
"""
import argparse
import os
import pathlib
from typing import Dict, List, Optional

import matplotlib.pyplot as plt
import pandas as pd


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    ap = argparse.ArgumentParser(prog="dpll-plot", description="Plot solve times of several evaluation runs.")
    ap.add_argument("runs", nargs="+", help="Run directories (or metrics.csv files)")
    ap.add_argument("--out", default=str(pathlib.Path.cwd() / "plots" / "runs.png"), help="Output PNG")
    ap.add_argument("--by-status", action="store_true", help="Separate boxes for expected SAT and UNSAT")
    ap.add_argument("--solved-only", action="store_true", help="Drop TIMEOUT and ERROR rows")
    return ap.parse_args(argv)


def get_path(run: str) -> pathlib.Path:
    path = pathlib.Path(run)
    return path if path.suffix == ".csv" else path / "metrics.csv"


def get_data(run: str, data: Dict[str, pd.Series], by_status: bool = False, solved_only: bool = False) -> Dict[str, pd.Series]:
    raw = pd.read_csv(get_path(run))
    if solved_only:
        raw = raw[raw["status"].isin(["SAT", "UNSAT"])]
    label = pathlib.Path(run).name if pathlib.Path(run).suffix != ".csv" else pathlib.Path(run).parent.name
    if by_status:
        for status, group in raw.groupby(raw["expected_status"].fillna("unknown")):
            data[f"{label} {status}"] = group["wall_time_s"]
    else:
        data[label] = raw["wall_time_s"]
    return data


def plot(data: Dict[str, pd.Series], file: pathlib.Path) -> Optional[pathlib.Path]:
    if len(data.keys()) == 0:
        return None
    raw = list(sorted(data.items(), key=lambda x: x[0]))
    labels = [x[0] for x in raw]

    plt.figure(figsize=(max(6.4, 1.6 * len(labels)), 4.8))
    plt.boxplot([x[1] for x in raw])
    plt.xticks(range(1, len(labels) + 1), labels)
    plt.ylabel("Seconds")
    plt.tight_layout()
    os.makedirs(file.parent, exist_ok=True)
    plt.savefig(file)
    plt.close()
    return file


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)
    data: Dict[str, pd.Series] = {}
    for run in args.runs:
        data = get_data(run, data, args.by_status, args.solved_only)
    out = plot(data, pathlib.Path(args.out))
    if out is None:
        print("Nothing to plot.")
    else:
        print(f"Saved plot -> {out}")


if __name__ == "__main__":
    main()
