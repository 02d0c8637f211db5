#!/usr/bin/env python3
"""
Evaluate the DPLL solver on benchmark folders and generated instances.

Instances come from:
 - a folder of DIMACS `.cnf` files; files below a `sat/` or `unsat/` directory (or
   named like the SATLIB `uf*` / `uuf*` sets) carry that expected status
 - random 3-CNF instances (`--random`), labelled by brute force when they are small
   enough (`--label-limit`)
 - pigeonhole instances PHP(n+1, n) (`--pigeonhole`), which are always UNSAT

Every instance is solved with a per-instance timeout and recorded with the solver
counters.

Outputs:
  - CSV with one row per instance (outdir/metrics.csv)
  - Plots (PNG): time_by_status.png, status_counts.png, time_vs_decisions.png

Usage examples:
  dpll-evaluate --folder benchmarks/ --timeout 10 --outdir outputs/run1
  dpll-evaluate --random 50 --num-vars 20 --ratio 4.26 --pigeonhole 3 4 5 --seed 1
"""
from __future__ import annotations

import argparse
import csv
import itertools
import logging
import os
import random
import signal
import time
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional

import matplotlib.pyplot as plt

from dpll import logger
from dpll.clause import Clause
from dpll.dimacs import read_dimacs
from dpll.generator import pigeonhole, random_kcnf
from dpll.solver import SAT, UNSAT, Solver

log = logging.getLogger(__name__)

STATUSES = [SAT, UNSAT, "TIMEOUT", "ERROR"]


@dataclass
class InstanceResult:
    name: str
    source: str
    num_vars: int
    n_clauses: int
    status: str
    wall_time_s: float
    decisions: int = 0
    unit_propagations: int = 0
    backtracks: int = 0
    max_depth: int = 0
    error: str = ""
    expected_status: Optional[str] = None  # 'SAT', 'UNSAT', or None when unknown
    is_correct: Optional[bool] = None     # True/False if expected known, else None


@dataclass
class Instance:
    name: str
    source: str
    load: Callable[[], List[List[int]]]
    expected_status: Optional[str] = None


# ---------------------------
# Instance sources
# ---------------------------
def expected_from_path(path: Path) -> Optional[str]:
    """Expected status from the folder layout or the SATLIB file naming."""
    for part in reversed(path.parts[:-1]):
        if part.lower() == "sat":
            return SAT
        if part.lower() == "unsat":
            return UNSAT
    if path.name.startswith("uuf"):
        return UNSAT
    if path.name.startswith("uf"):
        return SAT
    return None


def folder_instances(folder: str, limit: Optional[int] = None) -> List[Instance]:
    paths = sorted(Path(folder).rglob("*.cnf"))
    if limit is not None:
        paths = paths[:limit]
    instances = []
    for path in paths:
        instances.append(Instance(
            name=str(path.relative_to(folder)),
            source="file",
            load=lambda p=path: read_dimacs(str(p)).clauses,
            expected_status=expected_from_path(path),
        ))
    return instances


def brute_force_status(clauses: List[List[int]]) -> str:
    """Try every assignment. Only meant for labelling small instances."""
    variables = sorted(set(abs(l) for c in clauses for l in c))
    for values in itertools.product((False, True), repeat=len(variables)):
        assignment = dict(zip(variables, values))
        if all(any(assignment[abs(l)] == (l > 0) for l in c) for c in clauses):
            return SAT
    return UNSAT


def random_instances(
    count: int, num_vars: int, ratio: float, rng: random.Random, label_limit: int = 14
) -> List[Instance]:
    num_clauses = max(1, int(round(num_vars * ratio)))
    instances = []
    for i in range(count):
        clauses = random_kcnf(num_vars, num_clauses, 3, rng)
        expected = brute_force_status(clauses) if num_vars <= label_limit else None
        instances.append(Instance(
            name=f"random_v{num_vars}_c{num_clauses}_{i + 1}",
            source="random",
            load=lambda c=clauses: c,
            expected_status=expected,
        ))
    return instances


def pigeonhole_instances(sizes: Iterable[int]) -> List[Instance]:
    return [
        Instance(
            name=f"php_{n + 1}_{n}",
            source="pigeonhole",
            load=lambda n=n: pigeonhole(n + 1, n),
            expected_status=UNSAT,
        )
        for n in sizes
    ]


# ---------------------------
# Timeout helpers
# ---------------------------
class Timeout(Exception):
    pass


def _timeout_handler(signum, frame):  # noqa: ARG001
    raise Timeout()


# ---------------------------
# Run / evaluation logic
# ---------------------------
def run_one_instance(instance: Instance, timeout_s: Optional[float]) -> InstanceResult:
    try:
        clauses = instance.load()
    except Exception as e:  # parse error
        return InstanceResult(
            name=instance.name,
            source=instance.source,
            num_vars=0,
            n_clauses=0,
            status="ERROR",
            wall_time_s=0.0,
            error=f"load: {type(e).__name__}: {e}",
            expected_status=instance.expected_status,
            is_correct=None if instance.expected_status is None else False,
        )

    num_vars = len(set(abs(l) for c in clauses for l in c))
    solver = Solver(Clause(list(c)) for c in clauses)

    # Solve with timeout
    started = time.perf_counter()
    old_handler = None
    error_msg = ""
    try:
        if timeout_s and timeout_s > 0 and hasattr(signal, "SIGALRM"):
            old_handler = signal.signal(signal.SIGALRM, _timeout_handler)
            signal.alarm(max(1, int(timeout_s)))
        result_status = solver.solve()
        wall_time = time.perf_counter() - started
    except Timeout:
        wall_time = time.perf_counter() - started
        result_status = "TIMEOUT"
    except Exception as e:
        wall_time = time.perf_counter() - started
        result_status = "ERROR"
        error_msg = f"solve: {type(e).__name__}: {e}"
        log.exception("Solver failed on %s", instance.name)
    finally:
        if hasattr(signal, "SIGALRM") and old_handler is not None:
            signal.alarm(0)
            signal.signal(signal.SIGALRM, old_handler)

    is_correct: Optional[bool] = None
    if instance.expected_status in (SAT, UNSAT):
        is_correct = (result_status == instance.expected_status)

    return InstanceResult(
        name=instance.name,
        source=instance.source,
        num_vars=num_vars,
        n_clauses=len(clauses),
        status=result_status,
        wall_time_s=wall_time,
        decisions=solver.stats["decisions"],
        unit_propagations=solver.stats["unit_propagations"],
        backtracks=solver.stats["backtracks"],
        max_depth=solver.stats["max_depth"],
        error=error_msg,
        expected_status=instance.expected_status,
        is_correct=is_correct,
    )


def save_csv(rows: List[InstanceResult], path: str) -> None:
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    fieldnames = list(InstanceResult.__dataclass_fields__.keys())
    with open(path, "w", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=fieldnames)
        writer.writeheader()
        for r in rows:
            writer.writerow(asdict(r))


def make_plots(rows: List[InstanceResult], outdir: str) -> List[str]:
    os.makedirs(outdir, exist_ok=True)
    paths: List[str] = []

    # Time distributions by result (boxplot)
    by_status: Dict[str, List[float]] = {}
    for r in rows:
        if r.status in (SAT, UNSAT):
            by_status.setdefault(r.status, []).append(r.wall_time_s)
    if by_status:
        labels = sorted(by_status.keys())
        plt.figure(figsize=(6, 4))
        plt.boxplot([by_status[s] for s in labels], showfliers=False)
        plt.xticks(range(1, len(labels) + 1), labels)
        plt.title("Solve time by result (successful runs)")
        plt.ylabel("Seconds")
        p = os.path.join(outdir, "time_by_status.png")
        plt.tight_layout()
        plt.savefig(p)
        plt.close()
        paths.append(p)

    # Status counts by source (bar chart)
    counts: Dict[str, Dict[str, int]] = {}
    for r in rows:
        d = counts.setdefault(r.source, {s: 0 for s in STATUSES})
        d[r.status] = d.get(r.status, 0) + 1
    if counts:
        sources = sorted(counts.keys())
        width = 0.2
        x = range(len(sources))
        plt.figure(figsize=(7, 4))
        for i, s in enumerate(STATUSES):
            plt.bar([xi + i * width for xi in x], [counts[src].get(s, 0) for src in sources], width=width, label=s)
        plt.xticks([xi + 1.5 * width for xi in x], sources)
        plt.xlabel("Source")
        plt.ylabel("Count")
        plt.title("Status counts by source")
        plt.legend()
        p = os.path.join(outdir, "status_counts.png")
        plt.tight_layout()
        plt.savefig(p)
        plt.close()
        paths.append(p)

    # Scatter: time vs decisions (colored by variable count)
    done = [r for r in rows if r.status in (SAT, UNSAT)]
    if done:
        plt.figure(figsize=(6, 4))
        sc = plt.scatter([r.decisions for r in done], [r.wall_time_s for r in done],
                         c=[r.num_vars for r in done], cmap="viridis", alpha=0.7)
        plt.xlabel("Branching decisions")
        plt.ylabel("Seconds")
        plt.title("Time vs decisions")
        cbar = plt.colorbar(sc)
        cbar.set_label("Variables")
        p = os.path.join(outdir, "time_vs_decisions.png")
        plt.tight_layout()
        plt.savefig(p)
        plt.close()
        paths.append(p)

    return paths


def summarize(results: List[InstanceResult]) -> List[str]:
    """Accuracy, confusion matrix and mean times as printable lines."""
    lines: List[str] = []
    labeled = [r for r in results if r.expected_status in (SAT, UNSAT)]
    if labeled:
        correct = sum(1 for r in labeled if r.status == r.expected_status)
        lines.append(f"Labeled accuracy: {correct}/{len(labeled)} = {correct / len(labeled):.3f}")

        # Confusion matrix (expected vs predicted)
        conf: Dict[str, Dict[str, int]] = {}
        for r in labeled:
            conf.setdefault(r.expected_status, {})
            conf[r.expected_status][r.status] = conf[r.expected_status].get(r.status, 0) + 1
        for exp in (SAT, UNSAT):
            row = conf.get(exp, {})
            lines.append(
                f"Expected {exp}: predicted "
                + ", ".join(f"{s}={row.get(s, 0)}" for s in STATUSES)
            )

    # Performance by predicted status
    for s in (SAT, UNSAT):
        times = [r.wall_time_s for r in results if r.status == s]
        if times:
            lines.append(f"Mean time (predicted {s}): {sum(times) / len(times):.3f}s over {len(times)} instances")
    return lines


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    ap = argparse.ArgumentParser(prog="dpll-evaluate", description="Evaluate the DPLL solver on CNF benchmarks.")
    ap.add_argument("--folder", type=str, default=None, help="Folder searched recursively for .cnf files")
    ap.add_argument("--limit", type=int, default=None, help="At most this many files from --folder")
    ap.add_argument("--random", type=int, default=0, help="Number of random 3-CNF instances to generate")
    ap.add_argument("--num-vars", type=int, default=20, help="Variables per random instance")
    ap.add_argument("--ratio", type=float, default=4.26, help="Clause/variable ratio of random instances")
    ap.add_argument("--label-limit", type=int, default=14, help="Label random instances by brute force up to this many variables")
    ap.add_argument("--pigeonhole", nargs="*", type=int, default=[], help="Hole counts n for PHP(n+1, n) instances")
    ap.add_argument("--seed", type=int, default=None, help="Random seed")
    ap.add_argument("--timeout", type=float, default=5.0, help="Per-instance timeout in seconds (platforms with SIGALRM only)")
    ap.add_argument("--outdir", type=str, default="outputs", help="Output dir for CSV and plots")
    ap.add_argument("--no-plots", action="store_true", help="Skip plotting")
    ap.add_argument("--log-level", default=None, help="Logging level (default: $LOGLEVEL or WARNING)")
    args = ap.parse_args(argv)
    if args.random and args.num_vars < 3:
        ap.error(f"--num-vars must be at least 3 for random 3-CNF instances, got {args.num_vars}")
    return args


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)
    logger.init_logger(args.log_level)
    rng = random.Random(args.seed)

    instances: List[Instance] = []
    if args.folder:
        instances.extend(folder_instances(args.folder, args.limit))
    if args.random:
        instances.extend(random_instances(args.random, args.num_vars, args.ratio, rng, args.label_limit))
    instances.extend(pigeonhole_instances(args.pigeonhole))
    if not instances:
        print("No instances selected; use --folder, --random or --pigeonhole.")
        return

    results: List[InstanceResult] = []
    for i, instance in enumerate(instances):
        res = run_one_instance(instance, args.timeout)
        results.append(res)
        print(f"[{i + 1}/{len(instances)}] {res.name} -> {res.status} in {res.wall_time_s:.3f}s, clauses={res.n_clauses}")

    # Save CSV
    csv_path = os.path.join(args.outdir, "metrics.csv")
    save_csv(results, csv_path)
    print(f"Saved metrics CSV -> {csv_path}")

    # Plots
    if not args.no_plots:
        for p in make_plots(results, args.outdir):
            print(f"Saved plot -> {p}")

    for line in summarize(results):
        print(line)


if __name__ == "__main__":
    main()
