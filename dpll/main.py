#!/usr/bin/env python3
"""
Solve a DIMACS CNF file and report the result with timings.

Usage:
  dpll path/to/formula.cnf [--stats] [--log-level DEBUG]

Exits 0 once a result was printed and 1 when the input is not valid DIMACS.
"""
import argparse
import sys
import time
from typing import List, Optional

from dpll import logger
from dpll.dimacs import DimacsError, read_dimacs
from dpll.solver import Solver


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    ap = argparse.ArgumentParser(prog="dpll", description="Decide satisfiability of a DIMACS CNF formula with DPLL.")
    ap.add_argument("file", help="DIMACS CNF file")
    ap.add_argument("--stats", action="store_true", help="Print solver counters (decisions, propagations, backtracks)")
    ap.add_argument("--log-level", default=None, help="Logging level (default: $LOGLEVEL or WARNING)")
    return ap.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    logger.init_logger(args.log_level)

    start_time = time.perf_counter()
    try:
        formula = read_dimacs(args.file)
    except (DimacsError, OSError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    parsed_time = time.perf_counter()

    solver = Solver(formula.build_clauses())
    result = solver.solve()
    solved_time = time.perf_counter()

    print("Finished with result:", result)
    print(f"Parsed in: {parsed_time - start_time:.6f} seconds")
    print(f"Solved in: {solved_time - parsed_time:.6f} seconds")
    print(f"Total time: {solved_time - start_time:.6f} seconds")
    if args.stats:
        for name in ("decisions", "unit_propagations", "backtracks", "max_depth"):
            print(f"{name}: {solver.stats.get(name, 0)}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
