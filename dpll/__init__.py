"""DPLL satisfiability solver for CNF formulas."""

from dpll.clause import Clause
from dpll.dimacs import DimacsError, DimacsFormula, parse_dimacs, read_dimacs
from dpll.solver import SAT, UNSAT, Solver, SolverInvariantError, solve

__version__ = "0.1.0"

__all__ = [
    "Clause",
    "DimacsError",
    "DimacsFormula",
    "SAT",
    "Solver",
    "SolverInvariantError",
    "UNSAT",
    "parse_dimacs",
    "read_dimacs",
    "solve",
]
