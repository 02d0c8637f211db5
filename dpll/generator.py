"""
Formula generators for testing and benchmarking the solver.

Clauses are lists of ints, no trailing 0s, ready for `solve` or `to_dimacs`.
"""

import random
from itertools import combinations
from typing import List, Optional


def random_kcnf(num_vars: int, num_clauses: int, k: int = 3, rng: Optional[random.Random] = None) -> List[List[int]]:
  """Uniform random k-CNF: each clause has k distinct variables with random signs.

  Around 4.26 clauses per variable random 3-CNF is hardest, with roughly half
  of the instances satisfiable.
  """
  if k > num_vars:
    raise ValueError(f"k={k} distinct variables requested but only {num_vars} exist")
  if rng is None:
    rng = random.Random()
  variables = range(1, num_vars + 1)
  clauses: List[List[int]] = []
  for _ in range(num_clauses):
    chosen = rng.sample(variables, k)
    clauses.append([v if rng.random() < 0.5 else -v for v in chosen])
  return clauses


def pigeonhole(pigeons: int, holes: int) -> List[List[int]]:
  """Pigeonhole principle PHP(pigeons, holes); UNSAT whenever pigeons > holes.

  Variable p*holes + h + 1 means pigeon p sits in hole h.
  """
  def var(p: int, h: int) -> int:
    return p * holes + h + 1

  clauses: List[List[int]] = []
  # every pigeon gets a hole
  for p in range(pigeons):
    clauses.append([var(p, h) for h in range(holes)])
  # no hole holds two pigeons
  for h in range(holes):
    for p1, p2 in combinations(range(pigeons), 2):
      clauses.append([-var(p1, h), -var(p2, h)])
  return clauses
