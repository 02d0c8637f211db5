"""
DPLL search over a list of Clause objects.

The search alternates a terminal check, unit propagation to a fixpoint and
branching on the most frequent unresolved literal. Before the first polarity of
a branch literal is tried, the whole clause list is deep-copied onto the
branching stack; when that polarity fails the copy is restored and the negated
literal is tried instead. No undo trail is kept: restoring a snapshot is the only
way back.

The search runs iteratively. Each entry of `decisions` stands for one frame of
the equivalent recursive procedure and owns at most one snapshot, so the
decision stack and the branching stack always move together.
"""

import logging
from collections import Counter
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from dpll.clause import Clause, Literal

logger = logging.getLogger(__name__)

SAT = "SAT"
UNSAT = "UNSAT"


class SolverInvariantError(RuntimeError):
  """Raised when the search control flow reaches a state it should never reach."""


class Solver:

  def __init__(self, clauses: Iterable[Clause]):
    self.clauses: List[Clause] = list(clauses)
    self.branching_stack: List[List[Clause]] = []
    self.stats: Counter = Counter()

  def copy_clauses(self) -> List[Clause]:
    return [clause.clone() for clause in self.clauses]

  def assign(self, literal: Literal, truth: bool) -> None:
    """Assign `literal` in every clause, decided ones included (a no-op there)."""
    for clause in self.clauses:
      clause.assign_literal(literal, truth)

  def unit_propagation(self) -> bool:
    """Run one propagation pass; True if at least one unit literal was assigned."""
    did_propagate = False
    for clause in self.clauses:
      unit = clause.unit_literal
      if unit is None:
        continue
      did_propagate = True
      self.stats["unit_propagations"] += 1
      self.assign(unit, True)
    return did_propagate

  def pick_literal(self) -> Literal:
    """Most frequent unresolved literal among the undecided clauses.

    Polarities are counted separately. Ties go to the literal seen first while
    scanning clauses in order, so the choice is reproducible.
    """
    counts: Counter = Counter()
    for clause in self.clauses:
      if clause.is_decided:
        continue
      for literal in clause.unassigned_literals:
        counts[literal] += 1
    if not counts:
      raise SolverInvariantError("no unresolved literal left to branch on")
    # Counter keeps insertion order and max() returns the first maximum
    return max(counts, key=counts.__getitem__)

  def branch(self, literal: Literal, first_branch: bool) -> None:
    # only the first polarity saves a snapshot to come back to
    if first_branch:
      self.branching_stack.append(self.copy_clauses())
    self.assign(literal, True)

  def back_track(self) -> None:
    """Restore the clauses saved at the most recent branching point."""
    if not self.branching_stack:
      raise SolverInvariantError("backtrack requested with an empty branching stack")
    self.clauses = self.branching_stack.pop()
    self.stats["backtracks"] += 1

  @property
  def is_satisfiable(self) -> bool:
    return all(clause.is_satisfied for clause in self.clauses)

  @property
  def is_unsatisfiable(self) -> bool:
    return any(clause.is_unsatisfiable for clause in self.clauses)

  def check(self) -> Optional[str]:
    if self.is_satisfiable:
      return SAT
    if self.is_unsatisfiable:
      return UNSAT
    return None

  def search(self) -> str:
    # (literal, negation already tried) per active branching frame
    decisions: List[Tuple[Literal, bool]] = []

    while True:
      status = self.check()

      if status == SAT:
        # the winning assignment stays in place, nothing to unwind
        logger.debug("SAT at depth %d", len(decisions))
        return SAT

      if status == UNSAT:
        # frames that already tried both polarities fail to their caller
        while decisions and decisions[-1][1]:
          decisions.pop()
        if not decisions:
          return UNSAT
        literal, _ = decisions[-1]
        decisions[-1] = (literal, True)
        self.back_track()
        logger.debug("Backtrack at depth %d, trying %d", len(decisions), -literal)
        self.branch(-literal, False)
        continue

      if self.unit_propagation():
        continue

      literal = self.pick_literal()
      self.stats["decisions"] += 1
      decisions.append((literal, False))
      self.stats["max_depth"] = max(self.stats["max_depth"], len(decisions))
      logger.debug("Branch on %d at depth %d", literal, len(decisions))
      self.branch(literal, True)

  def solve(self) -> str:
    """Return SAT or UNSAT for the clauses this solver was built with."""
    result = self.search()
    logger.info("Finished with result %s (%s)", result, dict(self.stats))
    return result


def solve(clauses: Iterable[Union[Clause, Sequence[Literal]]]) -> str:
  """Decide a formula given as Clause objects or as plain literal sequences."""
  prepared = [c if isinstance(c, Clause) else Clause(list(c)) for c in clauses]
  return Solver(prepared).solve()
