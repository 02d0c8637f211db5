"""
DIMACS CNF reading and writing.

Format (see https://people.sc.fsu.edu/~jburkardt/data/cnf/cnf.html):

  c a comment
  p cnf <variables> <clauses>
  1 -2 3 0
  -1 2 0

Comment and blank lines may appear anywhere. Reading stops once the declared
number of clauses has been read, so trailers such as the `%` line of the SATLIB
benchmarks are ignored.
"""

import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Set

from dpll.clause import Clause

logger = logging.getLogger(__name__)


class DimacsError(ValueError):
  """The input is not a well-formed DIMACS CNF formula."""


@dataclass
class DimacsFormula:
  num_variables: int
  num_clauses: int
  clauses: List[List[int]] = field(default_factory=list)
  variables: Set[int] = field(default_factory=set)

  def build_clauses(self) -> List[Clause]:
    return [Clause(list(literals)) for literals in self.clauses]


def _is_redundant(line: str) -> bool:
  return line == "" or line.startswith("c")


def _parse_header(line: Optional[str]):
  if line is None:
    raise DimacsError("Invalid input. Make sure it is in DIMACS format")
  parts = line.split()
  if len(parts) < 2 or parts[0] != "p" or parts[1] != "cnf":
    raise DimacsError(f'Invalid input. Expected "p cnf". Got: {line}')
  # tokens after the clause count are ignored
  if len(parts) < 4:
    raise DimacsError("Invalid input. Make sure it is in DIMACS format")
  try:
    return int(parts[2]), int(parts[3])
  except ValueError:
    raise DimacsError("Invalid input. Make sure it is in DIMACS format") from None


def _parse_clause(line: str) -> List[int]:
  literals: List[int] = []
  for token in line.split():
    try:
      number = int(token)
    except ValueError:
      raise DimacsError(f"Invalid input. Expected a number. Got: {token}") from None
    # 0 terminates a clause and is never a literal
    if number != 0:
      literals.append(number)
  return literals


def parse_dimacs(text: str) -> DimacsFormula:
  """Parse DIMACS text, checking the header counts against what was read."""
  lines = [line.strip() for line in text.split("\n")]
  index = 0

  def next_line() -> Optional[str]:
    nonlocal index
    while index < len(lines) and _is_redundant(lines[index]):
      index += 1
    if index >= len(lines):
      return None
    line = lines[index]
    index += 1
    return line

  num_variables, num_clauses = _parse_header(next_line())
  logger.info("[Parser] Num variables: %d", num_variables)
  logger.info("[Parser] Num clauses: %d", num_clauses)

  formula = DimacsFormula(num_variables, num_clauses)
  while len(formula.clauses) < num_clauses:
    line = next_line()
    if line is None:
      break
    literals = _parse_clause(line)
    formula.variables.update(abs(l) for l in literals)
    formula.clauses.append(literals)

  if len(formula.clauses) != num_clauses:
    raise DimacsError(
      f"Invalid input. Expected {num_clauses} clauses, got {len(formula.clauses)} clauses."
    )
  if len(formula.variables) != num_variables:
    raise DimacsError(
      f"Invalid input. Expected {num_variables} variables, got {len(formula.variables)} variables."
    )
  return formula


def read_dimacs(path: str) -> DimacsFormula:
  with open(path, "r") as f:
    try:
      text = f.read()
    except UnicodeDecodeError as e:
      raise DimacsError(f"Invalid input. Not a text file: {e.reason} at byte {e.start}") from None
  return parse_dimacs(text)


def to_dimacs(clauses: Iterable[Iterable[int]], comments: Iterable[str] = ()) -> str:
  """Render clauses as DIMACS text that `parse_dimacs` accepts back.

  The header declares the number of distinct variables, which is what the
  parser checks.
  """
  clause_list = [list(c) for c in clauses]
  variables = set(abs(l) for c in clause_list for l in c)
  out = [f"c {comment}" for comment in comments]
  out.append(f"p cnf {len(variables)} {len(clause_list)}")
  for c in clause_list:
    out.append(" ".join(str(l) for l in c + [0]))
  return "\n".join(out) + "\n"


def write_dimacs(clauses: Iterable[Iterable[int]], path: str, comments: Iterable[str] = ()) -> None:
  with open(path, "w") as f:
    f.write(to_dimacs(clauses, comments))
