"""
Clause state for the DPLL solver.

A clause is a disjunction of literals, e.g. (1 v -2 v 3) written as [1, -2, 3].
While undecided it keeps one element per original literal; an element is either
the literal itself (still unassigned) or the boolean it was resolved to. Once the
clause is known to be true or false it collapses into that single boolean and
ignores every further assignment.
"""

from typing import List, Optional, Sequence, Union

Literal = int
Element = Union[int, bool]


def _is_unresolved(element: Element) -> bool:
  # bool is a subclass of int, so the bool check must come first
  return not isinstance(element, bool)


class Clause:

  __slots__ = ("_decided", "_elements")

  def __init__(self, initial: Union[bool, Sequence[Element]]):
    self._decided: Optional[bool] = None
    self._elements: List[Element] = []
    if isinstance(initial, bool):
      self._decided = initial
    elif len(initial) == 0:
      # nothing in an empty clause can ever become true
      self._decided = False
    else:
      self._elements = list(initial)

  @property
  def value(self) -> Union[bool, List[Element]]:
    """The decided boolean, or a copy of the element list while undecided."""
    if self._decided is not None:
      return self._decided
    return list(self._elements)

  @property
  def is_decided(self) -> bool:
    return self._decided is not None

  @property
  def is_satisfied(self) -> bool:
    return self._decided is True

  @property
  def is_unsatisfiable(self) -> bool:
    return self._decided is False

  @property
  def unassigned_literals(self) -> List[Literal]:
    if self._decided is not None:
      return []
    return [e for e in self._elements if _is_unresolved(e)]

  def contains_literal(self, literal: Literal) -> bool:
    return any(_is_unresolved(e) and e == literal for e in self._elements)

  def clone(self) -> "Clause":
    """Return an independent copy; elements are immutable so a list copy suffices."""
    if self._decided is not None:
      return Clause(self._decided)
    return Clause(list(self._elements))

  def assign_literal(self, literal: Literal, truth: bool) -> None:
    """Substitute `truth` for `literal` and `not truth` for its negation.

    Does nothing once the clause is decided. The clause becomes true as soon as
    one element is satisfied, and false when no unresolved element is left.
    """
    if self._decided is not None:
      return

    unresolved_left = False
    for index, element in enumerate(self._elements):
      if not _is_unresolved(element):
        continue
      if (element == literal and truth) or (element == -literal and not truth):
        self._decided = True
        self._elements = []
        return
      if element == literal:
        self._elements[index] = truth
      elif element == -literal:
        self._elements[index] = not truth
      else:
        unresolved_left = True

    if not unresolved_left:
      self._decided = False
      self._elements = []

  @property
  def unit_literal(self) -> Optional[Literal]:
    """The only unresolved literal of an undecided clause, else None."""
    if self._decided is not None:
      return None
    unit: Optional[Literal] = None
    for element in self._elements:
      if not _is_unresolved(element):
        continue
      if unit is not None:
        return None
      unit = element
    return unit

  def __eq__(self, other: object) -> bool:
    if not isinstance(other, Clause):
      return NotImplemented
    if self._decided is not None or other._decided is not None:
      return self._decided is other._decided
    # compare element types too so that True never equals the literal 1
    return [(type(e), e) for e in self._elements] == [(type(e), e) for e in other._elements]

  __hash__ = None  # mutable

  def __repr__(self) -> str:
    return f"Clause({self.value!r})"
