from dpll.clause import Clause


def test_creates_clause_from_booleans():
    assert Clause(True).value is True
    assert Clause(False).value is False


def test_creates_clause_from_literals():
    assert Clause([1, 2, 3]).value == [1, 2, 3]
    assert Clause([1, False, 3]).value == [1, False, 3]


def test_empty_clause_is_false():
    clause = Clause([])
    assert clause.value is False
    assert clause.is_unsatisfiable
    assert clause.unit_literal is None


def test_assigning_literal_true_satisfies_clause():
    clause = Clause([1, 2, 3])
    clause.assign_literal(1, True)
    assert clause.value is True
    assert clause.is_satisfied


def test_assigning_negation_false_satisfies_clause():
    clause = Clause([1, 2, 3])
    clause.assign_literal(-1, False)
    assert clause.value is True


def test_negative_literal_satisfied_by_negation_true():
    clause = Clause([-4, 5])
    clause.assign_literal(-4, True)
    assert clause.value is True


def test_all_literals_false_falsifies_clause():
    clause = Clause([1, -2, 3])
    clause.assign_literal(3, False)
    clause.assign_literal(1, False)
    clause.assign_literal(2, True)
    assert clause.value is False
    assert clause.is_unsatisfiable


def test_partial_assignment_keeps_elements():
    clause = Clause([1, 2, 3])
    clause.assign_literal(1, False)
    clause.assign_literal(2, False)
    assert clause.value == [False, False, 3]
    assert not clause.is_decided


def test_negation_assigned_true_resolves_element_false():
    clause = Clause([1, 2, 3])
    clause.assign_literal(-1, True)
    assert clause.value == [False, 2, 3]


def test_unrelated_literal_is_ignored():
    clause = Clause([1, 2])
    clause.assign_literal(7, True)
    assert clause.value == [1, 2]


def test_unit_literal():
    clause = Clause([1, 2, 3])
    assert clause.unit_literal is None
    clause.assign_literal(1, False)
    clause.assign_literal(2, False)
    assert clause.unit_literal == 3
    assert clause.unassigned_literals == [3]


def test_unit_literal_none_when_decided():
    assert Clause(True).unit_literal is None
    assert Clause(False).unit_literal is None
    clause = Clause([1, 2, 3])
    clause.assign_literal(2, True)
    assert clause.unit_literal is None


def test_decided_clause_ignores_assignments():
    clause = Clause([1, 2])
    clause.assign_literal(1, True)
    clause.assign_literal(1, False)
    clause.assign_literal(2, False)
    assert clause.value is True

    falsified = Clause([1])
    falsified.assign_literal(1, False)
    falsified.assign_literal(1, True)
    assert falsified.value is False


def test_resolved_booleans_are_not_mistaken_for_literals():
    # True == 1 and False == 0 in Python
    clause = Clause([True, 2])
    clause.assign_literal(1, True)
    assert clause.value == [True, 2]
    assert clause.unit_literal == 2

    clause = Clause([False, 1])
    clause.assign_literal(-1, True)
    assert clause.value is False


def test_contains_literal():
    clause = Clause([1, -2])
    assert clause.contains_literal(-2)
    assert not clause.contains_literal(2)
    clause.assign_literal(2, True)
    assert not clause.contains_literal(-2)


def test_clone_is_equal_but_independent():
    clause = Clause([1, 2, 3])
    clone = clause.clone()
    assert clone == clause
    assert clone is not clause

    clause.assign_literal(1, False)
    assert clause.value == [False, 2, 3]
    assert clone.value == [1, 2, 3]

    clone.assign_literal(3, True)
    assert clone.value is True
    assert clause.value == [False, 2, 3]


def test_clone_of_decided_clause():
    clause = Clause([1])
    clause.assign_literal(1, True)
    assert clause.clone().value is True


def test_equality_distinguishes_booleans_from_literals():
    assert Clause([True, 2]) != Clause([1, 2])
    assert Clause(False) == Clause([])
    assert Clause([1, 2]) != Clause(True)


def test_value_cannot_change_clause_state():
    clause = Clause([1, 2])
    clause.value[0] = True
    clause.value.clear()
    assert clause.value == [1, 2]
    assert clause.unit_literal is None
