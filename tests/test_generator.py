import random

import pytest

from dpll.generator import pigeonhole, random_kcnf


def test_random_kcnf_shape():
    clauses = random_kcnf(10, 42, 3, random.Random(0))
    assert len(clauses) == 42
    for clause in clauses:
        assert len(clause) == 3
        assert len(set(abs(l) for l in clause)) == 3
        assert all(1 <= abs(l) <= 10 for l in clause)


def test_random_kcnf_is_reproducible_with_seed():
    assert random_kcnf(20, 50, 3, random.Random(7)) == random_kcnf(20, 50, 3, random.Random(7))


def test_random_kcnf_needs_enough_variables():
    with pytest.raises(ValueError):
        random_kcnf(2, 5, 3)


def test_pigeonhole_clauses():
    clauses = pigeonhole(3, 2)
    # 3 "pigeon has a hole" clauses + 2 holes * C(3, 2) exclusions
    assert len(clauses) == 9
    assert clauses[0] == [1, 2]
    assert [-1, -3] in clauses
