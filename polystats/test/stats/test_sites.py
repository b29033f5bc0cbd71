# -*- coding: utf-8 -*-
import pytest
from pytest import approx
from numpy.testing import assert_array_equal


import polystats
from polystats import AlignmentArray, StateCountsArray, ArgumentError


def test_mutation_count():
    aln = AlignmentArray.from_sequences(['AAG', 'A-G', 'CAT', 'CAN'])
    assert_array_equal([2, 1, 2], polystats.mutation_count(aln))
    # gap as a state
    assert_array_equal([2, 2, 2], polystats.mutation_count(aln, ignore_gaps=False))
    # state counts used as given
    ac = StateCountsArray([[1, 1, 1, 0], [4, 0, 0, 0]])
    assert_array_equal([3, 1], polystats.mutation_count(ac))


def test_mutation_count_outgroup_ignored():
    aln = AlignmentArray.from_sequences(['AA', 'AA', 'CG'], outgroup=[2])
    assert_array_equal([1, 1], polystats.mutation_count(aln))


def test_singleton_count():
    aln = AlignmentArray.from_sequences(['AAG', 'A-G', 'CAT', 'CAN'])
    assert_array_equal([0, 0, 1], polystats.singleton_count(aln))
    assert_array_equal([0, 1, 1], polystats.singleton_count(aln, ignore_gaps=False))


def test_is_polymorphic():
    aln = AlignmentArray.from_sequences(['AAG', 'A-G', 'CAT', 'CAN'])
    assert_array_equal([True, False, True], polystats.is_polymorphic(aln))


def test_useful_values():
    v = polystats.useful_values(4)
    assert approx(1 + 1/2 + 1/3) == v.a1
    assert approx(1 + 1/4 + 1/9) == v.a2
    assert approx(v.a1 + 1/4) == v.a1n
    assert approx(5 / 9) == v.b1
    assert approx(46 / 108) == v.b2
    assert approx(v.b1 - 1 / v.a1) == v.c1
    assert approx(v.c1 / v.a1) == v.e1
    assert approx(v.c2 / (v.a1**2 + v.a2)) == v.e2
    assert approx(4 / 9) == v.cn
    assert approx(10 / 9) == v.dn


def test_useful_values_small_samples():
    v = polystats.useful_values(2)
    assert approx(1.) == v.a1
    assert approx(1.5) == v.a1n
    assert v.cn is None
    assert v.dn is None
    with pytest.raises(ArgumentError):
        polystats.useful_values(1)
    with pytest.raises(ArgumentError):
        polystats.useful_values(2.9)
    # integral floats accepted
    assert approx(v.a1) == polystats.useful_values(2.0).a1


def test_useful_values_a1n():
    for n in range(2, 30):
        v = polystats.useful_values(n)
        assert approx(v.a1 + 1 / n) == v.a1n
        assert approx(polystats.useful_values(n + 1).a1) == v.a1n
