# -*- coding: utf-8 -*-
import pytest
import numpy as np


from polystats.errors import DomainError, ArgumentError, UndefinedStatisticError
from polystats.util import asarray_ndim, check_equal_length, \
    check_min_samples, check_nonzero, check_type, ignore_invalid


def test_errors_hierarchy():
    assert issubclass(ArgumentError, DomainError)
    assert issubclass(UndefinedStatisticError, DomainError)
    assert issubclass(DomainError, ValueError)


def test_asarray_ndim():
    a = asarray_ndim([1, 2, 3], 1)
    assert 1 == a.ndim
    a = asarray_ndim([[1, 2, 3]], 1, 2)
    assert 2 == a.ndim
    with pytest.raises(TypeError):
        asarray_ndim([[1, 2, 3]], 1)
    assert asarray_ndim(None, 1, allow_none=True) is None


def test_check_equal_length():
    check_equal_length('ACG', 'TTT')
    with pytest.raises(ArgumentError):
        check_equal_length('ACG', 'TT')


def test_check_min_samples():
    check_min_samples(2, 2)
    with pytest.raises(ArgumentError):
        check_min_samples(1, 2)


def test_check_nonzero():
    check_nonzero(1, 'x')
    with pytest.raises(UndefinedStatisticError):
        check_nonzero(0, 'x')


def test_check_type():
    check_type(1, int)
    with pytest.raises(ArgumentError):
        check_type('ACGT', int)


def test_ignore_invalid():
    a = np.array([0., 1.])
    with ignore_invalid():
        b = a / 0
    assert np.isnan(b[0])
    assert np.isinf(b[1])
