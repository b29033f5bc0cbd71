# -*- coding: utf-8 -*-
from contextlib import contextmanager


import numpy as np


from polystats.errors import ArgumentError, UndefinedStatisticError


@contextmanager
def ignore_invalid():
    err = np.seterr(invalid='ignore', divide='ignore')
    try:
        yield
    finally:
        np.seterr(**err)


def asarray_ndim(a, *ndims, **kwargs):
    """Ensure numpy array.

    Parameters
    ----------
    a : array_like
    *ndims : int, optional
        Allowed values for number of dimensions.
    **kwargs
        Passed through to :func:`numpy.asarray`.

    Returns
    -------
    a : numpy.ndarray

    """
    allow_none = kwargs.pop('allow_none', False)
    if a is None and allow_none:
        return None
    a = np.asarray(a, **kwargs)
    if a.ndim not in ndims:
        if len(ndims) > 1:
            expect_str = 'one of %s' % str(ndims)
        else:
            # noinspection PyUnresolvedReferences
            expect_str = '%s' % ndims[0]
        raise TypeError('bad number of dimensions: expected %s; found %s' %
                        (expect_str, a.ndim))
    return a


def check_ndim(a, ndim):
    if a.ndim != ndim:
        raise TypeError('bad number of dimensions: expected %s; found %s' % (ndim, a.ndim))


def check_dtype_kind(a, *kinds):
    if a.dtype.kind not in kinds:
        raise TypeError('bad dtype kind: expected on of %s; found %s' % (kinds, a.dtype.kind))


def check_dim0_aligned(*arrays):
    check_dim_aligned(0, *arrays)


def check_dim_aligned(dim, *arrays):
    a = arrays[0]
    for b in arrays[1:]:
        if b.shape[dim] != a.shape[dim]:
            raise ArgumentError(
                'arrays do not have matching length for dimension %s' % dim
            )


def check_equal_length(a, *others):
    l = len(a)
    for b in others:
        if len(b) != l:
            raise ArgumentError('sequences do not have matching length')


def check_min_samples(actual, expect):
    if actual < expect:
        raise ArgumentError(
            'expected at least %s sequences, found %s' % (expect, actual)
        )


def check_type(obj, expected):
    if not isinstance(obj, expected):
        raise ArgumentError('bad argument type, expected %s, found %s' % (expected, type(obj)))


def check_nonzero(x, what):
    if x == 0:
        raise UndefinedStatisticError('%s is zero, statistic is undefined' % what)
