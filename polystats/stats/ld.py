# -*- coding: utf-8 -*-
import logging


import numpy as np


from polystats.constants import KB
from polystats.errors import ArgumentError, UndefinedStatisticError
from polystats.model.ndarray import ArrayBase, AlignmentArray
from polystats.util import asarray_ndim, check_dim0_aligned, check_type, \
    check_ndim, check_dtype_kind


logger = logging.getLogger(__name__)
debug = logger.debug


class LDContainer(ArrayBase):
    """Bi-allelic sites recoded for linkage disequilibrium analysis.

    Parameters
    ----------
    data : array_like, int, shape (n_sites, n_sequences)
        1 where a sequence carries the more frequent allele, 0 otherwise.
    pos : array_like, int, shape (n_sites,)
        Positions of the sites in the source alignment.
    loc : array_like, int, shape (n_sites,)
        Indices of the sites in the source alignment.

    """

    @classmethod
    def _check_values(cls, data):
        check_dtype_kind(data, 'i', 'u')
        check_ndim(data, 2)

    def __init__(self, data, pos, loc, copy=False, **kwargs):
        kwargs.setdefault('dtype', 'i1')
        super(LDContainer, self).__init__(data, copy=copy, **kwargs)
        self.pos = asarray_ndim(pos, 1)
        self.loc = asarray_ndim(loc, 1)
        check_dim0_aligned(self.values, self.pos, self.loc)

    @property
    def n_sites(self):
        return self.shape[0]

    @property
    def n_sequences(self):
        return self.shape[1]


def _ingroup(aln):
    check_type(aln, AlignmentArray)
    return aln.ingroup()


def generate_ld_container(aln, keep_singletons=True, min_freq=0.):
    """Select bi-allelic sites for linkage disequilibrium analysis and recode
    alleles as 1 (more frequent) and 0 (less frequent).

    Parameters
    ----------
    aln : AlignmentArray
        Alignment; only ingroup sequences are considered.
    keep_singletons : bool, optional
        If False, exclude sites where the minor allele is a singleton.
    min_freq : float, optional
        Exclude sites where the minor allele frequency is below this value.

    Returns
    -------
    ldc : LDContainer

    Notes
    -----
    Only complete sites (no gap or unknown symbol in any ingroup sequence)
    with exactly two states are kept. Where both alleles are equally
    frequent, the allele with the lower state code is recoded as 1.

    Examples
    --------

    >>> import polystats
    >>> aln = polystats.AlignmentArray.from_sequences(['AACGT',
    ...                                                'AACGT',
    ...                                                'AGCGA',
    ...                                                'CGCTA'])
    >>> ldc = polystats.generate_ld_container(aln)
    >>> ldc.pos
    array([1, 2, 4, 5])
    >>> ldc.values
    array([[1, 1, 1, 0],
           [1, 1, 0, 0],
           [1, 1, 1, 0],
           [0, 0, 1, 1]], dtype=int8)

    """

    if not 0 <= min_freq <= 1:
        raise ArgumentError('min_freq must be between 0 and 1, found %s' % min_freq)

    ingroup = _ingroup(aln)
    h = ingroup.values
    ac = ingroup.count_states()

    loc = ingroup.is_complete() & ac.is_biallelic()
    af = ac.to_frequencies(fill=0)
    minor_freq = np.min(np.where(af > 0, af, 1), axis=1)
    loc &= minor_freq >= min_freq
    if not keep_singletons:
        loc &= ac.singleton_count() == 0

    idx = np.nonzero(loc)[0]
    # argmax takes the lowest state code on ties
    major = np.argmax(ac.values[idx], axis=1)
    data = (h[idx] == major[:, None]).astype('i1')
    debug('generate_ld_container: %s of %s sites kept', idx.shape[0], h.shape[0])

    return LDContainer(data, pos=ingroup.pos[idx], loc=idx)


def _pairs(ldc):
    return np.triu_indices(ldc.shape[0], 1)


def _frequencies(ldc):
    x = ldc.values.astype('f8')
    n = x.shape[1]
    i, j = _pairs(ldc)
    p = np.mean(x, axis=1)
    pij = np.dot(x, x.T) / n
    return p[i], p[j], pij[i, j]


def _distances1(ldc):
    i, j = _pairs(ldc)
    return np.abs(ldc.pos[j] - ldc.pos[i]).astype('f8')


def _distances2(ingroup, ldc):
    is_gap = ingroup.is_gap()
    gaps_before = np.cumsum(is_gap, axis=0) - is_gap
    # positions in each sequence with gaps removed, shape (n_sites, n_sequences)
    upos = ingroup.pos[ldc.loc][:, None] - gaps_before[ldc.loc]
    i, j = _pairs(ldc)
    return np.mean(np.abs(upos[j] - upos[i]), axis=1).astype('f8')


def _d(ldc):
    pi, pj, pij = _frequencies(ldc)
    return pij - pi * pj


def _d_prime(ldc):
    pi, pj, pij = _frequencies(ldc)
    d = pij - pi * pj
    d_max = np.where(d > 0,
                     np.minimum(pi * (1 - pj), (1 - pi) * pj),
                     np.minimum(pi * pj, (1 - pi) * (1 - pj)))
    if np.any(d_max == 0):
        raise UndefinedStatisticError("D' is undefined, D max is zero")
    # rounding
    return np.clip(d / d_max, -1, 1)


def _r2(ldc):
    pi, pj, pij = _frequencies(ldc)
    d = pij - pi * pj
    denom = pi * (1 - pi) * pj * (1 - pj)
    if np.any(denom == 0):
        raise UndefinedStatisticError('r2 is undefined for a monomorphic site')
    return np.minimum(d**2 / denom, 1)


def pairwise_distances1(aln, keep_singletons=True, min_freq=0.):
    """Compute distances between all pairs of LD sites as the difference
    between their positions.

    Parameters
    ----------
    aln : AlignmentArray
    keep_singletons : bool, optional
    min_freq : float, optional
        See :func:`generate_ld_container`.

    Returns
    -------
    dist : ndarray, float, shape (n_sites * (n_sites - 1) // 2,)
        Distances in condensed form, empty if fewer than two sites are kept.

    """
    ldc = generate_ld_container(aln, keep_singletons, min_freq)
    return _distances1(ldc)


def pairwise_distances2(aln, keep_singletons=True, min_freq=0.):
    """Compute distances between all pairs of LD sites, excluding gaps in
    each sequence separately and averaging over sequences.

    Returns
    -------
    dist : ndarray, float, shape (n_sites * (n_sites - 1) // 2,)

    """
    ingroup = _ingroup(aln)
    ldc = generate_ld_container(ingroup, keep_singletons, min_freq)
    return _distances2(ingroup, ldc)


def pairwise_d(aln, keep_singletons=True, min_freq=0.):
    """Compute Lewontin and Kojima's (1964) D for all pairs of LD sites.

    For sites i and j with frequencies :math:`p_i`, :math:`p_j` of the more
    frequent alleles and :math:`p_{ij}` the frequency of sequences carrying
    both, :math:`D = p_{ij} - p_i p_j`.

    Returns
    -------
    d : ndarray, float, shape (n_sites * (n_sites - 1) // 2,)

    """
    return _d(generate_ld_container(aln, keep_singletons, min_freq))


def pairwise_d_prime(aln, keep_singletons=True, min_freq=0.):
    """Compute Lewontin's (1964) D' = D / D max for all pairs of LD sites.

    Returns
    -------
    d_prime : ndarray, float, shape (n_sites * (n_sites - 1) // 2,)

    """
    return _d_prime(generate_ld_container(aln, keep_singletons, min_freq))


def pairwise_r2(aln, keep_singletons=True, min_freq=0.):
    """Compute Hill and Robertson's (1968) r2 for all pairs of LD sites.

    Returns
    -------
    r2 : ndarray, float, shape (n_sites * (n_sites - 1) // 2,)

    Examples
    --------

    >>> import polystats
    >>> aln = polystats.AlignmentArray.from_sequences(['AACGT',
    ...                                                'AACGT',
    ...                                                'AGCGA',
    ...                                                'CGCTA'])
    >>> polystats.pairwise_r2(aln)
    array([0.33333333, 1.        , 0.33333333, 0.33333333, 1.        ,
           0.33333333])

    """
    return _r2(generate_ld_container(aln, keep_singletons, min_freq))


def _check_pairs(ldc):
    if ldc.shape[0] < 2:
        raise UndefinedStatisticError(
            'fewer than two sites available for linkage disequilibrium'
        )


def mean_d(aln, keep_singletons=True, min_freq=0.):
    """Mean D over all pairs of LD sites."""
    ldc = generate_ld_container(aln, keep_singletons, min_freq)
    _check_pairs(ldc)
    return float(np.mean(_d(ldc)))


def mean_d_prime(aln, keep_singletons=True, min_freq=0.):
    """Mean D' over all pairs of LD sites."""
    ldc = generate_ld_container(aln, keep_singletons, min_freq)
    _check_pairs(ldc)
    return float(np.mean(_d_prime(ldc)))


def mean_r2(aln, keep_singletons=True, min_freq=0.):
    """Mean r2 over all pairs of LD sites."""
    ldc = generate_ld_container(aln, keep_singletons, min_freq)
    _check_pairs(ldc)
    return float(np.mean(_r2(ldc)))


def mean_distance1(aln, keep_singletons=True, min_freq=0.):
    """Mean distance between LD sites, see :func:`pairwise_distances1`."""
    ldc = generate_ld_container(aln, keep_singletons, min_freq)
    _check_pairs(ldc)
    return float(np.mean(_distances1(ldc)))


def mean_distance2(aln, keep_singletons=True, min_freq=0.):
    """Mean distance between LD sites, see :func:`pairwise_distances2`."""
    ingroup = _ingroup(aln)
    ldc = generate_ld_container(ingroup, keep_singletons, min_freq)
    _check_pairs(ldc)
    return float(np.mean(_distances2(ingroup, ldc)))


def _xy(x, y):
    x = asarray_ndim(x, 1, dtype='f8')
    y = asarray_ndim(y, 1, dtype='f8')
    check_dim0_aligned(x, y)
    if x.shape[0] == 0:
        raise UndefinedStatisticError('no values to regress')
    return x, y


def linear_regression(x, y):
    """Fit ``y = a * x + b`` by ordinary least squares.

    Parameters
    ----------
    x : array_like, float, shape (n,)
        Distances in bases.
    y : array_like, float, shape (n,)

    Returns
    -------
    slope : float
        Slope per kilobase.
    intercept : float

    """
    x, y = _xy(x, y)
    dx = x - np.mean(x)
    sxx = np.sum(dx**2)
    if sxx == 0:
        raise UndefinedStatisticError('regression is undefined, all distances are equal')
    slope = np.sum(dx * (y - np.mean(y))) / sxx
    intercept = np.mean(y) - slope * np.mean(x)
    return float(slope * KB), float(intercept)


def origin_regression(x, y):
    """Fit ``y = 1 + a * x`` by least squares.

    Returns
    -------
    slope : float
        Slope per kilobase.

    """
    x, y = _xy(x, y)
    sxx = np.sum(x**2)
    if sxx == 0:
        raise UndefinedStatisticError('regression is undefined, all distances are zero')
    return float(np.sum(x * (y - 1)) / sxx * KB)


def inverse_regression(x, y):
    """Fit ``y = 1 / (1 + a * x)`` by least squares on ``1 / y = 1 + a * x``,
    the expectation of r2 under recombination and drift being
    ``1 / (1 + 4Nr)``.

    Returns
    -------
    slope : float
        Slope per kilobase.

    """
    x, y = _xy(x, y)
    if np.any(y == 0):
        raise UndefinedStatisticError('inverse regression is undefined where r2 is zero')
    return origin_regression(x, 1 / y)


def _ld_regression_inputs(aln, distance_method, keep_singletons, min_freq):
    ingroup = _ingroup(aln)
    ldc = generate_ld_container(ingroup, keep_singletons, min_freq)
    _check_pairs(ldc)
    if distance_method == 1:
        dist = _distances1(ldc)
    elif distance_method == 2:
        dist = _distances2(ingroup, ldc)
    else:
        raise ArgumentError('distance_method must be 1 or 2, found %r' % distance_method)
    return ldc, dist


def linear_regression_d(aln, distance_method=2, keep_singletons=True, min_freq=0.):
    """Regress |D| on distance between LD sites, ``|D| = a * distance + b``.

    Parameters
    ----------
    aln : AlignmentArray
    distance_method : {1, 2}, optional
        Use :func:`pairwise_distances1` or :func:`pairwise_distances2`.
    keep_singletons : bool, optional
    min_freq : float, optional

    Returns
    -------
    slope : float
        Slope per kilobase.
    intercept : float

    """
    ldc, dist = _ld_regression_inputs(aln, distance_method, keep_singletons, min_freq)
    return linear_regression(dist, np.abs(_d(ldc)))


def linear_regression_d_prime(aln, distance_method=2, keep_singletons=True,
                              min_freq=0.):
    """Regress |D'| on distance, see :func:`linear_regression_d`."""
    ldc, dist = _ld_regression_inputs(aln, distance_method, keep_singletons, min_freq)
    return linear_regression(dist, np.abs(_d_prime(ldc)))


def linear_regression_r2(aln, distance_method=2, keep_singletons=True,
                         min_freq=0.):
    """Regress r2 on distance, see :func:`linear_regression_d`."""
    ldc, dist = _ld_regression_inputs(aln, distance_method, keep_singletons, min_freq)
    return linear_regression(dist, _r2(ldc))


def origin_regression_d(aln, distance_method=2, keep_singletons=True, min_freq=0.):
    """Slope per kilobase of ``|D| = 1 + a * distance``."""
    ldc, dist = _ld_regression_inputs(aln, distance_method, keep_singletons, min_freq)
    return origin_regression(dist, np.abs(_d(ldc)))


def origin_regression_d_prime(aln, distance_method=2, keep_singletons=True,
                              min_freq=0.):
    """Slope per kilobase of ``|D'| = 1 + a * distance``."""
    ldc, dist = _ld_regression_inputs(aln, distance_method, keep_singletons, min_freq)
    return origin_regression(dist, np.abs(_d_prime(ldc)))


def origin_regression_r2(aln, distance_method=2, keep_singletons=True,
                         min_freq=0.):
    """Slope per kilobase of ``r2 = 1 + a * distance``."""
    ldc, dist = _ld_regression_inputs(aln, distance_method, keep_singletons, min_freq)
    return origin_regression(dist, _r2(ldc))


def inverse_regression_r2(aln, distance_method=2, keep_singletons=True,
                          min_freq=0.):
    """Slope per kilobase of ``r2 = 1 / (1 + a * distance)``, see
    :func:`inverse_regression`."""
    ldc, dist = _ld_regression_inputs(aln, distance_method, keep_singletons, min_freq)
    return inverse_regression(dist, _r2(ldc))
