# -*- coding: utf-8 -*-
import collections


import numpy as np


from polystats.errors import ArgumentError
from polystats.model.ndarray import StateCountsArray
from polystats.util import check_min_samples


def _as_counts(aln, ignore_gaps):
    if isinstance(aln, StateCountsArray):
        return aln
    return aln.ingroup().count_states(ignore_gaps=ignore_gaps)


def mutation_count(aln, ignore_gaps=True):
    """Count the number of distinct states at each site.

    Parameters
    ----------
    aln : AlignmentArray or StateCountsArray
        Alignment; only ingroup sequences are considered. State counts are
        used as given.
    ignore_gaps : bool, optional
        If False, a gap is treated as just another state. Note that this
        inflates apparent polymorphism wherever gaps occur.

    Returns
    -------
    n : ndarray, int, shape (n_sites,)

    """
    return _as_counts(aln, ignore_gaps).allelism()


def singleton_count(aln, ignore_gaps=True):
    """Count the number of states observed exactly once at each site.

    Parameters
    ----------
    aln : AlignmentArray or StateCountsArray
    ignore_gaps : bool, optional

    Returns
    -------
    n : ndarray, int, shape (n_sites,)

    """
    return _as_counts(aln, ignore_gaps).singleton_count()


def is_polymorphic(aln, ignore_gaps=True):
    """Find sites with more than one state.

    Returns
    -------
    out : ndarray, bool, shape (n_sites,)

    """
    return mutation_count(aln, ignore_gaps=ignore_gaps) > 1


UsefulValues = collections.namedtuple(
    'UsefulValues',
    ['a1', 'a2', 'a1n', 'b1', 'b2', 'c1', 'c2', 'cn', 'dn', 'e1', 'e2']
)


# noinspection PyPep8Naming
def useful_values(n):
    """Coefficients shared by the theta estimators and neutrality tests.

    Parameters
    ----------
    n : int
        Number of sequences sampled, at least 2.

    Returns
    -------
    values : UsefulValues
        Named tuple with fields a1, a2, a1n, b1, b2, c1, c2, cn, dn, e1, e2.
        The fields cn and dn divide by (n - 2) and are None when n is 2.

    Notes
    -----
    With :math:`a_1 = \\sum_{i=1}^{n-1} 1/i`, :math:`a_2 = \\sum_{i=1}^{n-1}
    1/i^2` and :math:`a_{1n} = \\sum_{i=1}^{n} 1/i`, the remaining values are
    those of Tajima (1989) and Fu and Li (1993)::

        b1 = (n + 1) / (3 (n - 1))
        b2 = 2 (n^2 + n + 3) / (9 n (n - 1))
        c1 = b1 - 1 / a1
        c2 = b2 - (n + 2) / (a1 n) + a2 / a1^2
        cn = 2 (n a1 - 2 (n - 1)) / ((n - 1) (n - 2))
        dn = cn + (n - 2) / (n - 1)^2 + 2 / (n - 1) (3/2 - (2 a1n - 3) / (n - 2) - 1 / n)
        e1 = c1 / a1
        e2 = c2 / (a1^2 + a2)

    Examples
    --------

    >>> from polystats.stats.sites import useful_values
    >>> v = useful_values(4)
    >>> round(v.a1, 6), round(v.a2, 6)
    (1.833333, 1.361111)

    """

    if n != int(n):
        raise ArgumentError('number of sequences must be an integer, found %r' % n)
    n = int(n)
    check_min_samples(n, 2)

    i = np.arange(1, n)
    a1 = float(np.sum(1 / i))
    a2 = float(np.sum(1 / i**2))
    a1n = a1 + 1 / n
    b1 = (n + 1) / (3 * (n - 1))
    b2 = 2 * (n**2 + n + 3) / (9 * n * (n - 1))
    c1 = b1 - 1 / a1
    c2 = b2 - (n + 2) / (a1 * n) + a2 / a1**2
    if n > 2:
        cn = 2 * (n * a1 - 2 * (n - 1)) / ((n - 1) * (n - 2))
        dn = (cn + (n - 2) / (n - 1)**2 +
              (2 / (n - 1)) * (1.5 - (2 * a1n - 3) / (n - 2) - 1 / n))
    else:
        cn = dn = None
    e1 = c1 / a1
    e2 = c2 / (a1**2 + a2)

    return UsefulValues(a1=a1, a2=a2, a1n=a1n, b1=b1, b2=b2, c1=c1, c2=c2,
                        cn=cn, dn=dn, e1=e1, e2=e2)
