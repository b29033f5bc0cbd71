# -*- coding: utf-8 -*-
import collections
import logging


import numpy as np


from polystats.constants import A, C, G, T
from polystats.errors import ArgumentError, UndefinedStatisticError
from polystats.model.ndarray import AlignmentArray
from polystats.stats.sites import useful_values
from polystats.util import check_type, check_min_samples, check_nonzero, \
    ignore_invalid


logger = logging.getLogger(__name__)
debug = logger.debug


def _ingroup(aln):
    check_type(aln, AlignmentArray)
    return aln.ingroup()


def polymorphic_site_number(aln, ignore_gaps=True):
    """Count the number of polymorphic (segregating) sites.

    Parameters
    ----------
    aln : AlignmentArray
        Alignment; only ingroup sequences are considered.
    ignore_gaps : bool, optional
        If False, gaps are counted as a state, so a site where some
        sequences carry a gap is polymorphic.

    Returns
    -------
    n : int

    Examples
    --------

    >>> import polystats
    >>> aln = polystats.AlignmentArray.from_sequences(['AACGT',
    ...                                                'AACGT',
    ...                                                'AGCGA',
    ...                                                'CGCG-'])
    >>> polystats.polymorphic_site_number(aln)
    3
    >>> polystats.polymorphic_site_number(aln, ignore_gaps=False)
    3

    """
    ac = _ingroup(aln).count_states(ignore_gaps=ignore_gaps)
    return int(np.count_nonzero(ac.is_polymorphic()))


def parsimony_informative_site_number(aln, ignore_gaps=True):
    """Count the number of sites where at least two states each occur at
    least twice."""
    ac = _ingroup(aln).count_states(ignore_gaps=ignore_gaps)
    return int(np.count_nonzero(ac.is_parsimony_informative()))


def count_singletons(aln, ignore_gaps=True):
    """Count singleton states, summed over polymorphic sites.

    Parameters
    ----------
    aln : AlignmentArray
    ignore_gaps : bool, optional

    Returns
    -------
    n : int

    """
    ac = _ingroup(aln).count_states(ignore_gaps=ignore_gaps)
    loc = ac.is_polymorphic()
    return int(np.sum(ac.singleton_count()[loc]))


def total_number_mutations(aln, ignore_gaps=True):
    """Count the total number of mutations under the infinite site model,
    i.e., each state observed at a polymorphic site beyond the first costs
    one mutation.

    Parameters
    ----------
    aln : AlignmentArray
    ignore_gaps : bool, optional

    Returns
    -------
    eta : int

    """
    ac = _ingroup(aln).count_states(ignore_gaps=ignore_gaps)
    k = ac.allelism()
    return int(np.sum(k[k > 1] - 1))


def triplet_number(aln, ignore_gaps=True):
    """Count the number of sites with exactly three states."""
    ac = _ingroup(aln).count_states(ignore_gaps=ignore_gaps)
    return int(np.count_nonzero(ac.allelism() == 3))


def gc_content(aln):
    """Compute the fraction of G and C among all ingroup nucleotides, gaps
    and unknown symbols excluded.

    Returns
    -------
    gc : float

    """
    h = _ingroup(aln).values
    n_gc = np.count_nonzero((h == C) | (h == G))
    n_total = np.count_nonzero(h >= 0)
    check_nonzero(n_total, 'number of nucleotides')
    return n_gc / n_total


def gc_polymorphism(aln):
    """Count G or C alleles and all alleles at polymorphic sites.

    Only complete, bi-allelic sites are considered, and G/C or A/T
    polymorphisms are skipped since they leave GC content unchanged.

    Returns
    -------
    n_gc : int
        Number of G or C alleles.
    n_total : int
        Total number of alleles.

    """
    ingroup = _ingroup(aln)
    counts = ingroup.count_states()
    ac = counts.values
    loc = ingroup.is_complete() & counts.is_biallelic()
    same_gc = ((ac[:, C] > 0) & (ac[:, G] > 0)) | ((ac[:, A] > 0) & (ac[:, T] > 0))
    loc &= ~same_gc
    n_gc = int(np.sum(ac[loc, C] + ac[loc, G]))
    n_total = int(np.sum(ac[loc]))
    return n_gc, n_total


def watterson_theta(aln, ignore_gaps=True):
    """Compute Watterson's (1975) estimator of theta from the number of
    polymorphic sites, theta_W = S / a1.

    Parameters
    ----------
    aln : AlignmentArray
        Alignment; only ingroup sequences are considered.
    ignore_gaps : bool, optional

    Returns
    -------
    theta_hat_w : float
        Absolute value, i.e., not divided by the number of sites.

    Examples
    --------

    >>> import polystats
    >>> aln = polystats.AlignmentArray.from_sequences(['ACGTA',
    ...                                                'ACGTA',
    ...                                                'ACCTA',
    ...                                                'GCCTA'])
    >>> polystats.watterson_theta(aln)  # 2 / (1 + 1/2 + 1/3)
    1.0909090909090908

    """

    ingroup = _ingroup(aln)
    n = ingroup.n_sequences
    check_min_samples(n, 2)
    S = polymorphic_site_number(ingroup, ignore_gaps=ignore_gaps)
    if S == 0:
        return 0.
    return S / useful_values(n).a1


def _mean_pairwise_difference(ac):
    # generalises to any number of states
    an = np.sum(ac, axis=1)
    n_pairs = an * (an - 1) / 2
    n_same = np.sum(ac * (ac - 1) / 2, axis=1)
    n_diff = n_pairs - n_same
    with ignore_invalid():
        mpd = np.where(n_pairs > 0, n_diff / n_pairs, 0)
    return mpd


def tajima_theta(aln, ignore_gaps=True):
    """Compute Tajima's (1983) estimator of theta from the mean number of
    pairwise differences, summed over sites.

    For each site with :math:`n_i` observed symbols and state counts
    :math:`k_{j,i}`, adds :math:`1 - \\sum_j k_{j,i}(k_{j,i}-1) / (n_i(n_i-1))`.
    Sites with fewer than two observed symbols contribute nothing.

    Parameters
    ----------
    aln : AlignmentArray
    ignore_gaps : bool, optional

    Returns
    -------
    theta_hat_pi : float

    """
    ac = _ingroup(aln).count_states(ignore_gaps=ignore_gaps)
    return float(np.sum(_mean_pairwise_difference(ac.values)))


# noinspection PyPep8Naming
def _tajima_d(theta_pi, S, n):
    v = useful_values(n)
    theta_s = S / v.a1
    var = v.e1 * S + v.e2 * S * (S - 1)
    debug('tajima_d: n=%s, S=%s, theta_pi=%s, theta_s=%s', n, S, theta_pi, theta_s)
    if var <= 0:
        raise UndefinedStatisticError(
            "Tajima's D is undefined, variance is zero (S=%s)" % S
        )
    return float((theta_pi - theta_s) / np.sqrt(var))


# noinspection PyPep8Naming
def tajima_d(aln, ignore_gaps=True):
    """Compute Tajima's (1989) D from the number of polymorphic sites.

    .. math::

        D = \\frac{\\hat\\theta_\\pi - \\hat\\theta_S}{\\sqrt{e_1 S + e_2 S (S - 1)}}

    Parameters
    ----------
    aln : AlignmentArray
    ignore_gaps : bool, optional

    Returns
    -------
    D : float

    Raises
    ------
    UndefinedStatisticError
        If there are no polymorphic sites.

    """
    ingroup = _ingroup(aln)
    n = ingroup.n_sequences
    check_min_samples(n, 2)
    S = polymorphic_site_number(ingroup, ignore_gaps=ignore_gaps)
    theta_pi = tajima_theta(ingroup, ignore_gaps=ignore_gaps)
    return _tajima_d(theta_pi, S, n)


def tajima_d_total_mutations(aln, ignore_gaps=True):
    """Compute Tajima's (1989) D from the total number of mutations,
    substituting eta for S and eta / a1 for theta_S.

    Raises
    ------
    UndefinedStatisticError
        If there are no mutations.

    """
    ingroup = _ingroup(aln)
    n = ingroup.n_sequences
    check_min_samples(n, 2)
    eta = total_number_mutations(ingroup, ignore_gaps=ignore_gaps)
    theta_pi = tajima_theta(ingroup, ignore_gaps=ignore_gaps)
    return _tajima_d(theta_pi, eta, n)


def _resolve_outgroup(aln, outgroup):
    if outgroup is None:
        outgroup = aln.outgroup()
    else:
        check_type(outgroup, AlignmentArray)
    if outgroup.n_sequences == 0:
        raise ArgumentError('an outgroup is required')
    if outgroup.n_sites != aln.n_sites:
        raise ArgumentError('outgroup has %s sites, expected %s'
                            % (outgroup.n_sites, aln.n_sites))
    return outgroup


def external_mutations(aln, outgroup=None):
    """Count mutations on external branches, i.e., ingroup singleton states
    that differ from the outgroup state.

    Parameters
    ----------
    aln : AlignmentArray
        Alignment; ingroup sequences are considered.
    outgroup : AlignmentArray, optional
        Outgroup sequences. If not given, the outgroup sequences of `aln` are
        used. Where outgroup sequences disagree, the most common state is
        taken as ancestral. Sites without any outgroup call are skipped.

    Returns
    -------
    eta_e : int

    """
    ingroup = _ingroup(aln)
    outgroup = _resolve_outgroup(aln, outgroup)
    oc = outgroup.count_states().values
    ic = ingroup.count_states()

    is_single = ic.values == 1
    out_state = np.argmax(oc, axis=1)
    is_single[np.arange(ic.shape[0]), out_state] = False
    loc = ic.is_polymorphic() & (np.sum(oc, axis=1) > 0)

    return int(np.count_nonzero(is_single[loc]))


def _check_variance(u, v, eta, name):
    var = u * eta + v * eta**2
    if var <= 0:
        raise UndefinedStatisticError(
            '%s is undefined, variance is zero (eta=%s)' % (name, eta)
        )
    return np.sqrt(var)


# noinspection PyPep8Naming
def fu_li_d(aln, outgroup=None):
    """Compute Fu and Li's (1993) D test, contrasting the total number of
    mutations with the number of mutations on external branches, rooted with
    an outgroup.

    Parameters
    ----------
    aln : AlignmentArray
    outgroup : AlignmentArray, optional
        See :func:`external_mutations`.

    Returns
    -------
    D : float

    """
    ingroup = _ingroup(aln)
    n = ingroup.n_sequences
    check_min_samples(n, 3)
    v = useful_values(n)
    eta = total_number_mutations(ingroup)
    eta_e = external_mutations(aln, outgroup)
    debug('fu_li_d: n=%s, eta=%s, eta_e=%s', n, eta, eta_e)

    vD = 1 + (v.a1**2 / (v.a2 + v.a1**2)) * (v.cn - (n + 1) / (n - 1))
    uD = v.a1 - 1 - vD
    return float((eta - v.a1 * eta_e) /
                 _check_variance(uD, vD, eta, "Fu and Li's D"))


# noinspection PyPep8Naming
def fu_li_d_star(aln):
    """Compute Fu and Li's (1993) D* test, contrasting the total number of
    mutations with the number of singletons, without an outgroup.

    Returns
    -------
    D_star : float

    """
    ingroup = _ingroup(aln)
    n = ingroup.n_sequences
    check_min_samples(n, 3)
    v = useful_values(n)
    eta = total_number_mutations(ingroup)
    eta_s = count_singletons(ingroup)
    debug('fu_li_d_star: n=%s, eta=%s, eta_s=%s', n, eta, eta_s)

    r = n / (n - 1)
    vDs = ((r**2 * v.a2 + v.a1**2 * v.dn - 2 * n * v.a1 * (v.a1 + 1) / (n - 1)**2) /
           (v.a1**2 + v.a2))
    uDs = r * (v.a1 - r) - vDs
    return float((r * eta - v.a1 * eta_s) /
                 _check_variance(uDs, vDs, eta, "Fu and Li's D*"))


# noinspection PyPep8Naming
def fu_li_f(aln, outgroup=None):
    """Compute Fu and Li's (1993) F test, contrasting the mean number of
    pairwise differences with the number of mutations on external branches,
    rooted with an outgroup.

    Returns
    -------
    F : float

    """
    ingroup = _ingroup(aln)
    n = ingroup.n_sequences
    check_min_samples(n, 3)
    v = useful_values(n)
    eta = total_number_mutations(ingroup)
    eta_e = external_mutations(aln, outgroup)
    pi = tajima_theta(ingroup)
    debug('fu_li_f: n=%s, eta=%s, eta_e=%s, pi=%s', n, eta, eta_e, pi)

    vF = (v.cn + v.b2 - 2 / (n - 1)) / (v.a1**2 + v.a2)
    uF = ((1 + (n + 1) / (3 * (n - 1)) -
           4 * (n + 1) / (n - 1)**2 * (v.a1n - 2 * n / (n + 1))) / v.a1) - vF
    return float((pi - eta_e) / _check_variance(uF, vF, eta, "Fu and Li's F"))


# noinspection PyPep8Naming
def fu_li_f_star(aln):
    """Compute Fu and Li's (1993) F* test without an outgroup, using the
    variance given by Simonsen et al. (1995).

    Returns
    -------
    F_star : float

    """
    ingroup = _ingroup(aln)
    n = ingroup.n_sequences
    check_min_samples(n, 3)
    v = useful_values(n)
    eta = total_number_mutations(ingroup)
    eta_s = count_singletons(ingroup)
    pi = tajima_theta(ingroup)
    debug('fu_li_f_star: n=%s, eta=%s, eta_s=%s, pi=%s', n, eta, eta_s, pi)

    vFs = (((2 * n**3 + 110 * n**2 - 255 * n + 153) / (9 * n**2 * (n - 1)) +
            2 * (n - 1) * v.a1 / n**2 - 8 * v.a2 / n) / (v.a1**2 + v.a2))
    uFs = (((4 * n**2 + 19 * n + 3 - 12 * (n + 1) * v.a1n) / (3 * n * (n - 1))) /
           v.a1) - vFs
    return float((pi - (n - 1) / n * eta_s) /
                 _check_variance(uFs, vFs, eta, "Fu and Li's F*"))


def _distinct_counts(h):
    # columns are sequences
    k = [h[:, i].tobytes() for i in range(h.shape[1])]
    # noinspection PyArgumentList
    counts = sorted(collections.Counter(k).values(), reverse=True)
    return np.asarray(counts, dtype=int)


def _haplotypes(aln, ignore_gaps):
    ingroup = _ingroup(aln)
    h = ingroup.values
    if ignore_gaps:
        h = h[ingroup.is_complete()]
    return h


def haplotype_number(aln, ignore_gaps=True):
    """Count the number of distinct haplotypes (Depaulis and Veuille 1998,
    K).

    Parameters
    ----------
    aln : AlignmentArray
    ignore_gaps : bool, optional
        If True, sites with a gap or unknown symbol in any ingroup sequence
        are removed before comparing sequences.

    Returns
    -------
    k : int

    """
    h = _haplotypes(aln, ignore_gaps)
    return len(_distinct_counts(h))


def haplotype_diversity(aln, ignore_gaps=True):
    """Estimate haplotype diversity (Depaulis and Veuille 1998, H).

    Parameters
    ----------
    aln : AlignmentArray
    ignore_gaps : bool, optional

    Returns
    -------
    hd : float

    Examples
    --------

    >>> import polystats
    >>> aln = polystats.AlignmentArray.from_sequences(['ACG', 'ACG', 'ACT', 'TCT'])
    >>> polystats.haplotype_diversity(aln)
    0.8333333333333334

    """
    h = _haplotypes(aln, ignore_gaps)
    n = h.shape[1]
    check_min_samples(n, 2)

    f = _distinct_counts(h) / n
    hd = (1 - np.sum(f**2)) * n / (n - 1)

    return float(hd)


def transition_count(aln):
    """Count transitions (A<->G, C<->T) between pairs of states observed at
    polymorphic sites, gaps excluded."""
    present = _ingroup(aln).count_states().values > 0
    n = (np.count_nonzero(present[:, A] & present[:, G]) +
         np.count_nonzero(present[:, C] & present[:, T]))
    return int(n)


def transversion_count(aln):
    """Count transversions (purine<->pyrimidine) between pairs of states
    observed at polymorphic sites, gaps excluded."""
    present = _ingroup(aln).count_states().values > 0
    n = 0
    for purine in A, G:
        for pyrimidine in C, T:
            n += np.count_nonzero(present[:, purine] & present[:, pyrimidine])
    return int(n)


def transition_transversion_ratio(aln):
    """Compute the ratio of transitions to transversions.

    Raises
    ------
    UndefinedStatisticError
        If there are no transversions.

    """
    tv = transversion_count(aln)
    check_nonzero(tv, 'number of transversions')
    return transition_count(aln) / tv
