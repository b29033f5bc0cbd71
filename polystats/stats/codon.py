# -*- coding: utf-8 -*-
import itertools
import logging


import numpy as np


from polystats.constants import UNKNOWN
from polystats.errors import ArgumentError
from polystats.model.ndarray import AlignmentArray, CodonAlignmentArray
from polystats.model.codon import standard_code, split_codon, join_codon, \
    is_transition
from polystats.util import check_type, check_min_samples


logger = logging.getLogger(__name__)
debug = logger.debug


def _as_codons(aln):
    if isinstance(aln, CodonAlignmentArray):
        return aln.ingroup()
    check_type(aln, AlignmentArray)
    return aln.ingroup().to_codons()


def _codon_sites(aln, code, ignore_stops, strict=False):
    """Ingroup codon states at complete sites, shape (n_sites, n_sequences)."""
    h = _as_codons(aln).values
    if strict and np.any(h == UNKNOWN):
        raise ArgumentError('genetic code cannot classify codons with '
                            'unknown or ambiguous nucleotides')
    loc = ~np.any(h < 0, axis=1)
    if ignore_stops:
        is_stop = code.stop_mask[np.where(h >= 0, h, 0)]
        loc &= ~np.any(is_stop, axis=1)
    debug('%s of %s codon sites retained', np.count_nonzero(loc), h.shape[0])
    return h[loc]


def _n_varying_positions(h):
    n = np.zeros(h.shape[0], dtype=int)
    for p in h // 16, (h // 4) % 4, h % 4:
        n += np.min(p, axis=1) != np.max(p, axis=1)
    return n


def stop_codon_site_number(aln, genetic_code=None):
    """Count codon sites where at least one ingroup sequence carries a stop
    codon.

    Parameters
    ----------
    aln : AlignmentArray or CodonAlignmentArray
        Nucleotide alignments are read as consecutive codons.
    genetic_code : GeneticCode, optional
        Defaults to the standard code.

    Returns
    -------
    n : int

    """
    code = genetic_code or standard_code()
    h = _as_codons(aln).values
    is_stop = (h >= 0) & code.stop_mask[np.where(h >= 0, h, 0)]
    return int(np.count_nonzero(np.any(is_stop, axis=1)))


def mono_site_polymorphic_codon_number(aln, genetic_code=None, ignore_stops=True):
    """Count polymorphic codon sites where only one of the three codon
    positions varies.

    Parameters
    ----------
    aln : AlignmentArray or CodonAlignmentArray
    genetic_code : GeneticCode, optional
    ignore_stops : bool, optional
        If True, skip sites containing a stop codon.

    Returns
    -------
    n : int

    """
    code = genetic_code or standard_code()
    h = _codon_sites(aln, code, ignore_stops)
    return int(np.count_nonzero(_n_varying_positions(h) == 1))


def _mono_site_synonymy(aln, code, ignore_stops):
    h = _codon_sites(aln, code, ignore_stops)
    h = h[_n_varying_positions(h) == 1]
    aa = code.amino_acids[h]
    return np.all(aa == aa[:, :1], axis=1)


def synonymous_polymorphic_codon_number(aln, genetic_code=None,
                                        ignore_stops=True):
    """Count mono-site polymorphic codon sites where all codons encode the
    same amino acid.

    Examples
    --------

    >>> import polystats
    >>> aln = polystats.AlignmentArray.from_sequences(['CTTATG',
    ...                                                'CTCATG',
    ...                                                'CTCGTG'])
    >>> polystats.synonymous_polymorphic_codon_number(aln)
    1
    >>> polystats.non_synonymous_polymorphic_codon_number(aln)
    1

    """
    code = genetic_code or standard_code()
    return int(np.count_nonzero(_mono_site_synonymy(aln, code, ignore_stops)))


def non_synonymous_polymorphic_codon_number(aln, genetic_code=None,
                                            ignore_stops=True):
    """Count mono-site polymorphic codon sites where the change alters the
    encoded amino acid."""
    code = genetic_code or standard_code()
    return int(np.count_nonzero(~_mono_site_synonymy(aln, code, ignore_stops)))


def synonymous_differences(a, b, genetic_code=None, min_change=False):
    """Number of synonymous changes between two codons.

    Where the codons differ at more than one position, every order of
    single nucleotide changes is a possible path; paths through an
    intermediate stop codon are discarded.

    Parameters
    ----------
    a, b : int
        Codon codes.
    genetic_code : GeneticCode, optional
    min_change : bool, optional
        If True, use the path with the fewest non-synonymous changes,
        otherwise average over all paths.

    Returns
    -------
    n : float

    Examples
    --------

    >>> from polystats.model.codon import codon_from_string as c
    >>> synonymous_differences(c('CTT'), c('CTC'))
    1.0
    >>> synonymous_differences(c('TTA'), c('ATG'))
    0.5
    >>> synonymous_differences(c('TTA'), c('ATG'), min_change=True)
    1.0

    """
    code = genetic_code or standard_code()
    ca = split_codon(a)
    cb = split_codon(b)
    diff = [p for p in range(3) if ca[p] != cb[p]]
    if not diff:
        return 0.

    paths = []
    for order in itertools.permutations(diff):
        current = list(ca)
        prev = int(a)
        n_syn = 0
        for k, p in enumerate(order):
            current[p] = cb[p]
            step = join_codon(*current)
            if k < len(order) - 1 and code.is_stop(step):
                break
            if code.are_synonymous(prev, step):
                n_syn += 1
            prev = step
        else:
            paths.append(n_syn)

    if not paths:
        return 0.
    if min_change:
        return float(max(paths))
    return float(np.mean(paths))


def _pi(aln, code, ignore_stops, min_change, synonymous):
    h = _codon_sites(aln, code, ignore_stops)
    n = h.shape[1]
    check_min_samples(n, 2)

    cache = dict()
    pi = 0.
    for row in h:
        states, counts = np.unique(row, return_counts=True)
        if states.shape[0] < 2:
            continue
        f = counts / n
        for i, j in itertools.combinations(range(states.shape[0]), 2):
            key = states[i], states[j]
            if key not in cache:
                syn = synonymous_differences(key[0], key[1], code, min_change)
                if not synonymous:
                    n_diff = sum(x != y for x, y in zip(split_codon(key[0]),
                                                        split_codon(key[1])))
                    syn = n_diff - syn
                cache[key] = syn
            # ordered pairs, both directions
            pi += 2 * f[i] * f[j] * cache[key]

    return pi * n / (n - 1)


def pi_synonymous(aln, genetic_code=None, ignore_stops=True, min_change=False):
    """Compute synonymous nucleotide diversity, summed over codon sites.

    For each site, adds :math:`\\frac{n}{n-1} \\sum_{i,j} f_i f_j s_{ij}`
    where :math:`f_i` are codon frequencies and :math:`s_{ij}` the number of
    synonymous differences between codons i and j.

    Parameters
    ----------
    aln : AlignmentArray or CodonAlignmentArray
    genetic_code : GeneticCode, optional
    ignore_stops : bool, optional
        If True, skip sites containing a stop codon.
    min_change : bool, optional
        See :func:`synonymous_differences`.

    Returns
    -------
    pi_s : float

    """
    code = genetic_code or standard_code()
    return _pi(aln, code, ignore_stops, min_change, synonymous=True)


def pi_non_synonymous(aln, genetic_code=None, ignore_stops=True,
                      min_change=False):
    """Compute non-synonymous nucleotide diversity, summed over codon sites.
    See :func:`pi_synonymous`."""
    code = genetic_code or standard_code()
    return _pi(aln, code, ignore_stops, min_change, synonymous=False)


def synonymous_positions(codon, genetic_code=None, ratio=1.):
    """Number of synonymous positions of a codon.

    Each of the nine single nucleotide neighbours contributes its weight if
    it encodes the same amino acid. Per position the transition neighbour
    weighs ``ratio / (ratio + 2)`` and each transversion neighbour
    ``1 / (ratio + 2)``. Stop codons and stop neighbours contribute nothing.

    Parameters
    ----------
    codon : int
        Codon code.
    genetic_code : GeneticCode, optional
    ratio : float, optional
        Transition/transversion ratio; 1 means all changes equally likely.

    Returns
    -------
    s : float

    Examples
    --------

    >>> from polystats.model.codon import codon_from_string as c
    >>> synonymous_positions(c('ATG'))
    0.0
    >>> synonymous_positions(c('GGG'))
    1.0

    """
    code = genetic_code or standard_code()
    if ratio < 0:
        raise ArgumentError('ratio must be non-negative, found %s' % ratio)
    if code.is_stop(codon):
        return 0.
    c = split_codon(codon)
    aa = code.translate(codon)
    s = 0.
    for p in range(3):
        for x in range(4):
            if x == c[p]:
                continue
            mutant = list(c)
            mutant[p] = x
            m = join_codon(*mutant)
            if code.is_stop(m) or code.translate(m) != aa:
                continue
            if is_transition(c[p], x):
                s += ratio / (ratio + 2)
            else:
                s += 1 / (ratio + 2)
    return s


def _mean_synonymous_positions(aln, code, ratio, ignore_stops):
    h = _codon_sites(aln, code, ignore_stops, strict=True)
    table = np.array([synonymous_positions(c, code, ratio) for c in range(64)])
    return np.mean(table[h], axis=1)


def mean_synonymous_sites_number(aln, genetic_code=None, ratio=1.,
                                 ignore_stops=True):
    """Compute the number of synonymous sites, averaged over ingroup codons at
    each codon site and summed over sites.

    Parameters
    ----------
    aln : AlignmentArray or CodonAlignmentArray
        Sites containing a gap are skipped.
    genetic_code : GeneticCode, optional
    ratio : float, optional
        Transition/transversion ratio, see :func:`synonymous_positions`.
    ignore_stops : bool, optional

    Returns
    -------
    s : float

    Raises
    ------
    ArgumentError
        If a codon contains an unknown or ambiguous nucleotide.

    """
    code = genetic_code or standard_code()
    return float(np.sum(_mean_synonymous_positions(aln, code, ratio,
                                                   ignore_stops)))


def mean_non_synonymous_sites_number(aln, genetic_code=None, ratio=1.,
                                     ignore_stops=True):
    """Compute the number of non-synonymous sites, i.e., three per codon site
    less the synonymous sites. See :func:`mean_synonymous_sites_number`."""
    code = genetic_code or standard_code()
    s = _mean_synonymous_positions(aln, code, ratio, ignore_stops)
    return float(np.sum(3 - s))
