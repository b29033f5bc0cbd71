# -*- coding: utf-8 -*-
# third-party imports
import numpy as np


# internal imports
from polystats.constants import GAP, UNKNOWN, N_NUCLEOTIDES, N_CODONS, T, \
    NUCLEOTIDES, GAP_CHARS
from polystats.errors import ArgumentError
from polystats.util import check_dtype_kind, check_ndim, asarray_ndim, \
    check_equal_length, ignore_invalid


__all__ = ['ArrayBase', 'AlignmentArray', 'CodonAlignmentArray',
           'StateCountsArray']


# lookup table from ASCII byte to nucleotide state code
_ENCODE = np.full(256, UNKNOWN, dtype='i1')
for _i, _c in enumerate(NUCLEOTIDES):
    _ENCODE[ord(_c)] = _i
    _ENCODE[ord(_c.lower())] = _i
_ENCODE[ord('U')] = T
_ENCODE[ord('u')] = T
for _c in GAP_CHARS:
    _ENCODE[ord(_c)] = GAP


class ArrayBase(object):
    """Abstract base class that wraps a NumPy array."""

    @classmethod
    def _check_values(cls, data):
        pass

    def __init__(self, data, copy=False, **kwargs):
        if copy:
            values = np.array(data, **kwargs)
        else:
            values = np.asarray(data, **kwargs)
        self._check_values(values)
        self._values = values

    @property
    def values(self):
        """The underlying array of values."""
        return self._values

    def __getattr__(self, item):
        if item == '_values':
            raise AttributeError(item)
        return getattr(self.values, item)

    def __getitem__(self, item):
        return self.values[item]

    def __iter__(self):
        return iter(self.values)

    def __len__(self):
        return len(self.values)

    def __array__(self, dtype=None, copy=None):
        a = self.values
        if dtype is not None:
            a = a.astype(dtype)
        return a

    def __str__(self):
        return str(self.values)

    def __repr__(self):
        r = '%s(%s, dtype=%s)\n' % (type(self).__name__, self.shape, self.dtype)
        r += str(self)
        return r

    def __eq__(self, other):
        return self.values == other

    def __ne__(self, other):
        return self.values != other


class AlignmentBase(ArrayBase):
    """Common functionality for alignments of nucleotide or codon states.

    The first dimension corresponds to sites, the second dimension to
    sequences. Negative values are reserved for gaps (-1) and unknown or
    ambiguous symbols (-2).

    """

    # number of valid states, set by subclasses
    n_states = None

    @classmethod
    def _check_values(cls, data):
        check_dtype_kind(data, 'i')
        check_ndim(data, 2)
        if data.size and (data.min() < UNKNOWN or data.max() >= cls.n_states):
            raise ArgumentError('state codes out of range for %s' % cls.__name__)

    def __init__(self, data, is_outgroup=None, pos=None, copy=False, **kwargs):
        super(AlignmentBase, self).__init__(data, copy=copy, **kwargs)

        # sequence classification
        if is_outgroup is None:
            is_outgroup = np.zeros(self.shape[1], dtype=bool)
        else:
            is_outgroup = asarray_ndim(is_outgroup, 1).astype(bool)
            if is_outgroup.shape[0] != self.shape[1]:
                raise ArgumentError('expected outgroup flags for %s sequences, found %s'
                                    % (self.shape[1], is_outgroup.shape[0]))
        self.is_outgroup = is_outgroup

        # site positions, 1-based
        if pos is None:
            pos = np.arange(1, self.shape[0] + 1)
        else:
            pos = asarray_ndim(pos, 1)
            if pos.shape[0] != self.shape[0]:
                raise ArgumentError('expected %s positions, found %s'
                                    % (self.shape[0], pos.shape[0]))
            if pos.shape[0] > 1 and np.any(np.diff(pos) <= 0):
                raise ArgumentError('positions must be strictly increasing')
        self.pos = pos

    @property
    def n_sites(self):
        """Number of sites."""
        return self.shape[0]

    @property
    def n_sequences(self):
        """Number of sequences, ingroup and outgroup."""
        return self.shape[1]

    @property
    def n_ingroup(self):
        """Number of ingroup sequences."""
        return int(np.count_nonzero(~self.is_outgroup))

    @property
    def n_outgroup(self):
        """Number of outgroup sequences."""
        return int(np.count_nonzero(self.is_outgroup))

    def take(self, indices, axis=1):
        """Take a subset of sequences (axis=1) or sites (axis=0)."""
        indices = np.asarray(indices)
        data = np.take(self.values, indices, axis=axis)
        if axis == 1:
            return type(self)(data, is_outgroup=self.is_outgroup[indices],
                              pos=self.pos.copy())
        return type(self)(data, is_outgroup=self.is_outgroup.copy(),
                          pos=self.pos[indices])

    def compress(self, condition, axis=0):
        """Select sites (axis=0) or sequences (axis=1) where `condition` is
        True."""
        indices = np.nonzero(np.asarray(condition, dtype=bool))[0]
        return self.take(indices, axis=axis)

    def ingroup(self):
        """Return a new alignment holding only the ingroup sequences."""
        return self.compress(~self.is_outgroup, axis=1)

    def outgroup(self):
        """Return a new alignment holding only the outgroup sequences."""
        return self.compress(self.is_outgroup, axis=1)

    def is_gap(self):
        return self.values == GAP

    def is_unknown(self):
        return self.values == UNKNOWN

    def is_missing(self):
        """Gap or unknown."""
        return self.values < 0

    def is_complete(self):
        """Find sites without any gap or unknown symbol.

        Returns
        -------
        out : ndarray, bool, shape (n_sites,)

        """
        return ~np.any(self.is_missing(), axis=1)

    def count_states(self, ignore_gaps=True):
        """Count the number of sequences carrying each state at each site.

        Parameters
        ----------
        ignore_gaps : bool, optional
            If False, gaps are counted as an additional state, held in the
            last column. Unknown symbols are never counted.

        Returns
        -------
        ac : StateCountsArray, int, shape (n_sites, n_states[+1])

        Examples
        --------

        >>> import polystats
        >>> aln = polystats.AlignmentArray.from_sequences(['AAC', 'AG-', 'TGC'])
        >>> aln.count_states()
        StateCountsArray((3, 4), dtype=int32)
        [[2 0 0 1]
         [1 0 2 0]
         [0 2 0 0]]

        """

        n_cols = self.n_states if ignore_gaps else self.n_states + 1
        ac = np.zeros((self.shape[0], n_cols), dtype='i4')
        for state in range(self.n_states):
            np.sum(self.values == state, axis=1, out=ac[:, state])
        if not ignore_gaps:
            np.sum(self.values == GAP, axis=1, out=ac[:, -1])

        return StateCountsArray(ac)


class AlignmentArray(AlignmentBase):
    """Alignment of nucleotide sequences.

    Parameters
    ----------
    data : array_like, int, shape (n_sites, n_sequences)
        Nucleotide state codes, A=0, C=1, G=2, T=3, gap=-1, unknown=-2.
    is_outgroup : array_like, bool, shape (n_sequences,), optional
        Flags sequences belonging to the outgroup. By default all sequences
        are ingroup.
    pos : array_like, int, shape (n_sites,), optional
        Site positions, 1-based, strictly increasing.

    Examples
    --------

    >>> import polystats
    >>> aln = polystats.AlignmentArray.from_sequences(
    ...     ['ACGT', 'ACGA', 'TCGA'], outgroup=[2])
    >>> aln.n_sites, aln.n_sequences, aln.n_ingroup
    (4, 3, 2)
    >>> aln.ingroup().to_strings()
    ['ACGT', 'ACGA']

    """

    n_states = N_NUCLEOTIDES

    def __init__(self, data, is_outgroup=None, pos=None, copy=False, **kwargs):
        kwargs.setdefault('dtype', 'i1')
        super(AlignmentArray, self).__init__(data, is_outgroup=is_outgroup,
                                             pos=pos, copy=copy, **kwargs)

    @classmethod
    def from_sequences(cls, seqs, outgroup=None, pos=None):
        """Build an alignment from aligned sequences.

        Parameters
        ----------
        seqs : sequence of str
            Aligned sequences, all of the same length. Any object whose
            ``str()`` gives the sequence letters is accepted.
        outgroup : sequence of int, optional
            Indices of outgroup sequences.
        pos : array_like, int, optional
            Site positions.

        Returns
        -------
        aln : AlignmentArray

        """
        seqs = [str(s) for s in seqs]
        if len(seqs) == 0:
            raise ArgumentError('no sequences')
        check_equal_length(*seqs)
        try:
            encoded = [s.encode('ascii') for s in seqs]
        except UnicodeEncodeError:
            raise ArgumentError('sequences must be ASCII')
        raw = np.array([np.frombuffer(s, dtype='u1')
                        for s in encoded]).reshape(len(seqs), len(seqs[0]))
        data = _ENCODE[raw].T
        is_outgroup = np.zeros(len(seqs), dtype=bool)
        if outgroup is not None:
            is_outgroup[list(outgroup)] = True
        return cls(data, is_outgroup=is_outgroup, pos=pos)

    def to_strings(self):
        """Decode sequences as strings, with 'N' for unknown symbols."""
        letters = np.array(list(NUCLEOTIDES + 'N-'))
        # gap (-1) and unknown (-2) index from the end
        return [''.join(letters[self.values[:, j]])
                for j in range(self.shape[1])]

    def to_codons(self):
        """Reinterpret consecutive triplets of sites as codons.

        Returns
        -------
        codons : CodonAlignmentArray, shape (n_sites // 3, n_sequences)

        """
        if self.shape[0] % 3 != 0:
            raise ArgumentError('number of sites (%s) is not a multiple of 3'
                                % self.shape[0])
        v = self.values.reshape(self.shape[0] // 3, 3, self.shape[1])
        v = v.astype('i2')
        codes = 16 * v[:, 0] + 4 * v[:, 1] + v[:, 2]
        is_valid = np.all(v >= 0, axis=1)
        is_all_gap = np.all(v == GAP, axis=1)
        codes = np.where(is_valid, codes, np.where(is_all_gap, GAP, UNKNOWN))
        return CodonAlignmentArray(codes, is_outgroup=self.is_outgroup.copy(),
                                   pos=self.pos[::3].copy())


class CodonAlignmentArray(AlignmentBase):
    """Alignment of codon sequences.

    Parameters
    ----------
    data : array_like, int, shape (n_sites, n_sequences)
        Codon state codes ``16 * n1 + 4 * n2 + n3`` where n1, n2, n3 are the
        nucleotide codes of the three codon positions; gap=-1, unknown=-2.
    is_outgroup : array_like, bool, shape (n_sequences,), optional
    pos : array_like, int, shape (n_sites,), optional

    """

    n_states = N_CODONS

    def __init__(self, data, is_outgroup=None, pos=None, copy=False, **kwargs):
        kwargs.setdefault('dtype', 'i1')
        super(CodonAlignmentArray, self).__init__(data, is_outgroup=is_outgroup,
                                                  pos=pos, copy=copy, **kwargs)

    def to_strings(self):
        from polystats.model.codon import codon_to_string
        out = []
        for j in range(self.shape[1]):
            s = ''
            for code in self.values[:, j]:
                if code == GAP:
                    s += '---'
                elif code == UNKNOWN:
                    s += 'NNN'
                else:
                    s += codon_to_string(code)
            out.append(s)
        return out


class StateCountsArray(ArrayBase):
    """Array of state counts.

    Parameters
    ----------
    data : array_like, int, shape (n_sites, n_states)
        State counts data.

    Examples
    --------

    >>> import polystats
    >>> ac = polystats.StateCountsArray([[3, 1, 0, 0],
    ...                                  [2, 0, 2, 0],
    ...                                  [4, 0, 0, 0]])
    >>> ac.allelism()
    array([2, 2, 1])
    >>> ac.singleton_count()
    array([1, 0, 0])

    """

    @classmethod
    def _check_values(cls, data):
        check_dtype_kind(data, 'u', 'i')
        check_ndim(data, 2)

    def __init__(self, data, copy=False, **kwargs):
        super(StateCountsArray, self).__init__(data, copy=copy, **kwargs)

    @property
    def n_sites(self):
        """Number of sites."""
        return self.shape[0]

    @property
    def n_states(self):
        """Number of states counted."""
        return self.shape[1]

    def n_observed(self):
        """Number of counted symbols per site."""
        return np.sum(self.values, axis=1)

    def allelism(self):
        """Number of distinct states observed per site."""
        return np.sum(self.values > 0, axis=1)

    def is_polymorphic(self):
        return self.allelism() > 1

    def is_biallelic(self):
        return self.allelism() == 2

    def singleton_count(self):
        """Number of states observed exactly once per site."""
        return np.sum(self.values == 1, axis=1)

    def is_parsimony_informative(self):
        """Find sites where at least two states are each observed at least
        twice."""
        return np.sum(self.values >= 2, axis=1) >= 2

    def to_frequencies(self, fill=np.nan):
        """Compute state frequencies.

        Parameters
        ----------
        fill : float, optional
            Value to use when number of observed symbols is zero.

        Returns
        -------
        af : ndarray, float, shape (n_sites, n_states)

        """

        an = self.n_observed()[:, None]
        with ignore_invalid():
            af = np.where(an > 0, self.values / an, fill)

        return af
