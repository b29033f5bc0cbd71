# -*- coding: utf-8 -*-
"""Genetic code tables, using Biopython's NCBI codon tables."""
import numpy as np
from Bio.Data import CodonTable


from polystats.constants import NUCLEOTIDES, N_CODONS
from polystats.errors import ArgumentError


__all__ = ['GeneticCode', 'standard_code', 'codon_to_string',
           'codon_from_string', 'split_codon', 'join_codon', 'is_transition']


def codon_to_string(code):
    """Convert a codon code to a three letter string.

    >>> codon_to_string(14)
    'ATG'

    """
    n1, n2, n3 = split_codon(code)
    return NUCLEOTIDES[n1] + NUCLEOTIDES[n2] + NUCLEOTIDES[n3]


def codon_from_string(codon):
    codon = codon.upper().replace('U', 'T')
    if len(codon) != 3 or any(c not in NUCLEOTIDES for c in codon):
        raise ArgumentError('cannot classify codon %r' % codon)
    return join_codon(*[NUCLEOTIDES.index(c) for c in codon])


def split_codon(code):
    """Nucleotide codes at the three positions of a codon."""
    code = int(code)
    if code < 0 or code >= N_CODONS:
        raise ArgumentError('cannot classify codon with code %s' % code)
    return code // 16, (code // 4) % 4, code % 4


def join_codon(n1, n2, n3):
    return 16 * n1 + 4 * n2 + n3


def is_transition(x, y):
    """True if a change between nucleotides `x` and `y` is a transition
    (A<->G or C<->T)."""
    # purines have even codes, pyrimidines odd
    return x != y and (x - y) % 2 == 0


class GeneticCode(object):
    """Genetic code backed by an NCBI translation table.

    Parameters
    ----------
    ncbi_id : int, optional
        NCBI genetic code table ID, 1 (standard code) by default.

    Examples
    --------

    >>> from polystats.model.codon import GeneticCode
    >>> gc = GeneticCode()
    >>> gc.translate('ATG')
    'M'
    >>> gc.is_stop('TAA')
    True
    >>> gc.are_synonymous('CTT', 'CTC')
    True

    """

    def __init__(self, ncbi_id=1):
        try:
            table = CodonTable.unambiguous_dna_by_id[ncbi_id]
        except KeyError:
            raise ArgumentError('unknown NCBI genetic code: %r' % ncbi_id)
        self.ncbi_id = ncbi_id
        self.name = table.names[0]

        # amino acid per codon code, '*' for stops
        aa = []
        for code in range(N_CODONS):
            codon = codon_to_string(code)
            if codon in table.stop_codons:
                aa.append('*')
            else:
                aa.append(table.forward_table[codon])
        self._amino_acids = np.array(aa)
        self._is_stop = self._amino_acids == '*'

    def __repr__(self):
        return 'GeneticCode(ncbi_id=%r)' % self.ncbi_id

    @staticmethod
    def _code(codon):
        if isinstance(codon, str):
            return codon_from_string(codon)
        split_codon(codon)
        return int(codon)

    @property
    def amino_acids(self):
        """Amino acid for each of the 64 codon codes, '*' for stops."""
        return self._amino_acids

    @property
    def stop_mask(self):
        """Boolean array over the 64 codon codes flagging stop codons."""
        return self._is_stop

    def translate(self, codon):
        return str(self._amino_acids[self._code(codon)])

    def is_stop(self, codon):
        return bool(self._is_stop[self._code(codon)])

    def are_synonymous(self, a, b):
        return self.translate(a) == self.translate(b)


_standard_code = None


def standard_code():
    """The standard genetic code (NCBI table 1), shared instance."""
    global _standard_code
    if _standard_code is None:
        _standard_code = GeneticCode(1)
    return _standard_code
