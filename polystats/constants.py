# -*- coding: utf-8 -*-

# nucleotide state codes
A = 0
C = 1
G = 2
T = 3
N_NUCLEOTIDES = 4

# codes for non-nucleotide symbols
GAP = -1
UNKNOWN = -2

# codon codes are 16 * n1 + 4 * n2 + n3
N_CODONS = 64

# symbols
NUCLEOTIDES = 'ACGT'
GAP_CHARS = '-.'

# regression slopes are reported per kilobase
KB = 1000
