# -*- coding: utf-8 -*-
import unittest


import pytest
from pytest import approx
import numpy as np


import polystats
from polystats import AlignmentArray, ArgumentError, UndefinedStatisticError


# two polymorphic sites with state counts (3, 1) and (2, 2)
SEQS = ['AACGT',
        'AACGT',
        'AGCGT',
        'CGCGT']


class TestSiteCounts(unittest.TestCase):

    def setUp(self):
        self.aln = AlignmentArray.from_sequences(SEQS)

    def test_polymorphic_site_number(self):
        assert 2 == polystats.polymorphic_site_number(self.aln)
        aln = AlignmentArray.from_sequences(['AA', 'A-', 'AA'])
        assert 0 == polystats.polymorphic_site_number(aln)
        assert 1 == polystats.polymorphic_site_number(aln, ignore_gaps=False)

    def test_parsimony_informative_site_number(self):
        assert 1 == polystats.parsimony_informative_site_number(self.aln)

    def test_count_singletons(self):
        assert 1 == polystats.count_singletons(self.aln)

    def test_total_number_mutations(self):
        assert 2 == polystats.total_number_mutations(self.aln)
        aln = AlignmentArray.from_sequences(['AA', 'CA', 'GA', 'GA'])
        assert 2 == polystats.total_number_mutations(aln)
        assert 1 == polystats.triplet_number(aln)
        assert 0 == polystats.triplet_number(self.aln)

    def test_outgroup_excluded(self):
        aln = AlignmentArray.from_sequences(SEQS + ['TTTTT'], outgroup=[4])
        assert 2 == polystats.polymorphic_site_number(aln)
        assert 2 == polystats.total_number_mutations(aln)

    def test_bad_argument(self):
        with pytest.raises(ArgumentError):
            polystats.polymorphic_site_number(SEQS)


class TestGC(unittest.TestCase):

    def test_gc_content(self):
        aln = AlignmentArray.from_sequences(SEQS)
        assert approx(11 / 20) == polystats.gc_content(aln)
        # gaps and unknown symbols excluded
        aln = AlignmentArray.from_sequences(['GC-N', 'ATAT'])
        assert approx(2 / 6) == polystats.gc_content(aln)
        with pytest.raises(UndefinedStatisticError):
            polystats.gc_content(AlignmentArray.from_sequences(['--', 'NN']))

    def test_gc_content_range(self):
        rng = np.random.RandomState(42)
        data = rng.randint(-2, 4, size=(100, 10)).astype('i1')
        gc = polystats.gc_content(AlignmentArray(data))
        assert 0 <= gc <= 1

    def test_gc_polymorphism(self):
        aln = AlignmentArray.from_sequences(SEQS)
        assert (3, 8) == polystats.gc_polymorphism(aln)
        # C/G and A/T polymorphisms do not change GC content
        aln = AlignmentArray.from_sequences(['CA', 'GT', 'GT'])
        assert (0, 0) == polystats.gc_polymorphism(aln)
        # incomplete sites skipped
        aln = AlignmentArray.from_sequences(['AA', 'C-', 'CC'])
        assert (2, 3) == polystats.gc_polymorphism(aln)


class TestTheta(unittest.TestCase):

    def test_watterson_theta(self):
        aln = AlignmentArray.from_sequences(SEQS)
        v = polystats.useful_values(4)
        assert approx(2 / v.a1) == polystats.watterson_theta(aln)
        assert approx(12 / 11) == polystats.watterson_theta(aln)

    def test_watterson_theta_no_polymorphism(self):
        aln = AlignmentArray.from_sequences(['ACGT'] * 3)
        assert 0. == polystats.watterson_theta(aln)
        with pytest.raises(ArgumentError):
            polystats.watterson_theta(AlignmentArray.from_sequences(['ACGT']))

    def test_tajima_theta(self):
        aln = AlignmentArray.from_sequences(SEQS)
        assert approx(.5 + 2 / 3) == polystats.tajima_theta(aln)
        aln = AlignmentArray.from_sequences(['ACGT'] * 3)
        assert 0. == polystats.tajima_theta(aln)

    def test_tajima_theta_gaps(self):
        aln = AlignmentArray.from_sequences(['A', 'A', '-', 'C'])
        assert approx(2 / 3) == polystats.tajima_theta(aln)
        assert approx(5 / 6) == polystats.tajima_theta(aln, ignore_gaps=False)

    def test_tajima_theta_sequence_order(self):
        rng = np.random.RandomState(42)
        data = rng.randint(-1, 4, size=(50, 8)).astype('i1')
        expect = polystats.tajima_theta(AlignmentArray(data))
        for _ in range(5):
            idx = rng.permutation(8)
            actual = polystats.tajima_theta(AlignmentArray(data[:, idx]))
            assert approx(expect) == actual


class TestTajimaD(unittest.TestCase):

    def test_tajima_d(self):
        aln = AlignmentArray.from_sequences(SEQS)
        assert approx(0.592, 0.01) == polystats.tajima_d(aln)
        # bi-allelic sites only, S and eta agree
        assert approx(polystats.tajima_d(aln)) == \
            polystats.tajima_d_total_mutations(aln)

    def test_tajima_d_no_polymorphism(self):
        aln = AlignmentArray.from_sequences(['ACGT'] * 4)
        with pytest.raises(UndefinedStatisticError):
            polystats.tajima_d(aln)
        with pytest.raises(UndefinedStatisticError):
            polystats.tajima_d_total_mutations(aln)

    def test_tajima_d_total_mutations(self):
        aln = AlignmentArray.from_sequences(['AA', 'CA', 'GA', 'GC'])
        v = polystats.useful_values(4)
        eta = 3
        theta_pi = polystats.tajima_theta(aln)
        var = v.e1 * eta + v.e2 * eta * (eta - 1)
        expect = (theta_pi - eta / v.a1) / np.sqrt(var)
        assert approx(expect) == polystats.tajima_d_total_mutations(aln)


class TestFuLi(unittest.TestCase):

    def setUp(self):
        self.aln = AlignmentArray.from_sequences(SEQS + ['AACGT'], outgroup=[4])

    def test_external_mutations(self):
        assert 1 == polystats.external_mutations(self.aln)
        # outgroup given separately
        outgroup = AlignmentArray.from_sequences(['CACGT'])
        aln = AlignmentArray.from_sequences(SEQS)
        assert 0 == polystats.external_mutations(aln, outgroup)
        # site without outgroup call skipped
        outgroup = AlignmentArray.from_sequences(['NACGT'])
        assert 0 == polystats.external_mutations(aln, outgroup)

    def test_external_mutations_errors(self):
        aln = AlignmentArray.from_sequences(SEQS)
        with pytest.raises(ArgumentError):
            polystats.external_mutations(aln)
        with pytest.raises(ArgumentError):
            polystats.external_mutations(aln, AlignmentArray.from_sequences(['AAC']))

    def test_fu_li_d(self):
        assert approx(0.12007, 1e-3) == polystats.fu_li_d(self.aln)

    def test_fu_li_f(self):
        assert approx(0.21313, 1e-3) == polystats.fu_li_f(self.aln)

    def test_fu_li_d_star(self):
        assert approx(0.59158, 1e-3) == polystats.fu_li_d_star(self.aln)

    def test_fu_li_f_star(self):
        assert approx(0.50356, 1e-3) == polystats.fu_li_f_star(self.aln)

    def test_return_types(self):
        for f in (polystats.tajima_d, polystats.tajima_d_total_mutations,
                  polystats.fu_li_d, polystats.fu_li_d_star,
                  polystats.fu_li_f, polystats.fu_li_f_star):
            assert type(f(self.aln)) is float

    def test_outgroup_required(self):
        aln = AlignmentArray.from_sequences(SEQS)
        with pytest.raises(ArgumentError):
            polystats.fu_li_d(aln)
        with pytest.raises(ArgumentError):
            polystats.fu_li_f(aln)

    def test_small_samples(self):
        aln = AlignmentArray.from_sequences(['AC', 'AG', 'AC'], outgroup=[2])
        for f in (polystats.fu_li_d, polystats.fu_li_d_star,
                  polystats.fu_li_f, polystats.fu_li_f_star):
            with pytest.raises(ArgumentError):
                f(aln)

    def test_no_polymorphism(self):
        aln = AlignmentArray.from_sequences(['ACGT'] * 5, outgroup=[4])
        for f in (polystats.fu_li_d, polystats.fu_li_d_star,
                  polystats.fu_li_f, polystats.fu_li_f_star):
            with pytest.raises(UndefinedStatisticError):
                f(aln)


class TestHaplotypes(unittest.TestCase):

    def test_haplotype_number(self):
        aln = AlignmentArray.from_sequences(SEQS)
        assert 3 == polystats.haplotype_number(aln)
        aln = AlignmentArray.from_sequences(['ACGT'] * 3)
        assert 1 == polystats.haplotype_number(aln)

    def test_haplotype_number_gaps(self):
        aln = AlignmentArray.from_sequences(['AC-', 'ACG', 'TCG'])
        assert 2 == polystats.haplotype_number(aln)
        assert 3 == polystats.haplotype_number(aln, ignore_gaps=False)

    def test_haplotype_diversity(self):
        aln = AlignmentArray.from_sequences(SEQS)
        assert approx((1 - (.25 + 1/16 + 1/16)) * 4 / 3) == \
            polystats.haplotype_diversity(aln)
        aln = AlignmentArray.from_sequences(['ACGT'] * 3)
        assert 0. == polystats.haplotype_diversity(aln)
        aln = AlignmentArray.from_sequences(['ACGT', 'ACGA'])
        assert approx(1.) == polystats.haplotype_diversity(aln)
        with pytest.raises(ArgumentError):
            polystats.haplotype_diversity(AlignmentArray.from_sequences(['ACGT']))


class TestSubstitutions(unittest.TestCase):

    def test_transitions_transversions(self):
        aln = AlignmentArray.from_sequences(SEQS)
        assert 1 == polystats.transition_count(aln)
        assert 1 == polystats.transversion_count(aln)
        assert approx(1.) == polystats.transition_transversion_ratio(aln)

    def test_multiple_states(self):
        # A/C/G at one site: A-G transition, A-C and C-G transversions
        aln = AlignmentArray.from_sequences(['A', 'C', 'G', '-'])
        assert 1 == polystats.transition_count(aln)
        assert 2 == polystats.transversion_count(aln)
        assert approx(.5) == polystats.transition_transversion_ratio(aln)

    def test_no_transversions(self):
        aln = AlignmentArray.from_sequences(['AC', 'GT'])
        assert 2 == polystats.transition_count(aln)
        with pytest.raises(UndefinedStatisticError):
            polystats.transition_transversion_ratio(aln)
