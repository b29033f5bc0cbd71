# -*- coding: utf-8 -*-
# flake8: noqa
"""
This sub-package provides summary statistics for use with sequence alignments.

"""


from polystats.stats.sites import mutation_count, singleton_count, \
    is_polymorphic, useful_values, UsefulValues

from polystats.stats.diversity import polymorphic_site_number, \
    parsimony_informative_site_number, count_singletons, \
    total_number_mutations, triplet_number, gc_content, gc_polymorphism, \
    watterson_theta, tajima_theta, tajima_d, tajima_d_total_mutations, \
    external_mutations, fu_li_d, fu_li_d_star, fu_li_f, fu_li_f_star, \
    haplotype_number, haplotype_diversity, transition_count, \
    transversion_count, transition_transversion_ratio

from polystats.stats.codon import stop_codon_site_number, \
    mono_site_polymorphic_codon_number, synonymous_polymorphic_codon_number, \
    non_synonymous_polymorphic_codon_number, synonymous_differences, \
    pi_synonymous, pi_non_synonymous, synonymous_positions, \
    mean_synonymous_sites_number, mean_non_synonymous_sites_number

from polystats.stats.ld import LDContainer, generate_ld_container, \
    pairwise_distances1, pairwise_distances2, pairwise_d, pairwise_d_prime, \
    pairwise_r2, mean_d, mean_d_prime, mean_r2, mean_distance1, \
    mean_distance2, linear_regression, origin_regression, inverse_regression, \
    linear_regression_d, linear_regression_d_prime, linear_regression_r2, \
    origin_regression_d, origin_regression_d_prime, origin_regression_r2, \
    inverse_regression_r2
