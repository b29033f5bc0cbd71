# -*- coding: utf-8 -*-
# flake8: noqa


from . import ndarray
from .ndarray import *
from . import codon
from .codon import GeneticCode, standard_code
