# -*- coding: utf-8 -*-


class DomainError(ValueError):
    """Base class for errors raised when computing a statistic."""
    pass


class ArgumentError(DomainError):
    """Raised on malformed input, e.g., sequences of unequal length, a sample
    too small for the requested statistic or a missing outgroup."""
    pass


class UndefinedStatisticError(DomainError):
    """Raised when a statistic is mathematically undefined for the given
    data, e.g., a zero variance denominator."""
    pass
