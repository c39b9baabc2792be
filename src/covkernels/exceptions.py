"""Exceptions raised by covkernels."""


class CovKernelsError(Exception):
    """Base class for all covkernels errors."""


class InvalidParameter(CovKernelsError, ValueError):
    """A kernel hyperparameter is below its lower bound, NaN, or unknown."""


class EmptyCombinatorInput(CovKernelsError, ValueError):
    """A sum or product kernel was requested over zero kernels."""


class DimensionMismatch(CovKernelsError, ValueError):
    """Input locations or matrices have the wrong shape."""
