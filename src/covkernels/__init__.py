"""covkernels: covariance kernels over scalar inputs for Gaussian-process exploration."""

# Errors
from covkernels.exceptions import (
    CovKernelsError,
    InvalidParameter,
    EmptyCombinatorInput,
    DimensionMismatch,
)

# Parameter descriptors
from covkernels.parameters import ParameterDescriptor

# Kernel functions
from covkernels.kernels import (
    Kernel,
    SquaredExponential,
    Matern12,
    Matern32,
    Matern52,
    WhiteNoise,
    Periodic,
    Linear,
    SumKernel,
    ProductKernel,
    sqexp,
    matern12,
    matern32,
    matern52,
    white,
    periodic,
    linear,
    sum_kernel,
    product_kernel,
)

# Kernel descriptors
from covkernels.descriptors import (
    KernelDescriptor,
    KERNELS,
    available_kernels,
    get_descriptor,
    make_sqexp,
    make_matern12,
    make_matern32,
    make_matern52,
    make_white,
    make_periodic,
    make_linear,
)

# Covariance matrices
from covkernels.covariance import cov_matrix, cross_cov_matrix, min_eigenvalue

__version__ = "0.1.0"

__all__ = [
    # Errors
    "CovKernelsError",
    "InvalidParameter",
    "EmptyCombinatorInput",
    "DimensionMismatch",
    # Parameters
    "ParameterDescriptor",
    # Kernels
    "Kernel",
    "SquaredExponential",
    "Matern12",
    "Matern32",
    "Matern52",
    "WhiteNoise",
    "Periodic",
    "Linear",
    "SumKernel",
    "ProductKernel",
    "sqexp",
    "matern12",
    "matern32",
    "matern52",
    "white",
    "periodic",
    "linear",
    "sum_kernel",
    "product_kernel",
    # Descriptors
    "KernelDescriptor",
    "KERNELS",
    "available_kernels",
    "get_descriptor",
    "make_sqexp",
    "make_matern12",
    "make_matern32",
    "make_matern52",
    "make_white",
    "make_periodic",
    "make_linear",
    # Covariance
    "cov_matrix",
    "cross_cov_matrix",
    "min_eigenvalue",
]
