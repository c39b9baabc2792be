"""Covariance matrix assembly."""

from __future__ import annotations

from typing import Sequence

import numpy as np
from scipy.linalg import eigvalsh

from covkernels.exceptions import DimensionMismatch
from covkernels.kernels import KernelFunction


def _as_locations(xs: Sequence[float], name: str = "xs") -> np.ndarray:
    locations = np.asarray(xs, dtype=float)
    if locations.ndim != 1:
        raise DimensionMismatch(
            f"{name} must be a 1-D sequence of scalars, got shape {locations.shape}"
        )
    return locations


def cov_matrix(kernel: KernelFunction, xs: Sequence[float]) -> np.ndarray:
    """Compute the covariance matrix of a kernel over a set of locations.

    Only the upper triangle (including the diagonal) is evaluated; it is
    mirrored into the lower triangle. The kernel is assumed to be symmetric
    and this is not checked.

    Parameters
    ----------
    kernel : callable
        Kernel function ``(x1, x2) -> float``.
    xs : sequence of float
        Input locations, length n.

    Returns
    -------
    np.ndarray
        Covariance matrix, shape (n, n).

    Raises
    ------
    DimensionMismatch
        If ``xs`` is not one-dimensional.

    Examples
    --------
    >>> from covkernels import sqexp
    >>> K = cov_matrix(sqexp(1.0, 1.0), [0.0, 1.0, 2.0])
    >>> K.shape
    (3, 3)
    """
    locations = _as_locations(xs)
    n = len(locations)
    K = np.empty((n, n))
    for i in range(n):
        for j in range(i, n):
            value = kernel(locations[i], locations[j])
            K[i, j] = value
            K[j, i] = value
    return K


def cross_cov_matrix(
    kernel: KernelFunction, xs: Sequence[float], zs: Sequence[float]
) -> np.ndarray:
    """Compute the cross-covariance matrix between two sets of locations.

    Parameters
    ----------
    kernel : callable
        Kernel function ``(x1, x2) -> float``.
    xs : sequence of float
        First set of locations, length n.
    zs : sequence of float
        Second set of locations, length m.

    Returns
    -------
    np.ndarray
        Matrix with ``K[i, j] = kernel(xs[i], zs[j])``, shape (n, m).
    """
    rows = _as_locations(xs, "xs")
    cols = _as_locations(zs, "zs")
    K = np.empty((len(rows), len(cols)))
    for i, x in enumerate(rows):
        for j, z in enumerate(cols):
            K[i, j] = kernel(x, z)
    return K


def min_eigenvalue(K: np.ndarray) -> float:
    """Return the smallest eigenvalue of a symmetric matrix.

    Useful as a positive semi-definiteness check: a valid covariance matrix
    has a minimum eigenvalue that is non-negative up to rounding.

    Raises
    ------
    DimensionMismatch
        If ``K`` is not a square matrix.
    """
    K = np.asarray(K, dtype=float)
    if K.ndim != 2 or K.shape[0] != K.shape[1]:
        raise DimensionMismatch(f"Expected a square matrix, got shape {K.shape}")
    if K.size == 0:
        raise DimensionMismatch("Cannot take eigenvalues of an empty matrix")
    return float(eigvalsh(K)[0])
