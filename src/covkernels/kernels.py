"""
Covariance kernels over scalar inputs.

This module provides the kernel functions used to build Gaussian-process
covariance matrices, including:
- Squared Exponential
- Matérn family (1/2, 3/2, 5/2)
- White noise
- Periodic
- Linear
- Composite kernels (Sum, Product)

Each kernel is an immutable value object holding its hyperparameters; calling
it with two scalars returns their covariance. The lower-case factories
(``sqexp``, ``matern12``, ...) take the hyperparameters positionally, with
defaults equal to the default values of the matching parameter descriptors.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, fields, replace
from typing import Callable, ClassVar, Dict, Iterable, Tuple

import numpy as np

from covkernels.exceptions import EmptyCombinatorInput, InvalidParameter
from covkernels.parameters import (
    ParameterDescriptor,
    bias_parameter,
    center_parameter,
    lengthscale_parameter,
    period_parameter,
    variance_parameter,
)

KernelFunction = Callable[[float, float], float]

SQRT3 = np.sqrt(3.0)
SQRT5 = np.sqrt(5.0)

_ELEMENT_KEY = re.compile(r"k(\d+)_(.+)")


class Kernel(ABC):
    """Abstract base class for kernel functions.

    Subclasses are frozen dataclasses whose fields are the hyperparameters,
    in display order. Each field must have a matching entry in
    ``_templates``; values are checked against the template's lower bound
    when the kernel is constructed.
    """

    _templates: ClassVar[Tuple[Callable[[], ParameterDescriptor], ...]] = ()
    stationary: ClassVar[bool] = True

    def __post_init__(self) -> None:
        owner = self.__class__.__name__
        for template in self._templates:
            descriptor = template()
            value = descriptor.check(getattr(self, descriptor.name), owner=owner)
            object.__setattr__(self, descriptor.name, value)

    @classmethod
    def parameter_templates(cls) -> Tuple[ParameterDescriptor, ...]:
        """Return fresh parameter descriptors for this kernel type."""
        return tuple(template() for template in cls._templates)

    def __call__(self, x1: float, x2: float) -> float:
        """Evaluate the covariance between two scalar inputs.

        Non-finite inputs are allowed and propagate as nan or inf.
        """
        with np.errstate(over="ignore", invalid="ignore"):
            return float(self._evaluate(float(x1), float(x2)))

    def evaluate(self, x1: float, x2: float) -> float:
        """Alias for calling the kernel."""
        return self(x1, x2)

    @abstractmethod
    def _evaluate(self, x1: float, x2: float) -> float:
        pass

    def get_params(self) -> Dict[str, float]:
        """Get current hyperparameter values, in display order."""
        return {f.name: getattr(self, f.name) for f in fields(self)}

    def with_params(self, **params) -> "Kernel":
        """Return a copy with some hyperparameters replaced.

        Raises
        ------
        InvalidParameter
            If a name is not one of :meth:`get_params`, or a new value is
            below its lower bound.
        """
        available = self.get_params()
        unknown = sorted(set(params) - set(available))
        if unknown:
            raise InvalidParameter(
                f"Unknown parameters for {self.__class__.__name__}: {unknown}. "
                f"Available: {', '.join(available)}"
            )
        return replace(self, **params)

    @property
    def n_params(self) -> int:
        """Number of hyperparameters."""
        return len(self.get_params())

    def __add__(self, other: KernelFunction) -> "SumKernel":
        """Add two kernels."""
        return sum_kernel([self, other])

    def __mul__(self, other: KernelFunction) -> "ProductKernel":
        """Multiply two kernels."""
        return product_kernel([self, other])


@dataclass(frozen=True)
class SquaredExponential(Kernel):
    """Squared Exponential (RBF) kernel.

    k(x, x') = σ² * exp(-(x - x')² / (2 * ℓ²))

    Infinitely differentiable sample paths.

    Parameters
    ----------
    variance : float, default=1.0
        Signal variance (σ²).
    lengthscale : float, default=0.5
        Length scale (ℓ).

    Examples
    --------
    >>> k = SquaredExponential(variance=1.0, lengthscale=1.0)
    >>> k(0.0, 0.0)
    1.0
    """

    variance: float = 1.0
    lengthscale: float = 0.5

    _templates = (variance_parameter, lengthscale_parameter)

    def _evaluate(self, x1: float, x2: float) -> float:
        diff = x1 - x2
        return self.variance * np.exp(-(diff * diff) / (2.0 * self.lengthscale * self.lengthscale))


@dataclass(frozen=True)
class Matern12(Kernel):
    """Matérn kernel with ν = 1/2 (Exponential kernel).

    k(x, x') = σ² * exp(-|x - x'| / ℓ)

    Continuous but not differentiable at x = x'.
    """

    variance: float = 1.0
    lengthscale: float = 0.5

    _templates = (variance_parameter, lengthscale_parameter)

    def _evaluate(self, x1: float, x2: float) -> float:
        return self.variance * np.exp(-abs(x1 - x2) / self.lengthscale)


@dataclass(frozen=True)
class Matern32(Kernel):
    """Matérn kernel with ν = 3/2.

    k(x, x') = σ² * (1 + s) * exp(-s),  s = √3 |x - x'| / ℓ
    """

    variance: float = 1.0
    lengthscale: float = 0.5

    _templates = (variance_parameter, lengthscale_parameter)

    def _evaluate(self, x1: float, x2: float) -> float:
        s = SQRT3 * abs(x1 - x2) / self.lengthscale
        return self.variance * (1.0 + s) * np.exp(-s)


@dataclass(frozen=True)
class Matern52(Kernel):
    """Matérn kernel with ν = 5/2.

    k(x, x') = σ² * (1 + s + s² / 3) * exp(-s),  s = √5 |x - x'| / ℓ

    Twice differentiable sample paths.
    """

    variance: float = 1.0
    lengthscale: float = 0.5

    _templates = (variance_parameter, lengthscale_parameter)

    def _evaluate(self, x1: float, x2: float) -> float:
        s = SQRT5 * abs(x1 - x2) / self.lengthscale
        return self.variance * (1.0 + s + s * s / 3.0) * np.exp(-s)


@dataclass(frozen=True)
class WhiteNoise(Kernel):
    """White noise kernel.

    k(x, x') = σ² if x == x' else 0

    Inputs are compared exactly, with no tolerance, so the kernel only
    contributes to the diagonal of a covariance matrix. The comparison is
    made after both inputs are converted to float, so integers that round
    to the same double (e.g. 2**53 and 2**53 + 1) count as equal.
    """

    variance: float = 1.0

    _templates = (variance_parameter,)

    def _evaluate(self, x1: float, x2: float) -> float:
        return self.variance if x1 == x2 else 0.0


@dataclass(frozen=True)
class Periodic(Kernel):
    """Periodic kernel for cyclic data.

    k(x, x') = σ² * exp(-2 * sin²(π |x - x'| / p) / ℓ²)

    Parameters
    ----------
    variance : float, default=1.0
        Signal variance (σ²).
    lengthscale : float, default=0.5
        Length scale (ℓ).
    period : float, default=2.0
        Period of the repeating pattern (p).

    Examples
    --------
    >>> k = Periodic(period=2.0)
    >>> k(0.0, 2.0) == k(0.0, 0.0)
    True
    """

    variance: float = 1.0
    lengthscale: float = 0.5
    period: float = 2.0

    _templates = (variance_parameter, lengthscale_parameter, period_parameter)

    def _evaluate(self, x1: float, x2: float) -> float:
        sin_term = np.sin(np.pi * abs(x1 - x2) / self.period)
        return self.variance * np.exp(-2.0 * sin_term * sin_term / (self.lengthscale * self.lengthscale))


@dataclass(frozen=True)
class Linear(Kernel):
    """Linear (dot-product) kernel.

    k(x, x') = σ_b² + σ² * (x - x_c) * (x' - x_c)

    Non-stationary: the covariance grows with distance from the center x_c.

    Parameters
    ----------
    variance : float, default=1.0
        Slope variance (σ²).
    bias : float, default=0.0
        Offset variance (σ_b²).
    center : float, default=2.0
        Point where the slope contribution vanishes (x_c).
    """

    variance: float = 1.0
    bias: float = 0.0
    center: float = 2.0

    _templates = (variance_parameter, bias_parameter, center_parameter)
    stationary = False

    def _evaluate(self, x1: float, x2: float) -> float:
        return self.bias + self.variance * ((x1 - self.center) * (x2 - self.center))


@dataclass(frozen=True)
class SumKernel(Kernel):
    """Sum of kernels.

    k(x, x') = k1(x, x') + k2(x, x') + ...

    Typically used to combine different patterns, e.g., trend + periodic.
    Elements may be any ``(x1, x2) -> float`` callable.
    """

    kernels: Tuple[KernelFunction, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "kernels", tuple(self.kernels))
        if not self.kernels:
            raise EmptyCombinatorInput("SumKernel needs at least one kernel")

    def _evaluate(self, x1: float, x2: float) -> float:
        total = 0.0
        for k in self.kernels:
            total = total + k(x1, x2)
        return total

    def get_params(self) -> Dict[str, float]:
        return _namespaced_params(self.kernels)

    def with_params(self, **params) -> "Kernel":
        """Return a copy with element parameters replaced, using k<i>_<name> keys."""
        return replace(self, kernels=_with_element_params(self.kernels, params))

    @property
    def stationary(self) -> bool:
        return _all_stationary(self.kernels)

    def __repr__(self) -> str:
        return "(" + " + ".join(repr(k) for k in self.kernels) + ")"


@dataclass(frozen=True)
class ProductKernel(Kernel):
    """Product of kernels.

    k(x, x') = k1(x, x') * k2(x, x') * ...

    Typically used to model interactions or combine local/global patterns,
    e.g., a periodic pattern whose shape drifts slowly.
    """

    kernels: Tuple[KernelFunction, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "kernels", tuple(self.kernels))
        if not self.kernels:
            raise EmptyCombinatorInput("ProductKernel needs at least one kernel")

    def _evaluate(self, x1: float, x2: float) -> float:
        total = 1.0
        for k in self.kernels:
            total = total * k(x1, x2)
        return total

    def get_params(self) -> Dict[str, float]:
        return _namespaced_params(self.kernels)

    def with_params(self, **params) -> "Kernel":
        """Return a copy with element parameters replaced, using k<i>_<name> keys."""
        return replace(self, kernels=_with_element_params(self.kernels, params))

    @property
    def stationary(self) -> bool:
        return _all_stationary(self.kernels)

    def __repr__(self) -> str:
        return "(" + " * ".join(repr(k) for k in self.kernels) + ")"


def _namespaced_params(kernels: Tuple[KernelFunction, ...]) -> Dict[str, float]:
    params = {}
    for i, k in enumerate(kernels, start=1):
        if isinstance(k, Kernel):
            for name, value in k.get_params().items():
                params[f"k{i}_{name}"] = value
    return params


def _with_element_params(
    kernels: Tuple[KernelFunction, ...], params: Dict[str, float]
) -> Tuple[KernelFunction, ...]:
    # Keys look like "k2_lengthscale"; nested composites strip one prefix per level.
    updates: Dict[int, Dict[str, float]] = {}
    for key, value in params.items():
        match = _ELEMENT_KEY.match(key)
        index = int(match.group(1)) if match else 0
        if not 1 <= index <= len(kernels):
            raise InvalidParameter(
                f"Unknown composite parameter '{key}'. "
                f"Expected k1_<name> to k{len(kernels)}_<name>"
            )
        if not isinstance(kernels[index - 1], Kernel):
            raise InvalidParameter(
                f"Element k{index} is a plain callable and has no parameters, got '{key}'"
            )
        updates.setdefault(index, {})[match.group(2)] = value

    return tuple(
        k.with_params(**updates[i]) if i in updates else k
        for i, k in enumerate(kernels, start=1)
    )


def _all_stationary(kernels: Tuple[KernelFunction, ...]) -> bool:
    # Plain callables carry no stationarity information.
    return all(isinstance(k, Kernel) and k.stationary for k in kernels)


# Factories. Defaults match the parameter descriptors' default values.

def sqexp(variance: float = 1.0, lengthscale: float = 0.5) -> SquaredExponential:
    """Create a squared-exponential kernel."""
    return SquaredExponential(variance, lengthscale)


def matern12(variance: float = 1.0, lengthscale: float = 0.5) -> Matern12:
    """Create a Matérn 1/2 (exponential) kernel."""
    return Matern12(variance, lengthscale)


def matern32(variance: float = 1.0, lengthscale: float = 0.5) -> Matern32:
    """Create a Matérn 3/2 kernel."""
    return Matern32(variance, lengthscale)


def matern52(variance: float = 1.0, lengthscale: float = 0.5) -> Matern52:
    """Create a Matérn 5/2 kernel."""
    return Matern52(variance, lengthscale)


def white(variance: float = 1.0) -> WhiteNoise:
    """Create a white noise kernel."""
    return WhiteNoise(variance)


def periodic(variance: float = 1.0, lengthscale: float = 0.5, period: float = 2.0) -> Periodic:
    """Create a periodic kernel."""
    return Periodic(variance, lengthscale, period)


def linear(variance: float = 1.0, bias: float = 0.0, center: float = 2.0) -> Linear:
    """Create a linear kernel."""
    return Linear(variance, bias, center)


def sum_kernel(kernels: Iterable[KernelFunction]) -> SumKernel:
    """Combine kernels by pointwise sum.

    Parameters
    ----------
    kernels : iterable of callables
        Ordered, non-empty sequence of kernels. Values are added left to right.

    Returns
    -------
    SumKernel
        A kernel evaluating ``k1(x1, x2) + k2(x1, x2) + ...``.

    Raises
    ------
    EmptyCombinatorInput
        If ``kernels`` is empty.

    Examples
    --------
    >>> k = sum_kernel([sqexp(), white(0.1)])
    >>> k(1.0, 1.0)
    1.1
    """
    return SumKernel(tuple(kernels))


def product_kernel(kernels: Iterable[KernelFunction]) -> ProductKernel:
    """Combine kernels by pointwise product.

    Parameters
    ----------
    kernels : iterable of callables
        Ordered, non-empty sequence of kernels. Values are multiplied left
        to right.

    Raises
    ------
    EmptyCombinatorInput
        If ``kernels`` is empty.
    """
    return ProductKernel(tuple(kernels))
