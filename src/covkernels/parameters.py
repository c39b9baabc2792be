"""Hyperparameter descriptors for kernel controls.

A :class:`ParameterDescriptor` carries everything a user interface needs to
render a control for one scalar hyperparameter: a display formula, the default
value, the slider range and step, and an optional hard lower bound. The range
is informational; only the lower bound is enforced when a kernel is built.

Each kernel gets its own descriptors from the template functions below, so
two kernels never share a descriptor instance even when the names coincide.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

import numpy as np

from covkernels.exceptions import InvalidParameter

# Hard floors enforced at kernel construction.
VARIANCE_LOWER_BOUND = 0.0
LENGTHSCALE_LOWER_BOUND = 1e-3
PERIOD_LOWER_BOUND = 1e-3
BIAS_LOWER_BOUND = 0.0


@dataclass(frozen=True)
class ParameterDescriptor:
    """Static metadata for a single scalar hyperparameter.

    Parameters
    ----------
    name : str
        Identifier, unique within a kernel's parameter list.
    formula : str
        LaTeX symbol shown next to the control.
    value : float
        Default value.
    min : float
        Lower end of the displayed range (inclusive).
    max : float
        Upper end of the displayed range (inclusive).
    step : float
        Control granularity.
    lower_bound : float, optional
        Hard floor for the value. ``None`` when the parameter is unconstrained.

    Examples
    --------
    >>> p = ParameterDescriptor("lengthscale", r"\\ell", 0.5, 0.05, 1.5, 0.01, 1e-3)
    >>> p.check(0.2)
    0.2
    """

    name: str
    formula: str
    value: float
    min: float
    max: float
    step: float
    lower_bound: Optional[float] = None

    def __post_init__(self) -> None:
        if not self.min <= self.value <= self.max:
            raise ValueError(
                f"{self.name}: default {self.value} outside range [{self.min}, {self.max}]"
            )
        if not self.step > 0:
            raise ValueError(f"{self.name}: step must be positive, got {self.step}")
        if self.lower_bound is not None and self.lower_bound > self.min:
            raise ValueError(
                f"{self.name}: lower_bound ({self.lower_bound}) must not exceed min ({self.min})"
            )

    def check(self, value: float, owner: str | None = None) -> float:
        """Validate a candidate value against the lower bound.

        Parameters
        ----------
        value : float
            Candidate parameter value.
        owner : str, optional
            Name of the kernel being built, used in the error message.

        Returns
        -------
        float
            The value converted to ``float``.

        Raises
        ------
        InvalidParameter
            If the value is NaN or below ``lower_bound``.
        """
        value = float(value)
        prefix = f"{owner}: " if owner else ""
        if np.isnan(value):
            raise InvalidParameter(f"{prefix}{self.name} must be a number, got nan")
        if self.lower_bound is not None and value < self.lower_bound:
            raise InvalidParameter(
                f"{prefix}{self.name} must be >= {self.lower_bound}, got {value}"
            )
        return value

    def in_range(self, value: float) -> bool:
        """Whether ``value`` lies within the displayed ``[min, max]`` range."""
        return self.min <= value <= self.max

    def to_dict(self) -> Dict[str, Any]:
        """Return the descriptor as a plain dict for a front end."""
        data = {
            "name": self.name,
            "formula": self.formula,
            "value": self.value,
            "min": self.min,
            "max": self.max,
            "step": self.step,
        }
        if self.lower_bound is not None:
            data["lowerBound"] = self.lower_bound
        return data


def variance_parameter() -> ParameterDescriptor:
    """Signal variance, non-negative."""
    return ParameterDescriptor(
        name="variance",
        formula=r"\sigma^2",
        value=1.0,
        min=0.0,
        max=2.0,
        step=0.01,
        lower_bound=VARIANCE_LOWER_BOUND,
    )


def lengthscale_parameter() -> ParameterDescriptor:
    """Length scale, bounded away from zero."""
    return ParameterDescriptor(
        name="lengthscale",
        formula=r"\ell",
        value=0.5,
        min=0.05,
        max=1.5,
        step=0.01,
        lower_bound=LENGTHSCALE_LOWER_BOUND,
    )


def period_parameter() -> ParameterDescriptor:
    """Period of the periodic kernel, bounded away from zero."""
    return ParameterDescriptor(
        name="period",
        formula="p",
        value=2.0,
        min=0.1,
        max=10.0,
        step=0.01,
        lower_bound=PERIOD_LOWER_BOUND,
    )


def bias_parameter() -> ParameterDescriptor:
    """Bias variance of the linear kernel, non-negative."""
    return ParameterDescriptor(
        name="bias",
        formula=r"\sigma^2_b",
        value=0.0,
        min=0.0,
        max=4.0,
        step=0.01,
        lower_bound=BIAS_LOWER_BOUND,
    )


def center_parameter() -> ParameterDescriptor:
    """Center of the linear kernel, unconstrained."""
    # No lower bound: the center can sit anywhere on the axis.
    return ParameterDescriptor(
        name="center",
        formula="x_c",
        value=2.0,
        min=-2.0,
        max=8.0,
        step=0.1,
    )
