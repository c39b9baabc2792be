"""Kernel descriptors: display metadata bundled with a kernel factory.

A :class:`KernelDescriptor` is pure data. Its ``formula`` is a LaTeX string
for display and is never evaluated; the numbers come from the ``kernel``
factory it points to.
"""

from __future__ import annotations

import warnings
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Tuple

from covkernels.exceptions import InvalidParameter
from covkernels.kernels import (
    Kernel,
    Linear,
    Matern12,
    Matern32,
    Matern52,
    Periodic,
    SquaredExponential,
    WhiteNoise,
    linear,
    matern12,
    matern32,
    matern52,
    periodic,
    sqexp,
    white,
)
from covkernels.parameters import ParameterDescriptor


@dataclass(frozen=True)
class KernelDescriptor:
    """Human-facing metadata for one kernel type.

    Parameters
    ----------
    description : str
        Short display name.
    formula : str
        LaTeX closed form, display only.
    parameters : tuple of ParameterDescriptor
        Hyperparameters in control order. Names must be unique.
    kernel : callable
        Factory taking the parameter values positionally, in the order of
        ``parameters``, and returning a kernel.

    Examples
    --------
    >>> d = make_sqexp()
    >>> d.parameter_names
    ['variance', 'lengthscale']
    >>> k = d.build(lengthscale=1.0)
    """

    description: str
    formula: str
    parameters: Tuple[ParameterDescriptor, ...]
    kernel: Callable[..., Kernel]

    def __post_init__(self) -> None:
        object.__setattr__(self, "parameters", tuple(self.parameters))
        names = self.parameter_names
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            raise ValueError(f"Duplicate parameter names in {self.description}: {duplicates}")

    @property
    def parameter_names(self) -> List[str]:
        """Return the parameter names in control order."""
        return [p.name for p in self.parameters]

    def get_parameter(self, name: str) -> ParameterDescriptor:
        """Look up a parameter descriptor by name."""
        for p in self.parameters:
            if p.name == name:
                return p
        raise KeyError(
            f"{self.description} has no parameter '{name}'. "
            f"Available: {', '.join(self.parameter_names)}"
        )

    def defaults(self) -> Dict[str, float]:
        """Return the default value of each parameter, in control order."""
        return {p.name: p.value for p in self.parameters}

    def build(self, **values: float) -> Kernel:
        """Invoke the factory with defaults overridden by ``values``.

        Values outside a parameter's displayed range are used as given, with
        a warning. Lower-bound violations are rejected by the factory.

        Raises
        ------
        InvalidParameter
            If a name in ``values`` is not a parameter of this kernel, or a
            value is below its lower bound.
        """
        unknown = sorted(set(values) - set(self.parameter_names))
        if unknown:
            raise InvalidParameter(
                f"Unknown parameters for {self.description}: {unknown}. "
                f"Available: {', '.join(self.parameter_names)}"
            )

        args = []
        for p in self.parameters:
            try:
                value = float(values.get(p.name, p.value))
            except (TypeError, ValueError) as e:
                raise InvalidParameter(
                    f"{self.description}: {p.name} must be a number, got {values[p.name]!r}"
                ) from e
            if not p.in_range(value):
                warnings.warn(
                    f"{self.description}: {p.name}={value} is outside the displayed "
                    f"range [{p.min}, {p.max}]"
                )
            args.append(value)
        return self.kernel(*args)

    def to_dict(self) -> Dict[str, Any]:
        """Return the descriptor metadata as plain data."""
        return {
            "description": self.description,
            "formula": self.formula,
            "parameters": [p.to_dict() for p in self.parameters],
            "kernel": self.kernel.__name__,
        }


def make_sqexp() -> KernelDescriptor:
    """Describe the squared-exponential kernel."""
    return KernelDescriptor(
        description="Squared-exponential",
        formula=r"\sigma^2 \exp\Big(-\frac{(x-x')^2}{2\ell^2}\Big)",
        parameters=SquaredExponential.parameter_templates(),
        kernel=sqexp,
    )


def make_matern12() -> KernelDescriptor:
    """Describe the Matérn 1/2 (exponential) kernel."""
    return KernelDescriptor(
        description="Matérn 1/2 (Exponential)",
        formula=r"\sigma^2 \exp\Big(-\frac{|x-x'|}{\ell}\Big)",
        parameters=Matern12.parameter_templates(),
        kernel=matern12,
    )


def make_matern32() -> KernelDescriptor:
    """Describe the Matérn 3/2 kernel."""
    return KernelDescriptor(
        description="Matérn 3/2",
        formula=(
            r"\sigma^2 \big( 1 + \frac{\sqrt{3} |x-x'|}{\ell} \big)"
            r" \exp\Big(-\frac{\sqrt{3} |x-x'|}{\ell}\Big)"
        ),
        parameters=Matern32.parameter_templates(),
        kernel=matern32,
    )


def make_matern52() -> KernelDescriptor:
    """Describe the Matérn 5/2 kernel."""
    return KernelDescriptor(
        description="Matérn 5/2",
        formula=(
            r"\sigma^2 \big( 1 + \frac{\sqrt{5} |x-x'|}{\ell} + \frac{5 (x-x')^2}{3 \ell^2} \big)"
            r" \exp\Big(-\frac{\sqrt{5} |x-x'|}{\ell}\Big)"
        ),
        parameters=Matern52.parameter_templates(),
        kernel=matern52,
    )


def make_white() -> KernelDescriptor:
    """Describe the white noise kernel."""
    return KernelDescriptor(
        description="White Noise",
        formula=r"\sigma^2 \mathbb{1}\{x=x'\}",
        parameters=WhiteNoise.parameter_templates(),
        kernel=white,
    )


def make_periodic() -> KernelDescriptor:
    """Describe the periodic kernel."""
    return KernelDescriptor(
        description="Periodic",
        formula=r"\sigma^2 \exp\Big(- 2 \frac{\sin^2(\pi |x-x'|/p)}{\ell^2}\Big)",
        parameters=Periodic.parameter_templates(),
        kernel=periodic,
    )


def make_linear() -> KernelDescriptor:
    """Describe the linear kernel."""
    return KernelDescriptor(
        description="Linear",
        formula=r"\sigma^2 (x - x_c)(x' - x_c) + \sigma^2_b",
        parameters=Linear.parameter_templates(),
        kernel=linear,
    )


KERNELS: Dict[str, Callable[[], KernelDescriptor]] = {
    "sqexp": make_sqexp,
    "matern12": make_matern12,
    "matern32": make_matern32,
    "matern52": make_matern52,
    "white": make_white,
    "periodic": make_periodic,
    "linear": make_linear,
}


def available_kernels() -> List[str]:
    """Return the registered kernel names, in display order."""
    return list(KERNELS)


def get_descriptor(name: str) -> KernelDescriptor:
    """Create the descriptor for a kernel by name.

    Parameters
    ----------
    name : str
        Kernel name, one of :func:`available_kernels`. Case, hyphens and
        spaces are ignored, so ``"Matern-52"`` finds ``"matern52"``.

    Returns
    -------
    KernelDescriptor
        A freshly constructed descriptor.

    Examples
    --------
    >>> get_descriptor("periodic").parameter_names
    ['variance', 'lengthscale', 'period']
    """
    key = name.lower().replace("-", "").replace(" ", "").replace("_", "")
    if key not in KERNELS:
        available = ", ".join(KERNELS)
        raise ValueError(f"Unknown kernel '{name}'. Available: {available}")
    return KERNELS[key]()
