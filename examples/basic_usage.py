"""
covkernels Basic Usage Example
==============================

This example walks through what an interactive front end does: list the
available kernels, build one from its descriptor, combine kernels, and
assemble a covariance matrix.
"""

import numpy as np

from covkernels import (
    available_kernels,
    cov_matrix,
    get_descriptor,
    min_eigenvalue,
    white,
)


def main():
    # Render one control per parameter
    for name in available_kernels():
        descriptor = get_descriptor(name)
        print(f"{descriptor.description}: {descriptor.formula}")
        for p in descriptor.parameters:
            print(f"    {p.name:<12s} default={p.value:<5g} range=[{p.min}, {p.max}] step={p.step}")

    # A slider moved: rebuild the kernel with the current values
    periodic = get_descriptor("periodic").build(lengthscale=1.0, period=1.5)
    smooth = get_descriptor("sqexp").build(lengthscale=1.2)

    # Locally periodic signal plus observation noise
    kernel = periodic * smooth + white(0.01)

    xs = np.linspace(0.0, 6.0, 8)
    K = cov_matrix(kernel, xs)

    print("-" * 40)
    print(f"Kernel: {kernel}")
    print(np.array2string(K, precision=3, suppress_small=True))
    print(f"Smallest eigenvalue: {min_eigenvalue(K):.3e}")


if __name__ == "__main__":
    main()
