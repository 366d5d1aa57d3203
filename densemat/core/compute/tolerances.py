"""
Tolerance tiers for comparing products across strategies.

- Sequential and parallel products share one accumulation order, so they
  must agree exactly.
- BLAS dgemm is free to block, vectorize and fuse multiply-adds, so its
  output only agrees with the sequential reference to within rounding.

Used by the test suite and by allclose().
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ToleranceTier:
    """Tolerance specification for numerical comparison."""
    rtol: float
    atol: float
    name: str
    description: str


# Same accumulation order: bit-for-bit equality
EXACT = ToleranceTier(
    rtol=0.0,
    atol=0.0,
    name='exact',
    description='Identical summation order, bitwise equal',
)

# Vendor BLAS vs. the sequential reference
BLAS_FP64 = ToleranceTier(
    rtol=1e-10,
    atol=1e-12,
    name='blas_fp64',
    description='BLAS double precision, matches sequential reference to rounding',
)


def select_tolerance(backend_name: str) -> ToleranceTier:
    """Select the tier for comparing a backend against the sequential reference."""
    if 'blas' in backend_name:
        return BLAS_FP64
    return EXACT
