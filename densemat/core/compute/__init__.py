"""
Shared compute infrastructure for densemat.

Submodules:
    timing: Execution timing utilities
    tolerances: Tolerance tiers for cross-strategy comparison
"""

from densemat.core.compute.timing import Timer, timed
from densemat.core.compute.tolerances import (
    ToleranceTier,
    EXACT,
    BLAS_FP64,
    select_tolerance,
)

__all__ = [
    # Timing
    "Timer",
    "timed",
    # Tolerances
    "ToleranceTier",
    "EXACT",
    "BLAS_FP64",
    "select_tolerance",
]
