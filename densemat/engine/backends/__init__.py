"""
Matrix product backends.

Available backends:
    SequentialProductBackend: reference triple loop
    ParallelProductBackend: one thread task per output row
    BLASProductBackend: scipy.linalg.blas.dgemm
"""

from densemat.engine.backends.sequential import SequentialProductBackend
from densemat.engine.backends.parallel import ParallelProductBackend
from densemat.engine.backends.blas import (
    BLASProductBackend,
    GeneralDescriptor,
    general_from_matrix,
    gemm,
    NO_TRANS,
    TRANS,
)

__all__ = [
    "SequentialProductBackend",
    "ParallelProductBackend",
    "BLASProductBackend",
    "GeneralDescriptor",
    "general_from_matrix",
    "gemm",
    "NO_TRANS",
    "TRANS",
]
