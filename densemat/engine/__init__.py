"""
Matrix product engine.

Three interchangeable strategies share one contract: product(a, b)
requires a.cols == b.rows and returns an (a.rows, b.cols) Matrix.

Public API:
    product(a, b)           - sequential triple loop (reference)
    parallel_product(a, b)  - one thread task per output row
    blas_product(a, b)      - BLAS dgemm
    matmul(a, b, backend=)  - dispatch returning a ProductSolution

Example:
    >>> from densemat import Matrix
    >>> from densemat.engine import matmul
    >>> sol = matmul(Matrix.zeros(2, 3).add_scalar(1), Matrix.zeros(3, 2).add_scalar(2))
    >>> print(sol.matrix)
    >>> print(sol.summary())
"""

from densemat.engine.solution import ProductParams, ProductSolution
from densemat.engine.solvers import (
    matmul,
    product,
    parallel_product,
    blas_product,
)
from densemat.engine.backends import (
    SequentialProductBackend,
    ParallelProductBackend,
    BLASProductBackend,
)

__all__ = [
    "matmul",
    "product",
    "parallel_product",
    "blas_product",
    "ProductParams",
    "ProductSolution",
    "SequentialProductBackend",
    "ParallelProductBackend",
    "BLASProductBackend",
]
