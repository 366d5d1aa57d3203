"""
Solver dispatch for the matrix product.

Provides matmul() as the configurable entry point, plus product(),
parallel_product() and blas_product() which return the Matrix directly.
"""

from __future__ import annotations

from typing import Literal
import warnings

from densemat.core.exceptions import ValidationError
from densemat.core.result import Result
from densemat.matrix.design import Matrix
from densemat.engine.solution import ProductParams, ProductSolution
from densemat.engine.backends.sequential import SequentialProductBackend
from densemat.engine.backends.parallel import ParallelProductBackend
from densemat.engine.backends.blas import BLASProductBackend


BackendChoice = Literal['auto', 'sequential', 'parallel', 'blas']


def _get_backend(backend: BackendChoice, max_workers: int | None = None):
    """Select backend based on preference."""
    if max_workers is not None and backend != 'parallel':
        raise ValidationError(
            f"max_workers only applies to backend='parallel', got backend={backend!r}"
        )

    if backend in ('auto', 'blas'):
        return BLASProductBackend()

    if backend == 'sequential':
        return SequentialProductBackend()

    if backend == 'parallel':
        return ParallelProductBackend(max_workers=max_workers)

    raise ValidationError(f"Unknown backend: {backend!r}")


def _solve(backend, a: Matrix, b: Matrix) -> Result[ProductParams]:
    result = backend.solve(a, b)
    for message in result.warnings:
        warnings.warn(message, RuntimeWarning, stacklevel=3)
    return result


def matmul(
    a: Matrix,
    b: Matrix,
    *,
    backend: BackendChoice = 'auto',
    max_workers: int | None = None,
) -> ProductSolution:
    """
    Compute the matrix product a @ b.

    Parameters
    ----------
    a : Matrix
        Left operand, shape (m, k).
    b : Matrix
        Right operand, shape (k, n).
    backend : str
        'auto', 'sequential', 'parallel', 'blas'. 'auto' uses BLAS.
    max_workers : int, optional
        Thread pool size for backend='parallel'.

    Returns
    -------
    ProductSolution with the (m, n) product, timing and diagnostics.

    Raises
    ------
    DimensionMismatchError
        If a.cols != b.rows.
    """
    be = _get_backend(backend, max_workers)
    return ProductSolution(_result=_solve(be, a, b))


def product(a: Matrix, b: Matrix) -> Matrix:
    """Product computed by the sequential triple loop."""
    return _solve(SequentialProductBackend(), a, b).params.matrix


def parallel_product(
    a: Matrix,
    b: Matrix,
    *,
    max_workers: int | None = None,
) -> Matrix:
    """Product computed with one thread task per output row."""
    return _solve(ParallelProductBackend(max_workers=max_workers), a, b).params.matrix


def blas_product(a: Matrix, b: Matrix) -> Matrix:
    """Product computed by BLAS dgemm."""
    return _solve(BLASProductBackend(), a, b).params.matrix
