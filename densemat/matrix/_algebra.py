"""
Element-wise algebra, equality and reductions over Matrix values.

Pairwise operations require identical shapes and always allocate a new
result buffer. Reductions fold over the flat buffer, which is the
row-major order of the cells.
"""

from __future__ import annotations

from typing import Any, Callable, TYPE_CHECKING
import numpy as np

from densemat.core.compute.tolerances import ToleranceTier, BLAS_FP64
from densemat.core.validation import check_same_shape, check_callable

if TYPE_CHECKING:
    from densemat.matrix.design import Matrix


def equals(a: Matrix, b: Matrix) -> bool:
    """
    Whether two matrices are identical.

    False as soon as the shapes differ. Cells are compared with exact
    float equality, so NaN never equals anything; use allclose() for
    approximate comparison.
    """
    if a.shape != b.shape:
        return False
    return bool(np.array_equal(a._data, b._data))


def allclose(a: Matrix, b: Matrix, tier: ToleranceTier = BLAS_FP64) -> bool:
    """
    Whether two matrices agree cell by cell within a tolerance tier.

    Uses |a - b| <= atol + rtol * |b|. Equal infinities are close, NaN is
    never close. Differing shapes compare False.
    """
    if a.shape != b.shape:
        return False
    with np.errstate(invalid='ignore'):
        diff = np.abs(a._data - b._data)
        close = (a._data == b._data) | (diff <= tier.atol + tier.rtol * np.abs(b._data))
    return bool(np.all(close))


def _elementwise(a: Matrix, b: Matrix, op: np.ufunc, operation: str) -> Matrix:
    check_same_shape(a.shape, b.shape, operation)
    return type(a)._from_owned(a.rows, a.cols, op(a._data, b._data))


def dot(a: Matrix, b: Matrix) -> Matrix:
    """Element-wise (Hadamard) product."""
    return _elementwise(a, b, np.multiply, 'dot')


def plus(a: Matrix, b: Matrix) -> Matrix:
    """Element-wise sum."""
    return _elementwise(a, b, np.add, 'plus')


def minus(a: Matrix, b: Matrix) -> Matrix:
    """Element-wise difference a - b."""
    return _elementwise(a, b, np.subtract, 'minus')


def reduce_cells(m: Matrix, zero: Any, f: Callable[[float, Any], Any]) -> Any:
    """
    Fold f over all cells in row-major order.

    The accumulator starts at zero and each step computes
    acc = f(cell, acc). For instance, the sum is:

        reduce_cells(m, 0.0, lambda x, acc: x + acc)
    """
    check_callable(f, 'f')
    acc = zero
    for x in m._data.tolist():
        acc = f(x, acc)
    return acc


def sum_cells(m: Matrix) -> float:
    """Sum of all cells, accumulated in row-major order."""
    return reduce_cells(m, 0.0, lambda x, acc: x + acc)
