"""
Shared pieces of the product backends.

The row kernel is the single definition of how an output cell is
accumulated: sum over k of a[i, k] * b[k, j], k increasing, starting from
0.0. The sequential and parallel backends both call it, which is what
makes their outputs bitwise identical.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from densemat.core.exceptions import ValidationError
from densemat.core.validation import check_conformable
from densemat.matrix.design import Matrix


def check_operands(a: Matrix, b: Matrix) -> None:
    """
    Validate a pair of product operands.

    Raises:
        ValidationError: If either operand is not a Matrix
        DimensionMismatchError: If a.cols != b.rows
    """
    for name, operand in (('a', a), ('b', b)):
        if not isinstance(operand, Matrix):
            raise ValidationError(
                f"{name}: expected Matrix, got {type(operand).__name__}"
            )
    check_conformable(a.shape, b.shape)


def allocate_output(a: Matrix, b: Matrix) -> NDArray[np.float64]:
    """Zeroed flat buffer for the (a.rows, b.cols) product."""
    return np.zeros(a.rows * b.cols, dtype=np.float64)


def row_kernel(
    a_vals: list[float],
    b_vals: list[float],
    i: int,
    inner: int,
    cols: int,
) -> list[float]:
    """
    Compute row i of the product from flat row-major operand buffers.

    Args:
        a_vals: Left operand cells, row-major, shape (m, inner)
        b_vals: Right operand cells, row-major, shape (inner, cols)
        i: Output row
        inner: Shared dimension (a.cols == b.rows)
        cols: Output column count (b.cols)
    """
    base = i * inner
    row = []
    for j in range(cols):
        p = 0.0
        for k in range(inner):
            p += a_vals[base + k] * b_vals[k * cols + j]
        row.append(p)
    return row


def product_info(method: str, a: Matrix, b: Matrix) -> dict:
    """Metadata common to every backend's Result."""
    return {
        'method': method,
        'left_shape': a.shape,
        'right_shape': b.shape,
        'output_shape': (a.rows, b.cols),
    }


def non_finite_warnings(data: NDArray[np.float64]) -> tuple[str, ...]:
    """Warnings describing NaN/Inf cells in a product buffer."""
    finite = np.isfinite(data)
    if np.all(finite):
        return ()
    n_nan = int(np.sum(np.isnan(data)))
    n_inf = int(np.sum(np.isinf(data)))
    return (f"product contains non-finite values ({n_nan} NaN, {n_inf} Inf)",)
