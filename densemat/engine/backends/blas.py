"""
BLAS backend for the matrix product.

Delegates to the general matrix multiply routine dgemm
(C = alpha * op(A) @ op(B) + beta * C) from scipy.linalg.blas.

Operands are described by GeneralDescriptor: rows, cols, row stride and
the flat row-major buffer. BLAS is column-major, and a row-major (r, c)
buffer read column-major is the (c, r) transpose. The routine is
therefore asked for C^T = op(B)^T @ op(A)^T, which lands in C's row-major
buffer without any copies.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal
import numpy as np
from numpy.typing import NDArray
from scipy.linalg.blas import dgemm

from densemat.core.exceptions import DimensionMismatchError, ValidationError
from densemat.core.result import Result
from densemat.core.compute.timing import Timer
from densemat.matrix.design import Matrix
from densemat.engine._common import (
    check_operands,
    allocate_output,
    product_info,
    non_finite_warnings,
)
from densemat.engine.solution import ProductParams


Transpose = Literal['N', 'T']

NO_TRANS: Transpose = 'N'
TRANS: Transpose = 'T'


@dataclass(frozen=True)
class GeneralDescriptor:
    """
    A dense general matrix as BLAS sees it.

    Attributes:
        rows: Number of rows
        cols: Number of columns
        stride: Distance between the starts of consecutive rows; always
            equal to cols for unpadded row-major storage
        data: Flat row-major buffer of length rows * stride
    """
    rows: int
    cols: int
    stride: int
    data: NDArray[np.float64]

    def column_major_view(self) -> NDArray[np.float64]:
        """The buffer viewed as the Fortran-ordered (cols, rows) transpose."""
        if self.stride != self.cols:
            raise ValidationError(
                f"stride {self.stride} != cols {self.cols}: padded rows are not supported"
            )
        return self.data.reshape((self.cols, self.rows), order='F')


def general_from_matrix(m: Matrix) -> GeneralDescriptor:
    """Describe m for BLAS without copying its (read-only) buffer."""
    return GeneralDescriptor(rows=m.rows, cols=m.cols, stride=m.cols, data=m._data)


def _op_shape(d: GeneralDescriptor, trans: Transpose) -> tuple[int, int]:
    if trans == NO_TRANS:
        return (d.rows, d.cols)
    if trans == TRANS:
        return (d.cols, d.rows)
    raise ValidationError(f"Unknown transpose flag: {trans!r}")


def gemm(
    trans_a: Transpose,
    trans_b: Transpose,
    alpha: float,
    a: GeneralDescriptor,
    b: GeneralDescriptor,
    beta: float,
    c: GeneralDescriptor,
) -> None:
    """
    C = alpha * op(A) @ op(B) + beta * C, written into c.data.

    Args:
        trans_a: NO_TRANS or TRANS for A
        trans_b: NO_TRANS or TRANS for B
        alpha: Scale of the product
        a: Left operand
        b: Right operand
        beta: Scale of the existing C
        c: Output; its buffer must be writable

    Raises:
        DimensionMismatchError: If op(A), op(B) and C are not conformant
    """
    m, k = _op_shape(a, trans_a)
    k_b, n = _op_shape(b, trans_b)
    if k != k_b or (c.rows, c.cols) != (m, n):
        raise DimensionMismatchError(
            f"gemm: op(A) is {m}x{k}, op(B) is {k_b}x{n}, C is {c.rows}x{c.cols}",
            operation='gemm',
            left_shape=(m, k),
            right_shape=(k_b, n),
        )

    if m == 0 or n == 0:
        return
    if k == 0:
        # C is not read when beta is zero
        if beta == 0.0:
            c.data[...] = 0.0
        else:
            c.data[...] = c.data * beta
        return

    c_view = c.column_major_view()
    out = dgemm(
        alpha,
        b.column_major_view(),
        a.column_major_view(),
        beta=beta,
        c=c_view,
        trans_a=int(trans_b == TRANS),
        trans_b=int(trans_a == TRANS),
        overwrite_c=1,
    )
    if not np.shares_memory(out, c.data):
        c_view[...] = out


class BLASProductBackend:
    """
    Product delegated to BLAS dgemm.

    Implements the ProductBackend protocol. Results agree with the
    sequential reference within the BLAS_FP64 tolerance tier; vendor
    BLAS may reorder or fuse the accumulation.
    """

    @property
    def name(self) -> str:
        return 'blas'

    def solve(self, a: Matrix, b: Matrix) -> Result[ProductParams]:
        """
        Compute a @ b with dgemm(no-trans, no-trans, 1.0, A, B, 0.0, C).

        Raises:
            DimensionMismatchError: If a.cols != b.rows
        """
        check_operands(a, b)

        timer = Timer()
        timer.start()

        with timer.section('allocate'):
            out = allocate_output(a, b)

        with timer.section('marshal'):
            da = general_from_matrix(a)
            db = general_from_matrix(b)
            dc = GeneralDescriptor(rows=a.rows, cols=b.cols, stride=b.cols, data=out)

        with timer.section('gemm'):
            gemm(NO_TRANS, NO_TRANS, 1.0, da, db, 0.0, dc)

        timer.stop()

        return Result(
            params=ProductParams(matrix=Matrix._from_owned(a.rows, b.cols, out)),
            info=product_info('blas_dgemm', a, b),
            timing=timer.result(),
            backend_name=self.name,
            warnings=non_finite_warnings(out),
        )
