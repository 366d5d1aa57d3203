"""
Sequential reference backend for the matrix product.

Triple loop with i outermost, j in the middle and the k accumulation
innermost. Every other backend is validated against this one.
"""

from __future__ import annotations

from densemat.core.result import Result
from densemat.core.compute.timing import Timer
from densemat.matrix.design import Matrix
from densemat.engine._common import (
    check_operands,
    allocate_output,
    row_kernel,
    product_info,
    non_finite_warnings,
)
from densemat.engine.solution import ProductParams


class SequentialProductBackend:
    """
    Single-threaded product with a fixed summation order.

    Implements the ProductBackend protocol.
    """

    @property
    def name(self) -> str:
        return 'sequential'

    def solve(self, a: Matrix, b: Matrix) -> Result[ProductParams]:
        """
        Compute a @ b one output cell at a time.

        Raises:
            DimensionMismatchError: If a.cols != b.rows
        """
        check_operands(a, b)

        timer = Timer()
        timer.start()

        with timer.section('allocate'):
            out = allocate_output(a, b)
            a_vals = a.to_buffer().tolist()
            b_vals = b.to_buffer().tolist()

        rows, inner, cols = a.rows, a.cols, b.cols
        with timer.section('compute'):
            for i in range(rows):
                out[i * cols:(i + 1) * cols] = row_kernel(a_vals, b_vals, i, inner, cols)

        timer.stop()

        return Result(
            params=ProductParams(matrix=Matrix._from_owned(rows, cols, out)),
            info=product_info('sequential', a, b),
            timing=timer.result(),
            backend_name=self.name,
            warnings=non_finite_warnings(out),
        )
