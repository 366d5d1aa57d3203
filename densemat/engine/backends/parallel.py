"""
Row-parallel backend for the matrix product.

One task per output row runs on a ThreadPoolExecutor. Each task computes
its whole row with the sequential row kernel and writes only its own
slice of the output buffer, so no two tasks ever touch the same cell and
no locking is needed. The operands are read-only for the whole call.

The call returns only after every row task has finished; there is no
cancellation and no partial result.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

from densemat.core.result import Result
from densemat.core.compute.timing import Timer
from densemat.core.validation import check_max_workers
from densemat.matrix.design import Matrix
from densemat.engine._common import (
    check_operands,
    allocate_output,
    row_kernel,
    product_info,
    non_finite_warnings,
)
from densemat.engine.solution import ProductParams


class ParallelProductBackend:
    """
    Thread-parallel product partitioned by output row.

    Implements the ProductBackend protocol. Results are bitwise identical
    to SequentialProductBackend because every cell is accumulated by the
    same kernel in the same order; only whole rows run concurrently.

    This is CPU thread parallelism only. Pure-Python row tasks share the
    interpreter lock, so the backend demonstrates the decomposition
    rather than a speedup.
    """

    def __init__(self, max_workers: int | None = None):
        """
        Parameters
        ----------
        max_workers : int, optional
            Thread pool size. None uses the ThreadPoolExecutor default.
        """
        check_max_workers(max_workers)
        self._max_workers = max_workers

    @property
    def name(self) -> str:
        return 'parallel'

    @property
    def max_workers(self) -> int | None:
        return self._max_workers

    def solve(self, a: Matrix, b: Matrix) -> Result[ProductParams]:
        """
        Compute a @ b with one task per output row.

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

        def compute_row(i: int) -> None:
            out[i * cols:(i + 1) * cols] = row_kernel(a_vals, b_vals, i, inner, cols)

        with timer.section('compute'):
            with ThreadPoolExecutor(max_workers=self._max_workers) as pool:
                futures = [pool.submit(compute_row, i) for i in range(rows)]
                # Surface the first task failure once all tasks are done.
                for future in futures:
                    future.result()

        timer.stop()

        info = product_info('parallel', a, b)
        info['n_tasks'] = rows
        info['max_workers'] = self._max_workers

        return Result(
            params=ProductParams(matrix=Matrix._from_owned(rows, cols, out)),
            info=info,
            timing=timer.result(),
            backend_name=self.name,
            warnings=non_finite_warnings(out),
        )
