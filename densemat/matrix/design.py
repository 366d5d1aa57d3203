"""
Matrix: immutable dense row-major matrix of float64 values.

The matrix owns a flat, read-only numpy buffer of length rows * cols.
Element (i, j) lives at offset i * cols + j. Every operation that looks
like a modification (set, scale, map, slicing, ...) returns a new Matrix
with its own freshly allocated buffer; no result ever aliases the buffer
of an input or of caller-owned memory.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable
import numpy as np
from numpy.typing import ArrayLike, NDArray

from densemat.core.exceptions import ValidationError
from densemat.core.validation import (
    check_array,
    check_ndim,
    check_dimension,
    check_buffer_length,
    check_index,
    check_range,
    check_nonempty,
    check_shared_extent,
    check_callable,
)
from densemat.matrix import _algebra
from densemat.matrix._format import format_matrix


@dataclass(frozen=True, eq=False, repr=False)
class Matrix:
    """
    Dense, immutable, row-major matrix.

    Construction:
        Matrix.zeros(rows, cols)
        Matrix.from_buffer(rows, cols, data)
        Matrix.from_function(rows, cols, f)
        Matrix.from_array(nested_or_ndarray)

    Calling Matrix(...) directly is reserved for code that has just
    allocated the buffer it passes in.
    """
    _rows: int
    _cols: int
    _data: NDArray[np.float64]

    def __post_init__(self) -> None:
        if not isinstance(self._data, np.ndarray) or self._data.ndim != 1:
            raise ValidationError(
                "Matrix(...) takes a flat numpy buffer; use Matrix.from_buffer "
                f"for {type(self._data).__name__} input"
            )
        check_buffer_length(self._data.shape[0], self._rows, self._cols)

    # --- Construction ---

    @classmethod
    def zeros(cls, rows: int, cols: int) -> Matrix:
        """Matrix with the given dimensions where every cell is 0.0."""
        rows = check_dimension(rows, 'rows')
        cols = check_dimension(cols, 'cols')
        return cls._from_owned(rows, cols, np.zeros(rows * cols, dtype=np.float64))

    @classmethod
    def from_buffer(cls, rows: int, cols: int, data: ArrayLike) -> Matrix:
        """
        Build a Matrix from a flat row-major buffer.

        The buffer is copied; later changes to `data` are not visible
        through the returned Matrix.

        Raises
        ------
        DimensionMismatchError
            If len(data) != rows * cols.
        """
        rows = check_dimension(rows, 'rows')
        cols = check_dimension(cols, 'cols')
        buffer = check_array(data, 'data')
        check_ndim(buffer, 1, 'data')
        check_buffer_length(buffer.shape[0], rows, cols)
        return cls._from_owned(rows, cols, buffer)

    @classmethod
    def from_function(
        cls,
        rows: int,
        cols: int,
        f: Callable[[int, int], float],
    ) -> Matrix:
        """
        Build a Matrix by calling f(i, j) once per cell.

        Cells are visited in row-major order. Only pure generators give
        well-defined results; the visiting order is not part of the contract.
        """
        rows = check_dimension(rows, 'rows')
        cols = check_dimension(cols, 'cols')
        check_callable(f, 'f')
        data = np.empty(rows * cols, dtype=np.float64)
        for i in range(rows):
            for j in range(cols):
                data[i * cols + j] = f(i, j)
        return cls._from_owned(rows, cols, data)

    @classmethod
    def from_array(cls, array: ArrayLike) -> Matrix:
        """
        Build a Matrix from a 2D array-like (nested lists, numpy array).

        Raises
        ------
        DimensionMismatchError
            If the input is not two-dimensional.
        """
        grid = check_array(array, 'array')
        check_ndim(grid, 2, 'array')
        rows, cols = grid.shape
        return cls._from_owned(rows, cols, np.ascontiguousarray(grid).reshape(-1))

    @classmethod
    def _from_owned(cls, rows: int, cols: int, data: NDArray[np.float64]) -> Matrix:
        """Wrap a buffer that nothing else references, freezing it."""
        data.setflags(write=False)
        return cls(rows, cols, data)

    # --- Accessors ---

    @property
    def rows(self) -> int:
        """Number of rows."""
        return self._rows

    @property
    def cols(self) -> int:
        """Number of columns."""
        return self._cols

    @property
    def shape(self) -> tuple[int, int]:
        """(rows, cols)."""
        return (self._rows, self._cols)

    @property
    def size(self) -> int:
        """Number of cells."""
        return self._rows * self._cols

    def at(self, i: int, j: int) -> float:
        """
        Value of the cell at (i, j).

        Raises
        ------
        IndexOutOfRangeError
            If i is outside [0, rows) or j is outside [0, cols).
        """
        check_index(i, j, self.shape)
        return float(self._data[i * self._cols + j])

    def __getitem__(self, key: tuple[int, int]) -> float:
        if not isinstance(key, tuple) or len(key) != 2:
            raise ValidationError(
                f"Matrix indices must be an (i, j) pair, got {key!r}"
            )
        return self.at(*key)

    def set(self, i: int, j: int, x: float) -> Matrix:
        """Copy of this matrix with cell (i, j) replaced by x."""
        check_index(i, j, self.shape)
        data = self._data.copy()
        data[i * self._cols + j] = x
        return Matrix._from_owned(self._rows, self._cols, data)

    def clone(self) -> Matrix:
        """Deep copy sharing no storage with this matrix."""
        return Matrix._from_owned(self._rows, self._cols, self._data.copy())

    def to_buffer(self) -> NDArray[np.float64]:
        """Writable copy of the flat row-major buffer."""
        return self._data.copy()

    def to_array(self) -> NDArray[np.float64]:
        """Writable (rows, cols) copy of the contents."""
        return self._grid().copy()

    def to_list(self) -> list[list[float]]:
        """Contents as a list of rows."""
        return self._grid().tolist()

    def __array__(self, dtype=None, copy=None) -> NDArray[Any]:
        grid = self.to_array()
        if dtype is not None:
            return grid.astype(dtype, copy=False)
        return grid

    def _grid(self) -> NDArray[np.float64]:
        """Read-only (rows, cols) view of the buffer."""
        return self._data.reshape(self._rows, self._cols)

    # --- Structural operations ---

    def map(self, f: Callable[[float], float]) -> Matrix:
        """New matrix where each cell is f applied to the corresponding cell."""
        return map_cells(f, self)

    def scale(self, x: float) -> Matrix:
        """Multiply every cell by x."""
        return map_cells(lambda v: x * v, self)

    def add_scalar(self, x: float) -> Matrix:
        """Add x to every cell."""
        return map_cells(lambda v: x + v, self)

    def slice_cols(self, start: int, stop: int) -> Matrix:
        """
        Columns in [start, stop), like seq[start:stop].

        Raises
        ------
        InvalidRangeError
            If start < 0, stop > cols or stop < start.
        """
        check_range(start, stop, self._cols, 'cols')
        data = self._grid()[:, start:stop].flatten()
        return Matrix._from_owned(self._rows, stop - start, data)

    def slice_rows(self, start: int, stop: int) -> Matrix:
        """
        Rows in [start, stop), like seq[start:stop].

        Raises
        ------
        InvalidRangeError
            If start < 0, stop > rows or stop < start.
        """
        check_range(start, stop, self._rows, 'rows')
        data = self._data[start * self._cols:stop * self._cols].copy()
        return Matrix._from_owned(stop - start, self._cols, data)

    def filter_rows(self, predicate: Callable[[int], bool]) -> Matrix:
        """
        Keep the rows whose index satisfies predicate.

        predicate is called exactly once per row index, in increasing order.
        Kept rows preserve their relative order; the result may have no rows.
        """
        check_callable(predicate, 'predicate')
        kept = [i for i in range(self._rows) if predicate(i)]
        data = self._grid()[np.asarray(kept, dtype=np.intp)].reshape(-1)
        return Matrix._from_owned(len(kept), self._cols, data)

    def transpose(self) -> Matrix:
        """Matrix with shape (cols, rows) where result[j, i] == self[i, j]."""
        data = self._grid().T.flatten()
        return Matrix._from_owned(self._cols, self._rows, data)

    @property
    def T(self) -> Matrix:
        """Alias for transpose()."""
        return self.transpose()

    # --- Algebra ---

    def reduce(self, zero: Any, f: Callable[[float, Any], Any]) -> Any:
        """Fold f(cell, accumulator) over all cells in row-major order."""
        return _algebra.reduce_cells(self, zero, f)

    def sum(self) -> float:
        """Sum of all cells."""
        return _algebra.sum_cells(self)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return _algebra.equals(self, other)

    __hash__ = None  # type: ignore[assignment]

    def __add__(self, other: object) -> Matrix:
        if not isinstance(other, Matrix):
            return NotImplemented
        return _algebra.plus(self, other)

    def __sub__(self, other: object) -> Matrix:
        if not isinstance(other, Matrix):
            return NotImplemented
        return _algebra.minus(self, other)

    def __matmul__(self, other: object) -> Matrix:
        if not isinstance(other, Matrix):
            return NotImplemented
        from densemat.engine.solvers import product
        return product(self, other)

    # --- Presentation ---

    def __str__(self) -> str:
        return format_matrix(self)

    def __repr__(self) -> str:
        return f"Matrix(rows={self._rows}, cols={self._cols})"


def map_cells(f: Callable[[float], float], m: Matrix) -> Matrix:
    """
    Apply f to every cell of a copy of m.

    f should be pure; the traversal order is not part of the contract.
    """
    check_callable(f, 'f')
    data = np.fromiter(
        (f(v) for v in m._data.tolist()),
        dtype=np.float64,
        count=m.size,
    )
    return Matrix._from_owned(m.rows, m.cols, data)


def concatenate_cols(*ms: Matrix) -> Matrix:
    """
    Place matrices side by side.

    All matrices need the same number of rows. The result has as many
    rows as each of them and as many columns as all of them combined;
    each output row is the concatenation of the inputs' rows in
    argument order.

    Raises
    ------
    EmptyInputError
        If no matrices are given.
    DimensionMismatchError
        If the row counts differ.
    """
    check_nonempty(ms, 'concatenate_cols')
    check_shared_extent([m.shape for m in ms], 0, 'concatenate_cols')
    rows = ms[0].rows
    cols = sum(m.cols for m in ms)
    data = np.hstack([m._grid() for m in ms]).reshape(-1)
    return Matrix._from_owned(rows, cols, data)


def concatenate_rows(*ms: Matrix) -> Matrix:
    """
    Stack matrices vertically, in argument order.

    All matrices need the same number of columns. The result has as many
    columns as each of them and as many rows as all of them combined.

    Raises
    ------
    EmptyInputError
        If no matrices are given.
    DimensionMismatchError
        If the column counts differ.
    """
    check_nonempty(ms, 'concatenate_rows')
    check_shared_extent([m.shape for m in ms], 1, 'concatenate_rows')
    rows = sum(m.rows for m in ms)
    cols = ms[0].cols
    data = np.concatenate([m._data for m in ms])
    return Matrix._from_owned(rows, cols, data)
