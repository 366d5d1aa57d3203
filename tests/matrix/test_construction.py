"""
Tests for Matrix construction and accessors.

Validates:
    - zeros / from_buffer / from_function / from_array
    - Ownership: no constructor or exporter aliases caller memory
    - Bounds-checked access and copy-on-write set()
"""

import numpy as np
import pytest

from densemat import (
    Matrix,
    ValidationError,
    DimensionMismatchError,
    IndexOutOfRangeError,
)


class TestZeros:

    @pytest.mark.parametrize("rows, cols", [(0, 0), (0, 3), (3, 0), (1, 1), (2, 3), (7, 4)])
    def test_dimensions_and_zero_cells(self, rows, cols):
        m = Matrix.zeros(rows, cols)
        assert m.rows == rows
        assert m.cols == cols
        assert m.shape == (rows, cols)
        for i in range(rows):
            for j in range(cols):
                assert m.at(i, j) == 0.0

    def test_negative_dimension(self):
        with pytest.raises(ValidationError, match="rows"):
            Matrix.zeros(-1, 2)

    def test_repr(self):
        assert repr(Matrix.zeros(2, 3)) == "Matrix(rows=2, cols=3)"


class TestFromBuffer:

    def test_row_major_layout(self):
        m = Matrix.from_buffer(2, 3, [1, 2, 3, 4, 5, 6])
        assert m.at(0, 2) == 3.0
        assert m.at(1, 0) == 4.0
        assert m.to_list() == [[1.0, 2.0, 3.0], [4.0, 5.0, 6.0]]

    def test_length_mismatch(self):
        with pytest.raises(DimensionMismatchError, match="2 x 3 != 5"):
            Matrix.from_buffer(2, 3, [1, 2, 3, 4, 5])

    def test_rejects_2d_buffer(self):
        with pytest.raises(DimensionMismatchError):
            Matrix.from_buffer(2, 2, [[1, 2], [3, 4]])

    def test_copies_caller_buffer(self):
        source = np.array([1.0, 2.0, 3.0, 4.0])
        m = Matrix.from_buffer(2, 2, source)
        source[0] = 100.0
        assert m.at(0, 0) == 1.0

    def test_empty(self):
        m = Matrix.from_buffer(0, 5, [])
        assert m.shape == (0, 5)


class TestFromFunction:

    def test_values(self):
        m = Matrix.from_function(3, 2, lambda i, j: 10 * i + j)
        assert m.to_list() == [[0.0, 1.0], [10.0, 11.0], [20.0, 21.0]]

    def test_called_once_per_cell_row_major(self):
        calls = []

        def f(i, j):
            calls.append((i, j))
            return 0.0

        Matrix.from_function(2, 3, f)
        assert calls == [(0, 0), (0, 1), (0, 2), (1, 0), (1, 1), (1, 2)]

    def test_not_callable(self):
        with pytest.raises(ValidationError):
            Matrix.from_function(2, 2, 5.0)


class TestFromArray:

    def test_nested_lists(self):
        m = Matrix.from_array([[1, 2], [3, 4], [5, 6]])
        assert m.shape == (3, 2)
        assert m.at(2, 1) == 6.0

    def test_fortran_ordered_input(self):
        arr = np.asfortranarray(np.arange(6.0).reshape(2, 3))
        m = Matrix.from_array(arr)
        assert m.to_list() == [[0.0, 1.0, 2.0], [3.0, 4.0, 5.0]]

    def test_rejects_1d(self):
        with pytest.raises(DimensionMismatchError):
            Matrix.from_array([1.0, 2.0])


class TestAccess:

    @pytest.mark.parametrize("i, j", [(-1, 0), (0, -1), (2, 0), (0, 3)])
    def test_out_of_range(self, i, j):
        m = Matrix.zeros(2, 3)
        with pytest.raises(IndexOutOfRangeError):
            m.at(i, j)

    def test_getitem(self):
        m = Matrix.from_buffer(2, 2, [1, 2, 3, 4])
        assert m[1, 0] == 3.0
        with pytest.raises(IndexOutOfRangeError):
            m[-1, 0]
        with pytest.raises(ValidationError):
            m[0]

    def test_at_returns_python_float(self):
        assert type(Matrix.zeros(1, 1).at(0, 0)) is float


class TestOwnership:

    def test_buffer_is_read_only(self):
        m = Matrix.zeros(2, 2)
        with pytest.raises(ValueError):
            m._data[0] = 1.0

    def test_exports_are_copies(self):
        m = Matrix.from_buffer(2, 2, [1, 2, 3, 4])
        m.to_buffer()[0] = 9.0
        m.to_array()[0, 0] = 9.0
        m.to_list()[0][0] = 9.0
        np.asarray(m)[0, 0] = 9.0
        assert m.at(0, 0) == 1.0

    def test_clone_shares_no_storage(self):
        m = Matrix.from_buffer(2, 2, [1, 2, 3, 4])
        c = m.clone()
        assert c == m
        assert c is not m
        assert not np.shares_memory(c._data, m._data)

    def test_set_is_copy_on_write(self):
        m = Matrix.zeros(2, 2)
        r = m.set(1, 1, 5.0)
        assert r.at(1, 1) == 5.0
        assert m.at(1, 1) == 0.0

    def test_set_out_of_range(self):
        with pytest.raises(IndexOutOfRangeError):
            Matrix.zeros(2, 2).set(2, 0, 1.0)

    def test_unhashable(self):
        with pytest.raises(TypeError):
            hash(Matrix.zeros(1, 1))

    def test_frozen_fields(self):
        m = Matrix.zeros(1, 1)
        with pytest.raises(AttributeError):
            m._rows = 3

    def test_direct_construction_needs_flat_ndarray(self):
        with pytest.raises(ValidationError, match="from_buffer"):
            Matrix(2, 2, [1, 2, 3, 4])
        with pytest.raises(ValidationError):
            Matrix(2, 2, np.zeros((2, 2)))
