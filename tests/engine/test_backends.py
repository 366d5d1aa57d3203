"""
Tests for the product backends, the gemm boundary and matmul() dispatch.

Validates:
    - Every backend satisfies the ProductBackend protocol
    - Parallel backend: one task per row, max_workers handling, errors
      raised inside row tasks reach the caller
    - gemm: descriptor contract, transpose flags, alpha/beta, shape checks
    - matmul(): backend selection, info/timing content, warnings
    - densemat.engine stays importable beside the top-level product()
"""

import importlib
import math
import threading
import types

import numpy as np
import pytest

from densemat import Matrix, ValidationError, DimensionMismatchError
from densemat.core.protocols import ProductBackend
from densemat.engine import (
    matmul,
    ProductSolution,
    SequentialProductBackend,
    ParallelProductBackend,
    BLASProductBackend,
)
from densemat.engine import _common
from densemat.engine.backends.blas import (
    GeneralDescriptor,
    general_from_matrix,
    gemm,
    NO_TRANS,
    TRANS,
)


# ═══════════════════════════════════════════════════════════════════════
# Protocol conformance
# ═══════════════════════════════════════════════════════════════════════


class TestProtocol:

    @pytest.mark.parametrize("backend, name", [
        (SequentialProductBackend(), "sequential"),
        (ParallelProductBackend(), "parallel"),
        (BLASProductBackend(), "blas"),
    ])
    def test_backend_protocol(self, backend, name, integer_pair):
        assert isinstance(backend, ProductBackend)
        assert backend.name == name
        result = backend.solve(*integer_pair)
        assert result.backend_name == name
        assert result.params.matrix.shape == (6, 5)
        assert result.timing["total_seconds"] >= 0.0
        assert result.warnings == ()

    def test_rejects_non_matrix(self):
        with pytest.raises(ValidationError, match="expected Matrix"):
            SequentialProductBackend().solve(np.zeros((2, 2)), Matrix.zeros(2, 2))


# ═══════════════════════════════════════════════════════════════════════
# Parallel backend
# ═══════════════════════════════════════════════════════════════════════


class TestParallelBackend:

    def test_one_task_per_row(self, integer_pair):
        result = ParallelProductBackend(max_workers=2).solve(*integer_pair)
        assert result.info["n_tasks"] == 6
        assert result.info["max_workers"] == 2

    def test_invalid_max_workers(self):
        with pytest.raises(ValidationError):
            ParallelProductBackend(max_workers=0)

    def test_rows_computed_on_worker_threads(self, integer_pair, monkeypatch):
        seen = []
        original = _common.row_kernel

        def recording_kernel(a_vals, b_vals, i, inner, cols):
            seen.append((i, threading.get_ident()))
            return original(a_vals, b_vals, i, inner, cols)

        monkeypatch.setattr(
            "densemat.engine.backends.parallel.row_kernel", recording_kernel
        )
        ParallelProductBackend(max_workers=3).solve(*integer_pair)
        assert sorted(i for i, _ in seen) == list(range(6))
        assert threading.get_ident() not in {tid for _, tid in seen}

    def test_task_error_propagates(self, integer_pair, monkeypatch):
        def failing_kernel(a_vals, b_vals, i, inner, cols):
            if i == 3:
                raise ArithmeticError("row 3 failed")
            return [0.0] * cols

        monkeypatch.setattr(
            "densemat.engine.backends.parallel.row_kernel", failing_kernel
        )
        with pytest.raises(ArithmeticError, match="row 3 failed"):
            ParallelProductBackend().solve(*integer_pair)


# ═══════════════════════════════════════════════════════════════════════
# gemm boundary
# ═══════════════════════════════════════════════════════════════════════


class TestGemm:

    def test_descriptor_from_matrix(self):
        m = Matrix.from_buffer(2, 3, [1, 2, 3, 4, 5, 6])
        d = general_from_matrix(m)
        assert (d.rows, d.cols, d.stride) == (2, 3, 3)
        assert d.data.tolist() == [1.0, 2.0, 3.0, 4.0, 5.0, 6.0]

    def test_writes_into_c_buffer(self, rng):
        a = rng.standard_normal((3, 4))
        b = rng.standard_normal((4, 5))
        out = np.zeros(15)
        c = GeneralDescriptor(rows=3, cols=5, stride=5, data=out)
        gemm(
            NO_TRANS, NO_TRANS, 1.0,
            GeneralDescriptor(3, 4, 4, a.ravel()),
            GeneralDescriptor(4, 5, 5, b.ravel()),
            0.0, c,
        )
        np.testing.assert_allclose(out.reshape(3, 5), a @ b, rtol=1e-12)

    def test_alpha_beta(self, rng):
        a = rng.standard_normal((2, 2))
        b = rng.standard_normal((2, 2))
        existing = rng.standard_normal((2, 2))
        out = existing.ravel().copy()
        gemm(
            NO_TRANS, NO_TRANS, 2.0,
            GeneralDescriptor(2, 2, 2, a.ravel()),
            GeneralDescriptor(2, 2, 2, b.ravel()),
            0.5, GeneralDescriptor(2, 2, 2, out),
        )
        np.testing.assert_allclose(
            out.reshape(2, 2), 2.0 * a @ b + 0.5 * existing, rtol=1e-12
        )

    @pytest.mark.parametrize("trans_a, trans_b", [
        (TRANS, NO_TRANS), (NO_TRANS, TRANS), (TRANS, TRANS),
    ])
    def test_transpose_flags(self, rng, trans_a, trans_b):
        a = rng.standard_normal((3, 3))
        b = rng.standard_normal((3, 3))
        out = np.zeros(9)
        gemm(
            trans_a, trans_b, 1.0,
            GeneralDescriptor(3, 3, 3, a.ravel()),
            GeneralDescriptor(3, 3, 3, b.ravel()),
            0.0, GeneralDescriptor(3, 3, 3, out),
        )
        op_a = a.T if trans_a == TRANS else a
        op_b = b.T if trans_b == TRANS else b
        np.testing.assert_allclose(out.reshape(3, 3), op_a @ op_b, rtol=1e-12)

    def test_shape_mismatch(self):
        with pytest.raises(DimensionMismatchError, match="gemm"):
            gemm(
                NO_TRANS, NO_TRANS, 1.0,
                GeneralDescriptor(2, 3, 3, np.zeros(6)),
                GeneralDescriptor(2, 2, 2, np.zeros(4)),
                0.0, GeneralDescriptor(2, 2, 2, np.zeros(4)),
            )

    def test_padded_stride_rejected(self):
        with pytest.raises(ValidationError, match="stride"):
            gemm(
                NO_TRANS, NO_TRANS, 1.0,
                GeneralDescriptor(1, 1, 2, np.zeros(2)),
                GeneralDescriptor(1, 1, 1, np.zeros(1)),
                0.0, GeneralDescriptor(1, 1, 1, np.zeros(1)),
            )

    def test_zero_inner_dimension_clears_c(self):
        out = np.full(4, np.nan)
        gemm(
            NO_TRANS, NO_TRANS, 1.0,
            GeneralDescriptor(2, 0, 0, np.zeros(0)),
            GeneralDescriptor(0, 2, 2, np.zeros(0)),
            0.0, GeneralDescriptor(2, 2, 2, out),
        )
        assert out.tolist() == [0.0, 0.0, 0.0, 0.0]

    def test_zero_inner_dimension_scales_c(self):
        out = np.array([1.0, 2.0, 3.0, 4.0])
        gemm(
            NO_TRANS, NO_TRANS, 1.0,
            GeneralDescriptor(2, 0, 0, np.zeros(0)),
            GeneralDescriptor(0, 2, 2, np.zeros(0)),
            0.5, GeneralDescriptor(2, 2, 2, out),
        )
        assert out.tolist() == [0.5, 1.0, 1.5, 2.0]

    def test_blas_product_zero_inner_dimension(self):
        res = BLASProductBackend().solve(Matrix.zeros(2, 0), Matrix.zeros(0, 3))
        assert res.params.matrix == Matrix.zeros(2, 3)

    def test_unknown_flag(self):
        d = GeneralDescriptor(1, 1, 1, np.zeros(1))
        with pytest.raises(ValidationError, match="transpose flag"):
            gemm("X", NO_TRANS, 1.0, d, d, 0.0, d)


# ═══════════════════════════════════════════════════════════════════════
# matmul dispatch
# ═══════════════════════════════════════════════════════════════════════


class TestMatmul:

    @pytest.mark.parametrize("backend, expected", [
        ("auto", "blas"),
        ("blas", "blas"),
        ("sequential", "sequential"),
        ("parallel", "parallel"),
    ])
    def test_backend_selection(self, integer_pair, backend, expected):
        sol = matmul(*integer_pair, backend=backend)
        assert isinstance(sol, ProductSolution)
        assert sol.backend_name == expected
        assert sol.shape == (6, 5)

    def test_unknown_backend(self, integer_pair):
        with pytest.raises(ValidationError, match="Unknown backend"):
            matmul(*integer_pair, backend="gpu")

    def test_max_workers_requires_parallel(self, integer_pair):
        with pytest.raises(ValidationError, match="max_workers"):
            matmul(*integer_pair, backend="sequential", max_workers=2)

    def test_info_and_timing(self, integer_pair):
        sol = matmul(*integer_pair, backend="blas")
        assert sol.info["method"] == "blas_dgemm"
        assert sol.info["left_shape"] == (6, 3)
        assert sol.info["right_shape"] == (3, 5)
        assert sol.info["output_shape"] == (6, 5)
        assert {"total_seconds", "allocate", "marshal", "gemm"} <= set(sol.timing)

    def test_summary(self, integer_pair):
        text = matmul(*integer_pair, backend="parallel", max_workers=2).summary()
        assert "Matrix product (parallel)" in text
        assert "6x3 @ 3x5" in text
        assert "tasks:    6" in text

    def test_repr(self, integer_pair):
        assert repr(matmul(*integer_pair, backend="sequential")) == (
            "ProductSolution(shape=(6, 5), backend='sequential')"
        )

    def test_non_finite_warning(self):
        a = Matrix.from_buffer(1, 2, [math.nan, 1.0])
        b = Matrix.zeros(2, 1).add_scalar(1)
        with pytest.warns(RuntimeWarning, match="non-finite"):
            sol = matmul(a, b, backend="sequential")
        assert len(sol.warnings) == 1
        assert math.isnan(sol.matrix.at(0, 0))


# ═══════════════════════════════════════════════════════════════════════
# Package layout
# ═══════════════════════════════════════════════════════════════════════


class TestPackageLayout:

    def test_engine_is_a_module(self):
        import densemat.engine as engine
        assert isinstance(engine, types.ModuleType)
        assert engine.matmul is matmul

    def test_backend_modules_resolve_by_dotted_path(self):
        parallel = importlib.import_module("densemat.engine.backends.parallel")
        assert parallel.ParallelProductBackend is ParallelProductBackend

    def test_top_level_product_is_the_function(self, integer_pair):
        import densemat
        a, b = integer_pair
        assert callable(densemat.product)
        assert densemat.product(a, b) == a @ b
