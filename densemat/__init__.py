"""
densemat: dense immutable matrices for Python.

A row-major float64 matrix with copy-on-write operations, element-wise
algebra and a matrix product available through three interchangeable
strategies (sequential, thread-parallel, BLAS).

Submodules:
    matrix: The Matrix type, structural operations and element-wise algebra
    engine: Product strategies and dispatch
    core: Exceptions, validation, result envelope, timing, tolerances
"""

__version__ = "0.1.0"

from densemat.matrix import (
    Matrix,
    map_cells,
    concatenate_cols,
    concatenate_rows,
    equals,
    allclose,
    dot,
    plus,
    minus,
    reduce_cells,
    sum_cells,
    format_matrix,
)
from densemat.engine import (
    matmul,
    product,
    parallel_product,
    blas_product,
)
from densemat.core.exceptions import (
    DenseMatError,
    ValidationError,
    DimensionMismatchError,
    IndexOutOfRangeError,
    InvalidRangeError,
    EmptyInputError,
)

__all__ = [
    "__version__",
    "Matrix",
    "map_cells",
    "concatenate_cols",
    "concatenate_rows",
    "equals",
    "allclose",
    "dot",
    "plus",
    "minus",
    "reduce_cells",
    "sum_cells",
    "format_matrix",
    "matmul",
    "product",
    "parallel_product",
    "blas_product",
    "DenseMatError",
    "ValidationError",
    "DimensionMismatchError",
    "IndexOutOfRangeError",
    "InvalidRangeError",
    "EmptyInputError",
]
