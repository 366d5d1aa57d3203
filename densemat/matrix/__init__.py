"""
Dense immutable matrices.

Public API:
    Matrix                       - the matrix type (constructors, accessors,
                                   slicing, filtering, transpose, scalar ops)
    map_cells(f, m)              - apply f to every cell
    concatenate_cols(*ms)        - side by side
    concatenate_rows(*ms)        - stacked vertically
    equals(a, b)                 - exact equality
    allclose(a, b, tier)         - equality within a tolerance tier
    dot / plus / minus           - element-wise algebra
    reduce_cells / sum_cells     - row-major folds
    format_matrix(m)             - fixed-width text rendering
"""

from densemat.matrix.design import (
    Matrix,
    map_cells,
    concatenate_cols,
    concatenate_rows,
)
from densemat.matrix._algebra import (
    equals,
    allclose,
    dot,
    plus,
    minus,
    reduce_cells,
    sum_cells,
)
from densemat.matrix._format import format_matrix

__all__ = [
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
]
