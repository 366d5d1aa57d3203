"""
Human-readable rendering of a Matrix.

One line per row; every cell is printed fixed-width with two decimals
and followed by a space.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from densemat.matrix.design import Matrix


CELL_WIDTH = 10
CELL_PRECISION = 2


def format_matrix(
    m: Matrix,
    width: int = CELL_WIDTH,
    precision: int = CELL_PRECISION,
) -> str:
    """Render m as a row-per-line grid."""
    lines = []
    for row in m.to_list():
        lines.append(''.join(f"{v:{width}.{precision}f} " for v in row) + "\n")
    return ''.join(lines)
