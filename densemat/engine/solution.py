"""
Matrix product solution types.

Contains the parameter payload and user-facing solution wrapper.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from densemat.core.result import Result
from densemat.matrix.design import Matrix


@dataclass(frozen=True)
class ProductParams:
    """Parameter payload for a matrix product."""
    matrix: Matrix


@dataclass
class ProductSolution:
    """
    User-facing product result.

    Wraps Result[ProductParams] and provides convenient accessors.
    """
    _result: Result[ProductParams]

    @property
    def matrix(self) -> Matrix:
        """The product."""
        return self._result.params.matrix

    @property
    def shape(self) -> tuple[int, int]:
        return self.matrix.shape

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    def summary(self) -> str:
        """Short multi-line description of how the product was computed."""
        info = self.info
        left, right = info['left_shape'], info['right_shape']
        lines = [
            f"Matrix product ({self.backend_name})",
            f"  operands: {left[0]}x{left[1]} @ {right[0]}x{right[1]}",
            f"  result:   {self.shape[0]}x{self.shape[1]}",
        ]
        if 'n_tasks' in info:
            lines.append(f"  tasks:    {info['n_tasks']}")
        if self.timing is not None:
            lines.append(f"  time:     {self.timing['total_seconds']:.6f}s")
        for w in self.warnings:
            lines.append(f"  warning:  {w}")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"ProductSolution(shape={self.shape}, "
            f"backend={self.backend_name!r})"
        )
