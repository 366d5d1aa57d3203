"""
Core infrastructure for densemat.

This module provides shared abstractions and utilities used by the matrix
and product subpackages.

Key components:
    protocols: ProductBackend protocol
    result: Generic Result[P] envelope
    exceptions: Exception hierarchy
    validation: Input validators
    compute: Timing and tolerance tiers
"""

from densemat.core.protocols import ProductBackend
from densemat.core.result import Result
from densemat.core.exceptions import (
    DenseMatError,
    ValidationError,
    DimensionMismatchError,
    IndexOutOfRangeError,
    InvalidRangeError,
    EmptyInputError,
)

__all__ = [
    # Protocols
    "ProductBackend",
    # Result
    "Result",
    # Exceptions
    "DenseMatError",
    "ValidationError",
    "DimensionMismatchError",
    "IndexOutOfRangeError",
    "InvalidRangeError",
    "EmptyInputError",
]
