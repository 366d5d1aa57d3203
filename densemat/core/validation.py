"""
Input validation utilities for densemat.

These validators follow the "fail fast, fail loud" principle. They raise
immediately with clear error messages rather than silently correcting
or making assumptions about user intent.

Design principles:
    - No silent type coercion (except np.asarray on array-likes)
    - No clamping of out-of-range indices or slice bounds
    - Clear, actionable error messages with actual values
    - Each function validates ONE thing
    - Validators work on shapes, never on Matrix objects
"""

from typing import Any, Callable, Sequence
import numbers

import numpy as np
from numpy.typing import ArrayLike, NDArray

from densemat.core.exceptions import (
    ValidationError,
    DimensionMismatchError,
    IndexOutOfRangeError,
    InvalidRangeError,
    EmptyInputError,
)


Shape = tuple[int, int]


def check_array(
    array: ArrayLike,
    name: str,
) -> NDArray[np.float64]:
    """
    Validate and convert input to a float64 numpy array.

    Accepts any array-like and converts to numpy array. Rejects inputs
    that result in object dtype (indicating mixed types or non-numeric data)
    and complex input, which has no lossless float64 representation.

    Args:
        array: Input to validate
        name: Parameter name for error messages

    Returns:
        numpy.ndarray with dtype float64 (always a new array)

    Raises:
        ValidationError: If input cannot be converted to a real numeric array
    """
    try:
        result = np.array(array)
    except (ValueError, TypeError) as e:
        raise ValidationError(f"{name}: cannot convert to array: {e}") from e

    if result.dtype == object:
        raise ValidationError(
            f"{name}: converted to object dtype, indicating mixed types or non-numeric data"
        )

    if np.issubdtype(result.dtype, np.bool_):
        return result.astype(np.float64)

    if not np.issubdtype(result.dtype, np.number):
        raise ValidationError(
            f"{name}: non-numeric dtype {result.dtype}, expected numeric data"
        )

    if np.issubdtype(result.dtype, np.complexfloating):
        raise ValidationError(
            f"{name}: complex dtype {result.dtype}, expected real numbers"
        )

    return result.astype(np.float64, copy=False)


def check_ndim(array: NDArray[np.floating[Any]], ndim: int, name: str) -> None:
    """
    Verify array has exactly the specified number of dimensions.

    Args:
        array: Array to check
        ndim: Required number of dimensions
        name: Parameter name for error messages

    Raises:
        DimensionMismatchError: If array has wrong number of dimensions
    """
    if array.ndim != ndim:
        raise DimensionMismatchError(
            f"{name}: expected {ndim}D array, got {array.ndim}D with shape {array.shape}",
            operation=name,
        )


def check_dimension(value: Any, name: str) -> int:
    """
    Verify a matrix dimension is a non-negative integer.

    Args:
        value: Candidate row or column count
        name: Parameter name for error messages

    Returns:
        The dimension as a plain int

    Raises:
        ValidationError: If value is not an integer or is negative
    """
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise ValidationError(
            f"{name}: expected a non-negative integer, got {type(value).__name__} {value!r}"
        )
    if value < 0:
        raise ValidationError(f"{name}: must be >= 0, got {value}")
    return int(value)


def check_buffer_length(length: int, rows: int, cols: int) -> None:
    """
    Verify a flat buffer holds exactly rows * cols values.

    Raises:
        DimensionMismatchError: If the length does not match
    """
    if length != rows * cols:
        raise DimensionMismatchError(
            f"mismatched dimensions and data: {rows} x {cols} != {length}",
            operation='from_buffer',
            left_shape=(rows, cols),
        )


def check_index(i: Any, j: Any, shape: Shape) -> None:
    """
    Verify (i, j) addresses a cell of a matrix with the given shape.

    Raises:
        IndexOutOfRangeError: If either coordinate is negative or too large
    """
    rows, cols = shape
    for value in (i, j):
        if isinstance(value, bool) or not isinstance(value, numbers.Integral):
            raise IndexOutOfRangeError(
                f"element ({i!r}, {j!r}) is not an integer position",
                index=(i, j),
                shape=shape,
            )
    if i < 0 or i >= rows or j < 0 or j >= cols:
        raise IndexOutOfRangeError(
            f"element ({i}, {j}) is out of range for a {rows}x{cols} matrix",
            index=(int(i), int(j)),
            shape=shape,
        )


def check_range(start: int, stop: int, extent: int, axis: str) -> None:
    """
    Verify a half-open slice [start, stop) lies within [0, extent].

    Args:
        start: Inclusive start
        stop: Exclusive stop
        extent: Number of rows or columns being sliced
        axis: 'rows' or 'cols', for error messages

    Raises:
        InvalidRangeError: If a bound is not an integer, start < 0,
            stop > extent or stop < start
    """
    for value in (start, stop):
        if isinstance(value, bool) or not isinstance(value, numbers.Integral):
            raise InvalidRangeError(
                f"{axis} range [{start!r}, {stop!r}) has a non-integer bound",
                start=start,
                stop=stop,
                extent=extent,
                axis=axis,
            )
    if start < 0 or stop > extent or stop < start:
        raise InvalidRangeError(
            f"bad {axis} range [{start}, {stop}) for {extent} {axis}",
            start=start,
            stop=stop,
            extent=extent,
            axis=axis,
        )


def check_same_shape(left: Shape, right: Shape, operation: str) -> None:
    """
    Verify two operands of an element-wise operation have equal shapes.

    Raises:
        DimensionMismatchError: If the shapes differ
    """
    if left != right:
        raise DimensionMismatchError(
            f"can't compute {operation} of matrices with dimensions "
            f"{left[0]}x{left[1]} and {right[0]}x{right[1]}",
            operation=operation,
            left_shape=left,
            right_shape=right,
        )


def check_conformable(left: Shape, right: Shape) -> None:
    """
    Verify left.cols == right.rows for a matrix product.

    The error reports all four dimensions.

    Raises:
        DimensionMismatchError: If the inner dimensions differ
    """
    if left[1] != right[0]:
        raise DimensionMismatchError(
            f"can't compute product of matrices with dimensions "
            f"{left[0]}x{left[1]} and {right[0]}x{right[1]}",
            operation='product',
            left_shape=left,
            right_shape=right,
        )


def check_nonempty(items: Sequence[Any], operation: str) -> None:
    """
    Verify a variadic operation received at least one operand.

    Raises:
        EmptyInputError: If items is empty
    """
    if len(items) == 0:
        raise EmptyInputError(
            f"can't {operation} an empty list of matrices",
            operation=operation,
        )


def check_shared_extent(
    shapes: Sequence[Shape],
    axis: int,
    operation: str,
) -> None:
    """
    Verify every shape has the same size along one axis.

    Args:
        shapes: Operand shapes in argument order
        axis: 0 to require equal row counts, 1 for equal column counts
        operation: Operation name for error messages

    Raises:
        DimensionMismatchError: On the first operand that disagrees with the first
    """
    expected = shapes[0]
    label = 'rows' if axis == 0 else 'cols'
    for position, shape in enumerate(shapes):
        if shape[axis] != expected[axis]:
            raise DimensionMismatchError(
                f"can't {operation} matrices with different number of {label}: "
                f"argument 0 is {expected[0]}x{expected[1]}, "
                f"argument {position} is {shape[0]}x{shape[1]}",
                operation=operation,
                left_shape=expected,
                right_shape=shape,
            )


def check_callable(f: Callable[..., Any], name: str) -> None:
    """
    Verify a traversal function is callable.

    Raises:
        ValidationError: If f is not callable
    """
    if not callable(f):
        raise ValidationError(
            f"{name}: expected a callable, got {type(f).__name__}"
        )


def check_max_workers(max_workers: int | None) -> None:
    """
    Verify a thread pool size is None or a positive integer.

    Raises:
        ValidationError: If max_workers is not None and < 1
    """
    if max_workers is None:
        return
    if isinstance(max_workers, bool) or not isinstance(max_workers, numbers.Integral):
        raise ValidationError(
            f"max_workers: expected a positive integer or None, got {max_workers!r}"
        )
    if max_workers < 1:
        raise ValidationError(f"max_workers: must be >= 1, got {max_workers}")
