"""
Exception hierarchy for densemat.

All exceptions inherit from DenseMatError to allow catching any
library-specific error. Every error raised by this package signals a
programming error at the call site: nothing is retried and no partial
result is ever returned.

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages are actionable with actual vs expected values
    - Never catch and re-raise with less information
"""


class DenseMatError(Exception):
    """Base exception for all densemat errors."""
    pass


class ValidationError(DenseMatError):
    """
    Input validation failed.

    Raised when user-provided inputs fail validation checks.
    """
    pass


class DimensionMismatchError(ValidationError):
    """
    Operand shapes are incompatible for the requested operation.

    Raised by concatenation, element-wise algebra, buffer construction
    and the matrix product.

    Attributes:
        operation: Name of the operation that rejected the operands
        left_shape: (rows, cols) of the first offending operand, if any
        right_shape: (rows, cols) of the second offending operand, if any
    """

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        left_shape: tuple[int, int] | None = None,
        right_shape: tuple[int, int] | None = None,
    ):
        super().__init__(message)
        self.operation = operation
        self.left_shape = left_shape
        self.right_shape = right_shape


class IndexOutOfRangeError(ValidationError, IndexError):
    """
    Element accessor called with out-of-bounds coordinates.

    Negative coordinates are always out of range: there is no
    wrap-around indexing.

    Attributes:
        index: The (i, j) coordinates that were requested
        shape: (rows, cols) of the matrix
    """

    def __init__(
        self,
        message: str,
        index: tuple[int, int] | None = None,
        shape: tuple[int, int] | None = None,
    ):
        super().__init__(message)
        self.index = index
        self.shape = shape


class InvalidRangeError(ValidationError):
    """
    Slice bounds violate 0 <= start <= stop <= extent.

    Attributes:
        start: Requested start (inclusive)
        stop: Requested stop (exclusive)
        extent: Size of the sliced axis
        axis: 'rows' or 'cols'
    """

    def __init__(
        self,
        message: str,
        start: int | None = None,
        stop: int | None = None,
        extent: int | None = None,
        axis: str | None = None,
    ):
        super().__init__(message)
        self.start = start
        self.stop = stop
        self.extent = extent
        self.axis = axis


class EmptyInputError(ValidationError):
    """
    An operation that needs at least one operand received none.

    Attributes:
        operation: Name of the operation
    """

    def __init__(self, message: str, operation: str | None = None):
        super().__init__(message)
        self.operation = operation
