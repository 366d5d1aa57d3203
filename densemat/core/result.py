"""
Generic result container for densemat computations.

The Result class is the envelope every product backend returns. It keeps
the payload next to the metadata describing how it was produced, so the
timing and diagnostics of a computation travel with its output.

Design decisions:
    - Generic over parameter payload P for type safety
    - info dict for flexible metadata (method, operand shapes, task counts)
    - timing is optional (don't burden unit tests)
    - Immutable (frozen=True)
"""

from dataclasses import dataclass, field
from typing import TypeVar, Generic, Any

P = TypeVar('P')  # Parameter payload type


@dataclass(frozen=True)
class Result(Generic[P]):
    """
    Immutable result envelope for matrix computations.

    Type Parameters:
        P: The payload type

    Attributes:
        params: Payload (e.g. ProductParams holding the product matrix)
        info: Structured metadata (method, shapes, n_tasks, ...)
        timing: Execution timing breakdown, or None if not measured
        backend_name: Identifier of the backend that produced this result
        warnings: Non-fatal issues encountered during computation

    Examples:
        >>> Result(
        ...     params=ProductParams(matrix=c),
        ...     info={'method': 'sequential', 'left_shape': (2, 3)},
        ...     timing={'total_seconds': 0.01},
        ...     backend_name='sequential'
        ... )
    """
    params: P
    info: dict[str, Any]
    timing: dict[str, float] | None
    backend_name: str
    warnings: tuple[str, ...] = field(default_factory=tuple)

    def has_warning(self, substring: str) -> bool:
        """Check if any warning contains the given substring."""
        return any(substring in w for w in self.warnings)
