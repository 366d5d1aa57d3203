"""
Core protocols for densemat.

These define structural interfaces that product strategies must satisfy.
We use Protocol (structural typing) rather than ABC (nominal typing) so a
caller can plug in their own strategy without inheriting from anything.

Design Principles:
    - Minimal contracts: prescribe only what's truly universal
    - Stateless strategies: all configuration happens at construction time
"""

from typing import Protocol, TypeVar, runtime_checkable, TYPE_CHECKING

if TYPE_CHECKING:
    from densemat.core.result import Result
    from densemat.matrix.design import Matrix

P = TypeVar('P', covariant=True)  # Parameter payload type


@runtime_checkable
class ProductBackend(Protocol[P]):
    """
    Protocol for matrix product strategies.

    Each backend takes two conformant matrices and produces a Result whose
    payload holds the product. Backends are stateless between calls, which
    makes them easy to test and swap.

    Type Parameters:
        P: The parameter payload type this backend produces
    """

    @property
    def name(self) -> str:
        """
        Backend identifier.

        Examples: 'sequential', 'parallel', 'blas'
        """
        ...

    def solve(self, a: 'Matrix', b: 'Matrix') -> 'Result[P]':
        """
        Compute the product a @ b.

        Args:
            a: Left operand, shape (m, k)
            b: Right operand, shape (k, n)

        Returns:
            Result envelope whose payload carries the (m, n) product

        Raises:
            DimensionMismatchError: If a.cols != b.rows
        """
        ...
