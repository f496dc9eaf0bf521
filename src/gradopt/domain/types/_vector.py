"""
Domain-level structural typing for dense parameter and gradient vectors.

This module defines :class:`VectorLike`, a backend-agnostic Protocol for
one-dimensional numeric arrays, without introducing a dependency on NumPy in
the domain layer.

Typical implementers include:
- ``numpy.ndarray`` with ``ndim == 1``
- Backend-specific arrays that emulate ndarray semantics

Plain Python sequences of floats are also accepted wherever a vector is
expected; infrastructure code coerces them before doing arithmetic.
"""

from __future__ import annotations

from typing import Any, Protocol, Sequence, Tuple, Union, runtime_checkable


@runtime_checkable
class NDVectorLike(Protocol):
    """
    Structural contract for ndarray-like vectors.

    Notes
    -----
    Only the members needed to reason about vector length are modelled. The
    arithmetic itself is delegated to the infrastructure layer.
    """

    @property
    def shape(self) -> Tuple[int, ...]: ...

    @property
    def ndim(self) -> int: ...

    @property
    def dtype(self) -> Any: ...

    def __len__(self) -> int: ...


VectorLike = Union[NDVectorLike, Sequence[float]]
