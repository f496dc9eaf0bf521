"""
NumPy-backed helpers for dense parameter and gradient vectors.

All optimizer arithmetic runs on one-dimensional ``float64`` arrays. The
helpers here are the only place where caller-supplied vectors are coerced,
so shape problems surface as `ShapeMismatchError` at the boundary instead of
as broadcasting surprises deep inside an update rule.
"""

from __future__ import annotations

import numpy as np

from ..domain._errors import ShapeMismatchError
from ..domain.types import VectorLike


def as_vector(x: VectorLike, *, what: str = "vector") -> np.ndarray:
    """
    Coerce ``x`` to a one-dimensional ``float64`` array.

    Parameters
    ----------
    x : VectorLike
        Array-like input.
    what : str, optional
        Name used in error messages.

    Returns
    -------
    np.ndarray
        A 1-D ``float64`` array. No copy is made when ``x`` already is one.

    Raises
    ------
    ShapeMismatchError
        If ``x`` is not one-dimensional.
    """
    arr = np.asarray(x, dtype=np.float64)
    if arr.ndim != 1:
        raise ShapeMismatchError(f"number of dimensions of {what}", 1, arr.ndim)
    return arr


def zeros(n: int) -> np.ndarray:
    """
    Return a zero vector of length ``n``.
    """
    if n < 0:
        raise ValueError(f"vector length must be >= 0, got {n}")
    return np.zeros(int(n), dtype=np.float64)


def frozen_copy(x: VectorLike, *, what: str = "vector") -> np.ndarray:
    """
    Return a read-only ``float64`` copy of ``x``.
    """
    arr = np.array(as_vector(x, what=what), dtype=np.float64, copy=True)
    arr.setflags(write=False)
    return arr


def check_same_length(expected: int, x: np.ndarray, *, what: str) -> None:
    """
    Raise `ShapeMismatchError` unless ``len(x) == expected``.
    """
    if x.shape[0] != expected:
        raise ShapeMismatchError(what, expected, int(x.shape[0]))
