"""
Immutable optimizer state.

`OptimizerState` is the value threaded from one optimizer step to the next.
It is a read-only mapping from field names to either vectors (stored as
read-only NumPy arrays) or scalars (e.g. a step counter). Every state carries
a ``params`` vector, and every vector field has the same length as
``params``.

Each update produces a brand-new state; previous states stay valid and can
be inspected for as long as the caller keeps a reference to them.
"""

from __future__ import annotations

from typing import Any, Dict, Iterator, Mapping

import numpy as np

from ..domain._errors import ShapeMismatchError
from ._vector import check_same_length, frozen_copy

PARAMS = "params"


def _freeze_value(name: str, value: Any) -> Any:
    if isinstance(value, (bool, np.bool_)):
        return bool(value)
    if isinstance(value, (int, np.integer)):
        return int(value)
    if isinstance(value, (float, np.floating)):
        return float(value)
    return frozen_copy(value, what=name)


class OptimizerState(Mapping[str, Any]):
    """
    Read-only snapshot of an optimizer's state.

    Parameters
    ----------
    fields : Mapping[str, Any]
        Field values. Must contain ``"params"``. Vector-like values are
        copied into read-only ``float64`` arrays; integer and float scalars
        are stored as Python numbers.

    Raises
    ------
    KeyError
        If ``"params"`` is missing.
    ShapeMismatchError
        If any vector field's length differs from ``len(params)``.
    """

    __slots__ = ("_fields",)

    def __init__(self, fields: Mapping[str, Any]) -> None:
        if PARAMS not in fields:
            raise KeyError(f"optimizer state requires a '{PARAMS}' field")

        frozen: Dict[str, Any] = {
            name: _freeze_value(name, value) for name, value in fields.items()
        }
        if not isinstance(frozen[PARAMS], np.ndarray):
            raise ShapeMismatchError(f"number of dimensions of '{PARAMS}'", 1, 0)
        n = int(frozen[PARAMS].shape[0])
        for name, value in frozen.items():
            if isinstance(value, np.ndarray):
                check_same_length(n, value, what=f"state field '{name}'")

        object.__setattr__(self, "_fields", frozen)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("OptimizerState is immutable")

    def __getitem__(self, key: str) -> Any:
        return self._fields[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __repr__(self) -> str:
        inner = ", ".join(f"{k}={v!r}" for k, v in self._fields.items())
        return f"OptimizerState({inner})"

    @property
    def params(self) -> np.ndarray:
        """The parameter vector recorded in this state."""
        return self._fields[PARAMS]

    @property
    def param_count(self) -> int:
        """Length of the parameter vector (and of every vector field)."""
        return int(self.params.shape[0])

    def evolve(self, **changes: Any) -> "OptimizerState":
        """
        Return a new state with ``changes`` applied.

        The receiver is left untouched. Changing the length of ``params``
        without changing every other vector field accordingly raises
        `ShapeMismatchError`.
        """
        merged = dict(self._fields)
        merged.update(changes)
        return OptimizerState(merged)

    def introspect(self) -> Dict[str, Any]:
        """
        Return every field except ``params`` as a plain dict.
        """
        return {k: v for k, v in self._fields.items() if k != PARAMS}

