"""
Optimizer base classes and the stateless-to-stateful adapter.

Two optimizer representations share one capability set
(`gradopt.domain.IOptimizer`):

- `StatelessOptimizer`: a pure update rule ``(params, gradient) -> params``.
  It carries no state and introspects to an empty mapping.
- `StatefulOptimizer`: an algorithm with per-parameter accumulators. It
  supplies ``initialize(param_count)`` and ``update(state, gradient)`` and
  carries an immutable `OptimizerState` between steps.

`to_stateful` converts any update rule into a `StatefulOptimizer` so that a
single stepping path drives both representations.

Design notes
------------
- Optimizers are frozen dataclasses. Stepping returns a new optimizer value
  built with `dataclasses.replace`; the old value, and its state, remain
  valid.
- Stateful optimizers are initialized explicitly through `initialize_with`
  (or ``param_count=`` at construction). Stepping an uninitialized one
  raises `OptimizerNotInitializedError`.
- The caller's ``params`` are authoritative: they overwrite the state's
  ``params`` slot before every update.
"""

from __future__ import annotations

import dataclasses
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Mapping, Optional, Tuple

import numpy as np
from typing_extensions import Self

from ...domain._errors import (
    OptimizerConfigurationError,
    OptimizerNotInitializedError,
    ShapeMismatchError,
)
from ...domain.types import VectorLike
from .._state import PARAMS, OptimizerState
from .._vector import as_vector, check_same_length, zeros

logger = logging.getLogger(__name__)

UpdateRule = Callable[[np.ndarray, np.ndarray], VectorLike]


def _coerce_step_inputs(
    gradient: VectorLike, params: VectorLike
) -> Tuple[np.ndarray, np.ndarray]:
    g = as_vector(gradient, what="gradient")
    p = as_vector(params, what="params")
    check_same_length(p.shape[0], g, what="gradient")
    return g, p


class StatelessOptimizer(ABC):
    """
    Base class for optimizers expressed as a pure update rule.

    Subclasses implement ``__call__(params, gradient) -> new_params``.
    ``params`` is a private writable copy, so rules may update it in place
    and return it. The result must be a flat vector of the same length.
    """

    @abstractmethod
    def __call__(self, params: np.ndarray, gradient: np.ndarray) -> VectorLike:
        """Return the updated parameter vector."""

    def parameters(self) -> None:
        return None

    def get_state(self) -> Dict[str, Any]:
        return {}

    def compute_parameters(
        self, gradient: VectorLike, params: VectorLike
    ) -> Tuple[np.ndarray, Self]:
        """
        Apply the rule once through the stateful adapter.

        Returns
        -------
        tuple
            ``(new_params, self)``. A stateless optimizer is its own
            successor.
        """
        g, p = _coerce_step_inputs(gradient, params)
        adapted = to_stateful(self).initialize_with(p.shape[0])
        new_params, _ = adapted.compute_parameters(g, p)
        return new_params, self


@dataclass(frozen=True)
class FunctionOptimizer(StatelessOptimizer):
    """
    Wrap a plain callable ``fn(params, gradient) -> params`` as an optimizer.
    """

    fn: UpdateRule

    def __call__(self, params: np.ndarray, gradient: np.ndarray) -> VectorLike:
        return self.fn(params, gradient)


@dataclass(frozen=True, kw_only=True)
class StatefulOptimizer(ABC):
    """
    Base class for optimizers with per-parameter accumulators.

    Subclasses implement `initialize` and `update`. Both return plain dicts;
    the base class wraps them in `OptimizerState`, which enforces that every
    vector field matches the parameter count.

    Parameters
    ----------
    param_count : int, optional
        When given, the optimizer is initialized immediately for this many
        parameters.
    state : OptimizerState, optional
        Carried state. Normally left unset by callers.

    Notes
    -----
    Equality compares hyperparameters only. ``param_count`` and ``state``
    are excluded, so an optimizer compares equal to its successors.
    """

    param_count: Optional[int] = field(default=None, compare=False, repr=False)
    state: Optional[OptimizerState] = field(default=None, compare=False)

    def __post_init__(self) -> None:
        self._validate()
        if self.param_count is not None:
            if self.param_count < 0:
                raise ValueError(f"param_count must be >= 0, got {self.param_count}")
            if self.state is None:
                object.__setattr__(
                    self, "state", self._initial_state(int(self.param_count))
                )

    def _validate(self) -> None:
        """Validate hyperparameters. Raises ValueError."""

    @abstractmethod
    def initialize(self, param_count: int) -> Dict[str, Any]:
        """
        Return fresh accumulator fields for ``param_count`` parameters.

        The returned dict must not contain ``params``; the placeholder is
        added by `initialize_with`.
        """

    @abstractmethod
    def update(self, state: OptimizerState, gradient: np.ndarray) -> Dict[str, Any]:
        """
        Return the complete next state (including ``params``).
        """

    @property
    def name(self) -> str:
        return type(self).__name__

    @property
    def initialized(self) -> bool:
        return self.state is not None

    def _initial_state(self, param_count: int) -> OptimizerState:
        fields = dict(self.initialize(param_count))
        fields[PARAMS] = zeros(param_count)
        logger.debug("Initialized %s state for %d parameters", self.name, param_count)
        return OptimizerState(fields)

    def initialize_with(self, param_count: int) -> Self:
        """
        Return a copy of this optimizer with freshly initialized state.

        Parameters
        ----------
        param_count : int
            Length of the parameter vectors this optimizer will be stepped
            with. Fixed for the lifetime of the returned optimizer.
        """
        if param_count < 0:
            raise ValueError(f"param_count must be >= 0, got {param_count}")
        return dataclasses.replace(
            self, param_count=int(param_count), state=self._initial_state(param_count)
        )

    def parameters(self) -> None:
        return None

    def get_state(self) -> Dict[str, Any]:
        """
        Return every state field except ``params``.

        Uninitialized optimizers return an empty dict.
        """
        if self.state is None:
            return {}
        return self.state.introspect()

    def compute_parameters(
        self, gradient: VectorLike, params: VectorLike
    ) -> Tuple[np.ndarray, Self]:
        """
        Apply one optimization step.

        Parameters
        ----------
        gradient : VectorLike
            Gradient at ``params``.
        params : VectorLike
            Current parameters; same length as ``gradient`` and as the
            carried state.

        Returns
        -------
        tuple
            ``(new_params, new_optimizer)``. ``new_params`` is read-only.

        Raises
        ------
        OptimizerNotInitializedError
            If the optimizer carries no state.
        ShapeMismatchError
            If the vector lengths disagree.
        """
        if self.state is None:
            raise OptimizerNotInitializedError(self.name)

        g, p = _coerce_step_inputs(gradient, params)
        check_same_length(self.state.param_count, p, what="params")

        current = self.state.evolve(**{PARAMS: p})
        next_state = OptimizerState(self.update(current, g))
        return next_state.params, dataclasses.replace(self, state=next_state)


_STRUCTURED = (Mapping, OptimizerState, StatelessOptimizer, StatefulOptimizer)


def _is_structured(value: Any) -> bool:
    if isinstance(value, _STRUCTURED):
        return True
    # e.g. a (params, state) pair returned by a stateful step
    if isinstance(value, (tuple, list)):
        return any(isinstance(v, _STRUCTURED) or callable(v) for v in value)
    return False


@dataclass(frozen=True, kw_only=True)
class FunctionAdapter(StatefulOptimizer):
    """
    Stateful view of a stateless update rule.

    The adapter has no accumulators; its state holds only ``params``. Each
    update applies ``rule`` to the recorded parameters and checks that the
    result is a flat parameter vector.
    """

    rule: UpdateRule

    @property
    def name(self) -> str:
        rule_name = getattr(self.rule, "__name__", type(self.rule).__name__)
        return f"{type(self).__name__}({rule_name})"

    def initialize(self, param_count: int) -> Dict[str, Any]:
        return {}

    def update(self, state: OptimizerState, gradient: np.ndarray) -> Dict[str, Any]:
        result = self.rule(state.params.copy(), gradient)

        # Common mistake: registering a factory instead of the optimizer it builds.
        if _is_structured(result) or callable(result):
            logger.debug("Rule %r returned %s", self.rule, type(result).__name__)
            raise OptimizerConfigurationError(type(result).__name__)

        try:
            new_params = as_vector(result, what="rule result")
        except ShapeMismatchError:
            raise
        except (TypeError, ValueError) as exc:
            raise OptimizerConfigurationError(type(result).__name__) from exc
        check_same_length(state.param_count, new_params, what="rule result")

        fields = dict(state)
        fields[PARAMS] = new_params
        return fields


def to_stateful(rule: UpdateRule) -> FunctionAdapter:
    """
    Convert a stateless update rule into a stateful optimizer.

    The returned adapter still needs `initialize_with` before stepping.
    """
    return FunctionAdapter(rule=rule)
