"""
Domain-level optimizer contracts for gradopt.

This module defines the capability set every gradient optimizer implements,
split into three small protocols and one union protocol:

- `IParameters` exposes parameters an optimizer carries on its own.
- `IGradientOptimizer` performs one gradient-driven step.
- `IIntrospection` exposes internal state for diagnostics.
- `IOptimizer` combines all three.

Notes
-----
- Domain contracts are backend-agnostic and must not depend on NumPy or
  infrastructure implementations.
- Optimizers are values. `compute_parameters` never mutates the receiver;
  it returns the updated parameters together with the optimizer to use for
  the next step. Callers rebind their reference.
- Sequencing steps is the caller's responsibility. A single optimizer value
  must not be advanced twice from the same predecessor if the two results
  are meant to form one trajectory.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol, Tuple, runtime_checkable

from .types import VectorLike


@runtime_checkable
class IParameters(Protocol):
    """
    Access to parameters carried by the optimizer itself.
    """

    def parameters(self) -> Optional[VectorLike]:
        """
        Return the optimizer's own parameter vector, if any.

        Optimizers that receive parameters explicitly on every step return
        ``None``.
        """
        ...


@runtime_checkable
class IGradientOptimizer(Protocol):
    """
    Gradient-driven stepping contract.
    """

    def compute_parameters(
        self, gradient: VectorLike, params: VectorLike
    ) -> Tuple[VectorLike, "IGradientOptimizer"]:
        """
        Apply one optimization step.

        Parameters
        ----------
        gradient : VectorLike
            Gradient of the objective at ``params``.
        params : VectorLike
            Current parameter vector. Must have the same length as
            ``gradient``.

        Returns
        -------
        tuple
            ``(new_params, new_optimizer)``.
        """
        ...


@runtime_checkable
class IIntrospection(Protocol):
    """
    State inspection contract.
    """

    def get_state(self) -> Mapping[str, Any]:
        """
        Return the optimizer's introspectable state.

        The mapping excludes ``params``; stateless optimizers return an empty
        mapping.
        """
        ...


@runtime_checkable
class IOptimizer(IParameters, IGradientOptimizer, IIntrospection, Protocol):
    """
    Full optimizer capability set.
    """
