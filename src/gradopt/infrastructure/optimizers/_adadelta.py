"""
ADADELTA optimizer.

ADADELTA adapts per-parameter step sizes from running averages of squared
gradients and squared steps, removing the need to tune a learning rate
(Zeiler, 2012, http://arxiv.org/pdf/1212.5701.pdf).

Algorithm
---------
    Require: decay rate rho, constant eps, initial parameters x_1
    E[g^2]_0 = 0, E[dx^2]_0 = 0
    for t = 1 .. T:
        g_t        = gradient
        E[g^2]_t   = rho * E[g^2]_{t-1} + (1 - rho) * g_t^2
        dx_t       = -RMS[dx]_{t-1} / RMS[g]_t * g_t
        E[dx^2]_t  = rho * E[dx^2]_{t-1} + (1 - rho) * dx_t^2
        x_{t+1}    = x_t + dx_t

where ``RMS[y] = sqrt(E[y^2] + eps)`` and all operations are per-component.

ADADELTA tends to oscillate and can diverge close to a minimum.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict

import numpy as np

from .._state import OptimizerState
from .._vector import zeros
from ._accumulate import accumulate
from ._base import StatefulOptimizer
from ._serialization import ConfigMixin, register_optimizer


@register_optimizer()
@dataclass(frozen=True, kw_only=True)
class Adadelta(ConfigMixin, StatefulOptimizer):
    """
    ADADELTA optimizer.

    State fields
    ------------
    acc_gradient : np.ndarray
        Running average of squared gradients, ``E[g^2]``.
    acc_step : np.ndarray
        Running average of squared steps, ``E[dx^2]``.

    Parameters
    ----------
    decay_rate : float, optional
        ``rho``, in [0, 1). Defaults to 0.95.
    conditioning : float, optional
        ``eps`` added inside the square roots. Must be > 0. Defaults to 1e-6.
    param_count : int, optional
        Initialize immediately for this many parameters.
    """

    decay_rate: float = 0.95
    conditioning: float = 1e-6

    def _validate(self) -> None:
        if not (0.0 <= self.decay_rate < 1.0):
            raise ValueError(f"decay_rate must be in [0, 1), got {self.decay_rate}")
        if not self.conditioning > 0.0:
            raise ValueError(f"conditioning must be > 0, got {self.conditioning}")

    def _rms(self, acc: np.ndarray) -> np.ndarray:
        return np.sqrt(acc + self.conditioning)

    def initialize(self, param_count: int) -> Dict[str, Any]:
        return {"acc_gradient": zeros(param_count), "acc_step": zeros(param_count)}

    def update(self, state: OptimizerState, gradient: np.ndarray) -> Dict[str, Any]:
        acc_gradient = accumulate(
            self.decay_rate, state["acc_gradient"], np.square(gradient)
        )
        # RMS of the step uses the accumulator from before this update.
        step = gradient * self._rms(state["acc_step"]) / self._rms(acc_gradient)
        acc_step = accumulate(self.decay_rate, state["acc_step"], np.square(step))

        return {
            "acc_gradient": acc_gradient,
            "acc_step": acc_step,
            "params": state.params - step,
        }
