"""
Adam optimizer.

Adam combines the ideas of AdaGrad and RMSProp: it keeps exponentially
decaying averages of past gradients (first moment) and past squared
gradients (second moment), and corrects both for their zero initialization
(Kingma & Ba, http://arxiv.org/pdf/1412.6980v8.pdf).

Algorithm
---------
    m_0 = 0, v_0 = 0, t = 0
    while not converged:
        t     = t + 1
        m_t   = beta1 * m_{t-1} + (1 - beta1) * g_t
        v_t   = beta2 * v_{t-1} + (1 - beta2) * g_t^2
        m_hat = m_t / (1 - beta1^t)
        v_hat = v_t / (1 - beta2^t)
        p_t   = p_{t-1} - alpha * m_hat / (sqrt(v_hat) + eps)

In practice Adam converges faster than ADADELTA and oscillates less.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Tuple

import numpy as np

from .._state import OptimizerState
from .._vector import zeros
from ._accumulate import accumulate
from ._base import StatefulOptimizer
from ._serialization import ConfigMixin, register_optimizer


@register_optimizer()
@dataclass(frozen=True, kw_only=True)
class Adam(ConfigMixin, StatefulOptimizer):
    """
    Adam optimizer.

    State fields
    ------------
    first_moment : np.ndarray
        Biased first moment estimate ``m``.
    second_moment : np.ndarray
        Biased second raw moment estimate ``v``.
    num_steps : int
        Number of updates applied so far, ``t``.

    Parameters
    ----------
    step_size : float, optional
        ``alpha``. Must be > 0. Defaults to 1e-3.
    first_moment_decay : float, optional
        ``beta1``, in [0, 1). Defaults to 0.9.
    second_moment_decay : float, optional
        ``beta2``, in [0, 1). Defaults to 0.999.
    conditioning : float, optional
        ``eps`` added to the denominator. Must be > 0. Defaults to 1e-8.
    param_count : int, optional
        Initialize immediately for this many parameters.

    Notes
    -----
    - ``num_steps`` is a Python int and therefore never overflows.
    - The counter is incremented before the bias corrections are computed.
    """

    step_size: float = 1e-3
    first_moment_decay: float = 0.9
    second_moment_decay: float = 0.999
    conditioning: float = 1e-8

    def _validate(self) -> None:
        if not self.step_size > 0.0:
            raise ValueError(f"step_size must be > 0, got {self.step_size}")
        for name in ("first_moment_decay", "second_moment_decay"):
            value = getattr(self, name)
            if not (0.0 <= value < 1.0):
                raise ValueError(f"{name} must be in [0, 1), got {value}")
        if not self.conditioning > 0.0:
            raise ValueError(f"conditioning must be > 0, got {self.conditioning}")

    def initialize(self, param_count: int) -> Dict[str, Any]:
        return {
            "first_moment": zeros(param_count),
            "second_moment": zeros(param_count),
            "num_steps": 0,
        }

    def bias_corrected(self, state: Mapping[str, Any]) -> Tuple[np.ndarray, np.ndarray]:
        """
        Return the bias-corrected moments ``(m_hat, v_hat)`` of ``state``.

        ``state`` may be an `OptimizerState` or the mapping returned by
        `get_state`.

        Uses the state's own ``num_steps``. Before the first step the
        correction is undefined and ValueError is raised.
        """
        t = int(state["num_steps"])
        if t < 1:
            raise ValueError("bias correction is undefined before the first step")
        return self._correct(state["first_moment"], state["second_moment"], t)

    def _correct(
        self, first_moment: np.ndarray, second_moment: np.ndarray, t: int
    ) -> Tuple[np.ndarray, np.ndarray]:
        m_hat = first_moment / (1.0 - self.first_moment_decay**t)
        v_hat = second_moment / (1.0 - self.second_moment_decay**t)
        return m_hat, v_hat

    def update(self, state: OptimizerState, gradient: np.ndarray) -> Dict[str, Any]:
        num_steps = int(state["num_steps"]) + 1
        b1, b2 = self.first_moment_decay, self.second_moment_decay

        first_moment = accumulate(b1, state["first_moment"], gradient)
        second_moment = accumulate(b2, state["second_moment"], np.square(gradient))

        m_hat, v_hat = self._correct(first_moment, second_moment, num_steps)

        step = self.step_size * (m_hat / (np.sqrt(v_hat) + self.conditioning))

        return {
            "params": state.params - step,
            "first_moment": first_moment,
            "second_moment": second_moment,
            "num_steps": num_steps,
        }
