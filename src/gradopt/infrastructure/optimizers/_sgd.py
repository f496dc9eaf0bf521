"""
Stochastic Gradient Descent (SGD).

Steps by the negative gradient multiplied by the learning rate. Strictly
speaking this is plain gradient descent; it only becomes "stochastic" when the
objective supplying the gradients mini-batches. See
https://en.wikipedia.org/wiki/Stochastic_gradient_descent.

SGD is a pure update rule: it carries no state, and stepping it returns the
same optimizer value.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from ._base import StatelessOptimizer
from ._serialization import ConfigMixin, register_optimizer


@register_optimizer()
@dataclass(frozen=True, kw_only=True)
class SGD(ConfigMixin, StatelessOptimizer):
    """
    Stochastic Gradient Descent optimizer.

    Update rule
    -----------
        p <- p - learning_rate * g

    Parameters
    ----------
    learning_rate : float, optional
        Step multiplier. Must be > 0. Defaults to 0.1.
    """

    learning_rate: float = 0.1

    def __post_init__(self) -> None:
        if not self.learning_rate > 0.0:
            raise ValueError(f"learning_rate must be > 0, got {self.learning_rate}")

    def __call__(self, params: np.ndarray, gradient: np.ndarray) -> np.ndarray:
        return params - self.learning_rate * gradient
