"""
Free-function forms of the optimizer capability set.

These accept anything that can act as an optimizer:

- an `IOptimizer` value (`SGD()`, `Adam(param_count=3)`, ...), or
- a plain callable ``fn(params, gradient) -> params``, which is wrapped in
  `FunctionOptimizer`.

Passing an optimizer *class* instead of an optimizer value is rejected with
`OptimizerConfigurationError`.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Tuple, Union

import numpy as np

from ...domain._errors import OptimizerConfigurationError
from ...domain._optimizers import IOptimizer
from ...domain.types import VectorLike
from ._base import FunctionOptimizer, UpdateRule

OptimizerLike = Union[IOptimizer, UpdateRule]


def as_optimizer(obj: OptimizerLike) -> IOptimizer:
    """
    Return ``obj`` as an optimizer value.

    Raises
    ------
    OptimizerConfigurationError
        If ``obj`` is a class, or neither an optimizer nor callable.
    """
    if isinstance(obj, type):
        raise OptimizerConfigurationError(
            obj.__name__, "an optimizer class was passed instead of an instance"
        )
    if isinstance(obj, IOptimizer):
        return obj
    if callable(obj):
        return FunctionOptimizer(obj)
    raise OptimizerConfigurationError(type(obj).__name__)


def parameters(optimizer: OptimizerLike) -> Optional[VectorLike]:
    return as_optimizer(optimizer).parameters()


def compute_parameters(
    optimizer: OptimizerLike, gradient: VectorLike, params: VectorLike
) -> Tuple[np.ndarray, IOptimizer]:
    """
    Step ``optimizer`` once.

    Returns
    -------
    tuple
        ``(new_params, new_optimizer)``. Bare callables come back wrapped in
        `FunctionOptimizer`.
    """
    return as_optimizer(optimizer).compute_parameters(gradient, params)


def get_state(optimizer: OptimizerLike) -> Dict[str, Any]:
    return dict(as_optimizer(optimizer).get_state())
