"""
gradopt: gradient-based parameter optimizers.

Optimizers are immutable values. Step one with
``new_params, optimizer = optimizer.compute_parameters(gradient, params)``
and rebind both names.
"""

from .domain import (
    IGradientOptimizer,
    IIntrospection,
    IOptimizer,
    IParameters,
    OptimizerConfigurationError,
    OptimizerNotInitializedError,
    ShapeMismatchError,
    VectorLike,
)
from .infrastructure import OptimizerState
from .infrastructure.optimizers import (
    SGD,
    Adadelta,
    Adam,
    FunctionAdapter,
    FunctionOptimizer,
    StatefulOptimizer,
    StatelessOptimizer,
    accumulate,
    as_optimizer,
    compute_parameters,
    get_state,
    optimizer_from_config,
    optimizer_to_config,
    parameters,
    register_optimizer,
    registered_optimizers,
    to_stateful,
)

__version__ = "0.1.0"
