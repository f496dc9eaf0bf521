from ._errors import (
    OptimizerConfigurationError,
    OptimizerNotInitializedError,
    ShapeMismatchError,
)
from ._optimizers import IGradientOptimizer, IIntrospection, IOptimizer, IParameters
from .types import VectorLike
