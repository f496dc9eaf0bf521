from ._state import OptimizerState
from ._vector import as_vector, zeros
