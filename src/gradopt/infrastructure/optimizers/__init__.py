from ._accumulate import accumulate
from ._base import (
    FunctionAdapter,
    FunctionOptimizer,
    StatefulOptimizer,
    StatelessOptimizer,
    to_stateful,
)
from ._sgd import SGD
from ._adadelta import Adadelta
from ._adam import Adam
from ._functional import as_optimizer, compute_parameters, get_state, parameters
from ._serialization import (
    optimizer_from_config,
    optimizer_to_config,
    register_optimizer,
    registered_optimizers,
)
