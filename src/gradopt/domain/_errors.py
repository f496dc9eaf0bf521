"""
Optimizer-related exceptions for gradopt.

These exceptions let optimizers fail fast and clearly when they are wired up
incorrectly or stepped with vectors that do not match their state. Numeric
degeneracy (NaN/Inf) is deliberately not represented here: it propagates
through the arithmetic like any other floating-point value.
"""


class OptimizerConfigurationError(TypeError):
    """
    Raised when something registered as an optimizer is not one.

    The typical cause is handing over an optimizer factory (or class) where a
    constructed optimizer was expected. When such a factory is then called as
    a stateless update rule, it returns an optimizer or state mapping instead
    of a parameter vector.

    Attributes
    ----------
    returned : str
        Type name of the offending value.
    """

    def __init__(self, returned: str, detail: str = "") -> None:
        """
        Initialize the OptimizerConfigurationError.

        Parameters
        ----------
        returned : str
            Type name of the value that was produced or passed instead of a
            parameter vector / optimizer value.
        detail : str, optional
            Extra context appended to the message.
        """
        msg = (
            "function acting as optimizer must return a parameter vector, "
            f"got {returned}: did you need to call the factory to produce "
            "an optimizer?"
        )
        if detail:
            msg = f"{msg} ({detail})"
        super().__init__(msg)
        self.returned = returned


class ShapeMismatchError(ValueError):
    """
    Raised when a vector's length does not match the length an optimizer
    expects.

    Attributes
    ----------
    what : str
        Name of the offending vector (e.g., "gradient").
    expected : int
        Expected length.
    actual : int
        Observed length.
    """

    def __init__(self, what: str, expected: int, actual: int) -> None:
        """
        Initialize the ShapeMismatchError.

        Parameters
        ----------
        what : str
            Name of the offending vector.
        expected : int
            Expected length.
        actual : int
            Observed length.
        """
        super().__init__(
            f"Shape mismatch for {what}: expected {expected}, got {actual}."
        )
        self.what = what
        self.expected = expected
        self.actual = actual


class OptimizerNotInitializedError(RuntimeError):
    """
    Raised when a stateful optimizer is stepped before its state exists.

    Stateful optimizers must be initialized explicitly, either by passing
    ``param_count`` at construction or by calling ``initialize_with``.
    """

    def __init__(self, name: str) -> None:
        super().__init__(
            f"{name} has no state; call initialize_with(param_count) "
            "or construct it with param_count=... before stepping."
        )
        self.name = name
