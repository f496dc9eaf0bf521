"""
Exponential running-average primitive shared by ADADELTA and Adam.
"""

from __future__ import annotations

from typing import Union

import numpy as np

ArrayOrScalar = Union[np.ndarray, float]


def accumulate(
    decay_rate: float, running_avg: ArrayOrScalar, value: ArrayOrScalar
) -> ArrayOrScalar:
    """
    Accumulate a running average.

    Computes, element-wise::

        E[x]_{t+1} = rho * E[x]_t + (1 - rho) * x

    Parameters
    ----------
    decay_rate : float
        ``rho``, in ``[0, 1)``.
    running_avg : np.ndarray or float
        ``E[x]_t``.
    value : np.ndarray or float
        ``x``.

    Returns
    -------
    np.ndarray or float
        ``E[x]_{t+1}``. A new array; the inputs are not modified.
    """
    return decay_rate * running_avg + (1.0 - decay_rate) * value
