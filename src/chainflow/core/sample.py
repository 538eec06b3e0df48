"""Sample capability model shared by all online estimators.

A sample is either a real scalar or a fixed-dimension real vector. The
estimators only rely on the arithmetic listed in :class:`Sample`; vectors
are stored internally as contiguous ``float64`` numpy arrays.
"""

import numbers
from typing import Any, Protocol, Union, runtime_checkable

import numpy as np


@runtime_checkable
class Sample(Protocol):
    """Capabilities an estimator needs from a sample.

    Addition, subtraction, division by a scalar, element count and indexed
    element access. ``float`` satisfies the arithmetic part directly and is
    treated as a vector of dimension 1 where a dimension is needed.
    """

    def __add__(self, other: Any) -> Any: ...

    def __sub__(self, other: Any) -> Any: ...

    def __truediv__(self, other: float) -> Any: ...

    def __len__(self) -> int: ...

    def __getitem__(self, index: int) -> Any: ...


SampleLike = Union[float, int, np.ndarray, Sample]


def as_sample(x: SampleLike) -> Union[float, np.ndarray]:
    """Return an independent copy of ``x`` in the internal sample representation.

    Parameters
    ----------
    x : scalar or array_like
        Scalar, 0-d array or 1-D vector.

    Returns
    -------
    float or np.ndarray, shape (d,)
        ``float`` for scalar input, a fresh ``float64`` array otherwise.

    Raises
    ------
    ValueError
        If ``x`` has more than one axis.
    """
    if np.ndim(x) == 0:
        return float(x)

    arr = np.array(x, dtype=np.float64, copy=True)
    if arr.ndim != 1:
        raise ValueError(f"Samples must be scalars or 1-D vectors, got shape {arr.shape}")
    return arr


def sample_dimension(x: SampleLike) -> int:
    """Number of components of ``x`` (1 for scalars)."""
    if np.ndim(x) == 0:
        return 1
    return len(x)


def zero_like(x: SampleLike) -> Union[float, np.ndarray]:
    """Zero value with the same representation as ``x``."""
    if np.ndim(x) == 0:
        return 0.0
    return np.zeros(np.shape(x), dtype=np.float64)


def copy_sample(x: Union[float, np.ndarray]) -> Union[float, np.ndarray]:
    """Copy an internal sample so callers cannot alias estimator state."""
    if isinstance(x, np.ndarray):
        return x.copy()
    return x


def is_scalar_type(sample_type: Any) -> bool:
    """Check whether ``sample_type`` describes a real scalar.

    Accepts subclasses of :class:`numbers.Real` (``bool`` excluded) and
    numpy real scalar types such as ``np.float32`` or ``np.int64``.
    """
    if not isinstance(sample_type, type):
        return False
    if issubclass(sample_type, bool):
        return False
    if issubclass(sample_type, np.generic):
        return issubclass(sample_type, (np.integer, np.floating))
    return issubclass(sample_type, numbers.Real)
