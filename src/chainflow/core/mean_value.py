"""Running mean over scalar or vector samples.

Uses the incremental recurrence

    x̄_1 = x_1
    x̄_k = x̄_{k-1} + (x_k - x̄_{k-1}) / k

which follows from x̄_k = ((k-1) x̄_{k-1} + x_k) / k. Unlike sum/count it keeps
no running sum, so the magnitude of the state never grows with the chain length.
"""

import logging
import threading
from typing import Optional, Union

import numpy as np

from .consumer import AuxiliaryData, Consumer
from .sample import SampleLike, as_sample, copy_sample

logger = logging.getLogger(__name__)


class RunningMean(Consumer):
    """Thread-safe running mean of all samples seen so far.

    Parameters
    ----------
    zero : float or array_like, optional
        Value returned by :meth:`get` before any sample was consumed.
        Defaults to ``0.0``.

    Notes
    -----
    Non-finite samples are not checked; they propagate into the mean.

    Examples
    --------
    >>> mean = RunningMean()
    >>> for x in (2.0, 4.0, 6.0):
    ...     mean.consume(x)
    >>> mean.get()
    4.0
    """

    def __init__(self, zero: Optional[SampleLike] = None):
        self._zero = as_sample(0.0 if zero is None else zero)
        self._mean: Union[float, np.ndarray, None] = None
        self._n_samples = 0
        self._lock = threading.Lock()

    def consume(self, sample: SampleLike, aux_data: AuxiliaryData = None) -> None:
        x = as_sample(sample)

        with self._lock:
            if self._n_samples == 0:
                self._mean = x
                self._n_samples = 1
                return

            if np.shape(x) != np.shape(self._mean):
                raise ValueError(
                    f"Sample shape {np.shape(x)} does not match running mean "
                    f"shape {np.shape(self._mean)}"
                )

            self._n_samples += 1
            self._mean = self._mean + (x - self._mean) / self._n_samples

    def get(self) -> Union[float, np.ndarray]:
        """Return the mean of all consumed samples, or the zero value if none."""
        with self._lock:
            if self._n_samples == 0:
                return copy_sample(self._zero)
            return copy_sample(self._mean)

    @property
    def n_samples(self) -> int:
        """Number of samples consumed."""
        with self._lock:
            return self._n_samples
