"""Windowed autocovariance-like estimator for vector-valued chains.

For samples x_1..x_n with running mean x̄_n and lag l, the target quantity is

    γ̂(l) = 1/n Σ_{t=1}^{n-l} (x_{t+l} - x̄_n)ᵀ (x_t - x̄_n)

and the estimator reports

    γ̃(l) = α_n(l) - x̄_nᵀ β_n(l) + (n-1)/n x̄_nᵀ x̄_n

with α_n(l) the running mean of the inner products x_{t+l}ᵀ x_t and β_n(l)
the running mean of the sums x_{t+l} + x_t. Both are updated with the same
recurrence as the running mean, using the total sample count n as the
denominator for every lag, and the last factor is (n-1)/n rather than
(n-l)/n. The result is therefore not an unbiased autocovariance: it exceeds the
textbook value by (l-1)/n x̄ᵀx̄.
"""

import logging
import threading
from typing import Union

import numpy as np

from .consumer import AuxiliaryData, Consumer
from .sample import SampleLike

logger = logging.getLogger(__name__)

DEFAULT_WINDOW_SIZE = 10


class SampleHistory:
    """Fixed-capacity ring buffer of the most recent vector samples.

    Samples are rows of a ``(capacity, dim)`` array. ``push`` advances the
    head and overwrites the oldest row once the buffer is full; lag ``i``
    (0 = most recent) lives at row ``(head - i) % capacity``.

    Parameters
    ----------
    capacity : int
        Maximum number of samples retained.
    dim : int
        Dimension of each sample.
    """

    def __init__(self, capacity: int, dim: int):
        self.capacity = capacity
        self.dim = dim
        self._rows = np.zeros((capacity, dim), dtype=np.float64)
        self._head = -1
        self._size = 0

    def __len__(self) -> int:
        return self._size

    def push(self, sample: np.ndarray) -> None:
        self._head = (self._head + 1) % self.capacity
        self._rows[self._head] = sample
        self._size = min(self._size + 1, self.capacity)

    def lagged(self, n: int) -> np.ndarray:
        """The ``n`` most recent samples, most recent first, shape ``(n, dim)``."""
        if n > self._size:
            raise IndexError(f"Requested {n} samples but history holds {self._size}")
        return self._rows[(self._head - np.arange(n)) % self.capacity]


class WindowedAutocovariance(Consumer):
    """Thread-safe running estimate of γ̂(l) for lags ``l = 1..window_size``.

    The update runs in three phases keyed on the number of samples seen
    before the current one:

    * first sample: zero ``alpha``/``beta``/output, mean and history start
      from the sample;
    * fewer than ``window_size`` samples: ``alpha``/``beta`` are updated for
      every lag already present in the history, output stays zero;
    * otherwise: all lags are updated and the output is recomputed.

    Parameters
    ----------
    window_size : int, default=10
        Largest lag tracked (``k``). Fixed for the lifetime of the estimator.

    Raises
    ------
    TypeError
        If ``window_size`` is not an integer.
    ValueError
        If ``window_size`` is not positive.

    Notes
    -----
    Scalar samples are treated as vectors of dimension 1. The dimension is
    taken from the first sample; later samples of another dimension raise
    ``ValueError`` and leave the state untouched. Non-finite components are
    not checked.
    """

    def __init__(self, window_size: int = DEFAULT_WINDOW_SIZE):
        if isinstance(window_size, bool) or not isinstance(window_size, (int, np.integer)):
            raise TypeError(f"window_size must be an integer, got {type(window_size).__name__}")
        if window_size < 1:
            raise ValueError(f"window_size must be at least 1, got {window_size}")

        self.window_size = int(window_size)
        self._n_samples = 0
        self._mean = None
        self._alpha = np.zeros(self.window_size)
        self._beta = None
        self._history = None
        self._output = np.zeros(self.window_size)
        self._lock = threading.Lock()

        logger.debug("Created windowed autocovariance with window size %d", self.window_size)

    def consume(self, sample: SampleLike, aux_data: AuxiliaryData = None) -> None:
        x = np.atleast_1d(np.array(sample, dtype=np.float64))
        if x.ndim != 1:
            raise ValueError(f"Samples must be scalars or 1-D vectors, got shape {x.shape}")

        k = self.window_size
        with self._lock:
            if self._n_samples == 0:
                d = x.shape[0]
                self._alpha = np.zeros(k)
                self._beta = np.zeros((k, d))
                self._output = np.zeros(k)
                self._mean = x.copy()
                self._history = SampleHistory(k, d)
                self._history.push(x)
                self._n_samples = 1
                return

            if x.shape[0] != self._history.dim:
                raise ValueError(
                    f"Sample dimension {x.shape[0]} does not match "
                    f"dimension {self._history.dim} of the first sample"
                )

            n_lags = min(self._n_samples, k)
            self._n_samples += 1
            n = self._n_samples

            past = self._history.lagged(n_lags)
            self._alpha[:n_lags] += (past @ x - self._alpha[:n_lags]) / n
            self._beta[:n_lags] += (x + past - self._beta[:n_lags]) / n

            self._history.push(x)
            self._mean += (x - self._mean) / n

            if n_lags == k:
                self._output = (self._alpha
                                - self._beta @ self._mean
                                + ((n - 1) / n) * (self._mean @ self._mean))

    def get(self) -> np.ndarray:
        """Return γ̂(1)..γ̂(k) as a length-``window_size`` array.

        All zeros until ``window_size + 1`` samples have been consumed.
        """
        with self._lock:
            return self._output.copy()

    def mean(self) -> Union[np.ndarray, None]:
        """Copy of the running mean, or ``None`` before the first sample."""
        with self._lock:
            if self._mean is None:
                return None
            return self._mean.copy()

    @property
    def n_samples(self) -> int:
        """Number of samples consumed."""
        with self._lock:
            return self._n_samples
