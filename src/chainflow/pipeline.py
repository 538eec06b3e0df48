"""Wiring between a stream of samples and a set of estimators."""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict, Iterable, Optional, Sequence

import numpy as np

from .config.settings import Settings
from .core import Consumer, Histogram, RunningMean, WindowedAutocovariance
from .core.consumer import AuxiliaryData

logger = logging.getLogger(__name__)


def build_estimators(settings: Settings, dim: Optional[int] = None) -> Dict[str, Consumer]:
    """Construct the running mean, histogram and autocovariance estimators.

    Parameters
    ----------
    settings : Settings
        Histogram range/bins/spacing and autocovariance window size.
    dim : int, optional
        Dimension of vector samples. When given, the running mean reports a
        zero vector of this length before the first sample instead of 0.0.

    Returns
    -------
    dict
        ``{"mean": RunningMean, "histogram": Histogram,
        "autocovariance": WindowedAutocovariance}``
    """
    return {
        "mean": RunningMean(zero=None if dim is None else np.zeros(dim)),
        "histogram": Histogram(settings.histogram_min,
                               settings.histogram_max,
                               settings.n_bins,
                               settings.spacing),
        "autocovariance": WindowedAutocovariance(settings.window_size),
    }


def _dispatch(consumers: Sequence[Consumer], samples: Iterable[Any],
              aux_data: AuxiliaryData) -> int:
    n = 0
    for sample in samples:
        for consumer in consumers:
            consumer.consume(sample, aux_data)
        n += 1
    return n


def feed_samples(consumers: Iterable[Consumer],
                 samples: Sequence[Any],
                 n_threads: int = 1,
                 aux_data: AuxiliaryData = None) -> int:
    """Send every sample to every consumer, optionally from several threads.

    With ``n_threads > 1`` the samples are split into contiguous chunks and
    each chunk is dispatched by its own worker thread, so consumers see
    concurrent ``consume`` calls. Exceptions raised by a consumer propagate.

    Parameters
    ----------
    consumers : iterable of Consumer
        Estimators to feed.
    samples : sequence
        Samples in chain order. A 2-D array is treated as one sample per row.
    n_threads : int, default=1
        Number of worker threads.
    aux_data : object, optional
        Passed through to every ``consume`` call.

    Returns
    -------
    int
        Number of samples dispatched.
    """
    if n_threads < 1:
        raise ValueError(f"n_threads must be at least 1, got {n_threads}")

    consumers = list(consumers)
    if n_threads == 1 or len(samples) < 2:
        return _dispatch(consumers, samples, aux_data)

    bounds = np.linspace(0, len(samples), min(n_threads, len(samples)) + 1).astype(int)
    chunks = [samples[lo:hi] for lo, hi in zip(bounds[:-1], bounds[1:])]
    logger.debug("Dispatching %d samples to %d consumers on %d threads",
                 len(samples), len(consumers), len(chunks))

    with ThreadPoolExecutor(max_workers=len(chunks)) as pool:
        futures = [pool.submit(_dispatch, consumers, chunk, aux_data) for chunk in chunks]
        return sum(future.result() for future in futures)
