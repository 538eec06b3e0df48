"""
Chainflow - online statistics for streams of MCMC samples.

Running mean, histogram and windowed autocovariance estimators that update
in constant time per sample and can be fed from several threads at once.
"""

__version__ = "0.1.0"

from .core import (
    Consumer,
    RunningMean,
    Histogram,
    SubdivisionScheme,
    WindowedAutocovariance
)

__all__ = [
    'Consumer',
    'RunningMean',
    'Histogram',
    'SubdivisionScheme',
    'WindowedAutocovariance'
]
