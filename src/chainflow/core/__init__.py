"""Online estimators for streams of MCMC samples.

This module contains the single-pass estimators:
- Running mean of scalar or vector samples
- Histogram with linear or logarithmic bins
- Windowed autocovariance-like function with a ring-buffer history
"""

from .sample import (
    Sample,
    as_sample,
    sample_dimension,
    zero_like,
    is_scalar_type
)
from .consumer import Consumer, AuxiliaryData
from .mean_value import RunningMean
from .histogram import Histogram, SubdivisionScheme
from .autocovariance import WindowedAutocovariance, SampleHistory, DEFAULT_WINDOW_SIZE

__all__ = [
    # Sample model
    'Sample',
    'as_sample',
    'sample_dimension',
    'zero_like',
    'is_scalar_type',

    # Consumer contract
    'Consumer',
    'AuxiliaryData',

    # Estimators
    'RunningMean',
    'Histogram',
    'SubdivisionScheme',
    'WindowedAutocovariance',
    'SampleHistory',
    'DEFAULT_WINDOW_SIZE'
]
