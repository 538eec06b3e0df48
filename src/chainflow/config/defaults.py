"""Default estimator configurations for common analysis scenarios."""

import os
from dataclasses import dataclass
from typing import List

@dataclass
class EstimatorConfig:
    """Base configuration structure for a set of online estimators."""
    
    # Histogram parameters
    histogram_min: float
    histogram_max: float
    n_bins: int
    spacing: str
    histogram_component: int
    
    # Autocovariance parameters
    window_size: int
    
    # Processing parameters
    n_threads: int


# Standard configuration (unit-scale chains, lags up to 10)
STANDARD_CONFIG = EstimatorConfig(
    histogram_min=0.0,
    histogram_max=10.0,
    n_bins=50,
    spacing="linear",
    histogram_component=0,
    window_size=10,
    n_threads=1
)

# Positive quantities spanning several orders of magnitude
LOG_SCALE_CONFIG = EstimatorConfig(
    histogram_min=1e-3,
    histogram_max=1e3,
    n_bins=60,
    spacing="logarithmic",
    histogram_component=0,
    window_size=10,
    n_threads=1
)

# Analysis scenario configurations
RESEARCH_CONFIGS = {
    "standard": STANDARD_CONFIG,
    "log_scale": LOG_SCALE_CONFIG,
    "minimal": EstimatorConfig(
        histogram_min=0.0,
        histogram_max=1.0,
        n_bins=10,
        spacing="linear",
        histogram_component=0,
        window_size=5,
        n_threads=1
    )
}

# Bin spacing options
SPACING_OPTIONS = [
    "linear",       # Equal-width bins
    "logarithmic"   # Equal-ratio bins, requires histogram_min > 0
]

# Practical limits
RECOMMENDED_MAX_BINS = 10000
RECOMMENDED_MAX_WINDOW = 1000

def validate_config(config: EstimatorConfig) -> List[str]:
    """Validate configuration parameters and return list of warnings."""
    warnings = []
    
    if config.spacing not in SPACING_OPTIONS:
        warnings.append(f"Spacing '{config.spacing}' not recognized")
    
    if config.spacing == "logarithmic" and config.histogram_min <= 0:
        warnings.append(f"Logarithmic spacing needs histogram_min > 0, got {config.histogram_min}")
    
    if config.histogram_min >= config.histogram_max:
        warnings.append(f"Histogram range [{config.histogram_min}, {config.histogram_max}] is empty")
    
    if config.n_bins > RECOMMENDED_MAX_BINS:
        warnings.append(f"{config.n_bins} bins may make snapshots expensive")
    
    if config.window_size > RECOMMENDED_MAX_WINDOW:
        warnings.append(f"Window size {config.window_size} makes every update O({config.window_size})")
    
    cpu_count = os.cpu_count() or 1
    if config.n_threads > cpu_count:
        warnings.append(f"{config.n_threads} threads exceeds the {cpu_count} available CPUs")
    
    return warnings 
