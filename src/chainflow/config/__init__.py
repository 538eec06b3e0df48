"""Configuration management for chainflow.

Provides estimator settings, presets and environment checks.
"""

from .settings import get_config, set_config, Settings
from .defaults import STANDARD_CONFIG, LOG_SCALE_CONFIG, RESEARCH_CONFIGS, SPACING_OPTIONS, EstimatorConfig

__all__ = [
    'get_config',
    'set_config',
    'Settings',
    'STANDARD_CONFIG',
    'LOG_SCALE_CONFIG',
    'RESEARCH_CONFIGS',
    'SPACING_OPTIONS',
    'EstimatorConfig'
]
