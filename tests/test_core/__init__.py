"""
Core estimator tests for chainflow.

Tests for:
- Sample helpers
- Running mean
- Histogram and gnuplot export
- Windowed autocovariance and its history buffer
- Concurrent feeding
"""
