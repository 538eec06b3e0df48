"""
Pytest configuration and shared fixtures for the chainflow test suite.
"""

import pytest
import numpy as np
import sys
from pathlib import Path

# Add src to path for testing
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))


@pytest.fixture
def scalar_chain():
    """Short AR(1) chain of scalars."""
    return ChainGenerator.ar1(n_samples=500, dim=1, seed=1)[:, 0]


@pytest.fixture
def vector_chain():
    """AR(1) chain of 3-dimensional samples."""
    return ChainGenerator.ar1(n_samples=500, dim=3, seed=2)


class ChainGenerator:
    """Helper class for generating correlated test chains."""
    
    @staticmethod
    def ar1(n_samples: int, dim: int = 1, phi: float = 0.8,
            offset: float = 2.0, seed: int = 42) -> np.ndarray:
        """AR(1) process x_t = offset + phi (x_{t-1} - offset) + noise, shape (n_samples, dim)."""
        rng = np.random.default_rng(seed)
        noise = rng.standard_normal((n_samples, dim))
        chain = np.empty((n_samples, dim))
        chain[0] = offset + noise[0]
        for t in range(1, n_samples):
            chain[t] = offset + phi * (chain[t - 1] - offset) + noise[t]
        return chain


@pytest.fixture
def chain_generator():
    """Chain generator fixture."""
    return ChainGenerator


# Pytest configuration
def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )


def pytest_collection_modifyitems(config, items):
    """Automatically mark slow and integration tests."""
    for item in items:
        if "concurrent" in item.nodeid or "long_chain" in item.nodeid:
            item.add_marker(pytest.mark.slow)
        
        if "integration" in item.nodeid or "end_to_end" in item.nodeid:
            item.add_marker(pytest.mark.integration)
