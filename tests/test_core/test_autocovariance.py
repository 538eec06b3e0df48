"""Tests for the windowed autocovariance estimator and its history buffer."""

import pytest
import numpy as np
from numpy.testing import assert_allclose, assert_array_equal

from chainflow.core import WindowedAutocovariance, SampleHistory, DEFAULT_WINDOW_SIZE


def closed_form(chain: np.ndarray, window_size: int) -> np.ndarray:
    """Evaluate the estimator's recurrence in closed form for a whole chain.
    
    alpha(l) and beta(l) end up as sums over the available pairs divided by
    the total sample count n.
    """
    chain = np.atleast_2d(chain.T).T
    n = len(chain)
    mean = chain.mean(axis=0)
    out = np.zeros(window_size)
    for i in range(window_size):
        lag = i + 1
        alpha = np.sum(chain[lag:] * chain[:-lag]) / n
        beta = (chain[lag:] + chain[:-lag]).sum(axis=0) / n
        out[i] = alpha - mean @ beta + (n - 1) / n * (mean @ mean)
    return out


def textbook_autocovariance(chain: np.ndarray, window_size: int) -> np.ndarray:
    """(1/n) Σ (x_{t+l} - x̄)ᵀ (x_t - x̄) for l = 1..window_size."""
    centered = chain - chain.mean(axis=0)
    n = len(chain)
    return np.array([np.sum(centered[lag:] * centered[:-lag]) / n
                     for lag in range(1, window_size + 1)])


class TestSampleHistory:
    """Test suite for the ring buffer."""
    
    def test_most_recent_first(self):
        history = SampleHistory(capacity=3, dim=1)
        for x in (1.0, 2.0):
            history.push(np.array([x]))
        
        assert len(history) == 2
        assert_array_equal(history.lagged(2), [[2.0], [1.0]])
    
    def test_oldest_entry_falls_off(self):
        history = SampleHistory(capacity=3, dim=2)
        for x in range(5):
            history.push(np.array([x, -x], dtype=float))
        
        assert len(history) == 3
        assert_array_equal(history.lagged(3), [[4, -4], [3, -3], [2, -2]])
    
    def test_lagged_returns_copy(self):
        history = SampleHistory(capacity=2, dim=1)
        history.push(np.array([1.0]))
        rows = history.lagged(1)
        rows[0, 0] = 50.0
        
        assert_array_equal(history.lagged(1), [[1.0]])
    
    def test_request_beyond_size(self):
        history = SampleHistory(capacity=4, dim=1)
        history.push(np.array([1.0]))
        with pytest.raises(IndexError):
            history.lagged(2)


class TestWindowedAutocovarianceConstruction:
    """Test suite for configuration validation."""
    
    def test_default_window(self):
        acov = WindowedAutocovariance()
        assert acov.window_size == DEFAULT_WINDOW_SIZE == 10
        assert_array_equal(acov.get(), np.zeros(10))
        assert acov.mean() is None
    
    @pytest.mark.parametrize("window_size", [0, -3])
    def test_non_positive_window(self, window_size):
        with pytest.raises(ValueError, match="window_size"):
            WindowedAutocovariance(window_size)
    
    @pytest.mark.parametrize("window_size", [2.0, "10", True])
    def test_non_integer_window(self, window_size):
        with pytest.raises(TypeError):
            WindowedAutocovariance(window_size)


class TestWindowedAutocovariance:
    """Test suite for the update phases and the derived output."""
    
    def test_output_zero_until_window_filled(self, vector_chain):
        k = 4
        acov = WindowedAutocovariance(k)
        for x in vector_chain[:k]:
            acov.consume(x)
            result = acov.get()
            assert result.shape == (k,)
            assert_array_equal(result, np.zeros(k))
        
        acov.consume(vector_chain[k])
        assert acov.get().shape == (k,)
        assert np.all(acov.get() != 0.0)
    
    def test_matches_closed_form_after_window(self, vector_chain):
        k = 5
        acov = WindowedAutocovariance(k)
        for n, x in enumerate(vector_chain, start=1):
            acov.consume(x)
            if n in (k + 1, k + 2, 50, len(vector_chain)):
                assert_allclose(acov.get(), closed_form(vector_chain[:n], k), rtol=1e-10)
    
    def test_matches_textbook_up_to_known_bias(self, vector_chain):
        """Output differs from the textbook estimate by exactly (l-1)/n x̄ᵀx̄."""
        k = 6
        acov = WindowedAutocovariance(k)
        for x in vector_chain:
            acov.consume(x)
        
        n = len(vector_chain)
        mean = vector_chain.mean(axis=0)
        bias = np.arange(k) / n * (mean @ mean)
        
        assert_allclose(acov.get(), textbook_autocovariance(vector_chain, k) + bias, rtol=1e-9)
    
    def test_scalar_samples(self, scalar_chain):
        acov = WindowedAutocovariance(3)
        for x in scalar_chain:
            acov.consume(x)
        
        assert_allclose(acov.get(), closed_form(scalar_chain[:, None], 3), rtol=1e-10)
        assert_allclose(acov.mean(), [scalar_chain.mean()], rtol=1e-12)
    
    def test_window_of_one(self):
        acov = WindowedAutocovariance(1)
        for x in (1.0, 3.0):
            acov.consume(x)
        
        # alpha = 3/2, beta = 4/2, mean = 2, (n-1)/n = 1/2
        assert_allclose(acov.get(), [1.5 - 2.0 * 2.0 + 0.5 * 4.0])
    
    def test_startup_phase_hand_computed(self):
        """Three scalar samples with k=2, reproduced step by step."""
        acov = WindowedAutocovariance(2)
        for x in (1.0, 2.0, 4.0):
            acov.consume(x)
        
        # n=2: alpha0 = 2/2 = 1, beta0 = 3/2
        # n=3: alpha0 = 1 + (8 - 1)/3 = 10/3, beta0 = 1.5 + (6 - 1.5)/3 = 3
        #      alpha1 = (4 - 0)/3 = 4/3,       beta1 = (5 - 0)/3 = 5/3
        mean = 7.0 / 3.0
        expected = [10 / 3 - mean * 3.0 + 2 / 3 * mean ** 2,
                    4 / 3 - mean * 5 / 3 + 2 / 3 * mean ** 2]
        assert_allclose(acov.get(), expected, rtol=1e-12)
    
    def test_constant_chain(self):
        acov = WindowedAutocovariance(3)
        for _ in range(20):
            acov.consume(np.array([2.0, -1.0]))
        
        # Σ over n-l pairs of c·c, minus mean·(2 (n-l) c)/n, plus (n-1)/n c·c
        n, cc = 20, 5.0
        expected = [((n - l) - 2 * (n - l) + (n - 1)) / n * cc for l in (1, 2, 3)]
        assert_allclose(acov.get(), expected, rtol=1e-12, atol=1e-12)
    
    def test_snapshot_is_independent(self, vector_chain):
        acov = WindowedAutocovariance(2)
        for x in vector_chain[:10]:
            acov.consume(x)
        
        snapshot = acov.get()
        snapshot[:] = 0.0
        assert np.all(acov.get() != 0.0)
    
    def test_dimension_mismatch_leaves_state(self, vector_chain):
        acov = WindowedAutocovariance(2)
        for x in vector_chain[:5]:
            acov.consume(x)
        before = acov.get()
        
        with pytest.raises(ValueError, match="dimension"):
            acov.consume(np.zeros(2))
        
        assert acov.n_samples == 5
        assert_array_equal(acov.get(), before)
    
    def test_matrix_sample_rejected(self):
        acov = WindowedAutocovariance(2)
        with pytest.raises(ValueError, match="1-D"):
            acov.consume(np.zeros((2, 2)))
        assert acov.n_samples == 0
