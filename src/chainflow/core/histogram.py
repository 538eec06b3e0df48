"""Fixed-bin histogram of scalar samples with linear or logarithmic spacing."""

import logging
import math
import threading
from enum import Enum
from pathlib import Path
from typing import IO, List, Tuple, Union

import numpy as np

from .consumer import AuxiliaryData, Consumer
from .sample import is_scalar_type

logger = logging.getLogger(__name__)

HistogramBin = Tuple[float, float, int]


class SubdivisionScheme(str, Enum):
    """How the range ``min_value...max_value`` is split into bins.

    ``LINEAR`` gives equal-width bins. ``LOGARITHMIC`` splits
    ``log(min_value)...log(max_value)`` into equal intervals, so the ratio of
    right to left edge is the same for every bin; it requires ``min_value > 0``.
    """

    LINEAR = "linear"
    LOGARITHMIC = "logarithmic"


class Histogram(Consumer):
    """Thread-safe histogram of a single scalar quantity.

    Samples outside ``[min_value, max_value]`` are discarded and counted
    nowhere. Vector-valued chains need one histogram per component.

    Parameters
    ----------
    min_value : float
        Left end point of the histogram range.
    max_value : float
        Right end point of the histogram range.
    n_subdivisions : int
        Number of bins.
    subdivision_scheme : SubdivisionScheme or str, default="linear"
        Bin spacing.
    sample_type : type, default=float
        Type of the samples this histogram will receive. Must be a real
        scalar type.

    Raises
    ------
    TypeError
        If ``sample_type`` is not a real scalar type or ``n_subdivisions``
        is not an integer.
    ValueError
        If the range is empty, inverted or non-finite, ``n_subdivisions`` is
        not positive, or logarithmic spacing is requested with
        ``min_value <= 0``.

    Examples
    --------
    >>> hist = Histogram(0.0, 10.0, 5)
    >>> for x in (1.0, 1.0, 6.0, 11.0, -1.0):
    ...     hist.consume(x)
    >>> [count for _, _, count in hist.get()]
    [2, 0, 0, 1, 0]
    """

    def __init__(self,
                 min_value: float,
                 max_value: float,
                 n_subdivisions: int,
                 subdivision_scheme: Union[SubdivisionScheme, str] = SubdivisionScheme.LINEAR,
                 sample_type: type = float):

        if not is_scalar_type(sample_type):
            raise TypeError(f"Histogram requires a real scalar sample type, got {sample_type!r}")
        if isinstance(n_subdivisions, bool) or not isinstance(n_subdivisions, (int, np.integer)):
            raise TypeError(f"n_subdivisions must be an integer, got {type(n_subdivisions).__name__}")

        try:
            scheme = SubdivisionScheme(subdivision_scheme)
        except ValueError:
            raise ValueError(
                f"Unknown subdivision scheme '{subdivision_scheme}'. "
                f"Available: {[s.value for s in SubdivisionScheme]}"
            ) from None

        min_value = float(min_value)
        max_value = float(max_value)

        if n_subdivisions < 1:
            raise ValueError(f"n_subdivisions must be at least 1, got {n_subdivisions}")
        if not (math.isfinite(min_value) and math.isfinite(max_value)):
            raise ValueError(f"Histogram range must be finite, got [{min_value}, {max_value}]")
        if min_value >= max_value:
            raise ValueError(f"min_value must be less than max_value, got [{min_value}, {max_value}]")
        if scheme is SubdivisionScheme.LOGARITHMIC and min_value <= 0:
            raise ValueError(f"Logarithmic subdivision requires min_value > 0, got {min_value}")

        self.min_value = min_value
        self.max_value = max_value
        self.n_subdivisions = int(n_subdivisions)
        self.subdivision_scheme = scheme
        self.sample_type = sample_type

        self._bins = np.zeros(self.n_subdivisions, dtype=np.int64)
        self._lock = threading.Lock()

        logger.debug("Created %s histogram on [%g, %g] with %d bins",
                     scheme.value, min_value, max_value, self.n_subdivisions)

    def consume(self, sample: float, aux_data: AuxiliaryData = None) -> None:
        value = float(sample)

        # NaN fails both comparisons and is dropped here as well
        if not (self.min_value <= value <= self.max_value):
            return

        bin_index = self.bin_number(value)
        with self._lock:
            self._bins[bin_index] += 1

    def bin_number(self, value: float) -> int:
        """Index of the bin ``value`` falls into, clamped to ``[0, n_subdivisions)``.

        The clamp absorbs rounding at ``value == max_value`` (which belongs to
        the last bin) and any caller passing a value slightly out of range.
        """
        if self.subdivision_scheme is SubdivisionScheme.LOGARITHMIC:
            lo, hi, x = math.log(self.min_value), math.log(self.max_value), math.log(value)
        else:
            lo, hi, x = self.min_value, self.max_value, value

        raw = math.floor((x - lo) / ((hi - lo) / self.n_subdivisions))
        return max(0, min(self.n_subdivisions - 1, raw))

    def bin_edges(self) -> np.ndarray:
        """Bin edges recomputed from the configuration, shape ``(n_subdivisions + 1,)``."""
        n = self.n_subdivisions
        if self.subdivision_scheme is SubdivisionScheme.LOGARITHMIC:
            lo, hi = math.log(self.min_value), math.log(self.max_value)
            return np.array([math.exp(lo + i * (hi - lo) / n) for i in range(n + 1)])

        lo, hi = self.min_value, self.max_value
        return np.array([lo + i * (hi - lo) / n for i in range(n + 1)])

    def get(self) -> List[HistogramBin]:
        """Return ``(left_edge, right_edge, count)`` for every bin, in order."""
        with self._lock:
            edges = self.bin_edges()
            counts = self._bins.tolist()

        return [(float(edges[i]), float(edges[i + 1]), int(counts[i]))
                for i in range(self.n_subdivisions)]

    @property
    def counts(self) -> np.ndarray:
        """Copy of the per-bin counts."""
        with self._lock:
            return self._bins.copy()

    @property
    def n_samples(self) -> int:
        """Number of samples that fell inside the histogram range."""
        with self._lock:
            return int(self._bins.sum())

    def write_gnuplot(self, output: Union[IO[str], str, Path]) -> None:
        """Write the histogram as line segments for Gnuplot.

        Each bin is drawn as three sides of a rectangle over the x-axis:
        ``(left, 0)``, ``(left, count)``, ``(right, count)``, ``(right, 0)``,
        followed by a blank line. Plot with::

            set style data lines
            plot "histogram.txt"

        Parameters
        ----------
        output : text stream, str or Path
            Writable text stream, or a path that is opened (and closed) here.
        """
        if isinstance(output, (str, Path)):
            with open(output, "w", encoding="utf-8") as f:
                self._write_points(f)
            logger.debug("Wrote gnuplot histogram to %s", output)
            return

        self._write_points(output)

    def _write_points(self, stream: IO[str]) -> None:
        for left, right, count in self.get():
            stream.write(f"{left:g} 0\n")
            stream.write(f"{left:g} {count}\n")
            stream.write(f"{right:g} {count}\n")
            stream.write(f"{right:g} 0\n")
            stream.write("\n")
        stream.flush()
