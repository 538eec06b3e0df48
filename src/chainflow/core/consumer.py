"""Abstract consumer contract implemented by every online estimator."""

from abc import ABC, abstractmethod
from typing import Any, Optional

AuxiliaryData = Optional[Any]


class Consumer(ABC):
    """Something that receives samples one at a time and exposes a snapshot.

    Implementations guard their state with a per-instance lock so that
    :meth:`consume` may be called concurrently from several producer threads,
    and :meth:`get` always returns an independent copy.
    """

    @abstractmethod
    def consume(self, sample: Any, aux_data: AuxiliaryData = None) -> None:
        """Process one sample.

        Parameters
        ----------
        sample : scalar or array_like
            The sample to process.
        aux_data : object, optional
            Per-sample metadata. Ignored by the estimators in this package.
        """

    @abstractmethod
    def get(self) -> Any:
        """Return a snapshot of the derived statistic."""

    def __call__(self, sample: Any, aux_data: AuxiliaryData = None) -> None:
        self.consume(sample, aux_data)
