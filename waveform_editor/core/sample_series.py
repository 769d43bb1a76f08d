"""Immutable sample series backing the waveform display.

A sample is a pair (neg_lobe, pos_lobe) describing the lower and upper
amplitude of the waveform at one time step.
"""

import math
from typing import Iterable, Iterator, List, Sequence, Tuple, Union, overload

import numpy as np

from ..constants import SeriesConstants
from .errors import InvalidRangeError, TooFewSamplesError

Sample = Tuple[float, float]


def is_valid_sample(sample: object) -> bool:
    """Check that a sample is a pair of finite numbers inside the lobe ranges.

    Args:
        sample: Candidate sample

    Returns:
        True if the sample can be part of a series
    """
    try:
        neg, pos = sample
        neg = float(neg)
        pos = float(pos)
    except (TypeError, ValueError):
        return False

    if math.isnan(neg) or math.isnan(pos):
        return False

    return (
        SeriesConstants.NEG_LOBE_MIN <= neg <= SeriesConstants.NEG_LOBE_MAX
        and SeriesConstants.POS_LOBE_MIN <= pos <= SeriesConstants.POS_LOBE_MAX
    )


class SampleSeries(Sequence):
    """Ordered, read-only sequence of samples.

    The series validates its input on construction and rejects it as a
    whole: a single bad sample fails the entire series.

    The MAX_POINTS limit is owned by the file reader, which truncates
    oversized files; a series built directly may be longer.

    Attributes:
        samples: Tuple of (neg_lobe, pos_lobe) pairs
    """

    def __init__(self, samples: Iterable[Sample]):
        """Create a validated series.

        Args:
            samples: Iterable of (neg_lobe, pos_lobe) pairs

        Raises:
            TooFewSamplesError: If fewer than MIN_POINTS samples are given
            InvalidRangeError: If any sample is malformed or out of range
        """
        samples = list(samples)
        if len(samples) < SeriesConstants.MIN_POINTS:
            raise TooFewSamplesError(len(samples))

        for index, sample in enumerate(samples):
            if not is_valid_sample(sample):
                raise InvalidRangeError(index, sample)

        self._samples: Tuple[Sample, ...] = tuple(
            (float(neg), float(pos)) for neg, pos in samples
        )

        array = np.array(self._samples, dtype=np.float64)
        array.setflags(write=False)
        self._array = array

    @property
    def samples(self) -> Tuple[Sample, ...]:
        """Get the samples as a tuple of pairs."""
        return self._samples

    @property
    def neg_lobe(self) -> np.ndarray:
        """Get the lower lobe values as a read-only array."""
        return self._array[:, 0]

    @property
    def pos_lobe(self) -> np.ndarray:
        """Get the upper lobe values as a read-only array."""
        return self._array[:, 1]

    @overload
    def __getitem__(self, index: int) -> Sample: ...

    @overload
    def __getitem__(self, index: slice) -> Tuple[Sample, ...]: ...

    def __getitem__(self, index: Union[int, slice]):
        return self._samples[index]

    def __len__(self) -> int:
        return len(self._samples)

    def __iter__(self) -> Iterator[Sample]:
        return iter(self._samples)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, SampleSeries):
            return self._samples == other._samples
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._samples)

    def __repr__(self) -> str:
        return f"SampleSeries({len(self)} samples)"

    def to_list(self) -> List[Sample]:
        """Return the samples as a new list."""
        return list(self._samples)
