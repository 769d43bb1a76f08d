"""Exceptions raised by the selection model."""

from ..constants import SeriesConstants


class WaveformEditorError(Exception):
    """Base class for waveform editor errors."""


class TooFewSamplesError(WaveformEditorError):
    """Raised when a series has fewer than the minimum number of samples."""

    def __init__(self, count: int, min_points: int = SeriesConstants.MIN_POINTS):
        self.count = count
        self.min_points = min_points
        super().__init__(
            f"Series has {count} samples, at least {min_points} required"
        )


class InvalidRangeError(WaveformEditorError):
    """Raised when a sample is not a pair inside [-1, 0] x [0, 1]."""

    def __init__(self, index: int, sample: object):
        self.index = index
        self.sample = sample
        super().__init__(f"Sample {index} out of range: {sample!r}")
