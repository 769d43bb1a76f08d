"""Selection model, sample series and rendering."""

from .errors import InvalidRangeError, TooFewSamplesError, WaveformEditorError
from .sample_series import Sample, SampleSeries
from .selection_model import (
    DragTarget,
    SelectedRange,
    SelectionModel,
    SelectorGeometry,
)
from .renderer import DrawCommands, WaveformRenderer, render

__all__ = [
    "InvalidRangeError",
    "TooFewSamplesError",
    "WaveformEditorError",
    "Sample",
    "SampleSeries",
    "DragTarget",
    "SelectedRange",
    "SelectionModel",
    "SelectorGeometry",
    "DrawCommands",
    "WaveformRenderer",
    "render",
]
