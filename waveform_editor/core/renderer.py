"""Waveform rendering as a list of draw commands.

The renderer turns a sample series, the viewport size and the selector
handle positions into plain geometry: two closed lobe contours, the
horizontal bands they are clipped to, and the handle markers. Drawing
the commands is left to the front end.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

import numpy as np

from ..constants import SelectorConstants, SeriesConstants, UIConstants
from ..utils.geometry import with_alpha
from .sample_series import SampleSeries
from .selection_model import DragTarget, SelectionModel, SelectorGeometry

RGBA = Tuple[float, float, float, float]


class BandStyle(Enum):
    """Fill style of a horizontal band."""

    SELECTED = "selected"
    UNSELECTED = "unselected"


BAND_COLORS = {
    BandStyle.SELECTED: UIConstants.COLOR_SELECTED_WAVE,
    BandStyle.UNSELECTED: UIConstants.COLOR_UNSELECTED_WAVE,
}


@dataclass(frozen=True)
class SelectorState:
    """Handle positions and drag state read by the renderer."""

    left_x: float
    right_x: float
    dragging: DragTarget = DragTarget.NONE


@dataclass(frozen=True)
class ClipBand:
    """Vertical strip [x0, x1] x [0, height] filled with one style."""

    x0: float
    x1: float
    style: BandStyle

    @property
    def width(self) -> float:
        return self.x1 - self.x0

    @property
    def color(self) -> str:
        return BAND_COLORS[self.style]


@dataclass(frozen=True)
class HandleCommand:
    """Selector handle: a vertical line plus a square grip.

    Attributes:
        target: Which handle this is
        line_x: X position of the vertical line
        line_width: Stroke width of the line
        grip: Grip rectangle as (x0, y0, x1, y1)
        color: RGBA color derived from the drag state
    """

    target: DragTarget
    line_x: float
    line_width: float
    grip: Tuple[float, float, float, float]
    color: RGBA


@dataclass(frozen=True, eq=False)
class DrawCommands:
    """Everything needed to draw one frame of the waveform.

    Coordinates are screen pixels with y growing downward.
    """

    width: float = 0.0
    height: float = 0.0
    background: str = UIConstants.COLOR_WAVE_BACKGROUND
    contours: Tuple[np.ndarray, ...] = ()
    bands: Tuple[ClipBand, ...] = ()
    handles: Tuple[HandleCommand, ...] = ()

    @property
    def is_empty(self) -> bool:
        """Check if there is nothing to draw."""
        return not self.contours and not self.handles


EMPTY_COMMANDS = DrawCommands()


def build_contours(
    series: SampleSeries, width: float, height: float
) -> Tuple[np.ndarray, ...]:
    """Build the closed upper and lower lobe contours.

    Each contour starts and ends on the horizontal midline and visits one
    vertex per sample, spaced evenly across the width.

    Args:
        series: Samples to draw
        width: Viewport width in pixels
        height: Viewport height in pixels

    Returns:
        Tuple of (upper, lower) vertex arrays of shape (n + 2, 2), or an
        empty tuple when nothing can be drawn
    """
    count = len(series)
    if width == 0 or count < SeriesConstants.MIN_POINTS:
        return ()

    mid = height / 2
    step = width / (count - 1)
    xs = np.arange(count, dtype=np.float64) * step

    upper_ys = mid - series.pos_lobe * mid
    lower_ys = mid - series.neg_lobe * mid

    contours = []
    for ys in (upper_ys, lower_ys):
        body = np.column_stack((xs, ys))
        contour = np.vstack(([0.0, mid], body, [width, mid]))
        contour.setflags(write=False)
        contours.append(contour)
    return tuple(contours)


def handle_color(target: DragTarget, dragging: DragTarget) -> RGBA:
    """Get the handle color: opaque while dragged, translucent otherwise."""
    alpha = (
        SelectorConstants.ACTIVE_ALPHA
        if target is dragging
        else SelectorConstants.INACTIVE_ALPHA
    )
    return with_alpha(UIConstants.COLOR_SELECTOR, alpha)


def _bands(state: SelectorState, geometry: SelectorGeometry, width: float):
    left_edge = state.left_x + geometry.selector_width
    right_edge = state.right_x + geometry.selector_width

    candidates = []
    if state.left_x > 0:
        candidates.append(ClipBand(0.0, state.left_x, BandStyle.UNSELECTED))
    candidates.append(ClipBand(left_edge, state.right_x, BandStyle.SELECTED))
    if right_edge < width:
        candidates.append(ClipBand(right_edge, width, BandStyle.UNSELECTED))

    return tuple(band for band in candidates if band.width > 0)


def _handles(state: SelectorState, geometry: SelectorGeometry, height: float):
    half = geometry.selector_width / 2
    grip = geometry.grip_width

    left_edge = state.left_x + geometry.selector_width
    left = HandleCommand(
        target=DragTarget.LEFT,
        line_x=state.left_x + half,
        line_width=geometry.selector_width,
        grip=(left_edge, 0.0, left_edge + grip, grip),
        color=handle_color(DragTarget.LEFT, state.dragging),
    )
    right = HandleCommand(
        target=DragTarget.RIGHT,
        line_x=state.right_x + half,
        line_width=geometry.selector_width,
        grip=(state.right_x - grip, height - grip, state.right_x, height),
        color=handle_color(DragTarget.RIGHT, state.dragging),
    )
    return left, right


def render(
    series: Optional[SampleSeries],
    viewport: Tuple[float, float],
    state: SelectorState,
    geometry: Optional[SelectorGeometry] = None,
    contours: Optional[Tuple[np.ndarray, ...]] = None,
) -> DrawCommands:
    """Compute the draw commands for one frame.

    Args:
        series: Loaded samples, or None
        viewport: (width, height) in pixels
        state: Handle positions and drag state
        geometry: Handle sizes
        contours: Precomputed contours for this series and viewport

    Returns:
        Draw commands, empty when no series is loaded
    """
    if series is None:
        return EMPTY_COMMANDS

    geometry = geometry or SelectorGeometry()
    width, height = viewport
    if contours is None:
        contours = build_contours(series, width, height)

    return DrawCommands(
        width=width,
        height=height,
        contours=contours,
        bands=_bands(state, geometry, width),
        handles=_handles(state, geometry, height),
    )


class WaveformRenderer:
    """Renders a selection model, caching the lobe contours.

    The contours only depend on the series and the viewport size, so they
    are rebuilt when one of those changes and reused while dragging.
    """

    def __init__(self):
        self._series: Optional[SampleSeries] = None
        self._size: Optional[Tuple[float, float]] = None
        self._contours: Tuple[np.ndarray, ...] = ()

    def contours_for(
        self, series: SampleSeries, width: float, height: float
    ) -> Tuple[np.ndarray, ...]:
        """Get contours for a series and viewport, rebuilding if needed."""
        if series is not self._series or (width, height) != self._size:
            self._contours = build_contours(series, width, height)
            self._series = series
            self._size = (width, height)
        return self._contours

    def invalidate(self) -> None:
        """Drop the cached contours."""
        self._series = None
        self._size = None
        self._contours = ()

    def render(self, model: SelectionModel) -> DrawCommands:
        """Compute the draw commands for the model's current state."""
        series = model.series
        if series is None:
            return EMPTY_COMMANDS

        state = SelectorState(model.left_x, model.right_x, model.dragging)
        contours = self.contours_for(series, model.width, model.height)
        return render(
            series,
            (model.width, model.height),
            state,
            geometry=model.geometry,
            contours=contours,
        )
