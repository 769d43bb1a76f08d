"""Range selection model for the waveform editor.

This module maps pointer positions to a pair of selector handles and
projects the handle positions back to a range of sample indices. It has
no knowledge of any widget toolkit: the front end forwards raw pointer
events and reads the resulting state.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterable, List, Optional, Tuple

from ..constants import SelectorConstants
from ..utils.geometry import clamp, scale_px
from .sample_series import Sample, SampleSeries


class DragTarget(Enum):
    """Handle currently being dragged."""

    NONE = "none"
    LEFT = "left"
    RIGHT = "right"


@dataclass(frozen=True)
class SelectorGeometry:
    """Pixel sizes of the selector handles.

    Attributes:
        selector_width: Width of a handle line
        grip_width: Side of the square grip marker
        touch_area: Extra hit area on both sides of a handle
        min_selection_width: Minimum gap kept between the handles
    """

    selector_width: float = float(SelectorConstants.SELECTOR_WIDTH)
    grip_width: float = float(SelectorConstants.GRIP_WIDTH)
    touch_area: float = float(SelectorConstants.TOUCH_AREA)
    min_selection_width: float = float(SelectorConstants.MIN_SELECTION_WIDTH)

    @classmethod
    def for_density(cls, density: float) -> "SelectorGeometry":
        """Create geometry scaled to a display density.

        Args:
            density: Device pixels per density-independent pixel

        Returns:
            Scaled selector geometry
        """
        return cls(
            selector_width=float(scale_px(SelectorConstants.SELECTOR_WIDTH, density)),
            grip_width=float(scale_px(SelectorConstants.GRIP_WIDTH, density)),
            touch_area=float(scale_px(SelectorConstants.TOUCH_AREA, density)),
            min_selection_width=float(
                scale_px(SelectorConstants.MIN_SELECTION_WIDTH, density)
            ),
        )


@dataclass(frozen=True)
class SelectedRange:
    """Contiguous run of samples picked with the selector handles.

    Attributes:
        samples: Selected samples, empty when nothing is selected
        start_index: Index of the first selected sample, or None
        end_index: Index of the last selected sample (inclusive), or None
    """

    samples: Tuple[Sample, ...] = ()
    start_index: Optional[int] = None
    end_index: Optional[int] = None

    @property
    def is_empty(self) -> bool:
        """Check if the range holds no samples."""
        return not self.samples

    def __len__(self) -> int:
        return len(self.samples)


EMPTY_RANGE = SelectedRange()

SelectionListener = Callable[[SelectedRange], None]


class SelectionModel:
    """Manages selector handle positions and the drag state machine.

    Handle positions are expressed in viewport pixels. The left handle
    occupies [left_x, left_x + selector_width] and the right handle
    occupies [right_x, right_x + selector_width]. The model keeps:

        0 <= left_x <= right_x - selector_width - min_selection_width
        right_x <= width - selector_width

    Positions reset to the full width whenever the series or the
    viewport changes.
    """

    def __init__(
        self, geometry: Optional[SelectorGeometry] = None, debug: bool = False
    ):
        """Initialize the selection model.

        Args:
            geometry: Handle sizes, defaults to unscaled constants
            debug: Enable debug output
        """
        self._geometry = geometry or SelectorGeometry()
        self.debug = debug

        self._series: Optional[SampleSeries] = None
        self._width: float = 0.0
        self._height: float = 0.0

        self._left_x: float = 0.0
        self._right_x: float = 0.0
        self._dragging = DragTarget.NONE
        self._last_touch_x: Optional[float] = None

        self._selected_range = EMPTY_RANGE
        self._listeners: List[SelectionListener] = []

    # --- Properties ---

    @property
    def geometry(self) -> SelectorGeometry:
        """Get the selector geometry."""
        return self._geometry

    @property
    def series(self) -> Optional[SampleSeries]:
        """Get the loaded series, or None."""
        return self._series

    @property
    def has_series(self) -> bool:
        """Check if a series is loaded."""
        return self._series is not None

    @property
    def width(self) -> float:
        """Get viewport width in pixels."""
        return self._width

    @property
    def height(self) -> float:
        """Get viewport height in pixels."""
        return self._height

    @property
    def left_x(self) -> float:
        """Get left handle position."""
        return self._left_x

    @property
    def right_x(self) -> float:
        """Get right handle position."""
        return self._right_x

    @property
    def dragging(self) -> DragTarget:
        """Get the handle being dragged."""
        return self._dragging

    @property
    def last_touch_x(self) -> Optional[float]:
        """Get the last pointer position used for dragging."""
        return self._last_touch_x

    @property
    def selected_range(self) -> SelectedRange:
        """Get the range committed by the last finished gesture."""
        return self._selected_range

    # --- Listeners ---

    def add_listener(self, listener: SelectionListener) -> None:
        """Register a callback invoked with every committed selection."""
        self._listeners.append(listener)

    def remove_listener(self, listener: SelectionListener) -> None:
        """Unregister a selection callback."""
        if listener in self._listeners:
            self._listeners.remove(listener)

    # --- Series and viewport ---

    def load_series(self, samples: Iterable[Sample]) -> None:
        """Replace the series and reset the handles to full width.

        Args:
            samples: Series or iterable of (neg_lobe, pos_lobe) pairs

        Raises:
            TooFewSamplesError: If fewer than three samples are given
            InvalidRangeError: If any sample is outside [-1, 0] x [0, 1]
        """
        series = samples if isinstance(samples, SampleSeries) else SampleSeries(samples)

        self._series = series
        self._reset_selection()

        if self.debug:
            print(f"[SelectionModel] Loaded {len(series)} samples")

    def resize(self, width: float, height: float) -> None:
        """Update the viewport size.

        A changed size resets the handles to full width and abandons
        any drag in progress.

        Args:
            width: Viewport width in pixels
            height: Viewport height in pixels
        """
        width = max(0.0, float(width))
        height = max(0.0, float(height))

        if width == self._width and height == self._height:
            return

        self._width = width
        self._height = height
        self._reset_selection()

    def _reset_selection(self) -> None:
        """Put the handles at the viewport edges and clear any selection."""
        self._left_x = 0.0
        self._right_x = self._default_right_x()
        self._dragging = DragTarget.NONE
        self._last_touch_x = None
        self._selected_range = EMPTY_RANGE

    def _default_right_x(self) -> float:
        return max(0.0, self._width - self._geometry.selector_width)

    # --- Pointer events ---

    def pointer_down(self, x: float) -> DragTarget:
        """Start a gesture at a pointer position.

        The committed selection is cleared as soon as a gesture starts,
        whether or not a handle is hit. When the touch zones of both
        handles overlap the left handle wins.

        Args:
            x: Pointer position in pixels

        Returns:
            The handle that started dragging, or DragTarget.NONE
        """
        x = self._clamp_to_viewport(x)
        self._selected_range = EMPTY_RANGE

        g = self._geometry
        left_zone = (
            self._left_x - g.touch_area,
            self._left_x + g.selector_width + g.touch_area,
        )
        right_zone = (
            self._right_x - g.touch_area,
            self._right_x + g.selector_width + g.touch_area,
        )

        if left_zone[0] <= x <= left_zone[1]:
            self._dragging = DragTarget.LEFT
            self._last_touch_x = x
        elif right_zone[0] <= x <= right_zone[1]:
            self._dragging = DragTarget.RIGHT
            self._last_touch_x = x
        else:
            self._dragging = DragTarget.NONE

        return self._dragging

    def pointer_move(self, x: float) -> None:
        """Move the dragged handle by the pointer delta.

        Once a handle hits a bound, the reference position is pinned to
        that bound so the pointer has to travel back before the handle
        moves again.

        Args:
            x: Pointer position in pixels
        """
        if self._dragging is DragTarget.NONE or self._last_touch_x is None:
            return

        x = self._clamp_to_viewport(x)
        delta = x - self._last_touch_x

        if self._dragging is DragTarget.LEFT:
            low, high = self.left_bounds()
            self._left_x = clamp(self._left_x + delta, low, high)
        else:
            low, high = self.right_bounds()
            self._right_x = clamp(self._right_x + delta, low, high)

        self._last_touch_x = clamp(x, low, high)

    def pointer_up(self) -> SelectedRange:
        """Finish the gesture and commit the selection.

        Returns:
            The committed range, possibly empty
        """
        self._dragging = DragTarget.NONE
        self._last_touch_x = None

        self._selected_range = self._project_selection()

        for listener in list(self._listeners):
            listener(self._selected_range)

        return self._selected_range

    def left_bounds(self) -> Tuple[float, float]:
        """Get the allowed range for the left handle.

        In a viewport too narrow for the minimum gap the left handle
        is pinned at 0.
        """
        g = self._geometry
        high = self._right_x - g.min_selection_width - g.selector_width
        return 0.0, max(0.0, high)

    def right_bounds(self) -> Tuple[float, float]:
        """Get the allowed range for the right handle."""
        g = self._geometry
        high = self._default_right_x()
        low = min(self._left_x + g.selector_width + g.min_selection_width, high)
        return low, high

    def _clamp_to_viewport(self, x: float) -> float:
        return clamp(float(x), 0.0, self._width)

    # --- Projection ---

    def selection_indices(self) -> Optional[Tuple[int, int]]:
        """Project the handle positions to sample indices.

        The left bound is rounded up and the right bound down, so the
        range never extends past the handles.

        Returns:
            Inclusive (start, end) indices, or None if nothing is selected
        """
        if self._width == 0 or self._series is None:
            return None

        right_edge = self._right_x + self._geometry.selector_width
        if self._left_x == 0 and right_edge >= self._width:
            return None

        count = len(self._series)
        step = self._width / (count - 1)
        left_index = max(0, math.ceil(self._left_x / step))
        right_index = min(math.floor(right_edge / step), count - 1)

        if self.debug:
            print(
                f"[SelectionModel] new points: {left_index}, {right_index} "
                f"from: {count}"
            )

        if left_index >= right_index:
            return None
        return left_index, right_index

    def _project_selection(self) -> SelectedRange:
        indices = self.selection_indices()
        if indices is None:
            return EMPTY_RANGE

        start, end = indices
        return SelectedRange(
            samples=self._series[start : end + 1],
            start_index=start,
            end_index=end,
        )
