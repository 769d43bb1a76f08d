"""Matplotlib drawing of waveform draw commands.

This module turns the geometry produced by the renderer into artists on
a matplotlib axes. The axes is set up so that one data unit equals one
pixel, with y growing downward.
"""

from typing import List, Optional

from matplotlib.artist import Artist
from matplotlib.axes import Axes
from matplotlib.patches import Polygon, Rectangle
from matplotlib.text import Text

from ..constants import UIConstants
from ..core.renderer import DrawCommands

POINTS_PER_INCH = 72.0


class WaveformCanvas:
    """Draws waveform frames on a matplotlib axes.

    Every call to draw() replaces the artists of the previous frame:
    - Background fill over the viewport
    - The lobe contours, filled once per band and clipped to it
    - The selector handle lines and grips
    """

    def __init__(self, ax: Axes):
        """Initialize the waveform canvas.

        Args:
            ax: Matplotlib axes for drawing visual elements
        """
        self.ax = ax
        self._artists: List[Artist] = []
        self._no_data_text: Optional[Text] = None

        self._setup_axes()

    def _setup_axes(self) -> None:
        """Hide decorations and make the axes fill the figure."""
        self.ax.set_position((0.0, 0.0, 1.0, 1.0))
        self.ax.set_axis_off()
        self.ax.set_facecolor(UIConstants.COLOR_BACKGROUND)

    @property
    def artists(self) -> List[Artist]:
        """Get the artists of the current frame."""
        return list(self._artists)

    def _pixels_to_points(self, pixels: float) -> float:
        """Convert a stroke width in pixels to points."""
        dpi = self.ax.figure.dpi if self.ax.figure is not None else UIConstants.FIGURE_DPI
        return pixels * POINTS_PER_INCH / dpi

    def clear(self) -> None:
        """Remove all artists of the current frame."""
        for artist in self._artists:
            artist.remove()
        self._artists = []

    def draw(self, commands: DrawCommands) -> None:
        """Replace the current frame with new draw commands.

        Args:
            commands: Output of the renderer
        """
        self.clear()

        if commands.is_empty or commands.width <= 0 or commands.height <= 0:
            self._show_no_data_message()
            return

        self._hide_no_data_message()

        width, height = commands.width, commands.height
        self.ax.set_xlim(0, width)
        self.ax.set_ylim(height, 0)

        background = Rectangle(
            (0, 0),
            width,
            height,
            facecolor=commands.background,
            edgecolor="none",
            zorder=0,
        )
        self._add_patch(background)

        for band in commands.bands:
            clip = Rectangle(
                (band.x0, 0),
                band.width,
                height,
                transform=self.ax.transData,
            )
            for contour in commands.contours:
                polygon = Polygon(
                    contour,
                    closed=True,
                    facecolor=band.color,
                    edgecolor="none",
                    zorder=1,
                )
                self._add_patch(polygon)
                polygon.set_clip_path(clip)

        for handle in commands.handles:
            (line,) = self.ax.plot(
                [handle.line_x, handle.line_x],
                [0, height],
                color=handle.color,
                linewidth=self._pixels_to_points(handle.line_width),
                solid_capstyle="butt",
                zorder=2,
            )
            self._artists.append(line)

            x0, y0, x1, y1 = handle.grip
            grip = Rectangle(
                (x0, y0),
                x1 - x0,
                y1 - y0,
                facecolor=handle.color,
                edgecolor="none",
                zorder=2,
            )
            self._add_patch(grip)

    def _add_patch(self, patch) -> None:
        self.ax.add_patch(patch)
        self._artists.append(patch)

    def _show_no_data_message(self) -> None:
        """Show 'NO DATA' message in the center of the axes."""
        if self._no_data_text is not None:
            self._no_data_text.set_visible(True)
        else:
            self._no_data_text = self.ax.text(
                0.5,
                0.5,
                "NO DATA",
                transform=self.ax.transAxes,
                ha="center",
                va="center",
                fontsize=20,
                fontweight="bold",
                color=UIConstants.COLOR_TEXT_NORMAL,
                alpha=0.5,
            )

    def _hide_no_data_message(self) -> None:
        """Hide 'NO DATA' message."""
        if self._no_data_text is not None:
            self._no_data_text.set_visible(False)

    @property
    def showing_no_data(self) -> bool:
        """Check if the 'NO DATA' message is visible."""
        return self._no_data_text is not None and self._no_data_text.get_visible()
