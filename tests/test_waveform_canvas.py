"""Tests for drawing waveform frames with matplotlib."""

import unittest

from matplotlib.figure import Figure
from matplotlib.lines import Line2D
from matplotlib.patches import Polygon, Rectangle

from waveform_editor.core.renderer import EMPTY_COMMANDS, SelectorState, render
from waveform_editor.core.sample_series import SampleSeries
from waveform_editor.core.selection_model import DragTarget, SelectorGeometry
from waveform_editor.ui.waveform_canvas import WaveformCanvas

GEOMETRY = SelectorGeometry(
    selector_width=2.0, grip_width=8.0, touch_area=16.0, min_selection_width=50.0
)


class TestWaveformCanvas(unittest.TestCase):
    """Test cases for WaveformCanvas."""

    def setUp(self):
        self.fig = Figure(dpi=100)
        self.ax = self.fig.add_subplot(111)
        self.canvas = WaveformCanvas(self.ax)
        self.series = SampleSeries([(-0.5, 0.5), (-1.0, 1.0), (-0.2, 0.3)])

    def _commands(self, left=30.0, right=120.0, dragging=DragTarget.NONE):
        return render(
            self.series, (200, 50), SelectorState(left, right, dragging), GEOMETRY
        )

    def test_empty_commands_show_no_data(self):
        self.canvas.draw(EMPTY_COMMANDS)

        self.assertTrue(self.canvas.showing_no_data)
        self.assertEqual(self.canvas.artists, [])

    def test_draws_bands_and_handles(self):
        self.canvas.draw(self._commands())

        polygons = [a for a in self.canvas.artists if isinstance(a, Polygon)]
        lines = [a for a in self.canvas.artists if isinstance(a, Line2D)]
        rectangles = [
            a
            for a in self.canvas.artists
            if isinstance(a, Rectangle) and not isinstance(a, Polygon)
        ]

        # Three bands, two lobes each
        self.assertEqual(len(polygons), 6)
        self.assertEqual(len(lines), 2)
        # Background plus two grips
        self.assertEqual(len(rectangles), 3)
        self.assertFalse(self.canvas.showing_no_data)

    def test_axes_use_pixel_coordinates(self):
        self.canvas.draw(self._commands())

        self.assertEqual(self.ax.get_xlim(), (0.0, 200.0))
        self.assertEqual(self.ax.get_ylim(), (50.0, 0.0))

    def test_lobes_are_clipped_to_bands(self):
        commands = self._commands()
        self.canvas.draw(commands)

        polygons = [a for a in self.canvas.artists if isinstance(a, Polygon)]
        self.assertEqual(len(polygons), 2 * len(commands.bands))

        # Rectangle clip paths are stored as a clip box in data coordinates
        for index, polygon in enumerate(polygons):
            band = commands.bands[index // 2]
            box = polygon.get_clip_box()
            self.assertIsNotNone(box)
            x0, y0, x1, y1 = self.ax.transData.inverted().transform_bbox(box).extents
            self.assertAlmostEqual(x0, band.x0)
            self.assertAlmostEqual(x1, band.x1)
            self.assertAlmostEqual(min(y0, y1), 0.0)
            self.assertAlmostEqual(max(y0, y1), 50.0)

    def test_redraw_replaces_previous_frame(self):
        self.canvas.draw(self._commands())
        count = len(self.ax.patches) + len(self.ax.lines)

        self.canvas.draw(self._commands(left=0.0, right=198.0))

        # Only the middle band remains: 2 polygons, background, 2 grips, 2 lines
        self.assertEqual(len(self.ax.patches), 5)
        self.assertEqual(len(self.ax.lines), 2)
        self.assertLess(len(self.ax.patches) + len(self.ax.lines), count)

    def test_active_handle_is_opaque(self):
        self.canvas.draw(self._commands(dragging=DragTarget.LEFT))

        left_line, right_line = [
            a for a in self.canvas.artists if isinstance(a, Line2D)
        ]
        self.assertEqual(left_line.get_color()[3], 1.0)
        self.assertLess(right_line.get_color()[3], 1.0)

    def test_clear_after_data_shows_no_data_again(self):
        self.canvas.draw(self._commands())
        self.canvas.draw(EMPTY_COMMANDS)

        self.assertTrue(self.canvas.showing_no_data)
        self.assertEqual(len(self.ax.patches), 0)

    def test_figure_renders(self):
        """The figure can be rasterized with the drawn artists."""
        from matplotlib.backends.backend_agg import FigureCanvasAgg

        self.canvas.draw(self._commands())
        FigureCanvasAgg(self.fig).draw()


if __name__ == "__main__":
    unittest.main()
