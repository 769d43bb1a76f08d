"""Tests for waveform rendering."""

import unittest

import numpy as np

from waveform_editor.constants import UIConstants
from waveform_editor.core.renderer import (
    BandStyle,
    SelectorState,
    WaveformRenderer,
    build_contours,
    handle_color,
    render,
)
from waveform_editor.core.sample_series import SampleSeries
from waveform_editor.core.selection_model import (
    DragTarget,
    SelectionModel,
    SelectorGeometry,
)

GEOMETRY = SelectorGeometry(
    selector_width=2.0, grip_width=8.0, touch_area=16.0, min_selection_width=50.0
)


class TestBuildContours(unittest.TestCase):
    """Test cases for build_contours()."""

    def setUp(self):
        self.series = SampleSeries([(-1.0, 1.0), (-0.5, 0.5), (0.0, 0.0)])

    def test_vertices(self):
        upper, lower = build_contours(self.series, 100.0, 40.0)

        # mid = 20, step = 50
        np.testing.assert_allclose(
            upper, [[0, 20], [0, 0], [50, 10], [100, 20], [100, 20]]
        )
        np.testing.assert_allclose(
            lower, [[0, 20], [0, 40], [50, 30], [100, 20], [100, 20]]
        )

    def test_contours_start_and_end_on_midline(self):
        series = SampleSeries([(-0.3, 0.7)] * 10)
        for contour in build_contours(series, 300.0, 80.0):
            self.assertEqual(contour.shape, (12, 2))
            self.assertEqual(tuple(contour[0]), (0.0, 40.0))
            self.assertEqual(tuple(contour[-1]), (300.0, 40.0))

    def test_zero_width_has_no_contours(self):
        self.assertEqual(build_contours(self.series, 0.0, 40.0), ())


class TestRender(unittest.TestCase):
    """Test cases for render()."""

    def setUp(self):
        self.series = SampleSeries([(-0.5, 0.5)] * 5)

    def test_no_series_renders_nothing(self):
        commands = render(None, (100, 50), SelectorState(0, 98), GEOMETRY)
        self.assertTrue(commands.is_empty)

    def test_full_selection_has_only_middle_band(self):
        commands = render(self.series, (100, 50), SelectorState(0, 98), GEOMETRY)

        self.assertEqual(len(commands.bands), 1)
        band = commands.bands[0]
        self.assertEqual((band.x0, band.x1), (2.0, 98))
        self.assertIs(band.style, BandStyle.SELECTED)
        self.assertEqual(band.color, UIConstants.COLOR_SELECTED_WAVE)

    def test_three_bands(self):
        commands = render(self.series, (200, 50), SelectorState(30, 120), GEOMETRY)

        spans = [(b.x0, b.x1, b.style) for b in commands.bands]
        self.assertEqual(
            spans,
            [
                (0.0, 30, BandStyle.UNSELECTED),
                (32, 120, BandStyle.SELECTED),
                (122, 200, BandStyle.UNSELECTED),
            ],
        )

    def test_zero_width_bands_skipped(self):
        commands = render(self.series, (100, 50), SelectorState(10, 12), GEOMETRY)

        styles = [b.style for b in commands.bands]
        self.assertEqual(styles, [BandStyle.UNSELECTED, BandStyle.UNSELECTED])

    def test_handle_geometry(self):
        commands = render(self.series, (200, 50), SelectorState(30, 120), GEOMETRY)
        left, right = commands.handles

        self.assertIs(left.target, DragTarget.LEFT)
        self.assertEqual(left.line_x, 31.0)
        self.assertEqual(left.grip, (32, 0.0, 40, 8.0))

        self.assertIs(right.target, DragTarget.RIGHT)
        self.assertEqual(right.line_x, 121.0)
        self.assertEqual(right.grip, (112, 42, 120, 50))

    def test_handle_style_tracks_dragging(self):
        idle = render(self.series, (200, 50), SelectorState(30, 120), GEOMETRY)
        dragging = render(
            self.series,
            (200, 50),
            SelectorState(30, 120, DragTarget.RIGHT),
            GEOMETRY,
        )

        self.assertLess(idle.handles[0].color[3], 1.0)
        self.assertLess(idle.handles[1].color[3], 1.0)
        self.assertLess(dragging.handles[0].color[3], 1.0)
        self.assertEqual(dragging.handles[1].color[3], 1.0)

    def test_handle_color(self):
        self.assertEqual(
            handle_color(DragTarget.LEFT, DragTarget.LEFT), (1.0, 1.0, 1.0, 1.0)
        )
        self.assertAlmostEqual(
            handle_color(DragTarget.LEFT, DragTarget.NONE)[3], 170 / 255
        )


class TestWaveformRenderer(unittest.TestCase):
    """Test cases for the caching renderer."""

    def setUp(self):
        self.model = SelectionModel(GEOMETRY)
        self.model.load_series([(-0.5, 0.5)] * 5)
        self.model.resize(200, 50)
        self.renderer = WaveformRenderer()

    def test_empty_model(self):
        self.assertTrue(self.renderer.render(SelectionModel()).is_empty)

    def test_contours_reused_while_dragging(self):
        first = self.renderer.render(self.model)
        self.model.pointer_down(0)
        self.model.pointer_move(40)
        second = self.renderer.render(self.model)

        self.assertIs(first.contours, second.contours)
        self.assertEqual(second.bands[0].x1, 40.0)
        self.assertEqual(second.handles[0].color[3], 1.0)

    def test_contours_rebuilt_on_resize_and_reload(self):
        first = self.renderer.render(self.model)

        self.model.resize(300, 50)
        resized = self.renderer.render(self.model)
        self.assertIsNot(first.contours, resized.contours)
        self.assertEqual(resized.contours[0][-1][0], 300.0)

        self.model.load_series([(-0.2, 0.2)] * 4)
        reloaded = self.renderer.render(self.model)
        self.assertIsNot(resized.contours, reloaded.contours)
        self.assertEqual(len(reloaded.contours[0]), 6)

    def test_invalidate(self):
        first = self.renderer.render(self.model)
        self.renderer.invalidate()
        second = self.renderer.render(self.model)

        self.assertIsNot(first.contours, second.contours)


if __name__ == "__main__":
    unittest.main()
