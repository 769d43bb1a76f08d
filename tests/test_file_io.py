"""Tests for sample file reading and writing."""

import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from waveform_editor.io import file_io
from waveform_editor.io.results import (
    FileIsTooBig,
    InvalidFile,
    NotEnoughPoints,
    SaveError,
    SaveSuccess,
    Success,
    UnknownError,
)


class TestParseLines(unittest.TestCase):
    """Test cases for parse_lines()."""

    def test_valid_file(self):
        result = file_io.parse_lines(["-0.5 0.5"] * 4)

        self.assertIsInstance(result, Success)
        self.assertEqual(result.samples, ((-0.5, 0.5),) * 4)

    def test_one_bad_line_rejects_file(self):
        result = file_io.parse_lines(["-0.5 0.5"] * 4 + ["2 0.5"])

        self.assertIsInstance(result, InvalidFile)
        self.assertEqual(result.line_number, 5)

    def test_malformed_lines(self):
        bad_lines = [
            "-0.5",
            "-0.5 0.5 0.5",
            "-0.5  0.5",
            "-0.5\t0.5",
            "a 0.5",
            "",
            "nan 0.5",
            "-0.5 1.01",
            "0.1 0.5",
        ]
        for bad in bad_lines:
            with self.subTest(line=bad):
                result = file_io.parse_lines(["-0.1 0.1", bad, "-0.2 0.2", "-0.3 0.3"])
                self.assertIsInstance(result, InvalidFile)
                self.assertEqual(result.line_number, 2)

    def test_line_terminators_ignored(self):
        result = file_io.parse_lines(["-1 0\r\n", "0 1\n", "-0.25 0.75"])

        self.assertIsInstance(result, Success)
        self.assertEqual(result.samples, ((-1.0, 0.0), (0.0, 1.0), (-0.25, 0.75)))

    def test_not_enough_points(self):
        result = file_io.parse_lines(["-0.5 0.5", "-0.5 0.5"])

        self.assertIsInstance(result, NotEnoughPoints)
        self.assertEqual(result.min_points, 3)

    def test_empty_input(self):
        self.assertIsInstance(file_io.parse_lines([]), NotEnoughPoints)

    def test_too_big_keeps_first_500(self):
        lines = [f"-{i / 1000} {i / 1000}" for i in range(501)]

        result = file_io.parse_lines(lines)

        self.assertIsInstance(result, FileIsTooBig)
        self.assertEqual(len(result.samples), 500)
        self.assertEqual(result.samples[-1], (-0.499, 0.499))

    def test_exactly_500_is_success(self):
        result = file_io.parse_lines(["-0.5 0.5"] * 500)
        self.assertIsInstance(result, Success)

    def test_stops_reading_after_limit(self):
        """Lines after the cut-off are not inspected."""
        lines = ["-0.5 0.5"] * 501 + ["garbage"]
        self.assertIsInstance(file_io.parse_lines(lines), FileIsTooBig)


class TestReadSamples(unittest.TestCase):
    """Test cases for read_samples()."""

    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()
        self.dir = Path(self.temp_dir.name)

    def tearDown(self):
        self.temp_dir.cleanup()

    def test_reads_file_with_trailing_newline(self):
        path = self.dir / "wave.txt"
        path.write_bytes(b"-0.5 0.5\n-0.25 0.25\n-1 1\n")

        result = file_io.read_samples(path)

        self.assertIsInstance(result, Success)
        self.assertEqual(len(result.samples), 3)

    def test_missing_file(self):
        result = file_io.read_samples(self.dir / "missing.txt")
        self.assertIsInstance(result, UnknownError)

    def test_non_ascii_file(self):
        path = self.dir / "wave.txt"
        path.write_bytes("-0.5 0.5\n-0.5 0.5\n-0,5 0,5 é\n".encode("utf-8"))

        self.assertIsInstance(file_io.read_samples(path), UnknownError)


class TestWriteSamples(unittest.TestCase):
    """Test cases for export."""

    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()
        self.dir = Path(self.temp_dir.name)
        self.samples = [(-0.5, 0.5), (-0.25, 0.75), (-1.0, 0.0)]

    def tearDown(self):
        self.temp_dir.cleanup()

    def test_format_has_no_trailing_newline(self):
        text = file_io.format_samples(self.samples)
        self.assertEqual(text, "-0.5 0.5\n-0.25 0.75\n-1.0 0.0")

    def test_write_and_read_back(self):
        path = self.dir / "out.txt"

        result = file_io.write_samples(path, self.samples)

        self.assertEqual(result, SaveSuccess(path))
        self.assertEqual(path.read_bytes(), b"-0.5 0.5\n-0.25 0.75\n-1.0 0.0")
        self.assertEqual(file_io.read_samples(path), Success(tuple(self.samples)))

    def test_write_to_missing_directory_fails(self):
        result = file_io.write_samples(self.dir / "nope" / "out.txt", self.samples)
        self.assertIsInstance(result, SaveError)

    def test_generate_filename(self):
        self.assertEqual(
            file_io.generate_filename(1700000000123), "audiowave-1700000000123.txt"
        )

    def test_export_path_skips_existing_files(self):
        taken = self.dir / "audiowave-1000.txt"
        taken.write_text("x")

        with patch.object(file_io.time, "time", return_value=1.0):
            path = file_io.create_export_path(self.dir)

        self.assertEqual(path, self.dir / "audiowave-1001.txt")

    def test_save_selection_creates_directory(self):
        export_dir = self.dir / "exports"

        result = file_io.save_selection(export_dir, self.samples)

        self.assertIsInstance(result, SaveSuccess)
        self.assertEqual(result.path.parent, export_dir)
        self.assertTrue(result.path.name.startswith("audiowave-"))
        self.assertEqual(file_io.read_samples(result.path).samples, tuple(self.samples))

    def test_save_selection_reports_unwritable_directory(self):
        blocker = self.dir / "file"
        blocker.write_text("x")

        result = file_io.save_selection(blocker / "sub", self.samples)

        self.assertIsInstance(result, SaveError)


if __name__ == "__main__":
    unittest.main()
