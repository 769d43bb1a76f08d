"""Reading and writing sample files.

A sample file is plain ASCII text with one sample per line, written as
two decimal numbers separated by a single space:

    -0.5 0.5
    -0.25 0.75

The first number is the lower lobe in [-1, 0], the second the upper lobe
in [0, 1].
"""

import math
import time
from pathlib import Path
from typing import Iterable, List, Optional, Sequence

from ..constants import FileConstants, SeriesConstants
from ..core.sample_series import Sample, is_valid_sample
from .results import (
    FileIsTooBig,
    InvalidFile,
    LoadResult,
    NotEnoughPoints,
    SaveError,
    SaveResult,
    SaveSuccess,
    Success,
    UnknownError,
)


def parse_line(line: str) -> Optional[Sample]:
    """Parse one line into a sample.

    Args:
        line: Line text without the line terminator

    Returns:
        The sample, or None if the line is malformed or out of range
    """
    fields = line.split(FileConstants.FIELD_SEPARATOR)
    if len(fields) != 2:
        return None

    try:
        sample = (float(fields[0]), float(fields[1]))
    except ValueError:
        return None

    if not is_valid_sample(sample):
        return None
    return sample


def parse_lines(lines: Iterable[str]) -> LoadResult:
    """Parse sample lines, stopping once the maximum count is exceeded.

    Args:
        lines: Lines of a sample file; trailing line terminators are ignored

    Returns:
        Success, FileIsTooBig with the first MAX_POINTS samples,
        NotEnoughPoints or InvalidFile
    """
    samples: List[Sample] = []

    for line_number, line in enumerate(lines, start=1):
        line = line.rstrip("\r\n")
        sample = parse_line(line)
        if sample is None:
            return InvalidFile(line_number=line_number, reason=f"bad line {line!r}")

        samples.append(sample)
        if len(samples) > SeriesConstants.MAX_POINTS:
            return FileIsTooBig(tuple(samples[: SeriesConstants.MAX_POINTS]))

    if len(samples) < SeriesConstants.MIN_POINTS:
        return NotEnoughPoints(SeriesConstants.MIN_POINTS)

    return Success(tuple(samples))


def read_samples(path: Path) -> LoadResult:
    """Load samples from a file.

    Args:
        path: Path to the sample file

    Returns:
        Load result; I/O and decoding failures yield UnknownError
    """
    try:
        with open(path, "r", encoding=FileConstants.ENCODING, newline="") as f:
            return parse_lines(f)
    except (OSError, UnicodeDecodeError) as e:
        return UnknownError(str(e))


def format_sample(sample: Sample) -> str:
    """Format a sample as a file line."""
    neg, pos = sample
    return f"{neg!r}{FileConstants.FIELD_SEPARATOR}{pos!r}"


def format_samples(samples: Sequence[Sample]) -> str:
    """Format samples as file text without a trailing newline."""
    return FileConstants.LINE_SEPARATOR.join(format_sample(s) for s in samples)


def write_samples(path: Path, samples: Sequence[Sample]) -> SaveResult:
    """Write samples to a file.

    Args:
        path: Destination path
        samples: Samples to write

    Returns:
        SaveSuccess with the path, or SaveError
    """
    try:
        with open(path, "w", encoding=FileConstants.ENCODING, newline="") as f:
            f.write(format_samples(samples))
    except (OSError, UnicodeEncodeError) as e:
        return SaveError(str(e))
    return SaveSuccess(Path(path))


def generate_filename(now_ms: Optional[int] = None) -> str:
    """Generate an export filename from the current time.

    Args:
        now_ms: Epoch time in milliseconds, defaults to now

    Returns:
        Filename like "audiowave-1700000000000.txt"
    """
    if now_ms is None:
        now_ms = math.floor(time.time() * 1000)
    return f"{FileConstants.EXPORT_PREFIX}{now_ms}{FileConstants.EXPORT_EXTENSION}"


def create_export_path(directory: Path) -> Path:
    """Pick a path in a directory that does not exist yet.

    Args:
        directory: Export directory (created if not exists)

    Returns:
        Path for a new export file
    """
    directory = Path(directory)
    directory.mkdir(exist_ok=True, parents=True)

    path = directory / generate_filename()
    offset = 0
    while path.exists():
        offset += 1
        path = directory / generate_filename(math.floor(time.time() * 1000) + offset)
    return path


def save_selection(directory: Path, samples: Sequence[Sample]) -> SaveResult:
    """Write samples to a new file in the export directory.

    Args:
        directory: Export directory
        samples: Samples to write

    Returns:
        SaveSuccess with the new path, or SaveError
    """
    try:
        path = create_export_path(directory)
    except OSError as e:
        return SaveError(str(e))
    return write_samples(path, samples)
